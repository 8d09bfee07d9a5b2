import numpy as np
from PIL import Image

from brotppm.utils.errors import DestinationError
from brotppm.utils.mandelbrot_utils import my_logger


def max_channel_for(pixels):
    return int(np.iinfo(pixels.dtype).max)


def ppm_header(width, height, max_channel):
    return f"P6 {width} {height} {max_channel}\n".encode("ascii")


def expected_ppm_size(width, height, max_channel):
    channel_bytes = 1 if max_channel < 256 else 2
    return len(ppm_header(width, height, max_channel)) + width * height * 3 * channel_bytes


def encode_pixels(pixels):
    # multi-byte samples are big endian in the netpbm formats
    if pixels.dtype.itemsize > 1:
        pixels = pixels.astype(">u2", copy=False)
    return np.ascontiguousarray(pixels).tobytes()


def write_ppm(file_name, pixels):
    """
    Write a (height, width, 3) pixel buffer as a binary P6 pixmap.

    Returns the number of bytes written. A failure part way through leaves a
    truncated file behind; compare the result with `expected_ppm_size` to
    detect it.
    """
    height, width, _ = pixels.shape
    header = ppm_header(width, height, max_channel_for(pixels))
    try:
        with open(file_name, "wb") as f:
            written = f.write(header)
            written += f.write(encode_pixels(pixels))
    except OSError as e:
        raise DestinationError(f"File access error! ({file_name}: {e.strerror})") from e

    my_logger.debug(f"wrote {written} bytes to {file_name}")
    return written


def save_png(file_name, pixels):
    if pixels.dtype != np.uint8:
        pixels = (pixels >> 8).astype(np.uint8)
    img = Image.fromarray(pixels)
    try:
        img.save(file_name, "PNG", optimize=True)
    except OSError as e:
        raise DestinationError(f"File access error! ({file_name}: {e})") from e
