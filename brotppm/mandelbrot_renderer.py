import argparse
import sys
import time

from brotppm.mandelbrot.controller import MandelbrotController
from brotppm.output.pixmap import expected_ppm_size, save_png, write_ppm
from brotppm.utils.constants import (
    ARG_ERROR,
    DEFAULT_MAX_ITERATIONS,
    EXEC_SUCCESS,
    FILE_ERROR,
    IN_SET_COLOURS,
    MEM_ERROR,
    SIZE_ERROR,
    SUPPORTED_BIT_DEPTHS,
)
from brotppm.utils.errors import (
    AllocationFailure,
    ArgumentError,
    DestinationError,
    SizeError,
)
from brotppm.utils.mandelbrot_utils import (
    ImageDescriptor,
    RenderConfig,
    make_image_descriptor,
    my_logger,
)


def make_parser():
    parser = argparse.ArgumentParser(
        description="Generate a P6 pixmap of the Mandelbrot set with shading"
    )
    parser.add_argument("-f", "--file", required=True, help="The output file name.")
    parser.add_argument(
        "--height", type=int, required=True, help="The image height in pixels."
    )
    parser.add_argument("-t", "--ymax", type=float, help="Max imaginary component.")
    parser.add_argument("-b", "--ymin", type=float, help="Min imaginary component.")
    parser.add_argument("-v", "--xmax", type=float, help="Max real component.")
    parser.add_argument("-n", "--xmin", type=float, help="Min real component.")
    parser.add_argument(
        "-i",
        "--iterations",
        type=int,
        help="The number of iterations done for each pixel.",
        default=DEFAULT_MAX_ITERATIONS,
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        help="Number of worker threads (defaults to the CPU count).",
    )
    parser.add_argument(
        "-d",
        "--bit-depth",
        type=int,
        choices=SUPPORTED_BIT_DEPTHS,
        default=16,
        help="Bits per colour channel.",
    )
    parser.add_argument(
        "--in-set-colour",
        choices=IN_SET_COLOURS,
        default="white",
        help="Colour of points that never escape.",
    )
    parser.add_argument(
        "--no-cardioid",
        dest="cardioid_check",
        action="store_false",
        help="Iterate points in the main cardioid instead of skipping them.",
    )
    parser.add_argument("--png", help="Also save an 8 bit PNG preview to this file.")
    parser.add_argument(
        "-log", "--log-level", choices=["debug", "info", "warning"], default="info"
    )
    return parser


def make_config(args) -> RenderConfig:
    kwargs = dict(
        max_iterations=args.iterations,
        bit_depth=args.bit_depth,
        in_set_colour=args.in_set_colour,
        cardioid_check=args.cardioid_check,
    )
    if args.workers is not None:
        kwargs["workers"] = args.workers
    return RenderConfig(**kwargs)


def render_to_file(descriptor: ImageDescriptor, config: RenderConfig, png_file=None):
    my_logger.info("Generating image...")
    start = time.time()
    pixels = MandelbrotController(config).render(descriptor)

    written = write_ppm(descriptor.file_name, pixels)
    expected = expected_ppm_size(descriptor.width, descriptor.height, config.max_channel)
    if written != expected:
        raise DestinationError(
            f"wrote {written} of {expected} bytes to {descriptor.file_name}"
        )

    if png_file:
        save_png(png_file, pixels)

    my_logger.debug(f"image took {time.time() - start} seconds")
    return pixels


def run(argv=None):
    parser = make_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return EXEC_SUCCESS if e.code == 0 else ARG_ERROR

    my_logger.setLevel(args.log_level.upper())

    try:
        config = make_config(args)
        descriptor = make_image_descriptor(
            args.file,
            args.height,
            xmin=args.xmin,
            xmax=args.xmax,
            ymin=args.ymin,
            ymax=args.ymax,
        )
        render_to_file(descriptor, config, args.png)
    except SizeError as e:
        my_logger.error(e)
        return SIZE_ERROR
    except ArgumentError as e:
        my_logger.error(e)
        parser.print_usage(sys.stderr)
        return ARG_ERROR
    except AllocationFailure as e:
        my_logger.error(f"Memory allocation error! {e}")
        return MEM_ERROR
    except DestinationError as e:
        my_logger.error(e)
        return FILE_ERROR

    return EXEC_SUCCESS


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
