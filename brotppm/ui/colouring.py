import numpy as np


def channel_dtype(bit_depth):
    return np.uint8 if bit_depth <= 8 else np.uint16


def in_set_rgb(in_set_colour, max_channel):
    value = max_channel if in_set_colour == "white" else 0
    return value, value, value


def generate_palette(max_iterations, bit_depth=16, in_set_colour="white"):
    """
    Lookup table mapping an escape iteration to its colour.

    Row `n` holds the colour for a pixel that escaped at iteration `n`; the last
    row is used for pixels that never escaped. Escaped pixels get a blue tinted
    grey whose brightness grows with log2 of the iteration count.
    """
    max_channel = 2 ** bit_depth - 1
    palette = np.empty((max_iterations + 1, 3), dtype=channel_dtype(bit_depth))
    palette[:] = in_set_rgb(in_set_colour, max_channel)

    # a budget of 2 can only ever escape at iteration 1
    scale = np.log2(max_iterations - 1) or 1.0
    iterations = np.arange(1, max_iterations)
    brightness = np.floor(max_channel * np.log2(iterations) / scale)
    brightness = np.clip(brightness, 0, max_channel)

    palette[1:max_iterations, 0] = brightness
    palette[1:max_iterations, 1] = brightness
    palette[1:max_iterations, 2] = max_channel
    return palette


def rgb_gen(iterations, max_iterations, bit_depth=16, in_set_colour="white"):
    palette = generate_palette(max_iterations, bit_depth, in_set_colour)
    return tuple(int(channel) for channel in palette[iterations])
