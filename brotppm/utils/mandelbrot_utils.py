import logging
import math
import os
from dataclasses import dataclass, field

from brotppm.mandelbrot.mandelbrot import sample_point
from brotppm.utils.constants import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_X_BOUNDS,
    DEFAULT_Y_BOUNDS,
    IN_SET_COLOURS,
    MIN_IMAGE_HEIGHT,
    SUPPORTED_BIT_DEPTHS,
)
from brotppm.utils.errors import ArgumentError, SizeError

logging.basicConfig(format="%(levelname)s: %(message)s")
my_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageDescriptor:
    width: int
    height: int
    xmin: float
    xmax: float
    ymin: float
    ymax: float
    file_name: str

    @property
    def x_step(self):
        return (self.xmax - self.xmin) / self.width

    @property
    def y_step(self):
        return (self.ymax - self.ymin) / self.height

    @property
    def shape(self):
        return self.height, self.width

    def point_for_pixel(self, x: int, y: int) -> complex:
        return sample_point(x, y, self.xmin, self.ymax, self.x_step, self.y_step)


@dataclass()
class RenderConfig:
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    workers: int = field(default_factory=lambda: os.cpu_count() or 1)
    bit_depth: int = 16
    in_set_colour: str = "white"
    cardioid_check: bool = True

    def __post_init__(self):
        if self.max_iterations < 2:
            raise ArgumentError("max iterations must be at least 2")
        if self.workers < 1:
            raise ArgumentError("at least one worker is required")
        if self.bit_depth not in SUPPORTED_BIT_DEPTHS:
            raise ArgumentError(f"bit depth must be one of {SUPPORTED_BIT_DEPTHS}")
        if self.in_set_colour not in IN_SET_COLOURS:
            raise ArgumentError(f"in-set colour must be one of {IN_SET_COLOURS}")

    @property
    def max_channel(self):
        return 2 ** self.bit_depth - 1


def _ordered_bounds(low, high, default, axis):
    if low is None or high is None or low == high:
        my_logger.info(f"Using default {axis} values...")
        return default
    if low > high:
        return high, low
    return low, high


def make_image_descriptor(
    file_name: str,
    height: int,
    xmin: float = None,
    xmax: float = None,
    ymin: float = None,
    ymax: float = None,
) -> ImageDescriptor:
    """
    Validate raw user input and derive the image geometry.

    Missing or degenerate bounds fall back to the default view, reversed bounds
    are swapped and the width is chosen so that pixels are square.
    """
    if not file_name:
        raise ArgumentError("an output file name is required")
    if height < MIN_IMAGE_HEIGHT:
        raise SizeError(f"Height can't be less than {MIN_IMAGE_HEIGHT}!")

    xmin, xmax = _ordered_bounds(xmin, xmax, DEFAULT_X_BOUNDS, "x")
    ymin, ymax = _ordered_bounds(ymin, ymax, DEFAULT_Y_BOUNDS, "y")

    if not all(math.isfinite(bound) for bound in (xmin, xmax, ymin, ymax)):
        raise ArgumentError("plane bounds must be finite numbers")

    span = height * (xmax - xmin) / (ymax - ymin)
    if not math.isfinite(span):
        raise ArgumentError("plane bounds are too far apart")

    width = max(1, round(span))
    return ImageDescriptor(
        width=width,
        height=height,
        xmin=float(xmin),
        xmax=float(xmax),
        ymin=float(ymin),
        ymax=float(ymax),
        file_name=file_name,
    )
