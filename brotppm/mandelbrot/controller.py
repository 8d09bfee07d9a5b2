import queue
import threading
import time

import numpy as np

from brotppm.ui.colouring import channel_dtype, generate_palette
from brotppm.utils.errors import AllocationFailure
from brotppm.utils.mandelbrot_utils import ImageDescriptor, RenderConfig, my_logger
from .mandelbrot import iterate_row


def allocate_pixels(descriptor: ImageDescriptor, bit_depth: int):
    try:
        return np.empty(
            (*descriptor.shape, 3), dtype=channel_dtype(bit_depth)
        )
    except (MemoryError, ValueError, OverflowError) as e:
        raise AllocationFailure(
            f"could not allocate a {descriptor.width}x{descriptor.height} pixel buffer"
        ) from e


class MandelbrotController:
    """
    Renders an image by handing rows out to a pool of worker threads.

    Rows are taken from a shared queue as workers become free and each row is
    written by exactly one worker. The buffer is only returned once every
    worker has been joined.
    """

    def __init__(self, config: RenderConfig = None):
        self.config = config if config is not None else RenderConfig()
        self.palette = None

    def _make_palette(self):
        self.palette = generate_palette(
            self.config.max_iterations,
            self.config.bit_depth,
            self.config.in_set_colour,
        )
        return self.palette

    def _render_row(self, descriptor: ImageDescriptor, pixels, iterations_row, y):
        iterate_row(
            iterations_row,
            y,
            descriptor.xmin,
            descriptor.ymax,
            descriptor.x_step,
            descriptor.y_step,
            self.config.max_iterations,
            self.config.cardioid_check,
        )
        pixels[y] = self.palette[iterations_row]

    def _worker(self, descriptor: ImageDescriptor, pixels, rows: queue.Queue, errors: list):
        iterations_row = np.empty(descriptor.width, dtype=np.int32)
        while not errors:
            try:
                y = rows.get_nowait()
            except queue.Empty:
                return
            try:
                self._render_row(descriptor, pixels, iterations_row, y)
            except Exception as e:
                errors.append(e)
                return

    def render(self, descriptor: ImageDescriptor):
        pixels = allocate_pixels(descriptor, self.config.bit_depth)
        self._make_palette()

        start = time.time()
        num_workers = min(self.config.workers, descriptor.height)
        if num_workers == 1:
            iterations_row = np.empty(descriptor.width, dtype=np.int32)
            for y in range(descriptor.height):
                self._render_row(descriptor, pixels, iterations_row, y)
        else:
            self._render_threaded(descriptor, pixels, num_workers)

        my_logger.debug(
            f"rendering {descriptor.width}x{descriptor.height} with {num_workers} "
            f"workers took {time.time() - start} seconds"
        )
        return pixels

    def _render_threaded(self, descriptor: ImageDescriptor, pixels, num_workers):
        rows = queue.Queue()
        for y in range(descriptor.height):
            rows.put(y)

        errors = []
        workers = [
            threading.Thread(
                target=self._worker,
                args=(descriptor, pixels, rows, errors),
                name=f"brot-row-worker-{i}",
            )
            for i in range(num_workers)
        ]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        if errors:
            raise errors[0]
