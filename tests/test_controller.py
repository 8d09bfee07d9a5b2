from unittest import TestCase, mock

import numpy as np

from brotppm.mandelbrot import controller
from brotppm.mandelbrot.controller import MandelbrotController
from brotppm.mandelbrot.mandelbrot import in_main_cardioid, mandelbrot_test
from brotppm.ui.colouring import rgb_gen
from brotppm.utils.errors import AllocationFailure
from brotppm.utils.mandelbrot_utils import (
    ImageDescriptor,
    RenderConfig,
    make_image_descriptor,
)


class TestMandelbrotController(TestCase):

    @classmethod
    def setUpClass(cls):
        cls.descriptor = make_image_descriptor("out.ppm", 40, -2.0, 0.8, -1.2, 1.2)

    def _render(self, **kwargs):
        kwargs.setdefault("max_iterations", 200)
        return MandelbrotController(RenderConfig(**kwargs)).render(self.descriptor)

    def test_buffer_shape(self):
        pixels = self._render(workers=2)
        self.assertEqual(pixels.shape, (40, 47, 3))
        self.assertEqual(pixels.dtype, np.uint16)
        self.assertEqual(self._render(workers=2, bit_depth=8).dtype, np.uint8)

    def test_pixels_match_single_point_pipeline(self):
        pixels = self._render(workers=3).reshape(-1, 3)
        width = self.descriptor.width
        for x, y in [(0, 0), (46, 0), (23, 20), (35, 20), (10, 39), (30, 12)]:
            c = self.descriptor.point_for_pixel(x, y)
            expected = rgb_gen(mandelbrot_test(c, 200, True), 200)
            self.assertEqual(tuple(pixels[y * width + x].tolist()), expected, (x, y))

    def test_output_independent_of_worker_count(self):
        serial = self._render(workers=1)
        for workers in [2, 4, 7, 64]:
            self.assertEqual(serial.tobytes(), self._render(workers=workers).tobytes())

    def test_repeated_renders_are_identical(self):
        render = MandelbrotController(RenderConfig(max_iterations=200, workers=4))
        self.assertEqual(
            render.render(self.descriptor).tobytes(),
            render.render(self.descriptor).tobytes(),
        )

    def test_cardioid_check_does_not_change_output(self):
        self.assertEqual(
            self._render(workers=4).tobytes(),
            self._render(workers=4, cardioid_check=False).tobytes(),
        )

    def test_in_set_colour(self):
        white = self._render(workers=2)
        black = self._render(workers=2, in_set_colour="black")
        x, y = 30, 20
        self.assertTrue(in_main_cardioid(self.descriptor.point_for_pixel(x, y)))
        self.assertEqual(white[y, x].tolist(), [65535, 65535, 65535])
        self.assertEqual(black[y, x].tolist(), [0, 0, 0])

    def test_allocation_failure(self):
        huge = ImageDescriptor(10 ** 12, 10 ** 12, -2.0, 0.8, -1.2, 1.2, "out.ppm")
        render = MandelbrotController(RenderConfig(max_iterations=200, workers=2))
        with self.assertRaises(AllocationFailure):
            render.render(huge)

    def test_worker_errors_are_raised_after_join(self):
        with mock.patch.object(
            controller, "iterate_row", side_effect=RuntimeError("boom")
        ):
            with self.assertRaisesRegex(RuntimeError, "boom"):
                self._render(workers=3)

    def test_palette_follows_config_changes(self):
        config = RenderConfig(max_iterations=50, workers=2)
        render = MandelbrotController(config)
        render.render(self.descriptor)

        config.max_iterations = 200
        config.bit_depth = 8
        pixels = render.render(self.descriptor)

        self.assertEqual(pixels.dtype, np.uint8)
        expected = MandelbrotController(
            RenderConfig(max_iterations=200, workers=2, bit_depth=8)
        ).render(self.descriptor)
        self.assertEqual(pixels.tobytes(), expected.tobytes())
