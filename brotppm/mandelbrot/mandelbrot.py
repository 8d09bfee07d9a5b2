from numba import njit

from brotppm.utils.constants import BREAKOUT_R2


@njit(nogil=True)
def sample_point(x, y, xmin, ymax, x_step, y_step):
    # row 0 is the top of the image
    return complex(xmin + x * x_step, ymax - y * y_step)


@njit(nogil=True)
def in_main_cardioid(c):
    abs_2 = c.real * c.real + c.imag * c.imag
    return abs_2 * (8.0 * abs_2 - 3.0) < 3.0 / 32.0 - c.real


@njit(nogil=True)
def mandelbrot_test(c, max_iter, cardioid_check):
    """
    Escape time of `c` under x -> x^2 + c.

    Returns the first iteration at which |x| >= 2, or `max_iter` if the orbit
    stays bounded for the whole budget.
    """
    if cardioid_check and in_main_cardioid(c):
        return max_iter

    x = 0j
    for i in range(1, max_iter):
        x = x * x + c
        if x.real * x.real + x.imag * x.imag >= BREAKOUT_R2:
            return i

    return max_iter


@njit(nogil=True)
def iterate_row(
    iterations_row, y, xmin, ymax, x_step, y_step, max_iter, cardioid_check
):
    for x in range(iterations_row.shape[0]):
        c = sample_point(x, y, xmin, ymax, x_step, y_step)
        iterations_row[x] = mandelbrot_test(c, max_iter, cardioid_check)
