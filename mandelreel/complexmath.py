from numba import njit


@njit(cache=True, nogil=True)
def square(a, b):
    """Square of a + bi, returned as (real, imag)."""
    return a * a - b * b, a * b + b * a


@njit(cache=True, nogil=True)
def add(a, b, c, d):
    return a + c, b + d


@njit(cache=True, nogil=True)
def abs_squared(a, b):
    # |z|^2, compared against the escape value instead of |z| to skip the sqrt
    return a * a + b * b
