import pytest

from mandelreel.complexmath import abs_squared, add, square


def test_square_matches_complex_multiplication():
    z = complex(1.5, -0.25)
    re, im = square(z.real, z.imag)
    assert complex(re, im) == pytest.approx(z * z)


def test_square_of_i_is_minus_one():
    assert square(0.0, 1.0) == (-1.0, 0.0)


def test_add():
    assert add(1.0, 2.0, 0.5, -3.0) == (1.5, -1.0)


def test_abs_squared():
    assert abs_squared(3.0, 4.0) == 25.0
