import numpy as np
import pytest

from mandelreel.frames import Frame
from mandelreel.geometry import PlaneWindow, ViewGeometry


@pytest.fixture
def full_window():
    return PlaneWindow(-2.0, 2.0, -1.0, 1.0)


@pytest.fixture
def small_geometry(full_window):
    return ViewGeometry(pixel_width=40, pixel_height=20, window=full_window)


@pytest.fixture
def make_frame(full_window):
    def _make(magnification=1.0):
        return Frame(
            pixels=np.zeros((2, 2, 3), dtype=np.uint8),
            iterations=np.zeros((2, 2), dtype=np.int32),
            magnification=magnification,
            window=full_window,
            max_iterations=1,
        )
    return _make
