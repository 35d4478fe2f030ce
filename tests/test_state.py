import pytest

from mandelreel.errors import InvalidParameter
from mandelreel.iteration import budget_for
from mandelreel.state import RenderState


def make_state(**kwargs):
    return RenderState(pixel_width=40, pixel_height=20, base_x_range=4.0, base_y_range=2.0, **kwargs)


def test_initial_state_is_full_view():
    state = make_state()
    assert state.window.as_tuple() == (-2.0, 2.0, -1.0, 1.0)
    assert state.max_iterations == budget_for(1)
    assert len(state.palette) == state.max_iterations + 1


def test_moved_recomputes_everything_together():
    state = make_state()
    zoomed = state.moved(center=(-1.0, 0.5), magnification=100)
    assert zoomed.center == (-1.0, 0.5)
    assert zoomed.window.x_range == pytest.approx(0.04)
    assert zoomed.geometry.window is zoomed.window
    assert zoomed.geometry.pixel_ratio_x == pytest.approx(1000.0)
    assert zoomed.max_iterations == budget_for(100)
    assert len(zoomed.palette) == zoomed.max_iterations + 1
    # the original is untouched
    assert state.magnification == 1.0
    assert state.window.as_tuple() == (-2.0, 2.0, -1.0, 1.0)


def test_state_is_frozen():
    state = make_state()
    with pytest.raises(AttributeError):
        state.magnification = 5.0


def test_magnification_below_one_rejected():
    with pytest.raises(InvalidParameter):
        make_state(magnification=0.5)
