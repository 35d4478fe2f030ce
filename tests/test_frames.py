import numpy as np
import pytest

from mandelreel.errors import OutOfRange
from mandelreel.frames import FrameStore


@pytest.fixture
def store(make_frame):
    s = FrameStore()
    for i in range(6):
        s.append(make_frame(magnification=i + 1))
    return s


def test_frame_is_read_only(make_frame):
    frame = make_frame()
    with pytest.raises(ValueError):
        frame.pixels[0, 0] = (1, 1, 1)
    assert frame.width == 2 and frame.height == 2


def test_frame_to_image(make_frame):
    image = make_frame().to_image()
    assert image.size == (2, 2)
    assert image.mode == "RGB"


def test_append_returns_index(make_frame):
    s = FrameStore()
    assert s.last_index == -1
    assert s.append(make_frame()) == 0
    assert s.append(make_frame()) == 1
    assert len(s) == 2


def test_frame_lookup(store):
    assert store.frame(3).magnification == 4
    with pytest.raises(OutOfRange):
        store.frame(6)
    with pytest.raises(OutOfRange):
        store.frame(-1)


def test_cursor_set_checks_range(store):
    store.displayed_index = 4
    assert store.displayed.magnification == 5
    with pytest.raises(OutOfRange):
        store.displayed_index = 6
    assert store.displayed_index == 4


def test_previous_clamps_at_first(store):
    assert store.displayed_index == 0
    assert store.previous() == 0


def test_next_clamps_at_last(store):
    store.last()
    assert store.displayed_index == 5
    assert store.next() == 5


def test_next_and_previous_step(store):
    assert store.next() == 1
    assert store.next() == 2
    assert store.previous() == 1


def test_replay_all_starts_at_frame_one(store):
    seen = []
    for frame in store.replay_all():
        seen.append(store.displayed_index)
        assert frame is store.displayed
    assert seen == [1, 2, 3, 4, 5]


def test_replay_last(store):
    seen = [store.displayed_index for _ in store.replay_last(3)]
    assert seen == [2, 3, 4, 5]


def test_replay_last_clamps_start(store):
    seen = [store.displayed_index for _ in store.replay_last(50)]
    assert seen == [0, 1, 2, 3, 4, 5]


def test_navigation_does_not_copy_frames(store):
    first = store.frame(2)
    store.displayed_index = 2
    assert store.displayed is first


def test_reset_truncates(store):
    store.reset()
    assert len(store) == 0
    with pytest.raises(OutOfRange):
        store.last()


def test_navigation_on_empty_store_keeps_cursor():
    empty = FrameStore()
    assert empty.next() == 0
    assert empty.previous() == 0
    assert empty.last() == 0
    assert empty.last_index == -1
