"""
User actions as data.

Each thing a user can do (zoom, pick a point, type a coordinate, edit a
parameter, move through frames) is a small frozen dataclass. A presentation
layer builds one and hands it to dispatch(), which applies it to a
ZoomSession. Typed text goes through parse_entry() first.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import singledispatch
from typing import Any, Optional, Union

from mandelreel.errors import InvalidParameter, OutOfRange
from mandelreel.session import ZoomSession

INVALID_ENTRY_MESSAGE = "The entered value was invalid."
OUT_OF_BOUNDS_MESSAGE = "The entered value was outside the given bounds."
POSITIVE_VALUE_MESSAGE = "The value entered must be a number greater than 0."


@dataclass(frozen=True)
class Zoom:
    target_real: Optional[float] = None
    target_imag: Optional[float] = None
    animate: bool = False


@dataclass(frozen=True)
class SelectPoint:
    px: float
    py: float


@dataclass(frozen=True)
class SetCenter:
    real: float
    imag: float


@dataclass(frozen=True)
class EditCenterReal:
    value: float


@dataclass(frozen=True)
class EditCenterImag:
    value: float


@dataclass(frozen=True)
class SetZoomFactor:
    value: float


@dataclass(frozen=True)
class SetFrameDelay:
    value: float


@dataclass(frozen=True)
class SetFramesPerZoom:
    value: float


@dataclass(frozen=True)
class DisplayFrame:
    index: int


@dataclass(frozen=True)
class NextFrame:
    pass


@dataclass(frozen=True)
class PreviousFrame:
    pass


@dataclass(frozen=True)
class LastFrame:
    pass


@dataclass(frozen=True)
class ReplayAll:
    pass


@dataclass(frozen=True)
class ReplayLast:
    pass


Command = Union[
    Zoom, SelectPoint, SetCenter, EditCenterReal, EditCenterImag,
    SetZoomFactor, SetFrameDelay, SetFramesPerZoom,
    DisplayFrame, NextFrame, PreviousFrame, LastFrame, ReplayAll, ReplayLast,
]


def parse_entry(raw: str) -> float:
    """Parse a number typed by the user."""
    try:
        return float(raw.strip())
    except (AttributeError, ValueError) as e:
        raise InvalidParameter(INVALID_ENTRY_MESSAGE) from e


def _positive(value: float) -> float:
    if not value > 0:
        raise InvalidParameter(POSITIVE_VALUE_MESSAGE)
    return value


@singledispatch
def dispatch(command: Any, session: ZoomSession) -> Any:
    raise TypeError(f"Unknown command: {command!r}")


@dispatch.register
def _(command: Zoom, session: ZoomSession) -> bool:
    return session.request_zoom(command.target_real, command.target_imag, animate=command.animate)


@dispatch.register
def _(command: SelectPoint, session: ZoomSession):
    return session.select_point(command.px, command.py)


@dispatch.register
def _(command: SetCenter, session: ZoomSession):
    return session.set_center(command.real, command.imag)


@dispatch.register
def _(command: EditCenterReal, session: ZoomSession):
    if not session.window.contains(command.value, session.center[1]):
        raise OutOfRange(OUT_OF_BOUNDS_MESSAGE)
    return session.set_center(command.value, session.center[1])


@dispatch.register
def _(command: EditCenterImag, session: ZoomSession):
    if not session.window.contains(session.center[0], command.value):
        raise OutOfRange(OUT_OF_BOUNDS_MESSAGE)
    return session.set_center(session.center[0], command.value)


@dispatch.register
def _(command: SetZoomFactor, session: ZoomSession) -> None:
    session.set_zoom_factor(_positive(command.value))


@dispatch.register
def _(command: SetFrameDelay, session: ZoomSession) -> None:
    session.set_frame_delay(_positive(command.value))


@dispatch.register
def _(command: SetFramesPerZoom, session: ZoomSession) -> None:
    value = _positive(command.value)
    if not math.isfinite(value) or value != int(value):
        raise InvalidParameter(INVALID_ENTRY_MESSAGE)
    session.set_frames_per_zoom(int(value))


@dispatch.register
def _(command: DisplayFrame, session: ZoomSession):
    return session.display_frame(command.index)


@dispatch.register
def _(command: NextFrame, session: ZoomSession) -> int:
    return session.next_frame()


@dispatch.register
def _(command: PreviousFrame, session: ZoomSession) -> int:
    return session.previous_frame()


@dispatch.register
def _(command: LastFrame, session: ZoomSession) -> int:
    return session.last_frame()


@dispatch.register
def _(command: ReplayAll, session: ZoomSession) -> None:
    session.replay_all()


@dispatch.register
def _(command: ReplayLast, session: ZoomSession) -> None:
    session.replay_last()
