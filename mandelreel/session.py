"""
The operations a presentation layer drives.

A ZoomSession owns the current RenderState, the FrameStore and the
ZoomAnimator. Windows, dialogs and input handling live outside; they call
the methods here and subscribe a SessionListener to hear about progress and
about which frame to show.
"""

from __future__ import annotations

import functools
import numbers
import time
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from mandelreel.animator import MAX_ZOOM, ZoomAnimator
from mandelreel.config import DEFAULT_CONFIG, normalise_config
from mandelreel.errors import InvalidParameter, ZoomRejected
from mandelreel.frames import Frame, FrameStore
from mandelreel.geometry import PlaneWindow
from mandelreel.renderers.cpu_numba import render_state
from mandelreel.state import RenderState
from mandelreel.util.logging_setup import get_logger

Wait = Callable[[float], Any]


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


class SessionListener:
    """Receives session notifications; override what you need."""

    def displayed_frame_changed(self, displayed: int, last: int) -> None:
        pass

    def progress(self, fraction: float) -> None:
        pass

    def generating_started(self) -> None:
        pass

    def generating_finished(self) -> None:
        pass


class ZoomSession:
    def __init__(
        self,
        *,
        width: int = DEFAULT_CONFIG["width"],
        height: int = DEFAULT_CONFIG["height"],
        zoom_factor: float = DEFAULT_CONFIG["zoom_factor"],
        frame_delay_ms: int = DEFAULT_CONFIG["frame_delay_ms"],
        frames_per_zoom: int = DEFAULT_CONFIG["frames_per_zoom"],
        x_range: float = DEFAULT_CONFIG["x_range"],
        y_range: float = DEFAULT_CONFIG["y_range"],
        border_left: int = DEFAULT_CONFIG["border_left"],
        border_top: int = DEFAULT_CONFIG["border_top"],
        workers: int = DEFAULT_CONFIG["workers"],
        band_height: int = DEFAULT_CONFIG["band_height"],
        draw_axes: bool = DEFAULT_CONFIG["draw_axes"],
        max_zoom: float = MAX_ZOOM,
        listeners: Iterable[SessionListener] = (),
    ):
        self.set_zoom_factor(zoom_factor)
        self.set_frame_delay(frame_delay_ms)
        self.set_frames_per_zoom(frames_per_zoom)

        self._state = RenderState(
            pixel_width=width,
            pixel_height=height,
            base_x_range=x_range,
            base_y_range=y_range,
            border_left=border_left,
            border_top=border_top,
        )
        self._target: Optional[Tuple[float, float]] = None
        self._listeners: List[SessionListener] = list(listeners)

        self.store = FrameStore()
        render = functools.partial(render_state, workers=workers, band_height=band_height, draw_axes=draw_axes)
        self.animator = ZoomAnimator(self.store, render, max_zoom=max_zoom)
        self._render = render

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], **kwargs) -> "ZoomSession":
        cfg = normalise_config(cfg)
        return cls(**cfg, **kwargs)

    def add_listener(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        self._listeners.remove(listener)

    def _notify_displayed(self) -> None:
        for listener in self._listeners:
            listener.displayed_frame_changed(self.store.displayed_index, self.store.last_index)

    def _notify_progress(self, fraction: float) -> None:
        for listener in self._listeners:
            listener.progress(fraction)

    # --- rendering -----------------------------------------------------------
    def initialize(self) -> Frame:
        """Render the first frame: the full view centered on the origin."""
        self.store.reset()
        self._state = self._state.moved(center=(0.0, 0.0), magnification=1.0)
        self._target = None
        frame = self._render(self._state, frame_id="0")
        self.store.append(frame)
        self.store.displayed_index = 0
        get_logger().info("Session initialized size=%sx%s window=%s iter=%s",
                          self._state.pixel_width, self._state.pixel_height,
                          self._state.window.as_tuple(), self._state.max_iterations)
        self._notify_displayed()
        return frame

    def request_zoom(
        self,
        target_real: Optional[float] = None,
        target_imag: Optional[float] = None,
        *,
        animate: bool = False,
        wait: Optional[Wait] = None,
    ) -> bool:
        """
        Zoom by zoom_factor towards a target point.

        Without a target, zooms on the point picked with select_point() or,
        failing that, on the current center. Returns False without producing
        frames when the magnification ceiling is reached or another zoom is
        being generated.
        """
        logger = get_logger()
        if target_real is not None or target_imag is not None:
            cur_re, cur_im = self._state.center
            target = (
                cur_re if target_real is None else float(target_real),
                cur_im if target_imag is None else float(target_imag),
            )
        else:
            target = self._target or self._state.center

        if self.animator.generating:
            logger.warning("Zoom request ignored: a zoom is already in progress")
            return False
        if self._state.magnification >= self.animator.max_zoom:
            logger.info("Zoom request ignored: magnification %.6g is at the ceiling",
                        self._state.magnification)
            return False

        first_new = len(self.store)
        for listener in self._listeners:
            listener.generating_started()
        try:
            self._state = self.animator.run(
                self._state,
                target=target,
                zoom_factor=self._zoom_factor,
                frames_per_zoom=self._frames_per_zoom,
                on_progress=self._notify_progress,
            )
        except ZoomRejected as e:
            logger.info("Zoom request ignored: %s", e)
            return False
        finally:
            for listener in self._listeners:
                listener.generating_finished()

        self._target = None
        logger.info("Zoom complete magnification=%.6g window=%s last_frame=%s",
                    self._state.magnification, self._state.window.as_tuple(), self.store.last_index)
        if animate:
            self._play(range(first_new, self.store.last_index + 1), wait)
        else:
            self.store.last()
            self._notify_displayed()
        return True

    def select_point(self, px: float, py: float) -> Tuple[float, float]:
        """Use the plane point under pixel (px, py) as the next zoom target."""
        self._target = self._state.geometry.pixel_to_plane(px, py)
        return self._target

    def set_center(self, real: float, imag: float) -> Frame:
        """Recenter at the current magnification and render one new frame."""
        self._state = self._state.moved(center=(float(real), float(imag)))
        self._target = None
        frame = self._render(self._state, frame_id=str(len(self.store)))
        self.store.append(frame)
        self.store.last()
        get_logger().info("Recentered on (%s, %s) last_frame=%s", real, imag, self.store.last_index)
        self._notify_displayed()
        return frame

    # --- parameters ----------------------------------------------------------
    def set_zoom_factor(self, value: float) -> None:
        # magnification never decreases, and stays >= 1
        if not _is_number(value) or not value >= 1:
            raise InvalidParameter(f"zoom factor must be >= 1, got {value!r}")
        self._zoom_factor = float(value)

    def set_frame_delay(self, ms: float) -> None:
        if not _is_number(ms) or not ms >= 0:
            raise InvalidParameter(f"frame delay must be >= 0 ms, got {ms!r}")
        self._frame_delay_ms = ms

    def set_frames_per_zoom(self, n: int) -> None:
        if not _is_number(n) or n != int(n) or n <= 0:
            raise InvalidParameter(f"frames per zoom must be a positive integer, got {n!r}")
        self._frames_per_zoom = int(n)

    @property
    def zoom_factor(self) -> float:
        return self._zoom_factor

    @property
    def frame_delay_ms(self) -> float:
        return self._frame_delay_ms

    @property
    def frames_per_zoom(self) -> int:
        return self._frames_per_zoom

    # --- navigation ----------------------------------------------------------
    def display_frame(self, index: int) -> Frame:
        self.store.displayed_index = index
        self._notify_displayed()
        return self.store.displayed

    def next_frame(self) -> int:
        self.store.next()
        self._notify_displayed()
        return self.store.displayed_index

    def previous_frame(self) -> int:
        self.store.previous()
        self._notify_displayed()
        return self.store.displayed_index

    def last_frame(self) -> int:
        self.store.last()
        self._notify_displayed()
        return self.store.displayed_index

    def _wait(self, wait: Optional[Wait]) -> None:
        (wait or time.sleep)(self._frame_delay_ms / 1000.0)

    def _play(self, indices: Iterable[int], wait: Optional[Wait]) -> None:
        for index in indices:
            self.display_frame(index)
            self._wait(wait)

    def replay_all(self, wait: Optional[Wait] = None) -> None:
        for _ in self.store.replay_all():
            self._notify_displayed()
            self._wait(wait)

    def replay_last(self, wait: Optional[Wait] = None) -> None:
        for _ in self.store.replay_last(self._frames_per_zoom):
            self._notify_displayed()
            self._wait(wait)

    # --- queries -------------------------------------------------------------
    @property
    def state(self) -> RenderState:
        return self._state

    @property
    def window(self) -> PlaneWindow:
        return self._state.window

    @property
    def magnification(self) -> float:
        return self._state.magnification

    @property
    def max_iterations(self) -> int:
        return self._state.max_iterations

    @property
    def center(self) -> Tuple[float, float]:
        return self._state.center

    @property
    def target(self) -> Optional[Tuple[float, float]]:
        return self._target

    @property
    def displayed_index(self) -> int:
        return self.store.displayed_index

    @property
    def last_index(self) -> int:
        return self.store.last_index

    @property
    def displayed_frame(self) -> Frame:
        return self.store.displayed

    @property
    def is_generating(self) -> bool:
        return self.animator.generating

    @property
    def can_zoom(self) -> bool:
        return not self.is_generating and self._state.magnification < self.animator.max_zoom


def initialize(
    width: int,
    height: int,
    zoom_factor: float,
    frame_delay_ms: int,
    frames_per_zoom: int,
    **options,
) -> ZoomSession:
    """Create a session and render its first frame."""
    session = ZoomSession(
        width=width,
        height=height,
        zoom_factor=zoom_factor,
        frame_delay_ms=frame_delay_ms,
        frames_per_zoom=frames_per_zoom,
        **options,
    )
    session.initialize()
    return session
