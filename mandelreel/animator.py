from __future__ import annotations

import enum
import threading
from typing import Callable, List, Optional, Tuple

from mandelreel.errors import InvalidParameter, ZoomAtCeiling, ZoomInProgress
from mandelreel.frames import Frame, FrameStore
from mandelreel.renderers.cpu_numba import render_state
from mandelreel.state import RenderState
from mandelreel.util.logging_setup import frame_logger

# Beyond this magnification doubles no longer resolve neighbouring pixels.
MAX_ZOOM = 10.0 ** 7


class AnimatorState(enum.Enum):
    IDLE = "idle"
    GENERATING = "generating"


def zoom_steps(current: float, zoom_factor: float, frames: int) -> List[float]:
    """
    Intermediate magnifications of one zoom, excluding the start.

    Steps are geometric (current * zoom_factor ** (k / frames)) so that the
    zoom looks uniform in speed.
    """
    if not zoom_factor > 0:
        raise InvalidParameter(f"zoom_factor must be > 0, got {zoom_factor!r}")
    if frames <= 0:
        raise InvalidParameter(f"frames must be > 0, got {frames!r}")
    return [current * zoom_factor ** (k / frames) for k in range(1, frames + 1)]


class ZoomAnimator:
    """
    Generates the frames of a zoom into a FrameStore.

    Not reentrant: a run() while another is generating raises ZoomInProgress
    instead of waiting.
    """

    def __init__(
        self,
        store: FrameStore,
        render: Callable[..., Frame] = render_state,
        *,
        max_zoom: float = MAX_ZOOM,
    ):
        self.store = store
        self.max_zoom = max_zoom
        self._render = render
        self._lock = threading.Lock()
        self._state = AnimatorState.IDLE

    @property
    def state(self) -> AnimatorState:
        return self._state

    @property
    def generating(self) -> bool:
        return self._state is AnimatorState.GENERATING

    def run(
        self,
        state: RenderState,
        *,
        target: Tuple[float, float],
        zoom_factor: float,
        frames_per_zoom: int,
        on_progress: Optional[Callable[[float], None]] = None,
    ) -> RenderState:
        """
        Render frames_per_zoom frames zooming from state towards target.

        Returns the state at the new full magnification
        (state.magnification * zoom_factor), centered on target.
        """
        if state.magnification >= self.max_zoom:
            raise ZoomAtCeiling(
                f"magnification {state.magnification:g} is at or above the ceiling {self.max_zoom:g}"
            )
        if not zoom_factor >= 1:
            raise InvalidParameter(f"zoom_factor must be >= 1, got {zoom_factor!r}")
        magnifications = zoom_steps(state.magnification, zoom_factor, frames_per_zoom)
        if not self._lock.acquire(blocking=False):
            raise ZoomInProgress("a zoom is already being generated")

        try:
            self._state = AnimatorState.GENERATING
            base = state.moved(center=target)
            for k, magnification in enumerate(magnifications, start=1):
                step = base.moved(magnification=magnification)
                index = len(self.store)
                frame = self._render(step, frame_id=str(index))
                self.store.append(frame)
                frame_logger(index).info("zoom step %s/%s magnification=%.6g iter=%s",
                                         k, frames_per_zoom, magnification, step.max_iterations)
                if on_progress is not None:
                    on_progress(k / frames_per_zoom)
            return base.moved(magnification=state.magnification * zoom_factor)
        finally:
            self._state = AnimatorState.IDLE
            self._lock.release()
