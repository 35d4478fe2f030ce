"""
Rendered frames and the in-memory sequence they are kept in.

The FrameStore only grows while a session runs: each zoom step or recenter
appends one frame, and a cursor records which frame is on screen. Moving the
cursor never re-renders anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

import numpy as np
from PIL import Image

from mandelreel.errors import OutOfRange
from mandelreel.geometry import PlaneWindow


@dataclass(frozen=True, eq=False)
class Frame:
    """One rendered image and the view that produced it."""

    pixels: np.ndarray
    iterations: np.ndarray
    magnification: float
    window: PlaneWindow
    max_iterations: int

    def __post_init__(self) -> None:
        self.pixels.flags.writeable = False
        self.iterations.flags.writeable = False

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)


class FrameStore:
    """Append-only frame sequence with a displayed-frame cursor."""

    def __init__(self):
        self._frames: List[Frame] = []
        self._displayed = 0

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self._frames)

    @property
    def last_index(self) -> int:
        """Index of the most recently generated frame, -1 when empty."""
        return len(self._frames) - 1

    def append(self, frame: Frame) -> int:
        self._frames.append(frame)
        return self.last_index

    def _check(self, index: int) -> int:
        if not 0 <= index <= self.last_index:
            raise OutOfRange(f"frame index {index} outside [0, {self.last_index}]")
        return index

    def frame(self, index: int) -> Frame:
        return self._frames[self._check(index)]

    @property
    def displayed_index(self) -> int:
        return self._displayed

    @displayed_index.setter
    def displayed_index(self, index: int) -> None:
        self._displayed = self._check(index)

    @property
    def displayed(self) -> Frame:
        return self.frame(self._displayed)

    # navigation clamps; on an empty store the cursor stays put
    def next(self) -> int:
        if not self._frames:
            return self._displayed
        self.displayed_index = min(self._displayed + 1, self.last_index)
        return self._displayed

    def previous(self) -> int:
        if not self._frames:
            return self._displayed
        self.displayed_index = max(self._displayed - 1, 0)
        return self._displayed

    def last(self) -> int:
        if not self._frames:
            return self._displayed
        self.displayed_index = self.last_index
        return self._displayed

    def _replay(self, start: int) -> Iterator[Frame]:
        # the end is read once, so frames appended mid-replay are not shown
        end = self.last_index
        for index in range(start, end + 1):
            self.displayed_index = index
            yield self._frames[index]

    def replay_all(self) -> Iterator[Frame]:
        """Move the cursor from frame 1 to the last frame, yielding each frame."""
        return self._replay(1)

    def replay_last(self, frames_per_zoom: int) -> Iterator[Frame]:
        """Move the cursor through the frames of the most recent zoom."""
        return self._replay(max(0, self.last_index - frames_per_zoom))

    def reset(self) -> None:
        self._frames.clear()
        self._displayed = 0
