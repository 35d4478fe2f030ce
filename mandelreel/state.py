from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

import numpy as np

from mandelreel.errors import InvalidParameter
from mandelreel.geometry import PlaneWindow, ViewGeometry
from mandelreel.iteration import budget_for
from mandelreel.palette import build_palette


@dataclass(frozen=True, eq=False)
class RenderState:
    """
    Everything needed to render one frame, derived from center and magnification.

    Window, geometry, iteration budget and palette are computed together in
    __post_init__; a new center or magnification means a new RenderState
    (see moved()), never an update of the derived fields.
    """

    pixel_width: int
    pixel_height: int
    base_x_range: float
    base_y_range: float
    center: Tuple[float, float] = (0.0, 0.0)
    magnification: float = 1.0
    border_left: int = 0
    border_top: int = 0

    window: PlaneWindow = field(init=False)
    geometry: ViewGeometry = field(init=False)
    max_iterations: int = field(init=False)
    palette: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.base_x_range > 0 or not self.base_y_range > 0:
            raise InvalidParameter("base plane ranges must be positive")
        if not self.magnification >= 1:
            raise InvalidParameter(f"magnification must be >= 1, got {self.magnification!r}")

        center = (float(self.center[0]), float(self.center[1]))
        window = PlaneWindow.centered(center, self.base_x_range, self.base_y_range, self.magnification)
        geometry = ViewGeometry(
            pixel_width=self.pixel_width,
            pixel_height=self.pixel_height,
            window=window,
            border_left=self.border_left,
            border_top=self.border_top,
        )
        max_iterations = budget_for(self.magnification)

        object.__setattr__(self, "center", center)
        object.__setattr__(self, "window", window)
        object.__setattr__(self, "geometry", geometry)
        object.__setattr__(self, "max_iterations", max_iterations)
        object.__setattr__(self, "palette", build_palette(max_iterations))

    def moved(
        self,
        *,
        center: Optional[Tuple[float, float]] = None,
        magnification: Optional[float] = None,
    ) -> "RenderState":
        changes = {}
        if center is not None:
            changes["center"] = center
        if magnification is not None:
            changes["magnification"] = magnification
        return replace(self, **changes)
