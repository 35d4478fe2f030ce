"""Mapping between pixel coordinates and the complex plane."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from mandelreel.errors import InvalidParameter


@dataclass(frozen=True)
class PlaneWindow:
    """The rectangle of the complex plane that is currently visible."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self) -> None:
        if not self.x_max > self.x_min:
            raise InvalidParameter(f"x_max ({self.x_max}) must be greater than x_min ({self.x_min})")
        if not self.y_max > self.y_min:
            raise InvalidParameter(f"y_max ({self.y_max}) must be greater than y_min ({self.y_min})")

    @classmethod
    def centered(
        cls,
        center: Tuple[float, float],
        x_range: float,
        y_range: float,
        magnification: float = 1.0,
    ) -> "PlaneWindow":
        """Window of the given base ranges shrunk by magnification around center."""
        if not magnification > 0:
            raise InvalidParameter(f"magnification must be > 0, got {magnification!r}")
        delta_x = (x_range / 2) / magnification
        delta_y = (y_range / 2) / magnification
        re, im = center
        return cls(x_min=re - delta_x, x_max=re + delta_x, y_min=im - delta_y, y_max=im + delta_y)

    @property
    def x_range(self) -> float:
        return self.x_max - self.x_min

    @property
    def y_range(self) -> float:
        return self.y_max - self.y_min

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x_min + self.x_max) / 2, (self.y_min + self.y_max) / 2

    def contains(self, real: float, imag: float) -> bool:
        """True when (real, imag) lies strictly inside the window."""
        return self.x_min < real < self.x_max and self.y_min < imag < self.y_max

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return self.x_min, self.x_max, self.y_min, self.y_max


@dataclass(frozen=True)
class ViewGeometry:
    """
    Pixel grid laid over a PlaneWindow.

    The ratio and stagger values are derived from the window on every access,
    so replacing the window can never leave them stale. Border thicknesses
    belong to whatever draws the frame (window decorations, margins) and only
    shift pixel coordinates.
    """

    pixel_width: int
    pixel_height: int
    window: PlaneWindow
    border_left: int = 0
    border_top: int = 0

    def __post_init__(self) -> None:
        if self.pixel_width <= 0 or self.pixel_height <= 0:
            raise InvalidParameter(
                f"pixel size must be positive, got {self.pixel_width}x{self.pixel_height}"
            )

    @property
    def pixel_ratio_x(self) -> float:
        return self.pixel_width / self.window.x_range

    @property
    def pixel_ratio_y(self) -> float:
        return self.pixel_height / self.window.y_range

    @property
    def x_stagger(self) -> float:
        # pixel column of the imaginary axis
        return self.pixel_width / 2 - self.window.center[0] * self.pixel_ratio_x

    @property
    def y_stagger(self) -> float:
        # pixel row of the real axis
        return self.pixel_height / 2 + self.window.center[1] * self.pixel_ratio_y

    def plane_to_pixel(self, real: float, imag: float) -> Tuple[float, float]:
        w = self.window
        px = (real - w.x_min) / w.x_range * self.pixel_width + self.border_left
        # plane y grows upwards, pixel y grows downwards
        py = self.pixel_height - (imag - w.y_min) / w.y_range * self.pixel_height + self.border_top
        return px, py

    def pixel_to_plane(self, px: float, py: float) -> Tuple[float, float]:
        real = (px - self.border_left - self.x_stagger) / self.pixel_ratio_x
        imag = -(py - self.border_top - self.y_stagger) / self.pixel_ratio_y
        return real, imag

    def with_window(self, window: PlaneWindow) -> "ViewGeometry":
        return replace(self, window=window)
