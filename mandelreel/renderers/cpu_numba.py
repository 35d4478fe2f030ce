from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List, Tuple

import numpy as np
from numba import njit

from mandelreel.frames import Frame
from mandelreel.geometry import ViewGeometry
from mandelreel.iteration import iterate
from mandelreel.state import RenderState
from mandelreel.util.logging_setup import frame_logger

AXIS_COLOR = (255, 255, 0)


@njit(cache=True, nogil=True)
def iterate_rows(counts, y0, x_stagger, y_stagger, ratio_x, ratio_y, max_iterations):
    """Fill counts (a block of rows starting at pixel row y0) with escape-time counts."""
    rows, width = counts.shape
    for j in range(rows):
        imag = -((y0 + j) - y_stagger) / ratio_y
        for i in range(width):
            real = (i - x_stagger) / ratio_x
            counts[j, i] = iterate(real, imag, max_iterations)


def _bands(height: int, band_height: int) -> List[Tuple[int, int]]:
    bands: List[Tuple[int, int]] = []
    y = 0
    while y < height:
        y1 = min(height, y + band_height)
        bands.append((y, y1))
        y = y1
    return bands


def _draw_axes(pixels: np.ndarray, geometry: ViewGeometry) -> None:
    height, width = pixels.shape[:2]
    column = int(geometry.x_stagger)
    row = int(geometry.y_stagger)
    if 0 <= column < width:
        pixels[:, column] = AXIS_COLOR
    if 0 <= row < height:
        pixels[row, :] = AXIS_COLOR


def render_frame(
    *,
    geometry: ViewGeometry,
    palette: np.ndarray,
    max_iterations: int,
    magnification: float = 1.0,
    workers: int = 1,
    band_height: int = 32,
    draw_axes: bool = True,
    frame_id: str = "-",
) -> Frame:
    """
    Rasterize one frame.

    Every pixel is mapped to the plane, iterated independently and coloured
    through the palette, so bands of rows can be computed in any order. With
    workers > 1 the bands run on a thread pool; the kernel releases the GIL.
    """
    logger = frame_logger(frame_id)
    width = geometry.pixel_width
    height = geometry.pixel_height
    if len(palette) < max_iterations + 1:
        raise ValueError(f"palette has {len(palette)} entries, need {max_iterations + 1}")

    logger.debug("render start size=%sx%s magnification=%s iter=%s workers=%s",
                 width, height, magnification, max_iterations, workers)

    counts = np.zeros((height, width), dtype=np.int32)
    args = (geometry.x_stagger, geometry.y_stagger, geometry.pixel_ratio_x, geometry.pixel_ratio_y, max_iterations)

    def _render_band(y0_y1: Tuple[int, int]) -> None:
        y0, y1 = y0_y1
        iterate_rows(counts[y0:y1], y0, *args)

    bands = _bands(height, max(1, band_height))
    if workers <= 1:
        for band in bands:
            _render_band(band)
    else:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="band") as pool:
            list(pool.map(_render_band, bands))

    pixels = np.asarray(palette)[counts]
    if draw_axes:
        _draw_axes(pixels, geometry)

    logger.debug("render done")
    return Frame(
        pixels=pixels,
        iterations=counts,
        magnification=magnification,
        window=geometry.window,
        max_iterations=max_iterations,
    )


def render_state(state: RenderState, **options) -> Frame:
    """render_frame() for the view described by a RenderState."""
    return render_frame(
        geometry=state.geometry,
        palette=state.palette,
        max_iterations=state.max_iterations,
        magnification=state.magnification,
        **options,
    )
