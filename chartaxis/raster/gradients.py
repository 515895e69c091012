from __future__ import annotations

from typing import Sequence

import numpy as np

from chartaxis.geometry import Point
from chartaxis.raster.canvas import RGBA, ClipBox, blend_patch, full_clip, intersect_clip


def draw_linear_gradient(
    dst: np.ndarray,
    colors: Sequence[RGBA],
    start: Point,
    end: Point,
    *,
    clip: ClipBox | None = None,
) -> None:
    """Fill the clip box with a gradient projected onto the `start -> end` axis.

    Pixels before `start` take the first color and pixels past `end` take the last.
    """
    box = intersect_clip(clip if clip is not None else full_clip(dst), full_clip(dst))
    x0, y0, x1, y1 = box
    if x0 >= x1 or y0 >= y1 or not colors:
        return
    ys, xs = np.mgrid[y0:y1, x0:x1].astype(np.float32)
    dx = end.x - start.x
    dy = end.y - start.y
    length_sq = dx * dx + dy * dy
    if length_sq <= 0:
        t = np.zeros_like(xs)
    else:
        t = ((xs + 0.5 - start.x) * dx + (ys + 0.5 - start.y) * dy) / length_sq
    blend_patch(dst, x0, y0, _interpolate(colors, t), box)


def draw_radial_gradient(
    dst: np.ndarray,
    colors: Sequence[RGBA],
    center: Point,
    start_radius: float,
    end_radius: float,
    *,
    clip: ClipBox | None = None,
) -> None:
    """Concentric gradient from `start_radius` (first color) to `end_radius` (last color).

    Nothing is drawn outside the larger of the two radii.
    """
    if not colors:
        return
    outer = max(start_radius, end_radius)
    bounds = (
        int(np.floor(center.x - outer)),
        int(np.floor(center.y - outer)),
        int(np.ceil(center.x + outer)) + 1,
        int(np.ceil(center.y + outer)) + 1,
    )
    box = intersect_clip(intersect_clip(clip if clip is not None else full_clip(dst), full_clip(dst)), bounds)
    x0, y0, x1, y1 = box
    if x0 >= x1 or y0 >= y1:
        return
    ys, xs = np.mgrid[y0:y1, x0:x1].astype(np.float32)
    r = np.hypot(xs + 0.5 - center.x, ys + 0.5 - center.y)
    span = end_radius - start_radius
    t = np.zeros_like(r) if span == 0 else (r - start_radius) / span
    patch = _interpolate(colors, t)
    patch[r > outer, 3] = 0.0
    blend_patch(dst, x0, y0, patch, box)


def _interpolate(colors: Sequence[RGBA], t: np.ndarray) -> np.ndarray:
    stops = np.asarray(colors, dtype=np.float32)
    t = np.clip(t, 0.0, 1.0)
    if stops.shape[0] == 1:
        out = np.empty(t.shape + (4,), dtype=np.float32)
        out[:, :] = stops[0]
        return out
    positions = np.linspace(0.0, 1.0, stops.shape[0], dtype=np.float32)
    out = np.empty(t.shape + (4,), dtype=np.float32)
    for channel in range(4):
        out[:, :, channel] = np.interp(t, positions, stops[:, channel])
    return out
