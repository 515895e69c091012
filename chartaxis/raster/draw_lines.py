from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from chartaxis.raster.canvas import RGBA, ClipBox, draw_pixel


def draw_segment(
    dst: np.ndarray,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    color: RGBA,
    *,
    width: float = 1.0,
    clip: ClipBox | None = None,
    dash_lengths: Sequence[float] | None = None,
    dash_phase: float = 0.0,
) -> None:
    pieces = dash_segments(x0, y0, x1, y1, dash_lengths, dash_phase) if dash_lengths else [(x0, y0, x1, y1)]
    brush = max(1, int(round(width)))
    for sx0, sy0, sx1, sy1 in pieces:
        _draw_line_segment(
            dst,
            int(round(sx0)),
            int(round(sy0)),
            int(round(sx1)),
            int(round(sy1)),
            color=color,
            width=brush,
            clip=clip,
        )


def dash_segments(
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    lengths: Sequence[float] | None,
    phase: float = 0.0,
) -> list[tuple[float, float, float, float]]:
    """Split a segment into its "on" pieces for a dash pattern (on, off, on, ...)."""
    total = math.hypot(x1 - x0, y1 - y0)
    pattern = [float(v) for v in (lengths or ())]
    cycle = sum(pattern)
    if total == 0 or not pattern or cycle <= 0:
        return [(x0, y0, x1, y1)]
    ux = (x1 - x0) / total
    uy = (y1 - y0) / total

    # Walk the pattern from `phase` so the first piece may start mid-dash.
    offset = phase % cycle
    idx = 0
    while offset >= pattern[idx]:
        offset -= pattern[idx]
        idx = (idx + 1) % len(pattern)
    remaining = pattern[idx] - offset

    out: list[tuple[float, float, float, float]] = []
    pos = 0.0
    while pos < total:
        step = min(remaining, total - pos)
        if idx % 2 == 0 and step > 0:
            out.append((x0 + ux * pos, y0 + uy * pos, x0 + ux * (pos + step), y0 + uy * (pos + step)))
        pos += step
        idx = (idx + 1) % len(pattern)
        remaining = pattern[idx]
    return out


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int, clip: ClipBox | None) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width, clip=clip)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int, clip: ClipBox | None) -> None:
    radius = max(0, width // 2)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color, clip)
