from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]
# Half-open pixel box (x0, y0, x1, y1) that draws are restricted to.
ClipBox = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 0)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def full_clip(dst: np.ndarray) -> ClipBox:
    return (0, 0, dst.shape[1], dst.shape[0])


def intersect_clip(a: ClipBox, b: ClipBox) -> ClipBox:
    x0 = max(a[0], b[0])
    y0 = max(a[1], b[1])
    x1 = max(x0, min(a[2], b[2]))
    y1 = max(y0, min(a[3], b[3]))
    return (x0, y0, x1, y1)


def blend_patch(dst: np.ndarray, x0: int, y0: int, rgba: np.ndarray, clip: ClipBox) -> None:
    """Alpha-blend a float RGBA patch (values 0..255) onto `dst` at (x0, y0)."""
    h, w = rgba.shape[:2]
    cx0, cy0, cx1, cy1 = intersect_clip(clip, full_clip(dst))
    xa = max(x0, cx0)
    ya = max(y0, cy0)
    xb = min(x0 + w, cx1)
    yb = min(y0 + h, cy1)
    if xa >= xb or ya >= yb:
        return
    src = rgba[ya - y0 : yb - y0, xa - x0 : xb - x0].astype(np.float32)
    view = dst[ya:yb, xa:xb]
    alpha = src[:, :, 3:4] / 255.0
    inv = 1.0 - alpha
    view[:, :, :3] = np.clip(src[:, :, :3] * alpha + view[:, :, :3].astype(np.float32) * inv, 0, 255).astype(np.uint8)
    out_a = alpha[:, :, 0] * 255.0 + view[:, :, 3].astype(np.float32) * inv[:, :, 0]
    view[:, :, 3] = np.clip(out_a, 0, 255).astype(np.uint8)


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA, clip: ClipBox | None = None) -> None:
    x0, y0, x1, y1 = clip if clip is not None else full_clip(dst)
    if y < max(0, y0) or y >= min(dst.shape[0], y1) or x < max(0, x0) or x >= min(dst.shape[1], x1):
        return
    a = color[3] / 255.0
    inv = 1.0 - a
    current = dst[y, x, :3].astype(np.float32)
    dst[y, x, 0:3] = (np.asarray(color[0:3], dtype=np.float32) * a + current * inv).astype(np.uint8)
    dst[y, x, 3] = max(int(dst[y, x, 3]), color[3])


def fill_box(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, clip: ClipBox | None = None) -> None:
    """Fill the half-open box [x0, x1) x [y0, y1)."""
    cx0, cy0, cx1, cy1 = intersect_clip(clip if clip is not None else full_clip(dst), full_clip(dst))
    xa = max(cx0, min(x0, x1))
    xb = min(cx1, max(x0, x1))
    ya = max(cy0, min(y0, y1))
    yb = min(cy1, max(y0, y1))
    if xa >= xb or ya >= yb:
        return
    patch = np.empty((yb - ya, xb - xa, 4), dtype=np.float32)
    patch[:, :] = np.asarray(color, dtype=np.float32)
    blend_patch(dst, xa, ya, patch, (xa, ya, xb, yb))
