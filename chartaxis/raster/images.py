from __future__ import annotations

import numpy as np
from PIL import Image, ImageChops

from chartaxis.geometry import Rect
from chartaxis.raster.canvas import RGBA, ClipBox, blend_patch


def tint_image(image: Image.Image, color: RGBA) -> Image.Image:
    """Multiply-blend `color` over the image, keeping the image's own alpha mask."""
    src = image.convert("RGBA")
    solid = Image.new("RGBA", src.size, (color[0], color[1], color[2], 255))
    tinted = ImageChops.multiply(src, solid)
    alpha = src.getchannel("A")
    if color[3] < 255:
        alpha = alpha.point(lambda v: v * color[3] // 255)
    tinted.putalpha(alpha)
    return tinted


def draw_image(
    dst: np.ndarray,
    image: Image.Image,
    rect: Rect,
    *,
    tint: RGBA | None = None,
    clip: ClipBox | None = None,
) -> None:
    w = int(round(rect.width))
    h = int(round(rect.height))
    if w <= 0 or h <= 0:
        return
    src = tint_image(image, tint) if tint is not None else image.convert("RGBA")
    if src.size != (w, h):
        src = src.resize((w, h), resample=Image.Resampling.BILINEAR)
    patch = np.asarray(src, dtype=np.float32)
    blend_patch(dst, int(round(rect.x)), int(round(rect.y)), patch, clip if clip is not None else (0, 0, dst.shape[1], dst.shape[0]))
