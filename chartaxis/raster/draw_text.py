from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path
from typing import Literal

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from chartaxis.fonts import DEFAULT_FONT_FAMILY, FontSpec
from chartaxis.geometry import Point, Size
from chartaxis.raster.canvas import RGBA, ClipBox, blend_patch


LOGGER = logging.getLogger(__name__)

TextAlign = Literal["left", "center", "right"]

MONO_FONT_FALLBACK_PATTERNS = (
    "comicmono",
    "comic mono",
    "menlo",
    "monaco",
    "courier new",
    "courier",
    "dejavusansmono",
    "dejavu sans mono",
)


def measure_text(text: str, font: FontSpec, max_width: float | None = None) -> Size:
    """Size of `text` laid out with `font`, wrapped at `max_width` when given."""
    pil_font = _load_font(font.family, font.size_px, font.file_path)
    lines = _layout_lines(text, pil_font, max_width)
    if not lines:
        return Size(width=0.0, height=float(_line_height(pil_font)))
    width = max(_line_width(pil_font, line) for line in lines)
    return Size(width=float(width), height=float(_line_height(pil_font) * len(lines)))


def line_height(font: FontSpec) -> float:
    return float(_line_height(_load_font(font.family, font.size_px, font.file_path)))


def draw_text(
    dst: np.ndarray,
    point: Point,
    text: str,
    color: RGBA,
    *,
    font: FontSpec,
    anchor: tuple[float, float] = (0.0, 0.0),
    align: TextAlign = "left",
    angle_deg: float = 0.0,
    max_width: float | None = None,
    clip: ClipBox | None = None,
) -> None:
    """Draw `text` so that `anchor` (fractions of its rotated bounding box) sits at `point`.

    For unrotated text, `align` shifts the box like a text anchor: right-aligned
    text ends at `point.x`, centered text is centered on it.
    """
    if not text:
        return
    pil_font = _load_font(font.family, font.size_px, font.file_path)
    mask = _render_mask(text, pil_font, max_width, align)
    if angle_deg % 360 != 0:
        mask = np.asarray(
            Image.fromarray(mask).rotate(-angle_deg, resample=Image.Resampling.BILINEAR, expand=True),
            dtype=np.uint8,
        )
    h, w = mask.shape
    x = point.x - w * anchor[0]
    y = point.y - h * anchor[1]
    if angle_deg % 360 == 0:
        if align == "right":
            x = point.x - w
        elif align == "center":
            x = point.x - w / 2.0

    patch = np.zeros((h, w, 4), dtype=np.float32)
    patch[:, :, 0] = color[0]
    patch[:, :, 1] = color[1]
    patch[:, :, 2] = color[2]
    patch[:, :, 3] = mask.astype(np.float32) * (color[3] / 255.0)
    blend_patch(dst, int(round(x)), int(round(y)), patch, clip if clip is not None else (0, 0, dst.shape[1], dst.shape[0]))


def _line_height(font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> int:
    if isinstance(font, ImageFont.FreeTypeFont):
        ascent, descent = font.getmetrics()
        return max(1, int(ascent + descent))
    _, top, _, bottom = font.getbbox("Ag")
    return max(1, int(bottom - top))


def _line_width(font: ImageFont.FreeTypeFont | ImageFont.ImageFont, line: str) -> int:
    if not line:
        return 0
    left, _, right, _ = font.getbbox(line)
    return max(0, int(right - left))


def _layout_lines(
    text: str,
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    max_width: float | None,
) -> list[str]:
    if not text:
        return []
    paragraphs = text.split("\n")
    if max_width is None or max_width <= 0:
        return paragraphs
    lines: list[str] = []
    for paragraph in paragraphs:
        words = paragraph.split(" ")
        current = ""
        for word in words:
            candidate = word if not current else f"{current} {word}"
            if current and _line_width(font, candidate) > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        lines.append(current)
    return lines


@lru_cache(maxsize=128)
def _render_mask(
    text: str,
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    max_width: float | None,
    align: TextAlign,
) -> np.ndarray:
    lines = _layout_lines(text, font, max_width)
    if not lines:
        return np.zeros((1, 1), dtype=np.uint8)
    lh = _line_height(font)
    widths = [_line_width(font, line) for line in lines]
    width = max(1, max(widths))
    height = max(1, lh * len(lines))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    for i, (line, lw) in enumerate(zip(lines, widths)):
        if not line:
            continue
        left, _, _, _ = font.getbbox(line)
        if align == "right":
            x = width - lw
        elif align == "center":
            x = (width - lw) // 2
        else:
            x = 0
        draw.text((x - left, i * lh), line, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def _load_font(
    font_family: str,
    font_size_px: float,
    file_path: str | None = None,
) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = Path(file_path) if file_path else _resolve_font_path(font_family)
    if font_path is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError as exc:
        LOGGER.warning("font %s could not be loaded, using default: %s", font_path, exc)
        return ImageFont.load_default(size=size)


def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + MONO_FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            name = path.name.lower().replace(" ", "")
            if p in stem or p in name:
                return path
    return None
