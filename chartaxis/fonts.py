from __future__ import annotations

from dataclasses import dataclass

from chartaxis.errors import AxisConfigError


DEFAULT_FONT_FAMILY = "Comic Mono"
DEFAULT_FONT_SIZE_PX = 10.0


@dataclass(frozen=True)
class FontSpec:
    """Font family lookup name or explicit file path, plus pixel size.

    If `file_path` is set, it wins over family lookup.
    """

    family: str = DEFAULT_FONT_FAMILY
    size_px: float = DEFAULT_FONT_SIZE_PX
    file_path: str | None = None

    def __post_init__(self) -> None:
        if not self.family.strip() and self.file_path is None:
            raise AxisConfigError("FontSpec requires `family` when `file_path` is not set")
        if self.size_px <= 0:
            raise AxisConfigError("FontSpec `size_px` must be > 0")
