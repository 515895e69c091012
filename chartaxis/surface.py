from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, Literal, Protocol, Sequence

from chartaxis.fonts import FontSpec
from chartaxis.geometry import Point, Rect, Segment
from chartaxis.raster.canvas import RGBA


TextAlign = Literal["left", "center", "right"]


class DrawingSurface(Protocol):
    """Immediate-mode 2-D drawing target the axis renderer issues calls against.

    Clipping and stroke/fill settings are part of the saved state; clips
    intersect with the current clip.
    """

    def save_state(self) -> None: ...

    def restore_state(self) -> None: ...

    def clip_to_rect(self, rect: Rect) -> None: ...

    def set_stroke(
        self,
        color: RGBA,
        width: float,
        *,
        dash_lengths: Sequence[float] | None = None,
        dash_phase: float = 0.0,
    ) -> None: ...

    def set_fill_color(self, color: RGBA) -> None: ...

    def stroke_segments(self, segments: Sequence[Segment]) -> None: ...

    def fill_rect(self, rect: Rect) -> None: ...

    def draw_linear_gradient(self, colors: Sequence[RGBA], start: Point, end: Point) -> None: ...

    def draw_radial_gradient(
        self,
        colors: Sequence[RGBA],
        center: Point,
        start_radius: float,
        end_radius: float,
    ) -> None: ...

    def draw_text(
        self,
        text: str,
        point: Point,
        *,
        font: FontSpec,
        color: RGBA,
        anchor: tuple[float, float] = (0.0, 0.0),
        align: TextAlign = "left",
        angle_deg: float = 0.0,
        max_width: float | None = None,
    ) -> None: ...

    def draw_image(self, image: Any, rect: Rect, *, tint: RGBA | None = None) -> None: ...


@contextmanager
def saved_state(surface: DrawingSurface) -> Iterator[DrawingSurface]:
    surface.save_state()
    try:
        yield surface
    finally:
        surface.restore_state()


@dataclass(frozen=True)
class SurfaceCall:
    name: str
    args: dict[str, Any]
    clip: Rect | None = None


@dataclass
class RecordingSurface:
    """Headless surface that records every drawing call with the clip active at the time."""

    calls: list[SurfaceCall] = field(default_factory=list)
    _clip: Rect | None = None
    _stack: list[Rect | None] = field(default_factory=list)

    @property
    def depth(self) -> int:
        return len(self._stack)

    def names(self) -> list[str]:
        return [call.name for call in self.calls]

    def calls_named(self, name: str) -> list[SurfaceCall]:
        return [call for call in self.calls if call.name == name]

    def _record(self, name: str, **args: Any) -> None:
        self.calls.append(SurfaceCall(name=name, args=args, clip=self._clip))

    def save_state(self) -> None:
        self._stack.append(self._clip)
        self._record("save_state")

    def restore_state(self) -> None:
        if not self._stack:
            raise RuntimeError("restore_state without matching save_state")
        self._clip = self._stack.pop()
        self._record("restore_state")

    def clip_to_rect(self, rect: Rect) -> None:
        self._clip = rect if self._clip is None else self._clip.intersection(rect)
        self._record("clip_to_rect", rect=rect)

    def set_stroke(
        self,
        color: RGBA,
        width: float,
        *,
        dash_lengths: Sequence[float] | None = None,
        dash_phase: float = 0.0,
    ) -> None:
        dash = tuple(dash_lengths) if dash_lengths else None
        self._record("set_stroke", color=color, width=width, dash_lengths=dash, dash_phase=dash_phase)

    def set_fill_color(self, color: RGBA) -> None:
        self._record("set_fill_color", color=color)

    def stroke_segments(self, segments: Sequence[Segment]) -> None:
        self._record("stroke_segments", segments=list(segments))

    def fill_rect(self, rect: Rect) -> None:
        self._record("fill_rect", rect=rect)

    def draw_linear_gradient(self, colors: Sequence[RGBA], start: Point, end: Point) -> None:
        self._record("draw_linear_gradient", colors=tuple(colors), start=start, end=end)

    def draw_radial_gradient(
        self,
        colors: Sequence[RGBA],
        center: Point,
        start_radius: float,
        end_radius: float,
    ) -> None:
        self._record(
            "draw_radial_gradient",
            colors=tuple(colors),
            center=center,
            start_radius=start_radius,
            end_radius=end_radius,
        )

    def draw_text(
        self,
        text: str,
        point: Point,
        *,
        font: FontSpec,
        color: RGBA,
        anchor: tuple[float, float] = (0.0, 0.0),
        align: TextAlign = "left",
        angle_deg: float = 0.0,
        max_width: float | None = None,
    ) -> None:
        self._record(
            "draw_text",
            text=text,
            point=point,
            font=font,
            color=color,
            anchor=anchor,
            align=align,
            angle_deg=angle_deg,
            max_width=max_width,
        )

    def draw_image(self, image: Any, rect: Rect, *, tint: RGBA | None = None) -> None:
        self._record("draw_image", image=image, rect=rect, tint=tint)
