from .canvas import RGBA, new_canvas
from .draw_lines import dash_segments, draw_segment
from .draw_text import line_height, measure_text
from .surface import RasterSurface

__all__ = [
    "RGBA",
    "RasterSurface",
    "dash_segments",
    "draw_segment",
    "line_height",
    "measure_text",
    "new_canvas",
]
