from chartaxis.axis import Block, ImageInset, LimitLabelPosition, LimitLine, XAxis, XAxisLabelPosition
from chartaxis.errors import AxisConfigError
from chartaxis.fonts import FontSpec
from chartaxis.geometry import Point, Rect, Size
from chartaxis.layout import (
    AxisLabelPlacement,
    BlockGeometry,
    GridLineSegment,
    LimitLineGeometry,
    compute_axis_label_positions,
    compute_block_geometry,
    compute_grid_line_segments,
    compute_limit_line_geometry,
)
from chartaxis.matrix import AffineMatrix
from chartaxis.raster import RasterSurface
from chartaxis.renderer import XAxisRenderer
from chartaxis.surface import DrawingSurface, RecordingSurface
from chartaxis.transform import Transformer, build_transformer
from chartaxis.viewport import ViewPortHandler

__all__ = [
    "AffineMatrix",
    "AxisConfigError",
    "AxisLabelPlacement",
    "Block",
    "BlockGeometry",
    "DrawingSurface",
    "FontSpec",
    "GridLineSegment",
    "ImageInset",
    "LimitLabelPosition",
    "LimitLine",
    "LimitLineGeometry",
    "Point",
    "RasterSurface",
    "Rect",
    "RecordingSurface",
    "Size",
    "Transformer",
    "ViewPortHandler",
    "XAxis",
    "XAxisLabelPosition",
    "XAxisRenderer",
    "build_transformer",
    "compute_axis_label_positions",
    "compute_block_geometry",
    "compute_grid_line_segments",
    "compute_limit_line_geometry",
]
