"""Software rasterization primitives for rect-to-rect texture blits."""

from .blitter import VERTEX_COLOR, draw_rect, emit_quad
from .context import FrontFace, GraphicsContext
from .geometry import (
    DEFAULT_QUAD_POINTS,
    FULL_UV_RECT,
    Rect,
    normalized_rect_to_pixel_rect,
    rect_to_corner_points,
    signed_area,
)
from .material import BlendMode, DrawMaterial
from .surface import TRANSPARENT, OutputSurface
from .texture import FilterMode, Texture, WrapMode

__all__ = [
    "BlendMode",
    "DEFAULT_QUAD_POINTS",
    "DrawMaterial",
    "FULL_UV_RECT",
    "FilterMode",
    "FrontFace",
    "GraphicsContext",
    "OutputSurface",
    "Rect",
    "TRANSPARENT",
    "Texture",
    "VERTEX_COLOR",
    "WrapMode",
    "draw_rect",
    "emit_quad",
    "normalized_rect_to_pixel_rect",
    "rect_to_corner_points",
    "signed_area",
]
