from __future__ import annotations

from dataclasses import dataclass
import logging

from arrange_core.render.blitter import draw_rect
from arrange_core.render.context import GraphicsContext
from arrange_core.render.geometry import (
    DEFAULT_QUAD_POINTS,
    Rect,
    normalized_rect_to_pixel_rect,
    rect_to_corner_points,
)
from arrange_core.render.surface import TRANSPARENT, OutputSurface

from .config import ArrangeConfig, RenderMode, coerce_render_mode

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameResult:
    mode: RenderMode
    draw_count: int
    width: int
    height: int


def resolve_render_mode(requested: RenderMode, viewport_count: int, uv_count: int) -> RenderMode:
    """Effective mode for one frame; mismatched rect counts fall back to DEFAULT."""
    if viewport_count != uv_count:
        LOGGER.error(
            "viewport rects length must equal uv rects length; viewport_rects=%d uv_rects=%d",
            viewport_count,
            uv_count,
        )
        return RenderMode.DEFAULT
    return requested


def render_frame(
    config: ArrangeConfig,
    destination: OutputSurface | None,
    context: GraphicsContext,
) -> FrameResult:
    """Clear ``destination`` (or ``context.display``) and draw the configured rects into it.

    The config is read once at frame start. Hosts may assign plain tuples or
    mode strings between frames; they are converted here the same way the
    constructor converts them.
    """
    target = destination if destination is not None else context.display
    width, height = target.width, target.height

    viewport_rects = tuple(Rect.from_value(r) for r in config.viewport_rects)
    uv_rects = tuple(Rect.from_value(r) for r in config.uv_rects)
    requested = coerce_render_mode(config.render_mode)
    mode = resolve_render_mode(requested, len(viewport_rects), len(uv_rects))

    context.set_render_target(destination)
    context.clear(TRANSPARENT)
    draw_count = 0
    with context.scoped_matrix():
        context.load_ortho()
        if mode is RenderMode.DEFAULT:
            full = Rect(0.0, 0.0, float(width), float(height))
            draw_rect(context, config.material, config.texture, full, DEFAULT_QUAD_POINTS)
            draw_count = 1
        else:
            for viewport_uv, uv_rect in zip(viewport_rects, uv_rects):
                viewport = normalized_rect_to_pixel_rect(viewport_uv, width, height)
                draw_rect(context, config.material, config.texture, viewport, rect_to_corner_points(uv_rect))
                draw_count += 1
    return FrameResult(mode=mode, draw_count=draw_count, width=width, height=height)
