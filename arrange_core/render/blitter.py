from __future__ import annotations

import logging
import math
from typing import Sequence

import torch

from .context import FrontFace, GraphicsContext
from .geometry import DEFAULT_QUAD_POINTS, Point, Rect, signed_area
from .material import DrawMaterial
from .surface import Color
from .texture import Texture

LOGGER = logging.getLogger(__name__)

# Emitted on every vertex; inert unless the material opts into vertex color.
VERTEX_COLOR: Color = (0, 0, 0, 0)


def draw_rect(
    context: GraphicsContext,
    material: DrawMaterial,
    texture: Texture | None,
    viewport: Rect,
    uv_corners: Sequence[Point],
) -> int:
    """Draw ``texture`` into the pixel rect ``viewport`` using one UV per quad corner.

    ``uv_corners`` pairs by index with ``DEFAULT_QUAD_POINTS`` (bottom-left,
    top-left, top-right, bottom-right). Returns the number of pixels written.
    """
    material.main_texture = texture
    material.set_pass(context, 0)
    context.set_viewport(viewport)
    positions: Sequence[Point] = DEFAULT_QUAD_POINTS
    uvs: Sequence[Point] = tuple(uv_corners)
    if context.front_face is FrontFace.COUNTER_CLOCKWISE:
        positions = positions[::-1]
        uvs = uvs[::-1]
    return emit_quad(context, positions, uvs, VERTEX_COLOR)


def emit_quad(
    context: GraphicsContext,
    positions: Sequence[Point],
    uvs: Sequence[Point],
    color: Color,
) -> int:
    material = context.active_material
    if material is None:
        raise RuntimeError("set_pass must be called before emit_quad")
    if len(positions) != 4 or len(uvs) != 4:
        raise ValueError("a quad needs exactly 4 positions and 4 uvs")

    corners = [context.to_pixel(p) for p in positions]
    if not all(math.isfinite(c) for point in corners for c in point):
        LOGGER.debug("quad has non-finite corners; skipped")
        return 0
    area = signed_area(corners)
    if area == 0.0:
        LOGGER.debug("quad has zero area; skipped")
        return 0
    clockwise = area < 0.0
    if clockwise != (context.front_face is FrontFace.CLOCKWISE):
        LOGGER.debug("quad is back-facing; culled")
        return 0
    texture = material.main_texture
    if texture is None:
        LOGGER.debug("no texture bound; quad skipped")
        return 0

    xs = [p[0] for p in corners]
    ys = [p[1] for p in corners]
    left, right = min(xs), max(xs)
    bottom, top = min(ys), max(ys)
    uv_bl, uv_tl, uv_tr, uv_br = _uvs_by_corner(corners, uvs, left, right, bottom, top)

    target = context.render_target
    vp = context.viewport
    clip_left = max(left, min(vp.x, vp.x_max))
    clip_right = min(right, max(vp.x, vp.x_max))
    clip_bottom = max(bottom, min(vp.y, vp.y_max))
    clip_top = min(top, max(vp.y, vp.y_max))
    # A pixel is covered when its center lies in [min, max).
    x0 = max(0, math.ceil(clip_left - 0.5))
    x1 = min(target.width, math.ceil(clip_right - 0.5))
    y0 = max(0, math.ceil(clip_bottom - 0.5))
    y1 = min(target.height, math.ceil(clip_top - 0.5))
    if x1 <= x0 or y1 <= y0:
        LOGGER.debug("quad covers no pixels of the %dx%d target", target.width, target.height)
        return 0

    px = torch.arange(x0, x1, dtype=torch.float32) + 0.5
    py = torch.arange(y1 - 1, y0 - 1, -1, dtype=torch.float32) + 0.5
    h = py.shape[0]
    w = px.shape[0]
    s = ((px - left) / (right - left)).unsqueeze(0).expand(h, w)
    t = ((py - bottom) / (top - bottom)).unsqueeze(1).expand(h, w)
    w_bl = (1.0 - s) * (1.0 - t)
    w_tl = (1.0 - s) * t
    w_tr = s * t
    w_br = s * (1.0 - t)
    u = w_bl * uv_bl[0] + w_tl * uv_tl[0] + w_tr * uv_tr[0] + w_br * uv_br[0]
    v = w_bl * uv_bl[1] + w_tl * uv_tl[1] + w_tr * uv_tr[1] + w_br * uv_br[1]

    shaded = material.shade(texture.sample(u, v), color)
    patch = target.region(x0, y0, x1, y1)
    patch.copy_(material.blend(patch, shaded))
    return h * w


def _uvs_by_corner(
    corners: Sequence[Point],
    uvs: Sequence[Point],
    left: float,
    right: float,
    bottom: float,
    top: float,
) -> tuple[Point, Point, Point, Point]:
    mid_x = (left + right) / 2.0
    mid_y = (bottom + top) / 2.0
    tol = 1e-6 * max(1.0, right - left, top - bottom)
    by_corner: dict[tuple[bool, bool], Point] = {}
    for (x, y), uv in zip(corners, uvs):
        if min(abs(x - left), abs(x - right)) > tol or min(abs(y - bottom), abs(y - top)) > tol:
            raise ValueError("emit_quad only rasterizes axis-aligned rectangles")
        by_corner[(x > mid_x, y > mid_y)] = uv
    if len(by_corner) != 4:
        raise ValueError("quad corners must be distinct")
    return (
        by_corner[(False, False)],
        by_corner[(False, True)],
        by_corner[(True, True)],
        by_corner[(True, False)],
    )
