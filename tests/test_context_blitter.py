from __future__ import annotations

import os
import unittest

import torch

from arrange_core.render.blitter import VERTEX_COLOR, draw_rect, emit_quad
from arrange_core.render.context import IDENTITY, ORTHO_UNIT, FrontFace, GraphicsContext
from arrange_core.render.geometry import DEFAULT_QUAD_POINTS, Rect, rect_to_corner_points
from arrange_core.render.material import BlendMode, DrawMaterial
from arrange_core.render.surface import OutputSurface
from arrange_core.render.texture import FilterMode, Texture

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
CLEAR = (0, 0, 0, 0)


def _red_blue_texture() -> Texture:
    rgba = torch.zeros((1, 2, 4), dtype=torch.uint8)
    rgba[0, 0] = torch.tensor(RED, dtype=torch.uint8)
    rgba[0, 1] = torch.tensor(BLUE, dtype=torch.uint8)
    return Texture(rgba, filter_mode=FilterMode.NEAREST)


def _bound_context(surface: OutputSurface, **kwargs) -> GraphicsContext:
    ctx = GraphicsContext(display_width=4, display_height=4, **kwargs)
    ctx.set_render_target(surface)
    ctx.load_ortho()
    return ctx


class GraphicsContextTests(unittest.TestCase):
    def test_scoped_matrix_restores_on_normal_exit(self) -> None:
        ctx = GraphicsContext(display_width=8, display_height=8)
        with ctx.scoped_matrix():
            ctx.load_ortho()
            self.assertEqual(ctx.matrix, ORTHO_UNIT)
            self.assertEqual(ctx.matrix_depth, 1)
        self.assertEqual(ctx.matrix, IDENTITY)
        self.assertEqual(ctx.matrix_depth, 0)

    def test_scoped_matrix_restores_on_exception(self) -> None:
        ctx = GraphicsContext(display_width=8, display_height=8)
        with self.assertRaises(KeyError):
            with ctx.scoped_matrix():
                ctx.load_ortho()
                raise KeyError("boom")
        self.assertEqual(ctx.matrix, IDENTITY)
        self.assertEqual(ctx.matrix_depth, 0)

    def test_pop_without_push_raises(self) -> None:
        ctx = GraphicsContext(display_width=2, display_height=2)
        with self.assertRaises(RuntimeError):
            ctx.pop_matrix()

    def test_set_render_target_resets_viewport(self) -> None:
        ctx = GraphicsContext(display_width=10, display_height=6)
        surface = OutputSurface(3, 5)
        ctx.set_render_target(surface)
        self.assertIs(ctx.render_target, surface)
        self.assertEqual(ctx.viewport, Rect(0.0, 0.0, 3.0, 5.0))
        ctx.set_render_target(None)
        self.assertIs(ctx.render_target, ctx.display)
        self.assertEqual(ctx.viewport, Rect(0.0, 0.0, 10.0, 6.0))

    def test_ortho_maps_unit_square_onto_viewport(self) -> None:
        ctx = GraphicsContext(display_width=100, display_height=100)
        ctx.set_viewport(Rect(10.0, 20.0, 30.0, 40.0))
        ctx.load_ortho()
        self.assertEqual(ctx.to_pixel((0.0, 0.0)), (10.0, 20.0))
        self.assertEqual(ctx.to_pixel((1.0, 1.0)), (40.0, 60.0))
        ctx.load_identity()
        # Identity addresses normalized device coordinates, so (0, 0) is the viewport center.
        self.assertEqual(ctx.to_pixel((0.0, 0.0)), (25.0, 40.0))

    def test_from_env_reads_display_size(self) -> None:
        old_w = os.environ.get("ARRANGE_DISPLAY_WIDTH")
        old_h = os.environ.get("ARRANGE_DISPLAY_HEIGHT")
        os.environ["ARRANGE_DISPLAY_WIDTH"] = "32"
        os.environ["ARRANGE_DISPLAY_HEIGHT"] = "not-a-number"
        try:
            ctx = GraphicsContext.from_env()
            self.assertEqual((ctx.display.width, ctx.display.height), (32, 480))
        finally:
            for key, old in (("ARRANGE_DISPLAY_WIDTH", old_w), ("ARRANGE_DISPLAY_HEIGHT", old_h)):
                if old is None:
                    os.environ.pop(key, None)
                else:
                    os.environ[key] = old


class BlitterTests(unittest.TestCase):
    def test_draw_rect_fills_only_viewport(self) -> None:
        surface = OutputSurface(4, 4)
        ctx = _bound_context(surface)
        material = DrawMaterial()
        written = draw_rect(
            ctx,
            material,
            _red_blue_texture(),
            Rect(1.0, 1.0, 2.0, 2.0),
            rect_to_corner_points(Rect(0.0, 0.0, 0.5, 1.0)),
        )
        self.assertEqual(written, 4)
        self.assertIs(ctx.active_material, material)
        self.assertIsNotNone(material.main_texture)
        for x in range(4):
            for y in range(4):
                expected = RED if 1 <= x < 3 and 1 <= y < 3 else CLEAR
                self.assertEqual(surface.pixel(x, y), expected, (x, y))

    def test_uv_corners_pair_with_vertices_by_index(self) -> None:
        surface = OutputSurface(2, 1)
        ctx = _bound_context(surface)
        # Mirrored UVs: left vertices sample u=1, right vertices sample u=0.
        mirrored = ((1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0))
        draw_rect(ctx, DrawMaterial(), _red_blue_texture(), Rect(0.0, 0.0, 2.0, 1.0), mirrored)
        self.assertEqual(surface.pixel(0, 0), BLUE)
        self.assertEqual(surface.pixel(1, 0), RED)

    def test_null_texture_is_inert(self) -> None:
        surface = OutputSurface(2, 2)
        ctx = _bound_context(surface)
        written = draw_rect(ctx, DrawMaterial(), None, Rect(0.0, 0.0, 2.0, 2.0), DEFAULT_QUAD_POINTS)
        self.assertEqual(written, 0)
        self.assertTrue(torch.all(surface.read_snapshot() == 0))

    def test_degenerate_viewports_write_nothing(self) -> None:
        surface = OutputSurface(4, 4)
        ctx = _bound_context(surface)
        tex = _red_blue_texture()
        for viewport in (
            Rect(1.0, 1.0, 0.0, 2.0),
            Rect(3.0, 1.0, -2.0, 2.0),
            Rect(10.0, 10.0, 2.0, 2.0),
            Rect(0.0, 0.0, float("inf"), 1.0),
        ):
            self.assertEqual(draw_rect(ctx, DrawMaterial(), tex, viewport, DEFAULT_QUAD_POINTS), 0)
        self.assertTrue(torch.all(surface.read_snapshot() == 0))

    def test_viewport_partially_outside_is_clipped(self) -> None:
        surface = OutputSurface(4, 4)
        ctx = _bound_context(surface)
        tex = Texture.solid(1, 1, RED)
        written = draw_rect(ctx, DrawMaterial(), tex, Rect(-2.0, 2.0, 4.0, 4.0), DEFAULT_QUAD_POINTS)
        self.assertEqual(written, 4)
        self.assertEqual(surface.pixel(0, 3), RED)
        self.assertEqual(surface.pixel(1, 2), RED)
        self.assertEqual(surface.pixel(2, 2), CLEAR)

    def test_counter_clockwise_front_face_matches_clockwise_output(self) -> None:
        tex = _red_blue_texture()
        uvs = rect_to_corner_points(Rect(0.0, 0.0, 1.0, 1.0))
        cw_surface = OutputSurface(4, 2)
        ccw_surface = OutputSurface(4, 2)
        draw_rect(_bound_context(cw_surface), DrawMaterial(), tex, Rect(0.0, 0.0, 4.0, 2.0), uvs)
        draw_rect(
            _bound_context(ccw_surface, front_face=FrontFace.COUNTER_CLOCKWISE),
            DrawMaterial(),
            tex,
            Rect(0.0, 0.0, 4.0, 2.0),
            uvs,
        )
        self.assertTrue(torch.equal(cw_surface.read_snapshot(), ccw_surface.read_snapshot()))
        self.assertEqual(cw_surface.pixel(0, 0), RED)
        self.assertEqual(cw_surface.pixel(3, 1), BLUE)

    def test_back_facing_quad_is_culled(self) -> None:
        surface = OutputSurface(2, 2)
        ctx = _bound_context(surface, front_face=FrontFace.COUNTER_CLOCKWISE)
        DrawMaterial(main_texture=Texture.solid(1, 1, RED)).set_pass(ctx, 0)
        written = emit_quad(ctx, DEFAULT_QUAD_POINTS, DEFAULT_QUAD_POINTS, VERTEX_COLOR)
        self.assertEqual(written, 0)

    def test_emit_quad_requires_active_material(self) -> None:
        ctx = _bound_context(OutputSurface(2, 2))
        with self.assertRaises(RuntimeError):
            emit_quad(ctx, DEFAULT_QUAD_POINTS, DEFAULT_QUAD_POINTS, VERTEX_COLOR)

    def test_material_rejects_unknown_pass(self) -> None:
        ctx = GraphicsContext(display_width=2, display_height=2)
        with self.assertRaises(ValueError):
            DrawMaterial().set_pass(ctx, 1)

    def test_vertex_color_only_applies_when_enabled(self) -> None:
        tex = Texture.solid(1, 1, RED)
        plain = OutputSurface(1, 1)
        draw_rect(_bound_context(plain), DrawMaterial(), tex, Rect(0.0, 0.0, 1.0, 1.0), DEFAULT_QUAD_POINTS)
        self.assertEqual(plain.pixel(0, 0), RED)
        tinted = OutputSurface(1, 1)
        draw_rect(
            _bound_context(tinted),
            DrawMaterial(use_vertex_color=True),
            tex,
            Rect(0.0, 0.0, 1.0, 1.0),
            DEFAULT_QUAD_POINTS,
        )
        self.assertEqual(tinted.pixel(0, 0), CLEAR)

    def test_alpha_blend_composites_over_destination(self) -> None:
        surface = OutputSurface(1, 1, background=(0, 0, 200, 255))
        ctx = _bound_context(surface)
        tex = Texture.solid(1, 1, (255, 0, 0, 128))
        draw_rect(ctx, DrawMaterial(blend_mode=BlendMode.ALPHA), tex, Rect(0.0, 0.0, 1.0, 1.0), DEFAULT_QUAD_POINTS)
        r, g, b, a = surface.pixel(0, 0)
        self.assertEqual(g, 0)
        self.assertAlmostEqual(r, 128, delta=1)
        self.assertAlmostEqual(b, 100, delta=1)
        self.assertAlmostEqual(a, 191, delta=1)


if __name__ == "__main__":
    unittest.main()
