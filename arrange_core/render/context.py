from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
import os
from typing import Iterator

from .geometry import Point, Rect
from .material import DrawMaterial
from .surface import TRANSPARENT, Color, OutputSurface


Matrix3 = tuple[tuple[float, float, float], tuple[float, float, float], tuple[float, float, float]]

IDENTITY: Matrix3 = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))
# Maps the unit square onto normalized device coordinates [-1, 1].
ORTHO_UNIT: Matrix3 = ((2.0, 0.0, -1.0), (0.0, 2.0, -1.0), (0.0, 0.0, 1.0))

DEFAULT_DISPLAY_WIDTH = 640
DEFAULT_DISPLAY_HEIGHT = 480


class FrontFace(str, Enum):
    CLOCKWISE = "cw"
    COUNTER_CLOCKWISE = "ccw"


class GraphicsContext:
    """Render state threaded explicitly through a draw pass.

    Holds the bound render target (or the display surface when none is bound),
    the active viewport, the transform stack and the active material.
    """

    def __init__(
        self,
        display_width: int = DEFAULT_DISPLAY_WIDTH,
        display_height: int = DEFAULT_DISPLAY_HEIGHT,
        front_face: FrontFace = FrontFace.CLOCKWISE,
    ) -> None:
        self.display = OutputSurface(display_width, display_height)
        self.front_face = FrontFace(front_face)
        self.active_material: DrawMaterial | None = None
        self._target: OutputSurface | None = None
        self._matrix: Matrix3 = IDENTITY
        self._matrix_stack: list[Matrix3] = []
        self.viewport = Rect(0.0, 0.0, float(display_width), float(display_height))

    @classmethod
    def from_env(
        cls,
        *,
        width_env_var: str = "ARRANGE_DISPLAY_WIDTH",
        height_env_var: str = "ARRANGE_DISPLAY_HEIGHT",
    ) -> "GraphicsContext":
        width = _parse_dimension(width_env_var, DEFAULT_DISPLAY_WIDTH)
        height = _parse_dimension(height_env_var, DEFAULT_DISPLAY_HEIGHT)
        return cls(display_width=width, display_height=height)

    @property
    def render_target(self) -> OutputSurface:
        return self._target if self._target is not None else self.display

    @property
    def matrix(self) -> Matrix3:
        return self._matrix

    @property
    def matrix_depth(self) -> int:
        return len(self._matrix_stack)

    def set_render_target(self, surface: OutputSurface | None) -> None:
        """Bind ``surface`` (None binds the display) and reset the viewport to cover it."""
        self._target = surface
        target = self.render_target
        self.viewport = Rect(0.0, 0.0, float(target.width), float(target.height))

    def clear(self, color: Color = TRANSPARENT) -> None:
        self.render_target.clear(color)

    def set_viewport(self, rect: Rect) -> None:
        self.viewport = rect

    def push_matrix(self) -> None:
        self._matrix_stack.append(self._matrix)

    def pop_matrix(self) -> None:
        if not self._matrix_stack:
            raise RuntimeError("pop_matrix called without a matching push_matrix")
        self._matrix = self._matrix_stack.pop()

    def load_identity(self) -> None:
        self._matrix = IDENTITY

    def load_ortho(self) -> None:
        self._matrix = ORTHO_UNIT

    @contextmanager
    def scoped_matrix(self) -> Iterator["GraphicsContext"]:
        """Save the transform and restore it on every exit path."""
        self.push_matrix()
        try:
            yield self
        finally:
            self.pop_matrix()

    def to_pixel(self, point: Point) -> Point:
        """Project ``point`` through the transform into viewport pixels."""
        x, y = point
        (m00, m01, m02), (m10, m11, m12), _ = self._matrix
        ndc_x = m00 * x + m01 * y + m02
        ndc_y = m10 * x + m11 * y + m12
        vp = self.viewport
        return (
            vp.x + (ndc_x + 1.0) * 0.5 * vp.width,
            vp.y + (ndc_y + 1.0) * 0.5 * vp.height,
        )


def _parse_dimension(env_var: str, default: int) -> int:
    raw = os.getenv(env_var, "").strip()
    if raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if value <= 0:
        return default
    return value
