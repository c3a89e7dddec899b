from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence


Point = tuple[float, float]
QuadPoints = tuple[Point, Point, Point, Point]

# Unit quad corners, clockwise from bottom-left.
DEFAULT_QUAD_POINTS: QuadPoints = ((0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0))


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with a bottom-left origin."""

    x: float
    y: float
    width: float
    height: float

    @property
    def x_max(self) -> float:
        return self.x + self.width

    @property
    def y_max(self) -> float:
        return self.y + self.height

    @classmethod
    def from_value(cls, value: Rect | Sequence[Any] | Mapping[str, Any]) -> Rect:
        if isinstance(value, Rect):
            return value
        if isinstance(value, Mapping):
            try:
                raw = (value["x"], value["y"], value["width"], value["height"])
            except KeyError as exc:
                raise ValueError(f"rect missing required field: {exc.args[0]}") from exc
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            if len(value) != 4:
                raise ValueError(f"rect must have 4 values, got {len(value)}")
            raw = tuple(value)
        else:
            raise ValueError(f"cannot build rect from {type(value).__name__}")
        try:
            x, y, width, height = (float(v) for v in raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"rect values must be numeric: {raw!r}") from exc
        return cls(x=x, y=y, width=width, height=height)


FULL_UV_RECT = Rect(0.0, 0.0, 1.0, 1.0)


def rect_to_corner_points(rect: Rect) -> QuadPoints:
    """Corners of ``rect`` clockwise from bottom-left, matching ``DEFAULT_QUAD_POINTS``."""
    return (
        (rect.x, rect.y),
        (rect.x, rect.y + rect.height),
        (rect.x + rect.width, rect.y + rect.height),
        (rect.x + rect.width, rect.y),
    )


def normalized_rect_to_pixel_rect(rect: Rect, surface_width: float, surface_height: float) -> Rect:
    """Scale a UV-space rect into pixel space. No clamping or rounding."""
    return Rect(
        x=rect.x * surface_width,
        y=rect.y * surface_height,
        width=rect.width * surface_width,
        height=rect.height * surface_height,
    )


def signed_area(points: Sequence[Point]) -> float:
    """Shoelace area in y-up space; negative for clockwise winding."""
    total = 0.0
    count = len(points)
    for i in range(count):
        x0, y0 = points[i]
        x1, y1 = points[(i + 1) % count]
        total += (x0 * y1) - (x1 * y0)
    return total / 2.0
