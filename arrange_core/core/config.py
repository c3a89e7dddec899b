from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
import tomllib
from typing import Any, Mapping

from arrange_core.render.geometry import Rect
from arrange_core.render.material import BlendMode, DrawMaterial
from arrange_core.render.texture import Texture


class RenderMode(str, Enum):
    DEFAULT = "default"
    ARRANGED = "arranged"


@dataclass
class ArrangeConfig:
    """Per-instance settings, edited by the host between frames."""

    texture: Texture | None = None
    material: DrawMaterial = field(default_factory=DrawMaterial)
    render_mode: RenderMode = RenderMode.DEFAULT
    viewport_rects: list[Rect] = field(default_factory=list)
    uv_rects: list[Rect] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.render_mode = coerce_render_mode(self.render_mode)
        self.viewport_rects = [Rect.from_value(r) for r in self.viewport_rects]
        self.uv_rects = [Rect.from_value(r) for r in self.uv_rects]


def load_config(path: str | Path, *, texture: Texture | None = None) -> ArrangeConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"arrange config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    return config_from_mapping(raw, texture=texture)


def config_from_mapping(raw: Mapping[str, Any], *, texture: Texture | None = None) -> ArrangeConfig:
    render_mode = coerce_render_mode(raw.get("render_mode", RenderMode.DEFAULT.value))
    viewport_rects = _coerce_rect_list(raw.get("viewport_rects", []), "viewport_rects")
    uv_rects = _coerce_rect_list(raw.get("uv_rects", []), "uv_rects")
    material = _coerce_material(raw.get("material", {}))
    return ArrangeConfig(
        texture=texture,
        material=material,
        render_mode=render_mode,
        viewport_rects=viewport_rects,
        uv_rects=uv_rects,
    )


def coerce_render_mode(value: object) -> RenderMode:
    if isinstance(value, RenderMode):
        return value
    try:
        return RenderMode(str(value).lower())
    except ValueError as exc:
        raise ValueError(f"unknown render_mode: {value!r}") from exc


def _coerce_rect_list(value: object, label: str) -> list[Rect]:
    if not isinstance(value, list):
        raise ValueError(f"{label} must be a list")
    rects: list[Rect] = []
    for i, item in enumerate(value):
        try:
            rects.append(Rect.from_value(item))
        except ValueError as exc:
            raise ValueError(f"{label}[{i}]: {exc}") from exc
    return rects


def _coerce_material(value: object) -> DrawMaterial:
    if not isinstance(value, Mapping):
        raise ValueError("material must be a table")
    blend_raw = value.get("blend_mode", BlendMode.OPAQUE.value)
    try:
        blend_mode = BlendMode(str(blend_raw).lower())
    except ValueError as exc:
        raise ValueError(f"unknown material.blend_mode: {blend_raw!r}") from exc
    use_vertex_color = value.get("use_vertex_color", False)
    if not isinstance(use_vertex_color, bool):
        raise ValueError("material.use_vertex_color must be a boolean")
    return DrawMaterial(blend_mode=blend_mode, use_vertex_color=use_vertex_color)
