from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import torch

from .surface import Color
from .texture import Texture

if TYPE_CHECKING:
    from .context import GraphicsContext


class BlendMode(str, Enum):
    OPAQUE = "opaque"
    ALPHA = "alpha"


@dataclass(eq=False)
class DrawMaterial:
    """Shading state shared by every rect draw of a frame.

    ``main_texture`` is overwritten by the blitter before each draw.
    """

    main_texture: Texture | None = None
    blend_mode: BlendMode = BlendMode.OPAQUE
    use_vertex_color: bool = False

    def __post_init__(self) -> None:
        self.blend_mode = BlendMode(self.blend_mode)

    def set_pass(self, context: GraphicsContext, pass_index: int = 0) -> None:
        if pass_index != 0:
            raise ValueError(f"material has no pass {pass_index}")
        context.active_material = self

    def shade(self, sampled: torch.Tensor, vertex_color: Color) -> torch.Tensor:
        if not self.use_vertex_color:
            return sampled
        tint = torch.tensor(vertex_color, dtype=torch.float32) / 255.0
        return sampled * tint

    def blend(self, dst: torch.Tensor, src: torch.Tensor) -> torch.Tensor:
        """Combine float ``src`` (0..255) onto uint8 ``dst``; returns uint8."""
        if self.blend_mode is BlendMode.ALPHA:
            alpha = src[:, :, 3:4] / 255.0
            src = src * alpha + dst.to(torch.float32) * (1.0 - alpha)
        return torch.round(src).clamp(0, 255).to(torch.uint8)
