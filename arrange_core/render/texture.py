from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np
import torch
import torch.nn.functional as F

from .surface import Color


class FilterMode(str, Enum):
    BILINEAR = "bilinear"
    NEAREST = "nearest"


class WrapMode(str, Enum):
    CLAMP = "clamp"
    REPEAT = "repeat"


@dataclass(frozen=True, eq=False)
class Texture:
    """Source image sampled in UV space (origin bottom-left).

    ``rgba`` is a ``(height, width, 4)`` uint8 tensor with row 0 at the top.
    """

    rgba: torch.Tensor
    filter_mode: FilterMode = FilterMode.BILINEAR
    wrap_mode: WrapMode = WrapMode.CLAMP

    def __post_init__(self) -> None:
        if self.rgba.ndim != 3 or self.rgba.shape[2] != 4:
            raise ValueError(f"invalid texture shape: {tuple(self.rgba.shape)}")
        if self.rgba.dtype != torch.uint8:
            raise ValueError(f"invalid texture dtype: {self.rgba.dtype}")
        if self.rgba.shape[0] <= 0 or self.rgba.shape[1] <= 0:
            raise ValueError("texture dimensions must be > 0")
        object.__setattr__(self, "filter_mode", FilterMode(self.filter_mode))
        object.__setattr__(self, "wrap_mode", WrapMode(self.wrap_mode))

    @property
    def width(self) -> int:
        return int(self.rgba.shape[1])

    @property
    def height(self) -> int:
        return int(self.rgba.shape[0])

    @classmethod
    def from_numpy(cls, rgba: np.ndarray, **kwargs) -> Texture:
        if rgba.dtype != np.uint8:
            raise ValueError("rgba must be uint8")
        if rgba.ndim != 3 or rgba.shape[2] != 4:
            raise ValueError("rgba must have shape (H, W, 4)")
        return cls(torch.from_numpy(np.ascontiguousarray(rgba)), **kwargs)

    @classmethod
    def solid(cls, width: int, height: int, color: Color, **kwargs) -> Texture:
        if width <= 0 or height <= 0:
            raise ValueError("texture dimensions must be > 0")
        rgba = torch.tensor(color, dtype=torch.uint8).view(1, 1, 4).expand(height, width, 4).clone()
        return cls(rgba, **kwargs)

    def sample(self, u: torch.Tensor, v: torch.Tensor) -> torch.Tensor:
        """Sample at UV grids of shape ``(h, w)``; returns float32 ``(h, w, 4)`` in 0..255."""
        if u.shape != v.shape or u.ndim != 2:
            raise ValueError("u and v must be 2D tensors of the same shape")
        u = u.to(torch.float32)
        v = v.to(torch.float32)
        src = self.rgba.to(torch.float32)
        if self.wrap_mode is WrapMode.REPEAT:
            u = torch.remainder(u, 1.0)
            v = torch.remainder(v, 1.0)
            if self.filter_mode is FilterMode.BILINEAR:
                src, u, v = self._wrap_border(src, u, v)
        # grid_sample addresses y downward from the top row; v runs upward.
        grid = torch.stack((u * 2.0 - 1.0, 1.0 - v * 2.0), dim=-1).unsqueeze(0)
        out = F.grid_sample(
            src.permute(2, 0, 1).unsqueeze(0),
            grid,
            mode=self.filter_mode.value,
            padding_mode="border",
            align_corners=False,
        )
        return out.squeeze(0).permute(1, 2, 0)

    def _wrap_border(
        self, src: torch.Tensor, u: torch.Tensor, v: torch.Tensor
    ) -> tuple[torch.Tensor, torch.Tensor, torch.Tensor]:
        """Surround ``src`` with its opposite edges so bilinear taps at the seam wrap.

        ``u`` and ``v`` must already lie in ``[0, 1)``; they are remapped so the
        same texel centers are addressed inside the padded image.
        """
        src = torch.cat((src[:, -1:], src, src[:, :1]), dim=1)
        src = torch.cat((src[-1:], src, src[:1]), dim=0)
        u = (u * self.width + 1.0) / (self.width + 2)
        v = (v * self.height + 1.0) / (self.height + 2)
        return src, u, v
