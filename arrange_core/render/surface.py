from __future__ import annotations

import torch


Color = tuple[int, int, int, int]
TRANSPARENT: Color = (0, 0, 0, 0)


class OutputSurface:
    """RGBA255 pixel buffer addressed with a bottom-left origin.

    Storage is a ``(height, width, 4)`` uint8 tensor with row 0 at the top, the
    same layout frames are presented in. Pixel coordinates passed to the
    accessors here count rows up from the bottom edge.
    """

    def __init__(self, width: int, height: int, background: Color = TRANSPARENT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self.width = int(width)
        self.height = int(height)
        self.background = background
        self._pixels = torch.zeros((self.height, self.width, 4), dtype=torch.uint8)
        self.clear(background)

    def clear(self, color: Color | None = None) -> None:
        if color is None:
            color = self.background
        self._pixels[:, :] = torch.tensor(color, dtype=torch.uint8)

    def read_snapshot(self) -> torch.Tensor:
        """Copy of the pixels, top row first."""
        return self._pixels.clone()

    def pixel(self, x: int, y: int) -> Color:
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            raise ValueError(f"pixel out of range: ({x}, {y})")
        r, g, b, a = (int(c) for c in self._pixels[self.height - 1 - y, x].tolist())
        return (r, g, b, a)

    def region(self, x0: int, y0: int, x1: int, y1: int) -> torch.Tensor:
        """Writable view of pixels ``[x0, x1) x [y0, y1)``, top row first."""
        if x0 < 0 or y0 < 0 or x1 > self.width or y1 > self.height:
            raise ValueError("region exceeds surface bounds")
        return self._pixels[self.height - y1 : self.height - y0, x0:x1, :]
