from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import torch

from arrange_core.render.surface import Color, OutputSurface


@dataclass(frozen=True, eq=False)
class DisplayFrame:
    """Immutable copy of the display surface taken when a frame is presented."""

    revision: int
    surface: OutputSurface

    @classmethod
    def capture(cls, display: OutputSurface, revision: int) -> DisplayFrame:
        if revision <= 0:
            raise ValueError(f"revision must be > 0, got {revision}")
        copy = OutputSurface(display.width, display.height, background=display.background)
        copy.region(0, 0, display.width, display.height)[:] = display.read_snapshot()
        return cls(revision=revision, surface=copy)

    @property
    def width(self) -> int:
        return self.surface.width

    @property
    def height(self) -> int:
        return self.surface.height

    @property
    def rgba(self) -> torch.Tensor:
        return self.surface.read_snapshot()

    def pixel(self, x: int, y: int) -> Color:
        return self.surface.pixel(x, y)


class RenderTarget(ABC):
    """Receives display frames from an ``ArrangeRenderer`` between ``start`` and ``stop``."""

    @abstractmethod
    def start(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def present(self, frame: DisplayFrame) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        raise NotImplementedError
