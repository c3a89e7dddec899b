"""Cut a texture into rectangles and redraw them at new positions in an output surface."""

from .core import ArrangeConfig, ArrangeRenderer, FrameResult, RenderMode, load_config, render_frame
from .render import DrawMaterial, GraphicsContext, OutputSurface, Rect, Texture

__all__ = [
    "ArrangeConfig",
    "ArrangeRenderer",
    "DrawMaterial",
    "FrameResult",
    "GraphicsContext",
    "OutputSurface",
    "Rect",
    "RenderMode",
    "Texture",
    "load_config",
    "render_frame",
]
