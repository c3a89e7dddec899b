from .component import ArrangeRenderer
from .compositor import FrameResult, render_frame, resolve_render_mode
from .config import ArrangeConfig, RenderMode, config_from_mapping, load_config

__all__ = [
    "ArrangeConfig",
    "ArrangeRenderer",
    "FrameResult",
    "RenderMode",
    "config_from_mapping",
    "load_config",
    "render_frame",
    "resolve_render_mode",
]
