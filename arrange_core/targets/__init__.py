from .base import DisplayFrame, RenderTarget
from .headless import FrameRecorder

__all__ = [
    "DisplayFrame",
    "FrameRecorder",
    "RenderTarget",
]
