from __future__ import annotations

from collections import deque
import logging

from .base import DisplayFrame, RenderTarget

LOGGER = logging.getLogger(__name__)


class FrameRecorder(RenderTarget):
    """Keeps the most recent presented frames in memory, oldest first.

    Revisions must increase strictly; a repeated or older revision means the
    presenting side lost track of its counter.
    """

    def __init__(self, history: int = 1) -> None:
        if history <= 0:
            raise ValueError("history must be > 0")
        self.frames: deque[DisplayFrame] = deque(maxlen=history)
        self.presented_count = 0
        self.running = False

    @property
    def latest(self) -> DisplayFrame | None:
        return self.frames[-1] if self.frames else None

    def start(self) -> None:
        self.running = True

    def present(self, frame: DisplayFrame) -> None:
        if not self.running:
            raise RuntimeError("frame recorder is not running")
        latest = self.latest
        if latest is not None and frame.revision <= latest.revision:
            raise ValueError(f"stale frame revision {frame.revision}; last was {latest.revision}")
        self.frames.append(frame)
        self.presented_count += 1

    def stop(self) -> None:
        if self.running:
            LOGGER.debug("frame recorder stopped after %d frames", self.presented_count)
        self.running = False
