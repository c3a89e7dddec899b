from __future__ import annotations

import logging

from arrange_core.render.context import GraphicsContext
from arrange_core.render.surface import OutputSurface
from arrange_core.targets.base import DisplayFrame, RenderTarget

from .compositor import FrameResult, render_frame
from .config import ArrangeConfig

LOGGER = logging.getLogger(__name__)


class ArrangeRenderer:
    """Host-facing adapter that renders its config once per host frame.

    When the host supplies no destination surface the frame is drawn to the
    context's display surface and, if a target is attached, presented there.
    """

    def __init__(
        self,
        config: ArrangeConfig | None = None,
        *,
        context: GraphicsContext | None = None,
        target: RenderTarget | None = None,
    ) -> None:
        self.config = config if config is not None else ArrangeConfig()
        self.context = context if context is not None else GraphicsContext.from_env()
        self._target = target
        self._target_started = False
        self._revision = 0

    @property
    def revision(self) -> int:
        return self._revision

    def start(self) -> None:
        if self._target is None or self._target_started:
            return
        self._target.start()
        self._target_started = True
        LOGGER.info(
            "ArrangeRenderer target started; display=%dx%d",
            self.context.display.width,
            self.context.display.height,
        )

    def stop(self) -> None:
        if self._target is None or not self._target_started:
            return
        self._target.stop()
        self._target_started = False
        LOGGER.info("ArrangeRenderer target stopped after revision=%d", self._revision)

    def on_render_image(
        self,
        source: OutputSurface | None,
        destination: OutputSurface | None = None,
    ) -> FrameResult:
        """Per-frame hook. ``source`` is accepted for host parity and not read."""
        result = render_frame(self.config, destination, self.context)
        if destination is None and self._target is not None:
            self._present_display()
        return result

    def _present_display(self) -> None:
        assert self._target is not None
        self._revision += 1
        self._target.present(DisplayFrame.capture(self.context.display, self._revision))
