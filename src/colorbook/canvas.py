from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from colorbook.errors import InvalidSource
from colorbook.raster import Canvas, RasterImage

logger = logging.getLogger(__name__)

DisplaySink = Callable[[Canvas], None]


@dataclass
class _CanvasSlot:
    source: RasterImage
    canvas: Canvas


class CanvasManager:
    """Keeps one working canvas for the source image currently being painted.

    The source image is copied on first use and never written to. Asking for a
    different source (by identity) discards the old copy.
    """

    def __init__(self, display_sink: Optional[DisplaySink] = None) -> None:
        self.display_sink = display_sink
        self._slot: Optional[_CanvasSlot] = None

    @property
    def current(self) -> Optional[Canvas]:
        return self._slot.canvas if self._slot is not None else None

    @property
    def tracked_source(self) -> Optional[RasterImage]:
        return self._slot.source if self._slot is not None else None

    def obtain_canvas(self, source: Optional[RasterImage]) -> Canvas:
        if source is None:
            raise InvalidSource()
        if self._slot is not None and self._slot.source is source:
            logger.debug("Reusing canvas for %r", source)
            return self._slot.canvas
        if self._slot is not None:
            logger.info("Replacing canvas for %r with a copy of %r", self._slot.source, source)
        else:
            logger.info("Creating canvas copy of %r", source)
        self._slot = _CanvasSlot(source=source, canvas=Canvas.copy_of(source))
        return self._slot.canvas

    def apply_edits(self, canvas: Canvas) -> None:
        if self.display_sink is None:
            return
        try:
            self.display_sink(canvas)
        except Exception:
            logger.exception("Display sink failed for %r", canvas)
            raise

    def release(self) -> None:
        self._slot = None
