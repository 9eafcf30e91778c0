"""
MemoryDisplay - In-Process Panel
================================
A DisplaySink that keeps pixels in memory. Used by --dry-run and as a
test double for the refresh loop.
"""
import logging

from rpimonitor.buffer.framebuffer import PackedFrame
from rpimonitor.geometry import Point, Rect, ZP
from .base import DisplaySink

logger = logging.getLogger(__name__)


class MemoryDisplay(DisplaySink):
    """
    Panel that lives in a PackedFrame.

    Attributes:
        draws: Number of successful draw() calls
        fail_with: Exception instance raised by the next draw(), if set
    """

    def __init__(self, width: int = 128, height: int = 32):
        self._rect = Rect.of_size(width, height)
        self._frame = PackedFrame(width, height)
        self.draws = 0
        self.fail_with: Exception | None = None

    def bounds(self) -> Rect:
        return self._rect

    def draw(self, rect: Rect, frame: PackedFrame, origin: Point = ZP) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self._frame.blit(rect, frame, origin)
        self.draws += 1
        logger.debug("frame %d drawn to %r", self.draws, rect)

    @property
    def frame(self) -> PackedFrame:
        """Snapshot of the panel contents."""
        return self._frame.copy()

    def save(self, path: str):
        """Write the panel contents as an image file (format from suffix)."""
        self._frame.to_image().save(path)
