"""
DisplaySink - Abstract Base for Panel Drivers
=============================================
The only surface the refresh pipeline needs from a panel:

    bounds()                   panel rectangle, fixed for the process
    draw(rect, frame, origin)  push pixels, TransportError on bus failure

Anything implementing these two methods (the SSD1306 driver, the
in-memory sink, a test double) can be handed to RefreshLoop.
"""

try:
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from rpimonitor.buffer.framebuffer import PackedFrame
        from rpimonitor.geometry import Point, Rect
except ImportError:
    pass


class DisplaySink:
    """
    Abstract base class for monochrome panels.

    Subclasses must implement bounds() and draw().
    """

    def bounds(self) -> "Rect":
        """
        Panel rectangle in pixels.

        Queried once at startup; it must not change afterwards.
        """
        raise NotImplementedError

    def draw(self, rect: "Rect", frame: "PackedFrame", origin: "Point") -> None:
        """
        Copy frame pixels into rect of the panel.

        Panel pixel (x, y) in rect takes frame pixel
        (x - rect.x0 + origin.x, y - rect.y0 + origin.y).

        Args:
            rect: Target rectangle on the panel
            frame: Source frame (read only)
            origin: Frame pixel that lands on rect's top-left corner

        Raises:
            TransportError: If the write to the panel failed
        """
        raise NotImplementedError
