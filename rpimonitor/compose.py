"""
FrameComposer - Source Image + Status Text -> Panel Frame
=========================================================
Runs the image preparation pipeline for one refresh:

    source image ──resize──> panel-sized image ──pack──> PackedFrame
                                                            │
                                      status text ──overlay─┘

Composition is pure: the same bounds, source and text always produce a
byte-identical frame, so frames can be compared against golden copies.

Usage:
    from rpimonitor.compose import FrameComposer

    composer = FrameComposer()
    frame = composer.compose(sink.bounds(), background, "host (10.0.0.2)")
    sink.draw(frame.bounds, frame, ZP)
"""

try:
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from PIL import Image
        from rpimonitor.text.renderer import TextRenderer
except ImportError:
    pass

from rpimonitor.buffer import PackedFrame, pack, resize
from rpimonitor.geometry import Rect


class FrameComposer:
    """
    Composes panel frames.

    Args:
        text_renderer: TextRenderer for the status line. If None, one
            using the built-in font is created.
        threshold: Pixel threshold rule passed to pack(); default if None.
        anchor: Where the status text goes (default bottom-right).
    """

    def __init__(
        self,
        text_renderer: "TextRenderer | None" = None,
        threshold=None,
        anchor: str = "bottom-right",
    ):
        if text_renderer is None:
            from rpimonitor.text import TextRenderer
            text_renderer = TextRenderer()
        self._text = text_renderer
        self._threshold = threshold
        self._anchor = anchor

    @property
    def text_renderer(self) -> "TextRenderer":
        return self._text

    def compose(self, bounds: Rect, source: "Image.Image", status: str) -> PackedFrame:
        """
        Build one frame.

        Args:
            bounds: Panel rectangle (from DisplaySink.bounds())
            source: Background image, any size and mode
            status: Text drawn at the anchor

        Returns:
            PackedFrame of exactly bounds.width x bounds.height

        Raises:
            ValueError: If bounds has zero width or height
        """
        if bounds.width <= 0 or bounds.height <= 0:
            raise ValueError(f"cannot compose a {bounds.width}x{bounds.height} frame")

        scaled = resize(source, bounds.size)
        frame = pack(bounds, scaled, self._threshold)
        self._text.draw_anchored(frame, status, self._anchor)
        return frame
