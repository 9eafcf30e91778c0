"""
TextRenderer - Fixed Cell Text onto a PackedFrame
=================================================
Draws monospace bitmap text over an already prepared frame.

Features:
- Built-in 7x13 font, or any BF2 font file
- Anchored placement (bottom-right for the status line)
- Glyph pixels are OR-ed in; the background is never cleared
- Clipping at frame edges (text may run off the right side)

Placement math for the default bottom-right anchor:

    x = frame.width - len(text) * cell_width     (0 if negative)
    y = frame.height - 1 - cell_height

len() counts code points, so "Zürich" is 6 cells wide regardless of how
many bytes it takes in UTF-8.

Usage:
    from rpimonitor.text import TextRenderer

    text = TextRenderer()
    text.draw_anchored(frame, "host (10.0.0.2)")
"""

from rpimonitor.buffer.framebuffer import PackedFrame
from .bf2 import BF2Font
from .builtin import BuiltinFont

ANCHORS = ("top-left", "top-right", "bottom-left", "bottom-right")


class TextRenderer:
    """
    Monospace text renderer.

    Every character advances one cell of font.max_w pixels, whether or not
    the font has a glyph for it.

    Args:
        font: Font object (BuiltinFont or BF2Font); built-in if None
    """

    def __init__(self, font=None):
        self._font = font if font is not None else BuiltinFont()

    def close(self):
        self._font.close()

    def load_font(self, path: str):
        """Replace the current font with a BF2 font file."""
        font = BF2Font(path)
        self._font.close()
        self._font = font

    @property
    def font(self):
        return self._font

    @property
    def cell_width(self) -> int:
        return self._font.max_w

    @property
    def cell_height(self) -> int:
        return self._font.height

    # =========================================================================
    # Measurement
    # =========================================================================

    def measure_width(self, text: str) -> int:
        return len(text) * self.cell_width

    def anchor_position(self, width: int, height: int, text: str,
                        anchor: str = "bottom-right") -> tuple[int, int]:
        """
        Top-left corner of text anchored inside a width x height area.

        Right anchors clamp to x=0 when the text is wider than the area.
        Bottom anchors leave the last row free: y = height - 1 - cell_height.

        Raises:
            ValueError: Unknown anchor
        """
        if anchor not in ANCHORS:
            raise ValueError(f"unknown anchor {anchor!r}")

        vert, horiz = anchor.split("-")
        if horiz == "right":
            x = width - self.measure_width(text)
            if x < 0:
                x = 0
        else:
            x = 0
        if vert == "bottom":
            y = height - 1 - self.cell_height
        else:
            y = 0
        return x, y

    # =========================================================================
    # Drawing
    # =========================================================================

    def draw_anchored(self, frame: PackedFrame, text: str,
                      anchor: str = "bottom-right") -> tuple[int, int]:
        """
        Draw text at an anchor of the frame.

        Returns:
            (x, y) where the text was placed
        """
        x, y = self.anchor_position(frame.width, frame.height, text, anchor)
        self.draw(frame, text, x, y)
        return x, y

    def draw(self, frame: PackedFrame, text: str, x: int, y: int) -> int:
        """
        Draw text with its top-left corner at (x, y).

        Returns:
            Advance in pixels (len(text) * cell width)
        """
        font = self._font
        cell = font.max_w
        cx = x
        for ch in text:
            g = font.get(ord(ch))
            if g is not None:
                w, off = g
                self._render(frame, font.read(off), cx, y,
                             min(w, cell) if font.prop else cell,
                             font.height, font.bpr)
            cx += cell
        return cx - x

    # =========================================================================
    # Internal: Glyph Rendering
    # =========================================================================

    def _render(self, frame, data, x, y, w, h, bpr):
        """OR one row-major glyph bitmap into the frame, clipped."""
        fw, fh = frame.width, frame.height
        if x >= fw or y >= fh or x + w <= 0 or y + h <= 0:
            return

        col_start = -x if x < 0 else 0
        col_end = fw - x if x + w > fw else w
        row_start = -y if y < 0 else 0
        row_end = fh - y if y + h > fh else h

        set_on = frame.pixel_or
        for row in range(row_start, row_end):
            row_off = row * bpr
            py = y + row
            for col in range(col_start, col_end):
                if data[row_off + (col >> 3)] & (0x80 >> (col & 7)):
                    set_on(x + col, py)
