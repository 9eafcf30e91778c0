"""
Built-in Fixed Font (7x13 cell)
===============================
Printable ASCII (U+0020..U+007E) from the classic 5x7 LCD glyph set,
placed in a 7x13 monospace cell so the status line needs no font file.

Glyphs are stored column-wise (5 bytes per glyph, bit 0 = top row), the
same orientation as the panel memory. They are expanded on first use into
the row-major, MSB-first bitmaps BF2 fonts use, so TextRenderer handles
both font sources the same way.

The class mirrors the BF2Font query interface (get/read/height/max_w/...).
"""

GLYPH_WIDTH = 7
GLYPH_HEIGHT = 13

_FIRST = 0x20
_LAST = 0x7E
_COLS = 5
_ROWS = 7
_X_PAD = 1  # Left padding inside the cell
_Y_PAD = 3  # Top padding inside the cell

# 5 columns per glyph, LSB = top row
_GLYPHS = bytes((
    0x00, 0x00, 0x00, 0x00, 0x00,  # ' '
    0x00, 0x00, 0x5F, 0x00, 0x00,  # !
    0x00, 0x07, 0x00, 0x07, 0x00,  # "
    0x14, 0x7F, 0x14, 0x7F, 0x14,  # #
    0x24, 0x2A, 0x7F, 0x2A, 0x12,  # $
    0x23, 0x13, 0x08, 0x64, 0x62,  # %
    0x36, 0x49, 0x55, 0x22, 0x50,  # &
    0x00, 0x05, 0x03, 0x00, 0x00,  # '
    0x00, 0x1C, 0x22, 0x41, 0x00,  # (
    0x00, 0x41, 0x22, 0x1C, 0x00,  # )
    0x08, 0x2A, 0x1C, 0x2A, 0x08,  # *
    0x08, 0x08, 0x3E, 0x08, 0x08,  # +
    0x00, 0x50, 0x30, 0x00, 0x00,  # ,
    0x08, 0x08, 0x08, 0x08, 0x08,  # -
    0x00, 0x60, 0x60, 0x00, 0x00,  # .
    0x20, 0x10, 0x08, 0x04, 0x02,  # /
    0x3E, 0x51, 0x49, 0x45, 0x3E,  # 0
    0x00, 0x42, 0x7F, 0x40, 0x00,  # 1
    0x42, 0x61, 0x51, 0x49, 0x46,  # 2
    0x21, 0x41, 0x45, 0x4B, 0x31,  # 3
    0x18, 0x14, 0x12, 0x7F, 0x10,  # 4
    0x27, 0x45, 0x45, 0x45, 0x39,  # 5
    0x3C, 0x4A, 0x49, 0x49, 0x30,  # 6
    0x01, 0x71, 0x09, 0x05, 0x03,  # 7
    0x36, 0x49, 0x49, 0x49, 0x36,  # 8
    0x06, 0x49, 0x49, 0x29, 0x1E,  # 9
    0x00, 0x36, 0x36, 0x00, 0x00,  # :
    0x00, 0x56, 0x36, 0x00, 0x00,  # ;
    0x08, 0x14, 0x22, 0x41, 0x00,  # <
    0x14, 0x14, 0x14, 0x14, 0x14,  # =
    0x00, 0x41, 0x22, 0x14, 0x08,  # >
    0x02, 0x01, 0x51, 0x09, 0x06,  # ?
    0x32, 0x49, 0x79, 0x41, 0x3E,  # @
    0x7E, 0x11, 0x11, 0x11, 0x7E,  # A
    0x7F, 0x49, 0x49, 0x49, 0x36,  # B
    0x3E, 0x41, 0x41, 0x41, 0x22,  # C
    0x7F, 0x41, 0x41, 0x22, 0x1C,  # D
    0x7F, 0x49, 0x49, 0x49, 0x41,  # E
    0x7F, 0x09, 0x09, 0x09, 0x01,  # F
    0x3E, 0x41, 0x49, 0x49, 0x7A,  # G
    0x7F, 0x08, 0x08, 0x08, 0x7F,  # H
    0x00, 0x41, 0x7F, 0x41, 0x00,  # I
    0x20, 0x40, 0x41, 0x3F, 0x01,  # J
    0x7F, 0x08, 0x14, 0x22, 0x41,  # K
    0x7F, 0x40, 0x40, 0x40, 0x40,  # L
    0x7F, 0x02, 0x0C, 0x02, 0x7F,  # M
    0x7F, 0x04, 0x08, 0x10, 0x7F,  # N
    0x3E, 0x41, 0x41, 0x41, 0x3E,  # O
    0x7F, 0x09, 0x09, 0x09, 0x06,  # P
    0x3E, 0x41, 0x51, 0x21, 0x5E,  # Q
    0x7F, 0x09, 0x19, 0x29, 0x46,  # R
    0x46, 0x49, 0x49, 0x49, 0x31,  # S
    0x01, 0x01, 0x7F, 0x01, 0x01,  # T
    0x3F, 0x40, 0x40, 0x40, 0x3F,  # U
    0x1F, 0x20, 0x40, 0x20, 0x1F,  # V
    0x3F, 0x40, 0x38, 0x40, 0x3F,  # W
    0x63, 0x14, 0x08, 0x14, 0x63,  # X
    0x07, 0x08, 0x70, 0x08, 0x07,  # Y
    0x61, 0x51, 0x49, 0x45, 0x43,  # Z
    0x00, 0x7F, 0x41, 0x41, 0x00,  # [
    0x02, 0x04, 0x08, 0x10, 0x20,  # backslash
    0x00, 0x41, 0x41, 0x7F, 0x00,  # ]
    0x04, 0x02, 0x01, 0x02, 0x04,  # ^
    0x40, 0x40, 0x40, 0x40, 0x40,  # _
    0x00, 0x01, 0x02, 0x04, 0x00,  # `
    0x20, 0x54, 0x54, 0x54, 0x78,  # a
    0x7F, 0x48, 0x44, 0x44, 0x38,  # b
    0x38, 0x44, 0x44, 0x44, 0x20,  # c
    0x38, 0x44, 0x44, 0x48, 0x7F,  # d
    0x38, 0x54, 0x54, 0x54, 0x18,  # e
    0x08, 0x7E, 0x09, 0x01, 0x02,  # f
    0x08, 0x54, 0x54, 0x54, 0x3C,  # g
    0x7F, 0x08, 0x04, 0x04, 0x78,  # h
    0x00, 0x44, 0x7D, 0x40, 0x00,  # i
    0x20, 0x40, 0x44, 0x3D, 0x00,  # j
    0x7F, 0x10, 0x28, 0x44, 0x00,  # k
    0x00, 0x41, 0x7F, 0x40, 0x00,  # l
    0x7C, 0x04, 0x18, 0x04, 0x78,  # m
    0x7C, 0x08, 0x04, 0x04, 0x78,  # n
    0x38, 0x44, 0x44, 0x44, 0x38,  # o
    0x7C, 0x14, 0x14, 0x14, 0x08,  # p
    0x08, 0x14, 0x14, 0x18, 0x7C,  # q
    0x7C, 0x08, 0x04, 0x04, 0x08,  # r
    0x48, 0x54, 0x54, 0x54, 0x20,  # s
    0x04, 0x3F, 0x44, 0x40, 0x20,  # t
    0x3C, 0x40, 0x40, 0x20, 0x7C,  # u
    0x1C, 0x20, 0x40, 0x20, 0x1C,  # v
    0x3C, 0x40, 0x30, 0x40, 0x3C,  # w
    0x44, 0x28, 0x10, 0x28, 0x44,  # x
    0x0C, 0x50, 0x50, 0x50, 0x3C,  # y
    0x44, 0x64, 0x54, 0x4C, 0x44,  # z
    0x00, 0x08, 0x36, 0x41, 0x00,  # {
    0x00, 0x00, 0x7F, 0x00, 0x00,  # |
    0x00, 0x41, 0x36, 0x08, 0x00,  # }
    0x08, 0x04, 0x08, 0x10, 0x08,  # ~
))

# --- Lazy row-major bitmaps, one GLYPH_HEIGHT byte block per glyph ---
_BITMAPS = None


def _init_bitmaps():
    """Expand the column table into row-major cell bitmaps on first use."""
    global _BITMAPS
    if _BITMAPS is not None:
        return

    out = bytearray((_LAST - _FIRST + 1) * GLYPH_HEIGHT)
    for g in range(_LAST - _FIRST + 1):
        base = g * GLYPH_HEIGHT
        for col in range(_COLS):
            bits = _GLYPHS[g * _COLS + col]
            for row in range(_ROWS):
                if bits & (1 << row):
                    out[base + _Y_PAD + row] |= 0x80 >> (_X_PAD + col)
    _BITMAPS = bytes(out)


class BuiltinFont:
    """
    Built-in 7x13 monospace font.

    Attributes:
        height: Glyph height in pixels (13)
        max_w: Cell width in pixels (7)
        def_w: Advance for missing glyphs (7)
        count: Number of glyphs
        bpr: Bytes per bitmap row (1)
        prop: Always False (monospace)
    """

    height = GLYPH_HEIGHT
    max_w = GLYPH_WIDTH
    def_w = GLYPH_WIDTH
    count = _LAST - _FIRST + 1
    bpr = 1
    prop = False

    def get(self, cp: int):
        """Return (width, data_offset) for a codepoint, or None."""
        if _FIRST <= cp <= _LAST:
            return (GLYPH_WIDTH, (cp - _FIRST) * GLYPH_HEIGHT)
        return None

    def read(self, offset: int) -> bytes:
        """Row-major glyph bitmap (height x bpr bytes) at offset."""
        _init_bitmaps()
        return _BITMAPS[offset:offset + GLYPH_HEIGHT]

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
        return False
