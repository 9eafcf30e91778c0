"""
BF2 Font Format Parser
======================
Loads bitmap fonts in the BF2 (Binary Font v2) format so the status line
can use a font other than the built-in 7x13 one.

Format Layout:
    [Header: 12 bytes]
    [Index: count x entry_size bytes]
    [Bitmap data: variable]

Header Structure (12 bytes, little-endian):
    - Magic: "B2" (2 bytes)
    - Version: 1 byte
    - Flags: 1 byte (bit 0=proportional, bit 1=32-bit codepoints)
    - Max width: 1 byte
    - Height: 1 byte
    - Glyph count: 2 bytes
    - Bytes per row: 1 byte
    - Default width: 1 byte
    - Reserved: 2 bytes

Index entry: codepoint (2 or 4 bytes), width (1), data offset (3).
Glyph bitmaps are row-major, MSB first, height x bytes_per_row bytes.

The whole file is read into memory at load time; fonts for a 128 pixel
wide panel are a few kilobytes.
"""

import struct

_BF2_MAGIC = b"B2"
_BF2_HEADER_SIZE = 12
_FLAG_PROPORTIONAL = 0x01
_FLAG_32BIT = 0x02


class BF2Font:
    """
    BF2 font held in memory.

    Attributes:
        height: Glyph height in pixels
        max_w: Maximum glyph width in pixels (the monospace cell width)
        def_w: Default width for missing glyphs
        count: Number of glyphs in the font
        bpr: Bytes per row of glyph bitmap data
        prop: True if proportional (variable-width) font
    """

    def __init__(self, path: str):
        """
        Open and parse a BF2 font file.

        Raises:
            ValueError: If the file is not a valid BF2 font
            OSError: If the file cannot be read
        """
        with open(path, "rb") as f:
            data = f.read()
        self._parse(data)

    @classmethod
    def from_bytes(cls, data: bytes) -> "BF2Font":
        font = cls.__new__(cls)
        font._parse(bytes(data))
        return font

    def _parse(self, data: bytes):
        if data[:2] != _BF2_MAGIC:
            raise ValueError("Invalid BF2 font file")
        if len(data) < _BF2_HEADER_SIZE:
            raise ValueError("Truncated BF2 header")

        (self.version, flags, self.max_w, self.height, self.count,
         self.bpr, self.def_w, _) = struct.unpack("<BBBBHBBH", data[2:_BF2_HEADER_SIZE])

        self.prop = bool(flags & _FLAG_PROPORTIONAL)
        self.entry_size = 8 if (flags & _FLAG_32BIT) else 6
        data_start = _BF2_HEADER_SIZE + self.count * self.entry_size
        if len(data) < data_start:
            raise ValueError("Truncated BF2 glyph index")

        glyph_size = self.height * self.bpr
        self._data = data[data_start:]

        self.index = {}
        fmt = "<IB" if self.entry_size == 8 else "<HB"
        cp_size = self.entry_size - 4
        for i in range(self.count):
            off = _BF2_HEADER_SIZE + i * self.entry_size
            cp, w = struct.unpack(fmt, data[off:off + cp_size + 1])
            o0, o1, o2 = data[off + cp_size + 1:off + self.entry_size]
            offset = o0 | (o1 << 8) | (o2 << 16)
            if offset + glyph_size > len(self._data):
                raise ValueError(f"Glyph U+{cp:04X} data out of range")
            self.index[cp] = (w, offset)

    def get(self, cp: int):
        """Return (width, data_offset) for a codepoint, or None."""
        return self.index.get(cp)

    def read(self, offset: int) -> bytes:
        """Raw glyph bitmap (height x bytes_per_row) at offset."""
        return self._data[offset:offset + self.height * self.bpr]

    def close(self):
        self._data = b""
        self.index = {}

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
        return False
