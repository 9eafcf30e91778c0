"""
PackedFrame - 1-bit Vertical LSB Frame Buffer
=============================================
The native memory layout of SSD1306 class OLED controllers.

Layout:
    - Rows are grouped in pages of 8.
    - Each byte holds 8 vertically adjacent pixels of one column.
    - Bit 0 is the topmost row of the byte.
    - Bytes run left to right inside a page, pages top to bottom.

        byte offset = (y >> 3) * width + x
        bit mask    = 1 << (y & 7)

A 128x32 frame is 4 pages of 128 bytes (512 bytes total), which is
exactly what the controller expects in horizontal addressing mode.
"""

try:
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from PIL import Image
except ImportError:
    pass

from rpimonitor.geometry import Point, Rect, ZP

# =============================================================================
# Color Constants
# =============================================================================

OFF = 0
ON = 1

# =============================================================================
# Bit Manipulation Constants
# =============================================================================

_BITS_PER_BYTE = 8
_PAGE_SHIFT = 3
_BYTE_MASK = 0xFF

_BIT_MASKS = tuple(1 << i for i in range(_BITS_PER_BYTE))
_INV_MASKS = tuple(~(1 << i) & _BYTE_MASK for i in range(_BITS_PER_BYTE))


def page_count(height: int) -> int:
    """Number of 8-row pages needed for height rows."""
    return (height + _BITS_PER_BYTE - 1) >> _PAGE_SHIFT


def pixel_index(width: int, x: int, y: int) -> tuple[int, int]:
    """Map (x, y) to (byte offset, bit mask) in a frame of the given width."""
    return (y >> _PAGE_SHIFT) * width + x, _BIT_MASKS[y & 7]


class PackedFrame:
    """
    Monochrome frame in vertical LSB byte order.

    Every byte is initialized; a new frame is all OFF.
    """

    def __init__(self, width: int, height: int, buffer: bytearray | None = None):
        if width < 0 or height < 0:
            raise ValueError(f"invalid frame size {width}x{height}")

        self.width = width
        self.height = height
        self._pages = page_count(height)
        self._buffer_size = width * self._pages

        if buffer is None:
            self._buffer = bytearray(self._buffer_size)
        else:
            if len(buffer) != self._buffer_size:
                raise ValueError(
                    f"Buffer must be {self._buffer_size} bytes, got {len(buffer)}"
                )
            self._buffer = bytearray(buffer)

    @classmethod
    def for_bounds(cls, bounds: Rect) -> "PackedFrame":
        return cls(bounds.width, bounds.height)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def buffer(self) -> bytearray: return self._buffer

    @property
    def pages(self) -> int: return self._pages

    @property
    def bounds(self) -> Rect: return Rect.of_size(self.width, self.height)

    @property
    def size(self) -> tuple[int, int]: return (self.width, self.height)

    def __len__(self) -> int:
        return self._buffer_size

    def __eq__(self, other) -> bool:
        if not isinstance(other, PackedFrame):
            return NotImplemented
        return self.size == other.size and self._buffer == other._buffer

    def __repr__(self) -> str:
        return f"PackedFrame({self.width}x{self.height}, {self._buffer_size} bytes)"

    # =========================================================================
    # Pixel Ops
    # =========================================================================

    def pixel(self, x: int, y: int, color: int = ON) -> None:
        """Set or clear a pixel. Out of range coordinates are ignored."""
        if not (0 <= x < self.width and 0 <= y < self.height): return
        idx = (y >> _PAGE_SHIFT) * self.width + x
        if color: self._buffer[idx] |= _BIT_MASKS[y & 7]
        else: self._buffer[idx] &= _INV_MASKS[y & 7]

    def pixel_or(self, x: int, y: int) -> None:
        """Turn a pixel on without touching its neighbours (no bounds check)."""
        self._buffer[(y >> _PAGE_SHIFT) * self.width + x] |= _BIT_MASKS[y & 7]

    def get_pixel(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height): return OFF
        idx = (y >> _PAGE_SHIFT) * self.width + x
        return ON if self._buffer[idx] & _BIT_MASKS[y & 7] else OFF

    # =========================================================================
    # Buffer Ops
    # =========================================================================

    def clear(self, color: int = OFF) -> None:
        """Fill the whole frame with a color."""
        fill = _BYTE_MASK if color else 0x00
        self._buffer[:] = bytes((fill,)) * self._buffer_size
        if color and self.height & 7:
            # Keep the unused rows of the last page off
            last = (self._pages - 1) * self.width
            mask = (1 << (self.height & 7)) - 1
            for x in range(self.width):
                self._buffer[last + x] = mask

    def page(self, index: int) -> memoryview:
        """Read-only view of one 8-row page."""
        start = index * self.width
        return memoryview(self._buffer)[start:start + self.width].toreadonly()

    def copy(self) -> "PackedFrame":
        return PackedFrame(self.width, self.height, self._buffer)

    def blit(self, r: Rect, src: "PackedFrame", sp: Point = ZP) -> None:
        """
        Copy pixels of src into rectangle r of this frame.

        Pixel (x, y) of r takes src pixel (x - r.x0 + sp.x, y - r.y0 + sp.y).
        Source pixels outside src are written as OFF.
        """
        r = r.intersect(self.bounds)
        if r.empty:
            return

        dx, dy = sp.sub(r.min)

        # Whole pages with no shift: copy rows of bytes directly
        if (dy == 0 and src.width >= r.x1 + dx and r.x0 + dx >= 0
                and r.y0 & 7 == 0 and src.height >= r.y1
                and (r.y1 & 7 == 0 or r.y1 == self.height == src.height)):
            for p in range(r.y0 >> _PAGE_SHIFT, page_count(r.y1)):
                dst = p * self.width
                s = p * src.width + dx
                self._buffer[dst + r.x0:dst + r.x1] = src._buffer[s + r.x0:s + r.x1]
            return

        for y in range(r.y0, r.y1):
            for x in range(r.x0, r.x1):
                self.pixel(x, y, src.get_pixel(x + dx, y + dy))

    # =========================================================================
    # Format Conversion
    # =========================================================================

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)

    def to_image(self) -> "Image.Image":
        """Render the frame as a Pillow mode "1" image (on = white)."""
        from PIL import Image

        img = Image.new("1", (self.width, self.height), 0)
        px = img.load()
        for y in range(self.height):
            row = (y >> _PAGE_SHIFT) * self.width
            mask = _BIT_MASKS[y & 7]
            for x in range(self.width):
                if self._buffer[row + x] & mask:
                    px[x, y] = 255
        return img
