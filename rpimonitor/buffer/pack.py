"""
PixelPacker - Image to PackedFrame Conversion
=============================================
Thresholds an arbitrary Pillow image to 1 bit and writes it, centered,
into a PackedFrame of the panel's size.

A source smaller than the panel is centered on an all-off canvas; a
larger one is cropped evenly on both sides. Offsets use integer
division truncating toward zero, so an odd difference puts the extra
pixel on the right/bottom for a smaller source.
"""

from PIL import Image

from rpimonitor.geometry import Rect
from .framebuffer import PackedFrame, pixel_index

_MONO_THRESHOLD = 0x80  # Channel value at or above which a pixel is on
_ALPHA_MAX = 0xFF


def default_threshold(pixel: tuple) -> bool:
    """
    On if any colour channel, premultiplied by alpha, reaches mid scale.

    Args:
        pixel: (r, g, b, a) tuple, 8 bits per channel
    """
    r, g, b, a = pixel
    if a != _ALPHA_MAX:
        r, g, b = r * a // _ALPHA_MAX, g * a // _ALPHA_MAX, b * a // _ALPHA_MAX
    return max(r, g, b) >= _MONO_THRESHOLD


def _trunc_half(n: int) -> int:
    """n / 2 rounded toward zero."""
    return -((-n) // 2) if n < 0 else n // 2


def center_offset(bounds: Rect, size: tuple[int, int]) -> tuple[int, int]:
    """Offset that centers an image of size inside bounds."""
    return (_trunc_half(bounds.width - size[0]),
            _trunc_half(bounds.height - size[1]))


def pack(bounds: Rect, src: Image.Image, threshold=None) -> PackedFrame:
    """
    Convert src into a PackedFrame of bounds size.

    Args:
        bounds: Panel rectangle; the frame has bounds.width x bounds.height
        src: Source image, any mode
        threshold: Callable (r, g, b, a) -> bool; default_threshold if None

    Returns:
        Fully initialized PackedFrame
    """
    if threshold is None:
        threshold = default_threshold

    frame = PackedFrame.for_bounds(bounds)
    w, h = bounds.size
    src_w, src_h = src.size
    if w == 0 or h == 0 or src_w == 0 or src_h == 0:
        return frame

    ox, oy = center_offset(bounds, src.size)

    # Visible part of the source after centering, in frame coordinates
    x0, x1 = max(0, ox), min(w, ox + src_w)
    y0, y1 = max(0, oy), min(h, oy + src_h)
    if x0 >= x1 or y0 >= y1:
        return frame

    rgba = src if src.mode == "RGBA" else src.convert("RGBA")
    px = rgba.load()
    buf = frame.buffer
    for y in range(y0, y1):
        sy = y - oy
        row, mask = pixel_index(w, 0, y)
        for x in range(x0, x1):
            if threshold(px[x - ox, sy]):
                buf[row + x] |= mask
    return frame
