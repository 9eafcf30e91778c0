"""
Nearest neighbor resampling.

Pillow's own Image.NEAREST samples pixel centres with float math; this
module uses pure integer indexing so output is identical across Pillow
versions and can be checked pixel by pixel.
"""

from PIL import Image


def _sample_index(i: int, src_len: int, dst_len: int) -> int:
    return i * src_len // dst_len


def resize(src: Image.Image, size: tuple[int, int]) -> Image.Image:
    """
    Scale src to size with nearest neighbor sampling.

    Works for both upscale and downscale. The source image is not touched;
    the result is a new image in the same mode.

    Args:
        src: Source image (any mode)
        size: Target (width, height)

    Returns:
        New image of exactly size

    Raises:
        ValueError: On negative target size, or an empty source with a
            non-empty target
    """
    w, h = size
    if w < 0 or h < 0:
        raise ValueError(f"invalid target size {w}x{h}")

    dst = Image.new(src.mode, (w, h))
    if src.mode == "P" and src.getpalette():
        dst.putpalette(src.getpalette())
    if "transparency" in src.info:
        # Transparent key (tRNS); convert("RGBA") turns it into alpha later
        dst.info["transparency"] = src.info["transparency"]
    if w == 0 or h == 0:
        return dst

    src_w, src_h = src.size
    if src_w == 0 or src_h == 0:
        raise ValueError("cannot resize an empty image")

    sx = [_sample_index(x, src_w, w) for x in range(w)]
    spx = src.load()
    dpx = dst.load()
    for y in range(h):
        sy = _sample_index(y, src_h, h)
        for x in range(w):
            dpx[x, y] = spx[sx[x], sy]
    return dst
