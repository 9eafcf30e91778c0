"""
Buffer subsystem - frame buffer and image preparation.

Modules:
    framebuffer: 1-bit vertical LSB frame (panel memory layout)
    resample: Nearest neighbor image scaling
    pack: Image thresholding and centering into a frame
"""
from .framebuffer import PackedFrame, ON, OFF, page_count, pixel_index
from .resample import resize
from .pack import pack, default_threshold, center_offset

__all__ = [
    "PackedFrame",
    "ON",
    "OFF",
    "page_count",
    "pixel_index",
    "resize",
    "pack",
    "default_threshold",
    "center_offset",
]
