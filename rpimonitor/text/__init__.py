"""
Text rendering subsystem.

Modules:
    builtin: Built-in 7x13 monospace font
    bf2: BF2 font format parser
    renderer: Anchored text rendering onto a PackedFrame
"""
from .builtin import BuiltinFont, GLYPH_WIDTH, GLYPH_HEIGHT
from .bf2 import BF2Font
from .renderer import TextRenderer, ANCHORS

__all__ = [
    "BuiltinFont",
    "BF2Font",
    "TextRenderer",
    "ANCHORS",
    "GLYPH_WIDTH",
    "GLYPH_HEIGHT",
]
