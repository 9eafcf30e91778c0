"""
Display driver layer.
"""
from .state import DisplayState, DriverState, LoopState
from .base import DisplaySink
from .ssd1306 import SSD1306
from .memory import MemoryDisplay

__all__ = [
    "DisplayState",
    "DriverState",
    "LoopState",
    "DisplaySink",
    "SSD1306",
    "MemoryDisplay",
]
