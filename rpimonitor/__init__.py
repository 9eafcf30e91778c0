"""
rpi-monitor
===========
Shows the hostname and IPv4 address of a Raspberry Pi (or any Linux box
with an I2C bus) on a small SSD1306 OLED panel, refreshed once a second.

Architecture
------------
The library is organized into layers:

    RefreshLoop     Fetch status -> compose -> present -> sleep
       │
       ├── StatusProvider  Hostname / interface address (HostStatus)
       │
       ├── FrameComposer   Builds one frame per tick
       │      │
       │      ├── resize        Nearest-neighbor image scaling
       │      ├── pack          Image -> 1-bit PackedFrame
       │      └── TextRenderer  Fixed-cell text, anchored bottom-right
       │             │
       │             └── BuiltinFont / BF2Font
       │
       └── DisplaySink     Panel contract
              │
              ├── SSD1306       OLED controller driver
              │      │
              │      └── I2CDevice   Low-level I2C communication
              │
              └── MemoryDisplay In-process panel (dry run, tests)

Quick Start
-----------
    from rpimonitor import SSD1306, HostStatus, RefreshLoop

    display = SSD1306.create(bus=1, width=128, height=32)
    RefreshLoop(display, HostStatus(), interface="eth0").run()

Advanced Usage
--------------
    # Dependency injection for testing or custom setup
    from rpimonitor import I2CDevice, SSD1306, FrameComposer

    i2c = I2CDevice.from_bus(1, frequency=400_000)
    display = SSD1306(i2c, height=64, rotated=True)
    display.init()

    frame = FrameComposer().compose(display.bounds(), image, "pi (10.0.0.2)")
    display.draw(display.bounds(), frame)

Module Structure
----------------
    rpimonitor/
    ├── __main__.py          Service entry point
    ├── config.py            Command line flags
    ├── loop.py              Refresh state machine
    ├── compose.py           Frame composition
    ├── status.py            Host status lookups
    ├── geometry.py          Point / Rect
    ├── errors.py            Exception hierarchy
    ├── buffer/
    │   ├── framebuffer.py   Packed 1-bit frame
    │   ├── resample.py      Nearest-neighbor resize
    │   └── pack.py          Image packing and centering
    ├── text/
    │   ├── builtin.py       Built-in 7x13 font
    │   ├── bf2.py           BF2 font format parser
    │   └── renderer.py      Text rendering engine
    ├── drivers/
    │   ├── base.py          DisplaySink protocol
    │   ├── ssd1306.py       SSD1306 controller driver
    │   ├── memory.py        In-memory panel
    │   ├── commands.py      Command constants
    │   ├── sequences.py     Init constants
    │   └── state.py         Driver and loop state machines
    └── hardware/
        └── i2c.py           I2C communication layer
"""

# Geometry and errors
from rpimonitor.geometry import Point, Rect, ZP
from rpimonitor.errors import MonitorError, ConfigError, TransportError

# Core buffer classes
from rpimonitor.buffer import PackedFrame, resize, pack, ON, OFF

# Text rendering
from rpimonitor.text import BF2Font, BuiltinFont, TextRenderer

# Hardware layer
from rpimonitor.hardware import I2CDevice

# Driver layer
from rpimonitor.drivers import (
    SSD1306, MemoryDisplay, DisplaySink, DisplayState, DriverState, LoopState,
)

# Service
from rpimonitor.compose import FrameComposer
from rpimonitor.status import StatusProvider, HostStatus, format_status
from rpimonitor.loop import RefreshLoop

__all__ = [
    # Service
    "RefreshLoop",
    "FrameComposer",
    "StatusProvider",
    "HostStatus",
    "format_status",
    # Graphics
    "PackedFrame",
    "resize",
    "pack",
    "Point",
    "Rect",
    "ZP",
    # Text
    "TextRenderer",
    "BuiltinFont",
    "BF2Font",
    # Drivers
    "SSD1306",
    "MemoryDisplay",
    "DisplaySink",
    "DisplayState",
    "DriverState",
    "LoopState",
    # Hardware
    "I2CDevice",
    # Errors
    "MonitorError",
    "ConfigError",
    "TransportError",
    # Colors
    "ON",
    "OFF",
]

__version__ = "2.0.0"
