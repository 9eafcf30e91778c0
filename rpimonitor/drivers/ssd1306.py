"""
SSD1306 - OLED Display Driver
=============================
Driver for SSD1306 class monochrome OLED panels on I2C (128x32, 128x64,
and smaller).

Architecture
------------
  - I2CDevice: Low-level bus transfers
  - DriverState: State tracking
  - SSD1306: Panel logic, implements DisplaySink

The controller's GDDRAM is organized in 8-row pages with one byte per
column, bit 0 at the top: the PackedFrame layout. A full-size frame is
written as-is in horizontal addressing mode.

The driver keeps the last frame it sent. Each draw() transmits only the
page and column span that changed, and nothing at all if the frame is
identical, which keeps a once-per-second refresh of a mostly static
screen down to a few bytes on the bus.
"""
import logging

try:
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from rpimonitor.hardware.i2c import I2CDevice
except ImportError:
    pass

from rpimonitor.buffer.framebuffer import PackedFrame
from rpimonitor.errors import ConfigError, TransportError
from rpimonitor.geometry import Point, Rect, ZP
from .base import DisplaySink
from .state import DriverState
from . import commands as CMD
from . import sequences as SEQ

logger = logging.getLogger(__name__)


class SSD1306(DisplaySink):
    """
    SSD1306 OLED driver.

    Example:
        from rpimonitor.hardware import I2CDevice
        from rpimonitor.drivers import SSD1306

        with I2CDevice.from_bus(1) as i2c:
            oled = SSD1306(i2c, width=128, height=32)
            oled.init()
            oled.draw(oled.bounds(), frame, ZP)
    """

    def __init__(
        self,
        i2c: "I2CDevice",
        width: int = 128,
        height: int = 32,
        rotated: bool = False,
        sequential: bool = False,
        swap_top_bottom: bool = False,
    ):
        """
        Args:
            i2c: Configured I2CDevice
            width: Panel width in pixels (1-128)
            height: Panel height in pixels (8-64, multiple of 8)
            rotated: Rotate the image by 180 degrees
            sequential: Sequential instead of interleaved COM pin layout
            swap_top_bottom: Swap the top and bottom COM halves

        Raises:
            ConfigError: If the geometry is not supported
        """
        if not (0 < width <= SEQ.MAX_WIDTH):
            raise ConfigError(f"invalid width {width} (1-{SEQ.MAX_WIDTH})")
        if not (0 < height <= SEQ.MAX_HEIGHT) or height % SEQ.PAGE_HEIGHT:
            raise ConfigError(
                f"invalid height {height} (multiple of {SEQ.PAGE_HEIGHT}, max {SEQ.MAX_HEIGHT})"
            )

        self._i2c = i2c
        self._rect = Rect.of_size(width, height)
        self._pages = height // SEQ.PAGE_HEIGHT
        self._rotated = rotated
        self._sequential = sequential
        self._swap = swap_top_bottom
        self._state = DriverState()
        self._prev: bytes | None = None  # Last frame known to be on the panel

    @classmethod
    def create(
        cls,
        bus: "str | int" = 1,
        address: int = SEQ.DEFAULT_ADDRESS,
        frequency: int | None = None,
        **opts,
    ) -> "SSD1306":
        """
        Open the bus, construct and initialize the driver.

        Args:
            bus: I2C bus number or /dev/i2c-N path
            address: 7-bit device address
            frequency: Bus clock in Hz
            **opts: Geometry and pin options for SSD1306()

        Raises:
            ConfigError: If the bus cannot be opened or the panel does not
                accept the init sequence
        """
        from rpimonitor.hardware.i2c import I2CDevice

        i2c = I2CDevice.from_bus(bus, address, frequency)
        try:
            dev = cls(i2c, **opts)
            dev.init()
        except ConfigError:
            i2c.deinit()
            raise
        except TransportError as e:
            i2c.deinit()
            raise ConfigError(f"panel at 0x{address:02X} did not respond: {e}") from e
        return dev

    def deinit(self):
        """Release the bus. The panel keeps showing the last frame."""
        self._i2c.deinit()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.deinit()
        return False

    # =========================================================================
    # Initialization
    # =========================================================================

    def _init_sequence(self) -> list:
        if self._rotated:
            seg, scan = CMD.CMD_SEG_REMAP, CMD.CMD_COM_SCAN_INC
        else:
            seg, scan = CMD.CMD_SEG_REMAP | 0x01, CMD.CMD_COM_SCAN_DEC

        return [
            (CMD.CMD_DISPLAY_OFF,),
            (CMD.CMD_SET_CLOCK_DIV, SEQ.CLOCK_DIV_DEFAULT),
            (CMD.CMD_SET_MULTIPLEX, self._rect.height - 1),
            (CMD.CMD_SET_DISPLAY_OFFSET, 0x00),
            (CMD.CMD_SET_START_LINE | 0x00,),
            (CMD.CMD_CHARGE_PUMP, SEQ.CHARGE_PUMP_ON),
            (CMD.CMD_MEMORY_MODE, SEQ.MEMORY_MODE_HORIZONTAL),
            (seg,),
            (scan,),
            (CMD.CMD_SET_COM_PINS, SEQ.com_pins(self._sequential, self._swap)),
            (CMD.CMD_SET_CONTRAST, SEQ.CONTRAST_DEFAULT),
            (CMD.CMD_SET_PRECHARGE, SEQ.PRECHARGE_INTERNAL),
            (CMD.CMD_SET_VCOM_DETECT, SEQ.VCOM_DETECT_DEFAULT),
            (CMD.CMD_DISPLAY_RESUME,),
            (CMD.CMD_NORMAL,),
            (CMD.CMD_DEACTIVATE_SCROLL,),
            (CMD.CMD_DISPLAY_ON,),
        ]

    def init(self):
        """
        Configure the controller and turn the panel on.

        Raises:
            TransportError: If the bus write fails
        """
        for cmd in self._init_sequence():
            self._i2c.write_command(*cmd)
        self._prev = None
        self._state.inverted = False
        self._state.on_init_complete()
        logger.debug("SSD1306 %dx%d ready: %r", self._rect.width, self._rect.height, self._state)

    # =========================================================================
    # DisplaySink
    # =========================================================================

    def bounds(self) -> Rect:
        return self._rect

    def draw(self, rect: Rect, frame: PackedFrame, origin: Point = ZP) -> None:
        """
        Push frame pixels to the panel.

        A frame of panel size drawn over the whole panel from (0, 0) is sent
        directly; anything else is first merged into a copy of the current
        panel contents.

        Raises:
            TransportError: If the bus write fails
        """
        if rect == self._rect and origin == ZP and frame.size == self._rect.size:
            nxt = frame.buffer
        else:
            merged = PackedFrame(self._rect.width, self._rect.height, self._prev)
            merged.blit(rect, frame, origin)
            nxt = merged.buffer
        self._draw_internal(nxt)

    def _dirty_window(self, nxt) -> tuple | None:
        """(first page, last page, first col, last col) that changed, or None."""
        w = self._rect.width
        if self._prev is None:
            return 0, self._pages - 1, 0, w - 1

        p0 = p1 = c0 = c1 = None
        prev = self._prev
        for p in range(self._pages):
            base = p * w
            if prev[base:base + w] == nxt[base:base + w]:
                continue
            first = next(c for c in range(w) if prev[base + c] != nxt[base + c])
            last = next(c for c in range(w - 1, -1, -1) if prev[base + c] != nxt[base + c])
            if p0 is None:
                p0, c0, c1 = p, first, last
            else:
                c0, c1 = min(c0, first), max(c1, last)
            p1 = p
        if p0 is None:
            return None
        return p0, p1, c0, c1

    def _draw_internal(self, nxt):
        window = self._dirty_window(nxt)
        if window is None:
            return

        p0, p1, c0, c1 = window
        w = self._rect.width
        if c0 == 0 and c1 == w - 1:
            data = bytes(nxt[p0 * w:(p1 + 1) * w])
        else:
            data = b"".join(bytes(nxt[p * w + c0:p * w + c1 + 1]) for p in range(p0, p1 + 1))

        try:
            self._i2c.write_command(CMD.CMD_COLUMN_ADDR, c0, c1)
            self._i2c.write_command(CMD.CMD_PAGE_ADDR, p0, p1)
            sent = self._i2c.write_data(data)
        except TransportError:
            # Panel RAM is in an unknown state; resend everything next time
            self._prev = None
            raise

        self._prev = bytes(nxt)
        self._state.on_frame_sent(sent)

    # =========================================================================
    # Hardware Features
    # =========================================================================

    def invert(self, inverted: bool = True):
        """Hardware inversion (instant, no redraw)."""
        self._i2c.write_command(CMD.CMD_INVERT if inverted else CMD.CMD_NORMAL)
        self._state.inverted = inverted

    def set_contrast(self, level: int):
        if not 0 <= level <= 0xFF:
            raise ValueError("contrast must be 0-255")
        self._i2c.write_command(CMD.CMD_SET_CONTRAST, level)

    def halt(self):
        """Turn the panel off; RAM is kept and init() turns it back on."""
        self._i2c.write_command(CMD.CMD_DISPLAY_OFF)
        self._state.on_halt()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def state(self) -> DriverState:
        return self._state

    @property
    def pages(self) -> int:
        return self._pages
