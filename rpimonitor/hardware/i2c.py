"""
I2CDevice - Low-Level I2C Communication for OLED Controllers
============================================================
Handles the bus side of talking to an SSD1306: opening /dev/i2c-N,
locking the bus, and framing command and data transfers with the
controller's control byte.

Separating this from the display driver allows:
- Testing the driver against a fake bus (anything with try_lock,
  unlock, writeto and deinit)
- Cleaner driver code (focus on display logic)
"""
import logging
import time

try:
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from busio import I2C
except ImportError:
    pass

from rpimonitor.errors import ConfigError, TransportError
from rpimonitor.drivers import commands as CMD
from rpimonitor.drivers import sequences as SEQ

logger = logging.getLogger(__name__)

_DEV_PREFIX = "/dev/i2c-"


def parse_bus_id(bus: "str | int") -> int:
    """Accept 1, "1" or "/dev/i2c-1"."""
    text = str(bus)
    if text.startswith(_DEV_PREFIX):
        text = text[len(_DEV_PREFIX):]
    try:
        bus_id = int(text)
    except ValueError:
        raise ConfigError(f"invalid I2C bus {bus!r}") from None
    if bus_id < 0:
        raise ConfigError(f"invalid I2C bus {bus!r}")
    return bus_id


class I2CDevice:
    """
    One I2C peripheral (address) on a CircuitPython style bus object.

    Attributes:
        DEFAULT_FREQUENCY: Bus clock when none is requested (400kHz)
        LOCK_TIMEOUT: Seconds to wait for the bus lock
    """
    DEFAULT_FREQUENCY = 400_000
    LOCK_TIMEOUT = 1.0

    def __init__(
        self,
        i2c: "I2C",
        address: int = SEQ.DEFAULT_ADDRESS,
        max_transfer: int = SEQ.MAX_TRANSFER,
        lock_timeout: float = LOCK_TIMEOUT,
    ):
        """
        Args:
            i2c: Open bus (busio.I2C, ExtendedI2C or a test double)
            address: 7-bit device address
            max_transfer: Maximum data bytes per write
            lock_timeout: Seconds to wait for the bus lock
        """
        self.i2c = i2c
        self.address = address
        self._max_transfer = max_transfer
        self._lock_timeout = lock_timeout

    @classmethod
    def from_bus(
        cls,
        bus: "str | int" = 1,
        address: int = SEQ.DEFAULT_ADDRESS,
        frequency: int | None = None,
    ) -> "I2CDevice":
        """
        Open a Linux I2C bus through Adafruit Blinka.

        Args:
            bus: Bus number or /dev/i2c-N path
            address: 7-bit device address
            frequency: Bus clock in Hz (default 400kHz)

        Raises:
            ConfigError: If the bus cannot be opened
        """
        bus_id = parse_bus_id(bus)
        frequency = frequency or cls.DEFAULT_FREQUENCY

        try:
            from adafruit_extended_bus import ExtendedI2C
        except (ImportError, NotImplementedError, RuntimeError) as e:
            raise ConfigError(f"I2C support unavailable: {e}") from e

        try:
            i2c = ExtendedI2C(bus_id, frequency=frequency)
        except (OSError, ValueError) as e:
            raise ConfigError(f"cannot open {_DEV_PREFIX}{bus_id}: {e}") from e

        logger.info("Using %s%d, address 0x%02X, %d Hz", _DEV_PREFIX, bus_id, address, frequency)
        return cls(i2c, address)

    def deinit(self):
        """Release the bus."""
        self.i2c.deinit()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.deinit()
        return False

    def write_command(self, *cmds: int):
        """
        Send one or more command bytes in a single transfer.

        Args:
            cmds: Command and parameter bytes (0x00-0xFF)
        """
        payload = bytearray(len(cmds) + 1)
        payload[0] = CMD.CTRL_COMMAND
        payload[1:] = bytes(cmds)
        self._write(payload)

    def write_data(self, data) -> int:
        """
        Send GDDRAM data, split into transfers of at most max_transfer bytes.

        Returns:
            Number of data bytes written
        """
        view = memoryview(data)
        step = self._max_transfer
        for start in range(0, len(view), step):
            chunk = view[start:start + step]
            payload = bytearray(len(chunk) + 1)
            payload[0] = CMD.CTRL_DATA
            payload[1:] = chunk
            self._write(payload)
        return len(view)

    def _write(self, payload: bytearray):
        start = time.monotonic()
        while not self.i2c.try_lock():
            if time.monotonic() - start > self._lock_timeout:
                raise TransportError(f"I2C lock timeout (>{self._lock_timeout}s)")
            time.sleep(0.001)
        try:
            self.i2c.writeto(self.address, payload)
        except OSError as e:
            raise TransportError(f"I2C write to 0x{self.address:02X} failed: {e}") from e
        finally:
            self.i2c.unlock()
