"""
Command line configuration.

Flag names are the service's historical ones (single dash, one letter
for the panel options), which is why -h means height and help is --help only.
"""
import argparse
import logging
import re
from decimal import Decimal

from rpimonitor.drivers import sequences as SEQ
from rpimonitor.errors import ConfigError

_FREQ_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(hz|khz|mhz|ghz)?\s*$", re.IGNORECASE)
_FREQ_UNITS = {
    None: 1,
    "hz": 1,
    "khz": 1_000,
    "mhz": 1_000_000,
    "ghz": 1_000_000_000,
}


def parse_frequency(text: str) -> int:
    """
    Parse a bus clock like "400kHz", "1MHz", "1.7MHz" or "100000".

    Returns:
        Frequency in Hz

    Raises:
        ValueError: If text is not a positive frequency
    """
    m = _FREQ_RE.match(text)
    if not m:
        raise ValueError(f"invalid frequency {text!r}")
    value = Decimal(m.group(1)) * _FREQ_UNITS[m.group(2) and m.group(2).lower()]
    if value <= 0 or value != value.to_integral_value():
        raise ValueError(f"invalid frequency {text!r}")
    return int(value)


def _frequency_arg(text: str) -> int:
    try:
        return parse_frequency(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _address_arg(text: str) -> int:
    try:
        addr = int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid address {text!r}") from None
    if not 0x03 <= addr <= 0x77:
        raise argparse.ArgumentTypeError(f"address 0x{addr:02X} out of range")
    return addr


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rpi-monitor",
        description="Show hostname and IPv4 address on an SSD1306 OLED over I2C",
        add_help=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 128x32 panel on /dev/i2c-1, address of eth0
  rpi-monitor

  # 128x64 panel mounted upside down, Wi-Fi address, fast bus
  rpi-monitor -h 64 -r -inet wlan0 -hz 1MHz

  # No hardware: render to memory and save the last frame
  rpi-monitor --dry-run --snapshot frame.png
        """
    )

    parser.add_argument('--help', action='help',
                        help='Show this help message and exit')

    parser.add_argument('-i2c', dest='i2c', default='1',
                        help='I2C bus to use (default: 1)')
    parser.add_argument('-inet', dest='inet', default='eth0',
                        help='Net interface to query for IPv4 (default: eth0)')
    parser.add_argument('-hz', dest='hz', type=_frequency_arg, default=None,
                        help='I2C bus speed, e.g. 400kHz')
    parser.add_argument('-h', dest='height', type=int, default=32,
                        help='Display height (default: 32)')
    parser.add_argument('-w', dest='width', type=int, default=128,
                        help='Display width (default: 128)')
    parser.add_argument('-r', dest='rotated', action='store_true',
                        help='Rotate the display by 180 degrees')
    parser.add_argument('-n', dest='sequential', action='store_true',
                        help='Sequential/interleaved hardware pin layout')
    parser.add_argument('-s', dest='swap_top_bottom', action='store_true',
                        help='Swap top/bottom hardware pin layout')

    parser.add_argument('--address', type=_address_arg, default=SEQ.DEFAULT_ADDRESS,
                        help='I2C address of the panel (default: 0x3C)')
    parser.add_argument('--image', default=None,
                        help='Background image file (default: blank)')
    parser.add_argument('--font', default=None,
                        help='BF2 font file (default: built-in 7x13)')
    parser.add_argument('--interval', type=float, default=1.0,
                        help='Seconds between refreshes (default: 1.0)')
    parser.add_argument('--dry-run', action='store_true',
                        help='Draw to memory instead of the panel')
    parser.add_argument('--snapshot', default=None,
                        help='With --dry-run, save the last frame to this file on exit')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: INFO)')
    return parser


class Config:
    """
    Validated process configuration.

    Attributes mirror the command line flags.
    """

    def __init__(
        self,
        i2c: str = "1",
        inet: str = "eth0",
        hz: int | None = None,
        width: int = 128,
        height: int = 32,
        rotated: bool = False,
        sequential: bool = False,
        swap_top_bottom: bool = False,
        address: int = SEQ.DEFAULT_ADDRESS,
        image: str | None = None,
        font: str | None = None,
        interval: float = 1.0,
        dry_run: bool = False,
        snapshot: str | None = None,
        log_level: str = "INFO",
    ):
        if width <= 0 or height <= 0:
            raise ConfigError(f"invalid display size {width}x{height}")
        if interval <= 0:
            raise ConfigError(f"invalid interval {interval}")

        self.i2c = i2c
        self.inet = inet
        self.hz = hz
        self.width = width
        self.height = height
        self.rotated = rotated
        self.sequential = sequential
        self.swap_top_bottom = swap_top_bottom
        self.address = address
        self.image = image
        self.font = font
        self.interval = interval
        self.dry_run = dry_run
        self.snapshot = snapshot
        self.log_level = log_level

    @classmethod
    def from_args(cls, argv=None) -> "Config":
        """
        Parse argv (sys.argv[1:] if None).

        Raises:
            SystemExit: On --help or unparsable flags (argparse)
            ConfigError: On values that parse but make no sense
        """
        args = build_parser().parse_args(argv)
        return cls(**vars(args))

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level)

    def driver_options(self) -> dict:
        """Keyword arguments for SSD1306()."""
        return {
            "width": self.width,
            "height": self.height,
            "rotated": self.rotated,
            "sequential": self.sequential,
            "swap_top_bottom": self.swap_top_bottom,
        }

    def __repr__(self) -> str:
        return (
            f"Config(i2c={self.i2c!r}, inet={self.inet!r}, hz={self.hz}, "
            f"size={self.width}x{self.height}, rotated={self.rotated}, "
            f"sequential={self.sequential}, swap={self.swap_top_bottom}, "
            f"dry_run={self.dry_run})"
        )
