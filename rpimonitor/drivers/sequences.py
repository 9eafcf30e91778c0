"""
SSD1306 Configuration Values
============================
Register values used by the init sequence and geometry limits.
"""

# =============================================================================
# Panel Geometry
# =============================================================================

MAX_WIDTH = 128               # Segment drivers
MAX_HEIGHT = 64               # Common drivers
PAGE_HEIGHT = 8               # Rows per GDDRAM page

DEFAULT_ADDRESS = 0x3C        # 0x3D when SA0 is pulled high

# =============================================================================
# Timing & Power
# =============================================================================

CLOCK_DIV_DEFAULT = 0x80      # Divide ratio 1, oscillator mid frequency
CHARGE_PUMP_ON = 0x14         # Internal DC/DC enabled
CHARGE_PUMP_OFF = 0x10
PRECHARGE_INTERNAL = 0xF1     # Phase 1: 1 DCLK, phase 2: 15 DCLK
VCOM_DETECT_DEFAULT = 0x40
CONTRAST_DEFAULT = 0xFF

# =============================================================================
# Addressing
# =============================================================================

MEMORY_MODE_HORIZONTAL = 0x00

# =============================================================================
# COM Pins Hardware Configuration (Register 0xDA)
# =============================================================================

COM_PINS_BASE = 0x02          # Bit 1 is always set
COM_PINS_ALTERNATIVE = 0x10   # Interleaved COM layout (cleared for sequential)
COM_PINS_LEFT_RIGHT_REMAP = 0x20  # Swap top and bottom halves


def com_pins(sequential: bool, swap_top_bottom: bool) -> int:
    """Value for CMD_SET_COM_PINS from the pin layout flags."""
    pins = COM_PINS_BASE
    if not sequential:
        pins |= COM_PINS_ALTERNATIVE
    if swap_top_bottom:
        pins |= COM_PINS_LEFT_RIGHT_REMAP
    return pins


# =============================================================================
# Transfers
# =============================================================================

MAX_TRANSFER = 1024           # Data bytes per I2C write (plus control byte)
