"""
SSD1306 Command Constants
=========================
Command bytes for the SSD1306 OLED controller, grouped by function.

Reference: SSD1306 Datasheet Section 9 (Command Table)
"""

# =============================================================================
# I2C Control Bytes (first byte of every transfer)
# =============================================================================

CTRL_COMMAND = 0x00           # Co=0, D/C#=0: following bytes are commands
CTRL_DATA = 0x40              # Co=0, D/C#=1: following bytes are GDDRAM data

# =============================================================================
# Fundamental
# =============================================================================

CMD_SET_CONTRAST = 0x81       # Contrast, 1 data byte (0x00-0xFF)
CMD_DISPLAY_RESUME = 0xA4     # Output follows RAM contents
CMD_DISPLAY_ALL_ON = 0xA5     # Output ignores RAM, all pixels on
CMD_NORMAL = 0xA6             # 1 in RAM = pixel on
CMD_INVERT = 0xA7             # 0 in RAM = pixel on
CMD_DISPLAY_OFF = 0xAE        # Sleep mode
CMD_DISPLAY_ON = 0xAF         # Normal mode

# =============================================================================
# Scrolling
# =============================================================================

CMD_DEACTIVATE_SCROLL = 0x2E

# =============================================================================
# Addressing
# =============================================================================

CMD_MEMORY_MODE = 0x20        # 0x00 horizontal, 0x01 vertical, 0x02 page
CMD_COLUMN_ADDR = 0x21        # Start and end column (0-127)
CMD_PAGE_ADDR = 0x22          # Start and end page (0-7)

# =============================================================================
# Hardware Configuration
# =============================================================================

CMD_SET_START_LINE = 0x40     # OR'ed with line 0-63
CMD_SEG_REMAP = 0xA0          # OR 0x01: column 127 mapped to SEG0
CMD_SET_MULTIPLEX = 0xA8      # Mux ratio, 1 data byte (height - 1)
CMD_COM_SCAN_INC = 0xC0       # Scan COM0 -> COM[N-1]
CMD_COM_SCAN_DEC = 0xC8       # Scan COM[N-1] -> COM0
CMD_SET_DISPLAY_OFFSET = 0xD3 # Vertical shift, 1 data byte
CMD_SET_COM_PINS = 0xDA       # COM pin layout, 1 data byte

# =============================================================================
# Timing & Driving
# =============================================================================

CMD_SET_CLOCK_DIV = 0xD5      # Clock divide ratio / oscillator frequency
CMD_SET_PRECHARGE = 0xD9      # Pre-charge period
CMD_SET_VCOM_DETECT = 0xDB    # VCOMH deselect level
CMD_CHARGE_PUMP = 0x8D        # Charge pump setting, 1 data byte
