"""
Hardware abstraction layer.

Modules:
    i2c: Low-level I2C communication for OLED controllers
"""
from .i2c import I2CDevice, parse_bus_id

__all__ = ["I2CDevice", "parse_bus_id"]
