"""
Error types for rpi-monitor.

    MonitorError
       ├── ConfigError      startup: bad flags, bus open, panel init (fatal)
       └── TransportError   bus write failed while presenting (fatal to loop)

Hostname and address lookup failures are not exceptions: they degrade to
empty strings inside the status provider.
"""


class MonitorError(Exception):
    """Base class for all rpi-monitor errors."""


class ConfigError(MonitorError):
    """Panel or bus could not be opened or configured."""


class TransportError(MonitorError, OSError):
    """A write to the panel failed."""
