"""
State Machines for the Panel Driver and the Refresh Loop
========================================================
Small integer enumerations with readable names, plus the driver's state
container.
"""


class DisplayState:
    """
    Panel driver state.

    State Diagram:
        UNINITIALIZED --> READY (after init)
        READY --> OFF (after halt)
        OFF --> READY (after init)
    """
    UNINITIALIZED = 0  # Bus open, controller not configured yet
    READY = 1          # Configured and displaying RAM contents
    OFF = 2            # Display off (panel dark, RAM retained)

    _names = {
        0: "UNINITIALIZED",
        1: "READY",
        2: "OFF",
    }

    @classmethod
    def name(cls, state: int) -> str:
        return cls._names.get(state, f"UNKNOWN({state})")


class LoopState:
    """
    Refresh loop state.

    State Diagram:
        IDLE --> FETCH_STATUS --> COMPOSE --> PRESENT --> SLEEP
                      ^                          |          |
                      |                          v          |
                      |                       FAILED        |
                      +-------------------------------------+
        SLEEP --> STOPPED (after stop())
    """
    IDLE = 0
    FETCH_STATUS = 1
    COMPOSE = 2
    PRESENT = 3
    SLEEP = 4
    FAILED = 5   # Terminal: present raised an I/O error
    STOPPED = 6  # Terminal: stopped from outside

    _names = {
        0: "IDLE",
        1: "FETCH_STATUS",
        2: "COMPOSE",
        3: "PRESENT",
        4: "SLEEP",
        5: "FAILED",
        6: "STOPPED",
    }

    @classmethod
    def name(cls, state: int) -> str:
        return cls._names.get(state, f"UNKNOWN({state})")

    @classmethod
    def is_terminal(cls, state: int) -> bool:
        return state in (cls.FAILED, cls.STOPPED)


class DriverState:
    """
    Panel driver state container.

    Attributes:
        state: Current DisplayState
        frames: Number of draw() calls that reached the panel
        bytes_sent: Frame bytes written since init (commands excluded)
        inverted: True if hardware inversion is on
    """

    def __init__(self, state: int = DisplayState.UNINITIALIZED):
        self.state = state
        self.frames = 0
        self.bytes_sent = 0
        self.inverted = False

    def on_init_complete(self):
        self.state = DisplayState.READY

    def on_frame_sent(self, nbytes: int):
        self.frames += 1
        self.bytes_sent += nbytes

    def on_halt(self):
        self.state = DisplayState.OFF

    @property
    def is_ready(self) -> bool:
        return self.state == DisplayState.READY

    def __repr__(self) -> str:
        return (
            f"DriverState("
            f"state={DisplayState.name(self.state)}, "
            f"frames={self.frames}, "
            f"bytes={self.bytes_sent}, "
            f"inverted={self.inverted})"
        )
