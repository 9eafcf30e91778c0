"""
RefreshLoop - Timed Status Refresh
==================================
One sequential worker:

    FETCH_STATUS -> COMPOSE -> PRESENT -> SLEEP -> FETCH_STATUS -> ...

A fresh source image and frame are built on every tick; nothing is
carried over between ticks except the panel bounds, which are read once.
The delay after a tick is fixed and does not account for how long the
tick took.

An I/O error while presenting is fatal: the loop enters FAILED, logs the
error and re-raises it to the caller. There is no retry.

Usage:
    loop = RefreshLoop(sink, HostStatus(), interface="eth0")
    loop.run()          # blocks until stop() or failure
"""
import logging
import threading

from PIL import Image

try:
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from rpimonitor.buffer.framebuffer import PackedFrame
        from rpimonitor.drivers.base import DisplaySink
        from rpimonitor.status import StatusProvider
except ImportError:
    pass

from rpimonitor.compose import FrameComposer
from rpimonitor.drivers.state import LoopState
from rpimonitor.geometry import ZP
from rpimonitor.status import format_status

logger = logging.getLogger(__name__)


class RefreshLoop:
    """
    Refresh state machine.

    Args:
        sink: Panel to draw on
        status: StatusProvider for hostname and address
        interface: Network interface whose IPv4 address is shown
        source: Background image; a blank panel-sized image if None
        composer: FrameComposer; a default one if None
        interval: Seconds to wait after each tick
    """
    DEFAULT_INTERVAL = 1.0

    def __init__(
        self,
        sink: "DisplaySink",
        status: "StatusProvider",
        interface: str = "eth0",
        source: "Image.Image | None" = None,
        composer: FrameComposer | None = None,
        interval: float = DEFAULT_INTERVAL,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")

        self._sink = sink
        self._bounds = sink.bounds()
        self._status = status
        self._interface = interface
        self._source = source
        self._composer = composer or FrameComposer()
        self._interval = interval
        self._stop = threading.Event()

        self.state = LoopState.IDLE
        self.ticks = 0
        self.last_status = ""

    @property
    def bounds(self):
        return self._bounds

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def stop(self):
        """Ask the loop to exit; an in-flight tick is allowed to finish."""
        self._stop.set()

    # =========================================================================
    # Tick
    # =========================================================================

    def fetch_status(self) -> str:
        hostname = self._status.hostname()
        ipv4 = self._status.ipv4(self._interface)
        return format_status(hostname, ipv4)

    def _source_image(self) -> Image.Image:
        if self._source is not None:
            return self._source
        return Image.new("1", self._bounds.size, 0)

    def tick(self) -> "PackedFrame":
        """
        Run one FETCH_STATUS -> COMPOSE -> PRESENT pass.

        Returns:
            The frame that was presented

        Raises:
            OSError: If the sink failed to draw (state becomes FAILED)
        """
        try:
            self.state = LoopState.FETCH_STATUS
            text = self.fetch_status()
            self.last_status = text

            self.state = LoopState.COMPOSE
            frame = self._composer.compose(self._bounds, self._source_image(), text)

            self.state = LoopState.PRESENT
            self._sink.draw(self._bounds, frame, ZP)
        except OSError as e:
            self.state = LoopState.FAILED
            logger.error("error: %s", e)
            raise
        except Exception:
            self.state = LoopState.FAILED
            raise

        self.ticks += 1
        return frame

    # =========================================================================
    # Loop
    # =========================================================================

    def run(self):
        """
        Tick until stop() is called or a tick fails.

        Raises:
            OSError: From the first failed present
        """
        logger.debug("refresh loop started, %.2fs interval", self._interval)
        while not self._stop.is_set():
            self.tick()
            self.state = LoopState.SLEEP
            if self._stop.wait(self._interval):
                break
        self.state = LoopState.STOPPED
        logger.debug("refresh loop stopped after %d ticks", self.ticks)
