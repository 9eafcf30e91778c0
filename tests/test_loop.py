import threading
import time

import pytest
from PIL import Image

from rpimonitor.drivers import LoopState, MemoryDisplay
from rpimonitor.errors import TransportError
from rpimonitor.loop import RefreshLoop
from rpimonitor.status import StatusProvider


class FixedStatus(StatusProvider):
    def __init__(self, host="pi", ip="10.0.0.2"):
        self.host = host
        self.ip = ip
        self.interfaces = []

    def hostname(self):
        return self.host

    def ipv4(self, interface):
        self.interfaces.append(interface)
        return self.ip


class RecordingSink(MemoryDisplay):
    """MemoryDisplay that records the loop state seen at draw time."""

    def __init__(self, *args, **kw):
        super().__init__(*args, **kw)
        self.loop = None
        self.seen = []

    def draw(self, rect, frame, origin):
        if self.loop is not None:
            self.seen.append(self.loop.state)
        super().draw(rect, frame, origin)


def test_tick_presents_frame():
    sink = MemoryDisplay()
    status = FixedStatus()
    loop = RefreshLoop(sink, status, interface="wlan0")
    assert loop.state == LoopState.IDLE

    frame = loop.tick()
    assert sink.draws == 1
    assert sink.frame == frame
    assert loop.last_status == "pi (10.0.0.2)"
    assert status.interfaces == ["wlan0"]


def test_empty_status_still_presents():
    sink = MemoryDisplay()
    loop = RefreshLoop(sink, FixedStatus("", ""))
    loop.tick()
    assert sink.draws == 1
    assert sink.frame.to_bytes() == bytes(512)


def test_present_happens_in_present_state():
    sink = RecordingSink()
    loop = RefreshLoop(sink, FixedStatus())
    sink.loop = loop
    loop.tick()
    assert sink.seen == [LoopState.PRESENT]


def test_background_image_used():
    sink = MemoryDisplay(8, 8)
    loop = RefreshLoop(sink, FixedStatus("", ""), source=Image.new("L", (4, 4), 255))
    loop.tick()
    assert sink.frame.to_bytes() == b"\xff" * 8


def test_failure_is_terminal(caplog):
    sink = MemoryDisplay()
    sink.fail_with = TransportError("I2C write to 0x3C failed")
    loop = RefreshLoop(sink, FixedStatus())
    with pytest.raises(TransportError):
        loop.tick()
    assert loop.state == LoopState.FAILED
    assert LoopState.is_terminal(loop.state)
    assert "error: I2C write to 0x3C failed" in caplog.text


def test_run_propagates_failure_without_retry():
    sink = MemoryDisplay()
    sink.fail_with = TransportError("gone")
    loop = RefreshLoop(sink, FixedStatus(), interval=0.01)
    with pytest.raises(TransportError):
        loop.run()
    assert loop.state == LoopState.FAILED
    assert loop.ticks == 0


def test_stop_ends_run():
    sink = MemoryDisplay()
    loop = RefreshLoop(sink, FixedStatus(), interval=0.01)
    worker = threading.Thread(target=loop.run)
    worker.start()
    try:
        deadline = time.monotonic() + 2.0
        while sink.draws < 3 and time.monotonic() < deadline:
            time.sleep(0.01)
    finally:
        loop.stop()
        worker.join(2.0)
    assert not worker.is_alive()
    assert loop.state == LoopState.STOPPED
    assert loop.ticks >= 3


def test_stop_before_run():
    sink = MemoryDisplay()
    loop = RefreshLoop(sink, FixedStatus())
    loop.stop()
    loop.run()
    assert loop.state == LoopState.STOPPED
    assert sink.draws == 0


def test_bounds_read_once():
    class CountingSink(MemoryDisplay):
        calls = 0

        def bounds(self):
            CountingSink.calls += 1
            return super().bounds()

    sink = CountingSink()
    loop = RefreshLoop(sink, FixedStatus())
    loop.tick()
    loop.tick()
    assert CountingSink.calls == 1


def test_invalid_interval():
    with pytest.raises(ValueError):
        RefreshLoop(MemoryDisplay(), FixedStatus(), interval=0)
