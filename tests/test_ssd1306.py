import pytest

from rpimonitor.buffer import PackedFrame
from rpimonitor.drivers import DisplayState, SSD1306
from rpimonitor.errors import ConfigError, TransportError
from rpimonitor.geometry import Point, Rect
from rpimonitor.hardware.i2c import I2CDevice


@pytest.fixture
def oled(fake_bus):
    dev = SSD1306(I2CDevice(fake_bus))
    dev.init()
    fake_bus.clear()
    return dev


def test_init_sequence(fake_bus):
    dev = SSD1306(I2CDevice(fake_bus))
    assert dev.state.state == DisplayState.UNINITIALIZED
    dev.init()
    assert fake_bus.commands() == [
        b"\xae",
        b"\xd5\x80",
        b"\xa8\x1f",
        b"\xd3\x00",
        b"\x40",
        b"\x8d\x14",
        b"\x20\x00",
        b"\xa1",
        b"\xc8",
        b"\xda\x12",
        b"\x81\xff",
        b"\xd9\xf1",
        b"\xdb\x40",
        b"\xa4",
        b"\xa6",
        b"\x2e",
        b"\xaf",
    ]
    assert all(addr == 0x3C for addr, _ in fake_bus.writes)
    assert dev.state.is_ready


def test_init_rotated_tall_panel(fake_bus):
    SSD1306(I2CDevice(fake_bus), height=64, rotated=True).init()
    cmds = fake_bus.commands()
    assert b"\xa8\x3f" in cmds
    assert b"\xa0" in cmds
    assert b"\xc0" in cmds
    assert b"\xa1" not in cmds


@pytest.mark.parametrize("sequential, swap, pins", [
    (False, False, 0x12),
    (True, False, 0x02),
    (False, True, 0x32),
    (True, True, 0x22),
])
def test_com_pins(fake_bus, sequential, swap, pins):
    SSD1306(I2CDevice(fake_bus), sequential=sequential, swap_top_bottom=swap).init()
    assert bytes((0xDA, pins)) in fake_bus.commands()


@pytest.mark.parametrize("width, height", [(0, 32), (129, 32), (128, 0), (128, 12), (128, 72)])
def test_bad_geometry(fake_bus, width, height):
    with pytest.raises(ConfigError):
        SSD1306(I2CDevice(fake_bus), width=width, height=height)


def test_first_draw_sends_everything(oled, fake_bus):
    frame = PackedFrame(128, 32)
    frame.pixel(0, 0)
    oled.draw(oled.bounds(), frame, Point(0, 0))
    assert fake_bus.commands() == [b"\x21\x00\x7f", b"\x22\x00\x03"]
    data = fake_bus.data()
    assert len(data) == 512
    assert data[0] == 0x01
    assert oled.state.frames == 1
    assert oled.state.bytes_sent == 512


def test_unchanged_frame_not_resent(oled, fake_bus):
    frame = PackedFrame(128, 32)
    oled.draw(oled.bounds(), frame)
    fake_bus.clear()
    oled.draw(oled.bounds(), frame.copy())
    assert fake_bus.writes == []


def test_changed_window_only(oled, fake_bus):
    frame = PackedFrame(128, 32)
    oled.draw(oled.bounds(), frame)
    fake_bus.clear()
    frame.pixel(5, 9)
    oled.draw(oled.bounds(), frame)
    assert fake_bus.commands() == [b"\x21\x05\x05", b"\x22\x01\x01"]
    assert fake_bus.data() == b"\x02"


def test_partial_rect_merges(oled, fake_bus):
    oled.draw(oled.bounds(), PackedFrame(128, 32))
    fake_bus.clear()
    small = PackedFrame(8, 8)
    small.clear(1)
    oled.draw(Rect(8, 8, 16, 16), small)
    assert fake_bus.commands() == [b"\x21\x08\x0f", b"\x22\x01\x01"]
    assert fake_bus.data() == b"\xff" * 8


def test_transport_error_forces_full_redraw(oled, fake_bus):
    frame = PackedFrame(128, 32)
    oled.draw(oled.bounds(), frame)
    fake_bus.clear()

    frame.pixel(1, 1)
    fake_bus.fail_after = 0
    with pytest.raises(TransportError):
        oled.draw(oled.bounds(), frame)
    assert not fake_bus.locked

    fake_bus.fail_after = None
    oled.draw(oled.bounds(), frame)
    assert len(fake_bus.data()) == 512


def test_transport_error_is_os_error(oled, fake_bus):
    fake_bus.fail_after = 0
    with pytest.raises(OSError):
        oled.draw(oled.bounds(), PackedFrame(128, 32))


def test_invert_contrast_halt(oled, fake_bus):
    oled.invert(True)
    oled.set_contrast(0x10)
    oled.halt()
    assert fake_bus.commands() == [b"\xa7", b"\x81\x10", b"\xae"]
    assert oled.state.inverted
    assert oled.state.state == DisplayState.OFF
    with pytest.raises(ValueError):
        oled.set_contrast(256)


def test_create_opens_and_initializes(monkeypatch, fake_bus):
    opened = {}

    def from_bus(cls, bus=1, address=0x3C, frequency=None):
        opened.update(bus=bus, address=address, frequency=frequency)
        return cls(fake_bus, address)

    monkeypatch.setattr(I2CDevice, "from_bus", classmethod(from_bus))
    dev = SSD1306.create("2", 0x3D, 1_000_000, height=64)
    assert opened == {"bus": "2", "address": 0x3D, "frequency": 1_000_000}
    assert dev.bounds() == Rect(0, 0, 128, 64)
    assert dev.state.is_ready
    assert fake_bus.writes[0] == (0x3D, b"\x00\xae")


def test_create_maps_init_failure(monkeypatch, fake_bus):
    fake_bus.fail_after = 0
    monkeypatch.setattr(I2CDevice, "from_bus",
                        classmethod(lambda cls, *a, **kw: cls(fake_bus)))
    with pytest.raises(ConfigError):
        SSD1306.create()
    assert fake_bus.deinited


def test_create_rejects_geometry(monkeypatch, fake_bus):
    monkeypatch.setattr(I2CDevice, "from_bus",
                        classmethod(lambda cls, *a, **kw: cls(fake_bus)))
    with pytest.raises(ConfigError):
        SSD1306.create(height=20)
    assert fake_bus.deinited
    assert fake_bus.writes == []
