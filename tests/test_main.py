import pytest
from PIL import Image

from rpimonitor import __main__ as cli
from rpimonitor.errors import ConfigError, TransportError
from rpimonitor.loop import RefreshLoop
from rpimonitor.status import StatusProvider


class FixedStatus(StatusProvider):
    def hostname(self):
        return "pi"

    def ipv4(self, interface):
        return "10.0.0.2"


@pytest.fixture(autouse=True)
def fixed_status(monkeypatch):
    monkeypatch.setattr(cli, "HostStatus", FixedStatus)


@pytest.fixture
def one_tick(monkeypatch):
    monkeypatch.setattr(RefreshLoop, "run", lambda self: self.tick())


def test_dry_run_clean_exit(one_tick, tmp_path):
    out = tmp_path / "frame.png"
    assert cli.main(["--dry-run", "--snapshot", str(out)]) == 0
    with Image.open(out) as img:
        assert img.size == (128, 32)
        assert img.getbbox() is not None


def test_dry_run_with_background(one_tick, tmp_path):
    bg = tmp_path / "bg.png"
    Image.new("L", (16, 16), 255).save(bg)
    out = tmp_path / "frame.png"
    assert cli.main(["--dry-run", "-h", "16", "-w", "16",
                     "--image", str(bg), "--snapshot", str(out)]) == 0
    with Image.open(out) as img:
        assert img.convert("L").getpixel((0, 0)) == 255


def test_loop_failure_exit_code(monkeypatch, caplog):
    def fail(self):
        raise TransportError("I2C write to 0x3C failed")

    caplog.set_level("INFO")
    monkeypatch.setattr(RefreshLoop, "run", fail)
    assert cli.main(["--dry-run"]) == 1
    assert "stopping the rpi-monitor service" in caplog.text


def test_startup_is_logged(one_tick, caplog):
    caplog.set_level("INFO")
    cli.main(["--dry-run", "-i2c", "3"])
    assert "starting rpi-monitor service using /dev/i2c-3" in caplog.text


def test_invalid_config():
    assert cli.main(["-w", "0"]) == 1


def test_missing_image(tmp_path):
    assert cli.main(["--dry-run", "--image", str(tmp_path / "nope.png")]) == 1


def test_bad_font(tmp_path):
    font = tmp_path / "bad.bf2"
    font.write_bytes(b"not a font")
    assert cli.main(["--dry-run", "--font", str(font)]) == 1


def test_panel_open_failure(monkeypatch, caplog):
    def create(*args, **kw):
        raise ConfigError("cannot open /dev/i2c-1: No such file or directory")

    monkeypatch.setattr(cli.SSD1306, "create", create)
    assert cli.main([]) == 1
    assert "cannot open /dev/i2c-1" in caplog.text


def test_panel_options_passed(monkeypatch, one_tick):
    calls = []

    class Panel(cli.MemoryDisplay):
        pass

    def create(bus, address, frequency, **opts):
        calls.append((bus, address, frequency, opts))
        return Panel(opts["width"], opts["height"])

    monkeypatch.setattr(cli.SSD1306, "create", create)
    assert cli.main(["-i2c", "2", "-hz", "100kHz", "-h", "64", "-r"]) == 0
    assert calls == [("2", 0x3C, 100_000, {
        "width": 128, "height": 64, "rotated": True,
        "sequential": False, "swap_top_bottom": False,
    })]
