import sys
import types

import pytest

from rpimonitor.errors import ConfigError, TransportError
from rpimonitor.hardware import I2CDevice, parse_bus_id


def test_command_framing(fake_bus):
    I2CDevice(fake_bus, 0x3D).write_command(0x81, 0x7F)
    assert fake_bus.writes == [(0x3D, b"\x00\x81\x7f")]
    assert not fake_bus.locked


def test_data_chunking(fake_bus):
    dev = I2CDevice(fake_bus, max_transfer=4)
    assert dev.write_data(bytes(range(10))) == 10
    assert [w[1] for w in fake_bus.writes] == [
        b"\x40\x00\x01\x02\x03",
        b"\x40\x04\x05\x06\x07",
        b"\x40\x08\x09",
    ]


def test_write_error_mapped(fake_bus):
    fake_bus.fail_after = 0
    with pytest.raises(TransportError) as exc:
        I2CDevice(fake_bus).write_command(0xAF)
    assert isinstance(exc.value, OSError)
    assert not fake_bus.locked


def test_lock_timeout(fake_bus):
    fake_bus.busy = True
    with pytest.raises(TransportError):
        I2CDevice(fake_bus, lock_timeout=0.01).write_command(0xAF)
    assert fake_bus.writes == []


def test_context_manager_releases_bus(fake_bus):
    with I2CDevice(fake_bus):
        pass
    assert fake_bus.deinited


@pytest.mark.parametrize("bus, expected", [(1, 1), ("1", 1), ("/dev/i2c-3", 3)])
def test_parse_bus_id(bus, expected):
    assert parse_bus_id(bus) == expected


@pytest.mark.parametrize("bus", ["", "abc", "/dev/spidev0.0", "-1"])
def test_parse_bus_id_invalid(bus):
    with pytest.raises(ConfigError):
        parse_bus_id(bus)


class _FakeExtendedI2C:
    instances = []

    def __init__(self, bus_id, frequency=None):
        if bus_id == 9:
            raise FileNotFoundError(2, "No such file or directory")
        self.bus_id = bus_id
        self.frequency = frequency
        _FakeExtendedI2C.instances.append(self)


@pytest.fixture
def extended_bus(monkeypatch):
    mod = types.ModuleType("adafruit_extended_bus")
    mod.ExtendedI2C = _FakeExtendedI2C
    _FakeExtendedI2C.instances = []
    monkeypatch.setitem(sys.modules, "adafruit_extended_bus", mod)
    return _FakeExtendedI2C


def test_from_bus(extended_bus):
    dev = I2CDevice.from_bus("/dev/i2c-1", 0x3C, 100_000)
    bus = extended_bus.instances[0]
    assert (bus.bus_id, bus.frequency) == (1, 100_000)
    assert dev.i2c is bus
    assert dev.address == 0x3C


def test_from_bus_default_frequency(extended_bus):
    I2CDevice.from_bus(1)
    assert extended_bus.instances[0].frequency == I2CDevice.DEFAULT_FREQUENCY


def test_from_bus_open_failure(extended_bus):
    with pytest.raises(ConfigError):
        I2CDevice.from_bus(9)
