"""
conftest.py

Session-scoped hardware module stubs and shared fixtures for unit tests.

spidev and RPi.GPIO only build or import on a Raspberry Pi. Both are
registered via sys.modules.setdefault at module level, before pytest imports
any test module, so every import during collection sees the same stub
objects. Test files that assert on GPIO or SPI calls read them back with
sys.modules["RPi.GPIO"] / sys.modules["spidev"].

pigpio and smbus3 are pure Python and are used as the genuine modules; tests
monkeypatch the names the readers captured.
"""

import sys
from unittest.mock import MagicMock

import pytest


# ── RPi / spidev ─────────────────────────────────────────────────────────────
# Linked RPi.GPIO pair so both import paths resolve to the same object.

_mock_gpio = MagicMock()
_mock_rpi = MagicMock()
_mock_rpi.GPIO = _mock_gpio

sys.modules.setdefault("spidev", MagicMock())
sys.modules.setdefault("RPi", _mock_rpi)
sys.modules.setdefault("RPi.GPIO", _mock_gpio)


from sensor_channels.channels.model import Mode  # noqa: E402
from sensor_channels.channels.registry import ChannelRegistry  # noqa: E402
from sensor_channels.hardware.simulated import SimulatedHardware  # noqa: E402


@pytest.fixture()
def registry():
    """Empty registry with the default fixed/bus threshold (9)."""
    return ChannelRegistry()


@pytest.fixture()
def populated_registry():
    """
    Registry shaped like a typical node: three fixed channels, two I2C
    devices and one SPI device.
    """
    reg = ChannelRegistry()
    reg.add_fixed(1, 17, Mode.DIGITAL)
    reg.add_fixed(2, 0, Mode.ANALOG)
    reg.add_fixed(3, 4, Mode.ONEWIRE)
    reg.add_i2c(10, 0x3C)
    reg.add_i2c(11, 0x68)
    reg.add_spi(20, 14)
    return reg


@pytest.fixture()
def hardware():
    return SimulatedHardware()
