"""
test_exceptions.py

Verify the registry, persistence and hardware exception hierarchies.

Reader-specific exceptions must subclass the shared hardware bases so callers
can catch at either the reader level (precise) or the hardware level (broad),
and the dispatcher can catch every read failure as HardwareError.
"""

import pytest

from sensor_channels.exceptions import (
    ChannelNotFoundError,
    DuplicateChannelError,
    HardwareError,
    HardwareInitError,
    HardwareReadError,
    HardwareStopError,
    HardwareValueError,
    InvalidChannelError,
    PersistenceError,
    PersistenceUnavailableError,
    RegistryError,
    StoreCorruptError,
    StoreNotFoundError,
    WrongChannelKindError,
)
from sensor_channels.hardware.adc import ADCReadError, ADCValueError
from sensor_channels.hardware.gpio import GPIOInitError, GPIOReadError, GPIOStopError, GPIOValueError
from sensor_channels.hardware.i2c import I2CInitError, I2CReadError, I2CStopError, I2CValueError
from sensor_channels.hardware.one_wire import OneWireReadError, OneWireValueError
from sensor_channels.hardware.simulated import SimulatedReadError
from sensor_channels.hardware.spi import SPIInitError, SPIReadError, SPIStopError, SPIValueError


# ── Registry ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("cls", [DuplicateChannelError, ChannelNotFoundError])
def test_registry_errors_carry_channel(cls):
    err = cls(12)
    assert isinstance(err, RegistryError)
    assert err.channel == 12
    assert "channel=12" in str(err)


def test_wrong_channel_kind_error_details():
    err = WrongChannelKindError(3, "bus", "fixed")
    assert isinstance(err, RegistryError)
    assert (err.expected, err.actual) == ("bus", "fixed")
    assert "requires a bus channel" in str(err)


def test_invalid_channel_error_is_value_error():
    assert issubclass(InvalidChannelError, RegistryError)
    assert issubclass(InvalidChannelError, ValueError)
    assert str(InvalidChannelError("bad")) == "bad"


# ── Persistence ───────────────────────────────────────────────────────────────

def test_persistence_errors_share_base_and_builtin_types():
    assert issubclass(PersistenceUnavailableError, PersistenceError)
    assert issubclass(PersistenceUnavailableError, OSError)
    assert issubclass(StoreNotFoundError, PersistenceError)
    assert issubclass(StoreNotFoundError, FileNotFoundError)
    assert issubclass(StoreCorruptError, PersistenceError)
    assert issubclass(StoreCorruptError, ValueError)


# ── Hardware ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("cls, base", [
    (HardwareInitError, HardwareError),
    (HardwareReadError, HardwareError),
    (HardwareValueError, HardwareError),
    (HardwareStopError, HardwareError),
    (GPIOInitError, HardwareInitError),
    (GPIOReadError, HardwareReadError),
    (GPIOValueError, HardwareValueError),
    (GPIOStopError, HardwareStopError),
    (I2CInitError, HardwareInitError),
    (I2CReadError, HardwareReadError),
    (I2CValueError, HardwareValueError),
    (I2CStopError, HardwareStopError),
    (SPIInitError, HardwareInitError),
    (SPIReadError, HardwareReadError),
    (SPIValueError, HardwareValueError),
    (SPIStopError, HardwareStopError),
    (ADCReadError, HardwareReadError),
    (ADCValueError, HardwareValueError),
    (OneWireReadError, HardwareReadError),
    (OneWireValueError, HardwareValueError),
    (SimulatedReadError, HardwareReadError),
])
def test_reader_errors_subclass_shared_bases(cls, base):
    assert issubclass(cls, base)


def test_i2c_read_error_caught_as_hardware_error():
    with pytest.raises(HardwareError):
        raise I2CReadError("test")
