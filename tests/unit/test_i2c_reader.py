"""
test_i2c_reader.py

Tests I2CReader with SMBus and i2c_msg replaced, so no /dev/i2c-* is needed.
"""

from unittest.mock import MagicMock, patch

import pytest

from sensor_channels.hardware.i2c import (
    I2CInitError,
    I2CReader,
    I2CReadError,
    I2CStopError,
    I2CValueError,
)


@pytest.fixture
def smbus_cls():
    with patch("sensor_channels.hardware.i2c.SMBus") as cls:
        yield cls


@pytest.fixture
def msg_read():
    with patch("sensor_channels.hardware.i2c.i2c_msg") as msg:
        yield msg.read


def test_read_returns_big_endian_value(smbus_cls, msg_read):
    msg_read.return_value = [0x01, 0x02]
    reader = I2CReader(bus=1)

    assert reader.read(0x48) == 258.0
    msg_read.assert_called_once_with(0x48, 2)
    smbus_cls.return_value.i2c_rdwr.assert_called_once_with([0x01, 0x02])


def test_bus_handle_is_opened_once(smbus_cls, msg_read):
    msg_read.return_value = [0x00, 0x10]
    reader = I2CReader(bus=1)
    reader.read(0x48)
    reader.read(0x49)
    smbus_cls.assert_called_once_with(1)


def test_custom_read_length(smbus_cls, msg_read):
    msg_read.return_value = [0x00, 0x01, 0x00]
    assert I2CReader(read_bytes=3).read(0x20) == 256.0


def test_truncated_read_raises(smbus_cls, msg_read):
    msg_read.return_value = [0x01]
    with pytest.raises(I2CReadError, match="Truncated"):
        I2CReader().read(0x48)


def test_transaction_failure_raises_read_error(smbus_cls, msg_read):
    smbus_cls.return_value.i2c_rdwr.side_effect = OSError(121, "Remote I/O error")
    with pytest.raises(I2CReadError, match="0x48"):
        I2CReader().read(0x48)


@pytest.mark.parametrize("address", [0x00, 0x80, -1, "0x48", True])
def test_invalid_address_rejected_before_open(smbus_cls, address):
    with pytest.raises(I2CValueError):
        I2CReader().read(address)
    smbus_cls.assert_not_called()


@pytest.mark.parametrize("kwargs", [{"bus": 4}, {"bus": "1"}, {"read_bytes": 0}])
def test_invalid_construction(kwargs):
    with pytest.raises(I2CValueError):
        I2CReader(**kwargs)


@pytest.mark.parametrize("exc", [FileNotFoundError(), PermissionError(), OSError("busy")])
def test_open_failure_raises_init_error(smbus_cls, exc):
    smbus_cls.side_effect = exc
    with pytest.raises(I2CInitError):
        I2CReader().read(0x48)


def test_close_releases_handle(smbus_cls, msg_read):
    msg_read.return_value = [0, 0]
    reader = I2CReader()
    reader.read(0x48)
    reader.close()
    reader.close()
    smbus_cls.return_value.close.assert_called_once()


def test_close_failure_raises_stop_error(smbus_cls, msg_read):
    msg_read.return_value = [0, 0]
    smbus_cls.return_value.close.side_effect = OSError("stuck")
    reader = I2CReader()
    reader.read(0x48)
    with pytest.raises(I2CStopError):
        reader.close()
