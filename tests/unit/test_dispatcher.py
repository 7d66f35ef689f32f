from unittest.mock import MagicMock

import pytest

from sensor_channels.channels.dispatcher import READ_ERROR, ReadDispatcher, ReadResult, ReadStatus
from sensor_channels.channels.model import Mode
from sensor_channels.exceptions import HardwareReadError
from sensor_channels.hardware.base import BaseHardware


def make_hardware():
    hw = MagicMock(spec=BaseHardware)
    hw.read_digital.return_value = 1
    hw.read_analog.return_value = 731
    hw.read_one_wire.return_value = 22.5
    hw.read_spi.return_value = 1024.0
    hw.read_i2c.return_value = 300.0
    return hw


# ----------------------------
# Sentinel contract
# ----------------------------

def test_disabled_channel_returns_sentinel_without_hardware_call(registry):
    hw = make_hardware()
    registry.add_fixed(4, 15, Mode.DIGITAL, True)
    registry.disable_channel(4)

    dispatcher = ReadDispatcher(registry, hw)

    assert dispatcher.read_channel(4) == -1
    hw.read_digital.assert_not_called()


def test_unknown_channel_on_empty_registry(registry):
    hw = make_hardware()
    dispatcher = ReadDispatcher(registry, hw)

    assert dispatcher.read_channel(999) == -1
    assert registry.channel_mode(999) is Mode.NONE
    assert hw.method_calls == []


def test_hardware_failure_collapses_to_sentinel(registry):
    hw = make_hardware()
    hw.read_i2c.side_effect = HardwareReadError("NACK")
    registry.add_i2c(10, 0x3C)

    dispatcher = ReadDispatcher(registry, hw)

    assert dispatcher.read_channel(10) == READ_ERROR


# ----------------------------
# Tagged results
# ----------------------------

def test_read_distinguishes_failure_kinds(registry):
    hw = make_hardware()
    hw.read_spi.side_effect = HardwareReadError("short read")
    registry.add_fixed(1, 17, Mode.DIGITAL)
    registry.add_fixed(2, 0, Mode.ANALOG, active=False)
    registry.add_spi(20, 14)

    dispatcher = ReadDispatcher(registry, hw)

    assert dispatcher.read(1) == ReadResult(1, ReadStatus.OK, value=1.0)
    assert dispatcher.read(2).status is ReadStatus.INACTIVE
    assert dispatcher.read(3).status is ReadStatus.NOT_FOUND

    failed = dispatcher.read(20)
    assert failed.status is ReadStatus.HARDWARE_ERROR
    assert failed.error == "short read"
    assert failed.value is None
    assert failed.as_float() == READ_ERROR


def test_non_hardware_errors_propagate(registry):
    hw = make_hardware()
    hw.read_digital.side_effect = RuntimeError("bug")
    registry.add_fixed(1, 17, Mode.DIGITAL)

    with pytest.raises(RuntimeError):
        ReadDispatcher(registry, hw).read(1)


# ----------------------------
# Routing
# ----------------------------

def test_each_mode_routes_to_matching_capability(populated_registry):
    hw = make_hardware()
    populated_registry.add_fixed(4, 8, Mode.SPI)
    dispatcher = ReadDispatcher(populated_registry, hw)

    assert dispatcher.read_channel(1) == 1.0
    hw.read_digital.assert_called_once_with(17)

    assert dispatcher.read_channel(2) == 731.0
    hw.read_analog.assert_called_once_with(0)

    assert dispatcher.read_channel(3) == 22.5
    hw.read_one_wire.assert_called_once_with(4)

    assert dispatcher.read_channel(11) == 300.0
    hw.read_i2c.assert_called_once_with(0x68)

    dispatcher.read_channel(20)
    dispatcher.read_channel(4)
    assert [c.args for c in hw.read_spi.call_args_list] == [(14,), (8,)]


def test_updated_mode_changes_route(registry):
    hw = make_hardware()
    registry.add_fixed(2, 4, Mode.ANALOG)
    registry.update_channel(2, Mode.DIGITAL, True)

    ReadDispatcher(registry, hw).read_channel(2)

    hw.read_digital.assert_called_once_with(4)
    hw.read_analog.assert_not_called()


def test_removed_bus_channel_is_not_found(populated_registry):
    hw = make_hardware()
    dispatcher = ReadDispatcher(populated_registry, hw)
    populated_registry.remove_bus(10)

    assert dispatcher.read(10).status is ReadStatus.NOT_FOUND
    hw.read_i2c.assert_not_called()


def test_read_active_follows_active_list_order(populated_registry, hardware):
    populated_registry.disable_channel(2)
    populated_registry.disable_channel(11)
    hardware.fail("spi", 14)

    results = ReadDispatcher(populated_registry, hardware).read_active()

    assert list(results) == [1, 3, 10, 20]
    assert results[10].value == float(0x3C)
    assert results[20].status is ReadStatus.HARDWARE_ERROR
    assert ("analog", 0) not in hardware.calls
