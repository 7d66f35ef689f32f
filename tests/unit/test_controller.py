import logging
from unittest.mock import MagicMock, patch

import pytest

from sensor_channels.channels.dispatcher import READ_ERROR, ReadDispatcher
from sensor_channels.channels.model import Mode
from sensor_channels.channels.registry import ChannelRegistry
from sensor_channels.controller import ChannelController
from sensor_channels.hardware.simulated import SimulatedHardware


def make_controller(registry=None, hardware=None, poll_period=5):
    logger = MagicMock(spec=logging.Logger)
    registry = registry or ChannelRegistry()
    hardware = hardware or SimulatedHardware()
    dispatcher = ReadDispatcher(registry, hardware)
    persistence = MagicMock()
    controller = ChannelController(
        logger=logger,
        registry=registry,
        dispatcher=dispatcher,
        persistence=persistence,
        poll_period=poll_period,
    )
    return controller, logger, hardware, persistence


def test_read_once_returns_values_for_active_channels(populated_registry):
    populated_registry.disable_channel(2)
    controller, logger, _, _ = make_controller(populated_registry)

    values = controller.read_once()

    assert values == {1: 1.0, 3: 21.5, 10: 60.0, 11: 104.0, 20: 1014.0}
    assert logger.info.call_count == 5


def test_read_once_reports_failures_as_read_error(populated_registry):
    hardware = SimulatedHardware({"failures": {"i2c": [0x68]}})
    controller, logger, _, _ = make_controller(populated_registry, hardware)

    values = controller.read_once()

    assert values[11] == READ_ERROR
    logger.warning.assert_called_once()
    assert "Channel 11" in logger.warning.call_args.args[0]


def test_read_once_with_no_active_channels():
    controller, logger, hardware, _ = make_controller()
    assert controller.read_once() == {}
    assert hardware.calls == []
    logger.debug.assert_called_once()


def test_save_passes_registry_to_persistence():
    controller, _, _, persistence = make_controller()
    controller.registry.add_fixed(1, 17, Mode.DIGITAL)
    controller.save()
    persistence.save.assert_called_once_with(controller.registry)


def test_report_logs_every_line(populated_registry):
    controller, logger, _, _ = make_controller(populated_registry)
    controller.report()
    lines = [c.args[0] for c in logger.info.call_args_list]
    assert lines[0] == "=== Fixed channels (3) ==="
    assert lines[-1].startswith("Active channels: 6")


def test_start_loops_until_interrupted(populated_registry):
    controller, _, hardware, _ = make_controller(populated_registry, poll_period=5)

    with patch("sensor_channels.controller.time.sleep", side_effect=[None, KeyboardInterrupt]) as sleep:
        with pytest.raises(KeyboardInterrupt):
            controller.start()

    assert sleep.call_count == 2
    assert 0 <= sleep.call_args.args[0] <= 5
    # two full cycles of six active channels
    assert len(hardware.calls) == 12


def test_close_releases_hardware():
    hardware = MagicMock()
    controller, _, _, _ = make_controller(hardware=hardware)
    controller.close()
    hardware.close.assert_called_once()
