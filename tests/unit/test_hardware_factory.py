import logging
from unittest.mock import MagicMock, patch

import pytest

from sensor_channels.hardware import factory
from sensor_channels.hardware.factory import build_hardware
from sensor_channels.hardware.simulated import SimulatedHardware
from sensor_channels.exceptions import (
    InvalidHardwareConfigError,
    UnknownHardwareTypeError,
)

# ---------- Fixtures ----------

@pytest.fixture
def logger():
    return logging.getLogger("test.hardware_factory")

# ---------- Happy path ----------

def test_none_config_builds_simulated(logger):
    assert isinstance(build_hardware(None, logger), SimulatedHardware)

def test_empty_config_builds_simulated(logger):
    assert isinstance(build_hardware({}, logger), SimulatedHardware)

def test_type_is_case_insensitive(logger):
    hw = build_hardware({"type": "  Simulated ", "values": {"i2c": {"60": 7.5}}}, logger)
    assert hw.read_i2c(60) == 7.5

def test_builder_receives_full_config(logger):
    builder = MagicMock(return_value="hw")
    cfg = {"type": "bench", "gpio": {"pull_up": False}}
    with patch.dict(factory._HARDWARE_TYPES, {"bench": builder}):
        assert build_hardware(cfg, logger) == "hw"
    builder.assert_called_once_with(cfg)

def test_logs_selected_type(logger, caplog):
    with caplog.at_level(logging.INFO, logger="test.hardware_factory"):
        build_hardware({"type": "simulated"}, logger)
    assert "Initialised hardware type 'simulated'" in caplog.text

# ---------- Type resolution ----------

def test_unknown_hardware_type(logger):
    with pytest.raises(UnknownHardwareTypeError) as exc:
        build_hardware({"type": "arduino"}, logger)
    assert exc.value.hardware_type == "arduino"
    assert "raspberry_pi" in str(exc.value)
    assert "simulated" in str(exc.value)

@pytest.mark.parametrize("bad_type", [None, "", "   ", 3])
def test_invalid_type_value(logger, bad_type):
    with pytest.raises(InvalidHardwareConfigError):
        build_hardware({"type": bad_type}, logger)

# ---------- Construction failures ----------

def test_builder_failure_is_wrapped(logger):
    boom = RuntimeError("bus busy")
    with patch.dict(factory._HARDWARE_TYPES, {"bench": MagicMock(side_effect=boom)}):
        with pytest.raises(InvalidHardwareConfigError) as exc:
            build_hardware({"type": "bench"}, logger)
    assert exc.value.__cause__ is boom
    assert exc.value.hardware_type == "bench"
    assert "bus busy" in str(exc.value)
