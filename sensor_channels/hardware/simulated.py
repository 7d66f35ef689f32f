"""
simulated.py

Provides a simulated hardware capability set for development and testing off
the device. Values are deterministic and can be overridden per pin or
address; failures can be injected to exercise error handling.
"""

import logging
from typing import Any, Mapping

from sensor_channels import PACKAGE_LOGGER_NAME
from sensor_channels.exceptions.hardware import HardwareReadError
from sensor_channels.hardware.base import BaseHardware


class SimulatedReadError(HardwareReadError):
    """
    Raised for reads configured to fail.
    """
    pass


class SimulatedHardware(BaseHardware):
    """
    Hardware implementation that returns configured or derived values instead
    of talking to a bus. Every call is appended to `calls` as (mode, target).

    Args:
        config: Optional mapping. Supported keys:
            - values (dict): {"digital"|"analog"|"one_wire"|"spi"|"i2c": {target: value}}
            - failures (dict): {"digital"|...: [target, ...]}
    """

    def __init__(self, config: Mapping[str, Any] | None = None) -> None:
        config = config or {}
        self._logger = logging.getLogger(f"{PACKAGE_LOGGER_NAME}.hardware.simulated")
        self._values: dict[str, dict[int, float]] = {
            kind: {int(k): v for k, v in (values or {}).items()}
            for kind, values in (config.get("values") or {}).items()
        }
        self._failures: dict[str, set[int]] = {
            kind: {int(t) for t in targets}
            for kind, targets in (config.get("failures") or {}).items()
        }
        self.calls: list[tuple[str, int]] = []

    def set_value(self, kind: str, target: int, value: float) -> None:
        self._values.setdefault(kind, {})[target] = value

    def fail(self, kind: str, target: int) -> None:
        self._failures.setdefault(kind, set()).add(target)

    def _read(self, kind: str, target: int, default: float) -> float:
        self.calls.append((kind, target))
        if target in self._failures.get(kind, set()):
            raise SimulatedReadError(f"Simulated {kind} read failure on {target}")
        value = self._values.get(kind, {}).get(target, default)
        self._logger.debug("Simulated %s read | target=%s | value=%s", kind, target, value)
        return value

    def read_digital(self, pin: int) -> int:
        return int(self._read("digital", pin, pin % 2))

    def read_analog(self, pin: int) -> int:
        return int(self._read("analog", pin, 512 + pin))

    def read_one_wire(self, pin: int) -> float:
        return float(self._read("one_wire", pin, 21.5))

    def read_spi(self, cs_pin: int) -> float:
        return float(self._read("spi", cs_pin, 1000.0 + cs_pin))

    def read_i2c(self, address: int) -> float:
        return float(self._read("i2c", address, float(address)))

    def close(self) -> None:
        """No hardware resources to release."""
        pass
