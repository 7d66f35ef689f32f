"""
one_wire.py

One-wire reads through the Linux w1 sysfs interface.

Devices are resolved per pin: a configured mapping of pin -> device id wins,
otherwise the first DS18B20-family device (28-*) found under base_dir is used.
"""

import glob
import os
from typing import Mapping, Optional

from sensor_channels.exceptions.hardware import HardwareReadError, HardwareValueError
from sensor_channels.hardware.constants import DEFAULT_W1_BASE_DIR


class OneWireReadError(HardwareReadError):
    """
    Raised when a one-wire device fails to return a valid reading.
    """
    pass


class OneWireValueError(HardwareValueError):
    """
    Raised when the one-wire device mapping is misconfigured.
    """
    pass


class OneWireBus:
    """
    Reads one-wire devices exposed by the w1-gpio kernel driver.

    Parameters
    ----------
    base_dir : str
        Directory holding the w1 device folders, normally /sys/bus/w1/devices.
    devices : Mapping[int, str] | None
        Optional pin -> device id mapping, e.g. {4: "28-00000abcdef"}.
    """

    def __init__(self, *, base_dir: str = DEFAULT_W1_BASE_DIR,
                 devices: Optional[Mapping[int, str]] = None):
        self.base_dir = base_dir.rstrip("/")
        self.devices: dict[int, str] = {}
        for pin, device_id in (devices or {}).items():
            if not isinstance(device_id, str) or not device_id.strip():
                raise OneWireValueError(f"Device id for pin {pin} must be a non-empty string")
            self.devices[int(pin)] = device_id.strip()

    # --- Internals ----------------------------------------------------------

    def _discover_device_file(self) -> str:
        """
        Discover and return the first DS18B20 device file under base_dir or raise.
        """
        candidates = sorted(glob.glob(os.path.join(self.base_dir, "28-*", "w1_slave")))
        if not candidates:
            raise OneWireReadError(f"No one-wire device found under {self.base_dir}")
        return candidates[0]

    def device_file(self, pin: int) -> str:
        """
        Return the w1_slave file to read for pin.
        """
        device_id = self.devices.get(pin)
        if device_id:
            return os.path.join(self.base_dir, device_id, "w1_slave")
        return self._discover_device_file()

    # --- Public API ---------------------------------------------------------

    def read(self, pin: int) -> float:
        """
        Read the device for pin and return the kernel-reported value divided
        by 1000 (degrees Celsius for DS18B20 parts).
        """
        device_file = self.device_file(pin)
        try:
            with open(device_file, "r") as f:
                lines = f.readlines()
        except OSError as e:
            raise OneWireReadError(f"Failed reading {device_file}: {e}") from e

        if len(lines) < 2 or not lines[0].strip().endswith("YES"):
            raise OneWireReadError("One-wire CRC check failed")

        pos = lines[1].find("t=")
        if pos == -1:
            raise OneWireReadError("Reading not found in device output")

        try:
            return float(lines[1][pos + 2:]) / 1000.0
        except ValueError:
            raise OneWireReadError("Malformed one-wire value")
