"""
gpio.py

Digital GPIO reads through the pigpio daemon.
"""

# Operational notes:
# pigpiod must be installed and running on the Pi:
#   sudo apt install pigpio python3-pigpio
#   sudo systemctl enable --now pigpiod

import pigpio

from sensor_channels.exceptions.hardware import (
    HardwareInitError,
    HardwareReadError,
    HardwareStopError,
    HardwareValueError,
)
from sensor_channels.hardware.constants import VALID_GPIO_PINS


class GPIOValueError(HardwareValueError):
    """
    Raised when a GPIO read is given an invalid pin.
    """
    pass


class GPIOInitError(HardwareInitError):
    """
    Raised when the pigpio daemon cannot be reached.
    """
    pass


class GPIOReadError(HardwareReadError):
    """
    Raised when reading a GPIO level fails.
    """
    pass


class GPIOStopError(HardwareStopError):
    """
    Raised when the pigpio connection cannot be closed.
    """
    pass


def check_pin(pin) -> int:
    """
    Validate that pin is an int naming a BCM GPIO on this device.
    """
    if isinstance(pin, bool) or not isinstance(pin, int):
        raise GPIOValueError(f"Invalid pin type: expected int, got {type(pin).__name__}")
    if pin not in VALID_GPIO_PINS:
        raise GPIOValueError(f"Pin {pin} is not a valid GPIO pin on this device.")
    return pin


class DigitalGPIO:
    """
    Reads GPIO logic levels. The pigpio connection is opened on first use and
    each pin is configured as a pulled-up input the first time it is read.
    """

    def __init__(self, *, pull_up: bool = True):
        self.pull_up = pull_up
        self.pi: pigpio.pi | None = None
        self._configured: set[int] = set()

    def _connect(self) -> pigpio.pi:
        if self.pi is not None:
            return self.pi
        try:
            pi = pigpio.pi()
        except Exception as e:
            raise GPIOInitError(f"Error creating pigpio instance: {e}") from e
        if not getattr(pi, "connected", False):
            raise GPIOInitError("Unable to connect to pigpiod. Is the pigpiod daemon running?")
        self.pi = pi
        return pi

    def _configure(self, pi: pigpio.pi, pin: int) -> None:
        if pin in self._configured:
            return
        try:
            pi.set_mode(pin, pigpio.INPUT)
            pi.set_pull_up_down(pin, pigpio.PUD_UP if self.pull_up else pigpio.PUD_OFF)
        except Exception as e:
            raise GPIOInitError(f"Error configuring GPIO {pin}: {e}") from e
        self._configured.add(pin)

    def read(self, pin: int) -> int:
        check_pin(pin)
        pi = self._connect()
        self._configure(pi, pin)
        try:
            return int(pi.read(pin))
        except Exception as e:
            raise GPIOReadError(f"Failed to read GPIO {pin}: {e}") from e

    def close(self) -> None:
        """
        Stop the pigpio connection. Safe to call multiple times.
        """
        if self.pi is None:
            return
        try:
            self.pi.stop()
        except Exception as e:
            raise GPIOStopError(f"Error stopping pigpio: {e}") from e
        finally:
            self.pi = None
            self._configured.clear()
