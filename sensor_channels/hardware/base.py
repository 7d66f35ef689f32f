"""
base.py

Defines the BaseHardware abstract class: the set of read capabilities the
dispatcher calls, one per channel mode.
"""

from abc import ABC, abstractmethod


class BaseHardware(ABC):
    """
    Abstract base class for hardware capability sets.

    Each read performs one blocking transaction and returns the raw
    measurement. Failures raise a HardwareReadError subclass; invalid pins or
    addresses raise a HardwareValueError subclass. Timeouts belong to the
    implementation.
    """

    @abstractmethod
    def read_digital(self, pin: int) -> int:
        """Return the logic level (0 or 1) of a GPIO pin."""

    @abstractmethod
    def read_analog(self, pin: int) -> int:
        """Return the raw ADC count for an analog input."""

    @abstractmethod
    def read_one_wire(self, pin: int) -> float:
        """Return the reading of the one-wire device on the given pin."""

    @abstractmethod
    def read_spi(self, cs_pin: int) -> float:
        """Return a raw value read from the SPI device selected by cs_pin."""

    @abstractmethod
    def read_i2c(self, address: int) -> float:
        """Return a raw value read from the I2C device at address."""

    @abstractmethod
    def close(self) -> None:
        """
        Release any bus handles or daemon connections held by this instance.

        Implementations that hold no resources must implement this as a no-op.
        """
