"""
hardware.py

Shared base exception classes for all hardware capability readers.

Each reader module (gpio, one_wire, spi, i2c, adc) defines its own
reader-specific exception names (e.g. I2CReadError) as thin subclasses of
these bases. This lets callers catch at either level:

    # Reader-specific (precise):
    except I2CReadError: ...

    # Cross-reader (broad):
    except HardwareReadError: ...
"""


class HardwareError(Exception):
    """Base class for all hardware capability errors."""


class HardwareInitError(HardwareError):
    """Raised when a bus or device handle cannot be opened."""


class HardwareReadError(HardwareError):
    """Raised when a hardware read transaction fails."""


class HardwareValueError(HardwareError, ValueError):
    """Raised when a reader receives an invalid pin, address or setting."""


class HardwareStopError(HardwareError):
    """Raised when a bus or device handle cannot be cleanly released."""
