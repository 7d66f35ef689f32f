"""
i2c.py

Raw I2C reads through smbus3.
"""

from smbus3 import SMBus, i2c_msg

from sensor_channels.exceptions.hardware import (
    HardwareInitError,
    HardwareReadError,
    HardwareStopError,
    HardwareValueError,
)
from sensor_channels.hardware.constants import DEFAULT_I2C_BUS


class I2CInitError(HardwareInitError):
    """
    Raised when the I2C bus device cannot be opened.
    """
    pass


class I2CValueError(HardwareValueError):
    """
    Raised when an I2C read is given an invalid address or length.
    """
    pass


class I2CReadError(HardwareReadError):
    """
    Raised when an I2C transaction fails or returns a short read.
    """
    pass


class I2CStopError(HardwareStopError):
    """
    Raised when the I2C bus handle cannot be closed.
    """
    pass


class I2CReader:
    """
    Reads `read_bytes` raw bytes from a device and returns them as a
    big-endian unsigned number. The bus handle is opened on first use and
    reused.
    """

    def __init__(self, *, bus: int = DEFAULT_I2C_BUS, read_bytes: int = 2):
        if not isinstance(bus, int) or not (0 <= bus <= 3):
            raise I2CValueError(f"I2C bus {bus} out of allowed range 0..3")
        if not isinstance(read_bytes, int) or read_bytes < 1:
            raise I2CValueError(f"read_bytes must be an integer ≥ 1: {read_bytes}")
        self.bus = bus
        self.read_bytes = read_bytes
        self._smbus: SMBus | None = None

    def _open(self) -> SMBus:
        """
        Open /dev/i2c-{bus} and keep the handle for reuse.
        """
        if self._smbus is not None:
            return self._smbus
        try:
            self._smbus = SMBus(self.bus)
        except FileNotFoundError as e:
            raise I2CInitError(f"I2C bus {self.bus} not found (no /dev/i2c-{self.bus})") from e
        except PermissionError as e:
            raise I2CInitError(f"Permission denied opening I2C bus {self.bus}") from e
        except OSError as e:
            raise I2CInitError(f"Failed to open I2C bus {self.bus}: {e}") from e
        return self._smbus

    def read(self, address: int) -> float:
        if isinstance(address, bool) or not isinstance(address, int) or not (0x01 <= address <= 0x7F):
            raise I2CValueError(f"I2C address {address!r} out of 7-bit range 0x01–0x7F")

        smbus = self._open()
        try:
            msg = i2c_msg.read(address, self.read_bytes)
            smbus.i2c_rdwr(msg)
            data = list(msg)
        except Exception as e:
            raise I2CReadError(f"I2C read failed from {address:#04x}: {e}") from e

        if len(data) != self.read_bytes:
            raise I2CReadError(
                f"Truncated I2C read from {address:#04x}: expected {self.read_bytes} bytes, got {len(data)}"
            )
        return float(int.from_bytes(bytes(data), "big"))

    def close(self) -> None:
        """
        Close the I2C bus handle if open.
        """
        if self._smbus is None:
            return
        try:
            self._smbus.close()
        except Exception as e:
            raise I2CStopError(f"Error closing I2C bus {self.bus}: {e}") from e
        finally:
            self._smbus = None
