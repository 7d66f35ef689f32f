"""
spi.py

Raw SPI reads through spidev, with chip select driven on an arbitrary GPIO
pin through RPi.GPIO so any number of devices can share one SPI bus.
"""

import spidev
import RPi.GPIO as GPIO

from sensor_channels.exceptions.hardware import (
    HardwareInitError,
    HardwareReadError,
    HardwareStopError,
    HardwareValueError,
)
from sensor_channels.hardware.constants import (
    DEFAULT_SPI_BUS,
    DEFAULT_SPI_DEVICE,
    DEFAULT_SPI_SPEED_HZ,
)
from sensor_channels.hardware.gpio import GPIOValueError, check_pin


class SPIInitError(HardwareInitError):
    """
    Raised when the SPI device or chip-select GPIO cannot be set up.
    """
    pass


class SPIValueError(HardwareValueError):
    """
    Raised when an SPI read is given an invalid chip-select pin or setting.
    """
    pass


class SPIReadError(HardwareReadError):
    """
    Raised when an SPI transfer fails or returns a short read.
    """
    pass


class SPIStopError(HardwareStopError):
    """
    Raised when the SPI device or GPIO cannot be released.
    """
    pass


class SPIReader:
    """
    Reads `read_bytes` raw bytes from the device selected by a chip-select pin
    and returns them as a big-endian unsigned number.
    """

    def __init__(
        self,
        *,
        bus: int = DEFAULT_SPI_BUS,
        device: int = DEFAULT_SPI_DEVICE,
        max_speed_hz: int = DEFAULT_SPI_SPEED_HZ,
        mode: int = 0,
        read_bytes: int = 2,
    ):
        if mode not in (0, 1, 2, 3):
            raise SPIValueError(f"SPI mode must be 0..3: {mode}")
        if not isinstance(read_bytes, int) or read_bytes < 1:
            raise SPIValueError(f"read_bytes must be an integer ≥ 1: {read_bytes}")
        self.bus = bus
        self.device = device
        self.max_speed_hz = max_speed_hz
        self.mode = mode
        self.read_bytes = read_bytes

        self._spi = None
        self._cs_pins: set[int] = set()

    def _open(self):
        if self._spi is not None:
            return self._spi
        try:
            spi = spidev.SpiDev()
            spi.open(self.bus, self.device)
            spi.max_speed_hz = self.max_speed_hz
            spi.mode = self.mode
            spi.no_cs = True
            GPIO.setmode(GPIO.BCM)
        except Exception as e:
            raise SPIInitError(f"Failed to open SPI {self.bus}.{self.device}: {e}") from e
        self._spi = spi
        return spi

    def _select_pin(self, cs_pin: int) -> None:
        if cs_pin in self._cs_pins:
            return
        try:
            GPIO.setup(cs_pin, GPIO.OUT, initial=GPIO.HIGH)
        except Exception as e:
            raise SPIInitError(f"Failed to configure CS pin {cs_pin}: {e}") from e
        self._cs_pins.add(cs_pin)

    def read(self, cs_pin: int) -> float:
        try:
            check_pin(cs_pin)
        except GPIOValueError as e:
            raise SPIValueError(str(e)) from e

        spi = self._open()
        self._select_pin(cs_pin)

        try:
            GPIO.output(cs_pin, GPIO.LOW)
            try:
                data = spi.readbytes(self.read_bytes)
            finally:
                GPIO.output(cs_pin, GPIO.HIGH)
        except Exception as e:
            raise SPIReadError(f"SPI read failed on CS pin {cs_pin}: {e}") from e

        if len(data) != self.read_bytes:
            raise SPIReadError(
                f"Truncated SPI read on CS pin {cs_pin}: expected {self.read_bytes} bytes, got {len(data)}"
            )
        return float(int.from_bytes(bytes(data), "big"))

    def close(self) -> None:
        """
        Close the SPI device and release chip-select pins. Safe to call
        multiple times.
        """
        try:
            if self._spi is not None:
                self._spi.close()
            if self._cs_pins:
                GPIO.cleanup(sorted(self._cs_pins))
        except Exception as e:
            raise SPIStopError(f"Error releasing SPI {self.bus}.{self.device}: {e}") from e
        finally:
            self._spi = None
            self._cs_pins.clear()
