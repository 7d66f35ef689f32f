"""
adc.py

Analog input through an MCP3008 10-bit ADC on the SPI bus. The Pi has no
analog pins, so an analog channel's pin is the MCP3008 input number (0-7).
"""

import spidev

from sensor_channels.exceptions.hardware import (
    HardwareInitError,
    HardwareReadError,
    HardwareStopError,
    HardwareValueError,
)
from sensor_channels.hardware.constants import (
    DEFAULT_SPI_BUS,
    DEFAULT_ADC_DEVICE,
    DEFAULT_SPI_SPEED_HZ,
    MCP3008_CHANNELS,
)


class ADCInitError(HardwareInitError):
    pass


class ADCValueError(HardwareValueError):
    pass


class ADCReadError(HardwareReadError):
    pass


class ADCStopError(HardwareStopError):
    pass


class MCP3008:
    """
    MCP3008 reader using the hardware chip select of `device` (CE0/CE1).
    """

    def __init__(
        self,
        *,
        bus: int = DEFAULT_SPI_BUS,
        device: int = DEFAULT_ADC_DEVICE,
        max_speed_hz: int = DEFAULT_SPI_SPEED_HZ,
    ):
        self.bus = bus
        self.device = device
        self.max_speed_hz = max_speed_hz
        self._spi = None

    def _open(self):
        if self._spi is not None:
            return self._spi
        try:
            spi = spidev.SpiDev()
            spi.open(self.bus, self.device)
            spi.max_speed_hz = self.max_speed_hz
            spi.mode = 0
        except Exception as e:
            raise ADCInitError(f"Failed to open MCP3008 on SPI {self.bus}.{self.device}: {e}") from e
        self._spi = spi
        return spi

    def read(self, channel: int) -> int:
        if isinstance(channel, bool) or not isinstance(channel, int) or not (0 <= channel < MCP3008_CHANNELS):
            raise ADCValueError(f"MCP3008 input must be 0..{MCP3008_CHANNELS - 1}: {channel!r}")

        spi = self._open()
        try:
            # start bit, single-ended + channel select, clock out 10 bits
            reply = spi.xfer2([0x01, (0x08 | channel) << 4, 0x00])
        except Exception as e:
            raise ADCReadError(f"MCP3008 read failed on input {channel}: {e}") from e

        if len(reply) != 3:
            raise ADCReadError(f"MCP3008 returned {len(reply)} bytes, expected 3")
        return ((reply[1] & 0x03) << 8) | reply[2]

    def close(self) -> None:
        if self._spi is None:
            return
        try:
            self._spi.close()
        except Exception as e:
            raise ADCStopError(f"Error closing MCP3008 SPI device: {e}") from e
        finally:
            self._spi = None
