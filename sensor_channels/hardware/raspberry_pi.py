"""
raspberry_pi.py

Hardware capability set for a Raspberry Pi: pigpio for digital inputs, an
MCP3008 for analog inputs, the w1 sysfs tree for one-wire devices, spidev for
SPI and smbus3 for I2C.
"""

import logging
from typing import Any, Mapping

from sensor_channels import PACKAGE_LOGGER_NAME
from sensor_channels.exceptions.hardware import HardwareStopError
from sensor_channels.hardware.adc import MCP3008
from sensor_channels.hardware.base import BaseHardware
from sensor_channels.hardware.gpio import DigitalGPIO
from sensor_channels.hardware.i2c import I2CReader
from sensor_channels.hardware.one_wire import OneWireBus
from sensor_channels.hardware.spi import SPIReader

logger = logging.getLogger(f"{PACKAGE_LOGGER_NAME}.hardware.raspberry_pi")


class RaspberryPiHardware(BaseHardware):
    """
    Composes one reader per mode. Readers open their bus or daemon connection
    on first use, so constructing this class touches no hardware.

    Args:
        config: Hardware configuration mapping. Supported keys:
            - i2c (dict): bus, read_bytes
            - spi (dict): bus, device, max_speed_hz, mode, read_bytes
            - adc (dict): bus, device, max_speed_hz
            - one_wire (dict): base_dir, devices ({pin: device_id})
            - pull_up (bool): pull digital inputs up (default True)
    """

    def __init__(self, config: Mapping[str, Any] | None = None) -> None:
        config = config or {}
        self.gpio = DigitalGPIO(pull_up=bool(config.get("pull_up", True)))
        self.adc = MCP3008(**dict(config.get("adc") or {}))
        self.one_wire = OneWireBus(**dict(config.get("one_wire") or {}))
        self.spi = SPIReader(**dict(config.get("spi") or {}))
        self.i2c = I2CReader(**dict(config.get("i2c") or {}))

    def read_digital(self, pin: int) -> int:
        return self.gpio.read(pin)

    def read_analog(self, pin: int) -> int:
        return self.adc.read(pin)

    def read_one_wire(self, pin: int) -> float:
        return self.one_wire.read(pin)

    def read_spi(self, cs_pin: int) -> float:
        return self.spi.read(cs_pin)

    def read_i2c(self, address: int) -> float:
        return self.i2c.read(address)

    def close(self) -> None:
        """
        Close every reader, then raise the first failure, if any.
        """
        first_error: HardwareStopError | None = None
        for reader in (self.gpio, self.adc, self.spi, self.i2c):
            try:
                reader.close()
            except HardwareStopError as e:
                logger.warning(f"Failed to close {reader.__class__.__name__}: {e}")
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error
