"""
dispatcher.py

Provides the ReadDispatcher class, which resolves a channel number through the
registry and calls the hardware capability matching the channel's mode.

Two entry points are offered:

    read(channel) -> ReadResult      tagged result separating missing,
                                     inactive and failed reads
    read_channel(channel) -> float   legacy contract: the measurement, or -1.0
                                     for any of the three failure cases
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sensor_channels import PACKAGE_LOGGER_NAME
from sensor_channels.channels.model import BusChannel, FixedChannel, Mode
from sensor_channels.channels.registry import ChannelRegistry
from sensor_channels.exceptions import HardwareError
from sensor_channels.hardware.base import BaseHardware

logger = logging.getLogger(f"{PACKAGE_LOGGER_NAME}.dispatcher")

READ_ERROR = -1.0


class ReadStatus(Enum):
    OK = "ok"
    INACTIVE = "inactive"
    NOT_FOUND = "not_found"
    HARDWARE_ERROR = "hardware_error"


@dataclass(frozen=True)
class ReadResult:
    """
    Outcome of a single channel read. `value` is set only when status is OK;
    `error` holds the hardware failure message for HARDWARE_ERROR.
    """
    channel: int
    status: ReadStatus
    value: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ReadStatus.OK

    def as_float(self) -> float:
        """
        Collapse to the legacy float contract: the value, or READ_ERROR.
        """
        return float(self.value) if self.ok else READ_ERROR


class ReadDispatcher:
    """
    Routes channel reads to hardware.

    Fixed channels are looked up first, then bus channels. Inactive channels
    are answered without touching hardware. The lookup and the hardware call
    both run under the registry lock, so a concurrent remove cannot pull an
    entry out from under a read in progress.

    Args:
        registry: The registry to resolve channels against.
        hardware: Capability set providing one read function per mode.
    """

    def __init__(self, registry: ChannelRegistry, hardware: BaseHardware) -> None:
        self._registry = registry
        self._hardware = hardware

    @property
    def hardware(self) -> BaseHardware:
        return self._hardware

    def _invoke(self, entry) -> float:
        if isinstance(entry, FixedChannel):
            if entry.mode is Mode.DIGITAL:
                return self._hardware.read_digital(entry.pin)
            if entry.mode is Mode.ANALOG:
                return self._hardware.read_analog(entry.pin)
            if entry.mode is Mode.ONEWIRE:
                return self._hardware.read_one_wire(entry.pin)
            if entry.mode is Mode.SPI:
                return self._hardware.read_spi(entry.pin)
        elif isinstance(entry, BusChannel):
            if entry.kind is Mode.I2C:
                return self._hardware.read_i2c(entry.address)
            if entry.kind is Mode.SPI:
                return self._hardware.read_spi(entry.cs_pin)
        raise TypeError(f"No read strategy for {entry!r}")

    def read(self, channel: int) -> ReadResult:
        """
        Read a channel and report how the read went.
        """
        with self._registry.lock:
            entry = self._registry.find_fixed(channel) or self._registry.find_bus(channel)
            if entry is None:
                logger.debug(f"Read of unknown channel {channel}")
                return ReadResult(channel, ReadStatus.NOT_FOUND)
            if not entry.active:
                logger.debug(f"Channel {channel} is inactive, skipping hardware read")
                return ReadResult(channel, ReadStatus.INACTIVE)
            try:
                value = self._invoke(entry)
            except HardwareError as e:
                logger.warning(f"Read failed for channel {channel} ({entry.mode.value}): {e}")
                return ReadResult(channel, ReadStatus.HARDWARE_ERROR, error=str(e))
        return ReadResult(channel, ReadStatus.OK, value=float(value))

    def read_channel(self, channel: int) -> float:
        """
        Read a channel, returning READ_ERROR (-1.0) if it is missing, inactive
        or the hardware read failed. Use read() to tell these apart.
        """
        return self.read(channel).as_float()

    def read_active(self) -> dict[int, ReadResult]:
        """
        Read every active channel, fixed channels first, in registry order.
        """
        with self._registry.lock:
            return {channel: self.read(channel) for channel in self._registry.active_channel_list()}
