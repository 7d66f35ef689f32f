"""
model.py

Value types for the channel registry: the Mode enumeration, FixedChannel for
statically wired sensors, and BusChannel for I2C/SPI devices attached at
runtime.

Entries are frozen dataclasses. The registry changes an entry by replacing it
with an updated copy, so a caller holding a FixedChannel or BusChannel never
sees it change underneath them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from sensor_channels.exceptions import InvalidChannelError


class Mode(Enum):
    """
    How a channel is read. NONE is the sentinel returned for channels that do
    not exist.
    """
    DIGITAL = "DIGITAL"
    ANALOG = "ANALOG"
    ONEWIRE = "ONEWIRE"
    SPI = "SPI"
    I2C = "I2C"
    NONE = "NONE"

    @classmethod
    def parse(cls, value: Any) -> "Mode":
        """
        Return the Mode for a Mode instance or a case-insensitive name.

        Raises:
            InvalidChannelError: If the value does not name a mode.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "").replace("_", "")
            for mode in cls:
                if mode.value == key:
                    return mode
        raise InvalidChannelError(f"Unknown channel mode: {value!r}")


FIXED_MODES = frozenset({Mode.DIGITAL, Mode.ANALOG, Mode.ONEWIRE, Mode.SPI})
BUS_MODES = frozenset({Mode.I2C, Mode.SPI})

I2C_ADDRESS_MIN = 0x01
I2C_ADDRESS_MAX = 0x7F


def check_number(value: Any, name: str, *, channel: Optional[int] = None) -> int:
    """
    Validate a channel number or pin: a non-negative int, bools rejected.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidChannelError(
            f"Invalid {name} type: expected int, got {type(value).__name__}", channel=channel
        )
    if value < 0:
        raise InvalidChannelError(f"Invalid {name}: {value} must be ≥ 0", channel=channel)
    return value


def check_flag(value: Any, name: str = "active", *, channel: Optional[int] = None) -> bool:
    """
    Validate an on/off flag. Only real bools are accepted; strings such as
    "false" and ints are rejected rather than coerced.
    """
    if not isinstance(value, bool):
        raise InvalidChannelError(
            f"Invalid {name} type: expected bool, got {type(value).__name__}", channel=channel
        )
    return value


def check_i2c_address(value: Any, *, channel: Optional[int] = None) -> int:
    """
    Validate a 7-bit I2C address in the range 0x01–0x7F.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidChannelError(
            f"Invalid I2C address type: expected int, got {type(value).__name__}", channel=channel
        )
    if not (I2C_ADDRESS_MIN <= value <= I2C_ADDRESS_MAX):
        raise InvalidChannelError(
            f"I2C address {value:#04x} out of 7-bit range 0x01–0x7F", channel=channel
        )
    return value


@dataclass(frozen=True)
class FixedChannel:
    """
    A statically wired sensor.

    Pins are not unique: several logical channels may share one pin, e.g. a
    multiplexed one-wire bus.
    """
    channel: int
    pin: int
    mode: Mode
    active: bool = True


@dataclass(frozen=True)
class BusChannel:
    """
    A dynamically attached I2C or SPI device.

    `id` is assigned by the registry when the channel is added and identifies
    that add event; it is distinct from the channel number. I2C entries carry
    `address`, SPI entries carry `cs_pin`.
    """
    channel: int
    id: int
    kind: Mode
    address: Optional[int] = None
    cs_pin: Optional[int] = None
    active: bool = True

    @property
    def mode(self) -> Mode:
        return self.kind

    @property
    def is_i2c(self) -> bool:
        return self.kind is Mode.I2C

    @property
    def is_spi(self) -> bool:
        return self.kind is Mode.SPI
