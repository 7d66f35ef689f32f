"""
registry.py

Provides the ChannelRegistry class, the owner of all channel state. It
validates and applies add/update/remove/enable/disable operations against a
RegistryStore and answers the queries the read dispatcher, reporting and
persistence layers rely on.

Every operation validates before it mutates: a call that raises leaves the
registry exactly as it was.

Classes:
    ChannelRegistry

Usage:
    registry = ChannelRegistry(max_fixed_channel=9)
    registry.add_fixed(1, 2, Mode.DIGITAL)
    entry_id = registry.add_i2c(10, 0x3C)
    registry.disable_channel(1)
"""

import logging
import threading
from dataclasses import replace
from typing import Any, Iterable, Mapping, Optional, Union

from sensor_channels import PACKAGE_LOGGER_NAME
from sensor_channels.channels.model import (
    BUS_MODES,
    FIXED_MODES,
    BusChannel,
    FixedChannel,
    Mode,
    check_flag,
    check_i2c_address,
    check_number,
)
from sensor_channels.channels.store import RegistryStore
from sensor_channels.exceptions import (
    ChannelNotFoundError,
    DuplicateChannelError,
    InvalidChannelError,
    RegistryError,
    WrongChannelKindError,
)

logger = logging.getLogger(f"{PACKAGE_LOGGER_NAME}.registry")

DEFAULT_MAX_FIXED_CHANNEL = 9


def _kind_name(entry: Any) -> str:
    return "fixed" if isinstance(entry, FixedChannel) else f"{entry.kind.value} bus"


class ChannelRegistry:
    """
    Registry of fixed and bus channels.

    Channel numbers are unique across both kinds. Fixed channels are never
    removed; bus channels come and go at runtime and each add is stamped with
    a fresh id that is never handed out again by this registry.

    All public methods hold `lock`, a re-entrant lock. A multi-threaded host
    that needs a lookup and a follow-up action to be atomic can hold it too.

    Args:
        max_fixed_channel: Highest channel number allowed for fixed channels;
            bus channels must be numbered above it. None disables the check.
    """

    def __init__(self, max_fixed_channel: Optional[int] = DEFAULT_MAX_FIXED_CHANNEL) -> None:
        if max_fixed_channel is not None:
            check_number(max_fixed_channel, "max_fixed_channel")
            if max_fixed_channel < 1:
                raise InvalidChannelError(f"max_fixed_channel must be ≥ 1: {max_fixed_channel}")
        self._max_fixed_channel = max_fixed_channel
        self._store = RegistryStore()
        self._next_id = 1
        self.lock = threading.RLock()

    @property
    def max_fixed_channel(self) -> Optional[int]:
        return self._max_fixed_channel

    @property
    def next_id(self) -> int:
        """The id the next add_bus() call will assign."""
        return self._next_id

    def __len__(self) -> int:
        with self.lock:
            return len(self._store)

    # --- Internals ----------------------------------------------------------

    @staticmethod
    def _reject(error: RegistryError) -> RegistryError:
        logger.warning(f"Registry operation rejected: {error}")
        return error

    def _check_unique(self, channel: int) -> None:
        if self._store.channel_exists(channel):
            raise self._reject(DuplicateChannelError(channel))

    def _check_fixed_range(self, channel: int) -> None:
        limit = self._max_fixed_channel
        if limit is not None and not (1 <= channel <= limit):
            raise self._reject(
                InvalidChannelError(f"Fixed channels must be numbered 1..{limit}", channel=channel)
            )

    def _check_bus_range(self, channel: int) -> None:
        limit = self._max_fixed_channel
        if limit is not None and channel <= limit:
            raise self._reject(
                InvalidChannelError(f"Bus channels must be numbered above {limit}", channel=channel)
            )

    def _fixed_mode(self, mode: Any, channel: int) -> Mode:
        try:
            parsed = Mode.parse(mode)
        except InvalidChannelError as e:
            raise self._reject(InvalidChannelError(str(e), channel=channel)) from e
        if parsed not in FIXED_MODES:
            raise self._reject(
                InvalidChannelError(f"Mode {parsed.value} is not valid for a fixed channel", channel=channel)
            )
        return parsed

    def _bus_kind(self, kind: Any, channel: int) -> Mode:
        try:
            parsed = Mode.parse(kind)
        except InvalidChannelError as e:
            raise self._reject(InvalidChannelError(str(e), channel=channel)) from e
        if parsed not in BUS_MODES:
            raise self._reject(
                InvalidChannelError(f"Bus channels must be I2C or SPI, got {parsed.value}", channel=channel)
            )
        return parsed

    def _validated_fixed(self, channel: Any, pin: Any, mode: Any, active: Any) -> FixedChannel:
        try:
            check_number(channel, "channel")
            check_number(pin, "pin", channel=channel)
            check_flag(active, channel=channel)
        except InvalidChannelError as e:
            raise self._reject(e)
        return FixedChannel(channel=channel, pin=pin, mode=self._fixed_mode(mode, channel), active=active)

    def _validated_bus(self, channel: Any, entry_id: int, kind: Any, target: Any, active: Any) -> BusChannel:
        try:
            check_number(channel, "channel")
            check_flag(active, channel=channel)
        except InvalidChannelError as e:
            raise self._reject(e)
        parsed = self._bus_kind(kind, channel)
        try:
            if parsed is Mode.I2C:
                return BusChannel(
                    channel=channel, id=entry_id, kind=parsed,
                    address=check_i2c_address(target, channel=channel), active=active,
                )
            return BusChannel(
                channel=channel, id=entry_id, kind=parsed,
                cs_pin=check_number(target, "cs_pin", channel=channel), active=active,
            )
        except InvalidChannelError as e:
            raise self._reject(e)

    def _find_or_raise(self, channel: int):
        entry = self._store.find_fixed(channel) or self._store.find_bus(channel)
        if entry is None:
            raise self._reject(ChannelNotFoundError(channel))
        return entry

    def _set_active(self, channel: int, active: bool) -> Union[FixedChannel, BusChannel]:
        with self.lock:
            entry = self._find_or_raise(channel)
            if entry.active == active:
                logger.debug(f"Channel {channel} already {'enabled' if active else 'disabled'}")
                return entry
            updated = replace(entry, active=active)
            if isinstance(updated, FixedChannel):
                self._store.replace_fixed(updated)
            else:
                self._store.replace_bus(updated)
            logger.info(f"Channel {channel} {'enabled' if active else 'disabled'}")
            return updated

    # --- Mutation -----------------------------------------------------------

    def add_fixed(self, channel: int, pin: int, mode: Any, active: bool = True) -> FixedChannel:
        """
        Register a statically wired channel.

        The pin is not checked against hardware; that is left to the reader.

        Raises:
            DuplicateChannelError: If the channel number is already registered.
            InvalidChannelError: If a value fails validation or the channel is
                outside the fixed range.
        """
        with self.lock:
            entry = self._validated_fixed(channel, pin, mode, active)
            self._check_unique(channel)
            self._check_fixed_range(channel)
            self._store.append_fixed(entry)
            logger.info(f"Added fixed channel {channel} ({entry.mode.value}, pin {pin})")
            return entry

    def add_bus(self, channel: int, kind: Any, address_or_cs_pin: int, active: bool = True) -> int:
        """
        Register an I2C or SPI device and return the id assigned to this add.

        Args:
            channel: Channel number, above max_fixed_channel.
            kind: Mode.I2C or Mode.SPI (or their names).
            address_or_cs_pin: 7-bit address for I2C, chip-select pin for SPI.

        Raises:
            DuplicateChannelError: If the channel number is already registered.
            InvalidChannelError: If a value fails validation or the channel is
                inside the fixed range.
        """
        with self.lock:
            entry = self._validated_bus(channel, self._next_id, kind, address_or_cs_pin, active)
            self._check_unique(channel)
            self._check_bus_range(channel)
            self._store.insert_bus(entry)
            self._next_id += 1
            target = f"address {entry.address:#04x}" if entry.is_i2c else f"CS pin {entry.cs_pin}"
            logger.info(f"Added {entry.kind.value} channel {channel} (id {entry.id}, {target})")
            return entry.id

    def add_i2c(self, channel: int, address: int, active: bool = True) -> int:
        return self.add_bus(channel, Mode.I2C, address, active)

    def add_spi(self, channel: int, cs_pin: int, active: bool = True) -> int:
        return self.add_bus(channel, Mode.SPI, cs_pin, active)

    def update_channel(self, channel: int, mode: Any, active: bool) -> FixedChannel:
        """
        Replace the mode and active flag of a fixed channel together.

        Raises:
            ChannelNotFoundError: If the channel is not registered.
            WrongChannelKindError: If the channel is a bus channel.
            InvalidChannelError: If the mode is not a fixed-channel mode.
        """
        with self.lock:
            entry = self._find_or_raise(channel)
            if not isinstance(entry, FixedChannel):
                raise self._reject(WrongChannelKindError(channel, "fixed", _kind_name(entry)))
            try:
                check_flag(active, channel=channel)
            except InvalidChannelError as e:
                raise self._reject(e)
            updated = replace(entry, mode=self._fixed_mode(mode, channel), active=active)
            self._store.replace_fixed(updated)
            logger.info(
                f"Updated channel {channel}: {entry.mode.value} -> {updated.mode.value}, active={updated.active}"
            )
            return updated

    def enable_channel(self, channel: int) -> Union[FixedChannel, BusChannel]:
        """
        Mark a channel active and return the resulting entry. Enabling an
        active channel changes nothing and returns the same entry.

        Raises:
            ChannelNotFoundError: If the channel is not registered.
        """
        return self._set_active(channel, True)

    def disable_channel(self, channel: int) -> Union[FixedChannel, BusChannel]:
        """
        Mark a channel inactive and return the resulting entry. Disabling an
        inactive channel changes nothing and returns the same entry.

        Raises:
            ChannelNotFoundError: If the channel is not registered.
        """
        return self._set_active(channel, False)

    def remove_bus(self, channel: int) -> BusChannel:
        """
        Remove a bus channel, freeing its channel number. Its id stays retired.

        Raises:
            ChannelNotFoundError: If the channel is not registered.
            WrongChannelKindError: If the channel is a fixed channel.
        """
        with self.lock:
            entry = self._find_or_raise(channel)
            if isinstance(entry, FixedChannel):
                raise self._reject(WrongChannelKindError(channel, "bus", "fixed"))
            removed = self._store.discard_bus(entry.id)
            logger.info(f"Removed {removed.kind.value} channel {channel} (id {removed.id})")
            return removed

    def disable_mode(self, mode: Any) -> list[int]:
        """
        Disable every active fixed channel with the given mode.

        Returns:
            list[int]: The channels that were switched off.
        """
        target = Mode.parse(mode)
        with self.lock:
            changed = []
            for entry in self._store.fixed_channels():
                if entry.mode is target and entry.active:
                    self._store.replace_fixed(replace(entry, active=False))
                    changed.append(entry.channel)
            if changed:
                logger.info(f"Disabled {target.value} channels: {changed}")
            return changed

    # --- Queries ------------------------------------------------------------

    def find_fixed(self, channel: int) -> Optional[FixedChannel]:
        with self.lock:
            return self._store.find_fixed(channel)

    def find_bus(self, channel: int) -> Optional[BusChannel]:
        with self.lock:
            return self._store.find_bus(channel)

    def channel_exists(self, channel: int) -> bool:
        with self.lock:
            return self._store.channel_exists(channel)

    def all_channels(self) -> list[tuple[int, Mode]]:
        with self.lock:
            return self._store.all_channels()

    def fixed_channels(self) -> tuple[FixedChannel, ...]:
        with self.lock:
            return self._store.fixed_channels()

    def bus_channels(self) -> tuple[BusChannel, ...]:
        with self.lock:
            return self._store.bus_channels()

    def i2c_channels(self) -> tuple[BusChannel, ...]:
        return tuple(entry for entry in self.bus_channels() if entry.is_i2c)

    def spi_channels(self) -> tuple[BusChannel, ...]:
        return tuple(entry for entry in self.bus_channels() if entry.is_spi)

    def active_channel_list(self) -> list[int]:
        """
        Return active channel numbers: fixed channels first, then bus channels,
        each in registry order.
        """
        with self.lock:
            active = [entry.channel for entry in self._store.fixed_channels() if entry.active]
            active.extend(entry.channel for entry in self._store.bus_channels() if entry.active)
            return active

    def active_channel_count(self) -> int:
        return len(self.active_channel_list())

    def channel_mode(self, channel: int) -> Mode:
        """
        Return the channel's mode, or Mode.NONE if it is not registered.
        """
        with self.lock:
            fixed = self._store.find_fixed(channel)
            if fixed is not None:
                return fixed.mode
            bus = self._store.find_bus(channel)
            if bus is not None:
                return bus.kind
            return Mode.NONE

    def channel_pin(self, channel: int) -> Optional[int]:
        """
        Return the pin of a fixed channel or the CS pin of an SPI bus channel.
        """
        with self.lock:
            fixed = self._store.find_fixed(channel)
            if fixed is not None:
                return fixed.pin
            bus = self._store.find_bus(channel)
            if bus is not None and bus.is_spi:
                return bus.cs_pin
            return None

    def channel_i2c_address(self, channel: int) -> Optional[int]:
        with self.lock:
            bus = self._store.find_bus(channel)
            if bus is not None and bus.is_i2c:
                return bus.address
            return None

    # --- Serialization ------------------------------------------------------

    def as_dict(self) -> dict[str, Any]:
        """
        Return the full registry state as plain data, including the id counter.
        """
        with self.lock:
            fixed = [
                {"channel": e.channel, "pin": e.pin, "mode": e.mode.value, "active": e.active}
                for e in self._store.fixed_channels()
            ]
            bus = []
            for e in self._store.bus_channels():
                item: dict[str, Any] = {"channel": e.channel, "id": e.id, "kind": e.kind.value, "active": e.active}
                if e.is_i2c:
                    item["address"] = e.address
                else:
                    item["cs_pin"] = e.cs_pin
                bus.append(item)
            return {"next_id": self._next_id, "fixed": fixed, "bus": bus}

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        *,
        max_fixed_channel: Optional[int] = DEFAULT_MAX_FIXED_CHANNEL,
    ) -> "ChannelRegistry":
        """
        Rebuild a registry from as_dict() output.

        Entries go through the same validation as live adds, except the fixed
        and bus numbering ranges, which only apply to new channels.

        Raises:
            RegistryError: If an entry is invalid or duplicated.
            KeyError, TypeError: If the data is structurally wrong.
        """
        registry = cls(max_fixed_channel=max_fixed_channel)
        with registry.lock:
            for item in data.get("fixed", []):
                entry = registry._validated_fixed(item["channel"], item["pin"], item["mode"], item.get("active", True))
                registry._check_unique(entry.channel)
                registry._store.append_fixed(entry)

            seen_ids: set[int] = set()
            for item in data.get("bus", []):
                entry_id = check_number(item["id"], "id", channel=item.get("channel"))
                if entry_id in seen_ids:
                    raise InvalidChannelError(f"Duplicate bus entry id {entry_id}", channel=item.get("channel"))
                seen_ids.add(entry_id)
                kind = Mode.parse(item["kind"])
                target = item.get("address") if kind is Mode.I2C else item.get("cs_pin")
                entry = registry._validated_bus(item["channel"], entry_id, kind, target, item.get("active", True))
                registry._check_unique(entry.channel)
                registry._store.insert_bus(entry)

            stored_next = check_number(data.get("next_id", 1), "next_id")
            registry._next_id = max([stored_next, 1] + [i + 1 for i in seen_ids])
        return registry

    @classmethod
    def with_defaults(
        cls,
        defaults: Iterable[Mapping[str, Any]],
        bus_channels: Iterable[Mapping[str, Any]] = (),
        *,
        max_fixed_channel: Optional[int] = DEFAULT_MAX_FIXED_CHANNEL,
    ) -> "ChannelRegistry":
        """
        Build a registry holding the given fixed channel definitions, then
        attach the given bus devices in order, as a first run does.

        Bus items carry channel, kind and address (I2C) or cs_pin (SPI).
        """
        registry = cls(max_fixed_channel=max_fixed_channel)
        for item in defaults:
            registry.add_fixed(item["channel"], item["pin"], item["mode"], item.get("active", True))
        for item in bus_channels:
            kind = registry._bus_kind(item["kind"], item["channel"])
            target = item.get("address") if kind is Mode.I2C else item.get("cs_pin")
            registry.add_bus(item["channel"], kind, target, item.get("active", True))
        return registry
