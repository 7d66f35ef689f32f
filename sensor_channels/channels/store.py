"""
store.py

In-memory storage for registered channels.

Fixed channels are kept in a list in insertion order. Bus channels are kept in
an arena keyed by their id: a dict preserves insertion order for reporting,
and removing one entry never shifts the others.

The store performs no validation; ChannelRegistry owns every rule about what
may be added, changed or removed.
"""

from typing import Optional

from sensor_channels.channels.model import BusChannel, FixedChannel, Mode


class RegistryStore:
    """
    Ordered collections of fixed and bus channels with lookup by channel number.

    Lookups are linear scans; registries hold tens of entries.
    """

    def __init__(self) -> None:
        self._fixed: list[FixedChannel] = []
        self._bus: dict[int, BusChannel] = {}

    def __len__(self) -> int:
        return len(self._fixed) + len(self._bus)

    # --- Lookup -------------------------------------------------------------

    def find_fixed(self, channel: int) -> Optional[FixedChannel]:
        for entry in self._fixed:
            if entry.channel == channel:
                return entry
        return None

    def find_bus(self, channel: int) -> Optional[BusChannel]:
        for entry in self._bus.values():
            if entry.channel == channel:
                return entry
        return None

    def channel_exists(self, channel: int) -> bool:
        return self.find_fixed(channel) is not None or self.find_bus(channel) is not None

    def all_channels(self) -> list[tuple[int, Mode]]:
        """
        Return (channel, mode) for every entry, fixed channels first.
        """
        pairs = [(entry.channel, entry.mode) for entry in self._fixed]
        pairs.extend((entry.channel, entry.kind) for entry in self._bus.values())
        return pairs

    def fixed_channels(self) -> tuple[FixedChannel, ...]:
        return tuple(self._fixed)

    def bus_channels(self) -> tuple[BusChannel, ...]:
        return tuple(self._bus.values())

    # --- Mutation -----------------------------------------------------------

    def append_fixed(self, entry: FixedChannel) -> None:
        self._fixed.append(entry)

    def replace_fixed(self, entry: FixedChannel) -> None:
        """
        Swap in an updated entry at the position of the entry with the same
        channel number.
        """
        for index, current in enumerate(self._fixed):
            if current.channel == entry.channel:
                self._fixed[index] = entry
                return
        raise KeyError(entry.channel)

    def insert_bus(self, entry: BusChannel) -> None:
        self._bus[entry.id] = entry

    def replace_bus(self, entry: BusChannel) -> None:
        if entry.id not in self._bus:
            raise KeyError(entry.id)
        self._bus[entry.id] = entry

    def discard_bus(self, entry_id: int) -> BusChannel:
        return self._bus.pop(entry_id)

    def clear(self) -> None:
        self._fixed.clear()
        self._bus.clear()
