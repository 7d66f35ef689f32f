from .model import Mode, FixedChannel, BusChannel, FIXED_MODES, BUS_MODES
from .store import RegistryStore
from .registry import ChannelRegistry, DEFAULT_MAX_FIXED_CHANNEL
from .dispatcher import ReadDispatcher, ReadResult, ReadStatus, READ_ERROR
from .defaults import DEFAULT_FIXED_CHANNELS

__all__ = [
    "Mode",
    "FixedChannel",
    "BusChannel",
    "FIXED_MODES",
    "BUS_MODES",
    "RegistryStore",
    "ChannelRegistry",
    "DEFAULT_MAX_FIXED_CHANNEL",
    "ReadDispatcher",
    "ReadResult",
    "ReadStatus",
    "READ_ERROR",
    "DEFAULT_FIXED_CHANNELS",
]
