from .config_exceptions import (
    ConfigurationError,
    InvalidConfigValueError,
    MissingConfigKeyError,
    ConfigFileNotFoundError,
)
from .factory_exceptions import FactoryError, UnknownHardwareTypeError, InvalidHardwareConfigError
from .hardware import (
    HardwareError,
    HardwareInitError,
    HardwareReadError,
    HardwareValueError,
    HardwareStopError,
)
from .persistence_exceptions import (
    PersistenceError,
    PersistenceUnavailableError,
    StoreNotFoundError,
    StoreCorruptError,
)
from .registry_exceptions import (
    RegistryError,
    DuplicateChannelError,
    ChannelNotFoundError,
    WrongChannelKindError,
    InvalidChannelError,
)

__all__ = [
    "ConfigurationError",
    "InvalidConfigValueError",
    "MissingConfigKeyError",
    "ConfigFileNotFoundError",
    "FactoryError",
    "UnknownHardwareTypeError",
    "InvalidHardwareConfigError",
    "HardwareError",
    "HardwareInitError",
    "HardwareReadError",
    "HardwareValueError",
    "HardwareStopError",
    "PersistenceError",
    "PersistenceUnavailableError",
    "StoreNotFoundError",
    "StoreCorruptError",
    "RegistryError",
    "DuplicateChannelError",
    "ChannelNotFoundError",
    "WrongChannelKindError",
    "InvalidChannelError",
]
