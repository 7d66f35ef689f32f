"""
manager.py

Loads and saves the channel registry through a BlobStore.
"""

import logging
from typing import Any, Iterable, Mapping, Optional

from sensor_channels.channels.registry import DEFAULT_MAX_FIXED_CHANNEL, ChannelRegistry
from sensor_channels.exceptions import StoreNotFoundError
from sensor_channels.persistence.base import BlobStore
from sensor_channels.persistence.codec import decode_registry, encode_registry


class RegistryPersistence:
    """
    Ties a BlobStore to the registry codec.

    Args:
        store: Backing store for the encoded registry.
        max_fixed_channel: Threshold given to loaded registries.
        logger: Logger instance.
    """

    def __init__(
        self,
        store: BlobStore,
        logger: logging.Logger,
        *,
        max_fixed_channel: Optional[int] = DEFAULT_MAX_FIXED_CHANNEL,
    ) -> None:
        self._store = store
        self._logger = logger
        self._max_fixed_channel = max_fixed_channel

    @property
    def store(self) -> BlobStore:
        return self._store

    def load(self) -> ChannelRegistry:
        """
        Load the saved registry.

        Raises:
            StoreNotFoundError: If nothing has been saved (first run).
            StoreCorruptError: If the saved blob cannot be decoded.
            PersistenceUnavailableError: If the store cannot be read.
        """
        blob = self._store.read()
        registry = decode_registry(blob, max_fixed_channel=self._max_fixed_channel)
        self._logger.info(f"Loaded registry with {len(registry)} channels")
        return registry

    def save(self, registry: ChannelRegistry) -> None:
        """
        Save the registry, replacing whatever was stored.

        Raises:
            PersistenceUnavailableError: If the store cannot be written.
        """
        self._store.write(encode_registry(registry))
        self._logger.info(f"Saved registry with {len(registry)} channels")

    def load_or_create(
        self,
        defaults: Iterable[Mapping[str, Any]],
        bus_channels: Iterable[Mapping[str, Any]] = (),
    ) -> ChannelRegistry:
        """
        Load the saved registry, or on first run build one from the default
        fixed channels plus any seed bus devices, and save it.
        """
        try:
            return self.load()
        except StoreNotFoundError:
            self._logger.info("No saved registry found, creating default channels")
        registry = ChannelRegistry.with_defaults(
            defaults, bus_channels, max_fixed_channel=self._max_fixed_channel
        )
        self.save(registry)
        return registry
