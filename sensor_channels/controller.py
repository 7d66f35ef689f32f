"""
controller.py

Defines the ChannelController class, the owner of the channel registry for
the life of the process. It saves registry changes, runs the polling loop
that reads every active channel, and releases hardware on shutdown.

Classes:
    ChannelController

Usage:
    controller = ChannelController(...)
    controller.registry.add_i2c(10, 0x3C)
    controller.save()
    controller.start()  # blocking polling loop
"""

import logging
import time

from sensor_channels.channels.dispatcher import ReadDispatcher, ReadStatus
from sensor_channels.channels.registry import ChannelRegistry
from sensor_channels.persistence.manager import RegistryPersistence
from sensor_channels.report import log_registry


class ChannelController:
    """
    ChannelController holds the registry instance that every operation goes
    through, and polls active channels.

    Args:
        logger: Logger instance.
        registry: The registry owned by this controller.
        dispatcher: Dispatcher bound to the same registry.
        persistence: Loads and saves the registry.
        poll_period: Seconds between each read cycle.
    """

    def __init__(
        self,
        logger: logging.Logger,
        registry: ChannelRegistry,
        dispatcher: ReadDispatcher,
        persistence: RegistryPersistence,
        poll_period: int = 5,
    ) -> None:
        self._logger = logger
        self._registry = registry
        self._dispatcher = dispatcher
        self._persistence = persistence
        self._poll_period = poll_period

    @property
    def registry(self) -> ChannelRegistry:
        return self._registry

    @property
    def dispatcher(self) -> ReadDispatcher:
        return self._dispatcher

    def save(self) -> None:
        """
        Persist the registry after a batch of changes.
        """
        self._persistence.save(self._registry)

    def report(self) -> None:
        log_registry(self._registry, self._logger)

    def read_once(self) -> dict[int, float]:
        """
        Read every active channel once and log the results.

        Returns:
            Mapping of channel number to value, READ_ERROR for failed reads.
        """
        results = self._dispatcher.read_active()
        if not results:
            self._logger.debug("No active channels this cycle.")
            return {}

        values: dict[int, float] = {}
        for channel, result in results.items():
            values[channel] = result.as_float()
            if result.status is ReadStatus.HARDWARE_ERROR:
                self._logger.warning(f"Channel {channel}: read failed ({result.error})")
            else:
                self._logger.info(f"Channel {channel}: {result.value}")
        return values

    def start(self) -> None:
        """
        Start and run the blocking polling loop.

        On each iteration the controller reads all active channels, then
        sleeps for `poll_period` seconds minus the cycle runtime. This method
        blocks indefinitely; exceptions propagate to the caller.
        """
        self._logger.info("ChannelController started.")
        while True:
            start_time = time.time()
            self.read_once()
            elapsed = time.time() - start_time
            time.sleep(max(0, int(self._poll_period - elapsed)))

    def close(self) -> None:
        """Release hardware resources."""
        self._dispatcher.hardware.close()
