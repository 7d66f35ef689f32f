"""
main.py

Bootstrap entry point. Loads configuration, sets up logging, builds the
hardware capability set and registry persistence, loads the saved registry
(creating default channels on first run) and starts the polling loop.
"""

import logging

from sensor_channels.__version__ import __version__
from sensor_channels.channels.dispatcher import ReadDispatcher
from sensor_channels.config_loader import ConfigLoader
from sensor_channels.controller import ChannelController
from sensor_channels.hardware.factory import build_hardware
from sensor_channels.logging_setup import setup_logging
from sensor_channels.persistence.file_store import FileBlobStore
from sensor_channels.persistence.manager import RegistryPersistence


def main():
    """
    Initialize and start the sensor channel service.
    """
    bootstrap_logger = logging.getLogger("bootstrap")
    bootstrap_logger.setLevel(logging.INFO)
    bootstrap_logger.addHandler(logging.StreamHandler())

    bootstrap_logger.info(f"Sensor Channels v{__version__}")

    config = ConfigLoader(logger=bootstrap_logger).as_dict()

    logger = setup_logging(
        log_dir="log",
        log_file_name="sensor_channels.log",
        log_level=config["log_level"],
    )
    logger.info(f"Device: {config['device_name']}")

    hardware = build_hardware(config["hardware"], logger)

    persistence = RegistryPersistence(
        FileBlobStore(config["store_path"]),
        logger,
        max_fixed_channel=config["max_fixed_channel"],
    )
    registry = persistence.load_or_create(config["default_channels"], config["bus_channels"])

    controller = ChannelController(
        logger=logger,
        registry=registry,
        dispatcher=ReadDispatcher(registry, hardware),
        persistence=persistence,
        poll_period=config["poll_period"],
    )
    controller.report()

    try:
        controller.start()
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user.")
    finally:
        controller.close()


if __name__ == "__main__":
    main()
