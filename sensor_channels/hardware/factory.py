"""
factory.py

Provides a factory function for constructing the hardware capability set from
configuration.
"""

import logging
from typing import Any, Mapping

from sensor_channels.exceptions import InvalidHardwareConfigError, UnknownHardwareTypeError
from sensor_channels.hardware.base import BaseHardware
from sensor_channels.hardware.simulated import SimulatedHardware


def _raspberry_pi(config: Mapping[str, Any]) -> BaseHardware:
    # Imported lazily so simulated setups do not need the Pi bus libraries.
    from sensor_channels.hardware.raspberry_pi import RaspberryPiHardware
    return RaspberryPiHardware(config)


_HARDWARE_TYPES = {
    "raspberry_pi": _raspberry_pi,
    "simulated": SimulatedHardware,
}


def build_hardware(
    hardware_config: Mapping[str, Any] | None,
    logger: logging.Logger,
) -> BaseHardware:
    """
    Build the hardware capability set named by hardware_config["type"].

    Args:
        hardware_config: Hardware configuration mapping; None or an empty
            mapping selects the simulated hardware.
        logger: Logger instance.

    Returns:
        BaseHardware: The constructed capability set.

    Raises:
        UnknownHardwareTypeError: If the type is not known.
        InvalidHardwareConfigError: If construction fails.
    """
    hardware_config = hardware_config or {"type": "simulated"}

    hardware_type = hardware_config.get("type", "simulated")
    if not isinstance(hardware_type, str) or not hardware_type.strip():
        raise InvalidHardwareConfigError("Missing or invalid 'type' in hardware configuration")
    hardware_type = hardware_type.strip().lower()

    builder = _HARDWARE_TYPES.get(hardware_type)
    if builder is None:
        raise UnknownHardwareTypeError(hardware_type, list(_HARDWARE_TYPES.keys()))

    try:
        hardware = builder(hardware_config)
    except Exception as e:
        raise InvalidHardwareConfigError(
            f"Failed to initialise hardware: {e}",
            hardware_type=hardware_type,
            cause=e,
        ) from e

    logger.info("Initialised hardware type '%s'", hardware_type)
    return hardware
