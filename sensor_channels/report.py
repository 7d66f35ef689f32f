"""
report.py

Builds a human-readable dump of every registered channel, for startup logs
and operational tooling.
"""

import logging

from sensor_channels.channels.registry import ChannelRegistry


def format_registry(registry: ChannelRegistry) -> list[str]:
    """
    Return the registry as report lines: fixed channels, then I2C and SPI
    channels, then the active channel summary.
    """
    with registry.lock:
        fixed = registry.fixed_channels()
        i2c = registry.i2c_channels()
        spi = registry.spi_channels()
        active = registry.active_channel_list()

    lines = [f"=== Fixed channels ({len(fixed)}) ==="]
    for e in fixed:
        lines.append(f"  ch {e.channel:>3} | pin {e.pin:>3} | {e.mode.value:<7} | {'ON' if e.active else 'OFF'}")

    lines.append(f"=== I2C channels ({len(i2c)}) ===")
    for e in i2c:
        lines.append(f"  ch {e.channel:>3} | id {e.id:>3} | addr {e.address:#04x} | {'ON' if e.active else 'OFF'}")

    lines.append(f"=== SPI channels ({len(spi)}) ===")
    for e in spi:
        lines.append(f"  ch {e.channel:>3} | id {e.id:>3} | cs {e.cs_pin:>3} | {'ON' if e.active else 'OFF'}")

    lines.append(f"Active channels: {len(active)} {active}")
    return lines


def log_registry(registry: ChannelRegistry, logger: logging.Logger) -> None:
    for line in format_registry(registry):
        logger.info(line)
