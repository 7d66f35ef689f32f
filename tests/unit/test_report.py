import logging

from sensor_channels.channels.model import Mode
from sensor_channels.report import format_registry, log_registry


def test_empty_registry_report(registry):
    assert format_registry(registry) == [
        "=== Fixed channels (0) ===",
        "=== I2C channels (0) ===",
        "=== SPI channels (0) ===",
        "Active channels: 0 []",
    ]


def test_report_sections_and_state(populated_registry):
    populated_registry.disable_channel(11)
    lines = format_registry(populated_registry)

    assert lines[0] == "=== Fixed channels (3) ==="
    assert lines[1] == "  ch   1 | pin  17 | DIGITAL | ON"
    assert lines[3] == "  ch   3 | pin   4 | ONEWIRE | ON"
    assert lines[4] == "=== I2C channels (2) ==="
    assert lines[5] == "  ch  10 | id   1 | addr 0x3c | ON"
    assert lines[6] == "  ch  11 | id   2 | addr 0x68 | OFF"
    assert lines[7] == "=== SPI channels (1) ==="
    assert lines[8] == "  ch  20 | id   3 | cs  14 | ON"
    assert lines[9] == "Active channels: 5 [1, 2, 3, 10, 20]"


def test_fixed_spi_channel_listed_with_fixed_channels(registry):
    registry.add_fixed(6, 8, Mode.SPI)
    lines = format_registry(registry)
    assert "SPI" in lines[1]
    assert lines[3] == "=== SPI channels (0) ==="


def test_log_registry_emits_one_record_per_line(populated_registry, caplog):
    logger = logging.getLogger("test.report")
    with caplog.at_level(logging.INFO, logger="test.report"):
        log_registry(populated_registry, logger)
    assert len(caplog.records) == len(format_registry(populated_registry))
