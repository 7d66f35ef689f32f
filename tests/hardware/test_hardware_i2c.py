# test_hardware_i2c.py

import os
import platform
import pytest

pytestmark = pytest.mark.skipif(
    not any(platform.machine().startswith(arch) for arch in ("arm", "aarch64")),
    reason="Hardware tests only run on Raspberry Pi"
)

# Address of a device known to be attached to bus 1, e.g. 0x48 for an ADS1115.
I2C_TEST_ADDRESS = int(os.getenv("I2C_TEST_ADDRESS", "0x48"), 16)


@pytest.mark.hardware
def test_i2c_bus_channel_read_via_dispatcher():
    """
    Attach a bus channel for a real I2C device and read it through the
    dispatcher. A missing device surfaces as HARDWARE_ERROR, not an exception.
    """
    from sensor_channels.channels import ChannelRegistry, ReadDispatcher, ReadStatus
    from sensor_channels.hardware.raspberry_pi import RaspberryPiHardware

    if not os.path.exists("/dev/i2c-1"):
        pytest.skip("I2C bus 1 not enabled (no /dev/i2c-1)")

    registry = ChannelRegistry()
    registry.add_i2c(10, I2C_TEST_ADDRESS)
    hardware = RaspberryPiHardware()
    try:
        result = ReadDispatcher(registry, hardware).read(10)
    finally:
        hardware.close()

    if result.status is ReadStatus.HARDWARE_ERROR:
        pytest.skip(f"No device answered at {I2C_TEST_ADDRESS:#04x}: {result.error}")
    assert result.status is ReadStatus.OK
    assert 0.0 <= result.value <= 0xFFFF
