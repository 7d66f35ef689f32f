# BCM GPIO numbers exposed on the 40-pin header.
VALID_GPIO_PINS = frozenset(range(0, 28))

DEFAULT_W1_BASE_DIR = "/sys/bus/w1/devices"
DEFAULT_I2C_BUS = 1
DEFAULT_SPI_BUS = 0
# CE1 is left to the SPI reader, which drives chip select itself.
DEFAULT_SPI_DEVICE = 1
DEFAULT_ADC_DEVICE = 0
DEFAULT_SPI_SPEED_HZ = 1_000_000

MCP3008_CHANNELS = 8
