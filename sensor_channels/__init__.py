PACKAGE_LOGGER_NAME = "sensor_channels"
