"""
logging_setup.py

Configure the root logger for the service: a rotating log file plus console
output. Calling setup_logging() more than once does not add duplicate
handlers.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_HANDLER_NAME = "sensor_channels.file"
CONSOLE_HANDLER_NAME = "sensor_channels.console"
HANDLER_NAMES = {FILE_HANDLER_NAME, CONSOLE_HANDLER_NAME}


def setup_logging(
    log_dir: str = "log",
    log_file_name: str = "sensor_channels.log",
    log_level: str = "INFO",
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure and return the root logger.

    Args:
        log_dir: Directory for the log file, created if missing.
        log_file_name: Name of the rotating log file.
        log_level: Level name such as "INFO" or "DEBUG".
        max_bytes: Size at which the log file is rotated.
        backup_count: Number of rotated files to keep.

    Returns:
        logging.Logger: The configured root logger.
    """
    os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    level = getattr(logging, str(log_level).upper(), None)
    logger.setLevel(level if isinstance(level, int) else logging.INFO)

    if any(h.get_name() in HANDLER_NAMES for h in logger.handlers):
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(
        os.path.join(log_dir, log_file_name),
        maxBytes=max_bytes,
        backupCount=backup_count,
    )
    file_handler.setFormatter(formatter)
    file_handler.set_name(FILE_HANDLER_NAME)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    stream_handler.set_name(CONSOLE_HANDLER_NAME)

    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)

    return logger
