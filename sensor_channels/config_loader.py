"""
config_loader.py

Load configuration from a JSON config file with a few environment variable
overrides. The loader validates values and exposes a merged configuration
dictionary via as_dict().

Classes:
    ConfigLoader

Usage:
    loader = ConfigLoader(logger)
    config = loader.as_dict()
"""

from __future__ import annotations

import os
import json
from pathlib import Path
from typing import Any, Dict, Optional

from sensor_channels.channels.defaults import DEFAULT_FIXED_CHANNELS
from sensor_channels.channels.registry import DEFAULT_MAX_FIXED_CHANNEL
from sensor_channels.exceptions import (
    ConfigFileNotFoundError,
    InvalidConfigValueError,
    MissingConfigKeyError,
)

ETC_CONFIG_PATH = Path("/etc/sensor_channels/config.json")
DEFAULT_CONFIG_FILENAME = "config.json"
DEFAULT_POLL_PERIOD = 5


def _safe_log(logger, level: str, msg: str) -> None:
    """
    Log a message using the provided logger while safely handling missing or
    nonstandard logger implementations.
    """

    if logger is None:
        return
    fn = getattr(logger, level.lower(), None)
    if callable(fn):
        fn(msg)


def _load_json_config(path: Optional[Path], logger=None) -> Dict[str, Any]:
    """
    Load JSON configuration from the given file path.

    Raises:
        ConfigFileNotFoundError: If the file cannot be read.
        InvalidConfigValueError: If the file is not a JSON object.
    """
    if not path:
        raise ConfigFileNotFoundError("ConfigLoader: config path was not resolved")
    try:
        with open(path, "r") as file:  # builtins.open so tests can mock it
            data = json.load(file)
    except json.JSONDecodeError as e:
        _safe_log(logger, "error", f"ConfigLoader: invalid JSON in {path}: {e}")
        raise InvalidConfigValueError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        _safe_log(logger, "error", f"ConfigLoader: failed reading {path}: {e}")
        raise ConfigFileNotFoundError(f"Failed reading {path}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidConfigValueError(f"Config file {path} must contain a JSON object")
    return data


class ConfigLoader:
    """
    Load and validate configuration from a JSON config file.

    Config file resolution order:
        CONFIG_PATH environment variable, /etc/sensor_channels/config.json,
        ./config.json

    Environment overrides:
        SENSOR_CHANNELS_STORE  replaces store_path
        LOG_LEVEL              replaces log_level

    JSON keys:
      - device_name (str, required)
      - store_path (str, required unless SENSOR_CHANNELS_STORE is set)
      - max_fixed_channel (int ≥ 1, default 9)
      - poll_period (int ≥ 1, default 5)
      - log_level (str, default "INFO")
      - hardware (dict, default {"type": "simulated"})
      - default_channels (list, default: the built-in fixed channel table)
      - bus_channels (list, default []): I2C/SPI devices attached on first run
    """

    def __init__(self, logger):
        """
        Resolve and load the config file and parse core configuration fields.

        Args:
            logger (Logger): Logger instance for diagnostic output.
        """

        self.logger = logger

        self.config_path = self._resolve_config_path()
        self.config = _load_json_config(self.config_path, self.logger)

        self.device_name = self._get_device_name()
        self.store_path = self._get_store_path()
        self.max_fixed_channel = self._get_positive_int("max_fixed_channel", DEFAULT_MAX_FIXED_CHANNEL)
        self.poll_period = self._get_positive_int("poll_period", DEFAULT_POLL_PERIOD)
        self.log_level = self._get_log_level()
        self.hardware = self._get_hardware()
        self.default_channels = self._get_default_channels()
        self.bus_channels = self._get_bus_channels()

    def as_dict(self) -> Dict[str, Any]:
        """
        Return the merged configuration dictionary. Parsed values take
        precedence over raw JSON values; unknown JSON keys are passed through.
        """
        merged: Dict[str, Any] = {
            "device_name": self.device_name,
            "store_path": self.store_path,
            "max_fixed_channel": self.max_fixed_channel,
            "poll_period": self.poll_period,
            "log_level": self.log_level,
            "hardware": self.hardware,
            "default_channels": self.default_channels,
            "bus_channels": self.bus_channels,
        }

        for key, value in self.config.items():
            if key not in merged:
                merged[key] = value

        _safe_log(self.logger, "info", f"ConfigLoader: keys loaded: {list(merged.keys())}")
        _safe_log(self.logger, "info", f"ConfigLoader: hardware type: {self.hardware.get('type')}")

        return merged

    def _resolve_config_path(self) -> Path:
        env_path = os.getenv("CONFIG_PATH")
        if env_path:
            path = Path(env_path).expanduser().resolve()
            if path.is_file():
                self.logger.info(f"ConfigLoader: using config from CONFIG_PATH env var: {path}")
                return path
            raise ConfigFileNotFoundError(f"CONFIG_PATH set but file does not exist: {path}")

        if ETC_CONFIG_PATH.is_file():
            self.logger.info(f"ConfigLoader: using config from {ETC_CONFIG_PATH}")
            return ETC_CONFIG_PATH

        local_path = Path.cwd() / DEFAULT_CONFIG_FILENAME
        if local_path.is_file():
            self.logger.warning(
                f"ConfigLoader: using local dev config at {local_path} (NOT /etc)"
            )
            return local_path

        raise ConfigFileNotFoundError(
            "ConfigLoader: no config.json found via CONFIG_PATH, /etc, or project directory"
        )

    def _get_device_name(self) -> str:
        """
        Retrieve and validate the device_name from the JSON config.

        Raises:
            MissingConfigKeyError: If device_name is missing.
            InvalidConfigValueError: If device_name is invalid.
        """
        if "device_name" not in self.config:
            _safe_log(self.logger, "error", "Missing required config: device_name")
            raise MissingConfigKeyError("Missing required config: device_name")
        value = self.config["device_name"]
        if not isinstance(value, str) or not value.strip():
            _safe_log(self.logger, "error", f"Invalid device_name: {value!r}")
            raise InvalidConfigValueError("device_name must be a non-empty string")
        return value

    def _get_store_path(self) -> str:
        """
        Retrieve the registry store path. SENSOR_CHANNELS_STORE wins over the
        JSON value.

        Raises:
            MissingConfigKeyError: If neither source provides a path.
            InvalidConfigValueError: If the JSON value is not a non-empty string.
        """
        env_value = os.getenv("SENSOR_CHANNELS_STORE")
        if env_value:
            return env_value
        if "store_path" not in self.config:
            _safe_log(self.logger, "error", "Missing required config: store_path")
            raise MissingConfigKeyError("Missing required config: store_path")
        value = self.config["store_path"]
        if not isinstance(value, str) or not value.strip():
            _safe_log(self.logger, "error", f"Invalid store_path: {value!r}")
            raise InvalidConfigValueError("store_path must be a non-empty string")
        return value

    def _get_positive_int(self, key: str, default: int) -> int:
        """
        Parse an integer ≥ 1 from the JSON config.

        Raises:
            InvalidConfigValueError: If the value is not an integer ≥ 1.
        """
        raw_value = self.config.get(key, default)
        if isinstance(raw_value, bool):
            raise InvalidConfigValueError(f"{key} must be an integer ≥ 1: {raw_value!r}")
        try:
            value = int(raw_value)
        except (ValueError, TypeError) as e:
            _safe_log(self.logger, "error", f"Invalid {key}: {raw_value} ({e})")
            raise InvalidConfigValueError(f"{key} must be an integer ≥ 1: {raw_value!r}") from e
        if value < 1:
            _safe_log(self.logger, "error", f"Invalid {key}: {raw_value}")
            raise InvalidConfigValueError(f"{key} must be an integer ≥ 1: {raw_value!r}")
        return value

    def _get_log_level(self) -> str:
        """
        Retrieve the log_level from LOG_LEVEL, the JSON config, or "INFO".
        """
        value = os.getenv("LOG_LEVEL") or self.config.get("log_level", "INFO")
        if not isinstance(value, str) or not value.strip():
            raise InvalidConfigValueError(f"log_level must be a string: {value!r}")
        return value.strip().upper()

    def _get_hardware(self) -> Dict[str, Any]:
        value = self.config.get("hardware") or {"type": "simulated"}
        if not isinstance(value, dict):
            _safe_log(self.logger, "error", f"Invalid hardware section: {value!r}")
            raise InvalidConfigValueError("hardware must be a JSON object")
        return value

    def _get_default_channels(self) -> list[Dict[str, Any]]:
        """
        Retrieve the first-run fixed channel table.

        Raises:
            InvalidConfigValueError: If an entry lacks channel, pin or mode.
        """
        value = self.config.get("default_channels")
        if value is None:
            return [dict(item) for item in DEFAULT_FIXED_CHANNELS]
        if not isinstance(value, list):
            raise InvalidConfigValueError("default_channels must be a list")
        for index, item in enumerate(value):
            if not isinstance(item, dict):
                raise InvalidConfigValueError(f"default_channels[{index}] must be an object")
            missing = sorted({"channel", "pin", "mode"} - set(item))
            if missing:
                raise InvalidConfigValueError(f"default_channels[{index}] missing fields: {missing}")
        return value

    def _get_bus_channels(self) -> list[Dict[str, Any]]:
        """
        Retrieve the bus devices attached when the registry is first created.

        Raises:
            InvalidConfigValueError: If an entry lacks channel or kind, or the
                address (I2C) or cs_pin (SPI) its kind needs.
        """
        value = self.config.get("bus_channels", [])
        if not isinstance(value, list):
            raise InvalidConfigValueError("bus_channels must be a list")
        for index, item in enumerate(value):
            if not isinstance(item, dict):
                raise InvalidConfigValueError(f"bus_channels[{index}] must be an object")
            missing = sorted({"channel", "kind"} - set(item))
            if missing:
                raise InvalidConfigValueError(f"bus_channels[{index}] missing fields: {missing}")
            kind = str(item["kind"]).strip().upper()
            target = {"I2C": "address", "SPI": "cs_pin"}.get(kind)
            if target is None:
                raise InvalidConfigValueError(f"bus_channels[{index}] kind must be I2C or SPI: {item['kind']!r}")
            if target not in item:
                raise InvalidConfigValueError(f"bus_channels[{index}] missing fields: ['{target}']")
        return value
