#!/usr/bin/env python3
"""
Centralized configuration for the Parson CLI.

Settings come from, in priority order:
1. PARSON_<SECTION>_<KEY> environment variables
2. The TOML configuration file (--config, PARSON_CONFIG_FILE or ./config.toml)
3. Built-in defaults

Example config.toml:

    [folders]
    input_folder = "data"

    [output]
    format = "pretty_json"
    indent = 2
"""

import os
import logging
import tomllib
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TypeVar, Union

from parson.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "config.toml"
ENV_PREFIX = "PARSON_"

DEFAULTS: Dict[str, Any] = {
    "folders.input_folder": ".",
    "folders.output_folder": None,
    "output.format": "pretty_json",
    "output.indent": 2,
    "output.source": "parson",
    "output.gzip": False,
    "query.syntax": "dotted",
}


T = TypeVar("T")


def non_negative_int(value: Any) -> int:
    """Accept an integer setting (not a bool) that is zero or more."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"expected a non-negative integer, got {value}")
    return value


def boolean(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"expected true or false, got {value!r}")
    return value


def _coerce(raw: str, default: Any) -> Any:
    """Convert an environment string to the type of the default value."""
    if isinstance(default, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"Ignoring non-integer value {raw!r}, using {default}")
            return default
    return raw


class Config:
    """
    Configuration for the Parson CLI.

    A missing configuration file is not an error: every setting has a
    default. A file that exists but cannot be parsed is reported and
    ignored, unless the configuration was loaded in strict mode.
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None, strict: bool = False):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration file (defaults to the value of
                         PARSON_CONFIG_FILE, then config.toml in the working
                         directory)
            strict: Raise ConfigError instead of falling back to defaults when
                    the file is missing or cannot be parsed
        """
        self.load(config_file, strict)

    def load(self, config_file: Optional[Union[str, Path]] = None, strict: bool = False) -> None:
        """(Re)load settings, resolving the file the same way as __init__."""
        env_config_file = os.getenv("PARSON_CONFIG_FILE")

        if config_file:
            self.config_file = Path(config_file)
        elif env_config_file:
            logger.debug(f"Using config file from PARSON_CONFIG_FILE: {env_config_file}")
            self.config_file = Path(env_config_file)
        elif (Path.cwd() / DEFAULT_CONFIG_NAME).exists():
            self.config_file = Path.cwd() / DEFAULT_CONFIG_NAME
        else:
            self.config_file = None

        self.config = self._load_config(strict)

    def _load_config(self, strict: bool = False) -> Dict[str, Any]:
        if not self.config_file:
            logger.debug("No configuration file found, using defaults")
            return {}

        if not self.config_file.exists():
            if strict:
                raise ConfigError(self.config_file, "file does not exist")
            logger.warning(f"Configuration file {self.config_file} not found, using defaults")
            return {}

        try:
            with open(self.config_file, "rb") as f:
                config = tomllib.load(f)
            logger.debug(f"Loaded configuration from {self.config_file}")
            return config
        except tomllib.TOMLDecodeError as e:
            if strict:
                raise ConfigError(self.config_file, str(e)) from e
            logger.error(f"Error parsing configuration file {self.config_file}: {e}")
            logger.warning("Using default configuration instead")
            return {}
        except OSError as e:
            if strict:
                raise ConfigError(self.config_file, str(e)) from e
            logger.error(f"Error accessing configuration file {self.config_file}: {e}")
            logger.warning("Using default configuration instead")
            return {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dotted "section.key" name.

        Args:
            key: Setting name, e.g. "folders.input_folder"
            default: Value used when the setting is not configured; falls
                     back to the built-in default for known settings

        Returns:
            Configuration value or default
        """
        if default is None:
            default = DEFAULTS.get(key)

        env_key = ENV_PREFIX + key.upper().replace(".", "_")
        if env_key in os.environ:
            return _coerce(os.environ[env_key], default)

        section, _, name = key.rpartition(".")
        table = self.config.get(section, {}) if section else self.config
        if isinstance(table, dict) and name in table:
            return table[name]

        return default

    def get_as(self, key: str, convert: Callable[[Any], T]) -> T:
        """
        Get a setting converted with convert.

        Raises:
            ConfigError: If the configured value has the wrong type or an
                         unknown value
        """
        value = self.get(key)
        try:
            return convert(value)
        except (TypeError, ValueError, AttributeError) as e:
            origin = self.config_file or "environment"
            raise ConfigError(origin, f"{key}: {e}") from e

    @property
    def input_folder(self) -> Path:
        folder = self.get_as("folders.input_folder", Path)
        # Relative folders are taken relative to the config file
        if not folder.is_absolute() and self.config_file is not None:
            return self.config_file.parent / folder
        return folder

    def as_dict(self) -> Dict[str, Any]:
        return {key: self.get(key) for key in DEFAULTS}


config = Config()


def reload(config_file: Optional[Union[str, Path]] = None, strict: bool = False) -> Config:
    """Reload the shared configuration in place, e.g. after --config is parsed."""
    config.load(config_file, strict)
    return config
