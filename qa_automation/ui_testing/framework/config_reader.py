"""
================================================================================
Configuration Reader
================================================================================

Key/value configuration for UI sessions.

Features:
    - Java-style `.properties` files (the default format)
    - YAML files flattened to dot-notation keys
    - Environment variable override (APP_URL overrides app.url)
    - Typed accessors for the settings a browser session needs
    - Validation at construction time (fail fast, before any browser starts)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import yaml
from loguru import logger


# Default configuration file path (repo_root/config/config.properties)
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "config.properties"

# Environment variable that points at an alternative configuration file
CONFIG_PATH_ENV = "QA_CONFIG_PATH"

APP_URL = "app.url"
CHROME_DRIVER_PATH = "chrome.driver.path"
FIREFOX_DRIVER_PATH = "firefox.driver.path"
IMPLICIT_WAIT = "implicit.wait"

REQUIRED_KEYS = (APP_URL, CHROME_DRIVER_PATH, IMPLICIT_WAIT)


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse Java-style properties text into a dictionary.

    Supports `key=value`, `key: value` and `key value` separators,
    `#` / `!` comment lines and trailing-backslash line continuation.
    """
    properties: Dict[str, str] = {}
    pending = ""

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not pending and (not line or line[0] in "#!"):
            continue

        if line.endswith("\\") and not line.endswith("\\\\"):
            pending += line[:-1]
            continue

        line = pending + line
        pending = ""

        key, value = _split_property(line)
        properties[key] = value.replace("\\\\", "\\")

    if pending:
        key, value = _split_property(pending)
        properties[key] = value

    return properties


def _split_property(line: str) -> tuple[str, str]:
    for index, char in enumerate(line):
        if char in "=:":
            return line[:index].strip(), line[index + 1:].strip()
        if char.isspace():
            rest = line[index:].lstrip()
            if rest[:1] in ("=", ":"):
                rest = rest[1:]
            return line[:index], rest.strip()
    return line, ""


def flatten_mapping(data: Mapping[str, Any], prefix: str = "") -> Dict[str, str]:
    """Flatten nested YAML mappings to dot-notation keys with string values."""
    flat: Dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_mapping(value, full_key))
        elif value is None:
            flat[full_key] = ""
        else:
            flat[full_key] = str(value)
    return flat


class ConfigReader:
    """
    Read-only configuration for browser sessions.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (APP_URL, IMPLICIT_WAIT, ...)
        2. Configuration file
        3. Default values passed to `get()`

    Every instance re-reads its file; nothing is cached between instances.

    Usage:
        >>> config = ConfigReader()
        >>> config.application_url
        'http://localhost:5000'
        >>> config.implicit_wait
        10

    Raises:
        ConfigurationError: File missing or unparsable, required key absent,
            or a value with the wrong type.
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Load and validate configuration.

        Args:
            config_path: Path to a `.properties` or `.yaml` file. Falls back to
                the QA_CONFIG_PATH env var, then DEFAULT_CONFIG_PATH.
        """
        if config_path is None:
            env_path = os.environ.get(CONFIG_PATH_ENV)
            config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

        self._config_path = Path(config_path)
        self._properties: Mapping[str, str] = MappingProxyType(self._load())
        self._validate()

    def _load(self) -> Dict[str, str]:
        """Read the configuration file into a flat key/value dictionary."""
        if not self._config_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {self._config_path}"
            )

        try:
            text = self._config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Unable to read configuration file {self._config_path}: {e}"
            ) from e

        if self._config_path.suffix.lower() in (".yaml", ".yml"):
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Invalid YAML in configuration file: {e}"
                ) from e
            if not isinstance(data, Mapping):
                raise ConfigurationError(
                    f"Configuration file must contain a mapping: {self._config_path}"
                )
            properties = flatten_mapping(data)
        else:
            properties = parse_properties(text)

        logger.debug(f"Loaded configuration from: {self._config_path}")
        return properties

    def _validate(self) -> None:
        missing = [key for key in REQUIRED_KEYS if self.get(key) is None]
        if missing:
            raise ConfigurationError(
                f"Missing required configuration keys in {self._config_path}: "
                f"{', '.join(missing)}"
            )

        if not self.application_url:
            raise ConfigurationError(f"'{APP_URL}' must not be empty")

        # Accessor raises on malformed values
        self.implicit_wait

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a raw configuration value.

        Environment variables win over the file: `app.url` is looked up as
        APP_URL first.

        Args:
            key: Dot-notation key (e.g., "app.url")
            default: Returned when the key is not configured anywhere
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value

        return self._properties.get(key, default)

    @property
    def config_path(self) -> Path:
        return self._config_path

    @property
    def application_url(self) -> str:
        """Start URL of the application under test."""
        return str(self.get(APP_URL, "")).strip()

    @property
    def chrome_driver_path(self) -> str:
        """Chromium executable path; empty means the Playwright-bundled browser."""
        return str(self.get(CHROME_DRIVER_PATH, "")).strip()

    @property
    def firefox_driver_path(self) -> str:
        """Firefox executable path; optional."""
        return str(self.get(FIREFOX_DRIVER_PATH, "")).strip()

    @property
    def implicit_wait(self) -> int:
        """Default timeout for driver operations, in seconds."""
        raw = str(self.get(IMPLICIT_WAIT, "")).strip()
        try:
            value = int(raw)
        except ValueError:
            raise ConfigurationError(
                f"'{IMPLICIT_WAIT}' must be an integer number of seconds, got: {raw!r}"
            ) from None
        # Playwright treats a 0 ms timeout as "wait forever"
        if value < 1:
            raise ConfigurationError(
                f"'{IMPLICIT_WAIT}' must be at least 1 second, got: {value}"
            )
        return value

    def driver_path(self, browser_type: str) -> str:
        """Executable path configured for the given browser type."""
        if browser_type == "firefox":
            return self.firefox_driver_path
        return self.chrome_driver_path

    def __repr__(self) -> str:
        return f"ConfigReader(config_path={str(self._config_path)!r})"


__all__ = [
    "ConfigReader",
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
    "parse_properties",
]
