"""
Configuration System

YAML configuration loading shared by the application configuration
(``~/.elastic-package/config.yml``) and any other YAML-backed settings:
- Single-file YAML loading with validation and error handling
- Environment variable resolution (${VAR}, ${VAR:-default}, $VAR)
- Dot-notation access to nested values
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# Use standard logging (not get_logger) to avoid circular imports with logger.py
# The short name 'CONFIG' enables easy filtering: quiet_logger('CONFIG')
logger = logging.getLogger("CONFIG")

CONFIG_FILE_ENV = "ELASTIC_PACKAGE_CONFIG"
DATA_HOME_ENV = "ELASTIC_PACKAGE_DATA_HOME"
CONFIG_FILE_NAME = "config.yml"

# Errors raised while reading a configuration file
CONFIG_LOAD_ERRORS = (OSError, ValueError, yaml.YAMLError)

_ENV_VAR_PATTERN = r"\$\{([^}:]+)(?::-(.*?))?\}|\$([A-Za-z_][A-Za-z0-9_]*)"


class ConfigBuilder:
    """A single YAML configuration file with environment variables expanded.

    Values are read with dot-separated paths through ``get``; ``raw_config``
    holds the whole expanded mapping.
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize configuration builder.

        Args:
            config_path: Path to the YAML configuration file.

        Raises:
            FileNotFoundError: If the configuration file does not exist.
        """
        # Variables from ./.env are visible to ${VAR} resolution
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path, override=False)
            logger.debug(f"Loaded .env file from {dotenv_path}")

        self.config_path = Path(config_path)
        if not self.config_path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        self.raw_config = self._load_config()

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """Load and validate a YAML configuration file."""
        try:
            with open(file_path) as f:
                config = yaml.safe_load(f)

            if config is None:
                logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            if not isinstance(config, dict):
                error_msg = f"Configuration file must contain a dictionary/mapping: {file_path}"
                logger.error(error_msg)
                raise ValueError(error_msg)

            logger.debug(f"Loaded configuration from {file_path}")
            return config
        except yaml.YAMLError as e:
            error_msg = f"Error parsing YAML configuration: {e}"
            logger.error(error_msg)
            raise yaml.YAMLError(error_msg) from e

    def _resolve_env_vars(self, data: Any) -> Any:
        """Recursively resolve environment variables in configuration data.

        Supports both simple and bash-style default value syntax:
        - ${VAR_NAME} - simple substitution
        - ${VAR_NAME:-default_value} - with default value
        - $VAR_NAME - simple substitution without braces
        """
        if isinstance(data, dict):
            return {key: self._resolve_env_vars(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._resolve_env_vars(item) for item in data]
        elif isinstance(data, str):

            def replace_env_var(match):
                if match.group(1):
                    var_name = match.group(1)
                    default_value = match.group(2)
                else:
                    var_name = match.group(3)
                    default_value = None

                env_value = os.environ.get(var_name)
                if env_value is None:
                    if default_value is not None:
                        return default_value
                    logger.info(
                        f"Environment variable '{var_name}' not found, keeping original value"
                    )
                    return match.group(0)
                return env_value

            return re.sub(_ENV_VAR_PATTERN, replace_env_var, data)
        else:
            return data

    def _load_config(self) -> dict[str, Any]:
        config = self._resolve_env_vars(self._load_yaml_file(self.config_path))
        logger.info(f"Loaded configuration from {self.config_path}")
        return config

    def get(self, path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation path."""
        keys = path.split(".")
        value = self.raw_config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default


# =============================================================================
# GLOBAL CONFIGURATION
# =============================================================================

_default_config: ConfigBuilder | None = None

# Per-path config cache for explicit config paths
_config_cache: dict[str, ConfigBuilder] = {}


def default_config_path() -> Path:
    """Resolve the application configuration file.

    Resolution priority:
    1. ELASTIC_PACKAGE_CONFIG environment variable
    2. <data home>/config.yml, where data home is ELASTIC_PACKAGE_DATA_HOME
       or ~/.elastic-package
    """
    config_file = os.environ.get(CONFIG_FILE_ENV)
    if config_file:
        return Path(config_file).expanduser()

    data_home = os.environ.get(DATA_HOME_ENV)
    base = Path(data_home).expanduser() if data_home else Path.home() / ".elastic-package"
    return base / CONFIG_FILE_NAME


def _get_config(config_path: str | Path | None = None) -> ConfigBuilder:
    """Get configuration instance (singleton by default, cached per explicit path)."""
    global _default_config

    if config_path is None:
        if _default_config is None:
            _default_config = ConfigBuilder(default_config_path())
            logger.debug("Initialized default configuration system")
        return _default_config

    resolved_path = str(Path(config_path).resolve())
    if resolved_path not in _config_cache:
        logger.debug(f"Loading configuration from explicit path: {resolved_path}")
        _config_cache[resolved_path] = ConfigBuilder(resolved_path)
    return _config_cache[resolved_path]


def get_config_builder(config_path: str | Path | None = None) -> ConfigBuilder:
    """Get configuration builder instance for full config access.

    Args:
        config_path: Optional explicit path to a configuration file. If None,
            the application configuration is used.

    Returns:
        ConfigBuilder with ``.raw_config`` and ``.get(path, default)``
    """
    return _get_config(config_path)


def get_config_value(path: str, default: Any = None, config_path: str | None = None) -> Any:
    """
    Get a specific configuration value by dot-separated path.

    Args:
        path: Dot-separated configuration path (e.g., "logging.rich_tracebacks")
        default: Default value to return if path is not found
        config_path: Optional explicit path to configuration file

    Raises:
        ValueError: If path is empty or None

    Examples:
        >>> show_locals = get_config_value("logging.show_traceback_locals", False)
    """
    if not path:
        raise ValueError("Configuration path cannot be empty or None")

    return _get_config(config_path).get(path, default)


def reset_config_cache() -> None:
    """Forget loaded configurations (the next access reloads from disk)."""
    global _default_config
    _default_config = None
    _config_cache.clear()
