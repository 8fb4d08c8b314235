"""Configuration loader for secret-lister."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError
from .providers import PROVIDERS

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SECRET_LISTER_CONFIG"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_config_path() -> Path:
    """XDG Base Directory location: ~/.config/secret-lister/config.yml"""
    return Path.home() / ".config" / "secret-lister" / "config.yml"


def _get_config_path(explicit_path: Optional[str], env: Mapping[str, str]) -> Optional[Path]:
    """
    Get config file path.

    Priority order:
    1. Explicit path (--config)
    2. SECRET_LISTER_CONFIG environment variable
    3. Default location, only if the file exists

    Returns:
        Path to config file, or None if no config is in use

    Raises:
        ConfigError: If an explicitly requested config file doesn't exist
    """
    requested = explicit_path or env.get(CONFIG_ENV_VAR)
    if requested:
        config_path = Path(requested).expanduser()
        if not config_path.is_file():
            raise ConfigError(f"Configuration file not found at: {config_path}")
        logger.info(f"Using config from {config_path}")
        return config_path

    default_config = default_config_path()
    if default_config.is_file():
        logger.info(f"Using default config location: {default_config}")
        return default_config

    logger.debug(f"No config file at {default_config}, using built-in defaults")
    return None


def load_config(explicit_path: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Load and validate the optional YAML configuration.

    Returns:
        Dict with any of the keys:
        - provider: name of a supported provider
        - endpoint: fallback endpoint when neither argument nor env var is set
        - sort: bool
        - logging: dict with level

        An empty dict when no config file is in use.

    Raises:
        ConfigError: If the config file is missing (when requested), unreadable or invalid
    """
    if env is None:
        env = os.environ

    config_path = _get_config_path(explicit_path, env)
    if config_path is None:
        return {}

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config at {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {config_path}: {e}")

    # An empty file means defaults
    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ConfigError(f"Config file at {config_path} must contain a mapping")

    _validate(config, config_path)
    logger.debug(f"Configuration loaded successfully from {config_path}")
    return config


def _validate(config: Dict[str, Any], config_path: Path) -> None:
    provider = config.get("provider")
    if provider is not None and provider not in PROVIDERS:
        raise ConfigError(
            f"Unsupported provider '{provider}' in config at {config_path}\n"
            f"Supported providers: {', '.join(sorted(PROVIDERS))}"
        )

    endpoint = config.get("endpoint")
    if endpoint is not None and (not isinstance(endpoint, str) or not endpoint.strip()):
        raise ConfigError(f"'endpoint' in config at {config_path} must be a non-empty string")

    sort = config.get("sort")
    if sort is not None and not isinstance(sort, bool):
        raise ConfigError(f"'sort' in config at {config_path} must be true or false")

    logging_section = config.get("logging")
    if logging_section is None:
        return
    if not isinstance(logging_section, dict):
        raise ConfigError(
            f"'logging' section in config at {config_path} must be a mapping\n"
            f"Required format:\n"
            f"logging:\n"
            f"  level: WARNING"
        )
    if "level" in logging_section and logging_section["level"] is None:
        raise ConfigError(f"'logging.level' in config at {config_path} must not be empty")
    level = logging_section.get("level")
    if level is not None and str(level).upper() not in LOG_LEVELS:
        raise ConfigError(
            f"Invalid logging level '{level}' in config at {config_path}\n"
            f"Allowed levels: {', '.join(LOG_LEVELS)}"
        )
