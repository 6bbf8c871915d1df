"""Configuration management for fbtoken.

Handles loading optional YAML defaults from ~/.config/firebase-token-helper/.
"""

import copy
import os
import yaml
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    env_path = os.getenv("FBTOKEN_CONFIG_DIR")
    if env_path:
        return Path(env_path)
    return Path.home() / ".config" / "firebase-token-helper"


def get_config_file_path() -> Path:
    """
    Get the path to the config file, respecting the FBTOKEN_CONFIG_FILE env var.
    """
    env_path = os.getenv("FBTOKEN_CONFIG_FILE")
    if env_path:
        return Path(env_path)
    return get_config_dir() / "config.yaml"


DEFAULT_CONFIG = {
    "defaults": {
        "api_key": None,
        "project_id": None,
        "service_account": None,
    },
    "credentials_dir": ".firebase",
    "cache": {
        "enabled": True,
        "file": ".token-helper-cache",
    },
}


def load_config() -> dict:
    """Load the fbtoken configuration from the config file."""
    config_file = get_config_file_path()
    if not config_file.exists():
        logger.debug(f"Config file not found at {config_file}, using default config.")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Error loading config file {config_file}: {e}")
        return copy.deepcopy(DEFAULT_CONFIG)
    except OSError as e:
        logger.error(f"Could not read config file {config_file}: {e}")
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(config, dict):
        return copy.deepcopy(DEFAULT_CONFIG)
    return _deep_merge(copy.deepcopy(DEFAULT_CONFIG), config)


def get_config_value(key: str, default: Any = None, config_data: dict = None) -> Any:
    """Retrieve a configuration value using a dot-separated key."""
    if config_data is None:
        config_data = load_config()
    value = config_data
    for k in key.split('.'):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value


def get_cache_file_path(config_data: dict = None) -> Path:
    """Resolve the setup cache location, relative paths against the working directory."""
    env_path = os.getenv("FBTOKEN_CACHE_FILE")
    if env_path:
        return Path(env_path).resolve()
    return Path(get_config_value("cache.file", ".token-helper-cache", config_data)).resolve()


def get_credentials_dir(config_data: dict = None) -> Path:
    """Resolve the service account auto-detect directory."""
    return Path(get_config_value("credentials_dir", ".firebase", config_data)).resolve()


def _deep_merge(base: dict, new: dict) -> dict:
    """Recursively merge dictionary `new` into `base`."""
    for k, v in new.items():
        if k in base and isinstance(base[k], dict) and isinstance(v, dict):
            base[k] = _deep_merge(base[k], v)
        else:
            base[k] = v
    return base
