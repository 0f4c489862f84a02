"""
Configuration loader for commit_info.

The tool reads an optional JSON configuration file named ``config.json``
located in the ``~/.commitinfo/`` directory in the user's home directory.
When the file does not exist the built-in defaults are used. If the file
exists but is malformed or has values of the wrong type, a
:class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings in environments
# where the root logger is not configured. The CLI configures logging
# explicitly when it runs.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


DEFAULT_CONFIG: Dict[str, Any] = {
    "message_length_limit": 50,
    "git_executable": "git",
    "time_format": "%Y-%m-%d %H:%M:%S",
}


class ConfigError(Exception):
    """Raised when the configuration file is unreadable or invalid."""

    pass


def _get_config_directory() -> Path:
    """Return the user-specific configuration directory ``~/.commitinfo/``."""
    return Path.home() / ".commitinfo"


def _validate(data: Dict[str, Any]) -> None:
    limit = data["message_length_limit"]
    # bool is a subclass of int but never a sensible limit
    if not isinstance(limit, int) or isinstance(limit, bool):
        raise ConfigError("'message_length_limit' must be an integer")
    if limit < 0:
        raise ConfigError("'message_length_limit' must not be negative")

    git_executable = data["git_executable"]
    if not isinstance(git_executable, str) or not git_executable.strip():
        raise ConfigError("'git_executable' must be a non-empty string")

    if not isinstance(data["time_format"], str):
        raise ConfigError("'time_format' must be a string")


def load_config() -> Dict[str, Any]:
    """Load the user configuration merged over the defaults.

    Returns:
        A dictionary with the keys:
        - message_length_limit (int): characters kept from a message's first line
        - git_executable (str): name or path of the ``git`` program
        - time_format (str): ``strftime`` pattern for commit times

    Raises:
        ConfigError: If the configuration file exists but is malformed or invalid.
    """
    config_path = _get_config_directory() / "config.json"
    config = dict(DEFAULT_CONFIG)

    if not config_path.exists():
        logger.debug("No configuration file at '%s', using defaults", config_path)
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {config_path} must be a JSON object")

    unknown = sorted(key for key in data if key not in DEFAULT_CONFIG)
    if unknown:
        logger.debug("Ignoring unknown configuration keys: %s", unknown)

    config.update({key: value for key, value in data.items() if key in DEFAULT_CONFIG})
    _validate(config)

    logger.debug("Loaded configuration from: %s", config_path)
    return config
