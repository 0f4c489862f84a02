"""
Configuration loading for commit_info.

Provides a loader for the optional user configuration file. See
:mod:`commit_info.config.loader` for implementation details.
"""

from .loader import DEFAULT_CONFIG, ConfigError, load_config  # noqa: F401
