"""Shared utilities.

Modules:
    config: YAML configuration builder and access functions
    logger: Rich component logger
    log_filter: Temporary log suppression
"""

from . import config, log_filter, logger

__all__ = ["config", "logger", "log_filter"]
