"""Temporary log suppression.

Configuration loading and profile bootstrapping log at INFO level, which is
noise while a command prints its own progress. These context managers raise
the level of named loggers for the duration of a block.

Examples:
    Silence the configuration logger while loading::

        >>> with quiet_logger("CONFIG"):
        ...     config = get_config_builder()
"""

import logging
from contextlib import contextmanager


@contextmanager
def suppress_logger_level(logger_name: str | list[str], level: int):
    """Temporarily raise the level of one or more loggers.

    Args:
        logger_name: Name of logger(s) to modify
        level: Temporary level; messages below it are dropped

    Yields:
        Dictionary mapping logger names to their original levels
    """
    logger_names = [logger_name] if isinstance(logger_name, str) else logger_name

    loggers = [logging.getLogger(name) for name in logger_names]
    original_levels = {name: logger.level for name, logger in zip(logger_names, loggers)}

    for logger in loggers:
        logger.setLevel(level)

    try:
        yield original_levels
    finally:
        for name, logger in zip(logger_names, loggers):
            logger.setLevel(original_levels[name])


@contextmanager
def quiet_logger(logger_name: str | list[str]):
    """Suppress INFO and DEBUG messages from logger(s), keep WARNING and above."""
    with suppress_logger_level(logger_name, logging.WARNING) as levels:
        yield levels


__all__ = [
    "suppress_logger_level",
    "quiet_logger",
]
