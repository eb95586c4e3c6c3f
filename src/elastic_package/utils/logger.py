"""
Component Logger

Colored logging for elastic-package components:
- One API for every component (docker, stack, profile, query)
- Rich terminal output with component-specific colors
- Graceful fallbacks when the application configuration is unavailable

Usage:
    logger = get_logger("stack")
    logger.key_info("Deploying the stack")
    logger.info("Custom build packages directory found")
    logger.debug("run command: docker stack deploy ...")
    logger.success("Done")
    logger.warning("Something to note")
    logger.error("Something went wrong")
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from elastic_package.utils.config import CONFIG_LOAD_ERRORS, get_config_value

# Fallback colors for the built-in components
DEFAULT_COLORS = {
    "docker": "cyan",
    "stack": "magenta",
    "swarm": "blue",
    "profile": "green",
    "install": "green",
    "query": "yellow",
    "files": "white",
}


class ComponentLogger:
    """
    Rich-formatted logger with color coding and message hierarchy.

    Message Types:
    - key_info: Important operational information
    - info: Normal operational messages
    - debug: Detailed tracing information (commands being run)
    - warning: Warning messages
    - error: Error messages
    - success: Success messages
    """

    def __init__(self, base_logger: logging.Logger, component_name: str, color: str = "white"):
        self.base_logger = base_logger
        self.component_name = component_name
        self.color = color

    def _format_message(self, message: str, style: str, emoji: str = "") -> str:
        """Format message with Rich markup and emoji prefix."""
        prefix = f"{emoji}{self.component_name.title()}: "
        if style:
            return f"[{style}]{prefix}{message}[/{style}]"
        return f"{prefix}{message}"

    def key_info(self, message: str) -> None:
        style = f"bold {self.color}" if self.color != "white" else "bold white"
        self.base_logger.info(self._format_message(message, style))

    def info(self, message: str) -> None:
        self.base_logger.info(self._format_message(message, self.color))

    def debug(self, message: str) -> None:
        style = f"dim {self.color}" if self.color != "white" else "dim white"
        self.base_logger.debug(self._format_message(message, style, "🔍 "))

    def warning(self, message: str) -> None:
        self.base_logger.warning(self._format_message(message, "bold yellow", "⚠️  "))

    def error(self, message: str) -> None:
        self.base_logger.error(self._format_message(message, "bold red", "❌ "))

    def success(self, message: str) -> None:
        self.base_logger.info(self._format_message(message, "bold green", "✅ "))


def _setup_rich_logging(level: int = logging.INFO) -> None:
    """Configure Rich logging for the root logger (called once)."""
    root_logger = logging.getLogger()

    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler):
            return

    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.setLevel(level)

    # Display preferences come from the application configuration when present
    try:
        rich_tracebacks = get_config_value("logging.rich_tracebacks", True)
        show_traceback_locals = get_config_value("logging.show_traceback_locals", False)
        show_full_paths = get_config_value("logging.show_full_paths", False)
    except CONFIG_LOAD_ERRORS:
        rich_tracebacks = True
        show_traceback_locals = False
        show_full_paths = False

    # Logs go to stderr so command output on stdout stays pipeable
    console = Console(stderr=True, width=120)

    handler = RichHandler(
        console=console,
        rich_tracebacks=rich_tracebacks,
        markup=True,
        show_path=show_full_paths,
        show_time=True,
        show_level=True,
        tracebacks_show_locals=show_traceback_locals,
    )

    root_logger.addHandler(handler)

    for lib in ["urllib3", "requests"]:
        logging.getLogger(lib).setLevel(logging.WARNING)


def set_log_level(level: int) -> None:
    """Change the root logging level (used by the --verbose flag)."""
    _setup_rich_logging(level)
    logging.getLogger().setLevel(level)


def get_logger(component_name: str, level: int = logging.INFO) -> ComponentLogger:
    """
    Get a component logger.

    Args:
        component_name: Component name (e.g., 'docker', 'stack')
        level: Logging level used when the root logger is first configured

    Examples:
        logger = get_logger("swarm")
        logger.key_info("Initializing swarm")
    """
    _setup_rich_logging(level)

    base_logger = logging.getLogger(component_name)

    # logging.logging_colors.{component_name} overrides the built-in palette
    try:
        color = get_config_value(f"logging.logging_colors.{component_name}")
    except CONFIG_LOAD_ERRORS:
        color = None

    if not color:
        color = DEFAULT_COLORS.get(component_name, "white")

    return ComponentLogger(base_logger, component_name, color)
