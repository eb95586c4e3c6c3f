"""Console and style helpers for the CLI.

Semantic style names (success, error, warning) are mapped to colors by a
single rich Theme; commands use the names, never raw colors.
"""

import sys
from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme


@dataclass
class ColorTheme:
    """Colors of the CLI theme."""

    error: str = "#ff0000"
    warning: str = "#ffaa00"
    success: str = "#00bfb3"
    primary: str = "#fec514"
    accent: str = "#f04e98"
    text_dim: str = "#666666"


def _build_rich_theme(theme: ColorTheme) -> Theme:
    return Theme(
        {
            "success": f"bold {theme.success}",
            "error": f"bold {theme.error}",
            "warning": f"bold {theme.warning}",
            "dim": theme.text_dim,
            "header": f"bold {theme.primary}",
            "label": "bold",
            "value": theme.success,
            "accent": theme.accent,
        }
    )


ELASTIC_THEME = ColorTheme()

# On Windows, force UTF-8 capable output
if sys.platform == "win32":
    console = Console(theme=_build_rich_theme(ELASTIC_THEME), force_terminal=True, legacy_windows=False)
else:
    console = Console(theme=_build_rich_theme(ELASTIC_THEME))


class Styles:
    """Style names defined by the rich theme."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    DIM = "dim"
    HEADER = "header"
    LABEL = "label"
    VALUE = "value"
    ACCENT = "accent"


class Messages:
    """Pre-formatted markup for common message patterns.

    Interpolated text is escaped, so values containing brackets print as is.
    """

    @staticmethod
    def success(text: str) -> str:
        return f"[success]✓ {escape(text)}[/success]"

    @staticmethod
    def error(text: str) -> str:
        return f"[error]✗ {escape(text)}[/error]"

    @staticmethod
    def warning(text: str) -> str:
        return f"[warning]⚠️  {escape(text)}[/warning]"

    @staticmethod
    def header(text: str) -> str:
        return f"[header]{escape(text)}[/header]"

    @staticmethod
    def label_value(label: str, value: str) -> str:
        return f"[label]{escape(label)}:[/label] [value]{escape(value)}[/value]"


__all__ = ["ColorTheme", "ELASTIC_THEME", "console", "Styles", "Messages"]
