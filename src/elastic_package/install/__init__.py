"""Application installation and configuration."""

from .application_configuration import (
    DEFAULT_STACK_VERSION,
    ApplicationConfiguration,
    ImageRefs,
    configuration,
)
from .install import ensure_installed

__all__ = [
    "DEFAULT_STACK_VERSION",
    "ApplicationConfiguration",
    "ImageRefs",
    "configuration",
    "ensure_installed",
]
