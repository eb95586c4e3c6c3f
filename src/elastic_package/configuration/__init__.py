"""On-disk locations used by elastic-package."""

from .locations import LocationManager

__all__ = ["LocationManager"]
