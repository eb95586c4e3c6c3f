"""Elasticsearch helpers."""

from .errors import ErrorBody, new_error

__all__ = ["ErrorBody", "new_error"]
