"""Command line interface for elastic-package."""
