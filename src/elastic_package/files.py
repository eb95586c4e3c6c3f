"""Filesystem helpers for preparing the stack packages directory.

Neither operation is transactional: an interrupted copy leaves the
destination partially populated.
"""

import shutil
from pathlib import Path


def clear_dir(path: str | Path) -> None:
    """Remove all contents of the directory, creating it if missing."""
    path = Path(path)
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)


def copy_all(source: str | Path, destination: str | Path) -> None:
    """Copy the full contents of source into destination."""
    shutil.copytree(source, destination, dirs_exist_ok=True)
