"""Locating the custom build output of the current repository.

Packages built with ``elastic-package build`` land in ``build/packages`` at
the repository root. The repository root is the closest ancestor of the
working directory that contains ``.git``.
"""

from pathlib import Path

BUILD_DIR = "build"
BUILD_PACKAGES_DIR = "packages"


def find_repository_root(start: str | Path | None = None) -> Path | None:
    current = Path(start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if (directory / ".git").exists():
            return directory
    return None


def find_build_packages_directory(start: str | Path | None = None) -> tuple[Path | None, bool]:
    """Find ``build/packages`` under the repository root.

    Returns:
        Tuple of (path, found). Outside a repository, or when the repository
        has no build output, returns (None, False).
    """
    root = find_repository_root(start)
    if root is None:
        return None, False

    build_packages = root / BUILD_DIR / BUILD_PACKAGES_DIR
    if build_packages.is_dir():
        return build_packages, True
    return None, False
