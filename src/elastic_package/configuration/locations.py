"""Directory layout under the elastic-package data home.

Layout::

    ~/.elastic-package/              (ELASTIC_PACKAGE_DATA_HOME overrides)
    ├── config.yml                   application configuration
    ├── profiles/<name>/             stack profiles
    └── stack/
        ├── Dockerfile.package-registry
        └── development/             packages served by the local registry
"""

import os
from pathlib import Path

from elastic_package.utils.config import CONFIG_FILE_NAME, DATA_HOME_ENV

STACK_DIR = "stack"
PACKAGES_DIR = "development"
PROFILES_DIR = "profiles"
PACKAGE_REGISTRY_DOCKERFILE = "Dockerfile.package-registry"


class LocationManager:
    """Resolves paths under the data home.

    Args:
        root: Explicit data home. Defaults to ELASTIC_PACKAGE_DATA_HOME or
            ``~/.elastic-package``.
    """

    def __init__(self, root: str | Path | None = None):
        if root is None:
            env_root = os.environ.get(DATA_HOME_ENV)
            root = Path(env_root) if env_root else Path.home() / ".elastic-package"
        self.root_dir = Path(root).expanduser()

    @property
    def config_file(self) -> Path:
        return self.root_dir / CONFIG_FILE_NAME

    @property
    def stack_dir(self) -> Path:
        return self.root_dir / STACK_DIR

    @property
    def packages_dir(self) -> Path:
        """Packages loaded into the local package-registry."""
        return self.stack_dir / PACKAGES_DIR

    @property
    def profiles_dir(self) -> Path:
        return self.root_dir / PROFILES_DIR

    @property
    def package_registry_dockerfile(self) -> Path:
        return self.stack_dir / PACKAGE_REGISTRY_DOCKERFILE
