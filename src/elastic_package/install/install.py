"""First-run setup of the data home.

Writes the default application configuration, the package-registry
Dockerfile and the default profile. Existing files are left untouched.
"""

from elastic_package.configuration import LocationManager
from elastic_package.profile import ensure_default_profile
from elastic_package.utils.logger import get_logger

logger = get_logger("install")

DEFAULT_CONFIG = """\
# elastic-package application configuration
stack:
  # Per-version image overrides, e.g.:
  # image_ref_overrides:
  #   8.2.0-SNAPSHOT:
  #     elastic-agent: docker.elastic.co/beats/elastic-agent-complete:8.2.0-SNAPSHOT
  #     elasticsearch: docker.elastic.co/elasticsearch/elasticsearch:8.2.0-SNAPSHOT
  #     kibana: docker.elastic.co/kibana/kibana:8.2.0-SNAPSHOT
  image_ref_overrides: {}
"""

PACKAGE_REGISTRY_DOCKERFILE = """\
ARG PACKAGE_REGISTRY_BASE_IMAGE=docker.elastic.co/package-registry/distribution:snapshot
FROM ${PACKAGE_REGISTRY_BASE_IMAGE}

COPY development/ /packages/development
"""


def ensure_installed(locations: LocationManager | None = None) -> LocationManager:
    """Create the data home layout when missing."""
    locations = locations or LocationManager()

    locations.packages_dir.mkdir(parents=True, exist_ok=True)
    locations.profiles_dir.mkdir(parents=True, exist_ok=True)

    if not locations.config_file.exists():
        locations.config_file.write_text(DEFAULT_CONFIG)
        logger.debug(f"Wrote default configuration to {locations.config_file}")

    if not locations.package_registry_dockerfile.exists():
        locations.package_registry_dockerfile.write_text(PACKAGE_REGISTRY_DOCKERFILE)
        logger.debug(f"Wrote {locations.package_registry_dockerfile}")

    ensure_default_profile(locations)
    return locations
