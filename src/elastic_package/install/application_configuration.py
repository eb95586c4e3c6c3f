"""Application configuration (``<data home>/config.yml``).

Example configuration::

    stack:
      image_ref_overrides:
        8.2.0-SNAPSHOT:
          elastic-agent: docker.elastic.co/beats/elastic-agent-complete:8.2.0-custom
          kibana: my-registry/kibana:8.2.0-debug
"""

from dataclasses import dataclass
from typing import Any

from elastic_package.configuration import LocationManager
from elastic_package.utils.config import get_config_builder
from elastic_package.utils.log_filter import quiet_logger

DEFAULT_STACK_VERSION = "8.2.0-SNAPSHOT"

ELASTIC_AGENT_IMAGE_NAME = "docker.elastic.co/beats/elastic-agent-complete"
ELASTICSEARCH_IMAGE_NAME = "docker.elastic.co/elasticsearch/elasticsearch"
KIBANA_IMAGE_NAME = "docker.elastic.co/kibana/kibana"


@dataclass(frozen=True)
class ImageRefs:
    """Container images that make up one stack version."""

    elastic_agent: str
    elasticsearch: str
    kibana: str

    def as_env(self) -> list[str]:
        return [
            f"ELASTIC_AGENT_IMAGE_REF={self.elastic_agent}",
            f"ELASTICSEARCH_IMAGE_REF={self.elasticsearch}",
            f"KIBANA_IMAGE_REF={self.kibana}",
        ]


class ApplicationConfiguration:
    """Read-only view over the application configuration."""

    def __init__(self, raw_config: dict[str, Any] | None = None):
        self.raw_config = raw_config or {}

    def default_stack_image_refs(self, version: str) -> ImageRefs:
        return ImageRefs(
            elastic_agent=f"{ELASTIC_AGENT_IMAGE_NAME}:{version}",
            elasticsearch=f"{ELASTICSEARCH_IMAGE_NAME}:{version}",
            kibana=f"{KIBANA_IMAGE_NAME}:{version}",
        )

    def stack_image_refs(self, version: str) -> ImageRefs:
        """Image references for the version, applying per-version overrides."""
        refs = self.default_stack_image_refs(version)

        # Versions contain dots, so they can't be part of a dot-notation path
        stack = self.raw_config.get("stack") or {}
        overrides = (stack.get("image_ref_overrides") or {}).get(version) or {}

        return ImageRefs(
            elastic_agent=overrides.get("elastic-agent") or refs.elastic_agent,
            elasticsearch=overrides.get("elasticsearch") or refs.elasticsearch,
            kibana=overrides.get("kibana") or refs.kibana,
        )


def configuration(locations: LocationManager | None = None) -> ApplicationConfiguration:
    """Load the application configuration.

    Raises:
        FileNotFoundError: elastic-package has not been installed yet
    """
    locations = locations or LocationManager()
    with quiet_logger("CONFIG"):
        builder = get_config_builder(locations.config_file)
    return ApplicationConfiguration(builder.raw_config)
