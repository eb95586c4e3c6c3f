"""elastic-package.

Developer tooling for integration package authors: boots a stack on Docker
Swarm, manages multi-host networking and queries package manifests.

This package contains:
- Docker process execution and inspection decoding
- Stack lifecycle (swarm init/leave, deploy, teardown)
- Profiles and application configuration
- Manifest queries over the integrations repository
"""

# Version information
__version__ = "0.1.0"

__all__ = ["__version__"]
