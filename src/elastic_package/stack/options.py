"""Per-invocation stack options."""

from dataclasses import dataclass

from elastic_package.profile import Profile

DEFAULT_STACK_NAME = "elastic-package-stack"


@dataclass(frozen=True)
class DeploymentOptions:
    """Immutable options built once per command invocation.

    Attributes:
        stack_version: Version of the stack images (e.g. 8.2.0-SNAPSHOT)
        stack_name: Name of the deployed stack / compose project
        profile: Profile providing the compose file and its variables
        swarm_mode: Deploy with ``docker stack deploy`` instead of compose
    """

    stack_version: str
    profile: Profile
    stack_name: str = DEFAULT_STACK_NAME
    swarm_mode: bool = False
