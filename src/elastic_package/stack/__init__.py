"""Stack lifecycle: swarm bootstrap, deployment and teardown."""

from .deploy import boot_up, build_deploy_env, deploy
from .env import EnvBuilder, select_stack_variant, stack_variant_as_env
from .options import DEFAULT_STACK_NAME, DeploymentOptions
from .saga import CompensatingActions
from .swarm import (
    DEFAULT_OVERLAY_NETWORK,
    create_network,
    create_overlay_network,
    init,
    leave,
    stack_down,
)

__all__ = [
    "DEFAULT_STACK_NAME",
    "DEFAULT_OVERLAY_NETWORK",
    "DeploymentOptions",
    "CompensatingActions",
    "EnvBuilder",
    "boot_up",
    "build_deploy_env",
    "create_network",
    "create_overlay_network",
    "deploy",
    "init",
    "leave",
    "select_stack_variant",
    "stack_down",
    "stack_variant_as_env",
]
