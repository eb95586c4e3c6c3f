"""Docker process execution and inspection.

All interaction with the container runtime goes through ProcessRunner; the
command helpers and the inspection decoder are built on top of it.
"""

from .commands import (
    connect_to_network,
    container_id,
    copy,
    create_network,
    inspect_containers,
    inspect_network,
    pull,
    stack_deploy,
    stack_rm,
    swarm_init,
    swarm_join_token,
    swarm_leave,
)
from .inspect import (
    ContainerDescription,
    NetworkDescription,
    decode_containers,
    decode_networks,
)
from .runner import ProcessRunner

__all__ = [
    "ProcessRunner",
    "ContainerDescription",
    "NetworkDescription",
    "decode_containers",
    "decode_networks",
    "pull",
    "container_id",
    "inspect_network",
    "connect_to_network",
    "create_network",
    "inspect_containers",
    "copy",
    "swarm_init",
    "swarm_join_token",
    "swarm_leave",
    "stack_rm",
    "stack_deploy",
]
