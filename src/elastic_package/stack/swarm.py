"""Docker swarm lifecycle for the stack.

Initializing a swarm is a multi step operation. The ``swarm`` profile is
(re)created from the default profile and remembers the overlay network name.
The node then becomes a swarm manager, the worker join token is fetched and an
attachable overlay network is created for the stack services. If any step
fails after the swarm was initialized, the node leaves the swarm again before
the error is reported.
"""

import ipaddress
import socket

from elastic_package.configuration import LocationManager
from elastic_package.docker import ProcessRunner, commands
from elastic_package.errors import ExecutionError, StackError, ValidationError
from elastic_package.profile import DEFAULT_PROFILE, SWARM_PROFILE, ProfileOptions, create_profile
from elastic_package.stack.saga import CompensatingActions
from elastic_package.utils.logger import get_logger

logger = get_logger("swarm")

DEFAULT_OVERLAY_NETWORK = "elastic-package-stack-overlay"
OVERLAY_DRIVER = "overlay"


def validate_interface(interface_name: str) -> None:
    """Check that the host has a network interface with this name.

    Raises:
        ValidationError: No such interface
    """
    names = {name for _, name in socket.if_nameindex()}
    if interface_name not in names:
        raise ValidationError(
            f"cannot create docker swarm without network interface: {interface_name!r} not found",
            {"available": sorted(names)},
        )


def validate_subnet(subnet: str) -> ipaddress.IPv4Network | ipaddress.IPv6Network:
    """Parse a CIDR subnet such as ``10.0.0.0/24``.

    Raises:
        ValidationError: Not a CIDR address
    """
    if "/" not in subnet:
        raise ValidationError(f"invalid CIDR address {subnet!r}: missing prefix length")
    try:
        return ipaddress.ip_network(subnet, strict=False)
    except ValueError as e:
        raise ValidationError(f"invalid CIDR address {subnet!r}: {e}") from e


def create_network(runner: ProcessRunner, name: str, driver: str, *extra_args: str) -> None:
    commands.create_network(runner, name, driver, *extra_args)


def create_overlay_network(runner: ProcessRunner, name: str, subnet: str) -> None:
    """Create an attachable overlay network.

    The subnet is validated before any command runs.
    """
    validate_subnet(subnet)
    logger.debug(f"Creating overlay network {name} ({subnet})")
    create_network(runner, name, OVERLAY_DRIVER, "--subnet", subnet, "--attachable")


def leave(runner: ProcessRunner) -> None:
    commands.swarm_leave(runner)
    logger.info("Left docker swarm")


def init(
    runner: ProcessRunner,
    interface_name: str,
    subnet: str,
    network_name: str = DEFAULT_OVERLAY_NETWORK,
    locations: LocationManager | None = None,
) -> str:
    """Bootstrap a single node swarm for the stack.

    Args:
        runner: Docker process runner
        interface_name: Host interface the swarm advertises on
        subnet: CIDR subnet of the overlay network
        network_name: Name of the overlay network
        locations: Application directories

    Returns:
        The worker join token of the new swarm

    Raises:
        ValidationError: Unknown interface or invalid subnet
        StackError: One of the steps failed
    """
    validate_interface(interface_name)
    validate_subnet(subnet)

    actions = CompensatingActions()
    actions.add(
        "swarm profile creation has failed",
        lambda: create_profile(
            ProfileOptions(
                SWARM_PROFILE,
                from_profile=DEFAULT_PROFILE,
                overwrite_existing=True,
                overlay_network_name=network_name,
            ),
            locations,
        ),
    )
    actions.add(
        "docker swarm creation has failed",
        lambda: commands.swarm_init(runner, interface_name),
        compensation=lambda: leave(runner),
    )
    actions.add("unable to get join token", lambda: commands.swarm_join_token(runner))
    actions.add(
        "create overlay network failed",
        lambda: create_overlay_network(runner, network_name, subnet),
    )

    _, _, join_token, _ = actions.run()
    logger.success(f"Docker swarm initialized with overlay network {network_name}")
    return join_token


def stack_down(runner: ProcessRunner, stack_name: str) -> None:
    """Remove a deployed stack.

    Raises:
        StackError: Tearing down the stack failed
    """
    try:
        commands.stack_rm(runner, stack_name)
    except ExecutionError as e:
        raise StackError(f"tearing down the stack {stack_name} failed", e) from e
    logger.success(f"Stack {stack_name} removed")
