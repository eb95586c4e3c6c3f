"""Docker subcommands used by elastic-package.

Each helper builds the argument list for one subcommand and runs it through
the given ProcessRunner. Failures surface as ExecutionError with a message
naming the step that failed.
"""

from elastic_package.docker.inspect import (
    ContainerDescription,
    NetworkDescription,
    decode_containers,
    decode_networks,
)
from elastic_package.docker.runner import ProcessRunner
from elastic_package.errors import DecodeError


def pull(runner: ProcessRunner, image: str) -> None:
    """Download the latest available revision of the image."""
    runner.run(["pull", image], description="running docker command failed", stream=True)


def container_id(runner: ProcessRunner, container_name: str) -> str:
    """Return the ID of the single running container matching the name.

    Raises:
        DecodeError: Zero or several containers matched
    """
    output = runner.output(
        ["ps", "--filter", f"name={container_name}", "--format", "{{.ID}}"],
        description=f'could not find "{container_name}" container',
    )
    container_ids = [line for line in output.strip().split(b"\n") if line]
    if len(container_ids) != 1:
        raise DecodeError(
            f"expected single {container_name} container, found {len(container_ids)}"
        )
    return container_ids[0].decode()


def inspect_network(runner: ProcessRunner, network: str) -> list[NetworkDescription]:
    """Describe the network and the containers attached to it."""
    output = runner.output(
        ["network", "inspect", network], description="could not inspect the network"
    )
    return decode_networks(output)


def connect_to_network(runner: ProcessRunner, container_id: str, network: str) -> None:
    """Attach the container to the network."""
    runner.run(
        ["network", "connect", network, container_id],
        description="could not attach container to the stack network",
    )


def create_network(runner: ProcessRunner, name: str, driver: str, *args: str) -> None:
    """Create a network: ``network create --driver <driver> [args...] <name>``."""
    runner.run(
        ["network", "create", "--driver", driver, *args, name],
        description="could not create stack network",
    )


def inspect_containers(runner: ProcessRunner, *container_ids: str) -> list[ContainerDescription]:
    """Describe the selected containers."""
    output = runner.output(
        ["inspect", *container_ids], description="could not inspect containers"
    )
    return decode_containers(output)


def copy(runner: ProcessRunner, container_name: str, container_path: str, local_path: str) -> None:
    """Copy resources from the container to a local destination."""
    runner.run(
        ["cp", f"{container_name}:{container_path}", local_path],
        description="could not copy files from the container",
    )


def swarm_init(runner: ProcessRunner, interface: str) -> None:
    """Start swarm mode advertising on the interface."""
    runner.run(
        ["swarm", "init", "--advertise-addr", interface],
        description="docker swarm init failed",
    )


def swarm_join_token(runner: ProcessRunner) -> str:
    output = runner.output(
        ["swarm", "join-token", "worker"], description="unable to get join token"
    )
    return output.decode(errors="replace")


def swarm_leave(runner: ProcessRunner) -> None:
    """Forcibly remove the local node from the swarm."""
    runner.run(["swarm", "leave", "--force"], description="docker swarm leave failed")


def stack_rm(runner: ProcessRunner, stack_name: str) -> None:
    runner.run(
        ["stack", "rm", stack_name],
        description=f"removing stack {stack_name} failed",
        stream=True,
    )


def stack_deploy(
    runner: ProcessRunner, compose_file: str, stack_name: str, env: list[str] | None = None
) -> None:
    """Deploy the stack described by the compose file."""
    runner.run(
        ["stack", "deploy", "--compose-file", compose_file, stack_name],
        env=env,
        description=f"deploying stack {stack_name} failed",
        stream=True,
    )
