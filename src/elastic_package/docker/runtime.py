"""Compose command detection and daemon checks.

Image builds for the stack go through compose. Both the ``docker compose``
plugin and the legacy standalone ``docker-compose`` are supported.

Examples:
    Basic usage::

        from elastic_package.docker.runtime import get_compose_command

        cmd = get_compose_command()
        # Returns: ['docker', 'compose'] or ['docker-compose']
"""

import platform
import shutil
import subprocess

from elastic_package.errors import ExecutionError

# Module-level cache for the compose command
_cached_compose_cmd: list[str] | None = None

_COMPOSE_CANDIDATES = [["docker", "compose"], ["docker-compose"]]


def get_compose_command() -> list[str]:
    """Get the compose command.

    Tries the ``docker compose`` plugin first, then the standalone
    ``docker-compose``. The result is cached after first detection.

    Raises:
        ExecutionError: If no compose command is available
    """
    global _cached_compose_cmd

    if _cached_compose_cmd is not None:
        return _cached_compose_cmd.copy()

    for candidate in _COMPOSE_CANDIDATES:
        if not shutil.which(candidate[0]):
            continue

        try:
            result = subprocess.run([*candidate, "version"], capture_output=True, timeout=5)
        except (subprocess.TimeoutExpired, FileNotFoundError):
            continue

        if result.returncode == 0:
            _cached_compose_cmd = candidate
            return _cached_compose_cmd.copy()

    raise ExecutionError(
        "No compose command found. Install Docker with the compose plugin or docker-compose\n"
        "Docker: https://docs.docker.com/get-docker/"
    )


def verify_docker_is_running() -> tuple[bool, str]:
    """Verify that the Docker daemon is reachable.

    Returns:
        Tuple of (is_running, error_message); the message is empty when running
    """
    if not shutil.which("docker"):
        return False, (
            "No container runtime found. Install Docker to use the stack commands\n"
            "Docker: https://docs.docker.com/get-docker/"
        )

    try:
        result = subprocess.run(["docker", "ps"], capture_output=True, text=True, timeout=5)
    except subprocess.TimeoutExpired:
        return False, "Docker command timed out. The service may not be running."

    if result.returncode == 0:
        return True, ""

    if "cannot connect to the docker daemon" in result.stderr.lower():
        return False, _get_docker_not_running_message()

    return False, f"Docker is installed but not responding:\n{result.stderr}"


def _get_docker_not_running_message() -> str:
    """Get platform-specific message for Docker not running."""
    system = platform.system()

    if system in ["Darwin", "Windows"]:
        return (
            "Docker Desktop is not running.\n\n"
            "To fix this:\n"
            "1. Start Docker Desktop\n"
            "2. Wait for Docker to start\n"
            "3. Try your command again"
        )
    return (
        "Docker daemon is not running.\n\n"
        "To fix this:\n"
        "1. Start Docker: sudo systemctl start docker\n"
        "2. Check status: sudo systemctl status docker\n\n"
        "If permission issues, add user to docker group:\n"
        "sudo usermod -aG docker $USER\n"
        "(then log out and back in)"
    )
