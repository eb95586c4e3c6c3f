"""Synchronous execution of the container-management binary.

Every invocation buffers standard error so a failure can report the
diagnostic text. Debug mode is a constructor value: when set, streaming
commands inherit stdout and mirror stderr to the console line by line while
still buffering it.

Examples:
    Capture output::

        runner = ProcessRunner()
        ids = runner.output(["ps", "--filter", "name=kibana", "--format", "{{.ID}}"])

    Fire-and-forget with live output in debug mode::

        runner = ProcessRunner(debug=True)
        runner.run(["stack", "rm", "elastic-package-stack"], stream=True)
"""

import os
import subprocess
import sys

from elastic_package.errors import ExecutionError
from elastic_package.utils.logger import get_logger

logger = get_logger("docker")

DOCKER_BINARY = "docker"


class ProcessRunner:
    """Runs one external binary with ordered argument lists.

    Args:
        binary: Executable to invoke (``docker`` by default)
        debug: Mirror output of streaming commands to the console
    """

    def __init__(self, binary: str = DOCKER_BINARY, debug: bool = False):
        self.binary = binary
        self.debug = debug

    def __repr__(self) -> str:
        return f"ProcessRunner(binary={self.binary!r}, debug={self.debug})"

    def command(self, args: list[str]) -> list[str]:
        return [self.binary, *args]

    @staticmethod
    def build_env(env: list[str] | None) -> dict[str, str] | None:
        """Append ``KEY=VALUE`` entries to the inherited environment.

        Returns None when there is nothing to add, so the child simply
        inherits the current environment.
        """
        if not env:
            return None
        merged = os.environ.copy()
        for entry in env:
            key, _, value = entry.partition("=")
            merged[key] = value
        return merged

    def output(
        self,
        args: list[str],
        env: list[str] | None = None,
        description: str | None = None,
    ) -> bytes:
        """Run the command and return its captured standard output.

        Args:
            args: Arguments passed after the binary
            env: Extra ``KEY=VALUE`` environment entries
            description: Context used in the error message on failure

        Raises:
            ExecutionError: The command could not start or exited non-zero
        """
        cmd = self.command(args)
        logger.debug(f"output command: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True, env=self.build_env(env))
        except OSError as e:
            raise ExecutionError(
                description or f"could not run {self.binary}", cmd, None, str(e)
            ) from e

        stderr = result.stderr.decode(errors="replace")
        if result.returncode != 0:
            raise ExecutionError(
                description or f"running {self.binary} command failed",
                cmd,
                result.returncode,
                stderr,
            )
        return result.stdout

    def run(
        self,
        args: list[str],
        env: list[str] | None = None,
        description: str | None = None,
        stream: bool = False,
    ) -> None:
        """Run the command, discarding its output on success.

        Args:
            args: Arguments passed after the binary
            env: Extra ``KEY=VALUE`` environment entries
            description: Context used in the error message on failure
            stream: Show output live when the runner is in debug mode

        Raises:
            ExecutionError: The command could not start or exited non-zero
        """
        if not (stream and self.debug):
            self.output(args, env=env, description=description)
            return

        cmd = self.command(args)
        logger.debug(f"running command: {' '.join(cmd)}")

        try:
            process = subprocess.Popen(
                cmd,
                stderr=subprocess.PIPE,
                env=self.build_env(env),
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise ExecutionError(
                description or f"could not run {self.binary}", cmd, None, str(e)
            ) from e

        # stdout is inherited; stderr is the only pipe, so reading it to EOF cannot deadlock
        captured = []
        for line in process.stderr:
            sys.stderr.write(line)
            captured.append(line)
        process.stderr.close()
        returncode = process.wait()

        if returncode != 0:
            raise ExecutionError(
                description or f"running {self.binary} command failed",
                cmd,
                returncode,
                "".join(captured),
            )
