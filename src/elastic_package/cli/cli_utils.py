"""Helpers shared by CLI commands."""

import os
import traceback
from contextlib import contextmanager

import click

from elastic_package.cli.styles import Messages, Styles, console
from elastic_package.docker import ProcessRunner
from elastic_package.docker.runtime import verify_docker_is_running
from elastic_package.errors import ElasticPackageError


def runner_from_context(ctx: click.Context) -> ProcessRunner:
    """Docker runner honoring the global ``--verbose`` flag."""
    obj = ctx.find_root().obj or {}
    return ProcessRunner(debug=bool(obj.get("debug")))


@contextmanager
def handle_errors(action: str):
    """Print elastic-package errors and abort the command.

    Tracebacks are shown when the ``DEBUG`` environment variable is set.
    """
    try:
        yield
    except KeyboardInterrupt:
        console.print(Messages.warning("Operation cancelled by user"))
        raise click.Abort() from None
    except (ElasticPackageError, OSError) as e:
        console.print(Messages.error(f"{action}: {e}"))
        if os.environ.get("DEBUG"):
            console.print(traceback.format_exc(), style=Styles.DIM, markup=False)
        raise click.Abort() from None


def require_docker() -> None:
    """Abort with a platform specific hint when the Docker daemon is unreachable."""
    is_running, message = verify_docker_is_running()
    if not is_running:
        console.print(Messages.error(message))
        raise click.Abort()
