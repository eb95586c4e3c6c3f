"""Main CLI entry point for elastic-package.

Subcommand modules are imported only when invoked, which keeps
``elastic-package --help`` fast.
"""

import importlib
import logging
import sys

import click

from elastic_package import __version__
from elastic_package.utils.logger import set_log_level


class LazyGroup(click.Group):
    """Click group that lazily loads subcommands only when invoked."""

    # Command name -> module path; the command object shares the command's name
    commands_map = {
        "stack": "elastic_package.cli.stack_cmd",
        "query": "elastic_package.cli.query_cmd",
    }

    def get_command(self, ctx, cmd_name):
        if cmd_name not in self.commands_map:
            return None
        mod = importlib.import_module(self.commands_map[cmd_name])
        return getattr(mod, cmd_name)

    def list_commands(self, ctx):
        return sorted(self.commands_map)


@click.group(cls=LazyGroup)
@click.version_option(version=__version__, prog_name="elastic-package")
@click.option("--verbose", "-v", is_flag=True, help="Verbose mode; mirrors docker output live")
@click.pass_context
def cli(ctx, verbose: bool):
    """elastic-package - developer tool for Elastic packages.

    Deploys the Elastic stack on Docker Swarm and queries package manifests.

    Examples:

    \b
      elastic-package stack swarm init --interface eth0 --subnet 10.0.0.0/24
      elastic-package stack swarm up --version 8.2.0-SNAPSHOT
      elastic-package query manifest --key owner.github --value elastic/integrations
    """
    ctx.ensure_object(dict)
    ctx.obj["debug"] = verbose
    if verbose:
        set_log_level(logging.DEBUG)


def main():
    """Entry point for the elastic-package CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nInterrupted", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
