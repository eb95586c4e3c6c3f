"""Stack management commands.

Provides ``elastic-package stack swarm`` with the ``init``, ``leave``, ``up``
and ``down`` subcommands.
"""

import click
from rich.markup import escape

from elastic_package.cli.cli_utils import handle_errors, require_docker, runner_from_context
from elastic_package.cli.styles import Messages, Styles, console
from elastic_package.errors import NotAProfileError
from elastic_package.install import DEFAULT_STACK_VERSION, ensure_installed
from elastic_package.profile import SWARM_PROFILE, Profile, list_profiles, load_profile
from elastic_package.stack import swarm as lifecycle
from elastic_package.stack.deploy import boot_up
from elastic_package.stack.options import DEFAULT_STACK_NAME, DeploymentOptions


def _load_profile(profile_name: str, locations) -> Profile:
    try:
        return load_profile(profile_name, locations)
    except NotAProfileError:
        known = list_profiles(locations)
        if known:
            console.print(
                f"Available profiles: [accent]{escape(', '.join(known))}[/accent]",
                style=Styles.WARNING,
            )
        raise


@click.group()
def stack():
    """Manage the Elastic stack."""


@stack.group()
def swarm():
    """Run the Elastic stack on Docker Swarm.

    \b
    Initialize a swarm once, then boot the stack:
      $ elastic-package stack swarm init --interface eth0 --subnet 10.0.0.0/24
      $ elastic-package stack swarm up
    """


@swarm.command("init")
@click.option("--interface", "-i", "interface_name", required=True, help="Network interface the swarm advertises on")
@click.option("--subnet", "-s", required=True, help="Subnet of the overlay network (CIDR)")
@click.option(
    "--overlay-network-name",
    default=lifecycle.DEFAULT_OVERLAY_NETWORK,
    show_default=True,
    help="Name of the overlay network",
)
@click.pass_context
def init(ctx, interface_name: str, subnet: str, overlay_network_name: str):
    """Initialize a docker swarm and its overlay network."""
    require_docker()
    runner = runner_from_context(ctx)

    with handle_errors("Initializing docker swarm failed"):
        locations = ensure_installed()
        join_token = lifecycle.init(
            runner, interface_name, subnet, overlay_network_name, locations=locations
        )

    console.print(Messages.success(f"Docker swarm initialized on {interface_name}"))
    console.print(Messages.label_value("Worker join token", join_token))


@swarm.command()
@click.pass_context
def leave(ctx):
    """Leave the docker swarm."""
    require_docker()
    runner = runner_from_context(ctx)

    with handle_errors("Leaving docker swarm failed"):
        lifecycle.leave(runner)

    console.print(Messages.success("Left docker swarm"))


@swarm.command()
@click.option(
    "--version", "stack_version", default=DEFAULT_STACK_VERSION, show_default=True, help="Stack version"
)
@click.option("--stack-name", default=DEFAULT_STACK_NAME, show_default=True, help="Name of the stack")
@click.option(
    "--profile", "profile_name", default=SWARM_PROFILE, show_default=True, help="Profile to deploy"
)
@click.pass_context
def up(ctx, stack_version: str, stack_name: str, profile_name: str):
    """Deploy the stack to the swarm."""
    require_docker()
    runner = runner_from_context(ctx)
    console.print(f"Booting up the stack [accent]{escape(stack_name)}[/accent] ({escape(stack_version)})")

    with handle_errors("Booting up the stack failed"):
        locations = ensure_installed()
        profile = _load_profile(profile_name, locations)
        options = DeploymentOptions(
            stack_version=stack_version,
            profile=profile,
            stack_name=stack_name,
            swarm_mode=True,
        )
        boot_up(options, runner, locations)

    console.print(Messages.success("Done"))


@swarm.command()
@click.option("--stack-name", default=DEFAULT_STACK_NAME, show_default=True, help="Name of the stack")
@click.pass_context
def down(ctx, stack_name: str):
    """Remove the stack from the swarm."""
    require_docker()
    runner = runner_from_context(ctx)

    with handle_errors("Tearing down the stack failed"):
        lifecycle.stack_down(runner, stack_name)

    console.print(Messages.success("Done"))
