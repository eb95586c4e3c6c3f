"""Package manifest queries."""

import click
from rich.markup import escape

from elastic_package.cli.cli_utils import handle_errors
from elastic_package.cli.styles import Messages, Styles, console
from elastic_package.packages import check_integrations_root, query_manifest

PACKAGES_DIR = "packages"


def _split_values(values: tuple[str, ...]) -> list[str]:
    """Accept both repeated options and comma separated lists."""
    return [v.strip() for item in values for v in item.split(",") if v.strip()]


@click.group()
def query():
    """Query packages of the integrations repository."""


@query.command()
@click.option("--key", "-k", required=True, help="Flattened manifest key, e.g. owner.github")
@click.option(
    "--value",
    "values",
    multiple=True,
    required=True,
    help="Expected value (repeatable or comma separated; only the first is compared)",
)
def manifest(key: str, values: tuple[str, ...]):
    """List packages whose manifest has KEY set to VALUE.

    Must be run from the root of the integrations repository.

    \b
    Example:
      $ elastic-package query manifest --key owner.github --value elastic/security-external-integrations
    """
    expected = _split_values(values)

    with handle_errors("Querying manifests failed"):
        check_integrations_root()
        result = query_manifest(PACKAGES_DIR, key, expected)

    if result.skipped:
        console.print("Skipped packages:", style=Styles.WARNING)
        for skipped in result.skipped:
            console.print(f"  {escape(skipped.name)}: {escape(skipped.reason)}", style=Styles.DIM)

    if not result.matched:
        console.print(f"key {escape(key)} with value {escape(expected[0])} not found in any packages")
        return

    console.print(Messages.header("Packages:"))
    for name in result.matched:
        console.print(f"  {escape(name)}")
