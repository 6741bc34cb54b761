"""target-platform CLI - resolve feature bundles for a target environment."""

import logging

import click
from rich.table import Table

from .commands.feature import feature as feature_group
from .commands.target import target as target_group
from .console import console
from .logging_setup import init_json_logging
from .settings import AppSettings

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="target-platform")
@click.option("--verbose", is_flag=True, help="Log resolution steps to the console")
@click.option(
    "--log-file",
    envvar="TARGET_PLATFORM_LOG_PATH",
    default=None,
    help="JSONL log file (default: ./target-platform.log.jsonl)",
)
def cli(verbose: bool, log_file: str | None):
    """Resolve the bundles of features and target definitions."""
    init_json_logging(path=log_file, verbose=verbose)


@cli.command(name="platform")
def platform_cmd():
    """Show the running platform used for unspecified environment axes."""
    settings = AppSettings()
    running = settings.running_platform()
    overrides = settings.get_platform_overrides()

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Axis")
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")
    for axis in ("arch", "os", "ws", "nl"):
        table.add_row(axis, getattr(running, axis), "settings" if overrides.get(axis) else "detected")
    console.print(table)


cli.add_command(feature_group)
cli.add_command(target_group)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
