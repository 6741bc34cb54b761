"""Feature commands: resolve, list and inspect features in an install home."""

import json
import logging

import click
from rich.table import Table

from ..console import console
from ..console import error_console
from ..containers import FeatureBundleContainer
from ..descriptor import FEATURE_DESCRIPTOR
from ..descriptor import parse_feature_descriptor
from ..discovery import find_feature_dirs
from ..errors import TargetResolutionError
from ..settings import AppSettings
from ..utils.error_format import escape_markup
from ..utils.error_format import format_error_message
from .render import bundle_table
from .render import bundle_to_dict
from .render import environment_options
from .render import merge_environment

logger = logging.getLogger(__name__)


@click.group()
def feature():
    """Inspect and resolve features installed in a home directory.

    HOME is an install location containing features/ and plugins/.
    It may contain variables such as ${env_var:ECLIPSE_HOME}.

    Examples:

        \b
        # Resolve the most recent version of a feature
        target-platform feature resolve /opt/eclipse org.example.feature

        \b
        # Resolve a specific version for another platform
        target-platform feature resolve /opt/eclipse org.example.feature --version 1.2.0 --os win32 --ws win32
    """


def _container(home: str, feature_id: str, version: str | None, settings: AppSettings) -> FeatureBundleContainer:
    return FeatureBundleContainer(
        home,
        feature_id,
        version,
        substitution=settings.create_substitution(),
        running_platform=settings.running_platform(),
    )


@feature.command()
@click.argument("home")
@click.argument("feature_id")
@click.option("--version", "-v", "version", default=None, help="Exact feature version (default: most recent)")
@environment_options
@click.option("--json", "as_json", is_flag=True, help="Print bundles as JSON")
def resolve(home: str, feature_id: str, version: str | None, arch, os, ws, nl, as_json: bool):
    """Resolve the bundles of a feature for a target environment."""
    settings = AppSettings()
    environment = merge_environment(settings.get_default_environment(), arch=arch, os=os, ws=ws, nl=nl)
    container = _container(home, feature_id, version, settings)

    try:
        bundles = container.resolve(environment)
    except TargetResolutionError as e:
        error_console.print(f"[red]✗[/red] {escape_markup(format_error_message(e))}")
        raise click.Abort() from e

    if as_json:
        click.echo(json.dumps([bundle_to_dict(b) for b in bundles], indent=2))
        return

    console.print(bundle_table(bundles, title=escape_markup(f"{feature_id} ({version or 'most recent'})")))
    console.print(f"\n[green]✓[/green] {len(bundles)} bundles resolved")


@feature.command(name="list")
@click.argument("home")
def list_features(home: str):
    """List feature directories found in an install home."""
    settings = AppSettings()
    try:
        resolved_home = settings.create_substitution().expand_path(home)
    except TargetResolutionError as e:
        raise click.ClickException(format_error_message(e)) from e

    feature_dirs = find_feature_dirs(resolved_home)
    if not feature_dirs:
        console.print(f"[yellow]No features found in {escape_markup(resolved_home / 'features')}[/yellow]")
        return

    table = Table(title="Features", show_header=True, header_style="bold cyan")
    table.add_column("Directory", style="green")
    table.add_column("Descriptor")
    table.add_column("Location", style="dim")
    for feature_dir in feature_dirs:
        has_descriptor = (feature_dir / FEATURE_DESCRIPTOR).is_file()
        table.add_row(
            escape_markup(feature_dir.name),
            "[green]✓[/green]" if has_descriptor else "[red]missing[/red]",
            escape_markup(feature_dir.parent),
        )
    console.print(table)


@feature.command()
@click.argument("home")
@click.argument("feature_id")
@click.option("--version", "-v", "version", default=None, help="Exact feature version (default: most recent)")
def show(home: str, feature_id: str, version: str | None):
    """Show the descriptor of a feature and its plugin entries."""
    settings = AppSettings()
    container = _container(home, feature_id, version, settings)

    try:
        location = container.resolve_feature_location()
    except TargetResolutionError as e:
        raise click.ClickException(format_error_message(e)) from e

    try:
        descriptor = parse_feature_descriptor(location / FEATURE_DESCRIPTOR)
    except TargetResolutionError as e:
        raise click.ClickException(format_error_message(e)) from e

    console.print(f"[bold]{escape_markup(descriptor.id)}[/bold] {escape_markup(descriptor.version)}")
    if descriptor.label:
        console.print(f"  Label:    {escape_markup(descriptor.label)}")
    if descriptor.provider:
        console.print(f"  Provider: {escape_markup(descriptor.provider)}")
    console.print(f"  Location: {escape_markup(location)}\n")

    table = Table(title="Plug-ins", show_header=True, header_style="bold cyan")
    table.add_column("Id", style="green")
    table.add_column("Version")
    for axis in ("os", "ws", "arch", "nl"):
        table.add_column(axis, style="dim")
    for entry in descriptor.plugins:
        table.add_row(
            escape_markup(entry.id) + (" [dim](fragment)[/dim]" if entry.fragment else ""),
            escape_markup(entry.version),
            *(escape_markup(getattr(entry, axis) or "") for axis in ("os", "ws", "arch", "nl")),
        )
    console.print(table)
