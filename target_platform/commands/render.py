"""Shared rendering helpers for resolution commands."""

from __future__ import annotations

from typing import Any

import click
from rich.table import Table

from target_platform.models import BundleStatus
from target_platform.models import ResolvedBundle
from target_platform.models import TargetEnvironment
from target_platform.utils.error_format import escape_markup

_STATUS_STYLES = {
    BundleStatus.OK: "green",
    BundleStatus.WARNING: "yellow",
    BundleStatus.ERROR: "red",
}


def environment_options(func):
    """Add --arch/--os/--ws/--nl options to a command."""
    for axis, example in reversed((("arch", "x86_64"), ("os", "linux"), ("ws", "gtk"), ("nl", "en_US"))):
        func = click.option(f"--{axis}", axis, default=None, help=f"Target {axis} (e.g. {example})")(func)
    return func


def merge_environment(default: TargetEnvironment, **axes: str | None) -> TargetEnvironment:
    """Command-line axes win over the configured default environment."""
    given = {axis: value for axis, value in axes.items() if value is not None}
    return default.model_copy(update=given)


def bundle_to_dict(bundle: ResolvedBundle) -> dict[str, Any]:
    return {
        "id": bundle.id,
        "version": bundle.version,
        "location": str(bundle.location),
        "status": bundle.status.value,
        "message": bundle.message,
        "fragment": bundle.fragment,
        "container": repr(bundle.parent) if bundle.parent is not None else None,
    }


def bundle_table(bundles: list[ResolvedBundle], title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Bundle", style="green")
    table.add_column("Version")
    table.add_column("Status")
    table.add_column("Location", style="dim")

    for bundle in bundles:
        style = _STATUS_STYLES[bundle.status]
        status = f"[{style}]{bundle.status.value}[/{style}]"
        if bundle.message:
            status += f" [dim]{escape_markup(bundle.message)}[/dim]"
        name = escape_markup(bundle.id) + (" [dim](fragment)[/dim]" if bundle.fragment else "")
        table.add_row(name, escape_markup(bundle.version), status, escape_markup(bundle.location))
    return table
