"""Target definition commands."""

import json
from pathlib import Path

import click
from rich.table import Table

from ..console import console
from ..errors import TargetDefinitionError
from ..settings import AppSettings
from ..target import load_target_definition
from ..utils.error_format import escape_markup
from ..utils.error_format import format_error_message
from .render import bundle_table
from .render import bundle_to_dict


@click.group()
def target():
    """Resolve target definition files.

    A target definition lists bundle containers (features and directories)
    and the environment to resolve them for.
    """


@target.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print bundles and errors as JSON")
@click.pass_context
def resolve(ctx, file: Path, as_json: bool):
    """Resolve every container in a target definition file.

    Failing containers are reported together; the exit code is 1 when any failed.
    """
    settings = AppSettings()
    try:
        definition = load_target_definition(
            file,
            substitution=settings.create_substitution(),
            running_platform=settings.running_platform(),
        )
    except TargetDefinitionError as e:
        raise click.ClickException(str(e)) from e

    result = definition.resolve()

    if as_json:
        payload = {
            "name": definition.name,
            "bundles": [bundle_to_dict(b) for b in result.bundles],
            "errors": [
                {"container": repr(err.container), "kind": err.error.kind.value, "message": err.error.message}
                for err in result.errors
            ],
        }
        click.echo(json.dumps(payload, indent=2))
    else:
        console.print(bundle_table(result.bundles, title=escape_markup(definition.name)))
        if result.errors:
            table = Table(title="Failed containers", show_header=True, header_style="bold red")
            table.add_column("Container")
            table.add_column("Error")
            for err in result.errors:
                table.add_row(escape_markup(repr(err.container)), escape_markup(format_error_message(err.error)))
            console.print(table)
        console.print(
            f"\n{len(result.bundles)} bundles from {len(definition.containers)} containers"
            f" ({len(result.errors)} failed)"
        )

    if not result.ok:
        ctx.exit(1)
