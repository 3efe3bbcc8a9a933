"""Show current temperatures and setpoints."""

from __future__ import annotations

import json

import click
from rich.table import Table

from .context import CLIState, console, handle_errors, pass_state


def _format_value(value: float | int | None) -> str:
    return "-" if value is None else f"{value:g}"


@click.command()
@click.argument("selector", required=False)
@click.option("--json-output", is_flag=True, help="Output the results as JSON.")
@pass_state
@handle_errors
def status(state: CLIState, selector: str | None, json_output: bool) -> None:
    """Show thermostats of the house, or only SELECTOR (id or name)."""

    rows = state.context().climate.summarize(selector)

    if json_output:
        click.echo(json.dumps([row.model_dump(mode="json") for row in rows], indent=2))
        return

    if not rows:
        console.print("[yellow]No thermostats found for this house.[/yellow]")
        return

    table = Table(title="Thermostats")
    table.add_column("#", justify="right")
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Mode")
    table.add_column("Temperature", justify="right")
    table.add_column("Setpoint", justify="right")
    for row in rows:
        table.add_row(
            str(row.position),
            str(row.id),
            row.name,
            row.mode,
            _format_value(row.temperature),
            _format_value(row.setpoint),
        )
    console.print(table)
