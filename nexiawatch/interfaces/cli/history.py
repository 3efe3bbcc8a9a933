"""Download thermostat history."""

from __future__ import annotations

import json

import click
from rich.table import Table

from .context import CLIState, console, handle_errors, pass_state


@click.command()
@click.argument("selector")
@click.option("--annual", is_flag=True, help="Monthly history instead of daily.")
@click.option("--json-output", is_flag=True, help="Output the records as JSON.")
@pass_state
@handle_errors
def history(state: CLIState, selector: str, annual: bool, json_output: bool) -> None:
    """Show the history export of SELECTOR (id or name)."""

    records = state.context().history.get_history(selector, annual=annual)
    if json_output:
        click.echo(json.dumps(records, indent=2))
        return
    if not records:
        console.print("[yellow]No history rows returned.[/yellow]")
        return

    table = Table(title=f"{'Monthly' if annual else 'Daily'} history for {selector}")
    columns = list(records[0].keys())
    for column in columns:
        table.add_column(column)
    for record in records:
        table.add_row(*(record.get(column, "") for column in columns))
    console.print(table)
