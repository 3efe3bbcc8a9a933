"""Change the active setpoint of a thermostat."""

from __future__ import annotations

import click

from .context import CLIState, console, handle_errors, pass_state


@click.command(name="set-temp")
@click.argument("selector")
@click.argument("temperature", type=float)
@pass_state
@handle_errors
def set_temp(state: CLIState, selector: str, temperature: float) -> None:
    """Set SELECTOR's setpoint for its current mode (COOL or HEAT) to TEMPERATURE."""

    ok = state.context().setpoints.set_temperature(selector, temperature)
    if not ok:
        console.print(f"[red]The portal did not accept the new setpoint for '{selector}'.[/red]")
        raise SystemExit(1)
    console.print(f"[green]Set '{selector}' to {temperature:g}.[/green]")
