"""Session management command."""

from __future__ import annotations

import click

from .context import CLIState, console, handle_errors, pass_state


@click.command()
@click.option("--force", is_flag=True, help="Ignore the stored session and log in again.")
@pass_state
@handle_errors
def login(state: CLIState, force: bool) -> None:
    """Log in to the portal (or reuse a fresh stored session)."""

    ctx = state.context()
    ctx.client.ensure_session(force_new=force)
    console.print(
        f"[green]Session ready for house {ctx.client.house_id}[/green] "
        f"(valid for {ctx.client.session_ttl_seconds:.0f}s of inactivity)."
    )
