"""Entry point for running the Nexiawatch CLI.

This module defines a top-level Click group that aggregates all subcommands
defined in the ``nexiawatch.interfaces.cli`` package. Executing
``python -m nexiawatch.interfaces.cli`` will invoke this group and present the
available commands.
"""

import logging

import click

from nexiawatch.infrastructure.observability import configure_logging

from .context import CLIState
from .history import history
from .login import login
from .setpoint import set_temp
from .status import status


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON file with login, password, house_id and optional client settings.",
)
@click.option("--login", "login_name", default=None, help="Portal login (env: NEXIA_LOGIN).")
@click.option("--password", default=None, help="Portal password (env: NEXIA_PASSWORD).")
@click.option("--house-id", default=None, help="Nexia house id (env: NEXIA_HOUSE_ID).")
@click.option(
    "--session-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Where the portal session is persisted between runs.",
)
@click.option(
    "--session-ttl",
    type=float,
    default=None,
    help="Seconds a stored session may be reused (default 600).",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    login_name: str | None,
    password: str | None,
    house_id: str | None,
    session_file: str | None,
    session_ttl: float | None,
    verbose: bool,
) -> None:
    """Nexiawatch command-line interface."""
    configure_logging(level=logging.DEBUG if verbose else logging.WARNING)
    if isinstance(ctx.obj, CLIState):
        return
    ctx.obj = CLIState(
        config_path=config_path,
        overrides={
            "login": login_name,
            "password": password,
            "house_id": house_id,
            "session_file": session_file,
            "session_ttl_seconds": session_ttl,
        },
    )


cli.add_command(login)
cli.add_command(status)
cli.add_command(set_temp)
cli.add_command(history)


if __name__ == "__main__":
    cli()
