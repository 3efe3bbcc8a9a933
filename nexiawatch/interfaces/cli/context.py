"""Shared helpers for composing CLI command contexts.

Commands receive a :class:`CLIState` holding the global options. The client
and services are only built when a command needs them, so ``--help`` works
without any configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, TypeVar

import click
from rich.console import Console
from rich.markup import escape

from nexiawatch.app.config import NexiaSettings, load_settings
from nexiawatch.errors import NexiaError
from nexiawatch.infrastructure.http import NexiaHttpClient
from nexiawatch.services import ClimateService, HistoryService, SetpointService

from .auth import build_http_client

console = Console()

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class CLIContext:
    """Container for the client and the services built on it."""

    client: NexiaHttpClient
    climate: ClimateService
    setpoints: SetpointService
    history: HistoryService


def build_cli_context(settings: NexiaSettings) -> CLIContext:
    """Wire the HTTP client and services from validated settings."""

    client = build_http_client(settings)
    climate = ClimateService(client)
    return CLIContext(
        client=client,
        climate=climate,
        setpoints=SetpointService(client, climate),
        history=HistoryService(client, climate),
    )


@dataclass
class CLIState:
    """Global CLI options plus the lazily built command context."""

    config_path: str | None = None
    overrides: dict[str, Any] = field(default_factory=dict)
    prebuilt: CLIContext | None = None

    def context(self) -> CLIContext:
        if self.prebuilt is None:
            settings = load_settings(self.config_path, **self.overrides)
            self.prebuilt = build_cli_context(settings)
            ctx = click.get_current_context(silent=True)
            if ctx is not None:
                ctx.call_on_close(self.prebuilt.client.close)
        return self.prebuilt


def handle_errors(func: F) -> F:
    """Print Nexia errors in red and exit with status 1."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except NexiaError as exc:
            hint = " (retry later)" if exc.retryable else ""
            console.print(f"[red]{escape(str(exc))}{hint}[/red]")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]


pass_state = click.make_pass_decorator(CLIState, ensure=True)
