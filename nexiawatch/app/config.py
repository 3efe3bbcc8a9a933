"""Configuration utilities for Nexiawatch.

Settings come from three places, lowest precedence first: a JSON file,
``NEXIA_*`` environment variables and explicit overrides (typically CLI
options). The merged values are validated into :class:`NexiaSettings`.
"""

from __future__ import annotations

import hashlib
import json
import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from nexiawatch.errors import ConfigurationError
from nexiawatch.infrastructure.http import (
    DEFAULT_BASE_URL,
    DEFAULT_SESSION_TTL_SECONDS,
    LoginCredentials,
)
from nexiawatch.infrastructure.http.client import DEFAULT_CONNECT_TIMEOUT

ENV_PREFIX = "NEXIA_"
DEFAULT_SESSION_DIR = Path.home() / ".nexiawatch"


def default_session_file(login: str, house_id: str) -> Path:
    """Return the session blob path for one login and house pairing."""

    digest = hashlib.sha1(login.encode("utf-8")).hexdigest()[:8]
    house = re.sub(r"[^A-Za-z0-9_-]", "_", house_id)
    return DEFAULT_SESSION_DIR / f"session-{house}-{digest}.json"


class NexiaSettings(BaseModel):
    """Validated client settings."""

    model_config = ConfigDict(extra="ignore")

    login: str
    password: str
    house_id: str
    base_url: str = DEFAULT_BASE_URL
    # unset means derived from login and house id; explicit None keeps it in memory
    session_file: Path | None = None
    session_ttl_seconds: float = DEFAULT_SESSION_TTL_SECONDS
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float | None = None

    @field_validator("house_id", mode="before")
    @classmethod
    def _house_id_as_text(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value.strip() if isinstance(value, str) else value

    @field_validator("login", "password", "house_id")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("session_ttl_seconds", "connect_timeout")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @model_validator(mode="after")
    def _derive_session_file(self) -> "NexiaSettings":
        if "session_file" not in self.model_fields_set:
            self.session_file = default_session_file(self.login, self.house_id)
        return self

    @property
    def credentials(self) -> LoginCredentials:
        return LoginCredentials(
            login=self.login, password=self.password, house_id=self.house_id
        )


def load_config(path: Path | str | None) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file. ``None`` or a missing
            file yields an empty dictionary.

    Returns:
        A dictionary of configuration values.
    """
    if path is None:
        return {}
    config_path = Path(path).expanduser()
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Cannot read config file {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a JSON object.")
    return data


def settings_from_env(environ: Mapping[str, str] | None = None) -> Dict[str, str]:
    """Collect ``NEXIA_*`` variables as lower-case setting names."""

    env = os.environ if environ is None else environ
    return {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in env.items()
        if key.startswith(ENV_PREFIX) and value != ""
    }


def load_settings(
    config_path: Path | str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> NexiaSettings:
    """Merge file, environment and explicit values and validate them.

    Raises:
        ConfigurationError: If the merged settings are incomplete or invalid.
    """
    merged: Dict[str, Any] = {}
    merged.update(load_config(config_path))
    merged.update(settings_from_env(environ))
    merged.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return NexiaSettings.model_validate(merged)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid Nexia settings: {problems}") from exc


__all__ = [
    "DEFAULT_SESSION_DIR",
    "ENV_PREFIX",
    "NexiaSettings",
    "default_session_file",
    "load_config",
    "load_settings",
    "settings_from_env",
]
