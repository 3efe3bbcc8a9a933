"""Persistence for the portal session blob.

A stored session is a small blob of cookies, the CSRF token and the time it
was obtained. Stores also report when the blob was last written so callers
can decide on freshness without reading it.
"""

from __future__ import annotations

import json
import os
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Callable, Protocol

from nexiawatch.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass
class StoredSession:
    """Represents persisted session state."""

    csrf_token: str | None
    cookies: dict[str, str] = field(default_factory=dict)
    obtained_at: float = 0.0


class SessionStore(Protocol):
    """Storage contract for the session blob. Implementations do no network I/O."""

    def load(self) -> StoredSession | None: ...

    def save(self, session: StoredSession) -> None: ...

    def clear(self) -> None: ...

    def last_modified(self) -> float | None: ...


class MemorySessionStore:
    """Keeps the session blob in memory for the lifetime of the process."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._session: StoredSession | None = None
        self._written_at: float | None = None

    def load(self) -> StoredSession | None:
        return self._session

    def save(self, session: StoredSession) -> None:
        self._session = session
        self._written_at = self._clock()

    def clear(self) -> None:
        self._session = None
        self._written_at = None

    def last_modified(self) -> float | None:
        return self._written_at


class FileSessionStore:
    """Stores the session blob as JSON on disk.

    The file modification time is the freshness reference, so repeated
    short-lived processes can share one login.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> StoredSession | None:
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            return StoredSession(
                csrf_token=payload.get("csrf_token"),
                cookies=dict(payload.get("cookies") or {}),
                obtained_at=float(payload.get("obtained_at", 0)),
            )
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, exc)
            return None

    def save(self, session: StoredSession) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # cookies grant account access
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            # O_CREAT leaves the mode of an existing file alone
            self.path.chmod(0o600)
            json.dump(asdict(session), f, indent=2)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

    def last_modified(self) -> float | None:
        try:
            return self.path.stat().st_mtime
        except FileNotFoundError:
            return None


__all__ = ["FileSessionStore", "MemorySessionStore", "SessionStore", "StoredSession"]
