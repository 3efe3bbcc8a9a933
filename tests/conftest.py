"""Shared fakes for exercising the client without network access."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

import pytest
from requests import Response
from requests.cookies import RequestsCookieJar

from nexiawatch.infrastructure.http import LoginCredentials, MemorySessionStore, NexiaHttpClient

HOUSE_ID = "888888"

LOGIN_PAGE = (
    '<form accept-charset="UTF-8" action="/session" method="post">'
    '<div style="margin:0;padding:0;display:inline">'
    '<input name="utf8" type="hidden" value="&#x2713;" />'
    '<input name="authenticity_token" type="hidden" value="login-token-123" /></div>'
    '<input id="login" name="login" type="text" />'
    "</form>"
)

THERMOSTATS = [
    {
        "id": 1,
        "name": "Living Room",
        "operating_mode": "COOL",
        "zones": [{"id": 101, "temperature": 72, "cooling_setpoint": 75, "heating_setpoint": 68}],
    },
    {
        "id": 2,
        "name": "Upstairs",
        "operating_mode": "HEAT",
        "zones": [{"id": 202, "temperature": 66, "cooling_setpoint": 78, "heating_setpoint": 67}],
    },
    {
        "id": 3,
        "name": "Basement",
        "operating_mode": "AUTO",
        "zones": [{"id": 303, "temperature": 64, "cooling_setpoint": 76, "heating_setpoint": 62}],
    },
]


def landing_page(house_id: str = HOUSE_ID, csrf: str | None = "csrf-abc") -> str:
    meta = f'<meta name="csrf-token" content="{csrf}" />' if csrf else ""
    return (
        f"<html><head>{meta}</head><body>"
        f"<script>window.Nexia.modes.houseId = {house_id};</script>"
        "</body></html>"
    )


def climate_page(thermostats: list[dict] | None = None, house_id: str = HOUSE_ID) -> str:
    data = json.dumps(THERMOSTATS if thermostats is None else thermostats)
    return (
        "<html><body><div id='climate'></div><script>"
        f"Nexia.XXL.run('{house_id}', {data});"
        "</script></body></html>"
    )


def make_response(
    text: str = "",
    status: int = 200,
    headers: dict | None = None,
) -> Response:
    resp = Response()
    resp._content = text.encode("utf-8")
    resp.status_code = status
    resp.encoding = "utf-8"
    if headers:
        resp.headers.update(headers)
    return resp


@dataclass
class Call:
    method: str
    path: str
    headers: dict[str, str]
    kwargs: dict[str, Any]


@dataclass
class _Route:
    response: Response | None = None
    error: Exception | None = None
    cookies: dict[str, str] = field(default_factory=dict)


class FakeSession:
    """Stands in for :class:`requests.Session` and replays canned responses.

    Each (method, path) has a queue; the last queued answer repeats.
    """

    def __init__(self) -> None:
        self.cookies = RequestsCookieJar()
        self.calls: list[Call] = []
        self.closed = False
        self._routes: dict[tuple[str, str], list[_Route]] = {}

    def add(
        self,
        method: str,
        path: str,
        text: str = "",
        status: int = 200,
        headers: dict | None = None,
        cookies: dict[str, str] | None = None,
        error: Exception | None = None,
    ) -> "FakeSession":
        route = _Route(
            response=None if error else make_response(text, status, headers),
            error=error,
            cookies=cookies or {},
        )
        self._routes.setdefault((method, path), []).append(route)
        return self

    def replace(self, method: str, path: str) -> "FakeSession":
        """Drop the queued answers for a route so a test can queue its own."""
        self._routes.pop((method, path), None)
        return self

    def request(self, method: str, url: str, headers: dict | None = None, **kwargs: Any) -> Response:
        path = urlsplit(url).path or "/"
        self.calls.append(Call(method, path, dict(headers or {}), kwargs))
        queue = self._routes.get((method, path))
        if not queue:
            raise AssertionError(f"Unexpected request {method} {path}")
        route = queue.pop(0) if len(queue) > 1 else queue[0]
        if route.error is not None:
            raise route.error
        for name, value in route.cookies.items():
            self.cookies.set(name, value)
        return route.response

    def count(self, method: str, path: str) -> int:
        return sum(1 for call in self.calls if call.method == method and call.path == path)

    def last(self, method: str, path: str) -> Call:
        return [call for call in self.calls if call.method == method and call.path == path][-1]

    def close(self) -> None:
        self.closed = True


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def portal_session(
    *,
    house_id: str = HOUSE_ID,
    thermostats: list[dict] | None = None,
) -> FakeSession:
    """A fake portal that accepts the login and serves the climate page."""

    return (
        FakeSession()
        .add("GET", "/login", LOGIN_PAGE)
        .add("POST", "/session", status=302, headers={"Location": "/"}, cookies={"_nexia_session": "s1"})
        .add("GET", "/", landing_page(house_id))
        .add("GET", f"/houses/{HOUSE_ID}/climate", climate_page(thermostats))
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake() -> FakeSession:
    return portal_session()


@pytest.fixture
def store(clock: FakeClock) -> MemorySessionStore:
    return MemorySessionStore(clock)


@pytest.fixture
def client(fake: FakeSession, store: MemorySessionStore, clock: FakeClock) -> NexiaHttpClient:
    return NexiaHttpClient(
        LoginCredentials(login="user@example.com", password="hunter2", house_id=HOUSE_ID),
        base_url="https://portal.example.com",
        store=store,
        session=fake,
        clock=clock,
    )
