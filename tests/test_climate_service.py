from __future__ import annotations

import pytest

from conftest import HOUSE_ID, FakeSession, climate_page, landing_page, portal_session
from nexiawatch.errors import EndpointMovedError, MarkupChangedError, NotFoundError, RequestError
from nexiawatch.infrastructure.http import StoredSession
from nexiawatch.services import ClimateService

CLIMATE = f"/houses/{HOUSE_ID}/climate"

SPEC_THERMOSTAT = [
    {
        "id": 1,
        "name": "Living Room",
        "operating_mode": "COOL",
        "zones": [{"temperature": 72, "cooling_setpoint": 75, "heating_setpoint": 68}],
    }
]


def _with_climate_responses(fake: FakeSession, *responses: tuple[int, str]) -> FakeSession:
    fake.replace("GET", CLIMATE)
    for status, text in responses:
        fake.add("GET", CLIMATE, text, status=status)
    return fake


def test_fetch_returns_decoded_thermostat(client) -> None:
    client.session = portal_session(thermostats=SPEC_THERMOSTAT)

    thermostats = ClimateService(client).fetch_thermostats()

    assert len(thermostats) == 1
    assert thermostats[0].temperature == 72
    assert thermostats[0].setpoint == 75


def test_fetch_with_selector_returns_single_thermostat(client) -> None:
    service = ClimateService(client)

    assert service.fetch_thermostats("upstairs").id == 2
    assert service.fetch_thermostats(3).name == "Basement"


def test_climate_page_is_fetched_without_following_redirects(client, fake) -> None:
    ClimateService(client).list_thermostats()

    assert fake.last("GET", CLIMATE).kwargs["allow_redirects"] is False


def test_stale_session_is_renewed_once_and_retried(client, fake) -> None:
    _with_climate_responses(fake, (302, ""), (200, climate_page()))

    thermostats = ClimateService(client).list_thermostats()

    assert len(thermostats) == 3
    assert fake.count("GET", CLIMATE) == 2
    assert fake.count("POST", "/session") == 2


def test_second_failure_surfaces_after_one_retry(client, fake) -> None:
    _with_climate_responses(fake, (500, "oops"))

    with pytest.raises(RequestError) as excinfo:
        ClimateService(client).list_thermostats()

    assert excinfo.value.status_code == 500
    assert fake.count("GET", CLIMATE) == 2
    assert fake.count("POST", "/session") == 2


def test_permanent_redirect_is_not_retried(client, fake) -> None:
    fake.replace("GET", CLIMATE)
    fake.add("GET", CLIMATE, status=301, headers={"Location": "/houses/888888/climate/v2"})

    with pytest.raises(EndpointMovedError, match="climate/v2"):
        ClimateService(client).list_thermostats()

    assert fake.count("GET", CLIMATE) == 1
    assert fake.count("POST", "/session") == 1


def test_page_without_embedded_data_is_a_markup_change(client, fake) -> None:
    _with_climate_responses(fake, (200, "<html>maintenance</html>"))

    with pytest.raises(MarkupChangedError):
        ClimateService(client).list_thermostats()
    assert fake.count("GET", CLIMATE) == 1


def test_derived_getters(client) -> None:
    service = ClimateService(client)

    assert service.get_temperature("Living Room") == 72
    assert service.get_setpoint("Living Room") == 75
    assert service.get_setpoint("Upstairs") == 67
    assert service.get_setpoint("Basement") is None


def test_unknown_selector(client) -> None:
    with pytest.raises(NotFoundError):
        ClimateService(client).get_thermostat("Garage")


def test_summarize(client) -> None:
    rows = ClimateService(client).summarize()

    assert [row.model_dump() for row in rows] == [
        {"position": 0, "id": 1, "name": "Living Room", "temperature": 72, "mode": "COOL", "setpoint": 75},
        {"position": 1, "id": 2, "name": "Upstairs", "temperature": 66, "mode": "HEAT", "setpoint": 67},
        {"position": 2, "id": 3, "name": "Basement", "temperature": 64, "mode": "AUTO", "setpoint": None},
    ]


def test_summarize_selected(client) -> None:
    rows = ClimateService(client).summarize("BASEMENT")

    assert [(row.position, row.name) for row in rows] == [(2, "Basement")]


def test_session_dropped_by_portal_within_ttl_is_replaced(client, fake, store, clock) -> None:
    store.save(StoredSession(csrf_token="old", cookies={"_nexia_session": "dead"}, obtained_at=clock.now))
    fake.replace("GET", "/")
    fake.add("GET", "/", status=302, headers={"Location": "/login"})
    fake.add("GET", "/", landing_page())

    thermostats = ClimateService(client).list_thermostats()

    assert len(thermostats) == 3
    assert fake.count("POST", "/session") == 1
    assert fake.count("GET", CLIMATE) == 1
