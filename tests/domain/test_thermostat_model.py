"""Tests for the Thermostat domain model and selector lookup."""

import pytest

from nexiawatch.domain.lookup import find_thermostat
from nexiawatch.domain.models import OperatingMode, Thermostat, Zone
from nexiawatch.errors import NotFoundError


class TestOperatingMode:
    """Tests for OperatingMode enum."""

    @pytest.mark.parametrize(
        "input_value,expected",
        [
            ("COOL", OperatingMode.COOL),
            ("cool", OperatingMode.COOL),
            (" HEAT ", OperatingMode.HEAT),
            ("AUTO", OperatingMode.AUTO),
            ("OFF", OperatingMode.OFF),
            ("EMERGENCY_HEAT", OperatingMode.UNKNOWN),
            ("", OperatingMode.UNKNOWN),
            (None, OperatingMode.UNKNOWN),
        ],
    )
    def test_from_string(self, input_value, expected):
        assert OperatingMode.from_string(input_value) == expected


class TestThermostat:
    """Tests for Thermostat derived fields."""

    def _thermostat(self, mode: str, zones=None) -> Thermostat:
        return Thermostat.from_dict(
            {
                "id": 7,
                "name": "Hall",
                "operating_mode": mode,
                "zones": [
                    {"id": 70, "temperature": 70, "cooling_setpoint": 76, "heating_setpoint": 66}
                ]
                if zones is None
                else zones,
            }
        )

    def test_cool_setpoint(self):
        thermostat = self._thermostat("COOL")
        assert thermostat.temperature == 70
        assert thermostat.setpoint == 76

    def test_heat_setpoint(self):
        assert self._thermostat("HEAT").setpoint == 66

    def test_other_modes_have_no_setpoint(self):
        thermostat = self._thermostat("AUTO")
        assert thermostat.setpoint is None
        assert thermostat.mode_label == "AUTO"

    def test_unrecognised_mode_keeps_portal_label(self):
        thermostat = self._thermostat("EMERGENCY_HEAT")
        assert thermostat.operating_mode == OperatingMode.UNKNOWN
        assert thermostat.mode_label == "EMERGENCY_HEAT"

    def test_only_first_zone_is_used(self):
        thermostat = self._thermostat(
            "COOL",
            zones=[
                {"id": 1, "temperature": 71, "cooling_setpoint": 74, "heating_setpoint": 60},
                {"id": 2, "temperature": 90, "cooling_setpoint": 99, "heating_setpoint": 90},
            ],
        )
        assert thermostat.primary_zone == Zone(
            id=1, temperature=71, cooling_setpoint=74, heating_setpoint=60
        )
        assert thermostat.temperature == 71

    def test_no_zones(self):
        thermostat = self._thermostat("COOL", zones=[])
        assert thermostat.primary_zone is None
        assert thermostat.temperature is None
        assert thermostat.setpoint is None


class TestFindThermostat:
    """Tests for resolving selectors."""

    @pytest.fixture
    def thermostats(self):
        return [
            Thermostat(id=1, name="LivingRoom"),
            Thermostat(id=2, name="Upstairs"),
            Thermostat(id=3, name="2"),
        ]

    def test_name_is_case_insensitive(self, thermostats):
        assert find_thermostat(thermostats, "LivingRoom") is find_thermostat(
            thermostats, "livingroom"
        )
        assert find_thermostat(thermostats, "UPSTAIRS").id == 2

    def test_identifier_match(self, thermostats):
        assert find_thermostat(thermostats, 1).name == "LivingRoom"
        assert find_thermostat(thermostats, "1").name == "LivingRoom"

    def test_identifier_wins_over_name(self, thermostats):
        assert find_thermostat(thermostats, "2").name == "Upstairs"

    def test_no_match(self, thermostats):
        with pytest.raises(NotFoundError, match="Garage"):
            find_thermostat(thermostats, "Garage")

    def test_blank_selector(self, thermostats):
        with pytest.raises(NotFoundError):
            find_thermostat(thermostats, "  ")
