import numpy as np
import pytest

from fleet_estimation.core.entities import (
    Location,
    ShipProfile,
    UsageTelemetry,
    VoyageRequest,
    as_datetime64,
    days_between,
    year_of,
)
from fleet_estimation.core.errors import ValidationError


def test_ship_defaults():
    ship = ShipProfile(ship_id="S1")
    assert ship.effective_capacity_tons == 40_000.0
    assert ship.age_years(np.datetime64("2025-03-01")) == 15


def test_ship_age():
    ship = ShipProfile(ship_id="S1", year_built=2021)
    assert ship.age_years(np.datetime64("2025-12-31T23:59:59")) == 4


def test_year_of_and_days_between():
    assert year_of(np.datetime64("1999-12-31T12:00:00")) == 1999
    assert days_between(
        np.datetime64("2025-01-01T00:00:00"), np.datetime64("2025-01-02T12:00:00")
    ) == pytest.approx(1.5)


class TestVoyageRequest:
    def test_departure_time_is_parsed(self, ship, new_york, london):
        request = VoyageRequest(
            ship=ship,
            origin=new_york,
            destination=london,
            cargo_weight_tons=100.0,
            departure_time="2024-01-01T06:00",
        )
        assert request.departure_time == np.datetime64("2024-01-01T06:00:00")
        assert request.weather_forecast == ()

    def test_missing_destination(self, ship, new_york):
        with pytest.raises(ValidationError):
            VoyageRequest(
                ship=ship, origin=new_york, destination=None, cargo_weight_tons=1.0
            )

    @pytest.mark.parametrize("cargo", [None, -1.0, np.inf])
    def test_invalid_cargo(self, ship, new_york, london, cargo):
        with pytest.raises(ValidationError):
            VoyageRequest(
                ship=ship, origin=new_york, destination=london, cargo_weight_tons=cargo
            )


def test_location_from_coordinates():
    location = Location.from_coordinates("Rotterdam", 51.9, 4.5)
    assert location.point.latitude == 51.9
    with pytest.raises(ValidationError):
        Location.from_coordinates("Nowhere", 120.0, 0.0)


class TestUsageTelemetry:
    def test_fields_present(self):
        assert UsageTelemetry().fields_present == 0
        telemetry = UsageTelemetry(
            engine_hours=1000.0, complex_routes=False, last_maintenance_date="2025-01-01"
        )
        assert telemetry.fields_present == 3

    def test_last_maintenance_date_is_datetime64(self):
        telemetry = UsageTelemetry(last_maintenance_date="2025-01-01")
        assert telemetry.last_maintenance_date == np.datetime64("2025-01-01T00:00:00")

    def test_data_frame(self):
        frame = UsageTelemetry(engine_hours=10.0).data_frame
        assert len(frame) == 1
        assert frame.loc[0, "engine_hours"] == 10.0


class TestMalformedInput:
    def test_bad_departure_time(self, ship, new_york, london):
        with pytest.raises(ValidationError, match="Invalid date"):
            VoyageRequest(
                ship=ship,
                origin=new_york,
                destination=london,
                cargo_weight_tons=100.0,
                departure_time="not-a-date",
            )

    def test_bad_last_maintenance_date(self):
        with pytest.raises(ValidationError):
            UsageTelemetry(last_maintenance_date="yesterday-ish")

    def test_non_numeric_cargo(self, ship, new_york, london):
        with pytest.raises(ValidationError, match="Invalid cargo weight"):
            VoyageRequest(
                ship=ship, origin=new_york, destination=london, cargo_weight_tons="abc"
            )

    def test_numeric_string_cargo_is_coerced(self, ship, new_york, london):
        request = VoyageRequest(
            ship=ship, origin=new_york, destination=london, cargo_weight_tons="2500"
        )
        assert request.cargo_weight_tons == 2500.0


def test_as_datetime64():
    assert as_datetime64(None) is None
    assert as_datetime64("2025-01-01") == np.datetime64("2025-01-01T00:00:00")
    with pytest.raises(ValidationError):
        as_datetime64("garbage")
