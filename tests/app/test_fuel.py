import numpy as np
import pytest

from fleet_estimation.app.fuel import (
    FuelEstimator,
    efficiency_recommendations,
    engine_load,
    fuel_confidence,
    fuel_efficiency,
    influencing_factors,
    route_complexity,
)
from fleet_estimation.app.route import RouteEstimate
from fleet_estimation.core import Location, ShipProfile, VoyageRequest
from fleet_estimation.core.config import ENGINE_TABLES


def make_route(distance=3000.0, speed=13.0):
    return RouteEstimate(
        total_distance_nautical_miles=distance,
        optimal_speed_knots=speed,
        estimated_time_hours=distance / speed if speed else 0.0,
        estimated_fuel_consumption_tons=0.0,
        waypoints=(),
        confidence=0.85,
        recommendations=(),
    )


@pytest.fixture
def estimator():
    return FuelEstimator()


def test_engine_load():
    assert np.isclose(engine_load(15_000, 40_000, 13), 0.6 + 0.075 + 0.13)
    assert engine_load(80_000, 40_000, 25) == 1.0
    assert np.isclose(engine_load(100, 0, 10), 0.7)


class TestRouteComplexity:
    def test_open_ocean(self, new_york, london):
        assert route_complexity(new_york, london) == 1

    def test_named_regions(self):
        origin = Location.from_coordinates("Port Said, Mediterranean", 31.26, 32.3)
        destination = Location.from_coordinates("Gdansk, Baltic", 54.35, 18.65)
        assert route_complexity(origin, destination) == 3

    def test_long_span(self):
        origin = Location.from_coordinates("Singapore", 1.29, 103.85)
        destination = Location.from_coordinates("Panama", 8.98, -79.52)
        assert route_complexity(origin, destination) == 3

    def test_capped(self):
        origin = Location.from_coordinates("Malacca Strait", 2.0, 101.0)
        destination = Location.from_coordinates("Persian Gulf", 26.0, -79.0)
        assert route_complexity(origin, destination) == 5


def test_fuel_efficiency_degenerate_cases():
    assert fuel_efficiency(0.0, 1000.0, 500.0) == 0.0
    assert fuel_efficiency(10.0, 0.0, 500.0) == 0.0
    assert fuel_efficiency(10.0, 1000.0, 0.0) == 0.0
    assert fuel_efficiency(10.0, 1000.0, 500.0) == 50_000.0


class TestConfidence:
    def test_baseline(self):
        assert fuel_confidence(3, 1000, 10) == 0.8

    def test_adjustments(self):
        assert np.isclose(fuel_confidence(8, 1000, 10), 0.7)
        assert np.isclose(fuel_confidence(9.5, 1000, 10), 0.6)
        assert np.isclose(fuel_confidence(3, 20, 10), 0.7)
        assert np.isclose(fuel_confidence(3, 6000, 2), 0.75)

    def test_floor(self):
        assert np.isclose(fuel_confidence(10, 10, 20), 0.5)

    def test_bounds(self):
        for weather in (0, 5, 8, 10):
            for distance in (10, 1000, 9000):
                for age in (0, 10):
                    assert 0.5 <= fuel_confidence(weather, distance, age) <= 0.95


def test_influencing_factors():
    assert influencing_factors(1, 1, 0.7) == ["Excellent conditions (-5% consumption)"]
    assert influencing_factors(7, 5, 0.95) == [
        "High wind conditions (+15% consumption)",
        "Rough seas (+10% consumption)",
        "High engine load (+8% consumption)",
    ]


def test_efficiency_recommendations():
    assert len(efficiency_recommendations(10, 7)) == 4
    assert efficiency_recommendations(100, 1) == [
        "Excellent efficiency - maintain current parameters"
    ]
    assert efficiency_recommendations(60, 1) == []


class TestEstimateFuel:
    def test_diesel(self, estimator, ship, voyage_request, now):
        fuel = estimator.estimate_fuel(ship, voyage_request, make_route(), now=now)
        assert fuel.consumption_tons > 0
        assert fuel.fuel_type_multiplier == 1.0
        assert fuel.route_complexity == 1
        assert fuel.weather_impact == 3
        assert fuel.sea_conditions == 2
        assert fuel.cost_estimate == fuel.consumption_tons * 650
        assert fuel.emissions_estimate_tons_co2 == fuel.consumption_tons * 3.2
        assert fuel.confidence == 0.8
        assert np.isclose(
            fuel.efficiency_score, 3000.0 * 15_000 / fuel.consumption_tons
        )

    def test_electric(self, estimator, voyage_request, now):
        ship = ShipProfile(ship_id="E1", engine_type="electric", year_built=2023)
        fuel = estimator.estimate_fuel(ship, voyage_request, make_route(), now=now)
        tables = ENGINE_TABLES["electric"]
        assert fuel.fuel_type_multiplier == tables.fuel_type_multiplier == 0.1
        assert tables.co2_per_ton_fuel == 0.5
        assert tables.fuel_price_per_ton == 100
        assert fuel.emissions_estimate_tons_co2 == fuel.consumption_tons * 0.5
        assert fuel.cost_estimate == fuel.consumption_tons * 100
        assert np.isclose(fuel.confidence, 0.85)

    def test_electric_burns_a_tenth_of_diesel(self, estimator, voyage_request, now):
        diesel = ShipProfile(ship_id="D", engine_type="diesel", year_built=2015)
        electric = ShipProfile(ship_id="E", engine_type="electric", year_built=2015)
        a = estimator.estimate_fuel(diesel, voyage_request, make_route(), now=now)
        b = estimator.estimate_fuel(electric, voyage_request, make_route(), now=now)
        assert np.isclose(b.consumption_tons, 0.1 * a.consumption_tons)

    def test_unknown_engine_type_uses_default_tables(self, estimator, voyage_request, now):
        ship = ShipProfile(ship_id="X", engine_type="steam")
        fuel = estimator.estimate_fuel(ship, voyage_request, make_route(), now=now)
        assert fuel.cost_estimate == fuel.consumption_tons * 500
        assert fuel.emissions_estimate_tons_co2 == fuel.consumption_tons * 3.0

    def test_zero_speed_falls_back_to_nominal(self, estimator, ship, voyage_request, now):
        a = estimator.estimate_fuel(ship, voyage_request, make_route(speed=0.0), now=now)
        b = estimator.estimate_fuel(ship, voyage_request, make_route(speed=15.0), now=now)
        assert a.consumption_tons == b.consumption_tons

    def test_empty_cargo_has_zero_efficiency(self, estimator, ship, new_york, london, now):
        request = VoyageRequest(
            ship=ship, origin=new_york, destination=london, cargo_weight_tons=0.0
        )
        fuel = estimator.estimate_fuel(ship, request, make_route(), now=now)
        assert fuel.efficiency_score == 0.0

    def test_idempotent(self, estimator, ship, voyage_request, now):
        route = make_route()
        assert estimator.estimate_fuel(
            ship, voyage_request, route, now=now
        ) == estimator.estimate_fuel(ship, voyage_request, route, now=now)

    def test_to_dict(self, estimator, ship, voyage_request, now):
        data = estimator.estimate_fuel(ship, voyage_request, make_route(), now=now).to_dict()
        assert set(data) == {
            "consumptionTons",
            "efficiencyScore",
            "costEstimate",
            "emissionsEstimateTonsCO2",
            "confidence",
            "influencingFactors",
            "recommendations",
        }
