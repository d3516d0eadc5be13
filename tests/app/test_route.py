import numpy as np
import pytest

from fleet_estimation.app.route import (
    RouteEstimator,
    generate_waypoints,
    route_features,
    route_recommendations,
)
from fleet_estimation.core import GeoPoint, Location, VoyageRequest
from fleet_estimation.core.errors import ValidationError


@pytest.fixture
def estimator():
    return RouteEstimator(rng=np.random.default_rng(0))


class TestNewYorkLondon:
    def test_estimate(self, estimator, voyage_request, now):
        route = estimator.estimate_route(voyage_request, now=now)
        assert 2960 < route.total_distance_nautical_miles < 3020
        assert 8 <= route.optimal_speed_knots <= 22
        assert len(route.waypoints) == 11
        assert route.confidence == 0.85
        assert route.weather_score == 3

    def test_time_and_fuel_follow_speed(self, estimator, voyage_request, now):
        route = estimator.estimate_route(voyage_request, now=now)
        assert np.isclose(
            route.estimated_time_hours,
            route.total_distance_nautical_miles / route.optimal_speed_knots,
        )
        expected_fuel = route.total_distance_nautical_miles * 15_000 * 0.0001 * 1.3
        assert np.isclose(route.estimated_fuel_consumption_tons, expected_fuel)

    def test_waypoints(self, estimator, voyage_request, now):
        route = estimator.estimate_route(voyage_request, now=now)
        first, last = route.waypoints[0], route.waypoints[-1]
        assert (first.latitude, first.longitude) == (40.7128, -74.006)
        assert (last.latitude, last.longitude) == (51.5074, -0.1278)
        assert first.timestamp == now
        assert last.timestamp == now + np.timedelta64(10, "h")
        assert all(w.speed_knots == 15 for w in route.waypoints)

    def test_serialization(self, estimator, voyage_request, now):
        route = estimator.estimate_route(voyage_request, now=now)
        data = route.to_dict()
        assert set(data) == {
            "totalDistanceNauticalMiles",
            "optimalSpeedKnots",
            "estimatedTimeHours",
            "estimatedFuelConsumption",
            "waypoints",
            "confidence",
            "recommendations",
        }
        assert data["waypoints"][0]["timestamp"] == "2025-06-01T00:00:00"
        assert route.data_frame.shape == (11, 4)
        assert route.line_string.coords[0] == (-74.006, 40.7128)


def test_repeated_estimates_share_deterministic_fields(estimator, voyage_request, now):
    """Sea state is drawn per call; distance, waypoints and confidence are not."""
    first = estimator.estimate_route(voyage_request, now=now)
    second = estimator.estimate_route(voyage_request, now=now)
    assert first.total_distance_nautical_miles == second.total_distance_nautical_miles
    assert first.waypoints == second.waypoints
    assert first.confidence == second.confidence
    assert first.weather_score == second.weather_score


def test_same_seed_reproduces_estimate(voyage_request, now):
    a = RouteEstimator(rng=np.random.default_rng(11)).estimate_route(voyage_request, now=now)
    b = RouteEstimator(rng=np.random.default_rng(11)).estimate_route(voyage_request, now=now)
    assert a == b


def test_sea_conditions_stay_in_market_range(estimator, voyage_request, now):
    for _ in range(20):
        route = estimator.estimate_route(voyage_request, now=now)
        assert 0 <= route.sea_conditions <= 3


def test_missing_coordinates_raise(estimator, ship, new_york):
    request = VoyageRequest(
        ship=ship,
        origin=new_york,
        destination=Location(name="Nowhere", point=None),
        cargo_weight_tons=10.0,
    )
    with pytest.raises(ValidationError):
        estimator.estimate_route(request)


def test_severe_weather_recommendations(estimator, voyage_request, stormy_forecast, now):
    request = VoyageRequest(
        ship=voyage_request.ship,
        origin=voyage_request.origin,
        destination=voyage_request.destination,
        cargo_weight_tons=voyage_request.cargo_weight_tons,
        weather_forecast=stormy_forecast,
    )
    route = estimator.estimate_route(request, now=now)
    assert route.weather_score == 7.5
    assert route.optimal_speed_knots < 12
    assert route.recommendations[0].startswith("Consider delaying departure")


class TestRecommendations:
    def test_default(self):
        assert route_recommendations(3, 1) == [
            "Optimal conditions for voyage - proceed as planned"
        ]

    def test_moderate_weather(self):
        recommendations = route_recommendations(6, 1)
        assert len(recommendations) == 2
        assert recommendations[0].startswith("Proceed with caution")

    def test_high_seas(self):
        recommendations = route_recommendations(8, 4)
        assert len(recommendations) == 4
        assert "Reduce speed in high sea conditions for safety" in recommendations


def test_route_features_are_clamped():
    features = route_features(
        distance_nm=12_000,
        cargo_tons=-5,
        weather_score=3,
        fuel_price=450,
        sea_conditions=1,
        traffic_density=2,
        port_congestion=1,
    )
    assert features.shape == (1, 8)
    assert features[0, 0] == 1.0
    assert features[0, 1] == 0.0
    assert np.isclose(features[0, 3], 0.6)
    assert np.isclose(features[0, 4], 0.9)


def test_generate_waypoints_hourly():
    waypoints = generate_waypoints(
        origin=GeoPoint(0, 0),
        destination=GeoPoint(10, 10),
        num_segments=5,
        time_start=np.datetime64("2024-01-01T00:00"),
    )
    assert len(waypoints) == 6
    assert waypoints[3].timestamp == np.datetime64("2024-01-01T03:00:00")
    assert waypoints[3].latitude == 6.0


def test_long_voyage_time_saturates(estimator, ship, new_york, now):
    """Distances beyond the model range keep the full distance but cap the time."""
    singapore = Location.from_coordinates("Singapore", 1.29, 103.85)
    request = VoyageRequest(
        ship=ship, origin=new_york, destination=singapore, cargo_weight_tons=15_000.0
    )
    route = estimator.estimate_route(request, now=now)
    assert route.total_distance_nautical_miles > 8000
    assert np.isclose(route.estimated_time_hours, 5000 / route.optimal_speed_knots)
    assert (
        route.estimated_time_hours
        < route.total_distance_nautical_miles / route.optimal_speed_knots
    )
