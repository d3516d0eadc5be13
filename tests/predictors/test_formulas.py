import numpy as np
import pytest

from fleet_estimation.core.config import COMPONENT_TYPES, FUEL_SCALES, ROUTE_SCALES
from fleet_estimation.predictors.formulas import (
    adjusted_life_hours,
    failure_formula,
    fuel_consumption_tons,
    fuel_formula,
    maintenance_formula,
    maintenance_targets,
    route_formula,
    route_targets,
)
from fleet_estimation.predictors.synthetic import (
    failure_training_data,
    fuel_training_data,
    maintenance_training_data,
    route_training_data,
)


class TestRouteTargets:
    def test_calm_conditions(self):
        speed, time, fuel = route_targets(
            distance_nm=1500.0, cargo_tons=10_000.0, weather_score=0.0, sea_conditions=0.0
        )
        assert speed == 15.0
        assert time == 100.0
        assert fuel == pytest.approx(1500.0)

    def test_speed_is_clipped(self):
        speed, _, _ = route_targets(
            distance_nm=100.0, cargo_tons=1.0, weather_score=10.0, sea_conditions=10.0
        )
        assert speed == 8.0

    def test_formula_matches_targets(self):
        features = np.array([[0.5, 0.2, 0.3, 0.6, 0.9, 0.4, 0.1, 0.2]])
        speed, time, fuel = route_targets(
            distance_nm=0.5 * ROUTE_SCALES.distance_nm,
            cargo_tons=0.2 * ROUTE_SCALES.cargo_tons,
            weather_score=3.0,
            sea_conditions=2.0,
        )
        np.testing.assert_allclose(
            route_formula(features)[0],
            [speed / 25, time / 300, fuel / 1000],
        )


def test_fuel_formula_shape_and_scale():
    features = np.array([[0.5, 0.2, 0.375, 0.52, 0.3, 1 / 3, 0.8, 0.2, 1.0, 0.5]] * 4)
    result = fuel_formula(features)
    assert result.shape == (4, 1)
    expected = fuel_consumption_tons(
        distance_nm=0.375 * FUEL_SCALES.distance_nm,
        speed_knots=0.52 * FUEL_SCALES.speed_knots,
        engine_load=0.8,
        cargo_tons=0.2 * FUEL_SCALES.cargo_tons,
        capacity_tons=0.5 * FUEL_SCALES.capacity_tons,
        weather_impact=3.0,
        sea_conditions=2.0,
        ship_age_years=15.0,
        fuel_type_multiplier=1.0,
        route_complexity=1.0,
    )
    assert np.isclose(result[0, 0] * FUEL_SCALES.fuel_tons, expected)


def test_fuel_consumption_scales_with_fuel_type():
    kwargs = dict(
        distance_nm=1000.0,
        speed_knots=12.0,
        engine_load=0.8,
        cargo_tons=5000.0,
        capacity_tons=40_000.0,
        weather_impact=2.0,
        sea_conditions=1.0,
        ship_age_years=5.0,
        route_complexity=1.0,
    )
    diesel = fuel_consumption_tons(fuel_type_multiplier=1.0, **kwargs)
    electric = fuel_consumption_tons(fuel_type_multiplier=0.1, **kwargs)
    assert np.isclose(electric, 0.1 * diesel)


def test_fuel_consumption_zero_speed_is_finite():
    consumption = fuel_consumption_tons(
        distance_nm=1000.0,
        speed_knots=0.0,
        engine_load=0.8,
        cargo_tons=0.0,
        capacity_tons=0.0,
        weather_impact=0.0,
        sea_conditions=0.0,
        ship_age_years=0.0,
        fuel_type_multiplier=1.0,
        route_complexity=0.0,
    )
    assert np.isfinite(consumption)


class TestMaintenanceTargets:
    def test_adjusted_life_is_floored(self):
        assert adjusted_life_hours(
            lifespan_hours=8760.0,
            usage_intensity=1.0,
            operating_conditions=3.0,
            maintenance_quality=0.8,
            environmental_stress=3.0,
        ) == 1.0

    def test_risk_and_days_are_bounded(self):
        rng = np.random.default_rng(0)
        n = 500
        days, risk = maintenance_targets(
            component_index=rng.integers(0, 6, n),
            engine_hours=rng.uniform(0, 100_000, n),
            days_since_maintenance=rng.uniform(0, 730, n),
            usage_intensity=rng.uniform(0, 1, n),
            operating_conditions=rng.uniform(0, 10, n),
            maintenance_quality=rng.uniform(0, 1, n),
            environmental_stress=rng.uniform(0, 5, n),
        )
        assert np.all(days >= 1)
        assert np.all((risk >= 0) & (risk <= 1))

    def test_formula_decodes_component_index(self):
        """The normalized component index selects the component lifespan."""
        row = [0.04, 0.005, 0.5, 0.0, 0.6, 0.3, 0.8, 0.6, 0.7, 0.6, 0.4, 0.5]
        features = np.array([row[:3] + [i / 6] + row[4:] for i in range(6)])
        risk = maintenance_formula(features)[:, 1]
        # hull has the longest life, safety the shortest
        assert np.argmin(risk) == COMPONENT_TYPES.index("hull")
        assert np.argmax(risk) == COMPONENT_TYPES.index("safety")


def test_failure_formula_is_probability():
    rng = np.random.default_rng(1)
    features = rng.uniform(0, 1, (200, 8))
    probability = failure_formula(features)
    assert probability.shape == (200, 1)
    assert np.all((probability > 0) & (probability < 1))


def test_failure_formula_increases_with_engine_hours():
    low = np.array([[0.2, 0.01, 0.4, 0.7, 0.4, 0.5, 0.8, 0.6]])
    high = low.copy()
    high[0, 1] = 0.5
    assert failure_formula(high)[0, 0] > failure_formula(low)[0, 0]


@pytest.mark.parametrize(
    "generator, n_inputs, n_outputs",
    [
        (route_training_data, 8, 3),
        (fuel_training_data, 10, 1),
        (maintenance_training_data, 12, 2),
        (failure_training_data, 8, 1),
    ],
)
def test_training_data_shapes(generator, n_inputs, n_outputs):
    inputs, outputs = generator(size=64, rng=np.random.default_rng(3))
    assert inputs.shape == (64, n_inputs)
    assert outputs.shape == (64, n_outputs)
    assert np.all(np.isfinite(inputs)) and np.all(np.isfinite(outputs))


def test_failure_labels_are_binary():
    _, labels = failure_training_data(size=300, rng=np.random.default_rng(5))
    assert set(np.unique(labels)) <= {0.0, 1.0}


def test_training_data_is_reproducible():
    a = route_training_data(size=10, rng=np.random.default_rng(7))
    b = route_training_data(size=10, rng=np.random.default_rng(7))
    np.testing.assert_array_equal(a[0], b[0])
    np.testing.assert_array_equal(a[1], b[1])
