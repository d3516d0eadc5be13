"""
Fleet estimation package.

Three-layer architecture:
- core: Value types, constant tables, normalization, weather scores, geodesics
- predictors: Closed-form formulas, synthetic training data, trainable perceptrons
- app: Route, fuel and maintenance estimators, voyage planning, CLI

Examples
--------
>>> from fleet_estimation.core import GeoPoint, Location, ShipProfile, VoyageRequest
>>> from fleet_estimation.app import EstimatorContext, plan_voyage
"""

__version__ = "2025dev"
