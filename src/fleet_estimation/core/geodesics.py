import numpy as np

from .config import EARTH_RADIUS_NAUTICAL_MILES
from .entities import GeoPoint
from .errors import ValidationError


def _require_point(point, name: str) -> GeoPoint:
    if not isinstance(point, GeoPoint):
        raise ValidationError(f"Missing or invalid {name} coordinates: {point!r}")
    return point


def get_distance_nautical_miles(
    start: GeoPoint = None,
    end: GeoPoint = None,
    radius_nm: float = EARTH_RADIUS_NAUTICAL_MILES,
) -> float:
    """Great-circle distance using the haversine formula.

    Parameters
    ----------
    start : GeoPoint
        Starting position
    end : GeoPoint
        Ending position
    radius_nm : float, default=3440.065
        Mean earth radius in nautical miles

    Returns
    -------
    float
        Distance in nautical miles

    Raises
    ------
    ValidationError
        If either point is missing
    """
    start = _require_point(start, "start")
    end = _require_point(end, "end")
    lat1, lon1, lat2, lon2 = np.radians(
        [start.latitude, start.longitude, end.latitude, end.longitude]
    )
    a = (
        np.sin((lat2 - lat1) / 2) ** 2
        + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2) ** 2
    )
    # clip guards round-off slightly above 1 for antipodal points
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(np.clip(1 - a, 0.0, None)))
    return float(radius_nm * c)


def interpolate_linear(
    start: GeoPoint = None,
    end: GeoPoint = None,
    num_segments: int = 10,
    decimals: int = 6,
) -> tuple:
    """Evenly spaced points on the straight lat/lon line (not a geodesic).

    Parameters
    ----------
    start : GeoPoint
        First point
    end : GeoPoint
        Last point
    num_segments : int, default=10
        Number of segments; num_segments + 1 points are returned
    decimals : int, default=6
        Rounding of the returned coordinates

    Returns
    -------
    tuple of np.ndarray
        (latitudes, longitudes)
    """
    start = _require_point(start, "start")
    end = _require_point(end, "end")
    ratio = np.linspace(0.0, 1.0, num_segments + 1)
    lat = start.latitude + (end.latitude - start.latitude) * ratio
    lon = start.longitude + (end.longitude - start.longitude) * ratio
    # linspace ends on ratio 1.0 but the product may still be off by an ulp
    lat[-1], lon[-1] = end.latitude, end.longitude
    return np.round(lat, decimals), np.round(lon, decimals)


def coordinate_delta_degrees(start: GeoPoint = None, end: GeoPoint = None) -> float:
    """Sum of absolute latitude and longitude differences in degrees."""
    start = _require_point(start, "start")
    end = _require_point(end, "end")
    return abs(end.latitude - start.latitude) + abs(end.longitude - start.longitude)
