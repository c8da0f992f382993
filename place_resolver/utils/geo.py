# place_resolver/utils/geo.py
"""
Great-circle distance and related coordinate helpers.

All distances use the haversine formula on a spherical earth with the mean
radius of 6,371 km. The scalar `haversine_distance` is used by the pairwise
matcher; `pairwise_distances` vectorizes the same formula with NumPy for the
cluster diameter checks, where every prospective member is compared against
every other.
"""

import logging
import math
from typing import NamedTuple, Optional, Sequence, Tuple

import numpy as np

# Set up a logger for this module.
logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6_371_000.0

# Approximate length of one degree of latitude, in meters.
METERS_PER_DEGREE = 111_320.0


class BoundingBox(NamedTuple):
    """Axis-aligned latitude/longitude box."""

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float


class StateBounds(NamedTuple):
    name: str
    abbr: str
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float


# Approximate bounding boxes for US states. Where boxes overlap, the smaller
# and more specific state is listed first and wins the lookup.
US_STATE_BOUNDS: Tuple[StateBounds, ...] = (
    # New England
    StateBounds('Rhode Island', 'RI', 41.1, 42.02, -71.9, -71.1),
    StateBounds('Connecticut', 'CT', 40.95, 42.05, -73.73, -71.78),
    StateBounds('Massachusetts', 'MA', 41.2, 42.9, -73.5, -69.9),
    StateBounds('New Hampshire', 'NH', 42.7, 45.3, -72.6, -70.6),
    StateBounds('Vermont', 'VT', 42.7, 45.02, -73.45, -71.5),
    StateBounds('Maine', 'ME', 43.0, 47.46, -71.1, -66.9),
    # Mid-Atlantic
    StateBounds('Delaware', 'DE', 38.45, 39.84, -75.79, -74.98),
    StateBounds('New Jersey', 'NJ', 38.9, 41.36, -75.57, -73.9),
    StateBounds('Maryland', 'MD', 37.9, 39.72, -79.49, -75.05),
    StateBounds('District of Columbia', 'DC', 38.8, 39.0, -77.12, -76.91),
    StateBounds('Pennsylvania', 'PA', 39.72, 42.27, -80.52, -74.69),
    StateBounds('New York', 'NY', 40.5, 45.02, -79.76, -71.86),
    # Southeast
    StateBounds('West Virginia', 'WV', 37.2, 40.64, -82.64, -77.72),
    StateBounds('Virginia', 'VA', 36.54, 39.47, -83.68, -75.24),
    StateBounds('North Carolina', 'NC', 33.84, 36.59, -84.32, -75.46),
    StateBounds('South Carolina', 'SC', 32.03, 35.22, -83.35, -78.54),
    StateBounds('Georgia', 'GA', 30.36, 35.0, -85.61, -80.84),
    StateBounds('Florida', 'FL', 24.4, 31.0, -87.63, -80.03),
    StateBounds('Alabama', 'AL', 30.22, 35.01, -88.47, -84.89),
    StateBounds('Mississippi', 'MS', 30.17, 35.0, -91.66, -88.1),
    StateBounds('Louisiana', 'LA', 28.93, 33.02, -94.04, -88.82),
    StateBounds('Tennessee', 'TN', 34.98, 36.68, -90.31, -81.65),
    StateBounds('Kentucky', 'KY', 36.5, 39.15, -89.57, -81.96),
    # Midwest
    StateBounds('Ohio', 'OH', 38.4, 42.0, -84.82, -80.52),
    StateBounds('Indiana', 'IN', 37.77, 41.76, -88.1, -84.78),
    StateBounds('Michigan', 'MI', 41.7, 48.3, -90.42, -82.42),
    StateBounds('Illinois', 'IL', 36.97, 42.51, -91.51, -87.02),
    StateBounds('Wisconsin', 'WI', 42.49, 47.08, -92.89, -86.25),
    StateBounds('Minnesota', 'MN', 43.5, 49.38, -97.24, -89.49),
    StateBounds('Iowa', 'IA', 40.38, 43.5, -96.64, -90.14),
    StateBounds('Missouri', 'MO', 35.99, 40.61, -95.77, -89.1),
    StateBounds('Arkansas', 'AR', 33.0, 36.5, -94.62, -89.64),
    # Great Plains
    StateBounds('North Dakota', 'ND', 45.94, 49.0, -104.05, -96.55),
    StateBounds('South Dakota', 'SD', 42.48, 45.95, -104.06, -96.44),
    StateBounds('Nebraska', 'NE', 40.0, 43.0, -104.05, -95.31),
    StateBounds('Kansas', 'KS', 36.99, 40.0, -102.05, -94.59),
    StateBounds('Oklahoma', 'OK', 33.62, 37.0, -103.0, -94.43),
    StateBounds('Texas', 'TX', 25.84, 36.5, -106.65, -93.51),
    # Mountain West
    StateBounds('Montana', 'MT', 44.36, 49.0, -116.05, -104.04),
    StateBounds('Wyoming', 'WY', 40.99, 45.01, -111.06, -104.05),
    StateBounds('Colorado', 'CO', 36.99, 41.0, -109.06, -102.04),
    StateBounds('New Mexico', 'NM', 31.33, 37.0, -109.05, -103.0),
    StateBounds('Idaho', 'ID', 41.99, 49.0, -117.24, -111.04),
    StateBounds('Utah', 'UT', 36.99, 42.0, -114.05, -109.04),
    StateBounds('Arizona', 'AZ', 31.33, 37.0, -114.82, -109.04),
    StateBounds('Nevada', 'NV', 35.0, 42.0, -120.0, -114.04),
    # Pacific West
    StateBounds('Washington', 'WA', 45.54, 49.0, -124.85, -116.92),
    StateBounds('Oregon', 'OR', 41.99, 46.3, -124.57, -116.46),
    StateBounds('California', 'CA', 32.53, 42.01, -124.42, -114.13),
    # Non-contiguous
    StateBounds('Alaska', 'AK', 51.2, 71.5, -179.15, -129.98),
    StateBounds('Hawaii', 'HI', 18.91, 22.24, -160.25, -154.8),
)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculates the great-circle distance between two points in meters.

    Returns exactly 0.0 for identical points and is symmetric in its arguments.

    Args:
        lat1: Latitude of the first point in decimal degrees.
        lon1: Longitude of the first point in decimal degrees.
        lat2: Latitude of the second point in decimal degrees.
        lon2: Longitude of the second point in decimal degrees.

    Returns:
        The distance in meters.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def pairwise_distances(latitudes: Sequence[float], longitudes: Sequence[float]) -> np.ndarray:
    """
    Computes the full k x k matrix of great-circle distances in meters.

    Args:
        latitudes: Latitudes of the k points.
        longitudes: Longitudes of the k points, in the same order.

    Returns:
        A symmetric float64 array with zeros on the diagonal.
    """
    lat = np.radians(np.asarray(latitudes, dtype=np.float64))
    lon = np.radians(np.asarray(longitudes, dtype=np.float64))

    delta_phi = lat[np.newaxis, :] - lat[:, np.newaxis]
    delta_lambda = lon[np.newaxis, :] - lon[:, np.newaxis]
    cos_lat = np.cos(lat)

    a = (
        np.sin(delta_phi / 2) ** 2
        + np.outer(cos_lat, cos_lat) * np.sin(delta_lambda / 2) ** 2
    )
    # Rounding can push `a` a hair outside [0, 1] for antipodal points.
    a = np.clip(a, 0.0, 1.0)
    return EARTH_RADIUS_M * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def max_pairwise_distance(latitudes: Sequence[float], longitudes: Sequence[float]) -> float:
    """Returns the diameter of a point set: the largest pairwise distance in meters."""
    if len(latitudes) < 2:
        return 0.0
    return float(pairwise_distances(latitudes, longitudes).max())


def is_within_radius(
    lat1: float, lon1: float, lat2: float, lon2: float, radius_m: float
) -> bool:
    """Checks whether two points are at most `radius_m` meters apart."""
    return haversine_distance(lat1, lon1, lat2, lon2) <= radius_m


def bounding_box(lat: float, lon: float, radius_m: float) -> BoundingBox:
    """
    Returns a box that contains every point within `radius_m` of the center.

    Useful as a cheap pre-filter before exact haversine checks. The longitude
    span widens with latitude as meridians converge.
    """
    lat_delta = radius_m / METERS_PER_DEGREE
    lon_delta = radius_m / (METERS_PER_DEGREE * math.cos(math.radians(lat)))
    return BoundingBox(
        min_lat=lat - lat_delta,
        max_lat=lat + lat_delta,
        min_lon=lon - lon_delta,
        max_lon=lon + lon_delta,
    )


def centroid(points: Sequence[Tuple[float, float]]) -> Tuple[float, float]:
    """
    Computes the arithmetic mean of a sequence of (latitude, longitude) pairs.

    Raises:
        ValueError: If `points` is empty.
    """
    if len(points) == 0:
        raise ValueError('Cannot calculate the centroid of an empty set of points.')

    coords = np.asarray(points, dtype=np.float64)
    mean_lat, mean_lon = coords.mean(axis=0)
    return float(mean_lat), float(mean_lon)


def is_valid_coordinate(lat: float, lon: float) -> bool:
    """Checks that a coordinate pair is numeric, finite and within range."""
    if isinstance(lat, bool) or isinstance(lon, bool):
        return False
    if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
        return False
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def us_state_from_coords(lat: float, lon: float) -> Optional[str]:
    """
    Looks up the two-letter US state code for a coordinate.

    This is a bounding-box approximation, so points near a state border may
    resolve to the neighbor listed first.

    Returns:
        The state abbreviation (e.g. 'NY'), or None outside every box.
    """
    for state in US_STATE_BOUNDS:
        if state.min_lat <= lat <= state.max_lat and state.min_lon <= lon <= state.max_lon:
            return state.abbr
    return None
