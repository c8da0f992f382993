import math

import numpy as np
import pytest

from place_resolver.utils.geo import (
    bounding_box,
    centroid,
    haversine_distance,
    is_valid_coordinate,
    is_within_radius,
    max_pairwise_distance,
    pairwise_distances,
    us_state_from_coords,
)


def test_haversine_is_zero_for_identical_points() -> None:
    assert haversine_distance(43.0, -77.0, 43.0, -77.0) == 0.0


def test_haversine_is_symmetric() -> None:
    forward = haversine_distance(43.0, -77.0, 42.5, -76.2)
    backward = haversine_distance(42.5, -76.2, 43.0, -77.0)

    assert forward == pytest.approx(backward)


def test_one_degree_of_latitude_is_about_111_km() -> None:
    distance = haversine_distance(43.0, -77.0, 44.0, -77.0)

    assert distance == pytest.approx(6_371_000.0 * math.pi / 180, abs=1.0)


def test_pairwise_distances_matches_scalar_haversine() -> None:
    lats = [43.0, 43.001, 42.99]
    lons = [-77.0, -77.002, -77.01]

    matrix = pairwise_distances(lats, lons)

    assert matrix.shape == (3, 3)
    assert np.allclose(np.diag(matrix), 0.0)
    assert np.allclose(matrix, matrix.T)
    assert matrix[0, 2] == pytest.approx(haversine_distance(lats[0], lons[0], lats[2], lons[2]))


def test_max_pairwise_distance_of_fewer_than_two_points_is_zero() -> None:
    assert max_pairwise_distance([], []) == 0.0
    assert max_pairwise_distance([43.0], [-77.0]) == 0.0


def test_max_pairwise_distance_is_the_diameter() -> None:
    lats = [43.0, 43.0003, 43.0006]
    lons = [-77.0, -77.0, -77.0]

    expected = haversine_distance(43.0, -77.0, 43.0006, -77.0)

    assert max_pairwise_distance(lats, lons) == pytest.approx(expected)


def test_is_within_radius_is_inclusive() -> None:
    distance = haversine_distance(43.0, -77.0, 43.0001, -77.0)

    assert is_within_radius(43.0, -77.0, 43.0001, -77.0, distance)
    assert not is_within_radius(43.0, -77.0, 43.0001, -77.0, distance - 0.01)


def test_bounding_box_contains_points_within_radius() -> None:
    box = bounding_box(43.0, -77.0, 100.0)

    assert box.min_lat < 43.0 < box.max_lat
    assert box.min_lon < -77.0 < box.max_lon
    # About 89 m north of the center.
    assert box.min_lat <= 43.0008 <= box.max_lat


def test_centroid_is_the_arithmetic_mean() -> None:
    lat, lon = centroid([(43.0, -77.0), (43.002, -77.004)])

    assert lat == pytest.approx(43.001)
    assert lon == pytest.approx(-77.002)


def test_centroid_of_no_points_raises() -> None:
    with pytest.raises(ValueError):
        centroid([])


@pytest.mark.parametrize(
    'lat, lon, expected',
    [
        (43.0, -77.0, True),
        (90.0, 180.0, True),
        (90.5, 0.0, False),
        (0.0, -180.5, False),
        (float('nan'), 0.0, False),
        (0.0, float('inf'), False),
        (True, 0.0, False),
        ('43', -77.0, False),
    ],
)
def test_is_valid_coordinate(lat, lon, expected) -> None:
    assert is_valid_coordinate(lat, lon) is expected


def test_us_state_lookup() -> None:
    assert us_state_from_coords(43.0, -77.0) == 'NY'
    assert us_state_from_coords(0.0, 0.0) is None
