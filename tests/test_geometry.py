import math

import pytest

from config import EARTH_RADIUS_M
from shapes import circle_shape, heart_shape, zoom_factor
from utils import haversine_distance, path_length


@pytest.mark.parametrize(
    "a,b",
    [
        ((-74.0, 40.0), (-74.01, 40.01)),
        ((18.0686, 59.3293), (-0.1276, 51.5072)),
        ((179.9, 0.0), (-179.9, 0.0)),
        ((0.0, 89.9), (180.0, 89.9)),
    ],
)
def test_distance_is_symmetric(a, b):
    assert haversine_distance(a, b) == haversine_distance(b, a)


def test_distance_to_self_is_zero():
    assert haversine_distance((12.5, -33.2), (12.5, -33.2)) == 0


def test_one_degree_of_latitude():
    expected = EARTH_RADIUS_M * math.radians(1)
    assert haversine_distance((0.0, 0.0), (0.0, 1.0)) == pytest.approx(expected)


def test_antipodal_points_are_half_circumference():
    d = haversine_distance((0.0, 0.0), (180.0, 0.0))
    assert d == pytest.approx(math.pi * EARTH_RADIUS_M)
    assert not math.isnan(d)


def test_path_length_short_paths_are_zero():
    assert path_length([]) == 0
    assert path_length([(-74.0, 40.0)]) == 0


def test_path_length_sums_segments_and_ignores_duplicates():
    a, b, c = (-74.0, 40.0), (-74.01, 40.01), (-74.02, 40.0)
    expected = haversine_distance(a, b) + haversine_distance(b, c)
    assert path_length([a, b, b, c]) == pytest.approx(expected)


@pytest.mark.parametrize("zoom", [3, 10, 13, 15.5, 20])
def test_shapes_always_have_21_points(zoom):
    assert len(circle_shape((-74.0, 40.7), zoom)) == 21
    assert len(heart_shape((-74.0, 40.7), zoom, base_size=5)) == 21


def test_circle_is_closed_ring_with_expected_radius():
    center = (-74.0, 40.7)
    ring = circle_shape(center, 13, base_radius_km=1)

    assert ring[0] == pytest.approx(ring[-1])
    radius_lat = 1 / 110.54
    # Punkten vid 90 grader ligger rakt norr om centrum
    assert ring[5][1] - center[1] == pytest.approx(radius_lat)
    radius_lon = 1 / (111.32 * math.cos(math.radians(center[1])))
    assert ring[0][0] - center[0] == pytest.approx(radius_lon)


def test_circle_radius_halves_per_zoom_level():
    center = (10.0, 50.0)
    r13 = circle_shape(center, 13)[0][0] - center[0]
    r14 = circle_shape(center, 14)[0][0] - center[0]
    r12 = circle_shape(center, 12)[0][0] - center[0]
    assert r14 == pytest.approx(r13 / 2)
    assert r12 == pytest.approx(r13 * 2)
    assert zoom_factor(13) == 1


def test_heart_start_and_end_coincide():
    center = (-74.0, 40.7)
    heart = heart_shape(center, 13, base_size=0.01)

    assert heart[0] == pytest.approx(heart[-1])
    # t = 0: x = 0, y = 13 - 5 - 2 - 1 = 5
    assert heart[0][0] == pytest.approx(center[0])
    assert heart[0][1] == pytest.approx(center[1] + 5 * 0.01 / 16)


def test_heart_scales_with_zoom():
    center = (0.0, 0.0)
    top13 = heart_shape(center, 13)[0][1]
    top11 = heart_shape(center, 11)[0][1]
    assert top11 == pytest.approx(top13 * 4)
