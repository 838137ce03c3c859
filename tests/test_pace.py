from datetime import datetime, timedelta, timezone

import pytest

from config import PACE_FLOOR
from pace import elapsed_seconds, profile_rows, track_timestamps, variable_pace
from utils import haversine_distance

START = datetime(2024, 5, 1, 7, 0, tzinfo=timezone.utc)


def _naive_elapsed(path, paces):
    """Tid per punkt summerad från början för varje punkt."""
    out = []
    for i in range(len(path)):
        cumulative = 0.0
        for j in range(1, i + 1):
            segment_minutes = (haversine_distance(path[j - 1], path[j]) / 1000) * paces[j - 1]
            cumulative += segment_minutes * 60
        out.append(cumulative)
    return out


def test_variable_pace_short_paths_are_empty():
    assert variable_pace([], 5.5, 15) == []
    assert variable_pace([(0.0, 0.0)], 5.5, 15) == []


def test_variable_pace_is_deterministic():
    path = [(-74.0 + i * 0.001, 40.0) for i in range(50)]
    first = variable_pace(path, 5.5, 30)
    second = variable_pace(path, 5.5, 30)
    assert first == second
    assert len(first) == len(path)


def test_variable_pace_zero_variability_is_constant():
    path = [(-74.0, 40.0), (-74.01, 40.01)]
    assert variable_pace(path, 5.5, 0) == [5.5, 5.5]


def test_variable_pace_stays_within_amplitude():
    path = [(0.0, i * 0.001) for i in range(200)]
    paces = variable_pace(path, 6.0, 50)
    assert paces[0] == 6.0  # sin(0) = 0
    assert all(3.0 <= p <= 9.0 for p in paces)
    assert len(set(paces)) > 1


def test_variable_pace_never_goes_below_floor():
    path = [(0.0, i * 0.001) for i in range(200)]
    paces = variable_pace(path, 1.0, 1000)
    assert min(paces) == PACE_FLOOR


def test_elapsed_seconds_matches_cumulative_definition_exactly():
    path = [(-74.0 + i * 0.0013, 40.0 + (i % 7) * 0.0009) for i in range(120)]
    paces = variable_pace(path, 5.2, 25)
    assert elapsed_seconds(path, paces) == _naive_elapsed(path, paces)


def test_zero_distance_path_keeps_start_time():
    path = [(0.0, 0.0), (0.0, 0.0), (0.0, 0.0)]
    times = track_timestamps(path, START, variable_pace(path, 5.5, 15))
    assert times == [START, START, START]


def test_single_segment_duration():
    path = [(-74.0, 40.0), (-74.01, 40.01)]
    paces = variable_pace(path, 5.5, 0)
    offsets = elapsed_seconds(path, paces)

    distance = haversine_distance(path[0], path[1])
    assert offsets[0] == 0
    assert offsets[1] == pytest.approx(distance / 1000 * 5.5 * 60)

    times = track_timestamps(path, START, paces)
    assert times[0] == START
    assert times[1] - times[0] == timedelta(seconds=offsets[1])


def test_timestamps_are_non_decreasing():
    path = [(-74.0 + i * 0.002, 40.0 + (i % 3) * 0.001) for i in range(60)]
    times = track_timestamps(path, START, variable_pace(path, 4.0, 50))
    assert all(later >= earlier for earlier, later in zip(times, times[1:]))


def test_profile_rows_spread_distance_over_points():
    path = [(-74.0, 40.0), (-74.0, 40.01), (-74.0, 40.02)]
    rows = profile_rows(path, [10.0, 20.0, 15.0], 5.0, 0)

    total_km = (haversine_distance(path[0], path[1]) + haversine_distance(path[1], path[2])) / 1000
    assert [r["elevation"] for r in rows] == [10.0, 20.0, 15.0]
    assert [r["pace"] for r in rows] == [5.0, 5.0, 5.0]
    assert rows[0]["distance_km"] == 0
    assert rows[-1]["distance_km"] == pytest.approx(total_km)


def test_profile_rows_empty_for_stale_profile():
    path = [(-74.0, 40.0), (-74.0, 40.01), (-74.0, 40.02)]
    assert profile_rows(path, [10.0, 20.0], 5.0, 10) == []
    assert profile_rows(path[:1], [10.0], 5.0, 10) == []
