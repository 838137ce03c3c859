"""Global pytest fixtures & helpers.

Adds project root to path and provides fake routing/terrain providers so the
route editor can be exercised without network access.
"""
from __future__ import annotations

import os
import sys
import threading
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from elevation import ElevationAnnotator, TerrainProvider
from errors import ElevationError, RoutingError
from map_utils import FoliumOverlay
from routing import RouteEditor
from routing_providers import RoutingProvider


class FakeRouter(RoutingProvider):
    """Returns a densified path: each waypoint plus the midpoint to the next."""

    name = "Fake"
    max_waypoints = 25

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: List[List[Tuple[float, float]]] = []
        self.gates: Dict[Tuple[float, float], threading.Event] = {}

    def snap_to_road(self, path: Sequence[Tuple[float, float]]):
        self.calls.append(list(path))
        gate = self.gates.get(tuple(path[0]))
        if gate is not None:
            assert gate.wait(5), "gate never released"
        if self.fail:
            raise RoutingError("boom")
        return densify(path)


class FakeTerrain(TerrainProvider):
    """Elevation = latitude * 1000, with optional failing/unknown points."""

    name = "Fake"

    def __init__(self, failing: Optional[set] = None, unknown: Optional[set] = None):
        self.failing = failing or set()
        self.unknown = unknown or set()
        self.queries: List[Tuple[float, float]] = []
        self._lock = threading.Lock()

    def elevation_at(self, coord):
        with self._lock:
            self.queries.append(tuple(coord))
        if tuple(coord) in self.failing:
            raise ElevationError("no tile")
        if tuple(coord) in self.unknown:
            return None
        return coord[1] * 1000


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Stands in for requests.Session; records every call."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.requests = []

    def _send(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response

    def get(self, url, **kwargs):
        return self._send("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._send("POST", url, **kwargs)


def densify(path):
    out = []
    for a, b in zip(path, path[1:]):
        out.append((a[0], a[1]))
        out.append(((a[0] + b[0]) / 2, (a[1] + b[1]) / 2))
    out.append((path[-1][0], path[-1][1]))
    return out


@pytest.fixture
def router():
    return FakeRouter()


@pytest.fixture
def terrain():
    return FakeTerrain()


@pytest.fixture
def overlay():
    return FoliumOverlay()


@pytest.fixture
def editor(router, terrain, overlay):
    return RouteEditor(router, ElevationAnnotator(terrain), overlay)
