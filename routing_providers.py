"""
Routing-providers för vägjustering: Mapbox Directions och ORS
"""

import logging
from typing import Any, Optional, Sequence

import requests

from config import (
    MAPBOX_BASE_URL,
    MAPBOX_MAX_WAYPOINTS,
    ORS_BASE_URL,
    ORS_MAX_WAYPOINTS,
    REQUEST_TIMEOUT,
)
from errors import (
    MalformedRouteResponseError,
    RouteNotFoundError,
    RoutingError,
    TooManyWaypointsError,
)
from models import Coordinate, Path

LOGGER = logging.getLogger(__name__)


def decode_coordinates(raw: Any) -> Path:
    """
    Validera en GeoJSON-koordinatlista

    Args:
        raw: Värdet under geometry.coordinates

    Returns:
        Lista med (lon, lat), eventuell höjd tas bort

    Raises:
        MalformedRouteResponseError: om listan saknas eller har fel form
    """
    if not isinstance(raw, list) or len(raw) < 2:
        raise MalformedRouteResponseError("geometry.coordinates saknas eller är för kort")

    path = []
    for coord in raw:
        if not isinstance(coord, (list, tuple)) or len(coord) < 2:
            raise MalformedRouteResponseError(f"Ogiltig koordinat: {coord!r}")
        lon, lat = coord[0], coord[1]
        if isinstance(lon, bool) or isinstance(lat, bool) or not all(
            isinstance(v, (int, float)) for v in (lon, lat)
        ):
            raise MalformedRouteResponseError(f"Ogiltig koordinat: {coord!r}")
        path.append((float(lon), float(lat)))

    return path


class RoutingProvider:
    """Basklass för routing-providers"""

    name = "base"
    max_waypoints = MAPBOX_MAX_WAYPOINTS

    def snap_to_road(self, path: Sequence[Coordinate]) -> Path:
        """
        Följ vägnätet genom punkterna i ordning

        Args:
            path: Waypoints (lon, lat)

        Returns:
            Tätare rutt längs vägarna

        Raises:
            RoutingError: vid nätverksfel, fel status eller ingen rutt
        """
        raise NotImplementedError

    def check_waypoints(self, path: Sequence[Coordinate]) -> None:
        if len(path) > self.max_waypoints:
            raise TooManyWaypointsError(len(path), self.max_waypoints)

    def _json(self, response: requests.Response) -> Any:
        if response.status_code != 200:
            raise RoutingError(f"{self.name} svarade {response.status_code}")
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedRouteResponseError(f"{self.name}: svaret är inte JSON") from exc


class MapboxDirectionsProvider(RoutingProvider):
    """Mapbox Directions, profil walking"""

    name = "Mapbox"
    max_waypoints = MAPBOX_MAX_WAYPOINTS

    def __init__(self, access_token: str, profile: str = "walking", session: Optional[requests.Session] = None):
        self.access_token = access_token
        self.profile = profile
        self.session = session or requests.Session()

    def snap_to_road(self, path: Sequence[Coordinate]) -> Path:
        self.check_waypoints(path)

        coords_str = ";".join(f"{lon},{lat}" for lon, lat in path)
        url = f"{MAPBOX_BASE_URL}/directions/v5/mapbox/{self.profile}/{coords_str}"
        params = {
            "geometries": "geojson",
            "access_token": self.access_token
        }

        try:
            response = self.session.get(url, params=params, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            raise RoutingError(f"Mapbox gick inte att nå: {exc}") from exc

        data = self._json(response)
        return self._parse_mapbox_response(data)

    def _parse_mapbox_response(self, data: Any) -> Path:
        """Plocka ut routes[0].geometry.coordinates"""

        if not isinstance(data, dict):
            raise MalformedRouteResponseError("Mapbox: svaret är inte ett objekt")
        if data.get("code") == "NoRoute":
            raise RouteNotFoundError(data.get("message", "Ingen rutt hittades"))

        routes = data.get("routes")
        if not isinstance(routes, list) or not routes or not isinstance(routes[0], dict):
            raise MalformedRouteResponseError("Mapbox: routes saknas")

        geometry = routes[0].get("geometry")
        if not isinstance(geometry, dict):
            raise MalformedRouteResponseError("Mapbox: routes[0].geometry saknas")

        return decode_coordinates(geometry.get("coordinates"))


class OpenRouteServiceProvider(RoutingProvider):
    """OpenRouteService, profil foot-walking"""

    name = "ORS"
    max_waypoints = ORS_MAX_WAYPOINTS

    def __init__(self, api_key: str, profile: str = "foot-walking", session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.profile = profile
        self.session = session or requests.Session()

    def snap_to_road(self, path: Sequence[Coordinate]) -> Path:
        self.check_waypoints(path)

        url = f"{ORS_BASE_URL}/v2/directions/{self.profile}/geojson"
        headers = {
            "Authorization": self.api_key,
            "Content-Type": "application/json"
        }
        body = {
            "coordinates": [[lon, lat] for lon, lat in path],
            "instructions": False
        }

        try:
            response = self.session.post(url, json=body, headers=headers, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            raise RoutingError(f"ORS gick inte att nå: {exc}") from exc

        if response.status_code == 404:
            raise RouteNotFoundError("ORS hittade ingen rutt")
        data = self._json(response)
        return self._parse_ors_response(data)

    def _parse_ors_response(self, data: Any) -> Path:
        """Plocka ut features[0].geometry.coordinates"""

        if not isinstance(data, dict):
            raise MalformedRouteResponseError("ORS: svaret är inte ett objekt")

        features = data.get("features")
        if not isinstance(features, list) or not features or not isinstance(features[0], dict):
            raise MalformedRouteResponseError("ORS: features saknas")

        geometry = features[0].get("geometry")
        if not isinstance(geometry, dict):
            raise MalformedRouteResponseError("ORS: features[0].geometry saknas")

        return decode_coordinates(geometry.get("coordinates"))


def create_router(mapbox_token: Optional[str] = None, ors_key: Optional[str] = None) -> Optional[RoutingProvider]:
    """
    Välj routing-provider utifrån vilka nycklar som finns

    Args:
        mapbox_token: Mapbox access token
        ors_key: OpenRouteService API-nyckel

    Returns:
        Mapbox om token finns, annars ORS, annars None
    """
    if mapbox_token:
        return MapboxDirectionsProvider(mapbox_token)
    if ors_key:
        return OpenRouteServiceProvider(ors_key)
    LOGGER.warning("Ingen API-nyckel för routing konfigurerad")
    return None
