"""
Höjddata: terräng-providers och annotering av en rutt
"""

import asyncio
import logging
from typing import Any, List, Optional, Sequence

import requests

from config import (
    ELEVATION_CONCURRENCY,
    MAPBOX_BASE_URL,
    OPEN_ELEVATION_BASE_URL,
    REQUEST_TIMEOUT,
)
from errors import ElevationError
from models import Coordinate

LOGGER = logging.getLogger(__name__)


class TerrainProvider:
    """Basklass för terräng-providers"""

    name = "base"

    def elevation_at(self, coord: Coordinate) -> Optional[float]:
        """
        Höjd över havet för en punkt

        Args:
            coord: (lon, lat)

        Returns:
            Höjd i meter, None om den är okänd

        Raises:
            ElevationError: om frågan misslyckas
        """
        raise NotImplementedError

    def _get_json(self, session: requests.Session, url: str, params: dict) -> Any:
        try:
            response = session.get(url, params=params, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            raise ElevationError(f"{self.name} gick inte att nå: {exc}") from exc
        if response.status_code != 200:
            raise ElevationError(f"{self.name} svarade {response.status_code}")
        try:
            return response.json()
        except ValueError as exc:
            raise ElevationError(f"{self.name}: svaret är inte JSON") from exc


class OpenElevationProvider(TerrainProvider):
    """Open-Elevation lookup, en punkt per anrop"""

    name = "Open-Elevation"

    def __init__(self, base_url: str = OPEN_ELEVATION_BASE_URL, session: Optional[requests.Session] = None):
        self.base_url = base_url
        self.session = session or requests.Session()

    def elevation_at(self, coord: Coordinate) -> Optional[float]:
        lon, lat = coord
        data = self._get_json(
            self.session,
            f"{self.base_url}/api/v1/lookup",
            {"locations": f"{lat},{lon}"}
        )
        results = data.get("results") if isinstance(data, dict) else None
        first = results[0] if isinstance(results, list) and results else None
        if not isinstance(first, dict):
            return None
        elevation = first.get("elevation")
        return float(elevation) if isinstance(elevation, (int, float)) else None


class MapboxTerrainProvider(TerrainProvider):
    """Mapbox Tilequery mot konturlagret i mapbox-terrain-v2"""

    name = "Mapbox Terrain"

    def __init__(self, access_token: str, session: Optional[requests.Session] = None):
        self.access_token = access_token
        self.session = session or requests.Session()

    def elevation_at(self, coord: Coordinate) -> Optional[float]:
        lon, lat = coord
        data = self._get_json(
            self.session,
            f"{MAPBOX_BASE_URL}/v4/mapbox.mapbox-terrain-v2/tilequery/{lon},{lat}.json",
            {"layers": "contour", "limit": 50, "access_token": self.access_token}
        )
        features = data.get("features") if isinstance(data, dict) else None
        if not features:
            return None
        if not isinstance(features, list):
            raise ElevationError(f"{self.name}: oväntat svar, features är inte en lista")

        # Punkten ligger inom alla konturer upp till den högsta
        elevations = []
        for feature in features:
            props = feature.get("properties", {}) if isinstance(feature, dict) else None
            if not isinstance(props, dict):
                raise ElevationError(f"{self.name}: oväntat format på feature {feature!r}")
            ele = props.get("ele")
            if isinstance(ele, (int, float)):
                elevations.append(ele)
        return float(max(elevations)) if elevations else None


class ElevationAnnotator:
    """Hämtar höjd för varje punkt i en rutt parallellt"""

    def __init__(self, terrain: TerrainProvider, concurrency: int = ELEVATION_CONCURRENCY):
        self.terrain = terrain
        self.concurrency = concurrency

    async def annotate(self, path: Sequence[Coordinate]) -> List[float]:
        """
        Höjdprofil för en rutt

        Okända höjder och misslyckade frågor blir 0.

        Args:
            path: Punkter (lon, lat)

        Returns:
            Höjd i meter per punkt, samma ordning som path
        """
        if not path:
            return []

        semaphore = asyncio.Semaphore(self.concurrency)

        async def query(coord: Coordinate) -> float:
            async with semaphore:
                try:
                    elevation = await asyncio.to_thread(self.terrain.elevation_at, coord)
                except ElevationError as exc:
                    LOGGER.debug("Höjdfråga för %s misslyckades: %s", coord, exc)
                    return 0.0
                except Exception:
                    # Alla fel blir 0 för just den punkten
                    LOGGER.warning("Oväntat fel i %s för %s", self.terrain.name, coord, exc_info=True)
                    return 0.0
            return elevation if elevation is not None else 0.0

        return list(await asyncio.gather(*(query(c) for c in path)))
