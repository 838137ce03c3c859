"""
Ruttredigeraren: äger rutten, höjdprofilen och markörerna och
koordinerar vägjustering mot routing-providern
"""

import asyncio
import logging
from datetime import timedelta
from typing import List, Optional, Sequence, Tuple

from config import ALIGN_MAX_WAYPOINTS
from elevation import ElevationAnnotator
from errors import RoutingError, TooManyWaypointsError
from map_utils import FoliumOverlay, MapOverlay, MarkerRegistry
from models import AlignmentOutcome, Coordinate, DrawMode, Path, RouteSnapshot
from routing_providers import RoutingProvider
from shapes import SHAPE_GENERATORS
from utils import calculate_elevation_gain, estimated_duration, path_length

LOGGER = logging.getLogger(__name__)


class RouteEditor:
    """
    Ensam ägare av rutten (path), höjdprofilen och markörerna

    Alla ändringar går genom metoderna här. Varje ändring av rutten ökar
    version; en vägjustering eller höjdfråga som startades mot en äldre
    version kastas när svaret kommer. Bara den senaste vägjusteringen får
    skriva sitt resultat.
    """

    def __init__(
        self,
        router: RoutingProvider,
        annotator: ElevationAnnotator,
        overlay: Optional[MapOverlay] = None
    ):
        self.router = router
        self.annotator = annotator
        self.overlay = overlay if overlay is not None else FoliumOverlay()
        self.markers = MarkerRegistry()
        self.show_markers = True

        self._path: Path = []
        self._elevations: List[float] = []
        self._version = 0
        self._request_seq = 0
        self._pending_seq: Optional[int] = None

    # ------------------------------------------------------------------
    # Läsning
    # ------------------------------------------------------------------
    @property
    def path(self) -> Tuple[Coordinate, ...]:
        return tuple(self._path)

    @property
    def version(self) -> int:
        return self._version

    @property
    def max_waypoints(self) -> int:
        """Största antal punkter som skickas till vägjustering"""
        return min(self.router.max_waypoints, ALIGN_MAX_WAYPOINTS)

    @property
    def is_aligning(self) -> bool:
        return self._pending_seq is not None

    def snapshot(self) -> RouteSnapshot:
        return RouteSnapshot(
            path=tuple(self._path),
            elevations=tuple(self._elevations),
            version=self._version
        )

    def elevation_profile(self) -> List[float]:
        """Höjdprofilen, tom om den inte hör till nuvarande rutt"""
        if len(self._elevations) != len(self._path):
            return []
        return list(self._elevations)

    @property
    def distance(self) -> float:
        return path_length(self._path)

    @property
    def elevation_gain(self) -> float:
        return calculate_elevation_gain(self.elevation_profile())

    def duration(self, pace: float) -> timedelta:
        return estimated_duration(self.distance, pace)

    # ------------------------------------------------------------------
    # Ändringar
    # ------------------------------------------------------------------
    async def add_point(self, coord: Coordinate) -> bool:
        """
        Lägg till en punkt sist i rutten och hämta ny höjdprofil

        Args:
            coord: (lon, lat)

        Returns:
            True om höjdprofilen sparades, False om rutten ändrats under tiden
        """
        self._path.append(coord)
        self._version += 1
        version = self._version

        handle = self.markers.create(coord)
        self.overlay.add_marker(handle, coord)
        self.overlay.set_line(self._path)

        elevations = await self.annotator.annotate(list(self._path))
        if version != self._version:
            LOGGER.debug("Höjdprofil för version %d kastad", version)
            return False

        self._elevations = elevations
        return True

    async def align_to_road(self, path: Optional[Sequence[Coordinate]] = None) -> AlignmentOutcome:
        """
        Ersätt rutten med providerns väganpassade rutt

        Args:
            path: Punkter att justera, annars nuvarande rutt

        Returns:
            AlignmentOutcome som beskriver vad som hände
        """
        target = list(path) if path is not None else list(self._path)
        if len(target) < 2:
            return AlignmentOutcome.SKIPPED

        if len(target) > self.max_waypoints:
            LOGGER.info("För många punkter för vägjustering: %d (max %d)",
                        len(target), self.max_waypoints)
            return AlignmentOutcome.TOO_MANY_POINTS

        self._request_seq += 1
        seq = self._request_seq
        version = self._version
        self._pending_seq = seq

        try:
            new_path = await asyncio.to_thread(self.router.snap_to_road, target)
            if not self._is_current(seq, version):
                LOGGER.debug("Vägjustering %d ersatt, svaret kastas", seq)
                return AlignmentOutcome.SUPERSEDED

            elevations = await self.annotator.annotate(new_path)
            if not self._is_current(seq, version):
                LOGGER.debug("Vägjustering %d ersatt, svaret kastas", seq)
                return AlignmentOutcome.SUPERSEDED

            self._replace_route(new_path, elevations)
            LOGGER.info("Rutten justerad via %s: %d -> %d punkter",
                        self.router.name, len(target), len(new_path))
            return AlignmentOutcome.APPLIED

        except TooManyWaypointsError as exc:
            LOGGER.info("Vägjustering avvisad: %s", exc)
            return AlignmentOutcome.TOO_MANY_POINTS
        except RoutingError as exc:
            if not self._is_current(seq, version):
                return AlignmentOutcome.SUPERSEDED
            LOGGER.warning("Vägjustering misslyckades: %s", exc)
            return AlignmentOutcome.FAILED
        finally:
            if self._pending_seq == seq:
                self._pending_seq = None

    def clear(self) -> None:
        """Töm rutten, höjdprofilen och kartlagren"""
        self._version += 1
        self._pending_seq = None
        self._release_markers()
        self._path = []
        self._elevations = []
        self.overlay.remove_line()

    async def draw_shape(self, mode: DrawMode, center: Coordinate, zoom: float) -> AlignmentOutcome:
        """
        Rita en form runt center och vägjustera den direkt

        Args:
            mode: DrawMode.CIRCLE eller DrawMode.HEART
            center: Klickad punkt (lon, lat)
            zoom: Kartans zoomnivå

        Returns:
            Resultatet av vägjusteringen
        """
        generator = SHAPE_GENERATORS[DrawMode(mode)]
        self.clear()
        return await self.align_to_road(generator(center, zoom))

    async def handle_click(self, coord: Coordinate, zoom: float, mode: DrawMode) -> Optional[AlignmentOutcome]:
        """Klick på kartan i aktuellt ritläge"""
        if DrawMode(mode) is DrawMode.MANUAL:
            await self.add_point(coord)
            return None
        return await self.draw_shape(mode, coord, zoom)

    def set_show_markers(self, visible: bool) -> None:
        self.show_markers = visible
        self.overlay.set_markers_visible(visible)

    # ------------------------------------------------------------------
    def _is_current(self, seq: int, version: int) -> bool:
        return seq == self._request_seq and version == self._version

    def _release_markers(self) -> None:
        for handle in self.markers.release_all():
            self.overlay.remove_marker(handle)

    def _replace_route(self, path: Sequence[Coordinate], elevations: Sequence[float]) -> None:
        # Inga await här, ingen annan korutin ser ett halvt uppdaterat läge
        self._release_markers()
        self._path = list(path)
        self._elevations = list(elevations)
        self._version += 1
        for coord in self._path:
            handle = self.markers.create(coord)
            self.overlay.add_marker(handle, coord)
        self.overlay.set_line(self._path)
