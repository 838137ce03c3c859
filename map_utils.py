"""
Kartfunktioner: markörregister, kartlager och visualisering
"""

from typing import Dict, List, Optional, Sequence

import folium

from config import DEFAULT_CENTER, DEFAULT_ZOOM
from models import Coordinate, Path

MarkerHandle = int

ROUTE_COLOR = "#ff0000"
MARKER_COLOR = "#fb2c36"


class MarkerRegistry:
    """
    Markörer lagrade i en lista med återanvända platser

    Ett handtag är ett index i listan. Släppta platser återanvänds av
    nästa create().
    """

    def __init__(self):
        self._slots: List[Optional[Coordinate]] = []
        self._free: List[int] = []

    def create(self, coord: Coordinate) -> MarkerHandle:
        if self._free:
            handle = self._free.pop()
            self._slots[handle] = coord
        else:
            handle = len(self._slots)
            self._slots.append(coord)
        return handle

    def release(self, handle: MarkerHandle) -> None:
        if handle < 0 or handle >= len(self._slots) or self._slots[handle] is None:
            raise KeyError(f"Okänd markör {handle}")
        self._slots[handle] = None
        self._free.append(handle)

    def release_all(self) -> List[MarkerHandle]:
        """Släpp alla markörer och returnera deras handtag"""
        released = self.live()
        for handle in released:
            self.release(handle)
        return released

    def live(self) -> List[MarkerHandle]:
        return [h for h, coord in enumerate(self._slots) if coord is not None]

    def position(self, handle: MarkerHandle) -> Coordinate:
        coord = self._slots[handle] if 0 <= handle < len(self._slots) else None
        if coord is None:
            raise KeyError(f"Okänd markör {handle}")
        return coord

    def __len__(self) -> int:
        return len(self._slots) - len(self._free)


class MapOverlay:
    """Basklass för kartlager som ruttredigeraren ritar på"""

    def set_line(self, path: Sequence[Coordinate]) -> None:
        raise NotImplementedError

    def remove_line(self) -> None:
        raise NotImplementedError

    def add_marker(self, handle: MarkerHandle, coord: Coordinate) -> None:
        raise NotImplementedError

    def remove_marker(self, handle: MarkerHandle) -> None:
        raise NotImplementedError

    def set_markers_visible(self, visible: bool) -> None:
        raise NotImplementedError


class FoliumOverlay(MapOverlay):
    """Kartlager som hålls i minnet och ritas ut som en Folium-karta"""

    def __init__(self):
        self.line: Path = []
        self.markers: Dict[MarkerHandle, Coordinate] = {}
        self.markers_visible = True

    def set_line(self, path: Sequence[Coordinate]) -> None:
        self.line = list(path)

    def remove_line(self) -> None:
        self.line = []

    def add_marker(self, handle: MarkerHandle, coord: Coordinate) -> None:
        self.markers[handle] = coord

    def remove_marker(self, handle: MarkerHandle) -> None:
        del self.markers[handle]

    def set_markers_visible(self, visible: bool) -> None:
        self.markers_visible = visible

    def render(
        self,
        center: Optional[List[float]] = None,
        zoom: int = DEFAULT_ZOOM,
        fit_route: bool = True
    ) -> folium.Map:
        """
        Skapa Folium-karta med rutt och markörer

        Args:
            center: Kartans centrum [lat, lon]
            zoom: Zoomnivå när rutten är tom
            fit_route: Zooma till rutten i stället för center/zoom

        Returns:
            Folium Map-objekt
        """
        m = folium.Map(
            location=center or DEFAULT_CENTER,
            zoom_start=zoom,
            control_scale=True
        )

        # Folium vill ha [lat, lon]
        route_coords = [[lat, lon] for lon, lat in self.line]

        if len(route_coords) > 1:
            folium.PolyLine(
                route_coords,
                color=ROUTE_COLOR,
                weight=3,
                opacity=0.9
            ).add_to(m)

        if self.markers_visible:
            for lon, lat in self.markers.values():
                folium.CircleMarker(
                    [lat, lon],
                    radius=6,
                    color="#ffffff",
                    weight=2,
                    fill=True,
                    fill_color=MARKER_COLOR,
                    fill_opacity=1.0
                ).add_to(m)

        # Anpassa zoom för att visa hela rutten
        if fit_route and len(route_coords) > 1:
            bounds = [[min(p[0] for p in route_coords), min(p[1] for p in route_coords)],
                      [max(p[0] for p in route_coords), max(p[1] for p in route_coords)]]
            m.fit_bounds(bounds)

        return m
