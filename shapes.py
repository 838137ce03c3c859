"""
Parametriska former som ritas ut på kartan och sedan vägjusteras
"""

import math

from config import (
    DEFAULT_CIRCLE_RADIUS_KM,
    DEFAULT_HEART_SIZE,
    KM_PER_DEGREE_LAT,
    KM_PER_DEGREE_LON,
    REFERENCE_ZOOM,
    SHAPE_SEGMENTS,
)
from models import Coordinate, DrawMode, Path


def zoom_factor(zoom: float) -> float:
    """Skala relativt referenszoomen, halveras för varje zoomsteg in"""
    return 2 ** (REFERENCE_ZOOM - zoom)


def circle_shape(
    center: Coordinate,
    zoom: float,
    base_radius_km: float = DEFAULT_CIRCLE_RADIUS_KM
) -> Path:
    """
    Skapa en sluten cirkel runt en punkt

    Args:
        center: Mittpunkt (lon, lat)
        zoom: Kartans aktuella zoomnivå
        base_radius_km: Radie vid referenszoom

    Returns:
        21 punkter där första och sista sammanfaller
    """
    radius_km = base_radius_km * zoom_factor(zoom)

    # Grov omvandling från km till grader
    radius_lon = radius_km / (KM_PER_DEGREE_LON * math.cos(math.radians(center[1])))
    radius_lat = radius_km / KM_PER_DEGREE_LAT

    coordinates = []
    for i in range(SHAPE_SEGMENTS + 1):
        angle = (i / SHAPE_SEGMENTS) * 2 * math.pi
        lon = center[0] + radius_lon * math.cos(angle)
        lat = center[1] + radius_lat * math.sin(angle)
        coordinates.append((lon, lat))

    return coordinates


def heart_shape(
    center: Coordinate,
    zoom: float,
    base_size: float = DEFAULT_HEART_SIZE
) -> Path:
    """
    Skapa ett hjärta runt en punkt

    x = 16 sin³(t), y = 13 cos(t) - 5 cos(2t) - 2 cos(3t) - cos(4t)

    Args:
        center: Mittpunkt (lon, lat)
        zoom: Kartans aktuella zoomnivå
        base_size: Storlek i grader vid referenszoom

    Returns:
        21 punkter, t = 0 och t = 2π sammanfaller
    """
    size = base_size * zoom_factor(zoom)

    coordinates = []
    for i in range(SHAPE_SEGMENTS + 1):
        t = (i / SHAPE_SEGMENTS) * 2 * math.pi
        x = 16 * math.sin(t) ** 3
        y = 13 * math.cos(t) - 5 * math.cos(2 * t) - 2 * math.cos(3 * t) - math.cos(4 * t)

        lon = center[0] + (x * size) / 16
        lat = center[1] + (y * size) / 16
        coordinates.append((lon, lat))

    return coordinates


SHAPE_GENERATORS = {
    DrawMode.CIRCLE: circle_shape,
    DrawMode.HEART: heart_shape,
}
