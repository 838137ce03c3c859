"""
Hjälpfunktioner för löprundegeneratorn
"""

import math
from datetime import timedelta
from typing import Sequence

from config import EARTH_RADIUS_M
from models import Coordinate


def haversine_distance(coord1: Coordinate, coord2: Coordinate) -> float:
    """
    Avstånd längs storcirkeln mellan två punkter (Haversine formula)

    Args:
        coord1: (lon, lat)
        coord2: (lon, lat)

    Returns:
        Avstånd i meter
    """
    lon1, lat1 = coord1
    lon2, lat2 = coord2
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # atan2-formen är stabil även för antipodala punkter
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def path_length(path: Sequence[Coordinate]) -> float:
    """
    Total längd för en rutt

    Args:
        path: Punkter i körordning

    Returns:
        Total distans i meter, 0 för färre än två punkter
    """
    if len(path) < 2:
        return 0.0

    total_distance = 0.0
    for i in range(1, len(path)):
        total_distance += haversine_distance(path[i - 1], path[i])

    return total_distance


def calculate_elevation_gain(elevations: Sequence[float]) -> float:
    """
    Beräkna total höjdökning, nedförsbackar räknas inte

    Args:
        elevations: Höjdvärden i meter

    Returns:
        Total höjdökning i meter
    """
    total_gain = 0.0
    for i in range(1, len(elevations)):
        total_gain += max(0.0, elevations[i] - elevations[i - 1])
    return total_gain


def estimated_duration(distance_m: float, pace: float) -> timedelta:
    """Uppskattad tid för en distans vid jämnt tempo (min/km)"""
    return timedelta(seconds=(distance_m / 1000) * pace * 60)


def format_pace(pace: float) -> str:
    """Formatera tempo som M:SS /km"""
    total_seconds = int(round(pace * 60))
    return f"{total_seconds // 60}:{total_seconds % 60:02d} /km"


def format_duration(duration: timedelta) -> str:
    """
    Formatera en tidslängd

    Args:
        duration: Tidslängd

    Returns:
        H:MM:SS om minst en timme, annars M:SS
    """
    total_seconds = int(duration.total_seconds())
    hours, rest = divmod(total_seconds, 3600)
    mins, secs = divmod(rest, 60)

    if hours > 0:
        return f"{hours}:{mins:02d}:{secs:02d}"
    return f"{mins}:{secs:02d}"


def validate_coordinates(lon: float, lat: float) -> bool:
    """
    Validera att koordinater är giltiga

    Args:
        lon: Longitud
        lat: Latitud

    Returns:
        True om koordinaterna är giltiga
    """
    return -90 <= lat <= 90 and -180 <= lon <= 180
