"""
Tempomodell och tidsstämplar för det syntetiska spåret
"""

import math
from datetime import datetime, timedelta
from typing import List, Sequence

from config import PACE_FLOOR
from models import Coordinate
from utils import haversine_distance, path_length


def pace_noise(index: int) -> float:
    """Deterministiskt brus för punkt nummer index"""
    seed = index * 0.1
    return math.sin(seed) * math.cos(seed * 1.7) * math.sin(seed * 2.3)


def variable_pace(
    path: Sequence[Coordinate],
    target_pace: float,
    variability_percent: float
) -> List[float]:
    """
    Tempo per punkt, varierat runt måltempot

    Samma indata ger alltid samma utdata så att en export kan upprepas.
    Värdet för punkt i gäller segmentet som börjar i punkten.

    Args:
        path: Punkter i körordning
        target_pace: Måltempo i min/km
        variability_percent: Största avvikelse i procent av måltempot

    Returns:
        Ett tempo per punkt, tom lista för färre än två punkter
    """
    if len(path) < 2:
        return []

    amplitude = (variability_percent / 100) * target_pace
    return [
        max(PACE_FLOOR, target_pace + pace_noise(i) * amplitude)
        for i in range(len(path))
    ]


def elapsed_seconds(path: Sequence[Coordinate], paces: Sequence[float]) -> List[float]:
    """
    Ackumulerad tid i sekunder fram till varje punkt

    Segmentet j-1 -> j tar (distans i km) * paces[j-1] * 60 sekunder.
    Summan byggs vänster till höger så att avrundningen blir densamma som
    om varje punkts tid summerades från början.

    Args:
        path: Punkter i körordning
        paces: Tempo per punkt (min/km)

    Returns:
        En tid per punkt, första är 0
    """
    if not path:
        return []

    offsets = [0.0]
    cumulative = 0.0
    for j in range(1, len(path)):
        segment_minutes = (haversine_distance(path[j - 1], path[j]) / 1000) * paces[j - 1]
        cumulative += segment_minutes * 60
        offsets.append(cumulative)

    return offsets


def track_timestamps(
    path: Sequence[Coordinate],
    start: datetime,
    paces: Sequence[float]
) -> List[datetime]:
    """
    Tidsstämpel för varje punkt räknat från start

    Args:
        path: Punkter i körordning
        start: Tidpunkt för första punkten
        paces: Tempo per punkt (min/km)

    Returns:
        En tidsstämpel per punkt
    """
    return [start + timedelta(seconds=offset) for offset in elapsed_seconds(path, paces)]


def profile_rows(
    path: Sequence[Coordinate],
    elevations: Sequence[float],
    target_pace: float,
    variability_percent: float
) -> List[dict]:
    """
    Data för tempo- och höjddiagrammen

    Distansen fördelas jämnt över punkterna.

    Args:
        path: Punkter i körordning
        elevations: Höjdprofil för path
        target_pace: Måltempo i min/km
        variability_percent: Variation i procent

    Returns:
        En rad per punkt med distance_km, pace och elevation, tom lista om
        höjdprofilen inte hör till rutten
    """
    n = len(path)
    if n < 2 or len(elevations) != n:
        return []

    total_km = path_length(path) / 1000
    paces = variable_pace(path, target_pace, variability_percent)
    return [
        {
            "distance_km": total_km * i / (n - 1),
            "pace": paces[i],
            "elevation": elevations[i]
        }
        for i in range(n)
    ]
