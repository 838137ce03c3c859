"""
Datamodeller för löprundegeneratorn
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone, tzinfo
from enum import Enum
from typing import List, Optional, Tuple

from config import (
    DEFAULT_PACE,
    DEFAULT_PACE_VARIABILITY,
    DEFAULT_RUN_NAME,
    DEFAULT_RUN_TIME,
    PACE_MAX,
    PACE_MIN,
    VARIABILITY_MAX,
    VARIABILITY_MIN,
)

# (lon, lat) i grader, samma ordning som GeoJSON
Coordinate = Tuple[float, float]
Path = List[Coordinate]


class DrawMode(str, Enum):
    """Ritläge för klick på kartan"""
    MANUAL = "manual"
    CIRCLE = "circle"
    HEART = "heart"


class AlignmentOutcome(str, Enum):
    """Resultat av en vägjustering"""
    APPLIED = "applied"
    SKIPPED = "skipped"  # färre än två punkter
    TOO_MANY_POINTS = "too_many_points"
    FAILED = "failed"
    SUPERSEDED = "superseded"


@dataclass(frozen=True)
class PaceConfig:
    """Måltempo (min/km) och variation i procent"""
    pace: float = DEFAULT_PACE
    variability: float = DEFAULT_PACE_VARIABILITY

    def __post_init__(self):
        if not PACE_MIN <= self.pace <= PACE_MAX:
            raise ValueError(f"Tempo {self.pace} utanför [{PACE_MIN}, {PACE_MAX}]")
        if not VARIABILITY_MIN <= self.variability <= VARIABILITY_MAX:
            raise ValueError(
                f"Variation {self.variability} utanför [{VARIABILITY_MIN}, {VARIABILITY_MAX}]"
            )


@dataclass
class RunMetadata:
    """Uppgifter om löprundan som anges vid export"""
    name: str = DEFAULT_RUN_NAME
    date: date = field(default_factory=date.today)
    time: str = DEFAULT_RUN_TIME  # "HH:MM", lokal tid
    description: str = ""
    tz: Optional[tzinfo] = None  # None = datorns lokala tidszon

    def start_time(self) -> datetime:
        """
        Starttidpunkt i UTC från datum + klockslag

        Returns:
            Tidszonsmedveten datetime i UTC
        """
        hours, minutes = (int(part) for part in self.time.split(":")[:2])
        local = datetime.combine(self.date, time(hours, minutes))
        if self.tz is not None:
            local = local.replace(tzinfo=self.tz)
        # Naiv datetime tolkas som lokal tid av astimezone()
        return local.astimezone(timezone.utc)


@dataclass
class TrackPoint:
    """En punkt i det exporterade spåret"""
    lat: float
    lon: float
    elevation: float
    time: datetime


@dataclass
class TrackDocument:
    """Ett spår med ett segment, redo för serialisering"""
    name: str
    description: str
    time: datetime
    points: List[TrackPoint]
    activity_type: str = "running"


@dataclass(frozen=True)
class RouteSnapshot:
    """Skrivskyddad ögonblicksbild av rutten"""
    path: Tuple[Coordinate, ...]
    elevations: Tuple[float, ...]
    version: int

    @property
    def has_elevation_data(self) -> bool:
        return len(self.path) >= 2 and len(self.elevations) == len(self.path)
