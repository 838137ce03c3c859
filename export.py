"""
GPX-export av det syntetiska spåret
"""

import re
from typing import Sequence

import gpxpy
import gpxpy.gpx

from models import Coordinate, PaceConfig, RunMetadata, TrackDocument, TrackPoint
from pace import track_timestamps, variable_pace

GPX_CREATOR = "Löprundegeneratorn"


def build_track(
    path: Sequence[Coordinate],
    elevations: Sequence[float],
    pace_config: PaceConfig,
    metadata: RunMetadata
) -> TrackDocument:
    """
    Bygg spåret med höjd och tidsstämpel för varje punkt

    Args:
        path: Punkter (lon, lat) i körordning
        elevations: Höjdprofil för path, ignoreras om längden inte stämmer
        pace_config: Måltempo och variation
        metadata: Namn, datum, klockslag och beskrivning

    Returns:
        TrackDocument med lika många punkter som path
    """
    start = metadata.start_time()

    if len(elevations) != len(path):
        # Profilen hör till en äldre rutt
        elevations = [0.0] * len(path)

    paces = variable_pace(path, pace_config.pace, pace_config.variability)
    times = track_timestamps(path, start, paces)

    points = [
        TrackPoint(lat=lat, lon=lon, elevation=elevation, time=point_time)
        for (lon, lat), elevation, point_time in zip(path, elevations, times)
    ]

    return TrackDocument(
        name=metadata.name,
        description=metadata.description,
        time=start,
        points=points
    )


def create_gpx(track: TrackDocument) -> str:
    """
    Skapa GPX-fil från ett spår

    Args:
        track: TrackDocument

    Returns:
        GPX som sträng
    """
    gpx = gpxpy.gpx.GPX()

    # Lägg till metadata
    gpx.creator = GPX_CREATOR
    gpx.name = track.name
    gpx.description = track.description or None
    gpx.time = track.time

    # Skapa track
    gpx_track = gpxpy.gpx.GPXTrack(name=track.name)
    gpx_track.type = track.activity_type
    gpx.tracks.append(gpx_track)

    # Skapa segment
    gpx_segment = gpxpy.gpx.GPXTrackSegment()
    gpx_track.segments.append(gpx_segment)

    # Lägg till punkter
    for point in track.points:
        gpx_segment.points.append(gpxpy.gpx.GPXTrackPoint(
            point.lat,
            point.lon,
            elevation=point.elevation,
            time=point.time
        ))

    return gpx.to_xml()


def gpx_filename(name: str) -> str:
    """Filnamn från rundans namn, allt utom a-z och 0-9 blir _"""
    return re.sub(r"[^a-z0-9]", "_", name, flags=re.IGNORECASE).lower() + ".gpx"
