"""
Platssökning: adress eller ortnamn till en punkt att flyga till på kartan
"""

import logging
from typing import Any, Optional

import requests
import streamlit as st

from config import CACHE_TTL, MAPBOX_BASE_URL, NOMINATIM_BASE_URL, REQUEST_TIMEOUT
from models import Coordinate
from utils import validate_coordinates

LOGGER = logging.getLogger(__name__)

USER_AGENT = "StreamlitRunningApp/1.0"


def _parse_mapbox(data: Any) -> Optional[Coordinate]:
    features = data.get("features") if isinstance(data, dict) else None
    if not features:
        return None
    lon, lat = features[0]["geometry"]["coordinates"][:2]
    return float(lon), float(lat)


def _parse_nominatim(data: Any) -> Optional[Coordinate]:
    if not isinstance(data, list) or not data:
        return None
    return float(data[0]["lon"]), float(data[0]["lat"])


def search_place(query: str, mapbox_token: Optional[str] = None) -> Optional[Coordinate]:
    """
    Geokoda en sökning till koordinater

    Args:
        query: Adress eller platsnamn
        mapbox_token: Använd Mapbox istället för Nominatim

    Returns:
        (lon, lat) eller None om inget hittades
    """
    query = query.strip()
    if not query:
        return None

    try:
        if mapbox_token:
            url = f"{MAPBOX_BASE_URL}/search/geocode/v6/forward"
            params = {"q": query, "access_token": mapbox_token, "limit": 1}
            response = requests.get(url, params=params, timeout=REQUEST_TIMEOUT)
            parse = _parse_mapbox
        else:
            url = f"{NOMINATIM_BASE_URL}/search"
            params = {"q": query, "format": "json", "limit": 1}
            headers = {"User-Agent": USER_AGENT}
            response = requests.get(url, params=params, headers=headers, timeout=REQUEST_TIMEOUT)
            parse = _parse_nominatim

        if response.status_code != 200:
            LOGGER.warning("Geokodning av %r gav status %d", query, response.status_code)
            return None
        coords = parse(response.json())
    except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as exc:
        LOGGER.warning("Geokodningsfel för %r: %s", query, exc)
        return None

    if coords is None or not validate_coordinates(*coords):
        return None
    return coords


@st.cache_data(ttl=CACHE_TTL)
def geocode_place(query: str, mapbox_token: Optional[str] = None) -> Optional[Coordinate]:
    """Cachad search_place för sökfältet"""
    return search_place(query, mapbox_token)
