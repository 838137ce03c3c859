"""
Konfiguration och konstanter för löprundegeneratorn
"""

# Standardvärden
DEFAULT_PACE = 5.5  # min/km
DEFAULT_PACE_VARIABILITY = 15.0  # procent
DEFAULT_CENTER = [40.6941, -74.0242]  # [lat, lon], Brooklyn
DEFAULT_ZOOM = 13
DEFAULT_RUN_NAME = "Morning Run"
DEFAULT_RUN_TIME = "07:00"

# Gränser för reglagen
PACE_MIN = 3.0
PACE_MAX = 10.0
VARIABILITY_MIN = 0.0
VARIABILITY_MAX = 50.0

# Lägsta tempo som används för ett segment (min/km)
PACE_FLOOR = 0.1

# Geometri
EARTH_RADIUS_M = 6371000
REFERENCE_ZOOM = 13
SHAPE_SEGMENTS = 20  # 21 punkter, under Mapbox waypoint-gräns
DEFAULT_CIRCLE_RADIUS_KM = 1.0
DEFAULT_HEART_SIZE = 0.01
KM_PER_DEGREE_LON = 111.32
KM_PER_DEGREE_LAT = 110.54

# API URLs
MAPBOX_BASE_URL = "https://api.mapbox.com"
ORS_BASE_URL = "https://api.openrouteservice.org"
OPEN_ELEVATION_BASE_URL = "https://api.open-elevation.com"
NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"

# Routing-inställningar
MAPBOX_MAX_WAYPOINTS = 25
ORS_MAX_WAYPOINTS = 50
ALIGN_MAX_WAYPOINTS = 25  # Tak för vägjustering oavsett provider
REQUEST_TIMEOUT = 30

# Höjddata
ELEVATION_CONCURRENCY = 8

# Cache-inställningar
CACHE_TTL = 3600  # 1 timme
