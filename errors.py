"""
Feltyper för routing- och höjdtjänsterna
"""


class RoutingError(RuntimeError):
    """Basfel för routing-tjänsten (nätverk, HTTP-status, ingen rutt)"""


class RouteNotFoundError(RoutingError):
    """Tjänsten svarade men hittade ingen rutt mellan punkterna"""


class MalformedRouteResponseError(RoutingError):
    """Svaret saknar routes[0].geometry eller har fel form"""


class TooManyWaypointsError(RoutingError):
    """Fler punkter än tjänsten accepterar i en förfrågan"""

    def __init__(self, count: int, limit: int):
        super().__init__(f"{count} punkter, max {limit}")
        self.count = count
        self.limit = limit


class ElevationError(RuntimeError):
    """Höjdfrågan för en enskild punkt misslyckades"""


__all__ = [
    "RoutingError",
    "RouteNotFoundError",
    "MalformedRouteResponseError",
    "TooManyWaypointsError",
    "ElevationError",
]
