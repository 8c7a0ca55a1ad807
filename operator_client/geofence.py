"""
Distance gate that decides whether the operator UI offers edit actions.

This is a convenience for staff on the floor, not access control: the API
never checks location, so any direct request skips it.
"""
import math
from dataclasses import dataclass
from typing import Optional

EARTH_RADIUS_KM = 6371.0

# Amborukmo Plaza
DEFAULT_VENUE_LAT = -7.782357
DEFAULT_VENUE_LON = 110.401167
DEFAULT_MAX_DISTANCE_KM = 0.5


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


@dataclass
class GeofenceResult:
    can_edit: bool
    distance_km: Optional[float]
    status: str


@dataclass
class GeofenceGate:
    venue_lat: float = DEFAULT_VENUE_LAT
    venue_lon: float = DEFAULT_VENUE_LON
    max_distance_km: float = DEFAULT_MAX_DISTANCE_KM

    def check(self, lat: Optional[float], lon: Optional[float]) -> GeofenceResult:
        if lat is None or lon is None:
            return GeofenceResult(False, None, "Location unavailable. View-only mode.")
        distance = haversine_km(lat, lon, self.venue_lat, self.venue_lon)
        if distance <= self.max_distance_km:
            return GeofenceResult(True, distance, f"Location verified ({distance:.2f} km). Editing enabled.")
        return GeofenceResult(False, distance, f"Too far from the venue ({distance:.2f} km). View-only mode.")
