"""Great-circle distances for listings, Hot Shot ranges and GPS fixes.

Coordinates are decimal degrees. Feed matching, ETA and pricing work in
kilometers; GPS fix refinement compares against meter thresholds. Both
share one central-angle routine and differ only in the Earth radius, so a
single call never mixes units.
"""

from math import asin, cos, radians, sin, sqrt

EARTH_RADIUS_KM = 6371.0
EARTH_RADIUS_M = 6_371_000


def _central_angle(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1, phi2 = radians(lat1), radians(lat2)
    half_dphi = (phi2 - phi1) / 2
    half_dlambda = radians(lon2 - lon1) / 2

    h = sin(half_dphi) ** 2 + cos(phi1) * cos(phi2) * sin(half_dlambda) ** 2
    # Rounding and out-of-range degrees can push h just outside [0, 1]
    h = min(max(h, 0.0), 1.0)
    return 2 * asin(sqrt(h))


def haversine_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Straight-line distance in kilometers between two points.

    Degrees outside the valid ranges are not rejected; they produce a
    defined, non-negative distance that callers may treat as noise.
    """
    return EARTH_RADIUS_KM * _central_angle(lat1, lon1, lat2, lon2)


def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Same as ``haversine_distance_km`` but in meters, for GPS accuracy checks."""
    return EARTH_RADIUS_M * _central_angle(lat1, lon1, lat2, lon2)


def is_within_radius(distance_km: float | None, radius_km: float) -> bool:
    """Inclusive radius check; a missing distance is never within range."""
    if distance_km is None:
        return False
    return distance_km <= radius_km


def has_coordinates(lat: float | None, lng: float | None) -> bool:
    return lat is not None and lng is not None
