"""Great-circle distance utilities.

Distances use the haversine formula on a spherical Earth and are returned
in kilometers.
"""

import math
from typing import Sequence

import numpy as np

from locallens.catalog.models import Coordinates

EARTH_RADIUS_KM = 6371.0

GOOGLE_MAPS_URL = "https://www.google.com/maps?q={latitude},{longitude}"


def calculate_distance(origin: Coordinates, destination: Coordinates) -> float:
    """Return the haversine distance between two points in kilometers.

    Args:
        origin: First point.
        destination: Second point.

    Returns:
        Distance in kilometers. Zero for identical points.

    Example:
        >>> london = Coordinates(latitude=51.5074, longitude=-0.1278)
        >>> paris = Coordinates(latitude=48.8566, longitude=2.3522)
        >>> round(calculate_distance(london, paris))
        344
    """
    phi1 = math.radians(origin.latitude)
    phi2 = math.radians(destination.latitude)
    dphi = math.radians(destination.latitude - origin.latitude)
    dlambda = math.radians(destination.longitude - origin.longitude)

    a = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    )
    # Rounding can push a a hair outside [0, 1] for near-antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distances_from(
    origin: Coordinates, destinations: Sequence[Coordinates]
) -> np.ndarray:
    """Vectorised haversine distances from one origin to many destinations.

    Args:
        origin: The searcher's location.
        destinations: Points to measure to, in order.

    Returns:
        1-D float array of distances in kilometers, aligned with destinations.
    """
    if len(destinations) == 0:
        return np.zeros(0, dtype=np.float64)

    lat2 = np.radians(np.array([d.latitude for d in destinations], dtype=np.float64))
    lon2 = np.radians(np.array([d.longitude for d in destinations], dtype=np.float64))
    lat1 = math.radians(origin.latitude)
    lon1 = math.radians(origin.longitude)

    dphi = lat2 - lat1
    dlambda = lon2 - lon1

    a = np.sin(dphi / 2) ** 2 + math.cos(lat1) * np.cos(lat2) * np.sin(dlambda / 2) ** 2
    # Rounding can push a a hair outside [0, 1] for antipodal points
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def build_maps_link(location: Coordinates) -> str:
    """Return a Google Maps link pointing at a location."""
    return GOOGLE_MAPS_URL.format(
        latitude=location.latitude, longitude=location.longitude
    )
