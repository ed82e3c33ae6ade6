"""Tests for the haversine distance utilities."""

import numpy as np
import pytest

from locallens.catalog.geo import (
    EARTH_RADIUS_KM,
    build_maps_link,
    calculate_distance,
    distances_from,
)
from locallens.catalog.models import Coordinates

LONDON = Coordinates(latitude=51.5074, longitude=-0.1278)
PARIS = Coordinates(latitude=48.8566, longitude=2.3522)


def test_identical_points_are_zero_apart():
    """Test that the distance from a point to itself is zero."""
    assert calculate_distance(LONDON, LONDON) == 0.0


def test_distance_is_symmetric():
    """Test that distance(A, B) equals distance(B, A)."""
    assert calculate_distance(LONDON, PARIS) == pytest.approx(
        calculate_distance(PARIS, LONDON)
    )


def test_london_to_paris():
    """Test a well-known city pair."""
    assert calculate_distance(LONDON, PARIS) == pytest.approx(343.5, abs=1.5)


def test_one_degree_of_latitude():
    """Test that one degree along a meridian is R * pi / 180."""
    a = Coordinates(latitude=0.0, longitude=10.0)
    b = Coordinates(latitude=1.0, longitude=10.0)

    assert calculate_distance(a, b) == pytest.approx(EARTH_RADIUS_KM * np.pi / 180)


def test_antipodal_points_are_half_circumference_apart():
    """Test the largest possible distance."""
    a = Coordinates(latitude=0.0, longitude=0.0)
    b = Coordinates(latitude=0.0, longitude=180.0)

    assert calculate_distance(a, b) == pytest.approx(EARTH_RADIUS_KM * np.pi)


def test_distances_from_matches_scalar_version():
    """Test that the vectorised distances agree with calculate_distance."""
    destinations = [
        PARIS,
        LONDON,
        Coordinates(latitude=-33.8688, longitude=151.2093),
        Coordinates(latitude=0.0, longitude=179.9),
    ]

    distances = distances_from(LONDON, destinations)

    assert distances.shape == (4,)
    for destination, distance in zip(destinations, distances):
        assert distance == pytest.approx(calculate_distance(LONDON, destination))


def test_distances_from_empty():
    """Test that no destinations give an empty array."""
    assert distances_from(LONDON, []).shape == (0,)


def test_build_maps_link():
    """Test that the maps link carries the coordinates."""
    link = build_maps_link(Coordinates(latitude=51.5, longitude=-0.12))

    assert link == "https://www.google.com/maps?q=51.5,-0.12"


def test_near_antipodal_points_do_not_raise():
    """Test that points almost opposite each other measure half the circumference."""
    for lat in np.arange(1, 9000) / 100:
        origin = Coordinates(latitude=float(lat), longitude=0.0)
        destination = Coordinates(latitude=-float(lat), longitude=180.0)

        assert calculate_distance(origin, destination) == pytest.approx(
            EARTH_RADIUS_KM * np.pi
        )
