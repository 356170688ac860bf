"""Spherical geometry helpers for the osm_static_map package."""

from collections.abc import Iterable

import numpy as np

from osm_static_map.exceptions import DegenerateInput
from osm_static_map.models import GeoPoint

# Mean earth radius in meters used for great-circle distances.
EARTH_RADIUS_METERS = 6371640.0


def midpoint(point_one: GeoPoint, point_two: GeoPoint) -> GeoPoint:
    """Return the midpoint along the great circle path between two points.

    Args:
        point_one: First point in degrees.
        point_two: Second point in degrees.

    Returns:
        The midpoint in degrees, with longitude normalized into (-180, 180].
    """
    lat1 = np.radians(point_one.lat)
    lon1 = np.radians(point_one.lon)
    lat2 = np.radians(point_two.lat)
    dlon = np.radians(point_two.lon - point_one.lon)

    bx = np.cos(lat2) * np.cos(dlon)
    by = np.cos(lat2) * np.sin(dlon)

    lat3 = np.arctan2(np.sin(lat1) + np.sin(lat2), np.sqrt((np.cos(lat1) + bx) ** 2 + by**2))
    lon3 = lon1 + np.arctan2(by, np.cos(lat1) + bx)

    # Full-circle wrap into the half-open interval (-pi, pi]
    while lon3 > np.pi:
        lon3 -= 2 * np.pi
    while lon3 <= -np.pi:
        lon3 += 2 * np.pi

    return GeoPoint(float(np.degrees(lat3)), float(np.degrees(lon3)))


def great_circle_distance(point_one: GeoPoint, point_two: GeoPoint) -> float:
    """Return the haversine distance between two points in meters.

    Args:
        point_one: First point in degrees.
        point_two: Second point in degrees.

    Returns:
        The surface distance in meters.
    """
    lat1 = np.radians(point_one.lat)
    lat2 = np.radians(point_two.lat)
    dlat = lat2 - lat1
    dlon = np.radians(point_two.lon - point_one.lon)

    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    # Rounding can push a slightly above 1 for antipodal points
    c = 2 * np.arcsin(np.sqrt(min(float(a), 1.0)))
    return float(EARTH_RADIUS_METERS * c)


def bounding_box(points: Iterable[GeoPoint]) -> tuple[GeoPoint, GeoPoint]:
    """Roughly calculate a bounding box around the given points.

    Latitudes and longitudes are reduced independently, so the corners are not
    necessarily any of the input points and the box does not account for the
    antimeridian. That is precise enough to pick a map center.

    Args:
        points: Points in degrees.

    Returns:
        A tuple of the south-west and north-east corners.

    Raises:
        DegenerateInput: If no points are given.
    """
    coords = np.array([(point.lat, point.lon) for point in points], dtype=float)
    if coords.size == 0:
        raise DegenerateInput("cannot compute a bounding box without points")

    lat_min, lon_min = coords.min(axis=0)
    lat_max, lon_max = coords.max(axis=0)
    return GeoPoint(float(lat_min), float(lon_min)), GeoPoint(float(lat_max), float(lon_max))
