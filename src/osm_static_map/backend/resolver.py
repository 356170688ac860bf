"""Center and zoom resolution for static maps.

The center of a map is the great-circle midpoint of the bounding box of its
markers. The zoom level is picked by comparing the scale needed to fit the
circle around that center into the map image against the standard OSM/Mapnik
scale denominators. See
http://wiki.openstreetmap.org/wiki/Zoom_levels and
http://svn.openstreetmap.org/applications/rendering/mapnik/zoom-to-scale.txt
for the zoom level to scale denominator table.
"""

import logging
from collections.abc import Sequence

from osm_static_map.config import DEFAULT_PIXEL_WIDTH, DEFAULT_ZOOM
from osm_static_map.exceptions import DegenerateInput
from osm_static_map.geo import bounding_box, great_circle_distance, midpoint
from osm_static_map.models import GeoPoint, MapSize, Marker

logger = logging.getLogger(__name__)

MIN_ZOOM = 1
MAX_ZOOM = 18

ORIGIN = GeoPoint(0.0, 0.0)

# Markers with both coordinates in this closed range sit in the sea off the
# coast of West Africa and almost always come from failed geocoding.
NOISE_RANGE = (0.0, 0.9)

ZOOM_TO_SCALE_DENOMINATOR: dict[int, float] = {
    1: 279541132.014,
    2: 139770566.007,
    3: 69885283.0036,
    4: 34942641.5018,
    5: 17471320.7509,
    6: 8735660.37545,
    7: 4367830.18772,
    8: 2183915.09386,
    9: 1091957.54693,
    10: 545978.773466,
    11: 272989.386733,
    12: 136494.693366,
    13: 68247.3466832,
    14: 34123.6733416,
    15: 17061.8366708,
    16: 8530.9183354,
    17: 4265.4591677,
    18: 2132.72958385,
}


def is_noise(marker: Marker) -> bool:
    """Return True if the marker lies in the near-origin noise range."""
    low, high = NOISE_RANGE
    return low <= marker.lat <= high and low <= marker.lon <= high


def resolve_center_and_radius(
    markers: Sequence[Marker] | None,
) -> tuple[GeoPoint, float | None]:
    """Compute the map center and radius from the markers' bounding box.

    Markers in the noise range are ignored. The radius is the distance in
    meters from the south-west corner of the bounding box to the center.

    Args:
        markers: Markers to fit on the map.

    Returns:
        A tuple of the center and the radius. Without usable markers the center
        is (0, 0) and the radius is None.
    """
    if not markers:
        return ORIGIN, None

    points = []
    for marker in markers:
        if is_noise(marker):
            logger.debug("Ignoring marker near the origin: %s", marker.to_query())
            continue
        points.append(marker.point)

    if not points:
        logger.warning(
            "All %d markers are in the noise range %s, centering on the origin.",
            len(markers),
            NOISE_RANGE,
        )
        return ORIGIN, None

    south_west, north_east = bounding_box(points)
    center = midpoint(south_west, north_east)
    radius = great_circle_distance(south_west, center)
    logger.debug("Resolved center %s with radius %.1f m", center, radius)
    return center, radius


def resolve_zoom(
    radius: float | None,
    size: MapSize,
    pixel_width: float = DEFAULT_PIXEL_WIDTH,
    default_zoom: int = DEFAULT_ZOOM,
) -> int:
    """Pick the OSM zoom level that fits a circle of the given radius.

    Args:
        radius: Radius in meters of the area to show, or None if unknown.
        size: Map size in pixels; the shorter side must fit the circle.
        pixel_width: Physical size of one rendered pixel in meters.
        default_zoom: Zoom level returned when the radius is unknown.

    Returns:
        A zoom level between 1 and 18.

    Raises:
        DegenerateInput: If the shorter side of the map is zero pixels wide.
    """
    if radius is None:
        return default_zoom

    map_width_pixels = min(size[0], size[1])
    if map_width_pixels <= 0:
        raise DegenerateInput(f"map size {tuple(size)} has no width to fit markers into")

    scale_denominator = (radius * 2) / (map_width_pixels * pixel_width)
    logger.debug("Scale denominator %.3f for radius %.1f m", scale_denominator, radius)
    return zoom_for_scale(scale_denominator)


def zoom_for_scale(scale_denominator: float) -> int:
    """Look up the zoom level for a scale denominator.

    A scale exactly equal to a table entry matches neither the narrower nor the
    wider range of that entry and is resolved by the next key down.

    Args:
        scale_denominator: Scale needed to fit the area into the map.

    Returns:
        A zoom level between 1 and 18.
    """
    # See where we roughly fit in the scale denominator range.
    for key in sorted(ZOOM_TO_SCALE_DENOMINATOR, reverse=True):
        scale = ZOOM_TO_SCALE_DENOMINATOR[key]
        if scale_denominator < scale:
            return _clamp_zoom(key - 1)
        wider_scale = ZOOM_TO_SCALE_DENOMINATOR.get(key - 1, 0.0)
        if scale < scale_denominator < wider_scale:
            return _clamp_zoom(key - 2)

    return MIN_ZOOM


def _clamp_zoom(zoom: int) -> int:
    return max(MIN_ZOOM, min(MAX_ZOOM, zoom))
