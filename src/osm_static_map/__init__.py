"""Static map URL builder for OpenStreetMap rendering services."""

from .backend.resolver import resolve_center_and_radius, resolve_zoom, zoom_for_scale
from .backend.service import StaticMapService, format_url, static_map_url
from .config import LoggingSettings, MapSettings, Settings, get_settings
from .exceptions import DegenerateInput, InvalidArgument, StaticMapError
from .geo import bounding_box, great_circle_distance, midpoint
from .logger import configure_logging
from .models import GeoPoint, MapRequest, MapSize, Marker, ResolvedMap

__all__ = [
    "DegenerateInput",
    "GeoPoint",
    "InvalidArgument",
    "LoggingSettings",
    "MapRequest",
    "MapSettings",
    "MapSize",
    "Marker",
    "ResolvedMap",
    "Settings",
    "StaticMapError",
    "StaticMapService",
    "bounding_box",
    "configure_logging",
    "format_url",
    "get_settings",
    "great_circle_distance",
    "midpoint",
    "resolve_center_and_radius",
    "resolve_zoom",
    "static_map_url",
    "zoom_for_scale",
]
