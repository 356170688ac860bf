"""Backend package for the static map builder."""

from .resolver import resolve_center_and_radius, resolve_zoom, zoom_for_scale
from .service import StaticMapService, format_url, static_map_url

__all__ = [
    "StaticMapService",
    "format_url",
    "resolve_center_and_radius",
    "resolve_zoom",
    "static_map_url",
    "zoom_for_scale",
]
