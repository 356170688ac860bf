"""Module for the static map service business logic.

This module provides the `StaticMapService` class which turns caller supplied
parameters into validated map requests, resolves their center and zoom level
and formats the final URL for the static map service.
"""

import logging
from typing import Any

from osm_static_map.backend.resolver import resolve_center_and_radius, resolve_zoom
from osm_static_map.config import MapSettings, get_settings
from osm_static_map.models import GeoPoint, MapRequest, ResolvedMap, format_number

logger = logging.getLogger(__name__)

URL_TEMPLATE = (
    "{baseurl}?center={center}&zoom={zoom}&size={size}&markers={markers}&maptype={maptype}"
)


def format_url(request: MapRequest, center: GeoPoint, zoom: int) -> str:
    """Format the URL of a fully resolved request.

    Args:
        request: The map request.
        center: The resolved map center.
        zoom: The resolved zoom level.

    Returns:
        The URL of the static map image.
    """
    return URL_TEMPLATE.format(
        baseurl=request.baseurl,
        center=",".join(format_number(coord) for coord in center),
        zoom=zoom,
        size=request.size,
        markers="|".join(marker.to_query() for marker in request.markers),
        maptype=request.maptype,
    )


class StaticMapService:
    """Builds static map URLs.

    Attributes:
        settings (MapSettings): Defaults for the static map service.
    """

    def __init__(self, settings: MapSettings | None = None) -> None:
        """Initialize the StaticMapService.

        Args:
            settings: Static map defaults. Taken from the global settings when
                omitted.
        """
        self.settings = settings or get_settings().map

    def create_request(self, **config: Any) -> MapRequest:
        """Create a validated request, filling omitted fields from the settings.

        Args:
            **config: Any of ``baseurl``, ``markers``, ``size``, ``maptype``,
                ``center`` and ``zoom``. None values count as omitted.

        Returns:
            MapRequest: The validated request.

        Raises:
            InvalidArgument: If markers, size, center or zoom are malformed.
        """
        defaults = {
            "baseurl": self.settings.baseurl,
            "size": self.settings.size,
            "maptype": self.settings.maptype,
        }
        given = {key: value for key, value in config.items() if value is not None}
        return MapRequest.from_config(**{**defaults, **given})

    def resolve(self, request: MapRequest) -> ResolvedMap:
        """Resolve the center and zoom level of a request.

        Explicit ``center`` and ``zoom`` values on the request win over the
        marker-derived ones. The result is memoized on the request per zoom
        settings, so services with different settings do not share it.

        Args:
            request: The map request.

        Returns:
            ResolvedMap: The center, zoom and radius of the map.
        """
        key = (self.settings.pixel_width, self.settings.default_zoom)
        return request.resolved(key, lambda: self._resolve(request))

    def _resolve(self, request: MapRequest) -> ResolvedMap:
        # An explicit center skips the bounding box entirely, so without an
        # explicit zoom such a request gets the default zoom.
        if request.center is not None:
            center, radius = request.center, None
        else:
            center, radius = resolve_center_and_radius(request.markers)

        zoom = request.zoom
        if zoom is None:
            zoom = resolve_zoom(
                radius,
                request.size,
                pixel_width=self.settings.pixel_width,
                default_zoom=self.settings.default_zoom,
            )
        return ResolvedMap(center, zoom, radius)

    def build_url(self, request: MapRequest, **overrides: Any) -> str:
        """Return the URL to fetch the static map image via HTTP(S).

        Args:
            request: The map request.
            **overrides: Request fields replacing the request's own values for
                this call only.

        Returns:
            str: The URL of the static map image.

        Raises:
            InvalidArgument: If an override is malformed.
        """
        if any(value is not None for value in overrides.values()):
            config = request.model_dump(exclude={"markers"})
            config["markers"] = request.markers
            config.update({key: value for key, value in overrides.items() if value is not None})
            request = self.create_request(**config)

        resolution = self.resolve(request)
        url = format_url(request, resolution.center, resolution.zoom)
        logger.debug("Built static map URL: %s", url)
        return url


def static_map_url(**config: Any) -> str:
    """Build a static map URL in one call using the global settings.

    Args:
        **config: Request fields, see `StaticMapService.create_request`.

    Returns:
        str: The URL of the static map image.
    """
    service = StaticMapService()
    return service.build_url(service.create_request(**config))
