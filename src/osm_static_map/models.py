"""Pydantic models for the osm_static_map package.

This module defines the markers, points and map requests used throughout the
package. Markers and requests are validated with Pydantic so malformed input is
rejected before it can end up in a URL.
"""

from collections.abc import Callable, Hashable
from typing import Any, NamedTuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    field_validator,
    model_validator,
)

from osm_static_map.config import DEFAULT_BASEURL, DEFAULT_MAPTYPE, DEFAULT_SIZE
from osm_static_map.exceptions import InvalidArgument


def format_number(value: float) -> str:
    """Render a number with 15 significant digits, dropping a trailing ``.0``."""
    return format(value, ".15g")


# Characters that separate values in the static map query string
QUERY_DELIMITERS = frozenset("|,&=?#")


def _reject_delimiters(value: str, name: str) -> str:
    found = sorted(set(value) & QUERY_DELIMITERS)
    if found:
        raise ValueError(f"{name} must not contain {''.join(found)!r}, got {value!r}")
    return value


def _reject_bool(value: Any) -> Any:
    # bool is an int subclass and would otherwise pass as 0.0 or 1.0
    if isinstance(value, bool):
        raise ValueError("coordinates must be numbers, not booleans")
    return value


class GeoPoint(NamedTuple):
    """A latitude/longitude pair in degrees."""

    lat: float
    lon: float


class MapSize(NamedTuple):
    """Map image size in pixels."""

    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class Marker(BaseModel):
    """A single marker drawn on the map.

    Markers are usually given as ``[lat, lon, style]`` triples, e.g.
    ``[51.455313, -2.591902, "ol-marker"]``; see the static map service for the
    list of valid styles.

    Attributes:
        lat: Latitude of the marker (-90.0 to 90.0).
        lon: Longitude of the marker (-180.0 to 180.0).
        style: Marker style identifier understood by the service.
    """

    model_config = ConfigDict(frozen=True)

    lat: float = Field(
        ..., ge=-90.0, le=90.0, allow_inf_nan=False, description="Latitude of the marker."
    )
    lon: float = Field(
        ..., ge=-180.0, le=180.0, allow_inf_nan=False, description="Longitude of the marker."
    )
    style: str = Field(..., description="Marker style identifier.")

    @model_validator(mode="before")
    @classmethod
    def _from_triple(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise ValueError(
                    f"marker must be a (lat, lon, style) triple, got {len(data)} values"
                )
            lat, lon, style = data
            return {"lat": lat, "lon": lon, "style": style}
        return data

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def _numeric_coordinate(cls, value: Any) -> Any:
        return _reject_bool(value)

    @field_validator("style")
    @classmethod
    def _plain_style(cls, value: str) -> str:
        return _reject_delimiters(value, "marker style")

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lon)

    def to_query(self) -> str:
        """Serialize the marker as ``<lat>,<lon>,<style>``."""
        return f"{format_number(self.lat)},{format_number(self.lon)},{self.style}"


class ResolvedMap(NamedTuple):
    """Center and zoom of a request after resolution.

    ``radius`` is the distance in meters from the south-west corner of the
    markers' bounding box to the center, or None when it was not computed.
    """

    center: GeoPoint
    zoom: int
    radius: float | None = None


class MapRequest(BaseModel):
    """Parameters of a single static map.

    ``center`` and ``zoom`` are optional; when omitted they are derived from the
    markers the first time the request is resolved and memoized on the request.

    Attributes:
        baseurl: Base URL of the static map service.
        markers: Markers to draw, in URL order.
        size: Map size in pixels. Accepts ``(width, height)`` or ``"WxH"``.
        maptype: Map style identifier.
        center: Explicit map center, overriding the marker-derived one.
        zoom: Explicit zoom level (1-18), overriding the marker-derived one.
    """

    model_config = ConfigDict(frozen=True)

    baseurl: str = DEFAULT_BASEURL
    markers: list[Marker] = Field(default_factory=list)
    size: MapSize = MapSize(*DEFAULT_SIZE)
    maptype: str = DEFAULT_MAPTYPE
    center: GeoPoint | None = None
    zoom: int | None = Field(None, ge=1, le=18)

    _resolutions: dict[Hashable, ResolvedMap] = PrivateAttr(default_factory=dict)

    @field_validator("markers", mode="before")
    @classmethod
    def _markers_default(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("size", mode="before")
    @classmethod
    def _parse_size(cls, value: Any) -> Any:
        if isinstance(value, str):
            width, sep, height = value.lower().partition("x")
            if not sep:
                raise ValueError(f"size must look like 'WIDTHxHEIGHT', got {value!r}")
            return (width.strip(), height.strip())
        return value

    @field_validator("size")
    @classmethod
    def _positive_size(cls, value: MapSize) -> MapSize:
        if value.width <= 0 or value.height <= 0:
            raise ValueError(f"size must be two positive integers, got {tuple(value)}")
        return value

    @field_validator("maptype")
    @classmethod
    def _plain_maptype(cls, value: str) -> str:
        return _reject_delimiters(value, "maptype")

    @field_validator("center", mode="before")
    @classmethod
    def _numeric_center(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            for coord in value:
                _reject_bool(coord)
        return value

    @field_validator("center")
    @classmethod
    def _center_in_range(cls, value: GeoPoint | None) -> GeoPoint | None:
        # NaN fails both comparisons
        if value is not None and not (-90.0 <= value.lat <= 90.0 and -180.0 <= value.lon <= 180.0):
            raise ValueError(f"center must be a valid latitude and longitude, got {tuple(value)}")
        return value

    def resolved(self, key: Hashable, compute: Callable[[], ResolvedMap]) -> ResolvedMap:
        """Return the resolution of this request, computing it on first use.

        Args:
            key: Identifies the settings the resolution depends on.
            compute: Called once per key to resolve the request.

        Returns:
            ResolvedMap: The memoized resolution for ``key``.
        """
        if key not in self._resolutions:
            self._resolutions[key] = compute()
        return self._resolutions[key]

    @classmethod
    def from_config(cls, **config: Any) -> "MapRequest":
        """Build a request, reporting validation failures as InvalidArgument.

        Raises:
            InvalidArgument: If any field is malformed.
        """
        try:
            return cls.model_validate(config)
        except ValidationError as exc:
            raise InvalidArgument(str(exc)) from exc
