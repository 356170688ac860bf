"""Tests for the static map service and URL formatting."""

from unittest.mock import patch

import pytest

from osm_static_map.backend.service import StaticMapService, format_url, static_map_url
from osm_static_map.config import DEFAULT_BASEURL, MapSettings
from osm_static_map.exceptions import InvalidArgument
from osm_static_map.models import GeoPoint, MapRequest

ENGLISH_MARKERS = [
    [51.8785011494, -0.3767887732, "ol-marker"],
    [51.455313, -2.591902, "ol-marker"],
]


@pytest.fixture
def service() -> StaticMapService:
    """Fixture for a service with default settings."""
    return StaticMapService(MapSettings())


class TestRequestCreation:
    """Tests for creating requests from configuration."""

    def test_defaults(self, service: StaticMapService) -> None:
        """Omitted fields come from the settings."""
        request = service.create_request()
        assert request.baseurl == DEFAULT_BASEURL
        assert request.size == (500, 350)
        assert request.maptype == "mapnik"
        assert request.markers == []
        assert request.center is None
        assert request.zoom is None

    def test_custom_settings(self) -> None:
        """Service settings change the defaults."""
        service = StaticMapService(MapSettings(maptype="cycle", size=(300, 200)))
        request = service.create_request(markers=None)
        assert request.maptype == "cycle"
        assert request.size == (300, 200)

    @pytest.mark.parametrize(
        "markers",
        [
            [[51.0, -0.3]],
            [[51.0, -0.3, "ol-marker", "extra"]],
            [["north", -0.3, "ol-marker"]],
            [[95.0, -0.3, "ol-marker"]],
            "51.0,-0.3,ol-marker",
        ],
    )
    def test_malformed_markers(self, service: StaticMapService, markers: object) -> None:
        """Markers that are not coordinate triples are rejected."""
        with pytest.raises(InvalidArgument):
            service.create_request(markers=markers)

    @pytest.mark.parametrize("size", [(0, 350), (500, -1), (500,), "500", "axb", (1.5, 2)])
    def test_malformed_size(self, service: StaticMapService, size: object) -> None:
        """Size must be two positive integers."""
        with pytest.raises(InvalidArgument):
            service.create_request(size=size)

    def test_size_string(self, service: StaticMapService) -> None:
        """The 'WxH' form is accepted."""
        assert service.create_request(size="756x476").size == (756, 476)

    @pytest.mark.parametrize("style", ["a|b", "a,b", "a&zoom=1", "x=y", "pin#1", "a?b"])
    def test_style_with_query_delimiters(self, service: StaticMapService, style: str) -> None:
        """Marker styles cannot break the query string."""
        with pytest.raises(InvalidArgument):
            service.create_request(markers=[[51.0, -0.3, style]])

    @pytest.mark.parametrize("maptype", ["mapnik&zoom=3", "cycle|mapnik", "a=b"])
    def test_maptype_with_query_delimiters(self, service: StaticMapService, maptype: str) -> None:
        """Map types cannot break the query string."""
        with pytest.raises(InvalidArgument):
            service.create_request(maptype=maptype)

    @pytest.mark.parametrize(
        "center",
        [
            [float("nan"), 0.0],
            [0.0, float("inf")],
            [200.0, 500.0],
            [-90.5, 10.0],
            [10.0, -180.5],
            [True, False],
        ],
    )
    def test_invalid_center(self, service: StaticMapService, center: list) -> None:
        """Explicit centers must be finite, in range and numeric."""
        with pytest.raises(InvalidArgument):
            service.create_request(center=center, zoom=5)

    def test_center_on_range_limits(self, service: StaticMapService) -> None:
        """The poles and the antimeridian are valid centers."""
        request = service.create_request(center=[-90, 180], zoom=5)
        assert request.center == GeoPoint(-90.0, 180.0)

    @pytest.mark.parametrize(
        "marker", [[True, False, "x"], [51.0, True, "x"], [float("nan"), 0.0, "x"]]
    )
    def test_non_numeric_marker_coordinates(
        self, service: StaticMapService, marker: list
    ) -> None:
        """Booleans and NaN are not coordinates."""
        with pytest.raises(InvalidArgument):
            service.create_request(markers=[marker])

    @pytest.mark.parametrize("zoom", [0, 19])
    def test_zoom_out_of_range(self, service: StaticMapService, zoom: int) -> None:
        """Explicit zoom levels must be between 1 and 18."""
        with pytest.raises(InvalidArgument):
            service.create_request(zoom=zoom)


class TestBuildUrl:
    """End-to-end URL building."""

    def test_no_markers(self, service: StaticMapService) -> None:
        """Without markers the map is centered on the origin at zoom 17."""
        url = service.build_url(service.create_request())
        assert url == (
            f"{DEFAULT_BASEURL}?center=0,0&zoom=17&size=500x350&markers=&maptype=mapnik"
        )

    def test_single_marker(self, service: StaticMapService) -> None:
        """A single marker is the center and the zoom is close to maximum."""
        request = service.create_request(
            markers=[[48.213950, 16.336290, "red-pushpin"]], size=[756, 476]
        )
        resolution = service.resolve(request)
        assert resolution.center.lat == pytest.approx(48.21395)
        assert resolution.center.lon == pytest.approx(16.33629)
        assert resolution.zoom in (17, 18)

        url = service.build_url(request)
        assert url.endswith("&size=756x476&markers=48.21395,16.33629,red-pushpin&maptype=mapnik")

    def test_two_markers(self, service: StaticMapService) -> None:
        """Two markers are centered on their midpoint, in marker order."""
        request = service.create_request(markers=ENGLISH_MARKERS, size=[756, 476])
        url = service.build_url(request)

        assert url.startswith(f"{DEFAULT_BASEURL}?center=51.67")
        assert ",-1.48" in url
        assert "&zoom=7&" in url
        assert url.endswith(
            "&size=756x476"
            "&markers=51.8785011494,-0.3767887732,ol-marker|51.455313,-2.591902,ol-marker"
            "&maptype=mapnik"
        )

    def test_explicit_center_and_zoom_skip_computation(self, service: StaticMapService) -> None:
        """Explicit center and zoom are used as given."""
        request = service.create_request(
            markers=ENGLISH_MARKERS, size=[756, 476], center=[48.21395, 16.33629], zoom=12
        )
        with (
            patch("osm_static_map.backend.service.resolve_center_and_radius") as center_mock,
            patch("osm_static_map.backend.service.resolve_zoom") as zoom_mock,
        ):
            url = service.build_url(request)

        center_mock.assert_not_called()
        zoom_mock.assert_not_called()
        assert "?center=48.21395,16.33629&zoom=12&" in url

    def test_explicit_center_uses_default_zoom(self, service: StaticMapService) -> None:
        """An explicit center without a zoom does not consult the markers."""
        request = service.create_request(markers=ENGLISH_MARKERS, center=[10, 20])
        assert service.resolve(request) == (GeoPoint(10, 20), 17, None)

    def test_explicit_zoom_only(self, service: StaticMapService) -> None:
        """An explicit zoom keeps the marker-derived center."""
        request = service.create_request(markers=ENGLISH_MARKERS, zoom=3)
        resolution = service.resolve(request)
        assert resolution.zoom == 3
        assert resolution.center.lat == pytest.approx(51.67, abs=0.01)

    def test_resolution_is_memoized(self, service: StaticMapService) -> None:
        """Center and zoom are computed once per request."""
        request = service.create_request(markers=ENGLISH_MARKERS)
        with patch(
            "osm_static_map.backend.service.resolve_center_and_radius",
            return_value=(GeoPoint(1.5, 2.5), 10.0),
        ) as center_mock:
            first = service.build_url(request)
            second = service.build_url(request)

        assert first == second
        center_mock.assert_called_once()

    def test_memo_depends_on_service_settings(self) -> None:
        """Services with different zoom settings do not share a resolution."""
        request = MapRequest.from_config()
        default_url = StaticMapService(MapSettings()).build_url(request)
        custom_url = StaticMapService(MapSettings(default_zoom=12)).build_url(request)

        assert "&zoom=17&" in default_url
        assert "&zoom=12&" in custom_url
        assert "&zoom=17&" in StaticMapService(MapSettings()).build_url(request)

    def test_overrides_apply_to_one_call(self, service: StaticMapService) -> None:
        """Keyword overrides replace request fields for that call only."""
        request = service.create_request(markers=ENGLISH_MARKERS)
        url = service.build_url(request, maptype="cycle", size="300x200", zoom=None)

        assert "&size=300x200&" in url
        assert url.endswith("&maptype=cycle")

        url = service.build_url(request)
        assert "&size=500x350&" in url
        assert url.endswith("&maptype=mapnik")

    def test_invalid_override(self, service: StaticMapService) -> None:
        """Overrides are validated like the request itself."""
        request = service.create_request()
        with pytest.raises(InvalidArgument):
            service.build_url(request, size=(0, 0))

    def test_custom_baseurl(self, service: StaticMapService) -> None:
        """The base URL is used verbatim."""
        request = service.create_request(baseurl="https://maps.example.org/staticmap.php")
        assert service.build_url(request).startswith("https://maps.example.org/staticmap.php?")


class TestFormatUrl:
    """Tests for formatting resolved requests."""

    def test_numbers_use_fifteen_significant_digits(self) -> None:
        """Whole numbers drop their decimals and long ones are rounded."""
        request = MapRequest(markers=[[1.0, 2.5, "a"], [-3.25, 4, "b"]])
        url = format_url(request, GeoPoint(51.672218765432109, 0.0), 9)
        assert "center=51.6722187654321,0&zoom=9" in url
        assert "markers=1,2.5,a|-3.25,4,b" in url


def test_static_map_url() -> None:
    """The one-shot helper builds a URL with the global settings."""
    url = static_map_url(markers=ENGLISH_MARKERS, size=[756, 476], maptype="mapnik")
    assert "&zoom=7&" in url
    assert url.endswith("&maptype=mapnik")
