"""Main application module for the static map builder."""

import logging

import pandas as pd
import streamlit as st

from osm_static_map.backend.service import StaticMapService
from osm_static_map.config import Settings, get_settings
from osm_static_map.exceptions import StaticMapError
from osm_static_map.frontend.components import (
    markers_from_dataframe,
    markers_to_dataframe,
    render_map_preview,
)
from osm_static_map.logger import configure_logging
from osm_static_map.models import Marker

logger = logging.getLogger(__name__)

MAPTYPES = ["mapnik", "cycle", "osmarenderer"]

EXAMPLE_MARKERS = [
    Marker(lat=51.8785011494, lon=-0.3767887732, style="ol-marker"),
    Marker(lat=51.455313, lon=-2.591902, style="ol-marker"),
]


def load_config() -> Settings:
    """Loads the application configuration.

    Raises:
        RuntimeError: If the configuration cannot be loaded.
    """
    try:
        return get_settings()
    except Exception as e:
        raise RuntimeError(f"Failed to load configuration: {e}") from e


@st.cache_resource
def get_service(_settings: Settings) -> StaticMapService:
    """Creates and caches the StaticMapService instance."""
    return StaticMapService(_settings.map)


def render_sidebar(settings: Settings) -> dict:
    """Render the map option widgets.

    Returns:
        Request fields chosen by the user.
    """
    st.sidebar.header("Map options")
    default_width, default_height = settings.map.size
    width = st.sidebar.number_input("Width (px)", min_value=1, value=default_width, step=10)
    height = st.sidebar.number_input("Height (px)", min_value=1, value=default_height, step=10)

    maptypes = MAPTYPES if settings.map.maptype in MAPTYPES else [settings.map.maptype, *MAPTYPES]
    maptype = st.sidebar.selectbox("Map type", maptypes, index=maptypes.index(settings.map.maptype))

    config: dict = {"size": (int(width), int(height)), "maptype": maptype}

    if st.sidebar.checkbox("Set center manually"):
        lat = st.sidebar.number_input("Center latitude", -90.0, 90.0, 0.0, format="%.6f")
        lon = st.sidebar.number_input("Center longitude", -180.0, 180.0, 0.0, format="%.6f")
        config["center"] = (lat, lon)

    if st.sidebar.checkbox("Set zoom manually"):
        config["zoom"] = st.sidebar.slider("Zoom", 1, 18, settings.map.default_zoom)

    return config


def main() -> None:
    """Main entry point for the Streamlit app."""
    st.set_page_config(page_title="Static Map Builder", layout="wide")

    settings = load_config()
    configure_logging(settings.logging)
    service = get_service(settings)

    st.title("OpenStreetMap static map builder")
    config = render_sidebar(settings)

    st.subheader("Markers")
    edited: pd.DataFrame = st.data_editor(
        markers_to_dataframe(EXAMPLE_MARKERS),
        num_rows="dynamic",
    )

    try:
        request = service.create_request(markers=markers_from_dataframe(edited), **config)
        url = service.build_url(request)
        resolution = service.resolve(request)
    except StaticMapError as e:
        logger.warning("Could not build map URL: %s", e)
        st.error(f"Could not build map URL: {e}")
        return

    col_center, col_zoom = st.columns(2)
    col_center.metric("Center", f"{resolution.center.lat:.5f}, {resolution.center.lon:.5f}")
    col_zoom.metric("Zoom", resolution.zoom)

    render_map_preview(url, width=request.size.width)


if __name__ == "__main__":
    main()
