"""Frontend components for the static map application.

This module contains reusable UI components for the Streamlit interface,
including the marker table conversions and the map preview.
"""

from collections.abc import Iterable

import pandas as pd
import streamlit as st

from osm_static_map.exceptions import InvalidArgument
from osm_static_map.models import Marker

MARKER_COLUMNS = ["lat", "lon", "style"]
DEFAULT_MARKER_STYLE = "ol-marker"


def markers_to_dataframe(markers: Iterable[Marker]) -> pd.DataFrame:
    """Convert markers into an editable table.

    Args:
        markers: Markers to show.

    Returns:
        A DataFrame with 'lat', 'lon' and 'style' columns.
    """
    rows = [marker.model_dump() for marker in markers]
    return pd.DataFrame(rows, columns=MARKER_COLUMNS)


def markers_from_dataframe(df: pd.DataFrame) -> list[Marker]:
    """Convert an edited marker table back into markers.

    Rows without a latitude or longitude are skipped, since the table editor
    leaves them half filled while the user is typing. A missing style falls
    back to ``ol-marker``.

    Args:
        df: DataFrame with 'lat', 'lon' and 'style' columns.

    Returns:
        The markers in table order.

    Raises:
        InvalidArgument: If a column is missing or a row is not a valid marker.
    """
    missing = set(MARKER_COLUMNS) - set(df.columns)
    if missing:
        raise InvalidArgument(f"marker table is missing columns: {sorted(missing)}")

    complete = df.dropna(subset=["lat", "lon"])
    styles = complete["style"].fillna("").astype(str).str.strip()
    styles = styles.where(styles != "", DEFAULT_MARKER_STYLE)

    markers = []
    for lat, lon, style in zip(complete["lat"], complete["lon"], styles, strict=True):
        try:
            markers.append(Marker(lat=float(lat), lon=float(lon), style=style))
        except ValueError as exc:
            raise InvalidArgument(f"invalid marker ({lat}, {lon}, {style}): {exc}") from exc
    return markers


def render_map_preview(url: str, width: int) -> None:
    """Show the generated URL and let the browser load the map image.

    Args:
        url: Static map URL.
        width: Display width in pixels.
    """
    st.code(url, language=None)
    st.image(url, width=width)
