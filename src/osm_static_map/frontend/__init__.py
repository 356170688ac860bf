"""Frontend package for the static map builder."""

from .app import main
from .components import markers_from_dataframe, markers_to_dataframe, render_map_preview

__all__ = ["main", "markers_from_dataframe", "markers_to_dataframe", "render_map_preview"]
