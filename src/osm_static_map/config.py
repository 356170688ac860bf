"""Configuration settings for the static map URL builder.

This module defines the configuration settings for the package, including the
static map service defaults and logging options. It uses Pydantic's BaseSettings
for environment variable management.
"""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASEURL = "http://staticmap.openstreetmap.de/staticmap.php"
DEFAULT_SIZE = (500, 350)
DEFAULT_MAPTYPE = "mapnik"
DEFAULT_ZOOM = 17

# Assumed standard pixel size of 0.28 millimeters as defined by the OGC SLD.
DEFAULT_PIXEL_WIDTH = 0.00028


class MapSettings(BaseModel):
    """Defaults for requests sent to the static map service.

    Attributes:
        baseurl: Base URL of the static map service.
        size: Default map size in pixels as (width, height).
        maptype: Default map style identifier.
        default_zoom: Zoom level used when no markers are given.
        pixel_width: Physical size of one rendered pixel in meters.
    """

    baseurl: str = Field(DEFAULT_BASEURL, description="Static map service base URL")
    size: tuple[int, int] = Field(DEFAULT_SIZE, description="Default map size (width, height)")
    maptype: str = Field(DEFAULT_MAPTYPE, description="Default map type")
    default_zoom: int = Field(
        DEFAULT_ZOOM, ge=1, le=18, description="Zoom level used when no markers are given"
    )
    pixel_width: float = Field(
        DEFAULT_PIXEL_WIDTH, gt=0, description="Rendered pixel width in meters"
    )


class LoggingSettings(BaseModel):
    """Logging configuration settings.

    Attributes:
        level: The logging level (e.g., INFO, DEBUG).
        format: The log message format string.
    """

    level: str = Field("INFO", description="Logging level")
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )


class Settings(BaseSettings):
    """Global application settings.

    Loaded from environment variables (and an optional ``.env`` file), with
    nested sections separated by ``__``, e.g. ``MAP__MAPTYPE=cycle``.

    Attributes:
        map: Static map service defaults.
        logging: Logging configuration settings.
    """

    map: MapSettings = Field(default_factory=MapSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of the settings.

    Returns:
        The global Settings instance.
    """
    return Settings()
