"""Map configuration loaded from environment variables.

All values have defaults matching the published Sahara map, so an empty
environment produces a working configuration.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any numeric value
    is out of its valid range or the default basemap is unknown.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

from sahara_map.core.constants import BASEMAPS, SATELLITE_BASEMAP
from sahara_map.core.exceptions import PipelineError


class ConfigValidationError(PipelineError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class MapConfig:
    """Immutable map configuration.

    Loaded once per session and threaded through the activities and the
    state planner.

    Attributes:
        region_source: URL or path of the region GeoJSON.
        overlay_bounds_source: URL or path of the raster overlay bounds document.
        overlay_image_url: URL of the raster overlay image handed to the map.
        data_base_url: Prefix joined in front of relative sources (empty = none).
        bounds_margin_deg: Margin in degrees added around the region for pan limits.
        mask_color: Fill colour of the world mask.
        mask_opacity: Fill opacity of the world mask (0-1).
        overlay_opacity: Raster opacity of the overlay (0-1).
        fit_padding_top: Top padding (px) when fitting the view.
        fit_padding_bottom: Bottom padding (px) when fitting the view.
        fit_padding_left: Left padding (px); wide to clear the side widgets.
        fit_padding_right: Right padding (px) when fitting the view.
        fit_duration_ms: Fit-view animation duration in milliseconds.
        fit_max_zoom: Maximum zoom the fit-view animation may reach.
        max_zoom: Hard maximum zoom of the map.
        initial_center_lon: Initial map centre longitude.
        initial_center_lat: Initial map centre latitude.
        initial_zoom: Initial zoom level.
        default_basemap: Basemap shown at start-up (``satellite`` or ``osm``).
        request_timeout_s: HTTP timeout for data fetches in seconds.
    """

    region_source: str = "Sahara desert.geojson"
    overlay_bounds_source: str = "data/alos_palsar_kufra_basin_bounds.json"
    overlay_image_url: str = "data/alos_palsar_kufra_basin.png"
    data_base_url: str = ""
    bounds_margin_deg: float = 9.0
    mask_color: str = "#6b7280"
    mask_opacity: float = 0.75
    overlay_opacity: float = 0.7
    fit_padding_top: int = 50
    fit_padding_bottom: int = 50
    fit_padding_left: int = 360
    fit_padding_right: int = 50
    fit_duration_ms: int = 2000
    fit_max_zoom: float = 5.0
    max_zoom: float = 16.4
    initial_center_lon: float = 15.0
    initial_center_lat: float = 20.0
    initial_zoom: float = 1.5
    default_basemap: str = SATELLITE_BASEMAP
    request_timeout_s: float = 30.0

    @classmethod
    def from_env(cls) -> MapConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a required
                string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``BOUNDS_MARGIN_DEG=abc``).
        """
        config = cls(
            region_source=os.getenv("REGION_SOURCE", "Sahara desert.geojson"),
            overlay_bounds_source=os.getenv(
                "OVERLAY_BOUNDS_SOURCE", "data/alos_palsar_kufra_basin_bounds.json"
            ),
            overlay_image_url=os.getenv("OVERLAY_IMAGE_URL", "data/alos_palsar_kufra_basin.png"),
            data_base_url=os.getenv("DATA_BASE_URL", ""),
            bounds_margin_deg=float(os.getenv("BOUNDS_MARGIN_DEG", "9")),
            mask_color=os.getenv("MASK_COLOR", "#6b7280"),
            mask_opacity=float(os.getenv("MASK_OPACITY", "0.75")),
            overlay_opacity=float(os.getenv("OVERLAY_OPACITY", "0.7")),
            fit_padding_top=int(os.getenv("FIT_PADDING_TOP", "50")),
            fit_padding_bottom=int(os.getenv("FIT_PADDING_BOTTOM", "50")),
            fit_padding_left=int(os.getenv("FIT_PADDING_LEFT", "360")),
            fit_padding_right=int(os.getenv("FIT_PADDING_RIGHT", "50")),
            fit_duration_ms=int(os.getenv("FIT_DURATION_MS", "2000")),
            fit_max_zoom=float(os.getenv("FIT_MAX_ZOOM", "5")),
            max_zoom=float(os.getenv("MAX_ZOOM", "16.4")),
            initial_center_lon=float(os.getenv("INITIAL_CENTER_LON", "15")),
            initial_center_lat=float(os.getenv("INITIAL_CENTER_LAT", "20")),
            initial_zoom=float(os.getenv("INITIAL_ZOOM", "1.5")),
            default_basemap=os.getenv("DEFAULT_BASEMAP", SATELLITE_BASEMAP),
            request_timeout_s=float(os.getenv("REQUEST_TIMEOUT_S", "30")),
        )
        _validate(config)
        return config

    def with_overrides(self, **overrides: Any) -> MapConfig:
        """Return a validated copy with *overrides* applied; ``None`` values are ignored.

        Raises:
            ConfigValidationError: If the resulting configuration is invalid.
        """
        config = replace(self, **{k: v for k, v in overrides.items() if v is not None})
        _validate(config)
        return config


def _validate(config: MapConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.region_source:
        raise ConfigValidationError("REGION_SOURCE", config.region_source, "must not be empty")

    if config.bounds_margin_deg < 0:
        raise ConfigValidationError(
            "BOUNDS_MARGIN_DEG",
            config.bounds_margin_deg,
            "must be >= 0 (degrees)",
        )

    for key, opacity in (
        ("MASK_OPACITY", config.mask_opacity),
        ("OVERLAY_OPACITY", config.overlay_opacity),
    ):
        if not 0.0 <= opacity <= 1.0:
            raise ConfigValidationError(key, opacity, "must be between 0 and 1")

    for key, padding in (
        ("FIT_PADDING_TOP", config.fit_padding_top),
        ("FIT_PADDING_BOTTOM", config.fit_padding_bottom),
        ("FIT_PADDING_LEFT", config.fit_padding_left),
        ("FIT_PADDING_RIGHT", config.fit_padding_right),
    ):
        if padding < 0:
            raise ConfigValidationError(key, padding, "must be >= 0 (pixels)")

    if config.fit_duration_ms < 0:
        raise ConfigValidationError(
            "FIT_DURATION_MS",
            config.fit_duration_ms,
            "must be >= 0 (milliseconds)",
        )

    if config.fit_max_zoom <= 0:
        raise ConfigValidationError("FIT_MAX_ZOOM", config.fit_max_zoom, "must be > 0")

    if config.max_zoom <= 0:
        raise ConfigValidationError("MAX_ZOOM", config.max_zoom, "must be > 0")

    if config.default_basemap not in BASEMAPS:
        raise ConfigValidationError(
            "DEFAULT_BASEMAP",
            config.default_basemap,
            f"must be one of {sorted(BASEMAPS)}",
        )

    if config.request_timeout_s <= 0:
        raise ConfigValidationError(
            "REQUEST_TIMEOUT_S",
            config.request_timeout_s,
            "must be > 0 (seconds)",
        )
