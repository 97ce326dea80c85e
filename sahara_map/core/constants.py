"""Shared map constants. Single source of truth.

Source and layer identifiers are shared between the state planner, the
style-document shell and the tests; keeping them here stops a typo in one
place from silently producing a second, orphaned layer.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Geodetic constants
# ---------------------------------------------------------------------------

MERCATOR_HALF_CIRCUMFERENCE: float = 20037508.34
"""Half the equatorial circumference (m) of the spherical-Mercator convention."""

MAX_LONGITUDE = 180.0
MAX_LATITUDE = 90.0

# ---------------------------------------------------------------------------
# Source identifiers
# ---------------------------------------------------------------------------

MASK_SOURCE_ID = "world-mask-source"
REGION_SOURCE_ID = "sahara-source"
OVERLAY_SOURCE_ID = "alos-palsar"

# ---------------------------------------------------------------------------
# Layer identifiers
# ---------------------------------------------------------------------------

MASK_LAYER_ID = "world-mask"
OVERLAY_LAYER_ID = "alos-palsar-layer"

# ---------------------------------------------------------------------------
# Basemaps
# ---------------------------------------------------------------------------

SATELLITE_BASEMAP = "satellite"
OSM_BASEMAP = "osm"

BASEMAP_TILE_SIZE = 256
BASEMAP_MIN_ZOOM = 0
BASEMAP_MAX_ZOOM = 19

BASEMAPS: dict[str, dict[str, str]] = {
    SATELLITE_BASEMAP: {
        "source_id": "satellite-tiles",
        "layer_id": "satellite-layer",
        "tiles": (
            "https://server.arcgisonline.com/ArcGIS/rest/services/"
            "World_Imagery/MapServer/tile/{z}/{y}/{x}"
        ),
        "attribution": "© Esri",
    },
    OSM_BASEMAP: {
        "source_id": "osm-tiles",
        "layer_id": "osm-tiles-layer",
        "tiles": "https://tile.openstreetmap.org/{z}/{x}/{y}.png",
        "attribution": "© OpenStreetMap contributors",
    },
}
"""Raster basemap catalogue keyed by basemap name."""

BASEMAP_LAYER_IDS: frozenset[str] = frozenset(b["layer_id"] for b in BASEMAPS.values())

# ---------------------------------------------------------------------------
# Feature info
# ---------------------------------------------------------------------------

FEATURE_INFO_FIELDS: tuple[tuple[str, str], ...] = (
    ("NAME", "Name"),
    ("NAME_EN", "English Name"),
    ("REGION", "Region"),
    ("LABEL", "Label"),
    ("FEATURECLA", "Feature Class"),
)
"""``(property key, display label)`` pairs shown for a clicked feature, in order."""


def basemap_source(name: str) -> dict[str, object]:
    """Return the MapLibre raster source definition for basemap *name*.

    Raises:
        KeyError: If *name* is not in ``BASEMAPS``.
    """
    basemap = BASEMAPS[name]
    return {
        "type": "raster",
        "tiles": [basemap["tiles"]],
        "tileSize": BASEMAP_TILE_SIZE,
        "attribution": basemap["attribution"],
    }


def basemap_layer(name: str) -> dict[str, object]:
    """Return the MapLibre raster layer definition for basemap *name*.

    Raises:
        KeyError: If *name* is not in ``BASEMAPS``.
    """
    basemap = BASEMAPS[name]
    return {
        "id": basemap["layer_id"],
        "type": "raster",
        "source": basemap["source_id"],
        "minzoom": BASEMAP_MIN_ZOOM,
        "maxzoom": BASEMAP_MAX_ZOOM,
    }
