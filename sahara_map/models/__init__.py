"""Data models.

- geojson: Polygon / MultiPolygon / Feature / FeatureCollection
- bounds: West/south/east/north rectangle
- overlay: Raster overlay bounds document (pydantic)
"""

from sahara_map.models.bounds import Bounds
from sahara_map.models.geojson import (
    Feature,
    FeatureCollection,
    MultiPolygon,
    Polygon,
    Position,
    Ring,
)
from sahara_map.models.overlay import OverlayDescriptor, OverlayDescriptorError

__all__ = [
    "Bounds",
    "Feature",
    "FeatureCollection",
    "MultiPolygon",
    "OverlayDescriptor",
    "OverlayDescriptorError",
    "Polygon",
    "Position",
    "Ring",
]
