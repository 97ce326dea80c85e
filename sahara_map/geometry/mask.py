"""Inverse world mask.

The mask is one Polygon: the whole-world rectangle as its outer ring and
the outer ring of every region polygon as a hole.  Rendered as a
semi-opaque fill it greys out everything except the region.

Winding follows the GeoJSON convention MapLibre relies on for fills:
outer ring counter-clockwise, holes clockwise.  Holes inside the region
polygons themselves are dropped; the mask only needs the footprint.
"""

from __future__ import annotations

import logging

from sahara_map.geometry.winding import enforce_clockwise
from sahara_map.models.geojson import Feature, FeatureCollection, Polygon, Ring

logger = logging.getLogger("sahara_map.geometry.mask")

WORLD_RING: Ring = [
    (-180.0, -90.0),
    (180.0, -90.0),
    (180.0, 90.0),
    (-180.0, 90.0),
    (-180.0, -90.0),
]
"""Whole-world rectangle, counter-clockwise (x = lon, y = lat): SW, SE, NE, NW, SW."""


def close_ring(ring: Ring) -> Ring:
    """Return a copy of *ring* with its first position repeated at the end if missing."""
    if ring and ring[0] != ring[-1]:
        return [*ring, ring[0]]
    return list(ring)


def mask_holes(collection: FeatureCollection) -> list[Ring]:
    """Closed, clockwise hole rings for every polygon of every feature, in input order."""
    return [
        enforce_clockwise(close_ring(ring))
        for feature in collection.features
        for ring in feature.outer_rings()
    ]


def build_inverse_mask(collection: FeatureCollection) -> Feature:
    """Build the world-minus-region mask feature.

    Returns:
        A Polygon feature with coordinates ``[WORLD_RING, *holes]`` and
        empty properties.  The ring count is always
        ``1 + number of non-empty polygons`` in *collection*.
    """
    holes = mask_holes(collection)
    logger.debug("Inverse mask built | holes=%d", len(holes))
    return Feature(geometry=Polygon(coordinates=[list(WORLD_RING), *holes]), properties={})


def build_mask_collection(collection: FeatureCollection) -> FeatureCollection:
    """Wrap ``build_inverse_mask`` in a FeatureCollection for use as a map source."""
    return FeatureCollection(features=[build_inverse_mask(collection)])
