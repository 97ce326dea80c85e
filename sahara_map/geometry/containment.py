"""Point-in-region tests by ray casting.

A horizontal ray is cast from the point towards +x; each edge it crosses
toggles the inside flag (even-odd rule).  Edges are taken between
consecutive positions, wrapping from the last position back to the first,
so closed and unclosed rings give the same answer.

Points exactly on an edge or vertex are not guaranteed to be classified
either way; the result depends on floating-point rounding of the crossing
test.  Callers use this for click feedback, where that does not matter.

Region containment checks outer rings only.  A point inside a hole of a
region polygon still counts as inside the region.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sahara_map.models.geojson import Feature, FeatureCollection, Ring


def point_in_ring(point: Sequence[float], ring: Ring) -> bool:
    """Whether *point* ``(x, y)`` lies inside *ring*.

    An empty ring contains nothing.
    """
    px, py = point[0], point[1]
    inside = False
    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i][0], ring[i][1]
        xj, yj = ring[j][0], ring[j][1]
        if (yi > py) != (yj > py) and px < (xj - xi) * (py - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def feature_contains(point: Sequence[float], feature: Feature) -> bool:
    """Whether *point* lies inside the outer ring of any polygon of *feature*."""
    return any(point_in_ring(point, ring) for ring in feature.outer_rings())


def feature_at(point: Sequence[float], collection: FeatureCollection) -> Feature | None:
    """First feature (in collection order) whose outer ring contains *point*."""
    for feature in collection.features:
        if feature_contains(point, feature):
            return feature
    return None


def is_in_region(point: Sequence[float], collection: FeatureCollection) -> bool:
    """Whether *point* lies inside any feature of *collection* (outer rings only)."""
    return feature_at(point, collection) is not None
