"""Bounds aggregation for pan restriction and fit-view."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sahara_map.core.exceptions import EmptyGeometryError
from sahara_map.models.bounds import Bounds

if TYPE_CHECKING:
    from sahara_map.models.geojson import FeatureCollection


def compute_bounds(collection: FeatureCollection) -> Bounds:
    """Enclosing rectangle of every position in *collection*.

    Holes are included; they sit inside their outer ring and never widen
    the result for valid polygons.

    Raises:
        EmptyGeometryError: If the collection contains no positions.
    """
    west = south = float("inf")
    east = north = float("-inf")
    for feature in collection.features:
        for polygon in feature.geometry.polygons():
            for ring in polygon:
                for position in ring:
                    lon, lat = position[0], position[1]
                    west = min(west, lon)
                    east = max(east, lon)
                    south = min(south, lat)
                    north = max(north, lat)

    if west > east:
        msg = "Cannot compute bounds of a collection with no coordinates"
        raise EmptyGeometryError(msg)
    return Bounds(west=west, south=south, east=east, north=north)


def expand(bounds: Bounds, margin: float) -> Bounds:
    """Widen *bounds* by *margin* degrees on every side.

    No clamping: the result may exceed ±180 / ±90.

    Raises:
        BoundsError: If a negative *margin* would invert the rectangle.
    """
    return Bounds(
        west=bounds.west - margin,
        south=bounds.south - margin,
        east=bounds.east + margin,
        north=bounds.north + margin,
    )
