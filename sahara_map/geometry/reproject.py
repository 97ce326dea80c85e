"""Spherical-Mercator detection and conversion to geographic degrees.

Region files arrive either in longitude/latitude degrees (EPSG:4326) or in
spherical-Mercator metres (EPSG:3857).  There is no CRS sniffing: a single
sampled position decides for the whole collection.  If its x exceeds 180 or
its y exceeds 90 in magnitude the collection is treated as metres.  That is
an approximation (a Mercator point within 180 m of the origin looks
geographic) and it lives in ``needs_reprojection`` so it can be tested on
its own.

The inverse transform uses ``R = 20037508.34`` and the spherical formula,
not the WGS 84 ellipsoid.
"""

from __future__ import annotations

import copy
import logging
import math
from collections.abc import Callable

from sahara_map.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MERCATOR_HALF_CIRCUMFERENCE,
)
from sahara_map.core.exceptions import UnsupportedGeometryError
from sahara_map.models.geojson import (
    Feature,
    FeatureCollection,
    Geometry,
    MultiPolygon,
    Polygon,
    PolygonCoords,
    Position,
    Ring,
)

logger = logging.getLogger("sahara_map.geometry.reproject")


def sample_position(collection: FeatureCollection) -> Position | None:
    """First position of the first outer ring of the first feature.

    Returns ``None`` when the collection has no features or the first
    feature's first polygon has no positions.
    """
    if not collection.features:
        return None
    outer_rings = collection.features[0].outer_rings()
    if not outer_rings or not outer_rings[0]:
        return None
    return outer_rings[0][0]


def needs_reprojection(sample: Position | None) -> bool:
    """Whether *sample* lies outside the geographic degree range.

    ``None`` (nothing to sample) is treated as already geographic.
    """
    if sample is None:
        return False
    x, y = sample[0], sample[1]
    return abs(x) > MAX_LONGITUDE or abs(y) > MAX_LATITUDE


def to_geographic(position: Position) -> Position:
    """Convert a spherical-Mercator ``(x, y)`` in metres to ``(lon, lat)`` degrees.

    Any third dimension is dropped.  Northings too large for ``math.exp``
    saturate at the pole.
    """
    x, y = position[0], position[1]
    lon = (x / MERCATOR_HALF_CIRCUMFERENCE) * 180
    lat = (y / MERCATOR_HALF_CIRCUMFERENCE) * 180
    try:
        lat = math.atan(math.exp(lat * math.pi / 180)) * 360 / math.pi - 90
    except OverflowError:
        lat = math.copysign(MAX_LATITUDE, y)
    return (lon, lat)


# ---------------------------------------------------------------------------
# Geometry dispatch
# ---------------------------------------------------------------------------


def _reproject_ring(ring: Ring) -> Ring:
    return [to_geographic(position) for position in ring]


def _reproject_polygon_coords(polygon: PolygonCoords) -> PolygonCoords:
    return [_reproject_ring(ring) for ring in polygon]


def _reproject_polygon(geometry: Geometry) -> Geometry:
    return Polygon(coordinates=_reproject_polygon_coords(geometry.polygons()[0]))


def _reproject_multipolygon(geometry: Geometry) -> Geometry:
    return MultiPolygon(
        coordinates=[_reproject_polygon_coords(p) for p in geometry.polygons()]
    )


_GEOMETRY_REPROJECTORS: dict[str, Callable[[Geometry], Geometry]] = {
    Polygon.type: _reproject_polygon,
    MultiPolygon.type: _reproject_multipolygon,
}


def reproject_geometry(geometry: Geometry) -> Geometry:
    """Reproject a single geometry, dispatching on its type string.

    Raises:
        UnsupportedGeometryError: If no reprojector is registered for the type.
    """
    try:
        reprojector = _GEOMETRY_REPROJECTORS[geometry.type]
    except KeyError:
        msg = f"No reprojector for geometry type {geometry.type!r}"
        raise UnsupportedGeometryError(msg) from None
    return reprojector(geometry)


def reproject(collection: FeatureCollection) -> FeatureCollection:
    """Return a deep copy of *collection* with every position converted to degrees.

    Structure (Polygon vs MultiPolygon), properties, ids and foreign
    members are preserved unchanged.  Unconditional; see
    ``normalize_coordinates`` for the gated form.
    """
    features = [
        Feature(
            geometry=reproject_geometry(feature.geometry),
            properties=copy.deepcopy(feature.properties),
            id=feature.id,
            foreign_members=copy.deepcopy(feature.foreign_members),
        )
        for feature in collection.features
    ]
    return FeatureCollection(
        features=features,
        foreign_members=copy.deepcopy(collection.foreign_members),
    )


def normalize_coordinates(collection: FeatureCollection) -> tuple[FeatureCollection, bool]:
    """Reproject *collection* only if its sampled position looks like metres.

    Idempotent: already-geographic input is returned as is.

    Returns:
        ``(collection, reprojected)``.
    """
    sample = sample_position(collection)
    if not needs_reprojection(sample):
        logger.info("Coordinates already geographic | sample=%s", sample)
        return collection, False

    logger.info(
        "Reprojecting from spherical Mercator | sample=%s | features=%d",
        sample,
        len(collection.features),
    )
    return reproject(collection), True
