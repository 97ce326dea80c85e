"""GeoJSON data model for region boundaries.

Only the two areal geometry types the map works with are modelled:
``Polygon`` and ``MultiPolygon``.  Positions keep whatever numbers the
source document carried (including any third dimension) so that a
``from_dict`` / ``to_dict`` round-trip reproduces the input exactly;
properties, ids and foreign members are carried through untouched.

Collections are frozen once loaded.  Transformations (reprojection, mask
building) always produce new objects.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar

from sahara_map.core.exceptions import UnsupportedGeometryError
from sahara_map.core.ingress import GeoJSONContractError

logger = logging.getLogger("sahara_map.models.geojson")

Position = tuple[float, ...]
"""``(lon, lat[, extra...])``; the first two values are x and y."""

Ring = list[Position]
"""Ordered positions; closed when first == last."""

PolygonCoords = list[Ring]
"""Ring 0 is the outer boundary, rings 1.. are holes."""


@dataclass(frozen=True, slots=True)
class Polygon:
    """A single polygon: outer ring followed by optional holes."""

    coordinates: list[Ring] = field(default_factory=list)
    type: ClassVar[str] = "Polygon"

    def polygons(self) -> list[PolygonCoords]:
        """Return the coordinates as a one-element list of polygons."""
        return [self.coordinates]

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.type,
            "coordinates": [_ring_to_lists(ring) for ring in self.coordinates],
        }


@dataclass(frozen=True, slots=True)
class MultiPolygon:
    """A set of independent polygons."""

    coordinates: list[PolygonCoords] = field(default_factory=list)
    type: ClassVar[str] = "MultiPolygon"

    def polygons(self) -> list[PolygonCoords]:
        """Return the constituent polygons in document order."""
        return list(self.coordinates)

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.type,
            "coordinates": [
                [_ring_to_lists(ring) for ring in polygon] for polygon in self.coordinates
            ],
        }


Geometry = Polygon | MultiPolygon


@dataclass(frozen=True, slots=True)
class Feature:
    """A region geometry tagged with display properties.

    Attributes:
        geometry: Polygon or MultiPolygon geometry.
        properties: Free-form properties (``None`` when the document had ``null``).
        id: Optional feature identifier.
        foreign_members: Any other top-level keys, preserved verbatim.
    """

    geometry: Geometry
    properties: dict[str, Any] | None = field(default_factory=dict)
    id: str | int | None = None
    foreign_members: dict[str, Any] = field(default_factory=dict)

    def outer_rings(self) -> list[Ring]:
        """Outer ring of every polygon, skipping polygons with no rings."""
        return [polygon[0] for polygon in self.geometry.polygons() if polygon]

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON Feature dict."""
        data: dict[str, object] = dict(self.foreign_members)
        data["type"] = "Feature"
        if self.id is not None:
            data["id"] = self.id
        data["geometry"] = self.geometry.to_dict()
        data["properties"] = copy.deepcopy(self.properties)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Feature:
        """Deserialise from a GeoJSON Feature dict.

        Raises:
            GeoJSONContractError: If the feature or its coordinates are malformed.
            UnsupportedGeometryError: If the geometry is not Polygon/MultiPolygon.
        """
        if not isinstance(data, dict):
            msg = f"Feature must be an object, got {type(data).__name__}"
            raise GeoJSONContractError(msg)

        properties = data.get("properties", {})
        if properties is not None and not isinstance(properties, dict):
            msg = f"Feature properties must be an object, got {type(properties).__name__}"
            raise GeoJSONContractError(msg)

        foreign = {
            k: copy.deepcopy(v)
            for k, v in data.items()
            if k not in ("type", "id", "geometry", "properties")
        }
        return cls(
            geometry=geometry_from_dict(data.get("geometry")),
            properties=copy.deepcopy(properties),
            id=data.get("id"),
            foreign_members=foreign,
        )


@dataclass(frozen=True, slots=True)
class FeatureCollection:
    """Ordered features plus any collection-level foreign members (``name``, ``crs``)."""

    features: list[Feature] = field(default_factory=list)
    foreign_members: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.features)

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON FeatureCollection dict."""
        data: dict[str, object] = dict(copy.deepcopy(self.foreign_members))
        data["type"] = "FeatureCollection"
        data["features"] = [feature.to_dict() for feature in self.features]
        return data

    @classmethod
    def from_dict(cls, data: Any) -> FeatureCollection:
        """Deserialise from a GeoJSON FeatureCollection dict.

        Features whose geometry is missing or of a non-areal type are
        skipped with a warning; one stray Point does not sink the region.

        Raises:
            GeoJSONContractError: If *data* is not a FeatureCollection or a
                polygon's coordinates are malformed.
        """
        if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
            kind = data.get("type") if isinstance(data, dict) else type(data).__name__
            msg = f"Expected a GeoJSON FeatureCollection, got {kind!r}"
            raise GeoJSONContractError(msg)

        raw_features = data.get("features")
        if not isinstance(raw_features, list):
            msg = "FeatureCollection.features must be a list"
            raise GeoJSONContractError(msg)

        features: list[Feature] = []
        for index, raw in enumerate(raw_features):
            try:
                features.append(Feature.from_dict(raw))
            except UnsupportedGeometryError as exc:
                logger.warning("Skipping feature | index=%d | reason=%s", index, exc.message)

        foreign = {
            k: copy.deepcopy(v) for k, v in data.items() if k not in ("type", "features")
        }
        return cls(features=features, foreign_members=foreign)


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def geometry_from_dict(data: Any) -> Geometry:
    """Build a Polygon or MultiPolygon from a GeoJSON geometry dict.

    Raises:
        UnsupportedGeometryError: For ``null`` or non-areal geometry types.
        GeoJSONContractError: If the coordinates are malformed.
    """
    if data is None:
        msg = "Feature has no geometry"
        raise UnsupportedGeometryError(msg)
    if not isinstance(data, dict):
        msg = f"Geometry must be an object, got {type(data).__name__}"
        raise GeoJSONContractError(msg)

    geometry_type = data.get("type")
    coordinates = data.get("coordinates")
    if geometry_type == Polygon.type:
        return Polygon(coordinates=_parse_polygon(coordinates))
    if geometry_type == MultiPolygon.type:
        if not isinstance(coordinates, list):
            msg = "MultiPolygon coordinates must be a list of polygons"
            raise GeoJSONContractError(msg)
        return MultiPolygon(coordinates=[_parse_polygon(p) for p in coordinates])

    msg = f"Unsupported geometry type {geometry_type!r}"
    raise UnsupportedGeometryError(msg)


def _parse_polygon(raw: Any) -> PolygonCoords:
    if not isinstance(raw, list):
        msg = "Polygon coordinates must be a list of rings"
        raise GeoJSONContractError(msg)
    return [_parse_ring(ring) for ring in raw]


def _parse_ring(raw: Any) -> Ring:
    if not isinstance(raw, list):
        msg = "Ring must be a list of positions"
        raise GeoJSONContractError(msg)
    ring: Ring = []
    for position in raw:
        if (
            not isinstance(position, (list, tuple))
            or len(position) < 2
            or not all(
                isinstance(v, (int, float)) and not isinstance(v, bool) for v in position
            )
        ):
            msg = f"Invalid position {position!r}: expected [x, y] numbers"
            raise GeoJSONContractError(msg)
        ring.append(tuple(position))
    return ring


def _ring_to_lists(ring: Ring) -> list[list[float]]:
    return [list(c) for c in ring]
