"""Pydantic model for the raster overlay bounds document.

The overlay image (an ALOS PALSAR export) is georeferenced by a small
GeoJSON document whose first ring lists the image corners in the order
MapLibre's ``image`` source expects:

    [top-left, top-right, bottom-right, bottom-left]

A closing fifth position (repeat of top-left) is allowed and ignored.
Either a Feature wrapping the polygon or a bare Polygon geometry is
accepted.
"""

from __future__ import annotations

from typing import Any

import pydantic
from pydantic import BaseModel, Field, field_validator

from sahara_map.core.exceptions import ValidationError

CORNER_COUNT = 4


class OverlayDescriptorError(ValidationError):
    """Raised when the overlay bounds document cannot supply four corners."""

    default_stage = "load_overlay"
    default_code = "OVERLAY_DESCRIPTOR_INVALID"


class OverlayGeometry(BaseModel):
    """Polygon geometry carrying the corner ring.

    Attributes:
        type: GeoJSON geometry type, always ``"Polygon"``.
        coordinates: Rings of ``[lng, lat]`` positions; only ring 0 is used.
    """

    type: str = "Polygon"
    coordinates: list[list[list[float]]] = Field(min_length=1)

    @field_validator("coordinates")
    @classmethod
    def _corner_ring(cls, value: list[list[list[float]]]) -> list[list[list[float]]]:
        ring = value[0]
        if len(ring) < CORNER_COUNT:
            msg = f"corner ring needs {CORNER_COUNT} positions, got {len(ring)}"
            raise ValueError(msg)
        for position in ring[:CORNER_COUNT]:
            if len(position) < 2:
                msg = f"corner position {position!r} needs [lng, lat]"
                raise ValueError(msg)
        return value


class OverlayDescriptor(BaseModel):
    """Bounds document for the georeferenced raster overlay."""

    geometry: OverlayGeometry
    properties: dict[str, Any] | None = None

    @property
    def corners(self) -> list[list[float]]:
        """Four ``[lng, lat]`` corners: top-left, top-right, bottom-right, bottom-left."""
        ring = self.geometry.coordinates[0]
        return [[position[0], position[1]] for position in ring[:CORNER_COUNT]]

    @classmethod
    def from_document(cls, data: Any) -> OverlayDescriptor:
        """Validate a fetched bounds document.

        Raises:
            OverlayDescriptorError: If the document is not a Feature or
                Polygon geometry with at least four corner positions.
        """
        if isinstance(data, dict) and "geometry" not in data and "coordinates" in data:
            data = {"geometry": data}
        try:
            return cls.model_validate(data)
        except pydantic.ValidationError as exc:
            msg = f"Invalid overlay bounds document: {exc.error_count()} error(s): {exc}"
            raise OverlayDescriptorError(msg) from exc
