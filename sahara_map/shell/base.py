"""MapShell abstract base class.

Defines the contract between the session and whatever actually renders
the map (a browser bridge, a style-document writer, a test double).  The
session never manipulates the map directly: it plans a list of
operations and hands the whole list to ``apply``.

Primitives mirror the MapLibre GL map API:

    add_source, remove_source: ``map.addSource`` / ``map.removeSource``
    add_layer, remove_layer:   ``map.addLayer(layer, before)`` / ``map.removeLayer``
    set_max_bounds:            ``map.setMaxBounds``
    fit_bounds:                ``map.fitBounds``
    notify:                    user-visible notification (``alert``)
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any

from sahara_map.orchestrators.map_state import (
    AddLayer,
    AddSource,
    FitBounds,
    RemoveLayer,
    RemoveSource,
    SetMaxBounds,
)

if TYPE_CHECKING:
    from sahara_map.models.bounds import Bounds
    from sahara_map.orchestrators.map_state import FitBoundsOptions, MapOperation


class MapShell(abc.ABC):
    """Abstract rendering surface.

    ``apply`` dispatches each operation to the matching primitive in
    order.  Adapters that can swap state in one step (see
    ``StyleDocumentShell``) override it to make a batch all-or-nothing.
    """

    def apply(self, operations: list[MapOperation]) -> None:
        """Execute *operations* in order."""
        for op in operations:
            if isinstance(op, AddSource):
                self.add_source(op.source_id, op.source)
            elif isinstance(op, RemoveSource):
                self.remove_source(op.source_id)
            elif isinstance(op, AddLayer):
                self.add_layer(op.layer, before=op.before)
            elif isinstance(op, RemoveLayer):
                self.remove_layer(op.layer_id)
            elif isinstance(op, SetMaxBounds):
                self.set_max_bounds(op.bounds)
            elif isinstance(op, FitBounds):
                self.fit_bounds(op.bounds, op.options)
            else:
                msg = f"Unknown map operation: {type(op).__name__}"
                raise TypeError(msg)

    @abc.abstractmethod
    def add_source(self, source_id: str, source: dict[str, Any]) -> None:
        """Register a data source under *source_id*."""

    @abc.abstractmethod
    def remove_source(self, source_id: str) -> None:
        """Remove the source registered under *source_id*."""

    @abc.abstractmethod
    def add_layer(self, layer: dict[str, Any], *, before: str | None = None) -> None:
        """Add a style layer, beneath layer *before* when given, else on top."""

    @abc.abstractmethod
    def remove_layer(self, layer_id: str) -> None:
        """Remove the layer with id *layer_id*."""

    @abc.abstractmethod
    def set_max_bounds(self, bounds: Bounds) -> None:
        """Restrict panning to *bounds*."""

    @abc.abstractmethod
    def fit_bounds(self, bounds: Bounds, options: FitBoundsOptions) -> None:
        """Move the camera to show *bounds*."""

    @abc.abstractmethod
    def notify(self, message: str) -> None:
        """Show *message* to the user."""
