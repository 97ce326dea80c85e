"""Style-document map shell.

Materialises map operations into a MapLibre style-spec (version 8)
document plus the map constructor options, ready to be written to disk
and loaded by a static page.  Each ``apply`` batch runs against a copy of
the document and is swapped in only if every operation succeeds.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any

from sahara_map.core.constants import BASEMAPS, basemap_layer, basemap_source
from sahara_map.orchestrators.map_state import InvalidTransitionError
from sahara_map.shell.base import MapShell

if TYPE_CHECKING:
    from sahara_map.core.config import MapConfig
    from sahara_map.models.bounds import Bounds
    from sahara_map.orchestrators.map_state import FitBoundsOptions, MapOperation

logger = logging.getLogger("sahara_map.shell.style")

STYLE_VERSION = 8


class StyleDocumentShell(MapShell):
    """MapShell that records the resulting style document.

    Attributes:
        notifications: Messages passed to ``notify``, oldest first.
    """

    def __init__(self, style: dict[str, Any], options: dict[str, Any] | None = None) -> None:
        self._style = style
        self._options = options or {}
        self._camera: dict[str, Any] | None = None
        self.notifications: list[str] = []

    @classmethod
    def from_config(cls, config: MapConfig) -> StyleDocumentShell:
        """A fresh map: every basemap source, the default basemap layer."""
        style = {
            "version": STYLE_VERSION,
            "sources": {BASEMAPS[name]["source_id"]: basemap_source(name) for name in BASEMAPS},
            "layers": [basemap_layer(config.default_basemap)],
        }
        options = {
            "center": [config.initial_center_lon, config.initial_center_lat],
            "zoom": config.initial_zoom,
            "maxZoom": config.max_zoom,
            "antialias": True,
        }
        return cls(style, options)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def style(self) -> dict[str, Any]:
        """The current style document (a copy)."""
        return copy.deepcopy(self._style)

    @property
    def layer_ids(self) -> list[str]:
        """Layer ids, bottom first."""
        return [layer["id"] for layer in self._style["layers"]]

    @property
    def source_ids(self) -> list[str]:
        return list(self._style["sources"])

    def to_dict(self) -> dict[str, Any]:
        """Style, constructor options and the last fit-view request."""
        return {
            "style": self.style,
            "options": copy.deepcopy(self._options),
            "camera": copy.deepcopy(self._camera),
        }

    # ------------------------------------------------------------------
    # MapShell
    # ------------------------------------------------------------------

    def apply(self, operations: list[MapOperation]) -> None:
        """Apply *operations* atomically.

        Raises:
            InvalidTransitionError: If any operation fails; the document is
                left exactly as it was before the call.
        """
        saved = (copy.deepcopy(self._style), copy.deepcopy(self._options), self._camera)
        try:
            super().apply(operations)
        except InvalidTransitionError:
            self._style, self._options, self._camera = saved
            logger.warning("Style batch rolled back | operations=%d", len(operations))
            raise

    def add_source(self, source_id: str, source: dict[str, Any]) -> None:
        sources = self._style["sources"]
        if source_id in sources:
            msg = f"There is already a source with id {source_id!r}"
            raise InvalidTransitionError(msg)
        sources[source_id] = copy.deepcopy(source)

    def remove_source(self, source_id: str) -> None:
        sources = self._style["sources"]
        if source_id not in sources:
            msg = f"There is no source with id {source_id!r}"
            raise InvalidTransitionError(msg)
        in_use = [
            layer["id"] for layer in self._style["layers"] if layer.get("source") == source_id
        ]
        if in_use:
            msg = f"Source {source_id!r} is still used by layer(s) {in_use}"
            raise InvalidTransitionError(msg)
        del sources[source_id]

    def add_layer(self, layer: dict[str, Any], *, before: str | None = None) -> None:
        layers = self._style["layers"]
        ids = [existing["id"] for existing in layers]
        if layer["id"] in ids:
            msg = f"Layer with id {layer['id']!r} already exists"
            raise InvalidTransitionError(msg)
        source = layer.get("source")
        if source is not None and source not in self._style["sources"]:
            msg = f"Layer {layer['id']!r} references missing source {source!r}"
            raise InvalidTransitionError(msg)
        if before is None:
            layers.append(copy.deepcopy(layer))
        elif before in ids:
            layers.insert(ids.index(before), copy.deepcopy(layer))
        else:
            msg = f"Cannot add layer {layer['id']!r} before non-existing layer {before!r}"
            raise InvalidTransitionError(msg)

    def remove_layer(self, layer_id: str) -> None:
        ids = self.layer_ids
        if layer_id not in ids:
            msg = f"There is no layer with id {layer_id!r}"
            raise InvalidTransitionError(msg)
        del self._style["layers"][ids.index(layer_id)]

    def set_max_bounds(self, bounds: Bounds) -> None:
        self._options["maxBounds"] = bounds.to_lnglat_pairs()

    def fit_bounds(self, bounds: Bounds, options: FitBoundsOptions) -> None:
        self._camera = {"bounds": bounds.to_lnglat_pairs(), **options.to_dict()}

    def notify(self, message: str) -> None:
        logger.warning("User notification | message=%s", message)
        self.notifications.append(message)
