"""Map source/layer state and the transitions between states.

The map shell is stateful (sources and layers are added and removed by
id); this module keeps a pure mirror of that state and plans the
operation list that moves it from one state to the next.  Plans are
computed in full before anything is handed to the shell, so a failure
while building the region data never leaves the map half-updated.

Transitions
-----------
- **plan_region_transition**: replace mask/region (and any overlay) and
  restrict/fit the viewport.
- **plan_overlay_addition**: add the raster overlay beneath the mask.
- **plan_basemap_switch**: swap the raster basemap beneath the mask.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sahara_map.core.constants import (
    BASEMAP_LAYER_IDS,
    BASEMAPS,
    MASK_LAYER_ID,
    MASK_SOURCE_ID,
    OVERLAY_LAYER_ID,
    OVERLAY_SOURCE_ID,
    REGION_SOURCE_ID,
    basemap_layer,
    basemap_source,
)

if TYPE_CHECKING:
    from sahara_map.activities.load_overlay import RasterOverlay
    from sahara_map.activities.load_region import RegionData
    from sahara_map.core.config import MapConfig
    from sahara_map.models.bounds import Bounds

logger = logging.getLogger("sahara_map.orchestrators.map_state")


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AddSource:
    source_id: str
    source: dict[str, Any]


@dataclass(frozen=True, slots=True)
class RemoveSource:
    source_id: str


@dataclass(frozen=True, slots=True)
class AddLayer:
    """Add *layer*; insert below the layer with id *before* when given."""

    layer: dict[str, Any]
    before: str | None = None

    @property
    def layer_id(self) -> str:
        return str(self.layer["id"])


@dataclass(frozen=True, slots=True)
class RemoveLayer:
    layer_id: str


@dataclass(frozen=True, slots=True)
class FitBoundsOptions:
    """Fit-view animation parameters.

    Attributes:
        padding: Pixel padding keyed by ``top``/``bottom``/``left``/``right``.
        duration_ms: Animation duration in milliseconds.
        max_zoom: Zoom the animation may not exceed.
    """

    padding: dict[str, int] = field(default_factory=dict)
    duration_ms: int = 0
    max_zoom: float | None = None

    @classmethod
    def from_config(cls, config: MapConfig) -> FitBoundsOptions:
        return cls(
            padding={
                "top": config.fit_padding_top,
                "bottom": config.fit_padding_bottom,
                "left": config.fit_padding_left,
                "right": config.fit_padding_right,
            },
            duration_ms=config.fit_duration_ms,
            max_zoom=config.fit_max_zoom,
        )

    def to_dict(self) -> dict[str, object]:
        """MapLibre ``fitBounds`` options."""
        options: dict[str, object] = {"padding": dict(self.padding), "duration": self.duration_ms}
        if self.max_zoom is not None:
            options["maxZoom"] = self.max_zoom
        return options


@dataclass(frozen=True, slots=True)
class SetMaxBounds:
    bounds: Bounds


@dataclass(frozen=True, slots=True)
class FitBounds:
    bounds: Bounds
    options: FitBoundsOptions = field(default_factory=FitBoundsOptions)


MapOperation = AddSource | RemoveSource | AddLayer | RemoveLayer | SetMaxBounds | FitBounds


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MapState:
    """Source ids and bottom-to-top layer order currently installed on the map.

    Attributes:
        sources: Installed source ids.
        layers: Installed layer ids, bottom first.
        max_bounds: Current pan restriction, if any.
    """

    sources: frozenset[str] = frozenset()
    layers: tuple[str, ...] = ()
    max_bounds: Bounds | None = None

    def has_source(self, source_id: str) -> bool:
        return source_id in self.sources

    def has_layer(self, layer_id: str) -> bool:
        return layer_id in self.layers

    @classmethod
    def initial(cls, basemap: str) -> MapState:
        """State of a freshly created map showing *basemap*."""
        spec = BASEMAPS[basemap]
        all_sources = frozenset(b["source_id"] for b in BASEMAPS.values())
        return cls(sources=all_sources, layers=(spec["layer_id"],))


class InvalidTransitionError(ValueError):
    """Raised when an operation does not apply to the current state."""


def apply_operations(state: MapState, operations: list[MapOperation]) -> MapState:
    """Return the state reached by applying *operations* to *state* in order.

    Raises:
        InvalidTransitionError: On a duplicate add, a removal of something
            absent, or an insertion before a missing layer.
    """
    sources = set(state.sources)
    layers = list(state.layers)
    max_bounds = state.max_bounds

    for op in operations:
        if isinstance(op, AddSource):
            if op.source_id in sources:
                msg = f"Source {op.source_id!r} already exists"
                raise InvalidTransitionError(msg)
            sources.add(op.source_id)
        elif isinstance(op, RemoveSource):
            if op.source_id not in sources:
                msg = f"Source {op.source_id!r} does not exist"
                raise InvalidTransitionError(msg)
            sources.discard(op.source_id)
        elif isinstance(op, AddLayer):
            if op.layer_id in layers:
                msg = f"Layer {op.layer_id!r} already exists"
                raise InvalidTransitionError(msg)
            source = op.layer.get("source")
            if source is not None and source not in sources:
                msg = f"Layer {op.layer_id!r} references missing source {source!r}"
                raise InvalidTransitionError(msg)
            if op.before is None:
                layers.append(op.layer_id)
            elif op.before in layers:
                layers.insert(layers.index(op.before), op.layer_id)
            else:
                msg = f"Cannot insert {op.layer_id!r} before missing layer {op.before!r}"
                raise InvalidTransitionError(msg)
        elif isinstance(op, RemoveLayer):
            if op.layer_id not in layers:
                msg = f"Layer {op.layer_id!r} does not exist"
                raise InvalidTransitionError(msg)
            layers.remove(op.layer_id)
        elif isinstance(op, SetMaxBounds):
            max_bounds = op.bounds
        # FitBounds only animates the camera.

    return MapState(sources=frozenset(sources), layers=tuple(layers), max_bounds=max_bounds)


# ---------------------------------------------------------------------------
# Planners
# ---------------------------------------------------------------------------


def _removals(state: MapState, layer_ids: list[str], source_ids: list[str]) -> list[MapOperation]:
    ops: list[MapOperation] = [RemoveLayer(lid) for lid in layer_ids if state.has_layer(lid)]
    ops.extend(RemoveSource(sid) for sid in source_ids if state.has_source(sid))
    return ops


def mask_layer(config: MapConfig) -> dict[str, Any]:
    """Grey fill layer drawing the inverse mask."""
    return {
        "id": MASK_LAYER_ID,
        "type": "fill",
        "source": MASK_SOURCE_ID,
        "paint": {
            "fill-color": config.mask_color,
            "fill-opacity": config.mask_opacity,
        },
    }


def plan_region_transition(
    state: MapState,
    region: RegionData,
    config: MapConfig,
) -> list[MapOperation]:
    """Plan the replacement of the mask/region pair.

    Removes only what is installed (the overlay too, since it is stacked on
    the mask), then adds the mask source and layer, the region source, the
    pan restriction, and a fit to the region.
    """
    ops = _removals(
        state,
        layer_ids=[OVERLAY_LAYER_ID, MASK_LAYER_ID],
        source_ids=[OVERLAY_SOURCE_ID, REGION_SOURCE_ID, MASK_SOURCE_ID],
    )
    ops.extend(
        [
            AddSource(MASK_SOURCE_ID, {"type": "geojson", "data": region.mask.to_dict()}),
            AddLayer(mask_layer(config)),
            AddSource(REGION_SOURCE_ID, {"type": "geojson", "data": region.region.to_dict()}),
            SetMaxBounds(region.max_bounds),
            FitBounds(region.bounds, FitBoundsOptions.from_config(config)),
        ]
    )
    logger.debug("Region transition planned | operations=%d", len(ops))
    return ops


def plan_overlay_addition(
    state: MapState,
    overlay: RasterOverlay,
    config: MapConfig,
) -> list[MapOperation]:
    """Plan installing the raster overlay directly beneath the mask."""
    ops = _removals(state, layer_ids=[OVERLAY_LAYER_ID], source_ids=[OVERLAY_SOURCE_ID])
    before = MASK_LAYER_ID if state.has_layer(MASK_LAYER_ID) else None
    ops.extend(
        [
            AddSource(
                OVERLAY_SOURCE_ID,
                {"type": "image", "url": overlay.image_url, "coordinates": overlay.corners},
            ),
            AddLayer(
                {
                    "id": OVERLAY_LAYER_ID,
                    "type": "raster",
                    "source": OVERLAY_SOURCE_ID,
                    "paint": {"raster-opacity": config.overlay_opacity},
                },
                before=before,
            ),
        ]
    )
    return ops


def plan_basemap_switch(state: MapState, basemap: str) -> list[MapOperation]:
    """Plan replacing whichever basemap layer is installed with *basemap*.

    The new layer goes at the bottom of the stack, beneath the overlay and
    the mask; with nothing else installed it is simply appended.  Basemap
    tile sources are added if missing.

    Raises:
        KeyError: If *basemap* is not in the catalogue.
    """
    spec = BASEMAPS[basemap]
    ops: list[MapOperation] = [
        RemoveLayer(lid) for lid in state.layers if lid in BASEMAP_LAYER_IDS
    ]
    if not state.has_source(spec["source_id"]):
        ops.append(AddSource(spec["source_id"], basemap_source(basemap)))
    others = [lid for lid in state.layers if lid not in BASEMAP_LAYER_IDS]
    ops.append(AddLayer(basemap_layer(basemap), before=others[0] if others else None))
    return ops
