"""Map session orchestrator.

Ties the activities, the state planner and the map shell together for one
map view:

1. **Region**: ``load_region`` → ``plan_region_transition`` → ``shell.apply``.
   Failure is reported to the user once and the map is left as it was.
2. **Overlay**: ``load_overlay`` → ``plan_overlay_addition`` → ``shell.apply``.
   Runs only after the region is installed; failure or absence is silent.

Every plan is validated against the mirrored ``MapState`` before the shell
sees it, so the shell receives complete, consistent batches only.  A
second ``load()`` replaces the previous region wholesale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from sahara_map.activities.describe_feature import describe_feature
from sahara_map.activities.load_overlay import load_overlay
from sahara_map.activities.load_region import RegionLoadError, load_region
from sahara_map.core.config import MapConfig
from sahara_map.core.constants import BASEMAPS, OSM_BASEMAP, SATELLITE_BASEMAP
from sahara_map.geometry.containment import feature_at
from sahara_map.orchestrators.map_state import (
    MapState,
    apply_operations,
    plan_basemap_switch,
    plan_overlay_addition,
    plan_region_transition,
)

if TYPE_CHECKING:
    from types import TracebackType

    from sahara_map.activities.load_overlay import RasterOverlay
    from sahara_map.activities.load_region import RegionData
    from sahara_map.models.geojson import Feature
    from sahara_map.orchestrators.map_state import MapOperation
    from sahara_map.shell.base import MapShell

logger = logging.getLogger("sahara_map.orchestrators.map_session")

REGION_ERROR_NOTICE = "Error loading Sahara desert data. Please check the console for details."


@dataclass(frozen=True, slots=True)
class ClickResult:
    """Outcome of a click on the map.

    Attributes:
        lng: Clicked longitude.
        lat: Clicked latitude.
        inside: Whether the point falls inside the region's outer rings.
        feature: The first region feature containing the point, if any.
        info: ``(label, value)`` rows describing ``feature``.
    """

    lng: float
    lat: float
    inside: bool = False
    feature: Feature | None = None
    info: list[tuple[str, str]] = field(default_factory=list)


class MapSession:
    """One interactive map view and the data installed on it.

    Example usage::

        async with MapSession(shell, MapConfig.from_env()) as session:
            if await session.load():
                result = session.handle_click(13.2, 24.5)
    """

    def __init__(
        self,
        shell: MapShell,
        config: MapConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._shell = shell
        self._config = config or MapConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self._config.request_timeout_s,
            follow_redirects=True,
        )
        self._basemap = self._config.default_basemap
        self._state = MapState.initial(self._basemap)
        self._region: RegionData | None = None
        self._overlay: RasterOverlay | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> MapState:
        return self._state

    @property
    def region(self) -> RegionData | None:
        """Processed region currently installed, if any."""
        return self._region

    @property
    def overlay(self) -> RasterOverlay | None:
        return self._overlay

    @property
    def basemap(self) -> str:
        return self._basemap

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> MapSession:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this session created it."""
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> bool:
        """Load the region (fatal on failure) and then the overlay (optional).

        Returns:
            ``True`` if the region and mask were installed.
        """
        try:
            region = await load_region(
                self._config.region_source,
                client=self._client,
                config=self._config,
            )
        except RegionLoadError as exc:
            logger.error("Region load failed | %s", exc.to_error_dict())
            self._shell.notify(REGION_ERROR_NOTICE)
            return False

        self._commit(plan_region_transition(self._state, region, self._config))
        self._region = region
        self._overlay = None

        await self._load_overlay()
        return True

    async def _load_overlay(self) -> None:
        overlay = await load_overlay(
            self._config.overlay_bounds_source,
            client=self._client,
            config=self._config,
        )
        if overlay is None:
            return
        try:
            self._commit(plan_overlay_addition(self._state, overlay, self._config))
        except Exception as exc:
            logger.warning(
                "Overlay not installed | image=%s | error=%s",
                overlay.image_url,
                exc,
            )
            return
        self._overlay = overlay

    def _commit(self, operations: list[MapOperation]) -> None:
        next_state = apply_operations(self._state, operations)
        self._shell.apply(operations)
        self._state = next_state

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def handle_click(self, lng: float, lat: float) -> ClickResult:
        """Report whether ``(lng, lat)`` is inside the region and describe the feature."""
        if self._region is None:
            return ClickResult(lng=lng, lat=lat)

        feature = feature_at((lng, lat), self._region.region)
        if feature is None:
            return ClickResult(lng=lng, lat=lat)

        logger.debug("Click inside region | lng=%.4f | lat=%.4f", lng, lat)
        return ClickResult(
            lng=lng,
            lat=lat,
            inside=True,
            feature=feature,
            info=describe_feature(feature.properties),
        )

    def switch_basemap(self, basemap: str) -> None:
        """Show *basemap* beneath the overlay and mask.

        Raises:
            ValueError: If *basemap* is not a known basemap.
        """
        if basemap not in BASEMAPS:
            msg = f"Unknown basemap {basemap!r}; expected one of {sorted(BASEMAPS)}"
            raise ValueError(msg)
        self._commit(plan_basemap_switch(self._state, basemap))
        self._basemap = basemap
        logger.info("Basemap switched | basemap=%s", basemap)

    def toggle_basemap(self) -> str:
        """Flip between satellite and street basemaps; return the new one."""
        target = OSM_BASEMAP if self._basemap == SATELLITE_BASEMAP else SATELLITE_BASEMAP
        self.switch_basemap(target)
        return target

    def snapshot(self) -> dict[str, Any]:
        """Summary of the installed data, for logging and the CLI."""
        return {
            "basemap": self._basemap,
            "layers": list(self._state.layers),
            "sources": sorted(self._state.sources),
            "region_loaded": self._region is not None,
            "overlay_loaded": self._overlay is not None,
            "max_bounds": self._state.max_bounds.to_list() if self._state.max_bounds else None,
        }
