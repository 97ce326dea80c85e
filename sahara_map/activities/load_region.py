"""Region loading activity.

Fetches the region boundary document and runs it through the geometry
pipeline:

    fetch → parse → normalize coordinates → inverse mask → bounds

The result bundles everything the state planner needs.  Any failure along
the way is wrapped in ``RegionLoadError``: without region data there is no
mask for the session, and the caller reports it to the user.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sahara_map.core.exceptions import PermanentError, PipelineError
from sahara_map.core.ingress import fetch_json
from sahara_map.geometry.bounds import compute_bounds, expand
from sahara_map.geometry.mask import build_mask_collection
from sahara_map.geometry.reproject import normalize_coordinates
from sahara_map.models.geojson import FeatureCollection

if TYPE_CHECKING:
    import httpx

    from sahara_map.core.config import MapConfig
    from sahara_map.models.bounds import Bounds

logger = logging.getLogger("sahara_map.activities.load_region")


class RegionLoadError(PermanentError):
    """Raised when the region data cannot be fetched, parsed, or processed.

    Attributes:
        source: The region source that failed.
    """

    default_stage = "load_region"
    default_code = "REGION_LOAD_FAILED"

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class RegionData:
    """Processed region ready to install on the map.

    Attributes:
        region: Region features in geographic degrees.
        mask: One-feature collection holding the inverse world mask.
        bounds: Tight bounds of the region (fit-view target).
        max_bounds: ``bounds`` expanded by the configured margin (pan limit).
        reprojected: Whether the source was in spherical-Mercator metres.
    """

    region: FeatureCollection
    mask: FeatureCollection
    bounds: Bounds
    max_bounds: Bounds
    reprojected: bool = False


def build_region_data(raw: object, *, margin_deg: float) -> RegionData:
    """Run the synchronous pipeline on an already-decoded region document.

    Raises:
        PipelineError: Contract, geometry or bounds errors from any stage.
    """
    collection = FeatureCollection.from_dict(raw)
    region, reprojected = normalize_coordinates(collection)
    mask = build_mask_collection(region)
    bounds = compute_bounds(region)
    max_bounds = expand(bounds, margin_deg)
    return RegionData(
        region=region,
        mask=mask,
        bounds=bounds,
        max_bounds=max_bounds,
        reprojected=reprojected,
    )


async def load_region(
    source: str,
    *,
    client: httpx.AsyncClient,
    config: MapConfig,
) -> RegionData:
    """Fetch and process the region document at *source*.

    Args:
        source: URL or path of the region GeoJSON.
        client: Shared async HTTP client.
        config: Map configuration (base URL, bounds margin).

    Returns:
        The processed ``RegionData``.

    Raises:
        RegionLoadError: Wrapping any fetch, parse or geometry failure.
    """
    logger.info("Loading region | source=%s", source)
    try:
        raw = await fetch_json(source, client=client, base_url=config.data_base_url)
        data = build_region_data(raw, margin_deg=config.bounds_margin_deg)
    except PipelineError as exc:
        msg = f"Error loading region data from {source}: {exc.message}"
        raise RegionLoadError(source, msg) from exc

    mask_rings = data.mask.features[0].geometry.coordinates
    logger.info(
        "Region loaded | features=%d | reprojected=%s | holes=%d | "
        "bounds=[%.4f, %.4f, %.4f, %.4f]",
        len(data.region),
        data.reprojected,
        len(mask_rings) - 1,
        *data.bounds.to_list(),
    )
    return data
