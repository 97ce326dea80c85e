"""Raster overlay loading activity.

The overlay is optional.  A missing bounds document means the raster has
not been exported yet; a broken one is logged and skipped.  Neither case
raises: the region and mask are already on the map and stay there.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sahara_map.core.exceptions import PipelineError
from sahara_map.core.ingress import FetchError, fetch_json, resolve_location
from sahara_map.models.overlay import OverlayDescriptor

if TYPE_CHECKING:
    import httpx

    from sahara_map.core.config import MapConfig

logger = logging.getLogger("sahara_map.activities.load_overlay")


@dataclass(frozen=True, slots=True)
class RasterOverlay:
    """A georeferenced raster image.

    Attributes:
        image_url: URL of the image handed to the map's ``image`` source.
        corners: ``[lng, lat]`` of top-left, top-right, bottom-right, bottom-left.
    """

    image_url: str
    corners: list[list[float]]


async def load_overlay(
    source: str,
    *,
    client: httpx.AsyncClient,
    config: MapConfig,
) -> RasterOverlay | None:
    """Fetch the overlay bounds document and build a ``RasterOverlay``.

    Returns:
        The overlay, or ``None`` when the document is absent or unusable.
    """
    try:
        raw = await fetch_json(source, client=client, base_url=config.data_base_url)
    except FetchError as exc:
        logger.info(
            "Overlay data not found, skipping | source=%s | status=%s",
            source,
            exc.status_code,
        )
        return None
    except PipelineError as exc:
        logger.info("Overlay data not available | source=%s | reason=%s", source, exc.message)
        return None

    try:
        descriptor = OverlayDescriptor.from_document(raw)
    except PipelineError as exc:
        logger.info("Overlay data not available | source=%s | code=%s", source, exc.code)
        logger.debug("Overlay descriptor rejected: %s", exc.message)
        return None

    overlay = RasterOverlay(
        image_url=resolve_location(config.overlay_image_url, config.data_base_url),
        corners=descriptor.corners,
    )
    logger.info("Overlay loaded | image=%s | corners=%s", overlay.image_url, overlay.corners)
    return overlay
