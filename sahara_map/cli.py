"""CLI entrypoint: build the Sahara map style document."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from sahara_map.core.config import ConfigValidationError, MapConfig
from sahara_map.core.constants import BASEMAPS
from sahara_map.orchestrators.map_session import MapSession
from sahara_map.shell.style import StyleDocumentShell

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("sahara_map.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sahara-map",
        description="Build the MapLibre style document for the Sahara desert map.",
    )
    parser.add_argument("--region", default=None, help="Region GeoJSON URL or path.")
    parser.add_argument(
        "--overlay-bounds",
        default=None,
        help="Raster overlay bounds document URL or path.",
    )
    parser.add_argument("--base-url", default=None, help="Prefix for relative sources.")
    parser.add_argument(
        "--basemap",
        choices=sorted(BASEMAPS),
        default=None,
        help="Basemap shown at start-up.",
    )
    parser.add_argument(
        "--margin",
        type=float,
        default=None,
        help="Pan-limit margin around the region in degrees.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("map-style.json"),
        help="Where to write the style document.",
    )
    parser.add_argument(
        "--mask-output",
        type=Path,
        default=None,
        help="Also write the inverse mask GeoJSON here.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logs.")
    return parser


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging to the console."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2, ensure_ascii=False)
        fh.write("\n")


async def build_map(config: MapConfig, output: Path, mask_output: Path | None = None) -> int:
    """Load the region and overlay and write the resulting documents.

    Returns:
        Process exit code: 0 on success, 1 if the region could not be loaded.
    """
    shell = StyleDocumentShell.from_config(config)
    async with MapSession(shell, config) as session:
        if not await session.load():
            return 1
        region = session.region

    write_json(output, shell.to_dict())
    logger.info("Wrote style document | path=%s | layers=%s", output, shell.layer_ids)

    if mask_output is not None and region is not None:
        write_json(mask_output, region.mask.to_dict())
        logger.info("Wrote mask | path=%s", mask_output)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = MapConfig.from_env().with_overrides(
            region_source=args.region,
            overlay_bounds_source=args.overlay_bounds,
            data_base_url=args.base_url,
            default_basemap=args.basemap,
            bounds_margin_deg=args.margin,
        )
    except ConfigValidationError as exc:
        logger.error("%s", exc.message)
        return 2

    return asyncio.run(build_map(config, args.output, args.mask_output))


if __name__ == "__main__":
    raise SystemExit(main())
