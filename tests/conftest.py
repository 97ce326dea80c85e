"""Shared pytest fixtures for the Sahara map test suite."""

import json
from pathlib import Path
from typing import Any

import pytest

from sahara_map.core.config import MapConfig
from sahara_map.models.geojson import FeatureCollection

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"
EDGE_CASES_DIR = DATA_DIR / "edge_cases"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def edge_cases_dir() -> Path:
    """Return the path to the edge-cases test data directory."""
    return EDGE_CASES_DIR


# ---------------------------------------------------------------------------
# Sample region fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def geographic_geojson_path(data_dir: Path) -> Path:
    """Region in degrees: a 2-polygon MultiPolygon (one with a hole) and a Polygon."""
    return data_dir / "sahara_geographic.geojson"


@pytest.fixture()
def mercator_geojson_path(data_dir: Path) -> Path:
    """Region in EPSG:3857 metres: one MultiPolygon and one clockwise Polygon."""
    return data_dir / "sahara_mercator.geojson"


@pytest.fixture()
def overlay_bounds_path(data_dir: Path) -> Path:
    """Overlay bounds Feature with a closed 5-position corner ring."""
    return data_dir / "overlay_bounds.json"


@pytest.fixture()
def geographic_raw(geographic_geojson_path: Path) -> dict[str, Any]:
    """Decoded geographic region document."""
    return json.loads(geographic_geojson_path.read_text(encoding="utf-8"))


@pytest.fixture()
def mercator_raw(mercator_geojson_path: Path) -> dict[str, Any]:
    """Decoded Mercator region document."""
    return json.loads(mercator_geojson_path.read_text(encoding="utf-8"))


@pytest.fixture()
def geographic_collection(geographic_raw: dict[str, Any]) -> FeatureCollection:
    return FeatureCollection.from_dict(geographic_raw)


@pytest.fixture()
def mercator_collection(mercator_raw: dict[str, Any]) -> FeatureCollection:
    return FeatureCollection.from_dict(mercator_raw)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture()
def local_config(geographic_geojson_path: Path, overlay_bounds_path: Path) -> MapConfig:
    """Configuration pointing at the local test fixtures."""
    return MapConfig(
        region_source=str(geographic_geojson_path),
        overlay_bounds_source=str(overlay_bounds_path),
        overlay_image_url="https://tiles.example.com/alos.png",
    )
