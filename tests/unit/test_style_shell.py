"""Unit tests for the style-document shell."""

from __future__ import annotations

import logging

import pytest

from sahara_map.core.config import MapConfig
from sahara_map.models.bounds import Bounds
from sahara_map.orchestrators.map_state import (
    AddLayer,
    AddSource,
    FitBounds,
    FitBoundsOptions,
    InvalidTransitionError,
    RemoveLayer,
    RemoveSource,
    SetMaxBounds,
)
from sahara_map.shell.base import MapShell
from sahara_map.shell.style import STYLE_VERSION, StyleDocumentShell


@pytest.fixture()
def shell() -> StyleDocumentShell:
    return StyleDocumentShell.from_config(MapConfig())


class TestFromConfig:
    def test_style_skeleton(self, shell: StyleDocumentShell) -> None:
        style = shell.style
        assert style["version"] == STYLE_VERSION
        assert set(style["sources"]) == {"satellite-tiles", "osm-tiles"}
        assert shell.layer_ids == ["satellite-layer"]

    def test_constructor_options(self, shell: StyleDocumentShell) -> None:
        options = shell.to_dict()["options"]
        assert options == {"center": [15.0, 20.0], "zoom": 1.5, "maxZoom": 16.4, "antialias": True}

    def test_osm_default(self) -> None:
        shell = StyleDocumentShell.from_config(MapConfig(default_basemap="osm"))
        assert shell.layer_ids == ["osm-tiles-layer"]

    def test_no_camera_before_fit(self, shell: StyleDocumentShell) -> None:
        assert shell.to_dict()["camera"] is None

    def test_style_property_is_a_copy(self, shell: StyleDocumentShell) -> None:
        shell.style["layers"].clear()
        assert shell.layer_ids == ["satellite-layer"]


class TestPrimitives:
    def test_add_source_and_layer(self, shell: StyleDocumentShell) -> None:
        shell.apply(
            [AddSource("s", {"type": "geojson", "data": {}}), AddLayer({"id": "l", "source": "s"})]
        )
        assert "s" in shell.source_ids
        assert shell.layer_ids == ["satellite-layer", "l"]

    def test_add_before(self, shell: StyleDocumentShell) -> None:
        shell.apply([AddLayer({"id": "top"}), AddLayer({"id": "mid"}, before="top")])
        assert shell.layer_ids == ["satellite-layer", "mid", "top"]

    def test_source_definition_copied(self, shell: StyleDocumentShell) -> None:
        source = {"type": "geojson", "data": {"features": []}}
        shell.add_source("s", source)
        source["data"]["features"].append("mutated")
        assert shell.style["sources"]["s"]["data"] == {"features": []}

    def test_remove_source_in_use(self, shell: StyleDocumentShell) -> None:
        with pytest.raises(InvalidTransitionError, match="still used"):
            shell.remove_source("satellite-tiles")

    @pytest.mark.parametrize(
        "op",
        [
            AddSource("osm-tiles", {}),
            RemoveSource("absent"),
            AddLayer({"id": "satellite-layer", "source": "satellite-tiles"}),
            AddLayer({"id": "l", "source": "absent"}),
            AddLayer({"id": "l"}, before="absent"),
            RemoveLayer("absent"),
        ],
    )
    def test_invalid_primitive(self, shell: StyleDocumentShell, op: object) -> None:
        with pytest.raises(InvalidTransitionError):
            shell.apply([op])  # type: ignore[list-item]

    def test_max_bounds_and_camera(self, shell: StyleDocumentShell) -> None:
        options = FitBoundsOptions(padding={"top": 50}, duration_ms=2000, max_zoom=5.0)
        shell.apply(
            [
                SetMaxBounds(Bounds(-19.0, 1.0, 39.0, 39.0)),
                FitBounds(Bounds(-10.0, 10.0, 30.0, 30.0), options),
            ]
        )
        document = shell.to_dict()
        assert document["options"]["maxBounds"] == [[-19.0, 1.0], [39.0, 39.0]]
        assert document["camera"] == {
            "bounds": [[-10.0, 10.0], [30.0, 30.0]],
            "padding": {"top": 50},
            "duration": 2000,
            "maxZoom": 5.0,
        }

    def test_notify(self, shell: StyleDocumentShell, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="sahara_map.shell.style"):
            shell.notify("Something went wrong")
        assert shell.notifications == ["Something went wrong"]
        assert "Something went wrong" in caplog.text


class TestAtomicApply:
    def test_failed_batch_rolled_back(self, shell: StyleDocumentShell) -> None:
        before = shell.to_dict()
        with pytest.raises(InvalidTransitionError):
            shell.apply(
                [
                    AddSource("s", {"type": "geojson", "data": {}}),
                    SetMaxBounds(Bounds(0.0, 0.0, 1.0, 1.0)),
                    AddLayer({"id": "l", "source": "s"}),
                    RemoveLayer("absent"),
                ]
            )
        assert shell.to_dict() == before

    def test_unknown_operation_type(self, shell: StyleDocumentShell) -> None:
        with pytest.raises(TypeError, match="Unknown map operation"):
            shell.apply(["not-an-op"])  # type: ignore[list-item]


class TestMapShellContract:
    def test_abstract(self) -> None:
        with pytest.raises(TypeError):
            MapShell()  # type: ignore[abstract]
