"""Tests for the unified exception taxonomy.

Validates:
- PipelineError hierarchy and structured attributes
- Category classification (validation, transient, permanent, contract)
- ``to_error_dict()`` produces stable payload keys
- Every domain exception is a PipelineError with a default stage and code
"""

from __future__ import annotations

from typing import ClassVar

from sahara_map.activities.load_region import RegionLoadError
from sahara_map.core.config import ConfigValidationError
from sahara_map.core.exceptions import (
    BoundsError,
    ContractError,
    EmptyGeometryError,
    PermanentError,
    PipelineError,
    TransientError,
    UnsupportedGeometryError,
    ValidationError,
)
from sahara_map.core.ingress import FetchError, GeoJSONContractError
from sahara_map.models.overlay import OverlayDescriptorError


class TestPipelineErrorBase:
    """PipelineError base class behavior."""

    def test_default_attributes(self) -> None:
        err = PipelineError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""
        assert err.retryable is False
        assert err.correlation_id == ""

    def test_custom_attributes(self) -> None:
        err = PipelineError(
            "fail",
            stage="load_region",
            code="REGION_LOAD_FAILED",
            retryable=True,
            correlation_id="session-1",
        )
        assert err.stage == "load_region"
        assert err.code == "REGION_LOAD_FAILED"
        assert err.retryable is True
        assert err.correlation_id == "session-1"

    def test_str_is_message(self) -> None:
        assert str(PipelineError("human-readable error")) == "human-readable error"

    def test_to_error_dict_keys(self) -> None:
        err = PipelineError("x", stage="s", code="C", retryable=True, correlation_id="id")
        d = err.to_error_dict()
        assert set(d.keys()) == {
            "category",
            "code",
            "stage",
            "message",
            "retryable",
            "correlation_id",
        }
        assert d["message"] == "x"
        assert d["category"] == "transient"


class TestCategoryBases:
    """Category base classes set correct defaults."""

    def test_validation_error_not_retryable(self) -> None:
        err = ValidationError("bad ring")
        assert err.retryable is False
        assert err.category == "validation"

    def test_transient_error_retryable(self) -> None:
        err = TransientError("timeout")
        assert err.retryable is True
        assert err.category == "transient"

    def test_permanent_error_not_retryable(self) -> None:
        err = PermanentError("gone")
        assert err.retryable is False
        assert err.category == "permanent"

    def test_contract_error_not_retryable(self) -> None:
        err = ContractError("schema drift")
        assert err.retryable is False
        assert err.category == "contract"

    def test_dynamic_category_from_retryable(self) -> None:
        assert PipelineError("x", retryable=True).category == "transient"
        assert PipelineError("x", retryable=False).category == "permanent"


class TestAllExceptionsArePipelineError:
    """Every custom exception inherits from PipelineError."""

    EXCEPTION_CLASSES: ClassVar[list[type[PipelineError]]] = [
        UnsupportedGeometryError,
        EmptyGeometryError,
        BoundsError,
        FetchError,
        GeoJSONContractError,
        OverlayDescriptorError,
        RegionLoadError,
        ConfigValidationError,
    ]

    def test_all_subclass_pipeline_error(self) -> None:
        for cls in self.EXCEPTION_CLASSES:
            assert issubclass(cls, PipelineError), f"{cls.__name__} is not a PipelineError"


class TestExceptionStageAndCode:
    """Every domain exception has a default stage and code."""

    def test_unsupported_geometry(self) -> None:
        err = UnsupportedGeometryError("Point")
        assert (err.stage, err.code, err.category) == (
            "geometry",
            "GEOMETRY_UNSUPPORTED",
            "validation",
        )

    def test_empty_geometry(self) -> None:
        err = EmptyGeometryError("no positions")
        assert (err.stage, err.code) == ("geometry", "GEOMETRY_EMPTY")

    def test_fetch_error(self) -> None:
        err = FetchError("https://x/y.json", "HTTP 404", status_code=404)
        assert err.stage == "ingress"
        assert err.code == "FETCH_FAILED"
        assert err.category == "transient"
        assert err.location == "https://x/y.json"
        assert err.status_code == 404

    def test_geojson_contract_error(self) -> None:
        err = GeoJSONContractError("not a FeatureCollection")
        assert (err.stage, err.code, err.category) == (
            "parse_geojson",
            "GEOJSON_INVALID",
            "contract",
        )

    def test_geojson_contract_error_code_override(self) -> None:
        assert GeoJSONContractError("x", code="INVALID_JSON").code == "INVALID_JSON"

    def test_overlay_descriptor_error(self) -> None:
        err = OverlayDescriptorError("3 corners")
        assert (err.stage, err.code) == ("load_overlay", "OVERLAY_DESCRIPTOR_INVALID")

    def test_region_load_error(self) -> None:
        err = RegionLoadError("Sahara desert.geojson", "HTTP 500")
        assert err.stage == "load_region"
        assert err.code == "REGION_LOAD_FAILED"
        assert err.category == "permanent"
        assert err.source == "Sahara desert.geojson"

    def test_config_validation_error(self) -> None:
        err = ConfigValidationError("MASK_OPACITY", 2.0, "must be between 0 and 1")
        assert err.stage == "config"
        assert err.code == "CONFIG_VALIDATION_FAILED"
        assert err.key == "MASK_OPACITY"
        assert err.value == 2.0


class TestErrorDictStability:
    """to_error_dict() always includes required keys regardless of exception type."""

    REQUIRED_KEYS: ClassVar[set[str]] = {
        "category",
        "code",
        "stage",
        "message",
        "retryable",
        "correlation_id",
    }

    def test_fetch_error_dict(self) -> None:
        d = FetchError("a.json", "File not found", status_code=404).to_error_dict()
        assert set(d.keys()) >= self.REQUIRED_KEYS
        assert d["retryable"] is True

    def test_region_error_dict(self) -> None:
        d = RegionLoadError("a.json", "bad").to_error_dict()
        assert set(d.keys()) >= self.REQUIRED_KEYS
        assert d["code"] == "REGION_LOAD_FAILED"

    def test_correlation_id_propagated(self) -> None:
        err = PipelineError("x", correlation_id="corr-xyz")
        assert err.to_error_dict()["correlation_id"] == "corr-xyz"
