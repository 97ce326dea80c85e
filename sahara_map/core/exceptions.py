"""Unified exception taxonomy for the map pipeline.

Every domain exception inherits from ``PipelineError`` and carries the
stage it was raised in plus a machine-readable code, so the session can
decide what is fatal (region data) and what is merely logged (overlay).

Taxonomy categories
-------------------
- ``ValidationError``  : bad geometry, bounds, or descriptor content.
- ``TransientError``   : fetch failures (network, missing file, HTTP status).
- ``PermanentError``   : failures that end a feature for the session.
- ``ContractError``    : documents that do not match the expected GeoJSON shape.

``to_error_dict()`` gives a stable structured payload for logging.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for all map-pipeline errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"load_region"``, ``"geometry"``).
        code: Machine-readable error code (e.g. ``"REGION_LOAD_FAILED"``).
        retryable: Whether a retry could plausibly succeed.
        correlation_id: Session or request identifier, when one exists.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, TransientError):
            return "transient"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(PipelineError):
    """Geometry or descriptor validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(PipelineError):
    """Temporary failure that may succeed on a later reload."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(PipelineError):
    """Failure that disables a feature for the rest of the session."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(PipelineError):
    """Document shape does not match the expected GeoJSON contract."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Shared geometry errors
# ---------------------------------------------------------------------------


class UnsupportedGeometryError(ValidationError):
    """Raised when a geometry type has no registered handler."""

    default_stage = "geometry"
    default_code = "GEOMETRY_UNSUPPORTED"


class EmptyGeometryError(ValidationError):
    """Raised when an aggregate needs at least one position and gets none."""

    default_stage = "geometry"
    default_code = "GEOMETRY_EMPTY"


class BoundsError(ValidationError):
    """Raised when a bounds rectangle would violate west <= east, south <= north."""

    default_stage = "geometry"
    default_code = "BOUNDS_INVALID"
