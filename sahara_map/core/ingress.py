"""Async ingress for the region and overlay documents.

Both data files are fetched the same way: an ``http(s)://`` location goes
through the shared ``httpx.AsyncClient``; anything else is read from the
local filesystem.  Relative locations are joined onto
``MapConfig.data_base_url`` when one is configured.

Failures are split so callers can tell "not there" from "not JSON":

- **FetchError** (transient): network error, non-2xx status, missing file.
- **GeoJSONContractError** (contract): body is not valid JSON.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from sahara_map.core.exceptions import ContractError, TransientError

logger = logging.getLogger("sahara_map.core.ingress")

_REMOTE_SCHEMES = ("http://", "https://")


class FetchError(TransientError):
    """Raised when a document cannot be retrieved.

    Attributes:
        location: The resolved URL or path that was requested.
        status_code: HTTP status code, or ``None`` for transport and file errors.
    """

    default_stage = "ingress"
    default_code = "FETCH_FAILED"

    def __init__(self, location: str, message: str, *, status_code: int | None = None) -> None:
        self.location = location
        self.status_code = status_code
        super().__init__(message)


class GeoJSONContractError(ContractError):
    """Raised when a fetched document is not the JSON shape we expect."""

    default_stage = "parse_geojson"
    default_code = "GEOJSON_INVALID"


def resolve_location(location: str, base_url: str = "") -> str:
    """Join a relative *location* onto *base_url*.

    Absolute URLs, absolute paths and an empty *base_url* leave
    *location* untouched.
    """
    if not base_url or location.startswith(_REMOTE_SCHEMES) or Path(location).is_absolute():
        return location
    if base_url.startswith(_REMOTE_SCHEMES):
        return str(httpx.URL(base_url.rstrip("/") + "/").join(location))
    return str(Path(base_url) / location)


async def fetch_json(
    location: str,
    *,
    client: httpx.AsyncClient,
    base_url: str = "",
) -> Any:
    """Fetch and decode the JSON document at *location*.

    Args:
        location: URL or filesystem path.
        client: Shared async HTTP client (unused for local paths).
        base_url: Optional prefix for relative locations.

    Returns:
        The decoded JSON value.

    Raises:
        FetchError: If the document cannot be retrieved.
        GeoJSONContractError: If the body is not valid JSON.
    """
    resolved = resolve_location(location, base_url)

    if resolved.startswith(_REMOTE_SCHEMES):
        text = await _fetch_remote(resolved, client)
    else:
        text = _read_local(resolved)

    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, ValueError) as exc:
        msg = f"Document at {resolved} is not valid JSON: {exc}"
        raise GeoJSONContractError(msg, code="INVALID_JSON") from exc

    logger.debug("Fetched document | location=%s | bytes=%d", resolved, len(text))
    return payload


async def _fetch_remote(url: str, client: httpx.AsyncClient) -> str:
    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        msg = f"Request to {url} failed: {exc}"
        raise FetchError(url, msg) from exc

    if not response.is_success:
        msg = f"Request to {url} returned HTTP {response.status_code}"
        raise FetchError(url, msg, status_code=response.status_code)
    return response.text


def _read_local(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"File not found: {path}"
        raise FetchError(path, msg, status_code=404) from exc
    except UnicodeDecodeError as exc:
        msg = f"Document at {path} is not UTF-8 text: {exc}"
        raise GeoJSONContractError(msg, code="INVALID_JSON") from exc
    except OSError as exc:
        msg = f"Cannot read {path}: {exc}"
        raise FetchError(path, msg) from exc
