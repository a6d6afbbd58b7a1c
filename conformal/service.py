"""Mapping service contract: protocols, wire decoding and result types.

The client talks to two endpoints:

    POST /api/compute/{mode}       body {"count": N}
        -> {"mode", "durationMs", "points": [{"z", "w", "color"}, ...]}
    GET  /api/map-point?re=..&im=..
        -> {"w": {"re", "im"}}  (HTTP 422 or "w": null when undefined)

MappingService abstracts the transport. Both calls are asynchronous and
callback based; each returns a PendingQuery whose abort() is a
best-effort request to stop the transfer. An aborted query must not
invoke either callback.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import NamedTuple, Protocol
from urllib.parse import urlencode

from conformal.complex_algebra import Complex
from conformal.state import SamplePoint

# Compute modes understood by the bulk endpoint
MODE_SINGLE = "single"
MODE_PARALLEL = "parallel"
COMPUTE_MODES = (MODE_SINGLE, MODE_PARALLEL)

COMPUTE_PATH = "/api/compute/{mode}"
MAP_POINT_PATH = "/api/map-point"

# Status returned by map-point for the removable singularity
HTTP_UNPROCESSABLE = 422


class ServiceError(Exception):
    """Transport failure or a response body that does not match the contract."""


class ComputeResult(NamedTuple):
    """Decoded bulk compute response."""

    points: tuple[SamplePoint, ...]
    mode: str
    duration_ms: float
    count: int
    requested: int | None = None


class PendingQuery(Protocol):
    """Cancellation handle for an in-flight request."""

    def abort(self) -> None:
        ...


class MappingService(Protocol):
    """Protocol for the remote compute / map-point service."""

    def map_point(
        self,
        z: Complex,
        on_result: Callable[[Complex | None], None],
        on_error: Callable[[str], None],
    ) -> PendingQuery:
        """Ask for the image of z. on_result gets None when no image exists."""
        ...

    def compute(
        self,
        mode: str,
        count: int,
        on_result: Callable[[ComputeResult], None],
        on_error: Callable[[str], None],
    ) -> PendingQuery:
        """Request a bulk point set computed with the given mode."""
        ...


# ---------------------------------------------------------------------------
# Request building
# ---------------------------------------------------------------------------

def validate_mode(mode: str) -> str:
    if mode not in COMPUTE_MODES:
        raise ValueError(
            f"unknown compute mode {mode!r}, expected one of {COMPUTE_MODES}"
        )
    return mode


def compute_url(base_url: str, mode: str) -> str:
    return base_url.rstrip("/") + COMPUTE_PATH.format(mode=validate_mode(mode))


def compute_body(count: int) -> bytes:
    return json.dumps({"count": int(count)}).encode("utf-8")


def map_point_url(base_url: str, z: Complex) -> str:
    query = urlencode({"re": repr(z.re), "im": repr(z.im)})
    return f"{base_url.rstrip('/')}{MAP_POINT_PATH}?{query}"


# ---------------------------------------------------------------------------
# Response decoding
# ---------------------------------------------------------------------------

def _load_json(raw: bytes | str) -> object:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise ServiceError(f"response is not valid JSON: {exc}") from exc


def decode_complex(obj: object) -> Complex:
    """Decode {"re": float, "im": float}."""
    if not isinstance(obj, dict):
        raise ServiceError(f"expected a complex object, got {type(obj).__name__}")
    try:
        return Complex(float(obj["re"]), float(obj["im"]))
    except KeyError as exc:
        raise ServiceError(f"complex object missing key {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ServiceError(f"complex object has non-numeric part: {exc}") from exc


def decode_sample_point(obj: object) -> SamplePoint:
    if not isinstance(obj, dict):
        raise ServiceError(f"expected a point object, got {type(obj).__name__}")
    try:
        z, w = obj["z"], obj["w"]
    except KeyError as exc:
        raise ServiceError(f"point object missing key {exc}") from exc
    color = obj.get("color") or "white"
    return SamplePoint(z=decode_complex(z), w=decode_complex(w), color=str(color))


def decode_compute_response(raw: bytes | str) -> ComputeResult:
    """Decode the bulk compute body. A missing points list means no points."""
    payload = _load_json(raw)
    if not isinstance(payload, dict):
        raise ServiceError("compute response must be a JSON object")

    raw_points = payload.get("points") or []
    if not isinstance(raw_points, list):
        raise ServiceError("compute response 'points' must be a list")
    points = tuple(decode_sample_point(p) for p in raw_points)

    try:
        duration_ms = float(payload.get("durationMs", 0))
    except (TypeError, ValueError) as exc:
        raise ServiceError(f"invalid durationMs: {exc}") from exc

    requested = payload.get("requested")
    return ComputeResult(
        points=points,
        mode=str(payload.get("mode", "")),
        duration_ms=duration_ms,
        count=len(points),
        requested=int(requested) if isinstance(requested, (int, float)) else None,
    )


def decode_map_point_response(raw: bytes | str) -> Complex | None:
    """Decode the map-point body; {"w": null} means no image exists."""
    payload = _load_json(raw)
    if not isinstance(payload, dict) or "w" not in payload:
        raise ServiceError("map-point response must be an object with key 'w'")
    if payload["w"] is None:
        return None
    return decode_complex(payload["w"])
