"""Point-set client: bulk point requests against the compute service.

Only one bulk request may be in flight. A successful response replaces
the displayed point set wholesale; a failed one leaves the previous set
on screen and reports the failure through the status text.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Sequence

import numpy as np

from conformal.mapping import map_array
from conformal.service import ComputeResult, MappingService, validate_mode
from conformal.state import AppState, SamplePoint

logger = logging.getLogger(__name__)

# Used when the count field is empty, non-numeric or non-positive
DEFAULT_POINT_COUNT = 5000

# Max |w_reported - map(z)| before a fetched set is flagged as inconsistent
CONSISTENCY_TOLERANCE = 1e-9

FAILED_STATUS = "Computation failed. Check the log for details."

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_point_count(text, default: int = DEFAULT_POINT_COUNT) -> int:
    """Parse the leading integer of user input, falling back to default.

    "1500" -> 1500, "250 points" -> 250, "abc" / "" / "0" / "-3" -> default.
    """
    match = _LEADING_INT.match(str(text))
    if match is None:
        return default
    value = int(match.group(1))
    return value if value > 0 else default


def max_mapping_error(points: Sequence[SamplePoint]) -> float:
    """Largest distance between a reported w and the locally mapped z.

    Returns inf when the service reports an image for a point the local
    map considers undefined.
    """
    if not points:
        return 0.0
    z = np.array([p.z.to_builtin() for p in points], dtype=np.complex128)
    w = np.array([p.w.to_builtin() for p in points], dtype=np.complex128)
    expected = map_array(z)
    if not np.all(np.isfinite(expected)):
        return math.inf
    return float(np.max(np.abs(expected - w)))


def format_status(result: ComputeResult) -> str:
    ms = result.duration_ms
    duration = f"{ms:.0f}" if float(ms).is_integer() else f"{ms:.1f}"
    return (
        f"Mode: {result.mode} | Duration: {duration} ms"
        f" | Points: {result.count}"
    )


class PointSetClient:
    """Issues bulk compute requests and merges results into AppState."""

    def __init__(
        self,
        service: MappingService,
        state: AppState,
        redraw: Callable[[], None],
        on_status: Callable[[str], None] | None = None,
        on_busy_changed: Callable[[bool], None] | None = None,
    ):
        self._service = service
        self._state = state
        self._redraw = redraw
        self._on_status = on_status
        self._on_busy_changed = on_busy_changed
        self._busy = False
        self._pending = None
        self._request_id = 0

    @property
    def busy(self) -> bool:
        return self._busy

    def request_points(self, mode: str, count: int) -> bool:
        """Start a bulk fetch. Returns False if one is already running."""
        validate_mode(mode)
        count = int(count)
        if count <= 0:
            raise ValueError(f"point count must be positive, got {count}")
        if self._busy:
            logger.info("Bulk request (%s, %d) ignored: one is already running", mode, count)
            return False

        self._request_id += 1
        request_id = self._request_id
        self._set_busy(True)
        self._set_status(f"Running {mode} with {count} points...")
        logger.info("Requesting %d points (mode=%s)", count, mode)

        pending = self._service.compute(
            mode, count,
            on_result=lambda result, rid=request_id: self._on_result(rid, result),
            on_error=lambda message, rid=request_id: self._on_error(rid, message),
        )
        if self._busy and request_id == self._request_id:
            self._pending = pending
        return True

    def shutdown(self) -> None:
        """Abort the bulk request in flight, if any."""
        pending = self._pending
        self._pending = None
        self._request_id += 1
        if pending is not None:
            pending.abort()
        if self._busy:
            self._set_busy(False)

    # -- Completion --

    def _on_result(self, request_id: int, result: ComputeResult) -> None:
        if request_id != self._request_id:
            return
        self._pending = None

        self._state.replace_points(result.points)
        self._set_status(format_status(result))
        logger.info(
            "Received %d points (mode=%s, server %g ms)",
            result.count, result.mode, result.duration_ms,
        )

        error = max_mapping_error(result.points)
        if error > CONSISTENCY_TOLERANCE:
            logger.warning(
                "Bulk points disagree with the local map (max error %.3g)", error,
            )

        self._redraw()
        self._set_busy(False)

    def _on_error(self, request_id: int, message: str) -> None:
        if request_id != self._request_id:
            return
        self._pending = None
        logger.warning("Bulk computation failed: %s", message)
        self._set_status(FAILED_STATUS)
        self._set_busy(False)

    def _set_status(self, text: str) -> None:
        self._state.status = text
        if self._on_status is not None:
            self._on_status(text)

    def _set_busy(self, busy: bool) -> None:
        self._busy = busy
        if self._on_busy_changed is not None:
            self._on_busy_changed(busy)
