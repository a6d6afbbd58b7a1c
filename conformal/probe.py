"""Probe controller: hover state machine and map-point query cancellation.

States:
    Idle     -- no hover (state.hover is None)
    Probing  -- hover set; a map-point query may be in flight

Every cursor move aborts the query in flight, replaces the hover, redraws
and issues a fresh query. Each query carries a ProbeToken; a completion
is applied only when its token is still the current one and the hover it
was issued for is still the live hover. Transport-level abort is best
effort; the token check is what keeps stale responses out, even when
responses arrive out of order.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from conformal.complex_algebra import Complex
from conformal.service import MappingService, PendingQuery
from conformal.state import AppState, HoverState
from conformal.transform import Z_VIEW, ScreenPoint, ViewConfig

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ProbeToken:
    """Identity of one issued map-point query."""

    serial: int
    hover: HoverState
    pending: PendingQuery | None = None
    done: bool = False


class ProbeController:
    """Owns the hover state and the single current map-point query."""

    def __init__(
        self,
        service: MappingService,
        state: AppState,
        redraw: Callable[[], None],
        view: ViewConfig = Z_VIEW,
    ):
        self._service = service
        self._state = state
        self._redraw = redraw
        self._view = view
        self._current: ProbeToken | None = None
        self._serials = itertools.count(1)

    @property
    def is_probing(self) -> bool:
        return self._state.hover is not None

    @property
    def in_flight(self) -> bool:
        return self._current is not None

    # -- Cursor events --

    def cursor_moved(self, x: float, y: float) -> None:
        """Idle/Probing -> Probing at a new cursor position."""
        self._cancel_current()

        screen = ScreenPoint(float(x), float(y))
        hover = HoverState(screen=screen, z=self._view.to_complex(screen))
        self._state.hover = hover
        self._redraw()

        self._issue(hover)

    def cursor_left(self) -> None:
        """Probing -> Idle."""
        self._cancel_current()
        if self._state.hover is None:
            return
        self._state.hover = None
        self._redraw()

    def shutdown(self) -> None:
        """Abort any query in flight; hover state is left as is."""
        self._cancel_current()

    # -- Query lifecycle --

    def _issue(self, hover: HoverState) -> None:
        token = ProbeToken(serial=next(self._serials), hover=hover)
        self._current = token
        logger.debug(
            "Probe #%d issued for z=(%.4f, %.4f)", token.serial, hover.z.re, hover.z.im,
        )

        pending = self._service.map_point(
            hover.z,
            on_result=lambda w, t=token: self._on_result(t, w),
            on_error=lambda message, t=token: self._on_error(t, message),
        )
        # The service may have answered synchronously
        if not token.done:
            token.pending = pending

    def _cancel_current(self) -> None:
        token = self._current
        self._current = None
        if token is None:
            return
        token.done = True
        if token.pending is not None:
            logger.debug("Probe #%d superseded, aborting", token.serial)
            token.pending.abort()
            token.pending = None

    def _is_live(self, token: ProbeToken) -> bool:
        return token is self._current and self._state.hover is token.hover

    def _on_result(self, token: ProbeToken, w: Complex | None) -> None:
        if not self._is_live(token):
            logger.debug("Dropping response of superseded probe #%d", token.serial)
            return
        token.done = True
        token.pending = None
        self._current = None

        self._state.hover = replace(token.hover, w=w, resolved=True)
        if w is None:
            logger.debug("Probe #%d: no image for this point", token.serial)
        self._redraw()

    def _on_error(self, token: ProbeToken, message: str) -> None:
        if not self._is_live(token):
            logger.debug("Dropping failure of superseded probe #%d", token.serial)
            return
        token.done = True
        token.pending = None
        self._current = None
        logger.warning("Probe #%d failed: %s", token.serial, message)
