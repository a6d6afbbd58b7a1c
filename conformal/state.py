"""Application state shared by the probe, the point-set client and the canvases.

One AppState instance is owned by the view and passed to the
controllers that mutate it. Everything runs on the GUI thread, so there
is no locking; stale async completions are filtered by the controllers
before they touch this object.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from conformal.complex_algebra import Complex
from conformal.transform import ScreenPoint


@dataclass(frozen=True)
class SamplePoint:
    """One element of the bulk point set: z, its image w, and a CSS colour."""

    z: Complex
    w: Complex
    color: str


@dataclass(frozen=True)
class HoverState:
    """The probe position and, once the service answered, its image.

    w is None while the query is in flight (resolved=False) and also when
    the service reported that no image exists (resolved=True).
    """

    screen: ScreenPoint
    z: Complex
    w: Complex | None = None
    resolved: bool = False


@dataclass
class AppState:
    """Mutable render state: current point set, hover, and status text."""

    points: tuple[SamplePoint, ...] = ()
    hover: HoverState | None = None
    status: str = ""
    generation: int = field(default=0)

    def replace_points(self, points) -> None:
        """Swap in a new point set. Never merges with the previous one."""
        self.points = tuple(points)
        self.generation += 1
