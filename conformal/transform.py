"""Coordinate transforms between view pixels and the complex plane.

Each view (z-plane and w-plane) has its own ViewConfig. Screen y grows
downward while the imaginary axis grows upward, so the imaginary part
is negated in both directions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from conformal.complex_algebra import Complex

# Both canvases are square and fixed size (pixels)
VIEW_SIZE = 500


class ScreenPoint(NamedTuple):
    """View-relative pixel coordinate."""

    x: float
    y: float


@dataclass(frozen=True)
class ViewConfig:
    """Scale (pixels per unit) and pixel position of the complex origin."""

    scale: float
    origin: ScreenPoint

    def __post_init__(self):
        if not self.scale > 0:
            raise ValueError(f"view scale must be positive, got {self.scale!r}")

    def to_complex(self, p: ScreenPoint) -> Complex:
        return Complex(
            (p.x - self.origin.x) / self.scale,
            -(p.y - self.origin.y) / self.scale,
        )

    def to_screen(self, c: Complex) -> ScreenPoint:
        return ScreenPoint(
            self.origin.x + c.re * self.scale,
            self.origin.y - c.im * self.scale,
        )

    def to_screen_array(
        self, re: np.ndarray, im: np.ndarray,
    ) -> tuple[np.ndarray, np.ndarray]:
        """Vectorized to_screen for (N,) arrays of real and imaginary parts."""
        xs = self.origin.x + np.asarray(re, dtype=np.float64) * self.scale
        ys = self.origin.y - np.asarray(im, dtype=np.float64) * self.scale
        return xs, ys


def in_bounds(p: ScreenPoint, size: float = VIEW_SIZE) -> bool:
    """True when p lies inside a size x size view."""
    return 0 <= p.x <= size and 0 <= p.y <= size


# z-plane: origin shifted down so the slit [0, i] sits near the centre
Z_VIEW = ViewConfig(scale=60.0, origin=ScreenPoint(VIEW_SIZE / 2, VIEW_SIZE / 2 + 100))

# w-plane: the image lies in the upper half plane, origin near the bottom
W_VIEW = ViewConfig(scale=180.0, origin=ScreenPoint(VIEW_SIZE / 2, VIEW_SIZE - 50))
