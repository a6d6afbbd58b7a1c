"""Complex algebra: immutable (re, im) value with the arithmetic the map needs.

Division by a zero-modulus complex does not raise. It returns the
non-finite sentinel Complex(inf, inf), so callers must check
is_finite() before feeding the result into further arithmetic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Complex:
    """An ordered pair of reals. Every operation returns a new value."""

    re: float
    im: float

    def add(self, other: Complex) -> Complex:
        return Complex(self.re + other.re, self.im + other.im)

    def sub(self, other: Complex) -> Complex:
        return Complex(self.re - other.re, self.im - other.im)

    def mult(self, other: Complex) -> Complex:
        return Complex(
            self.re * other.re - self.im * other.im,
            self.re * other.im + self.im * other.re,
        )

    def div(self, other: Complex) -> Complex:
        """Divide by other; zero divisor yields Complex(inf, inf)."""
        denom = other.re * other.re + other.im * other.im
        if denom == 0:
            return Complex(math.inf, math.inf)
        return Complex(
            (self.re * other.re + self.im * other.im) / denom,
            (self.im * other.re - self.re * other.im) / denom,
        )

    def modulus(self) -> float:
        return math.sqrt(self.re * self.re + self.im * self.im)

    def argument(self) -> float:
        """Principal argument in (-pi, pi]; argument of zero is 0."""
        return math.atan2(self.im, self.re)

    def is_finite(self) -> bool:
        return math.isfinite(self.re) and math.isfinite(self.im)

    def to_builtin(self) -> complex:
        return complex(self.re, self.im)


ZERO = Complex(0.0, 0.0)
ONE = Complex(1.0, 0.0)
I = Complex(0.0, 1.0)
