"""Conformal map w = i * ((i*z) / (i*z + 1)) ** (1/4).

Branch policy: the fourth root is always the principal one, built from
the argument returned by atan2, which lies in (-pi, pi]. Dividing that
argument by four puts the root's argument in (-pi/4, pi/4]. The other
three roots (rotations by pi/2, pi and 3*pi/2) are never produced. A
reimplementation that takes arguments from a different range, e.g.
[0, 2*pi), would silently select another branch and rotate the whole
w-plane picture.

Singularity: i*z + 1 vanishes at z = i. Any z whose denominator modulus
is below SINGULARITY_EPS has no image and map_z_to_w returns None.
"""

from __future__ import annotations

import math

import numpy as np

from conformal.complex_algebra import Complex, I, ONE

# Denominator modulus below which the mapping is treated as undefined
SINGULARITY_EPS = 1e-4


def principal_fourth_root(c: Complex) -> Complex:
    """Fourth root of c whose argument lies in (-pi/4, pi/4]."""
    r = c.modulus() ** 0.25
    phi = c.argument() / 4
    return Complex(r * math.cos(phi), r * math.sin(phi))


def map_z_to_w(z: Complex) -> Complex | None:
    """Map a z-plane point to the w-plane.

    Returns None near the removable singularity at z = i, and for any
    input whose image is not finite. None means "no target point", not
    an error.
    """
    iz = z.mult(I)
    den = iz.add(ONE)
    if den.modulus() < SINGULARITY_EPS:
        return None

    frac = iz.div(den)
    root = principal_fourth_root(frac)
    w = root.mult(I)
    if not w.is_finite():
        return None
    return w


def map_array(z: np.ndarray) -> np.ndarray:
    """Vectorized map_z_to_w over a complex128 array.

    Undefined points come back as nan + nan*1j. The branch policy is the
    same as the scalar version (np.angle is atan2 based).
    """
    z = np.asarray(z, dtype=np.complex128)
    iz = 1j * z
    den = iz + 1.0
    undefined = np.abs(den) < SINGULARITY_EPS

    with np.errstate(divide="ignore", invalid="ignore"):
        frac = iz / np.where(undefined, 1.0, den)
        r = np.abs(frac) ** 0.25
        phi = np.angle(frac) / 4
        root = r * np.cos(phi) + 1j * (r * np.sin(phi))
        w = 1j * root

    undefined = undefined | ~np.isfinite(w)
    return np.where(undefined, complex(np.nan, np.nan), w)


def color_for(z: Complex) -> str:
    """HSLA colour keyed on the argument of z, as the compute service emits it."""
    hue = ((z.argument() + math.pi) / (2 * math.pi)) * 360
    return f"hsla({hue:.2f}, 100%, 60%, 0.8)"
