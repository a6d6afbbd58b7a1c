"""Tests for conformal/mapping.py: singularity, branch policy, vectorized map."""

import cmath
import math

import numpy as np
import pytest

from conformal.complex_algebra import Complex, I
from conformal.mapping import (
    SINGULARITY_EPS, color_for, map_array, map_z_to_w, principal_fourth_root,
)


def _grid():
    """Sample z values across the default z-view, avoiding z = i."""
    values = []
    for re in np.linspace(-4.0, 4.0, 17):
        for im in np.linspace(-2.0, 5.0, 15):
            z = Complex(float(re), float(im))
            if abs(z.re) < 1e-9 and abs(z.im - 1.0) < 1e-3:
                continue
            values.append(z)
    return values


class TestSingularity:
    """z = i has no image."""

    def test_i_is_undefined(self):
        assert map_z_to_w(I) is None

    def test_within_eps_is_undefined(self):
        z = Complex(0.0, 1.0 + SINGULARITY_EPS / 2)
        assert map_z_to_w(z) is None

    def test_just_outside_eps_is_defined(self):
        z = Complex(0.0, 1.0 + SINGULARITY_EPS * 2)
        assert map_z_to_w(z) is not None

    def test_threshold_constant(self):
        assert SINGULARITY_EPS == 1e-4


class TestKnownValues:
    """Exact values along the real and imaginary axes."""

    def test_origin_maps_to_origin(self):
        assert map_z_to_w(Complex(0.0, 0.0)) == Complex(0.0, 0.0)

    def test_branch_cut_takes_upper_boundary(self):
        """z = 0.5i gives frac = -1, whose principal root has argument pi/4.

        w = i * e^(i*pi/4) = e^(3i*pi/4), the upper edge of the sector.
        """
        w = map_z_to_w(Complex(0.0, 0.5))
        assert w.re == pytest.approx(-math.sqrt(2) / 2)
        assert w.im == pytest.approx(math.sqrt(2) / 2)

    def test_principal_fourth_root_positive_real(self):
        root = principal_fourth_root(Complex(16.0, 0.0))
        assert root.re == pytest.approx(2.0)
        assert root.im == pytest.approx(0.0)

    def test_principal_fourth_root_negative_real(self):
        root = principal_fourth_root(Complex(-16.0, 0.0))
        assert root.re == pytest.approx(math.sqrt(2))
        assert root.im == pytest.approx(math.sqrt(2))


class TestBranchPolicy:
    """The principal root keeps w in the sector (pi/4, 3pi/4]."""

    def test_image_sector(self):
        for z in _grid():
            w = map_z_to_w(z)
            if w is None or w.modulus() < 1e-12:
                continue
            arg = w.argument()
            assert math.pi / 4 - 1e-12 < arg <= 3 * math.pi / 4 + 1e-12, z

    def test_fourth_power_recovers_fraction(self):
        """(w / i)^4 equals iz / (iz + 1)."""
        for z in _grid():
            w = map_z_to_w(z)
            if w is None:
                continue
            zc = z.to_builtin()
            frac = (1j * zc) / (1j * zc + 1)
            root = w.to_builtin() / 1j
            assert cmath.isclose(root ** 4, frac, rel_tol=1e-9, abs_tol=1e-12), z

    def test_deterministic(self):
        for z in _grid():
            assert map_z_to_w(z) == map_z_to_w(z)


class TestMapArray:
    """Vectorized map agrees with the scalar map."""

    def test_matches_scalar(self):
        zs = _grid()
        arr = map_array(np.array([z.to_builtin() for z in zs]))
        for z, w_vec in zip(zs, arr):
            w = map_z_to_w(z)
            assert w is not None
            assert abs(w.to_builtin() - w_vec) < 1e-12, z

    def test_singularity_is_nan(self):
        arr = map_array(np.array([0j, 1j, 2 + 0j]))
        assert np.isfinite(arr[0])
        assert np.isnan(arr[1].real) and np.isnan(arr[1].imag)
        assert np.isfinite(arr[2])

    def test_origin(self):
        assert map_array(np.array([0j]))[0] == 0


class TestColorFor:
    """Colour derived from the argument of z."""

    def test_positive_real_axis(self):
        assert color_for(Complex(1.0, 0.0)) == "hsla(180.00, 100%, 60%, 0.8)"

    def test_negative_real_axis(self):
        assert color_for(Complex(-1.0, 0.0)) == "hsla(360.00, 100%, 60%, 0.8)"

    def test_positive_imaginary_axis(self):
        assert color_for(Complex(0.0, 2.0)) == "hsla(270.00, 100%, 60%, 0.8)"
