"""Tests for conformal/complex_algebra.py: arithmetic, division sentinel, argument."""

import math

import pytest

from conformal.complex_algebra import Complex, I, ONE, ZERO


class TestArithmetic:
    """Test add, sub, mult against Python's builtin complex."""

    def test_add(self):
        assert Complex(1.0, 2.0).add(Complex(3.0, -5.0)) == Complex(4.0, -3.0)

    def test_sub(self):
        assert Complex(1.0, 2.0).sub(Complex(3.0, -5.0)) == Complex(-2.0, 7.0)

    def test_mult_matches_builtin(self):
        a, b = Complex(1.5, -2.0), Complex(-0.25, 3.0)
        expected = a.to_builtin() * b.to_builtin()
        result = a.mult(b)
        assert result.re == pytest.approx(expected.real)
        assert result.im == pytest.approx(expected.imag)

    def test_i_squared_is_minus_one(self):
        assert I.mult(I) == Complex(-1.0, 0.0)

    def test_mult_by_i_rotates(self):
        """Multiplying by i maps (re, im) to (-im, re)."""
        assert Complex(2.0, 3.0).mult(I) == Complex(-3.0, 2.0)

    def test_operations_return_new_values(self):
        a = Complex(1.0, 1.0)
        b = a.add(ONE)
        assert a == Complex(1.0, 1.0)
        assert b is not a


class TestDivision:
    """Test div including the zero-divisor sentinel."""

    def test_div_matches_builtin(self):
        a, b = Complex(3.0, 4.0), Complex(1.0, -2.0)
        expected = a.to_builtin() / b.to_builtin()
        result = a.div(b)
        assert result.re == pytest.approx(expected.real)
        assert result.im == pytest.approx(expected.imag)

    def test_div_by_zero_is_sentinel(self):
        """Zero divisor yields (inf, inf) instead of raising."""
        result = Complex(1.0, 1.0).div(ZERO)
        assert result == Complex(math.inf, math.inf)
        assert not result.is_finite()

    def test_zero_div_zero_is_sentinel(self):
        assert ZERO.div(ZERO) == Complex(math.inf, math.inf)

    def test_div_by_self_is_one(self):
        c = Complex(0.3, -0.7)
        result = c.div(c)
        assert result.re == pytest.approx(1.0)
        assert result.im == pytest.approx(0.0)


class TestModulusArgument:
    """Test modulus and principal argument."""

    def test_modulus_345(self):
        assert Complex(3.0, 4.0).modulus() == 5.0

    def test_argument_of_zero(self):
        assert ZERO.argument() == 0.0

    def test_argument_negative_real_axis_is_pi(self):
        """Principal value lies in (-pi, pi]: the negative real axis maps to +pi."""
        assert Complex(-1.0, 0.0).argument() == math.pi

    def test_argument_quadrants(self):
        assert Complex(1.0, 1.0).argument() == pytest.approx(math.pi / 4)
        assert Complex(-1.0, 1.0).argument() == pytest.approx(3 * math.pi / 4)
        assert Complex(-1.0, -1.0).argument() == pytest.approx(-3 * math.pi / 4)
        assert Complex(1.0, -1.0).argument() == pytest.approx(-math.pi / 4)


class TestValueSemantics:
    """Complex is an immutable value type."""

    def test_immutable(self):
        c = Complex(1.0, 2.0)
        with pytest.raises(AttributeError):
            c.re = 5.0

    def test_equality_by_components(self):
        assert Complex(1.0, 2.0) == Complex(1.0, 2.0)
        assert hash(Complex(1.0, 2.0)) == hash(Complex(1.0, 2.0))

    def test_to_builtin(self):
        assert Complex(2.5, -1.5).to_builtin() == complex(2.5, -1.5)

    def test_is_finite(self):
        assert Complex(1.0, 2.0).is_finite()
        assert not Complex(math.nan, 0.0).is_finite()
        assert not Complex(0.0, -math.inf).is_finite()
