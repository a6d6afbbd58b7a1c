"""Tests for conformal/coloring.py: CSS colour strings to RGBA bytes."""

import pytest

from conformal.coloring import parse_css_color
from conformal.complex_algebra import Complex
from conformal.mapping import color_for


class TestHsl:
    """hsl()/hsla() as emitted by the compute service."""

    def test_red_hue(self):
        assert parse_css_color("hsla(0, 100%, 60%, 0.8)") == (255, 51, 51, 204)

    def test_hue_wraps_at_360(self):
        assert parse_css_color("hsla(360.00, 100%, 60%, 0.8)") == (
            parse_css_color("hsla(0, 100%, 60%, 0.8)")
        )

    def test_hsl_without_alpha_is_opaque(self):
        assert parse_css_color("hsl(120, 100%, 50%)") == (0, 255, 0, 255)

    def test_service_colors_parse(self):
        for z in (Complex(1.0, 0.0), Complex(-2.0, 1.0), Complex(0.5, -3.0)):
            rgba = parse_css_color(color_for(z))
            assert rgba is not None
            assert rgba[3] == 204


class TestRgbHex:

    def test_rgb(self):
        assert parse_css_color("rgb(10, 20, 30)") == (10, 20, 30, 255)

    def test_rgba(self):
        assert parse_css_color("rgba(10, 20, 30, 0.5)") == (10, 20, 30, 128)

    def test_hex6(self):
        assert parse_css_color("#ff0055") == (255, 0, 85, 255)

    def test_hex3(self):
        assert parse_css_color("#f05") == (255, 0, 85, 255)

    def test_hex8(self):
        assert parse_css_color("#ff005580") == (255, 0, 85, 128)

    def test_channels_clamped(self):
        assert parse_css_color("rgb(300, -5, 20)") == (255, 0, 20, 255)


class TestUnrecognised:

    @pytest.mark.parametrize("text", ["white", "", "hsl(1, 2)", "rgb(a, b, c)", "#12"])
    def test_returns_none(self, text):
        assert parse_css_color(text) is None
