"""
Unit tests for color-space math.

Tests the numeric helpers the analyzer depends on:
- RGB -> HSL conversion
- divergence score
- correlated color temperature
- standard deviation
"""

import math

import pytest

from chromatag.services.colors.space import (
    HSL, RGB, color_deviation, correlated_color_temperature, divergence,
    hex_to_rgb, rgb_to_hex, standard_deviation, to_hsl
)


class TestToHsl:
    """Test RGB to HSL conversion"""

    @pytest.mark.parametrize("v", [0, 1, 64, 128, 200, 255])
    def test_gray_has_zero_saturation(self, v):
        """Test grays have zero hue and saturation"""
        hsl = to_hsl(RGB(v, v, v))
        assert hsl.saturation == 0.0
        assert hsl.hue == 0.0
        assert hsl.luminance == pytest.approx(v / 255.0)

    def test_primary_hues(self):
        """Test hues of the primaries"""
        assert to_hsl(RGB(255, 0, 0)).hue == pytest.approx(0.0)
        assert to_hsl(RGB(0, 255, 0)).hue == pytest.approx(120.0)
        assert to_hsl(RGB(0, 0, 255)).hue == pytest.approx(240.0)

    def test_secondary_hues(self):
        """Test hues of the secondaries"""
        assert to_hsl(RGB(255, 255, 0)).hue == pytest.approx(60.0)
        assert to_hsl(RGB(0, 255, 255)).hue == pytest.approx(180.0)
        assert to_hsl(RGB(255, 0, 255)).hue == pytest.approx(300.0)

    def test_dark_green_stays_green(self):
        """Test dark green keeps a green hue"""
        assert to_hsl(RGB(0, 128, 0)).hue == pytest.approx(120.0)

    def test_pure_red_saturation_and_luminance(self):
        """Test saturation and luminance of pure red"""
        hsl = to_hsl(RGB(255, 0, 0))
        assert hsl.saturation == pytest.approx(1.0)
        assert hsl.luminance == pytest.approx(0.5)

    def test_light_color_saturation_branch(self):
        """Test saturation formula for luminance above one half"""
        hsl = to_hsl(RGB(255, 128, 128))
        assert hsl.luminance > 0.5
        assert hsl.saturation == pytest.approx(1.0)

    def test_dark_color_saturation_branch(self):
        """Test saturation formula for luminance below one half"""
        hsl = to_hsl(RGB(100, 50, 50))
        maximum, minimum = 100 / 255.0, 50 / 255.0
        assert hsl.luminance < 0.5
        assert hsl.saturation == pytest.approx((maximum - minimum) / (maximum + minimum))

    def test_hue_always_in_range(self):
        """Test hue stays within [0, 360)"""
        for rgb in [RGB(255, 0, 1), RGB(10, 0, 200), RGB(3, 250, 7), RGB(255, 1, 0)]:
            hue = to_hsl(rgb).hue
            assert 0.0 <= hue < 360.0

    def test_returns_hsl(self):
        """Test to_hsl returns an HSL value"""
        assert isinstance(to_hsl(RGB(1, 2, 3)), HSL)


class TestDivergence:
    """Test the clustering similarity score"""

    def test_identity(self):
        """Test a color does not diverge from itself"""
        c = RGB(12, 200, 99)
        assert divergence(c, c) == 0.0

    def test_symmetry(self):
        """Test divergence is symmetric"""
        a, b = RGB(10, 20, 30), RGB(200, 5, 90)
        assert divergence(a, b) == divergence(b, a)

    def test_mean_absolute_difference(self):
        """Test divergence is the mean absolute channel difference"""
        assert divergence(RGB(10, 20, 30), RGB(40, 20, 0)) == pytest.approx(20.0)

    def test_alpha_ignored(self):
        """Test alpha does not affect the result"""
        assert divergence(RGB(1, 2, 3, 0.0), RGB(1, 2, 3, 255.0)) == 0.0

    def test_maximum(self):
        """Test black against white gives the maximum divergence"""
        assert divergence(RGB(0, 0, 0), RGB(255, 255, 255)) == pytest.approx(255.0)


class TestCorrelatedColorTemperature:
    """Test McCamy CCT estimate"""

    def test_white(self):
        """Test white temperature"""
        assert correlated_color_temperature(RGB(255, 255, 255)) == pytest.approx(8890.35, abs=2.0)

    def test_scale_invariant(self):
        """Test temperature ignores overall intensity"""
        white = correlated_color_temperature(RGB(255, 255, 255))
        gray = correlated_color_temperature(RGB(128, 128, 128))
        assert gray == pytest.approx(white)

    def test_black_is_unavailable(self):
        """Test black has no defined temperature"""
        assert correlated_color_temperature(RGB(0, 0, 0)) is None

    def test_result_is_finite_or_none(self):
        """Test temperatures are finite or None"""
        for rgb in [RGB(255, 0, 0), RGB(0, 0, 255), RGB(31, 78, 121), RGB(211, 181, 143)]:
            cct = correlated_color_temperature(rgb)
            assert cct is None or math.isfinite(cct)


class TestStandardDeviation:
    """Test population and sample standard deviation"""

    def test_population(self):
        """Test population standard deviation"""
        assert standard_deviation([2, 4, 4, 4, 5, 5, 7, 9], sample=False) == pytest.approx(2.0)

    def test_sample(self):
        """Test sample standard deviation"""
        values = [2, 4, 4, 4, 5, 5, 7, 9]
        assert standard_deviation(values, sample=True) == pytest.approx(math.sqrt(32 / 7))

    def test_sample_requires_two_values(self):
        """Test sample mode needs at least two values"""
        with pytest.raises(ValueError):
            standard_deviation([3.0], sample=True)

    def test_empty_raises(self):
        """Test empty input raises ValueError"""
        with pytest.raises(ValueError):
            standard_deviation([])

    def test_single_value_population(self):
        """Test one value has zero population deviation"""
        assert standard_deviation([3.0]) == 0.0

    def test_color_deviation(self):
        """Test per-color channel deviation"""
        assert color_deviation(RGB(90, 90, 90)) == 0.0
        assert color_deviation(RGB(0, 0, 255)) == pytest.approx(standard_deviation([0, 0, 255]))


class TestHexConversion:
    """Test hex formatting helpers"""

    def test_rgb_to_hex(self):
        """Test formatting, rounding and clamping to hex"""
        assert rgb_to_hex(RGB(255, 0, 0)) == "#FF0000"
        assert rgb_to_hex(RGB(31, 78, 121)) == "#1F4E79"
        assert rgb_to_hex(RGB(300, -5, 10.4)) == "#FF000A"

    def test_hex_to_rgb(self):
        """Test parsing a hex string"""
        assert hex_to_rgb("#D3B58F") == RGB(211.0, 181.0, 143.0)

    def test_hex_to_rgb_invalid(self):
        """Test malformed hex strings are rejected"""
        with pytest.raises(ValueError):
            hex_to_rgb("#12345")
        with pytest.raises(ValueError):
            hex_to_rgb("#GGGGGG")
