"""
Unit tests for unit conversion helpers.
"""

import pytest

from diagram_export.common import clamp, round_half_up, svg_units_to_points


class TestSvgUnitsToPoints:
    """Tests for svg_units_to_points()."""

    def test_convert_when_96_dpi_then_three_quarters(self):
        assert svg_units_to_points(200, 96) == pytest.approx(150)

    @pytest.mark.parametrize("dpi, expected", [(10, 200), (72, 200), (1200, 48)])
    def test_convert_when_dpi_out_of_range_then_clamped(self, dpi, expected):
        assert svg_units_to_points(200, dpi) == pytest.approx(expected)


class TestHelpers:
    """Tests for clamp() and round_half_up()."""

    @pytest.mark.parametrize("value, expected", [(0.5, 1), (1.49, 1), (2.5, 3), (-2.5, -3)])
    def test_round_half_up_when_half_then_away_from_zero(self, value, expected):
        assert round_half_up(value) == expected

    def test_clamp_when_outside_then_bounded(self):
        assert clamp(9, 1, 8) == 8
        assert clamp(0, 1, 8) == 1
