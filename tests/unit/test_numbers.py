"""
Unit tests for loose numeric parsing.
"""
import math

import pytest

from supplier_scoring.scoring.numbers import clamp, number_or, parse_number, round_half_up


class TestParseNumber:
    """Separator disambiguation, units and unparseable input."""

    @pytest.mark.parametrize("raw, expected", [
        ("79 586 567,50", 79586567.50),
        ("1,270,192.34", 1270192.34),
        ("79.586.567,50", 79586567.50),
        ("6,56", 6.56),
        ("6.5", 6.5),
        ("12 kr", 12.0),
        ("50%", 50.0),
        ("-5,5", -5.5),
        ("1.234.567", 1234567.0),
        ("  100  ", 100.0),
    ])
    def test_formats(self, raw, expected):
        assert parse_number(raw) == pytest.approx(expected)

    def test_single_separator_with_three_digits_is_thousands(self):
        # Ambiguous input is read as a thousands group
        assert parse_number("1,234") == 1234.0
        assert parse_number("1.234") == 1234.0

    @pytest.mark.parametrize("raw", ["", "   ", "-", "abc", "kr", None, True])
    def test_unparseable_is_nan(self, raw):
        assert math.isnan(parse_number(raw))

    def test_numeric_passthrough(self):
        assert parse_number(42) == 42.0
        assert parse_number(3.5) == 3.5

    def test_non_finite_numbers_are_nan(self):
        assert math.isnan(parse_number(float("inf")))
        assert math.isnan(parse_number(float("nan")))


class TestHelpers:

    def test_number_or_uses_default(self):
        assert number_or("", 1.0) == 1.0
        assert number_or("n/a", 0.0) == 0.0
        assert number_or("7", 1.0) == 7.0

    def test_number_or_keeps_zero(self):
        assert number_or("0", 1.0) == 0.0

    @pytest.mark.parametrize("value, expected", [(-5, 0), (50, 50), (150, 100)])
    def test_clamp(self, value, expected):
        assert clamp(value, 0, 100) == expected

    @pytest.mark.parametrize("value, digits, expected", [
        (0.125, 2, 0.13),
        (5.25, 1, 5.3),
        (2.5, 0, 3.0),
        (0.124, 2, 0.12),
        (2.18, 1, 2.2),
        (-2.5, 0, -2.0),
    ])
    def test_round_half_up(self, value, digits, expected):
        assert round_half_up(value, digits) == expected
