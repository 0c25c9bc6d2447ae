"""Unit tests for numeric helpers."""

import pytest

from hackstat.utils import clamp01, num, optional_number, safe_div, squared


class TestNum:
    @pytest.mark.parametrize("value,expected", [
        (3, 3.0),
        ("2.5", 2.5),
        (None, 0.0),
        ("abc", 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
    ])
    def test_coercion(self, value, expected):
        assert num(value) == expected

    def test_optional_number_keeps_unknown(self):
        assert optional_number(None) is None
        assert optional_number("x") is None
        assert optional_number(float("nan")) is None
        assert optional_number(0) == 0.0

    def test_integers_too_large_for_float(self):
        assert num(10 ** 400) == 0.0
        assert optional_number(-10 ** 400) is None


class TestSafeDiv:
    def test_regular_division(self):
        assert safe_div(3, 4) == 0.75

    def test_non_positive_denominator_falls_back(self):
        assert safe_div(3, 0) == 0.0
        assert safe_div(3, -2) == 0.0
        assert safe_div(3, None, fallback=1.0) == 1.0

    def test_bad_numerator(self):
        assert safe_div("bad", 2) == 0.0

    def test_huge_integer_operands(self):
        assert safe_div(10 ** 400, 2) == 0.0
        assert safe_div(3, 10 ** 400, fallback=1.0) == 1.0


class TestClampAndSquare:
    def test_clamp01(self):
        assert clamp01(-0.5) == 0.0
        assert clamp01(1.5) == 1.0
        assert clamp01(0.3) == 0.3
        assert clamp01(None) == 0.0

    def test_squared(self):
        assert squared(-3) == 9.0
        assert squared("x") == 0.0
