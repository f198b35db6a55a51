"""
Testes para o parser de valores monetários.
"""
import pytest

from services.spreadsheet_extraction.parsers.value_parser import (
    detect_multiplier,
    normalize_decimal,
    parse_value,
)


class TestParseValue:
    """Testes para parse_value."""

    @pytest.mark.parametrize("raw,expected", [
        ("R$ 1.234,56", 1234.56),
        ("1,234.56", 1234.56),
        ("1.234.567,89", 1234567.89),
        ("R$ 10.000,00", 10000.0),
        ("R$ 1.500", 1500.0),
        ("1,234", 1234.0),
        ("99,9", 99.9),
        ("1234.5", 1234.5),
        ("R$ 250,00.", 250.0),
    ])
    def test_formats(self, raw, expected):
        assert parse_value(raw) == pytest.approx(expected)

    def test_numbers_pass_through(self):
        assert parse_value(1500) == 1500.0
        assert parse_value(99.5) == 99.5

    def test_negative_clamped_to_zero(self):
        assert parse_value(-5) == 0.0
        assert parse_value("-100,00") == 0.0

    def test_empty_and_invalid(self):
        assert parse_value("") == 0.0
        assert parse_value(None) == 0.0
        assert parse_value("a combinar") == 0.0

    def test_multipliers(self):
        assert parse_value("1,5 milhão") == pytest.approx(1_500_000)
        assert parse_value("2 milhões") == pytest.approx(2_000_000)
        assert parse_value("R$ 2,5 mi") == pytest.approx(2_500_000)
        assert parse_value("10 mil") == pytest.approx(10_000)
        assert parse_value("500k") == pytest.approx(500_000)


class TestDetectMultiplier:
    """Testes para detect_multiplier."""

    def test_million_checked_before_thousand(self):
        assert detect_multiplier("1 milhão") == 1_000_000

    def test_suffixes(self):
        assert detect_multiplier("3M") == 1_000_000
        assert detect_multiplier("3 k") == 1000

    def test_trailing_m_means_million(self):
        """Sufixo "m" no fim do texto, após um número, vale milhão."""
        assert detect_multiplier("5 m") == 1_000_000
        assert parse_value("5 m") == 5_000_000
        assert parse_value("2,5M") == 2_500_000
        assert detect_multiplier("5 metros") == 1

    def test_none(self):
        assert detect_multiplier("R$ 1.000,00") == 1


class TestNormalizeDecimal:
    """Testes para normalize_decimal."""

    def test_brazilian(self):
        assert normalize_decimal("1.234,56") == "1234.56"

    def test_international(self):
        assert normalize_decimal("1,234.56") == "1234.56"

    def test_multiple_dots_with_cents(self):
        assert normalize_decimal("1.234.56") == "1234.56"

    def test_multiple_commas(self):
        assert normalize_decimal("1,234,567") == "1234567"
