"""
Testes para o parser de datas de células.
"""
from datetime import date, datetime

import pytest

from services.spreadsheet_extraction.models import DateFormat, DateFormatStrategy
from services.spreadsheet_extraction.parsers import (
    excel_serial_to_date,
    expand_two_digit_year,
    parse_date,
    safe_date,
    to_ymd,
)


class TestExcelSerialToDate:
    """Testes para excel_serial_to_date."""

    @pytest.mark.parametrize("serial,expected", [
        (1, date(1900, 1, 1)),
        (59, date(1900, 2, 28)),
        (60, date(1900, 3, 1)),
        (61, date(1900, 3, 1)),
        (45000, date(2023, 3, 15)),
        (45000.75, date(2023, 3, 15)),
    ])
    def test_1900_system(self, serial, expected):
        assert excel_serial_to_date(serial) == expected

    def test_1904_system(self):
        assert excel_serial_to_date(1, date1904=True) == date(1904, 1, 2)

    def test_1904_offset(self):
        """O sistema 1904 está deslocado 1462 dias em relação ao 1900."""
        for serial in (100, 30000, 43000):
            assert excel_serial_to_date(serial, True) == excel_serial_to_date(serial + 1462, False)

    def test_out_of_range(self):
        assert excel_serial_to_date(0) is None
        assert excel_serial_to_date(-5) is None
        assert excel_serial_to_date(150000) is None

    def test_non_number(self):
        assert excel_serial_to_date("45000") is None
        assert excel_serial_to_date(True) is None


class TestSafeDate:
    """Testes para safe_date."""

    def test_valid(self):
        assert safe_date(2024, 2, 29) == date(2024, 2, 29)

    def test_invalid_day_does_not_roll_over(self):
        assert safe_date(2024, 2, 31) is None
        assert safe_date(2023, 2, 29) is None

    def test_year_out_of_range(self):
        assert safe_date(1850, 1, 1) is None
        assert safe_date(2150, 1, 1) is None


class TestExpandTwoDigitYear:
    """Testes para a janela de anos com dois dígitos."""

    def test_recent_year(self):
        assert expand_two_digit_year(24, reference_year=2024) == 2024
        assert expand_two_digit_year(30, reference_year=2024) == 2030

    def test_far_future_goes_to_previous_century(self):
        assert expand_two_digit_year(99, reference_year=2024) == 1999
        assert expand_two_digit_year(45, reference_year=2024) == 1945


class TestParseDate:
    """Testes para parse_date."""

    def test_native_objects(self):
        assert parse_date(datetime(2024, 5, 10, 14, 30)) == date(2024, 5, 10)
        assert parse_date(date(2024, 5, 10)) == date(2024, 5, 10)
        assert parse_date(date(1800, 1, 1)) is None

    def test_blank(self):
        assert parse_date(None) is None
        assert parse_date("   ") is None

    def test_iso_roundtrip(self):
        assert to_ymd(parse_date("2024-03-15")) == "2024-03-15"
        assert parse_date("2024-03-15T10:30:00") == date(2024, 3, 15)
        assert parse_date("2024/3/5") == date(2024, 3, 5)

    def test_brazilian_default(self):
        assert parse_date("05/03/2024") == date(2024, 3, 5)
        assert parse_date("15.01.2024") == date(2024, 1, 15)

    def test_day_above_twelve_decides_order(self):
        assert parse_date("03/15/2024") == date(2024, 3, 15)
        assert parse_date("15/03/2024", day_first=False) == date(2024, 3, 15)

    def test_assume_format(self):
        assert parse_date("01/02/2024", assume="MM/DD/YYYY") == date(2024, 1, 2)
        assert parse_date("01/02/2024", assume="DD/MM/YYYY") == date(2024, 2, 1)

    def test_confident_column_strategy_wins(self):
        strategy = DateFormatStrategy(format=DateFormat.MM_DD_YYYY, confidence=0.85)
        assert parse_date("01/02/2024", assume="DD/MM/YYYY", column_strategy=strategy) == date(2024, 1, 2)

    def test_weak_column_strategy_ignored(self):
        strategy = DateFormatStrategy(format=DateFormat.MM_DD_YYYY, confidence=0.5)
        assert parse_date("01/02/2024", column_strategy=strategy) == date(2024, 2, 1)

    def test_invalid_calendar_date(self):
        """31 de fevereiro não vira março."""
        assert parse_date("31/02/2024") is None
        assert parse_date("2024-02-30") is None

    def test_month_year_start_and_end(self):
        assert parse_date("02/2024") == date(2024, 2, 1)
        assert parse_date("02/2024", is_end_column=True) == date(2024, 2, 29)
        assert parse_date("13/2024") is None

    def test_two_digit_year(self):
        assert parse_date("15/01/99", reference_year=2024) == date(1999, 1, 15)
        assert parse_date("15/01/30", reference_year=2024) == date(2030, 1, 15)

    def test_label_and_parentheses_removed(self):
        assert parse_date("Data: 15/01/2024") == date(2024, 1, 15)
        assert parse_date("(15/01/2024)") == date(2024, 1, 15)

    def test_portuguese_month_names(self):
        assert parse_date("15 de março de 2024") == date(2024, 3, 15)
        assert parse_date("1 jan 2024") == date(2024, 1, 1)

    def test_serial_numbers(self):
        assert parse_date(45000) == date(2023, 3, 15)
        assert parse_date(1, date1904=True) == date(1904, 1, 2)

    def test_serial_text_needs_serial_strategy(self):
        """Texto numérico só é serial quando a coluna é serial."""
        assert parse_date("45000") is None
        strategy = DateFormatStrategy(format=DateFormat.EXCEL_SERIAL, confidence=0.9)
        assert parse_date("45000", column_strategy=strategy) == date(2023, 3, 15)

    def test_garbage(self):
        assert parse_date("sem data") is None
        assert parse_date("a definir") is None

    @pytest.mark.parametrize("texto", ["12h", "1.5", "5 jan", "15 de março"])
    def test_text_without_year_is_not_a_date(self, texto):
        """Ano ou mês ausentes não são completados com valores padrão."""
        assert parse_date(texto) is None

    def test_textual_month_year(self):
        assert parse_date("março de 2024") == date(2024, 3, 1)
        assert parse_date("fevereiro de 2024", is_end_column=True) == date(2024, 2, 29)


class TestToYmd:
    """Testes para to_ymd."""

    def test_formats(self):
        assert to_ymd(date(2024, 1, 5)) == "2024-01-05"
        assert to_ymd(datetime(2024, 1, 5, 10, 0)) == "2024-01-05"
        assert to_ymd(None) == ""
