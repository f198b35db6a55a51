"""Parsers de células: datas, valores monetários, enumerações e prazo."""

from .date_parser import (
    excel_serial_to_date,
    expand_two_digit_year,
    parse_date,
    safe_date,
    to_ymd,
)
from .enum_parser import parse_modalidade, parse_prazo_text, parse_status
from .period import calculate_contract_period, validate_date_consistency
from .value_parser import parse_value

__all__ = [
    "excel_serial_to_date",
    "expand_two_digit_year",
    "parse_date",
    "safe_date",
    "to_ymd",
    "parse_modalidade",
    "parse_prazo_text",
    "parse_status",
    "calculate_contract_period",
    "validate_date_consistency",
    "parse_value",
]
