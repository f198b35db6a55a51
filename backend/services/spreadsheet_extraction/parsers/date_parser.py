"""
Parser de datas de células de planilha.

Converte o valor bruto de uma célula em datetime.date seguindo, em ordem:
objetos date/datetime, números seriais do Excel (sistemas 1900 e 1904),
textos ISO, mês/ano, dia-mês-ano com dois ou quatro dígitos e, por
último, o parser genérico do python-dateutil com nomes de meses em
português.

Falhas nunca lançam exceção: o resultado é None e o chamador trata
como dado parcial.
"""

import calendar
import re
from datetime import date, datetime, timedelta
from typing import Any, Optional, Union

from dateutil import parser as dateutil_parser

from config import ImportacaoConfig as IC
from logging_config import get_logger

from ..models import AssumeFormat, DateFormat, DateFormatStrategy, is_blank, is_number

logger = get_logger('services.spreadsheet_extraction.parsers.date_parser')

_EPOCH_1900 = date(1899, 12, 30)
_EPOCH_1900_PRE_LEAP = date(1899, 12, 31)
_EPOCH_1904 = date(1904, 1, 1)
# Serial 60 é o 29/02/1900 inexistente do Excel
_EXCEL_LEAP_BUG_SERIAL = 60

_LABEL_PREFIX = re.compile(r'^(data|dt|date)[\s:]+', re.IGNORECASE)
_PARENTHESES = re.compile(r'[()]')
_ISO = re.compile(
    r'^(\d{4})[-/](\d{1,2})[-/](\d{1,2})'
    r'(?:[T\s]+\d{1,2}:\d{2}(?::\d{2}(?:\.\d+)?)?)?$'
)
_MONTH_YEAR = re.compile(r'^(\d{1,2})[-/.](\d{4}|\d{2})$')
_TRIPLE = re.compile(r'^(\d{1,2})[-/.](\d{1,2})[-/.](\d{2,4})$')
_HAS_DIGIT = re.compile(r'\d')


class _PortugueseParserInfo(dateutil_parser.parserinfo):
    """Nomes de meses e dias da semana em português para o dateutil."""

    JUMP = dateutil_parser.parserinfo.JUMP + ["de", "do", "da", "em"]
    WEEKDAYS = [
        ("seg", "segunda", "segunda-feira"),
        ("ter", "terça", "terca", "terça-feira"),
        ("qua", "quarta", "quarta-feira"),
        ("qui", "quinta", "quinta-feira"),
        ("sex", "sexta", "sexta-feira"),
        ("sab", "sáb", "sábado", "sabado"),
        ("dom", "domingo"),
    ]
    MONTHS = [
        ("jan", "janeiro"),
        ("fev", "fevereiro"),
        ("mar", "março", "marco"),
        ("abr", "abril"),
        ("mai", "maio"),
        ("jun", "junho"),
        ("jul", "julho"),
        ("ago", "agosto"),
        ("set", "setembro"),
        ("out", "outubro"),
        ("nov", "novembro"),
        ("dez", "dezembro"),
    ]


_PARSER_INFO = _PortugueseParserInfo()
# Padrões que diferem em ano, mês e dia para detectar campos preenchidos pelo dateutil
_NATIVE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 12, 28))


def _in_year_range(value: date) -> bool:
    return IC.YEAR_MIN <= value.year <= IC.YEAR_MAX


def safe_date(year: int, month: int, day: int) -> Optional[date]:
    """
    Constrói uma data sem "rolar" valores inválidos.

    31/02 retorna None em vez de virar 03/03.
    """
    try:
        result = date(year, month, day)
    except ValueError:
        return None
    return result if _in_year_range(result) else None


def excel_serial_to_date(serial: Union[int, float], date1904: bool = False) -> Optional[date]:
    """
    Converte um número serial do Excel em data.

    No sistema 1900 o serial 1 é 01/01/1900 e o serial 60 (o 29/02/1900
    que o Excel considera existir) é tratado como 01/03/1900; a partir do
    61 a contagem segue a base 30/12/1899. No sistema 1904 a base é
    01/01/1904. A parte fracionária (horas) é descartada.

    Args:
        serial: Número serial da célula
        date1904: True se a pasta de trabalho usa o sistema de datas 1904

    Returns:
        Data convertida ou None se fora do intervalo de anos aceito
    """
    if not is_number(serial):
        return None
    if not IC.SERIAL_MIN <= serial < IC.SERIAL_MAX:
        return None

    days = int(serial)
    if date1904:
        result = _EPOCH_1904 + timedelta(days=days)
    elif days > _EXCEL_LEAP_BUG_SERIAL:
        result = _EPOCH_1900 + timedelta(days=days)
    elif days == _EXCEL_LEAP_BUG_SERIAL:
        result = date(1900, 3, 1)
    else:
        result = _EPOCH_1900_PRE_LEAP + timedelta(days=days)

    return result if _in_year_range(result) else None


def expand_two_digit_year(year: int, reference_year: Optional[int] = None) -> int:
    """
    Expande ano de dois dígitos por janela deslizante.

    Se o ano ficaria mais de 20 anos no futuro em relação ao ano de
    referência, assume o século anterior.
    """
    if reference_year is None:
        reference_year = date.today().year
    century = reference_year - reference_year % 100
    if year > reference_year % 100 + IC.TWO_DIGIT_YEAR_WINDOW:
        return century - 100 + year
    return century + year


def _clean_text(text: str) -> str:
    cleaned = _LABEL_PREFIX.sub('', text.strip())
    cleaned = _PARENTHESES.sub('', cleaned)
    return cleaned.strip()


def _first_is_day(
    first: int,
    second: int,
    assume: str,
    column_strategy: Optional[DateFormatStrategy],
    day_first: bool,
) -> bool:
    if (
        column_strategy is not None
        and column_strategy.confidence > IC.STRATEGY_TRUST_THRESHOLD
        and column_strategy.day_first is not None
    ):
        return column_strategy.day_first
    if assume == AssumeFormat.DD_MM_YYYY.value:
        return True
    if assume == AssumeFormat.MM_DD_YYYY.value:
        return False
    if first > 12:
        return True
    if second > 12:
        return False
    return day_first


def _parse_text(
    text: str,
    assume: str,
    is_end_column: bool,
    date1904: bool,
    column_strategy: Optional[DateFormatStrategy],
    day_first: bool,
    reference_year: Optional[int],
) -> Optional[date]:
    cleaned = _clean_text(text)
    if not cleaned:
        return None

    if (
        column_strategy is not None
        and column_strategy.format == DateFormat.EXCEL_SERIAL
        and re.fullmatch(r'\d+(?:[.,]\d+)?', cleaned)
    ):
        return excel_serial_to_date(float(cleaned.replace(',', '.')), date1904)

    match = _ISO.match(cleaned)
    if match:
        year, month, day = (int(g) for g in match.groups())
        return safe_date(year, month, day)

    match = _MONTH_YEAR.match(cleaned)
    if match:
        month = int(match.group(1))
        year_text = match.group(2)
        year = int(year_text)
        if len(year_text) == 2:
            year = expand_two_digit_year(year, reference_year)
        if not 1 <= month <= 12:
            return None
        day = calendar.monthrange(year, month)[1] if is_end_column else 1
        return safe_date(year, month, day)

    match = _TRIPLE.match(cleaned)
    if match:
        first, second = int(match.group(1)), int(match.group(2))
        year_text = match.group(3)
        year = int(year_text)
        if len(year_text) == 2:
            year = expand_two_digit_year(year, reference_year)
        if _first_is_day(first, second, assume, column_strategy, day_first):
            return safe_date(year, second, first)
        return safe_date(year, first, second)

    return _parse_native(cleaned, day_first, is_end_column)


def _parse_native(text: str, day_first: bool, is_end_column: bool) -> Optional[date]:
    """
    Último recurso: parser genérico do dateutil, limitado a [1900, 2100].

    O texto é lido com dois valores padrão distintos; ano e mês precisam
    vir do próprio texto ("12h" ou "5 jan" não são datas). Dia ausente
    segue a regra de mês/ano.
    """
    if not _HAS_DIGIT.search(text):
        return None
    # Números soltos ("45000", "12") não são datas textuais
    if text.isdigit() and len(text) != 8:
        return None
    try:
        first = dateutil_parser.parse(
            text, parserinfo=_PARSER_INFO, dayfirst=day_first, default=_NATIVE_DEFAULTS[0]
        ).date()
        second = dateutil_parser.parse(
            text, parserinfo=_PARSER_INFO, dayfirst=day_first, default=_NATIVE_DEFAULTS[1]
        ).date()
    except (ValueError, OverflowError) as e:
        logger.debug(f"dateutil não reconheceu '{text}': {e}")
        return None
    if first.year != second.year or first.month != second.month:
        logger.debug(f"dateutil completou ano ou mês ausente em '{text}'")
        return None
    result = first
    if first.day != second.day:
        day = calendar.monthrange(first.year, first.month)[1] if is_end_column else 1
        result = safe_date(first.year, first.month, day)
    return result if result is not None and _in_year_range(result) else None


def parse_date(
    value: Any,
    assume: str = AssumeFormat.AUTO.value,
    is_end_column: bool = False,
    date1904: bool = False,
    column_strategy: Optional[DateFormatStrategy] = None,
    day_first: Optional[bool] = None,
    reference_year: Optional[int] = None,
) -> Optional[date]:
    """
    Converte o valor de uma célula em data.

    Args:
        value: Valor bruto da célula
        assume: "DD/MM/YYYY", "MM/DD/YYYY" ou "auto"
        is_end_column: Coluna de término (mês/ano vira o último dia do mês)
        date1904: Pasta de trabalho usa o sistema de datas 1904
        column_strategy: Formato detectado para a coluna
        day_first: Preferência regional para tokens ambíguos
                   (None usa IMPORT_DAY_FIRST)
        reference_year: Ano base para expandir anos de dois dígitos

    Returns:
        datetime.date ou None se o valor não for uma data reconhecível
    """
    if is_blank(value):
        return None
    if isinstance(assume, AssumeFormat):
        assume = assume.value
    if day_first is None:
        day_first = IC.DAY_FIRST

    if isinstance(value, datetime):
        result: Optional[date] = value.date()
        return result if _in_year_range(result) else None
    if isinstance(value, date):
        return value if _in_year_range(value) else None
    if is_number(value):
        return excel_serial_to_date(value, date1904)
    if not isinstance(value, str):
        return None

    result = _parse_text(
        value, assume, is_end_column, date1904, column_strategy, day_first, reference_year
    )
    if result is None:
        logger.debug(f"Data não reconhecida: '{value}'")
    return result


def to_ymd(value: Optional[date]) -> str:
    """Formata a data como YYYY-MM-DD ("" quando desconhecida)."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()
