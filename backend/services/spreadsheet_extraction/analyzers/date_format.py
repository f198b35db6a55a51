"""
Detector de formato de datas de uma coluna.

Analisa uma amostra dos valores de uma coluna e infere a codificação
de datas mais provável (ISO, DD/MM/YYYY, MM/DD/YYYY, ano com dois
dígitos, mês/ano ou serial do Excel) com uma confiança associada.

É uma heurística: a confiança retornada deve ser usada pelos
consumidores para decidir se o palpite é confiável.
"""

import re
from datetime import date
from typing import Any, Iterable, List, Optional

from config import ImportacaoConfig as IC
from logging_config import get_logger

from ..models import DateFormat, DateFormatStrategy, is_blank, is_number

logger = get_logger('services.spreadsheet_extraction.analyzers.date_format')

ISO_PATTERN = re.compile(r'^\d{4}[-/]\d{1,2}[-/]\d{1,2}$')
MONTH_YEAR_PATTERN = re.compile(r'^\d{1,2}[-/](\d{4}|\d{2})$')
TRIPLE_PATTERN = re.compile(r'^(\d{1,2})[-/.](\d{1,2})[-/.](\d{2,4})$')


def sample_values(values: Iterable[Any], limit: Optional[int] = None) -> List[Any]:
    """Retorna os primeiros valores não vazios da coluna."""
    limit = IC.DATE_SAMPLE_SIZE if limit is None else limit
    samples: List[Any] = []
    for value in values:
        if is_blank(value):
            continue
        samples.append(value)
        if len(samples) >= limit:
            break
    return samples


def _is_serial(value: Any) -> bool:
    return is_number(value) and IC.SERIAL_MIN < value < IC.SERIAL_MAX


def _as_text(value: Any) -> str:
    if isinstance(value, date):
        return value.isoformat()[:10]
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def detect_date_format(values: Iterable[Any], day_first: Optional[bool] = None) -> DateFormatStrategy:
    """
    Infere o formato de data de uma coluna a partir de uma amostra.

    Args:
        values: Valores brutos da coluna (sem o cabeçalho)
        day_first: Preferência regional para tokens ambíguos
                   (None usa IMPORT_DAY_FIRST)

    Returns:
        DateFormatStrategy com formato, confiança e amostras usadas
    """
    if day_first is None:
        day_first = IC.DAY_FIRST

    samples = sample_values(values)
    if not samples:
        return DateFormatStrategy(format=DateFormat.DD_MM_YYYY, confidence=0.0, samples=[])

    total = len(samples)

    # Serial do Excel tem prioridade sobre representações textuais
    serial_count = sum(1 for v in samples if _is_serial(v))
    if serial_count / total >= IC.SERIAL_RATIO:
        logger.debug(f"Formato serial do Excel detectado ({serial_count}/{total})")
        return DateFormatStrategy(
            format=DateFormat.EXCEL_SERIAL,
            confidence=IC.CONF_SERIAL,
            samples=samples,
            match_ratio=serial_count / total,
        )

    iso_count = 0
    month_year_count = 0
    triple_count = 0
    two_digit_years = 0
    ambiguous = 0
    dd_mm_votes = 0.0
    mm_dd_votes = 0.0
    bias_weight = IC.DAY_FIRST_WEIGHT

    for value in samples:
        text = _as_text(value)
        if ISO_PATTERN.match(text):
            iso_count += 1
            continue
        if MONTH_YEAR_PATTERN.match(text):
            month_year_count += 1
            continue
        match = TRIPLE_PATTERN.match(text)
        if not match:
            continue

        triple_count += 1
        first, second, year = int(match.group(1)), int(match.group(2)), match.group(3)
        if len(year) == 2:
            two_digit_years += 1

        if first > 12:
            dd_mm_votes += 1
        elif second > 12:
            mm_dd_votes += 1
        else:
            ambiguous += 1
            if day_first:
                dd_mm_votes += bias_weight
                mm_dd_votes += 1 - bias_weight
            else:
                mm_dd_votes += bias_weight
                dd_mm_votes += 1 - bias_weight

    if iso_count / total > IC.ISO_RATIO:
        return DateFormatStrategy(
            format=DateFormat.YYYY_MM_DD,
            confidence=IC.CONF_ISO,
            samples=samples,
            match_ratio=iso_count / total,
        )

    if month_year_count / total > IC.MONTH_YEAR_RATIO:
        return DateFormatStrategy(
            format=DateFormat.MM_YYYY,
            confidence=IC.CONF_MONTH_YEAR,
            samples=samples,
            match_ratio=month_year_count / total,
        )

    if triple_count == 0:
        logger.debug(f"Nenhum padrão de data reconhecido em {total} amostras")
        return DateFormatStrategy(format=DateFormat.DD_MM_YYYY, confidence=0.0, samples=samples)

    prefer_day_first = dd_mm_votes >= mm_dd_votes
    if two_digit_years / total > IC.TWO_DIGIT_YEAR_RATIO:
        fmt = DateFormat.DD_MM_YY if prefer_day_first else DateFormat.MM_DD_YY
        confidence = IC.CONF_TWO_DIGIT_YEAR
    else:
        fmt = DateFormat.DD_MM_YYYY if prefer_day_first else DateFormat.MM_DD_YYYY
        confidence = IC.CONF_FOUR_DIGIT_YEAR

    if ambiguous:
        logger.debug(
            f"{ambiguous}/{triple_count} datas ambíguas; ordem {fmt.value} "
            f"decidida por votos ({dd_mm_votes:.1f} x {mm_dd_votes:.1f})"
        )

    return DateFormatStrategy(
        format=fmt,
        confidence=confidence,
        samples=samples,
        match_ratio=triple_count / total,
        ambiguous=ambiguous,
    )
