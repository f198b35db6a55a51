"""
Parser de valores monetários.

Distingue o formato brasileiro (1.234,56) do internacional (1,234.56)
e reconhece multiplicadores por extenso ("mil", "milhão", "mi", "k").
As letras "k" e "m" só contam como sufixo, no fim do texto e após um número
("3k", "5 m" = 5 milhões).
Nunca lança exceção: entradas vazias ou ilegíveis valem 0.
"""

import re
from typing import Any

from logging_config import get_logger

from ...extraction.text_normalizer import normalize_accents
from ..models import is_blank, is_number

logger = get_logger('services.spreadsheet_extraction.parsers.value_parser')

_MILLION = re.compile(r'\b(milhao|milhoes|mi)\b|\d\s*m$')
_THOUSAND = re.compile(r'\bmil\b|\d\s*k$')
_NON_NUMERIC = re.compile(r'[^\d,.\-]')
_EDGE_SEPARATORS = re.compile(r'^[,.]+|[,.\-]+$')


def detect_multiplier(text: str) -> int:
    """Retorna 1_000_000 para "milhão/mi/M", 1000 para "mil/k", senão 1."""
    lowered = normalize_accents(text.lower()).strip()
    # "milhão" contém "mil": checar milhões primeiro
    if _MILLION.search(lowered):
        return 1_000_000
    if _THOUSAND.search(lowered):
        return 1000
    return 1


def normalize_decimal(text: str) -> str:
    """
    Converte separadores para o formato aceito por float().

    - Vírgula e ponto presentes: o último é o separador decimal
    - Só vírgula: decimal se houver uma única vírgula seguida de até
      2 dígitos, senão separador de milhar
    - Só ponto: vários pontos são milhar (exceto se o último grupo tiver
      até 2 dígitos); um único ponto seguido de exatamente 3 dígitos é
      milhar no formato brasileiro
    """
    comma_count = text.count(',')
    dot_count = text.count('.')

    if comma_count and dot_count:
        if text.rfind(',') > text.rfind('.'):
            return text.replace('.', '').replace(',', '.')
        return text.replace(',', '')

    if comma_count:
        after = text[text.rfind(',') + 1:]
        if comma_count == 1 and len(after) <= 2:
            return text.replace(',', '.')
        return text.replace(',', '')

    if dot_count:
        last_group = text[text.rfind('.') + 1:]
        if dot_count > 1:
            if len(last_group) <= 2:
                head, _, tail = text.rpartition('.')
                return head.replace('.', '') + '.' + tail
            return text.replace('.', '')
        if len(last_group) == 3:
            return text.replace('.', '')

    return text


def parse_value(raw: Any) -> float:
    """
    Converte valor monetário bruto em número não negativo.

    Args:
        raw: Valor da célula (número, texto ou vazio)

    Returns:
        Valor >= 0 (0 para entradas vazias ou inválidas)
    """
    if is_number(raw):
        return max(0.0, float(raw))
    if is_blank(raw) or not isinstance(raw, str):
        return 0.0

    text = raw.strip()
    multiplier = detect_multiplier(text)

    cleaned = _NON_NUMERIC.sub('', text)
    cleaned = _EDGE_SEPARATORS.sub('', cleaned)
    if not cleaned:
        return 0.0

    normalized = normalize_decimal(cleaned)
    try:
        parsed = float(normalized)
    except ValueError:
        logger.debug(f"Valor monetário não reconhecido: '{raw}'")
        return 0.0

    return max(0.0, parsed * multiplier)
