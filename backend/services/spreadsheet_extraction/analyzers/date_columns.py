"""
Localização das colunas de data de início e de término.

Roda independente do analisador genérico de colunas: combina a
pontuação do cabeçalho contra sinônimos de início/fim com a confiança
do detector de formato sobre o conteúdo da coluna.
"""

from typing import List, Optional, Sequence, Tuple

from config import ImportacaoConfig as IC
from logging_config import get_logger

from ...extraction.text_normalizer import contains_phrase, normalize_search_text
from ..models import CellValue, DateColumnMatch, cell_at, cell_to_text, is_blank
from ..parsers.date_parser import parse_date
from .date_format import detect_date_format, sample_values

logger = get_logger('services.spreadsheet_extraction.analyzers.date_columns')

START_DATE_SYNONYMS = (
    'inicio', 'início', 'data inicio', 'data início', 'data inicial',
    'assinatura', 'data assinatura', 'vigencia', 'vigência', 'inicio vigencia',
    'início vigência', 'execução', 'execucao', 'inicio execução', 'início execução',
    'começo', 'comeco', 'iniciado', 'dt inicio', 'dt início', 'dt inicial',
    'dt assinatura', 'start', 'start date', 'begin', 'effective date', 'signature',
)

END_DATE_SYNONYMS = (
    'fim', 'final', 'término', 'termino', 'vencimento', 'vence',
    'data final', 'data fim', 'data termino', 'data limite', 'prazo final',
    'fim vigencia', 'fim vigência', 'final vigencia', 'final vigência',
    'conclusão', 'conclusao', 'encerramento', 'entrega',
    'dt fim', 'dt final', 'dt término', 'dt vencimento',
    'end', 'end date', 'finish', 'deadline', 'due date',
)

PRAZO_KEYWORDS = ('prazo', 'duracao', 'periodo', 'meses', 'dias')
# Palavras que fazem um cabeçalho "prazo ..." designar uma data
_DATE_MARKERS = ('data', 'dt', 'final', 'fim', 'vencimento', 'limite', 'termino')


def is_prazo_header(header: str) -> bool:
    """Cabeçalho de prazo por extenso ("Prazo", "Duração (meses)")."""
    normalized = normalize_search_text(header)
    if not any(contains_phrase(normalized, k) for k in PRAZO_KEYWORDS):
        return False
    return not any(contains_phrase(normalized, m) for m in _DATE_MARKERS)


def score_date_header(header: str, synonyms: Sequence[str]) -> float:
    """Maior pontuação do cabeçalho contra uma lista de sinônimos."""
    normalized = normalize_search_text(header)
    if not normalized:
        return 0.0
    best = 0.0
    for synonym in synonyms:
        norm_synonym = normalize_search_text(synonym)
        if normalized == norm_synonym:
            return IC.DATE_HEADER_EXACT
        if contains_phrase(normalized, norm_synonym):
            best = max(best, IC.DATE_HEADER_CONTAINS)
        elif len(normalized) >= IC.MIN_ABBREVIATION_LENGTH and normalized in norm_synonym:
            best = max(best, IC.DATE_HEADER_ABBREVIATION)
    return best


def _content_parses(values: Sequence[CellValue], date1904: bool) -> bool:
    non_empty = sample_values(values)
    if not non_empty:
        return True
    return any(parse_date(v, date1904=date1904) is not None for v in non_empty)


def find_date_columns(
    headers: Sequence[CellValue],
    rows: Sequence[Sequence[CellValue]],
    date1904: bool = False,
    day_first: Optional[bool] = None,
) -> Tuple[List[DateColumnMatch], List[DateColumnMatch]]:
    """
    Encontra colunas candidatas a data de início e de término.

    A confiança de cada candidata é 0.6 x cabeçalho + 0.4 x formato do
    conteúdo. Colunas cujo conteúdo não contém nenhuma data são
    descartadas; uma coluna reivindicada pelos dois papéis fica com o
    de cabeçalho mais forte (início em empate).

    Args:
        headers: Linha de cabeçalho
        rows: Linhas de dados (sem o cabeçalho)
        date1904: Sistema de datas 1904
        day_first: Preferência regional para datas ambíguas

    Returns:
        (candidatas a início, candidatas a término), ordenadas por confiança
    """
    starts: List[DateColumnMatch] = []
    ends: List[DateColumnMatch] = []

    for index, raw_header in enumerate(headers):
        header = cell_to_text(raw_header)
        if not header or is_prazo_header(header):
            continue

        start_score = score_date_header(header, START_DATE_SYNONYMS)
        end_score = score_date_header(header, END_DATE_SYNONYMS)
        if start_score == 0 and end_score == 0:
            continue

        values = [cell_at(row, index) for row in rows]
        if not _content_parses(values, date1904):
            logger.debug(f"Coluna '{header}' descartada: nenhum valor reconhecido como data")
            continue

        non_empty = [v for v in values if not is_blank(v)]
        strategy = detect_date_format(non_empty, day_first=day_first)

        if start_score >= end_score:
            role_score, target = start_score, starts
        else:
            role_score, target = end_score, ends

        confidence = IC.DATE_HEADER_WEIGHT * role_score + IC.DATE_CONTENT_WEIGHT * strategy.confidence
        target.append(DateColumnMatch(
            index=index,
            header=header,
            header_confidence=role_score,
            strategy=strategy,
            confidence=confidence,
        ))
        logger.debug(
            f"Coluna de data '{header}' ({index}): "
            f"{'início' if target is starts else 'término'} {confidence:.2f}"
        )

    # sorted é estável: em empate prevalece a coluna mais à esquerda
    starts = sorted(starts, key=lambda m: m.confidence, reverse=True)
    ends = sorted(ends, key=lambda m: m.confidence, reverse=True)
    return starts, ends
