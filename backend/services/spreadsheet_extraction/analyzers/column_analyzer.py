"""
Analisador de colunas de planilhas.

Para cada cabeçalho não vazio, pontua o texto contra um dicionário de
sinônimos dos campos do contrato e, de forma independente, classifica o
tipo de dado predominante da coluna a partir de uma amostra dos valores.
Quando um campo de data casa com uma coluna cujo conteúdo também é de
datas, a confiança do mapeamento recebe um bônus.
"""

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from config import ImportacaoConfig as IC
from logging_config import get_logger

from ...extraction.text_normalizer import contains_phrase, normalize_search_text
from ..models import (
    FIELD_CONTRATADA,
    FIELD_CONTRATANTE,
    FIELD_DATA_INICIO,
    FIELD_DATA_TERMINO,
    FIELD_MODALIDADE,
    FIELD_NUMERO,
    FIELD_OBJETO,
    FIELD_STATUS,
    FIELD_VALOR,
    CellValue,
    ColumnAnalysis,
    DataType,
    DateFormatStrategy,
    cell_at,
    cell_to_text,
    is_blank,
    is_number,
)
from .date_format import detect_date_format

logger = get_logger('services.spreadsheet_extraction.analyzers.column_analyzer')

NUMERIC_PATTERN = re.compile(r'^[\d.,\-+R$\s€£¥]+$')

# Campo -> (sinônimos, nível de prioridade). Nível 2 pesa TIER2_WEIGHT.
FIELD_PATTERNS: Dict[str, Tuple[Tuple[str, ...], int]] = {
    FIELD_NUMERO: ((
        'numero', 'número', 'contrato', 'processo', 'num', 'nº', 'codigo',
        'código', 'id', 'identificador',
    ), 1),
    FIELD_OBJETO: ((
        'objeto', 'descrição', 'descricao', 'servico', 'serviço', 'item',
        'especificação',
    ), 1),
    FIELD_CONTRATANTE: ((
        'contratante', 'orgao', 'órgão', 'cliente', 'prefeitura', 'governo',
        'secretaria',
    ), 1),
    FIELD_CONTRATADA: ((
        'contratada', 'empresa', 'fornecedor', 'prestador', 'razao social', 'cnpj',
    ), 1),
    FIELD_VALOR: ((
        'valor', 'preco', 'preço', 'custo', 'montante', 'total', 'price', 'cost',
    ), 1),
    FIELD_DATA_INICIO: ((
        'inicio', 'início', 'data inicio', 'data início', 'assinatura',
        'vigencia', 'vigência', 'start', 'begin', 'dt inicio', 'dt início',
    ), 2),
    FIELD_DATA_TERMINO: ((
        'fim', 'final', 'término', 'termino', 'vencimento', 'end', 'finish',
        'data fim', 'data termino', 'dt fim', 'dt final', 'fim vigencia',
        'final vigencia',
    ), 2),
    FIELD_MODALIDADE: ((
        'modalidade', 'tipo', 'licitacao', 'licitação', 'pregão', 'modality',
    ), 1),
    FIELD_STATUS: ((
        'status', 'situacao', 'situação', 'estado', 'vigente', 'ativo',
    ), 1),
}

DATE_FIELDS = (FIELD_DATA_INICIO, FIELD_DATA_TERMINO)


def looks_numeric(value: Any) -> bool:
    """Número ou texto composto só por dígitos, separadores e moeda."""
    if is_number(value):
        return True
    text = str(value).strip()
    return bool(text) and bool(NUMERIC_PATTERN.match(text)) and any(c.isdigit() for c in text)


def classify_data_type(
    values: Sequence[CellValue],
    day_first: Optional[bool] = None,
) -> Tuple[DataType, Optional[DateFormatStrategy], Optional[str]]:
    """
    Classifica o tipo de dado predominante de uma coluna.

    Ordem: vazio, data (>= 70% das amostras casam com o formato
    detectado), número (>= 80% numéricos), texto (>= 60% textuais),
    senão misto.

    Returns:
        (tipo, estratégia de data detectada, padrão)
    """
    non_empty = [v for v in values if not is_blank(v)]
    if not non_empty:
        return DataType.EMPTY, None, None

    strategy = detect_date_format(non_empty, day_first=day_first)
    if strategy.confidence > 0 and strategy.match_ratio >= IC.DATE_TYPE_RATIO:
        return DataType.DATE, strategy, strategy.format.value

    total = len(non_empty)
    numeric = sum(1 for v in non_empty if looks_numeric(v))
    if numeric / total >= IC.NUMBER_TYPE_RATIO:
        return DataType.NUMBER, strategy, 'numeric'

    textual = total - numeric
    if textual / total >= IC.TEXT_TYPE_RATIO:
        return DataType.TEXT, strategy, 'textual'

    return DataType.MIXED, strategy, 'mixed_content'


def score_header(header: str) -> Tuple[Optional[str], float]:
    """
    Pontua um cabeçalho contra o dicionário de sinônimos.

    Igualdade vale 0.98, cabeçalho contendo o sinônimo 0.88, sinônimo
    contendo o cabeçalho (abreviação de 3+ letras) 0.78 e, para campos de
    data, cabeçalho com "data"/"dt" 0.65. Campos de nível 2 são
    multiplicados por TIER2_WEIGHT. Em empate vence o sinônimo que aparece
    mais cedo no cabeçalho ("Objeto do Contrato" é objeto), depois o mais
    longo e, por fim, o primeiro campo do dicionário.

    Returns:
        (campo, confiança) ou (None, 0.0)
    """
    normalized = normalize_search_text(header)
    if not normalized:
        return None, 0.0

    best_field: Optional[str] = None
    best_key: Tuple[float, int, int] = (0.0, 0, 0)

    for field_name, (keywords, tier) in FIELD_PATTERNS.items():
        weight = 1.0 if tier == 1 else IC.TIER2_WEIGHT
        for keyword in keywords:
            norm_keyword = normalize_search_text(keyword)
            if not norm_keyword:
                continue

            position = 0
            if normalized == norm_keyword:
                confidence = IC.HEADER_EXACT
            elif contains_phrase(normalized, norm_keyword):
                confidence = IC.HEADER_CONTAINS
                position = normalized.find(norm_keyword)
            elif len(normalized) >= IC.MIN_ABBREVIATION_LENGTH and normalized in norm_keyword:
                confidence = IC.HEADER_ABBREVIATION
            elif field_name in DATE_FIELDS and (
                contains_phrase(normalized, 'data') or contains_phrase(normalized, 'dt')
            ):
                confidence = IC.HEADER_DATE_PARTIAL
            else:
                continue

            key = (round(confidence * weight, 6), -position, len(norm_keyword))
            if key > best_key:
                best_key = key
                best_field = field_name

    return best_field, best_key[0]


def analyze_column(
    index: int,
    header: str,
    values: Sequence[CellValue],
    day_first: Optional[bool] = None,
) -> ColumnAnalysis:
    """Analisa uma única coluna (valores sem o cabeçalho)."""
    non_empty = [v for v in values if not is_blank(v)]
    data_type, strategy, pattern = classify_data_type(values, day_first=day_first)
    field_name, confidence = score_header(header)

    if (
        field_name in DATE_FIELDS
        and data_type == DataType.DATE
        and strategy is not None
        and strategy.confidence >= IC.DATE_BOOST_MIN_CONFIDENCE
    ):
        boosted = min(IC.DATE_BOOST_CAP, confidence + IC.DATE_BOOST)
        logger.debug(f"Coluna '{header}': confiança de data elevada {confidence:.2f} -> {boosted:.2f}")
        confidence = boosted

    # Estratégia de data só é relevante para colunas de data
    keep_strategy = data_type == DataType.DATE or field_name in DATE_FIELDS

    return ColumnAnalysis(
        index=index,
        header=header,
        data_type=data_type,
        field=field_name,
        confidence=confidence,
        samples=non_empty[:IC.SAMPLES_PER_COLUMN],
        empty_count=len(values) - len(non_empty),
        total_count=len(values),
        date_strategy=strategy if keep_strategy else None,
        pattern=pattern,
    )


def analyze_columns(
    headers: Sequence[CellValue],
    rows: Sequence[Sequence[CellValue]],
    day_first: Optional[bool] = None,
) -> List[ColumnAnalysis]:
    """
    Analisa todas as colunas com cabeçalho não vazio.

    Args:
        headers: Linha de cabeçalho
        rows: Linhas de dados (sem o cabeçalho)
        day_first: Preferência regional para datas ambíguas

    Returns:
        Uma ColumnAnalysis por cabeçalho não vazio, na ordem original
    """
    analyses: List[ColumnAnalysis] = []
    for index, raw_header in enumerate(headers):
        header = cell_to_text(raw_header)
        if not header:
            continue
        values = [cell_at(row, index) for row in rows]
        analysis = analyze_column(index, header, values, day_first=day_first)
        logger.debug(
            f"Coluna {index} '{header}': {analysis.data_type.value}, "
            f"campo={analysis.field or '-'} ({analysis.confidence:.2f})"
        )
        analyses.append(analysis)
    return analyses


def best_column_per_field(analyses: Sequence[ColumnAnalysis]) -> Dict[str, ColumnAnalysis]:
    """Mapeia cada campo para a coluna de maior confiança (a primeira em empate)."""
    mapping: Dict[str, ColumnAnalysis] = {}
    for analysis in analyses:
        if analysis.field is None or analysis.confidence <= 0:
            continue
        current = mapping.get(analysis.field)
        if current is None or analysis.confidence > current.confidence:
            mapping[analysis.field] = analysis
    return mapping
