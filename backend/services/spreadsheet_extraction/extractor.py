"""
Extrator de contratos a partir da matriz de células de uma aba.

Orquestra o pipeline: análise de colunas -> localização das colunas de
data -> parsing célula a célula -> montagem do ContratoExtraido com uma
observação de procedência que permite auditar cada inferência.

Dados malformados nunca interrompem a extração: células ilegíveis viram
valores padrão e avisos. Só erros de uso (matriz que não é lista de
listas, nome de aba inválido) lançam InvalidSheetError.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from config import ImportacaoConfig as IC
from config import Messages
from exceptions import InvalidSheetError
from logging_config import get_context_logger, log_timing
from schemas.contrato import (
    ColumnMappingItem,
    ContratoExtraido,
    PrazoUnidade,
    SheetImportResult,
)

from .analyzers.column_analyzer import DATE_FIELDS, analyze_columns, best_column_per_field
from .analyzers.date_columns import find_date_columns, is_prazo_header
from .models import (
    FIELD_CONTRATADA,
    FIELD_CONTRATANTE,
    FIELD_MODALIDADE,
    FIELD_NUMERO,
    FIELD_OBJETO,
    FIELD_STATUS,
    FIELD_VALOR,
    CellValue,
    ColumnAnalysis,
    DataType,
    DateColumnMatch,
    DateFormatStrategy,
    ExtractionDiagnostics,
    RawSheet,
    cell_at,
    cell_to_text,
    is_blank,
    normalize_sheet,
)
from .parsers.date_parser import parse_date, to_ymd
from .parsers.enum_parser import parse_modalidade, parse_prazo_text, parse_status
from .parsers.period import calculate_contract_period, validate_date_consistency
from .parsers.value_parser import parse_value
from .validation import validate_column_mapping

CONTRACT_FIELDS = (FIELD_NUMERO, FIELD_OBJETO, FIELD_CONTRATANTE, FIELD_CONTRATADA, FIELD_VALOR)

_PLACEHOLDERS = {
    FIELD_OBJETO: Messages.OBJETO_NAO_ESPECIFICADO,
    FIELD_CONTRATANTE: Messages.CONTRATANTE_NAO_ESPECIFICADO,
    FIELD_CONTRATADA: Messages.CONTRATADA_NAO_ESPECIFICADA,
}


@dataclass(frozen=True)
class DateColumn:
    """Coluna escolhida para um papel de data (início ou término)."""
    index: int
    header: str
    strategy: DateFormatStrategy


@dataclass(frozen=True)
class SheetMapping:
    """Mapeamento de uma aba: campo -> índice de coluna e colunas de data."""
    fields: Dict[str, int]
    start: Optional[DateColumn]
    end: Optional[DateColumn]
    prazo_index: Optional[int]

    @property
    def is_empty(self) -> bool:
        has_contract_field = any(name in self.fields for name in CONTRACT_FIELDS)
        return not has_contract_field and self.start is None and self.end is None


def _check_sheet_name(sheet_name: Any) -> None:
    if not isinstance(sheet_name, str):
        raise InvalidSheetError(f"Nome de aba inválido: {sheet_name!r}")


def _has_headers(headers: Sequence[CellValue]) -> bool:
    return any(cell_to_text(h) for h in headers)


def _pick_date_column(
    candidates: List[DateColumnMatch],
    analyses_map: Dict[str, ColumnAnalysis],
    field_name: str,
) -> Optional[DateColumn]:
    if candidates:
        best = candidates[0]
        return DateColumn(best.index, best.header, best.strategy)
    # Sem candidata por sinônimo: usa a coluna do analisador se o conteúdo for de datas
    analysis = analyses_map.get(field_name)
    if analysis is not None and analysis.data_type == DataType.DATE and analysis.date_strategy:
        return DateColumn(analysis.index, analysis.header, analysis.date_strategy)
    return None


def build_mapping(
    headers: Sequence[CellValue],
    data_rows: Sequence[Sequence[CellValue]],
    analyses: Sequence[ColumnAnalysis],
    date1904: bool = False,
    day_first: Optional[bool] = None,
) -> SheetMapping:
    """Combina o analisador genérico com a busca dedicada de colunas de data."""
    best = best_column_per_field(analyses)
    starts, ends = find_date_columns(headers, data_rows, date1904=date1904, day_first=day_first)

    start = _pick_date_column(starts, best, DATE_FIELDS[0])
    end = _pick_date_column(ends, best, DATE_FIELDS[1])
    if start is not None and end is not None and start.index == end.index:
        end = None

    date_indexes = {c.index for c in (start, end) if c is not None}
    fields = {
        name: analysis.index
        for name, analysis in best.items()
        if name not in DATE_FIELDS and analysis.index not in date_indexes
    }

    prazo_index = None
    for index, header in enumerate(headers):
        text = cell_to_text(header)
        if text and index not in date_indexes and is_prazo_header(text):
            prazo_index = index
            break

    return SheetMapping(fields=fields, start=start, end=end, prazo_index=prazo_index)


def _text(row: Sequence[CellValue], index: Optional[int]) -> str:
    return cell_to_text(cell_at(row, index))


def _parse_row_date(
    row: Sequence[CellValue],
    column: Optional[DateColumn],
    is_end: bool,
    row_index: int,
    date1904: bool,
    day_first: Optional[bool],
    diagnostics: ExtractionDiagnostics,
) -> Optional[date]:
    if column is None:
        return None
    raw = cell_at(row, column.index)
    if is_blank(raw):
        return None
    parsed = parse_date(
        raw,
        is_end_column=is_end,
        date1904=date1904,
        column_strategy=column.strategy,
        day_first=day_first,
    )
    if parsed is None:
        diagnostics.dates_failed += 1
        diagnostics.warning(
            "data_invalida",
            f"Data não reconhecida: {raw!r}",
            row=row_index,
            column=column.header,
        )
    else:
        diagnostics.dates_parsed += 1
    return parsed


def _resolve_period(
    row: Sequence[CellValue],
    start: Optional[date],
    end: Optional[date],
    prazo_index: Optional[int],
) -> Tuple[int, PrazoUnidade, Optional[str]]:
    """Prazo derivado das datas tem prioridade sobre o texto da coluna de prazo."""
    if start is not None and end is not None:
        period = calculate_contract_period(start, end)
        if period is not None:
            prazo, unidade = period
            return prazo, unidade, Messages.OBS_PRAZO_CALCULADO.format(prazo=prazo, unidade=unidade.value)

    if prazo_index is not None:
        parsed = parse_prazo_text(cell_at(row, prazo_index))
        if parsed is not None:
            prazo, unidade = parsed
            return prazo, unidade, Messages.OBS_PRAZO_INFORMADO.format(prazo=prazo, unidade=unidade.value)

    return 0, PrazoUnidade.DIAS, None


def _origin_note(sheet_name: str, file_name: str, row_index: int) -> str:
    arquivo = Messages.OBS_ARQUIVO.format(file=file_name) if file_name else ""
    return Messages.OBS_ORIGEM.format(sheet=sheet_name, arquivo=arquivo, row=row_index)


def _build_record(
    row: Sequence[CellValue],
    row_index: int,
    mapping: SheetMapping,
    sheet_name: str,
    file_name: str,
    date1904: bool,
    day_first: Optional[bool],
    diagnostics: ExtractionDiagnostics,
) -> ContratoExtraido:
    fields = mapping.fields
    defaulted: List[str] = []

    numero = _text(row, fields.get(FIELD_NUMERO))
    if not numero:
        numero = f"{sheet_name}-LINHA-{row_index}"
        defaulted.append(FIELD_NUMERO)

    texts: Dict[str, str] = {}
    for field_name, placeholder in _PLACEHOLDERS.items():
        value = _text(row, fields.get(field_name))
        if not value:
            value = placeholder
            defaulted.append(field_name)
        texts[field_name] = value

    valor_index = fields.get(FIELD_VALOR)
    valor = parse_value(cell_at(row, valor_index)) if valor_index is not None else 0.0

    modalidade = parse_modalidade(cell_at(row, fields.get(FIELD_MODALIDADE)))
    status = parse_status(cell_at(row, fields.get(FIELD_STATUS)))

    start = _parse_row_date(row, mapping.start, False, row_index, date1904, day_first, diagnostics)
    end = _parse_row_date(row, mapping.end, True, row_index, date1904, day_first, diagnostics)

    prazo, unidade, prazo_note = _resolve_period(row, start, end, mapping.prazo_index)

    attention: List[str] = []
    if mapping.start is not None or mapping.end is not None:
        consistency = validate_date_consistency(start, end)
        attention.extend(consistency.warnings)
        if start is not None and end is not None and start > end:
            diagnostics.warning(
                "datas_invertidas",
                Messages.INICIO_APOS_TERMINO,
                row=row_index,
            )

    observacoes = _origin_note(sheet_name, file_name, row_index)
    if mapping.start is not None:
        observacoes += Messages.OBS_COLUNA_INICIO.format(
            header=mapping.start.header,
            format=mapping.start.strategy.format.value,
            confidence=mapping.start.strategy.confidence,
        )
    if mapping.end is not None:
        observacoes += Messages.OBS_COLUNA_TERMINO.format(
            header=mapping.end.header,
            format=mapping.end.strategy.format.value,
            confidence=mapping.end.strategy.confidence,
        )
    if attention:
        observacoes += Messages.OBS_ATENCAO.format(warnings="; ".join(attention))
    if prazo_note:
        observacoes += prazo_note
    if defaulted:
        diagnostics.defaulted_fields += len(defaulted)
        diagnostics.info(
            "campo_padrao",
            f"Campos preenchidos com valor padrão: {', '.join(defaulted)}",
            row=row_index,
        )
        observacoes += Messages.OBS_PREENCHER.format(fields=", ".join(defaulted))

    return ContratoExtraido(
        numero=numero,
        objeto=texts[FIELD_OBJETO],
        contratante=texts[FIELD_CONTRATANTE],
        contratada=texts[FIELD_CONTRATADA],
        valor=valor,
        data_inicio=to_ymd(start),
        data_termino=to_ymd(end),
        prazo_execucao=prazo,
        prazo_unidade=unidade,
        modalidade=modalidade,
        status=status,
        observacoes=observacoes,
    )


def _extract_flexible(
    rows: RawSheet,
    sheet_name: str,
    file_name: str,
    diagnostics: ExtractionDiagnostics,
) -> List[ContratoExtraido]:
    """Leitura posicional (numero, objeto, contratada, valor) quando nenhum cabeçalho é reconhecido."""
    diagnostics.warning("mapeamento_flexivel", "Nenhum cabeçalho reconhecido; usando posição das células")
    contratos: List[ContratoExtraido] = []
    for row_index in range(1, len(rows)):
        cells = [c for c in rows[row_index] if not is_blank(c)]
        if len(cells) < IC.FLEXIBLE_MIN_CELLS:
            diagnostics.skipped_rows += 1
            continue
        diagnostics.processed_rows += 1
        observacoes = (
            _origin_note(sheet_name, file_name, row_index)
            + Messages.OBS_MAPEAMENTO_FLEXIVEL
            + Messages.OBS_PREENCHER.format(fields="contratante, dataInicio, dataTermino, prazoExecucao")
        )
        contratos.append(ContratoExtraido(
            numero=cell_to_text(cells[0]),
            objeto=cell_to_text(cells[1]),
            contratante=Messages.CONTRATANTE_NAO_ESPECIFICADO,
            contratada=cell_to_text(cells[2]) if len(cells) > 2 else Messages.CONTRATADA_NAO_ESPECIFICADA,
            valor=parse_value(cells[3]) if len(cells) > 3 else 0.0,
            observacoes=observacoes,
        ))
    return contratos


def _extract_from_normalized(
    rows: RawSheet,
    analyses: Sequence[ColumnAnalysis],
    sheet_name: str,
    file_name: str,
    date1904: bool,
    day_first: Optional[bool],
    diagnostics: ExtractionDiagnostics,
) -> List[ContratoExtraido]:
    logger = get_context_logger(__name__, sheet=sheet_name, file=file_name)

    if len(rows) < 2:
        diagnostics.info("poucas_linhas", f"Aba com {len(rows)} linha(s); nada a extrair")
        logger.info("Aba sem linhas de dados")
        return []

    headers = rows[0]
    if not _has_headers(headers):
        diagnostics.warning("sem_cabecalho", "Nenhum cabeçalho válido encontrado")
        logger.warning("Nenhum cabeçalho válido encontrado")
        return []

    data_rows = rows[1:]
    diagnostics.total_rows = len(data_rows)

    mapping = build_mapping(headers, data_rows, analyses, date1904=date1904, day_first=day_first)
    if mapping.is_empty:
        logger.warning("Nenhum campo reconhecido nos cabeçalhos; usando mapeamento flexível")
        return _extract_flexible(rows, sheet_name, file_name, diagnostics)

    for column in (mapping.start, mapping.end):
        if column is not None and column.strategy.guessed_day_month:
            diagnostics.warning(
                "dia_mes_presumido",
                Messages.DIA_MES_PRESUMIDO.format(header=column.header, format=column.strategy.format.value),
                column=column.header,
            )
    logger.debug(
        f"Mapeamento: {mapping.fields}, início={mapping.start.header if mapping.start else '-'}, "
        f"término={mapping.end.header if mapping.end else '-'}"
    )

    contratos: List[ContratoExtraido] = []
    for row_index in range(1, len(rows)):
        row = rows[row_index]
        if all(is_blank(cell) for cell in row):
            diagnostics.skipped_rows += 1
            continue
        diagnostics.processed_rows += 1
        contratos.append(_build_record(
            row, row_index, mapping, sheet_name, file_name, date1904, day_first, diagnostics
        ))

    logger.info(
        f"{len(contratos)} contrato(s) extraído(s) de {diagnostics.total_rows} linha(s); "
        f"datas: {diagnostics.dates_parsed} ok, {diagnostics.dates_failed} com falha"
    )
    return contratos


def extract_contracts(
    rows: Any,
    sheet_name: str,
    file_name: str = "",
    date1904: bool = False,
    day_first: Optional[bool] = None,
    diagnostics: Optional[ExtractionDiagnostics] = None,
) -> List[ContratoExtraido]:
    """
    Extrai contratos de uma aba de planilha.

    Args:
        rows: Matriz de células; a primeira linha é o cabeçalho
        sheet_name: Nome da aba (usado na procedência)
        file_name: Nome do arquivo de origem (usado na procedência)
        date1904: Pasta de trabalho usa o sistema de datas 1904
        day_first: Preferência regional para datas ambíguas
                   (None usa IMPORT_DAY_FIRST)
        diagnostics: Rastro opcional preenchido durante a extração

    Returns:
        Lista de ContratoExtraido (vazia se a aba não tiver dados)

    Raises:
        InvalidSheetError: se rows não for uma lista de linhas ou
                           sheet_name não for texto
    """
    _check_sheet_name(sheet_name)
    normalized = normalize_sheet(rows)
    diagnostics = diagnostics if diagnostics is not None else ExtractionDiagnostics()

    logger = get_context_logger(__name__, sheet=sheet_name, file=file_name)
    with log_timing(logger, f"extracao_planilha[{sheet_name}]"):
        if len(normalized) < 2:
            analyses: List[ColumnAnalysis] = []
        else:
            analyses = analyze_columns(normalized[0], normalized[1:], day_first=day_first)
        return _extract_from_normalized(
            normalized, analyses, sheet_name, file_name, date1904, day_first, diagnostics
        )


def _column_summary(analysis: ColumnAnalysis) -> ColumnMappingItem:
    strategy = analysis.date_strategy
    return ColumnMappingItem(
        index=analysis.index,
        header=analysis.header,
        data_type=analysis.data_type.value,
        field=analysis.field,
        confidence=round(analysis.confidence, 4),
        date_format=strategy.format.value if strategy else None,
        date_confidence=strategy.confidence if strategy else None,
    )


def process_sheet(
    rows: Any,
    sheet_name: str,
    file_name: str = "",
    date1904: bool = False,
    day_first: Optional[bool] = None,
) -> SheetImportResult:
    """
    Importa uma aba completa: análise, validação, contratos e diagnóstico.

    Raises:
        InvalidSheetError: se rows não for uma lista de linhas
    """
    _check_sheet_name(sheet_name)
    normalized = normalize_sheet(rows)
    diagnostics = ExtractionDiagnostics()

    logger = get_context_logger(__name__, sheet=sheet_name, file=file_name)
    with log_timing(logger, f"importacao_aba[{sheet_name}]", level=logging.INFO):
        analyses: List[ColumnAnalysis] = []
        if len(normalized) >= 2:
            analyses = analyze_columns(normalized[0], normalized[1:], day_first=day_first)
        report = validate_column_mapping(analyses)
        contratos = _extract_from_normalized(
            normalized, analyses, sheet_name, file_name, date1904, day_first, diagnostics
        )

    for message in report.warnings:
        diagnostics.warning("validacao", message)

    return SheetImportResult(
        sheet_name=sheet_name,
        file_name=file_name,
        contratos=contratos,
        validation=report,
        columns=[_column_summary(a) for a in analyses],
        diagnostics=diagnostics.to_dict(),
    )
