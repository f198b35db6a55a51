"""
Validação do mapeamento de colunas de uma aba.

Campos obrigatórios ausentes invalidam o mapeamento; campos
recomendados ausentes geram apenas sugestões. Colunas muito vazias e
formatos de data incertos viram avisos para o usuário.
"""

from typing import Sequence

from config import ImportacaoConfig as IC
from config import Messages
from logging_config import get_logger
from schemas.contrato import ValidationReport

from .analyzers.column_analyzer import DATE_FIELDS
from .models import RECOMMENDED_FIELDS, REQUIRED_FIELDS, ColumnAnalysis, DataType

logger = get_logger('services.spreadsheet_extraction.validation')


def validate_column_mapping(analyses: Sequence[ColumnAnalysis]) -> ValidationReport:
    """
    Confere as colunas mapeadas contra os campos obrigatórios e recomendados.

    Args:
        analyses: Resultado de analyze_columns

    Returns:
        ValidationReport (is_valid é False só quando falta campo obrigatório)
    """
    warnings = []
    suggestions = []
    missing_fields = []

    mapped = [
        a for a in analyses
        if a.field is not None and a.confidence > IC.REQUIRED_MIN_CONFIDENCE
    ]
    mapped_fields = {a.field for a in mapped}

    for field_name in REQUIRED_FIELDS:
        if field_name not in mapped_fields:
            missing_fields.append(field_name)
            warnings.append(Messages.CAMPO_OBRIGATORIO_AUSENTE.format(field=field_name))

    for field_name in RECOMMENDED_FIELDS:
        if field_name not in mapped_fields:
            suggestions.append(Messages.CAMPO_RECOMENDADO_AUSENTE.format(field=field_name))

    for analysis in mapped:
        if analysis.total_count and analysis.empty_count > analysis.total_count * IC.EMPTY_RATIO_WARNING:
            warnings.append(Messages.COLUNA_MUITO_VAZIA.format(
                header=analysis.header,
                empty=analysis.empty_count,
                total=analysis.total_count,
            ))

    for analysis in analyses:
        strategy = analysis.date_strategy
        if strategy is None:
            continue
        if analysis.data_type != DataType.DATE and analysis.field not in DATE_FIELDS:
            continue
        if strategy.confidence < IC.DATE_CONFIDENCE_WARNING:
            warnings.append(Messages.FORMATO_DATA_INCERTO.format(
                header=analysis.header,
                confidence=strategy.confidence * 100,
            ))
        elif strategy.guessed_day_month:
            warnings.append(Messages.DIA_MES_PRESUMIDO.format(
                header=analysis.header,
                format=strategy.format.value,
            ))

    report = ValidationReport(
        is_valid=not missing_fields,
        warnings=warnings,
        suggestions=suggestions,
        missing_fields=missing_fields,
    )
    if not report.is_valid:
        logger.info(f"Mapeamento incompleto: faltam {', '.join(missing_fields)}")
    return report
