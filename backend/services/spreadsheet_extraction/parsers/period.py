"""
Prazo de execução derivado das datas de início e término.
"""

from datetime import date
from typing import Optional, Tuple

from dateutil.relativedelta import relativedelta

from config import ImportacaoConfig as IC
from config import Messages
from schemas.contrato import DateConsistency, PrazoUnidade


def calculate_contract_period(start: date, end: date) -> Optional[Tuple[int, PrazoUnidade]]:
    """
    Calcula o prazo entre duas datas na unidade mais natural.

    Até 90 dias o prazo é informado em dias, até 730 dias em meses
    completos e acima disso em anos completos (mínimo 1).

    Returns:
        (prazo, unidade) ou None se a data de início for posterior ao término
    """
    total_days = (end - start).days
    if total_days < 0:
        return None
    if total_days <= IC.PERIOD_MAX_DAYS:
        return total_days, PrazoUnidade.DIAS

    delta = relativedelta(end, start)
    if total_days <= IC.PERIOD_MAX_MONTHS_DAYS:
        return delta.years * 12 + delta.months, PrazoUnidade.MESES
    return max(delta.years, 1), PrazoUnidade.ANOS


def validate_date_consistency(start: Optional[date], end: Optional[date]) -> DateConsistency:
    """Verifica ausência de datas e início posterior ao término."""
    warnings = []
    if start is None and end is None:
        return DateConsistency(is_valid=False, warnings=[Messages.NENHUMA_DATA])
    if start is None:
        warnings.append(Messages.INICIO_AUSENTE)
    if end is None:
        warnings.append(Messages.TERMINO_AUSENTE)
    if start is not None and end is not None and start > end:
        warnings.append(Messages.INICIO_APOS_TERMINO)
        return DateConsistency(is_valid=False, warnings=warnings)
    return DateConsistency(is_valid=True, warnings=warnings)
