"""
Cálculo da vigência de contratos importados.

Deriva a data de término a partir do prazo quando ela não foi
informada e classifica a situação da vigência em relação a hoje.
"""

from datetime import date
from typing import Any, Optional, Union

from dateutil.relativedelta import relativedelta

from config import ImportacaoConfig as IC
from schemas.contrato import PrazoUnidade, StatusVigencia, VigenciaInfo

from .models import is_blank
from .parsers.date_parser import parse_date

DateInput = Union[date, str, None]


def _as_date(value: Any) -> Optional[date]:
    if is_blank(value):
        return None
    return parse_date(value)


def add_prazo(start: date, prazo: int, unidade: Union[PrazoUnidade, str]) -> date:
    """Soma o prazo de execução à data de início."""
    unit = PrazoUnidade(unidade) if not isinstance(unidade, PrazoUnidade) else unidade
    if unit == PrazoUnidade.MESES:
        return start + relativedelta(months=prazo)
    if unit == PrazoUnidade.ANOS:
        return start + relativedelta(years=prazo)
    return start + relativedelta(days=prazo)


def calculate_contract_dates(
    data_assinatura: DateInput,
    data_inicio: DateInput = None,
    data_termino: DateInput = None,
    prazo_execucao: int = 0,
    prazo_unidade: Union[PrazoUnidade, str] = PrazoUnidade.DIAS,
    today: Optional[date] = None,
) -> VigenciaInfo:
    """
    Calcula datas e situação da vigência de um contrato.

    Sem data de início, usa a data de assinatura. Sem data de término,
    soma o prazo de execução ao início. A situação é dados_incompletos
    quando início ou término não foram informados, vencido quando o
    término já passou e vencendo quando faltam até 30 dias.

    Args:
        data_assinatura: Data de assinatura (date ou texto)
        data_inicio: Início da vigência
        data_termino: Término da vigência
        prazo_execucao: Prazo usado para derivar o término
        prazo_unidade: dias, meses ou anos
        today: Data de referência (padrão: hoje)

    Returns:
        VigenciaInfo
    """
    today = today or date.today()
    assinatura = _as_date(data_assinatura)
    inicio = _as_date(data_inicio)
    termino = _as_date(data_termino)

    has_incomplete_data = inicio is None or termino is None

    inicio = inicio or assinatura
    if termino is None and inicio is not None and prazo_execucao > 0:
        termino = add_prazo(inicio, prazo_execucao, prazo_unidade)

    dias_restantes = (termino - today).days if termino is not None else None

    if has_incomplete_data or dias_restantes is None:
        status = StatusVigencia.DADOS_INCOMPLETOS
    elif dias_restantes < 0:
        status = StatusVigencia.VENCIDO
    elif dias_restantes <= IC.EXPIRING_SOON_DAYS:
        status = StatusVigencia.VENCENDO
    else:
        status = StatusVigencia.VIGENTE

    return VigenciaInfo(
        data_inicio=inicio,
        data_termino=termino,
        dias_restantes=dias_restantes,
        status=status,
        has_incomplete_data=has_incomplete_data,
    )
