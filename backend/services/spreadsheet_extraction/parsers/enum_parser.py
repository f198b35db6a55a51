"""
Parsers de campos enumerados e de prazo por extenso.

Modalidade e status são reconhecidos por tabelas de sinônimos
comparadas sobre o texto normalizado; valores não reconhecidos caem
no padrão (pregao / vigente).
"""

import re
from typing import Any, Dict, Optional, Tuple

from logging_config import get_logger
from schemas.contrato import Modalidade, PrazoUnidade, StatusContrato

from ...extraction.text_normalizer import contains_phrase, normalize_search_text
from ..models import is_number

logger = get_logger('services.spreadsheet_extraction.parsers.enum_parser')

# Ordem importa: chaves mais específicas primeiro ("inativo" antes de "ativo")
STATUS_SYNONYMS: Dict[str, StatusContrato] = {
    'inativo': StatusContrato.ENCERRADO,
    'rescindido': StatusContrato.RESCINDIDO,
    'rescisao': StatusContrato.RESCINDIDO,
    'cancelado': StatusContrato.RESCINDIDO,
    'anulado': StatusContrato.RESCINDIDO,
    'revogado': StatusContrato.RESCINDIDO,
    'suspenso': StatusContrato.SUSPENSO,
    'pausado': StatusContrato.SUSPENSO,
    'interrompido': StatusContrato.SUSPENSO,
    'parado': StatusContrato.SUSPENSO,
    'encerrado': StatusContrato.ENCERRADO,
    'finalizado': StatusContrato.ENCERRADO,
    'concluido': StatusContrato.ENCERRADO,
    'terminado': StatusContrato.ENCERRADO,
    'acabado': StatusContrato.ENCERRADO,
    'vencido': StatusContrato.ENCERRADO,
    'vigente': StatusContrato.VIGENTE,
    'ativo': StatusContrato.VIGENTE,
    'ativa': StatusContrato.VIGENTE,
    'em andamento': StatusContrato.VIGENTE,
    'andamento': StatusContrato.VIGENTE,
    'valido': StatusContrato.VIGENTE,
    'executando': StatusContrato.VIGENTE,
}

MODALIDADE_SYNONYMS: Dict[str, Modalidade] = {
    'pregao': Modalidade.PREGAO,
    'concorrencia': Modalidade.CONCORRENCIA,
    'tomada de precos': Modalidade.TOMADA_PRECOS,
    'tomada precos': Modalidade.TOMADA_PRECOS,
    'tomada de preco': Modalidade.TOMADA_PRECOS,
    'convite': Modalidade.CONVITE,
    'concurso': Modalidade.CONCURSO,
    'leilao': Modalidade.LEILAO,
}

_PRAZO_PATTERN = re.compile(r'(\d+)\s*(dias?|meses|mes|anos?)\b')


def parse_status(value: Any) -> StatusContrato:
    """Converte texto de situação do contrato (padrão: vigente)."""
    normalized = normalize_search_text(value)
    if not normalized:
        return StatusContrato.VIGENTE
    for synonym, status in STATUS_SYNONYMS.items():
        if contains_phrase(normalized, synonym):
            return status
    logger.debug(f"Status não reconhecido: '{value}', usando vigente")
    return StatusContrato.VIGENTE


def parse_modalidade(value: Any) -> Modalidade:
    """Converte texto de modalidade de licitação (padrão: pregao)."""
    normalized = normalize_search_text(value)
    if not normalized:
        return Modalidade.PREGAO
    for synonym, modalidade in MODALIDADE_SYNONYMS.items():
        if contains_phrase(normalized, synonym):
            return modalidade
    logger.debug(f"Modalidade não reconhecida: '{value}', usando pregao")
    return Modalidade.PREGAO


def parse_prazo_text(value: Any) -> Optional[Tuple[int, PrazoUnidade]]:
    """
    Extrai prazo de execução de um texto livre.

    Exemplos: "12 meses" -> (12, meses), "Prazo: 90 dias" -> (90, dias),
    "2 anos" -> (2, anos). Números puros são interpretados como dias.

    Returns:
        (prazo, unidade) ou None se nenhum prazo for reconhecido
    """
    if is_number(value):
        days = int(value)
        return (days, PrazoUnidade.DIAS) if days > 0 else None

    normalized = normalize_search_text(value)
    if not normalized:
        return None

    match = _PRAZO_PATTERN.search(normalized)
    if match:
        amount = int(match.group(1))
        unit_text = match.group(2)
        if unit_text.startswith('mes'):
            unit = PrazoUnidade.MESES
        elif unit_text.startswith('ano'):
            unit = PrazoUnidade.ANOS
        else:
            unit = PrazoUnidade.DIAS
        return (amount, unit) if amount > 0 else None

    if normalized.isdigit() and int(normalized) > 0:
        return int(normalized), PrazoUnidade.DIAS
    return None
