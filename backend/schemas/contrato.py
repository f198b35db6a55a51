"""
Schemas dos contratos extraídos de planilhas.

Atributos em snake_case; a serialização (by_alias=True) usa camelCase
(dataInicio, prazoExecucao, missingFields) para o consumidor da prévia.
"""
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_CAMEL_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


# === Enums de domínio ===

class PrazoUnidade(str, Enum):
    DIAS = "dias"
    MESES = "meses"
    ANOS = "anos"


class Modalidade(str, Enum):
    """Modalidade de licitação."""
    PREGAO = "pregao"
    CONCORRENCIA = "concorrencia"
    TOMADA_PRECOS = "tomada_precos"
    CONVITE = "convite"
    CONCURSO = "concurso"
    LEILAO = "leilao"


class StatusContrato(str, Enum):
    VIGENTE = "vigente"
    SUSPENSO = "suspenso"
    ENCERRADO = "encerrado"
    RESCINDIDO = "rescindido"


class StatusVigencia(str, Enum):
    """Situação da vigência calculada a partir das datas."""
    VIGENTE = "vigente"
    VENCENDO = "vencendo"
    VENCIDO = "vencido"
    DADOS_INCOMPLETOS = "dados_incompletos"


# === Contrato extraído ===

class ContratoExtraido(BaseModel):
    """Registro de contrato produzido pela importação de uma linha."""
    model_config = _CAMEL_CONFIG

    numero: str
    objeto: str
    contratante: str
    contratada: str
    valor: float = Field(default=0.0, ge=0)
    # "" significa data desconhecida
    data_inicio: str = ""
    data_termino: str = ""
    prazo_execucao: int = Field(default=0, ge=0)
    prazo_unidade: PrazoUnidade = PrazoUnidade.DIAS
    modalidade: Modalidade = Modalidade.PREGAO
    status: StatusContrato = StatusContrato.VIGENTE
    observacoes: str = ""
    aditivos: List[Dict[str, Any]] = Field(default_factory=list)
    pagamentos: List[Dict[str, Any]] = Field(default_factory=list)
    documentos: List[Dict[str, Any]] = Field(default_factory=list)


class ValidationReport(BaseModel):
    """Resultado da validação do mapeamento de colunas de uma aba."""
    model_config = _CAMEL_CONFIG

    is_valid: bool
    warnings: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    missing_fields: List[str] = Field(default_factory=list)


class DateConsistency(BaseModel):
    model_config = _CAMEL_CONFIG

    is_valid: bool
    warnings: List[str] = Field(default_factory=list)


class VigenciaInfo(BaseModel):
    """Datas e situação de vigência de um contrato."""
    model_config = _CAMEL_CONFIG

    data_inicio: Optional[date] = None
    data_termino: Optional[date] = None
    dias_restantes: Optional[int] = None
    status: StatusVigencia
    has_incomplete_data: bool


# === Resultados de importação ===

class ColumnMappingItem(BaseModel):
    """Resumo serializável de uma ColumnAnalysis."""
    model_config = _CAMEL_CONFIG

    index: int
    header: str
    data_type: str
    field: Optional[str] = None
    confidence: float
    date_format: Optional[str] = None
    date_confidence: Optional[float] = None


class SheetImportResult(BaseModel):
    """Resultado completo da importação de uma aba."""
    model_config = _CAMEL_CONFIG

    sheet_name: str
    file_name: str = ""
    contratos: List[ContratoExtraido] = Field(default_factory=list)
    validation: ValidationReport
    columns: List[ColumnMappingItem] = Field(default_factory=list)
    diagnostics: Dict[str, Any] = Field(default_factory=dict)


class WorkbookImportResult(BaseModel):
    """Resultado da importação de todas as abas de uma pasta de trabalho."""
    model_config = _CAMEL_CONFIG

    file_name: str
    date1904: bool = False
    sheets: List[SheetImportResult] = Field(default_factory=list)

    @property
    def total_contratos(self) -> int:
        return sum(len(sheet.contratos) for sheet in self.sheets)
