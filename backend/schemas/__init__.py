"""
Package de schemas Pydantic.

Re-exporta os schemas para permitir `from schemas import ContratoExtraido, ...`
"""
from schemas.contrato import (
    ColumnMappingItem,
    ContratoExtraido,
    DateConsistency,
    Modalidade,
    PrazoUnidade,
    SheetImportResult,
    StatusContrato,
    StatusVigencia,
    ValidationReport,
    VigenciaInfo,
    WorkbookImportResult,
)

__all__ = [
    "ColumnMappingItem",
    "ContratoExtraido",
    "DateConsistency",
    "Modalidade",
    "PrazoUnidade",
    "SheetImportResult",
    "StatusContrato",
    "StatusVigencia",
    "ValidationReport",
    "VigenciaInfo",
    "WorkbookImportResult",
]
