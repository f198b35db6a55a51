"""
Pacote de extração de contratos a partir de planilhas.

Estrutura:
- models.py: enums, dataclasses e normalização de células
- analyzers/: formato de datas, análise de colunas, colunas de início/fim
- parsers/: datas, valores monetários, enumerações e prazo
- extractor.py: orquestração por aba (extract_contracts, process_sheet)
- validation.py: validação do mapeamento de colunas
- vigencia.py: datas e situação de vigência
- workbook_loader.py: leitura de .xlsx/.xlsm com openpyxl
"""

from .analyzers import analyze_columns, detect_date_format, find_date_columns
from .extractor import extract_contracts, process_sheet
from .models import (
    CellValue,
    ColumnAnalysis,
    DataType,
    DateFormat,
    DateFormatStrategy,
    DiagnosticEvent,
    ExtractionDiagnostics,
)
from .parsers import (
    calculate_contract_period,
    parse_date,
    parse_modalidade,
    parse_prazo_text,
    parse_status,
    parse_value,
    to_ymd,
    validate_date_consistency,
)
from .validation import validate_column_mapping
from .vigencia import calculate_contract_dates
from .workbook_loader import import_workbook, load_workbook_rows

__all__ = [
    # Models
    "CellValue",
    "ColumnAnalysis",
    "DataType",
    "DateFormat",
    "DateFormatStrategy",
    "DiagnosticEvent",
    "ExtractionDiagnostics",
    # Analyzers
    "analyze_columns",
    "detect_date_format",
    "find_date_columns",
    # Parsers
    "calculate_contract_period",
    "parse_date",
    "parse_modalidade",
    "parse_prazo_text",
    "parse_status",
    "parse_value",
    "to_ymd",
    "validate_date_consistency",
    # Pipeline
    "extract_contracts",
    "process_sheet",
    "validate_column_mapping",
    "calculate_contract_dates",
    "import_workbook",
    "load_workbook_rows",
]
