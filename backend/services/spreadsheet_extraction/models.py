"""
Modelos compartilhados pela extração de contratos de planilhas.

Centraliza enums e dataclasses usados por detector, parser, analisador
e extrator para evitar dependências circulares.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

from exceptions import InvalidSheetError

# Valor bruto de uma célula após normalização na borda da matriz
CellValue = Union[str, int, float, date, datetime, None]
RawSheet = List[List[CellValue]]


# === Enums ===

class DateFormat(str, Enum):
    """Codificações de data reconhecidas em uma coluna."""
    DD_MM_YYYY = "DD/MM/YYYY"
    MM_DD_YYYY = "MM/DD/YYYY"
    YYYY_MM_DD = "YYYY-MM-DD"
    MM_YYYY = "MM/YYYY"
    DD_MM_YY = "DD/MM/YY"
    MM_DD_YY = "MM/DD/YY"
    EXCEL_SERIAL = "EXCEL_SERIAL"

    @property
    def day_first(self) -> Optional[bool]:
        """True para DD/MM, False para MM/DD, None quando não se aplica."""
        if self.value.startswith("DD/MM"):
            return True
        if self.value.startswith("MM/DD"):
            return False
        return None


class DataType(str, Enum):
    """Tipo de dado predominante em uma coluna."""
    DATE = "date"
    TEXT = "text"
    NUMBER = "number"
    MIXED = "mixed"
    EMPTY = "empty"


class AssumeFormat(str, Enum):
    """Ordem dia/mês imposta pelo chamador ao parser de datas."""
    DD_MM_YYYY = "DD/MM/YYYY"
    MM_DD_YYYY = "MM/DD/YYYY"
    AUTO = "auto"


# === Campos de contrato ===

FIELD_NUMERO = "numero"
FIELD_OBJETO = "objeto"
FIELD_CONTRATANTE = "contratante"
FIELD_CONTRATADA = "contratada"
FIELD_VALOR = "valor"
FIELD_DATA_INICIO = "dataInicio"
FIELD_DATA_TERMINO = "dataTermino"
FIELD_MODALIDADE = "modalidade"
FIELD_STATUS = "status"

REQUIRED_FIELDS = (FIELD_NUMERO, FIELD_OBJETO, FIELD_CONTRATANTE, FIELD_CONTRATADA)
RECOMMENDED_FIELDS = (FIELD_DATA_INICIO, FIELD_DATA_TERMINO, FIELD_VALOR)


# === Dataclasses ===

@dataclass(frozen=True)
class DateFormatStrategy:
    """Formato de data inferido para uma coluna."""
    format: DateFormat
    confidence: float
    samples: List[Any] = field(default_factory=list)
    # Fração das amostras que casaram com algum padrão de data
    match_ratio: float = 0.0
    # Tokens dia/mês decididos apenas pela preferência regional
    ambiguous: int = 0

    @property
    def day_first(self) -> Optional[bool]:
        return self.format.day_first

    @property
    def guessed_day_month(self) -> bool:
        """Indica que a ordem dia/mês foi presumida, sem evidência inequívoca."""
        if self.day_first is None or self.ambiguous == 0:
            return False
        matched = round(self.match_ratio * len(self.samples))
        return self.ambiguous >= matched


@dataclass(frozen=True)
class ColumnAnalysis:
    """Resultado da análise de uma coluna da planilha."""
    index: int
    header: str
    data_type: DataType
    field: Optional[str]
    confidence: float
    samples: List[Any] = field(default_factory=list)
    empty_count: int = 0
    total_count: int = 0
    date_strategy: Optional[DateFormatStrategy] = None
    pattern: Optional[str] = None

    @property
    def empty_ratio(self) -> float:
        if self.total_count == 0:
            return 1.0
        return self.empty_count / self.total_count


@dataclass(frozen=True)
class DateColumnMatch:
    """Coluna candidata a data de início ou de término."""
    index: int
    header: str
    header_confidence: float
    strategy: DateFormatStrategy
    confidence: float


@dataclass
class DiagnosticEvent:
    """Evento registrado durante a extração."""
    level: str
    code: str
    message: str
    row: Optional[int] = None
    column: Optional[str] = None


@dataclass
class ExtractionDiagnostics:
    """
    Rastro estruturado de uma extração.

    Substitui o log por print: o extrator registra aqui as decisões
    relevantes para que chamadores e testes possam inspecioná-las.
    """
    events: List[DiagnosticEvent] = field(default_factory=list)
    total_rows: int = 0
    processed_rows: int = 0
    skipped_rows: int = 0
    dates_parsed: int = 0
    dates_failed: int = 0
    defaulted_fields: int = 0

    def info(self, code: str, message: str, row: Optional[int] = None,
             column: Optional[str] = None) -> None:
        self.events.append(DiagnosticEvent("info", code, message, row, column))

    def warning(self, code: str, message: str, row: Optional[int] = None,
                column: Optional[str] = None) -> None:
        self.events.append(DiagnosticEvent("warning", code, message, row, column))

    @property
    def warnings(self) -> List[DiagnosticEvent]:
        return [e for e in self.events if e.level == "warning"]

    def codes(self) -> List[str]:
        return [e.code for e in self.events]

    def to_dict(self) -> Dict[str, Any]:
        """Converte para dicionário serializável."""
        return {
            "total_rows": self.total_rows,
            "processed_rows": self.processed_rows,
            "skipped_rows": self.skipped_rows,
            "dates_parsed": self.dates_parsed,
            "dates_failed": self.dates_failed,
            "defaulted_fields": self.defaulted_fields,
            "events": [
                {
                    "level": e.level,
                    "code": e.code,
                    "message": e.message,
                    "row": e.row,
                    "column": e.column,
                }
                for e in self.events
            ],
        }


# === Células ===

def is_number(value: Any) -> bool:
    """True para int/float que não sejam bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_blank(value: Any) -> bool:
    """Célula vazia: None ou texto só com espaços."""
    if value is None:
        return True
    if isinstance(value, float) and value != value:  # NaN
        return True
    return isinstance(value, str) and not value.strip()


def normalize_cell(value: Any) -> CellValue:
    """
    Normaliza uma célula bruta para CellValue.

    Strings são mantidas, números e datas passam direto; bool e
    objetos desconhecidos viram texto.
    """
    if value is None:
        return None
    if isinstance(value, (str, date)):
        return value
    if is_number(value):
        if isinstance(value, float) and value != value:
            return None
        return value
    return str(value)


def normalize_sheet(rows: Any) -> RawSheet:
    """
    Valida e normaliza a matriz de células na borda do pipeline.

    Linhas irregulares são aceitas; None como linha vira lista vazia.

    Raises:
        InvalidSheetError: se rows não for uma sequência de sequências
    """
    if rows is None or isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        raise InvalidSheetError()
    normalized: RawSheet = []
    for row in rows:
        if row is None:
            normalized.append([])
            continue
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            raise InvalidSheetError("Planilha inválida: cada linha deve ser uma lista de células")
        normalized.append([normalize_cell(cell) for cell in row])
    return normalized


def cell_at(row: Sequence[CellValue], index: Optional[int]) -> CellValue:
    """Retorna a célula da linha ou None quando o índice não existe."""
    if index is None or index < 0 or index >= len(row):
        return None
    return row[index]


def cell_to_text(value: CellValue) -> str:
    """Converte célula para texto limpo (números inteiros sem ".0")."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
