"""
Leitura de pastas de trabalho Excel para a importação de contratos.

Usa openpyxl em modo somente leitura (valores calculados, sem
fórmulas) e detecta o sistema de datas 1904 a partir dos metadados do
arquivo. Cada aba vira uma matriz de células pronta para o extrator.
"""

import logging
import os
import zipfile
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from openpyxl import load_workbook
from openpyxl.utils.datetime import CALENDAR_MAC_1904
from openpyxl.utils.exceptions import InvalidFileException

from config import (
    ALLOWED_SPREADSHEET_EXTENSIONS,
    Messages,
    ensure_valid_importacao_config,
    get_file_extension,
    is_allowed_spreadsheet,
)
from exceptions import UnsupportedFileError, WorkbookReadError
from logging_config import get_logger, log_with_context, timed
from schemas.contrato import WorkbookImportResult

from .extractor import process_sheet
from .models import RawSheet, is_blank, normalize_sheet

logger = get_logger('services.spreadsheet_extraction.workbook_loader')


@dataclass
class LoadedWorkbook:
    """Abas lidas de uma pasta de trabalho."""
    file_name: str
    date1904: bool = False
    sheets: List[Tuple[str, RawSheet]] = field(default_factory=list)


def _trim_trailing_blank_rows(rows: RawSheet) -> RawSheet:
    end = len(rows)
    while end > 0 and all(is_blank(cell) for cell in rows[end - 1]):
        end -= 1
    return rows[:end]


def load_workbook_rows(file_path: str) -> LoadedWorkbook:
    """
    Lê todas as abas de um arquivo .xlsx/.xlsm.

    Args:
        file_path: Caminho do arquivo

    Returns:
        LoadedWorkbook com o sistema de datas e as matrizes de cada aba

    Raises:
        UnsupportedFileError: extensão não suportada
        WorkbookReadError: arquivo inexistente ou corrompido
    """
    file_name = os.path.basename(file_path)
    if not is_allowed_spreadsheet(file_name):
        raise UnsupportedFileError(get_file_extension(file_name), ALLOWED_SPREADSHEET_EXTENSIONS)
    if not os.path.isfile(file_path):
        raise WorkbookReadError(file_name, Messages.ARQUIVO_NAO_ENCONTRADO)

    try:
        wb = load_workbook(file_path, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise WorkbookReadError(file_name, str(e)) from e

    try:
        loaded = LoadedWorkbook(file_name=file_name, date1904=wb.epoch == CALENDAR_MAC_1904)
        for ws in wb.worksheets:
            rows = [list(row) for row in ws.iter_rows(values_only=True)]
            loaded.sheets.append((ws.title, _trim_trailing_blank_rows(normalize_sheet(rows))))
    finally:
        wb.close()

    log_with_context(
        logger, logging.INFO, f"Planilha '{file_name}' lida",
        abas=len(loaded.sheets),
        sistema_datas="1904" if loaded.date1904 else "1900",
    )
    return loaded


@timed(operation="importacao_planilha")
def import_workbook(file_path: str, day_first: Optional[bool] = None) -> WorkbookImportResult:
    """
    Importa todas as abas de uma pasta de trabalho.

    Args:
        file_path: Caminho do arquivo .xlsx/.xlsm
        day_first: Preferência regional para datas ambíguas

    Returns:
        WorkbookImportResult com o resultado de cada aba

    Raises:
        ConfigurationError: limiares de IMPORT_* inválidos
        UnsupportedFileError, WorkbookReadError: ver load_workbook_rows
    """
    ensure_valid_importacao_config()
    loaded = load_workbook_rows(file_path)
    result = WorkbookImportResult(file_name=loaded.file_name, date1904=loaded.date1904)
    for sheet_name, rows in loaded.sheets:
        result.sheets.append(process_sheet(
            rows,
            sheet_name,
            file_name=loaded.file_name,
            date1904=loaded.date1904,
            day_first=day_first,
        ))

    if result.total_contratos == 0:
        logger.warning(f"{Messages.PLANILHA_VAZIA}: '{loaded.file_name}'")
    return result
