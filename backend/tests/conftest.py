"""
Fixtures compartilhadas para testes do ContrataFácil.
"""
import os
import sys
from datetime import datetime

import pytest

# Adicionar o diretório backend ao path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from openpyxl import Workbook  # noqa: E402


# === Fixtures de Planilha ===

@pytest.fixture
def contract_headers():
    """Cabeçalho típico de uma planilha de contratos."""
    return ["Numero", "Objeto", "Contratada", "Valor", "Data Inicio", "Data Fim"]


@pytest.fixture
def sample_sheet(contract_headers):
    """Aba com um contrato completo e uma linha em branco."""
    return [
        contract_headers,
        ["001/2024", "Limpeza", "ACME Ltda", "R$ 10.000,00", "01/01/2024", "01/07/2024"],
        [None, None, None, None, None, None],
    ]


@pytest.fixture
def full_sheet():
    """Aba com todos os campos de contrato mapeáveis."""
    return [
        [
            "Número do Contrato", "Objeto", "Contratante", "Contratada",
            "Valor Total", "Data de Início", "Data de Término",
            "Modalidade", "Situação",
        ],
        [
            "010/2023", "Manutenção predial", "Prefeitura Municipal", "Obras Silva ME",
            "R$ 250.000,00", "15/03/2023", "14/03/2024",
            "Pregão Eletrônico", "Ativo",
        ],
        [
            "011/2023", "Vigilância", "Prefeitura Municipal", "Segura Ltda",
            "1.200,50", "01/02/2023", "01/04/2023",
            "Dispensa", "Encerrado",
        ],
    ]


@pytest.fixture
def make_xlsx(tmp_path):
    """Fábrica de arquivos .xlsx: recebe {aba: linhas} e devolve o caminho."""
    def _make(sheets, name="contratos.xlsx", date1904=False):
        from openpyxl.utils.datetime import CALENDAR_MAC_1904

        wb = Workbook()
        wb.remove(wb.active)
        if date1904:
            wb.epoch = CALENDAR_MAC_1904
        for title, rows in sheets.items():
            ws = wb.create_sheet(title)
            for row in rows:
                ws.append(row)
        path = tmp_path / name
        wb.save(path)
        return str(path)
    return _make


@pytest.fixture
def dated_rows():
    """Linhas com datas nativas do Excel."""
    return [
        ["Contrato", "Objeto", "Contratante", "Contratada", "Valor", "Início", "Término"],
        ["C-1", "Coleta de lixo", "Município X", "Verde Ltda", 5000,
         datetime(2024, 1, 10), datetime(2024, 3, 10)],
    ]
