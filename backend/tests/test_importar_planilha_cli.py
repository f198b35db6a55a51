"""
Testes para o script de linha de comando de importação.
"""
import json

import pytest

from logging_config import setup_logging
from scripts.importar_planilha import build_parser, main


@pytest.fixture(autouse=True)
def restore_logging():
    """O script redireciona o logging para stderr; restaura ao final."""
    yield
    setup_logging()


class TestBuildParser:
    """Testes para os argumentos do script."""

    def test_defaults(self):
        args = build_parser().parse_args(["contratos.xlsx"])
        assert args.arquivo == "contratos.xlsx"
        assert args.aba is None
        assert args.mes_primeiro is False
        assert args.indent == 2

    def test_repeated_sheet_filter(self):
        args = build_parser().parse_args(["c.xlsx", "--aba", "2023", "--aba", "2024"])
        assert args.aba == ["2023", "2024"]


class TestMain:
    """Testes para main()."""

    def test_prints_json(self, make_xlsx, sample_sheet, capsys):
        path = make_xlsx({"Plan1": sample_sheet})

        assert main([path]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["fileName"] == "contratos.xlsx"
        contrato = payload["sheets"][0]["contratos"][0]
        assert contrato["numero"] == "001/2024"
        assert contrato["prazoUnidade"] == "meses"

    def test_sheet_filter_and_output_file(self, make_xlsx, sample_sheet, tmp_path):
        path = make_xlsx({"2023": sample_sheet, "2024": sample_sheet})
        saida = tmp_path / "resultado.json"

        assert main([path, "--aba", "2024", "--saida", str(saida)]) == 0

        payload = json.loads(saida.read_text(encoding="utf-8"))
        assert [s["sheetName"] for s in payload["sheets"]] == ["2024"]

    def test_missing_file_returns_error(self, tmp_path, capsys):
        assert main([str(tmp_path / "nao_existe.xlsx")]) == 1
        assert capsys.readouterr().out == ""
