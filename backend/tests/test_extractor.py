"""
Testes para o extrator de contratos por aba.
"""
import pytest

from exceptions import InvalidSheetError
from schemas.contrato import Modalidade, PrazoUnidade, StatusContrato
from services.spreadsheet_extraction import ExtractionDiagnostics, extract_contracts, process_sheet
from services.spreadsheet_extraction.parsers import excel_serial_to_date, to_ymd


class TestExtractContracts:
    """Testes para extract_contracts."""

    def test_basic_sheet(self, sample_sheet):
        """Uma linha completa e uma em branco geram um único contrato."""
        contratos = extract_contracts(sample_sheet, "Plan1")

        assert len(contratos) == 1
        contrato = contratos[0]
        assert contrato.numero == "001/2024"
        assert contrato.objeto == "Limpeza"
        assert contrato.contratada == "ACME Ltda"
        assert contrato.valor == 10000.0
        assert contrato.data_inicio == "2024-01-01"
        assert contrato.data_termino == "2024-07-01"
        assert contrato.prazo_execucao == 6
        assert contrato.prazo_unidade == PrazoUnidade.MESES

    def test_defaults_and_provenance(self, sample_sheet):
        contrato = extract_contracts(sample_sheet, "Plan1", file_name="contratos.xlsx")[0]

        assert contrato.contratante == "Órgão contratante não especificado na planilha"
        assert contrato.modalidade == Modalidade.PREGAO
        assert contrato.status == StatusContrato.VIGENTE
        assert 'Extraído da planilha "Plan1" do arquivo "contratos.xlsx" - linha 1.' in contrato.observacoes
        assert 'Data início: coluna "Data Inicio"' in contrato.observacoes
        assert "Prazo calculado automaticamente: 6 meses" in contrato.observacoes
        assert "Preencher manualmente: contratante" in contrato.observacoes

    def test_diagnostics(self, sample_sheet):
        diagnostics = ExtractionDiagnostics()
        extract_contracts(sample_sheet, "Plan1", diagnostics=diagnostics)

        assert diagnostics.total_rows == 2
        assert diagnostics.processed_rows == 1
        assert diagnostics.skipped_rows == 1
        assert diagnostics.dates_parsed == 2
        assert diagnostics.dates_failed == 0
        assert "campo_padrao" in diagnostics.codes()
        # "01/01/2024" e "01/07/2024" só têm tokens ambíguos
        assert "dia_mes_presumido" in diagnostics.codes()

    def test_400_days_in_months(self):
        rows = [
            ["Numero", "Objeto", "Data Inicio", "Data Fim"],
            ["1", "Obra", "2024-01-01", "2025-02-04"],
        ]
        contrato = extract_contracts(rows, "Plan1")[0]
        assert contrato.prazo_execucao == 13
        assert contrato.prazo_unidade == PrazoUnidade.MESES

    def test_inverted_dates(self):
        rows = [
            ["Numero", "Objeto", "Data Inicio", "Data Fim"],
            ["1", "Obra", "2024-05-01", "2024-01-01"],
        ]
        diagnostics = ExtractionDiagnostics()
        contrato = extract_contracts(rows, "Plan1", diagnostics=diagnostics)[0]

        assert contrato.data_inicio == "2024-05-01"
        assert contrato.data_termino == "2024-01-01"
        assert contrato.prazo_execucao == 0
        assert "ATENÇÃO: Data de início é posterior à data de término" in contrato.observacoes
        assert "datas_invertidas" in diagnostics.codes()

    def test_invalid_date_kept_empty(self):
        rows = [
            ["Numero", "Objeto", "Data Inicio", "Data Fim"],
            ["1", "Obra", "2024-01-15", "2024-01-20"],
            ["2", "Obra", "31/02/2024", "2024-03-20"],
        ]
        diagnostics = ExtractionDiagnostics()
        contratos = extract_contracts(rows, "Plan1", diagnostics=diagnostics)

        assert contratos[1].data_inicio == ""
        assert contratos[1].data_termino == "2024-03-20"
        assert diagnostics.dates_failed == 1
        assert "data_invalida" in diagnostics.codes()

    def test_missing_numero_uses_row(self):
        rows = [
            ["Objeto", "Contratante", "Contratada"],
            ["Obra", "Prefeitura", "Empresa X"],
        ]
        contrato = extract_contracts(rows, "Aba 2")[0]
        assert contrato.numero == "Aba 2-LINHA-1"
        assert contrato.contratante == "Prefeitura"

    def test_prazo_column_used_without_dates(self):
        rows = [
            ["Numero", "Objeto", "Prazo"],
            ["1", "Obra", "12 meses"],
        ]
        contrato = extract_contracts(rows, "Plan1")[0]
        assert contrato.prazo_execucao == 12
        assert contrato.prazo_unidade == PrazoUnidade.MESES
        assert "Prazo informado na planilha" in contrato.observacoes

    def test_dates_take_precedence_over_prazo_column(self):
        rows = [
            ["Numero", "Objeto", "Prazo", "Data Inicio", "Data Fim"],
            ["1", "Obra", "90 dias", "01/01/2024", "01/07/2024"],
        ]
        contrato = extract_contracts(rows, "Plan1")[0]
        assert contrato.prazo_execucao == 6
        assert contrato.prazo_unidade == PrazoUnidade.MESES
        assert "Prazo calculado automaticamente" in contrato.observacoes
        assert "Prazo informado" not in contrato.observacoes

    def test_yearless_text_counts_as_failed_date(self):
        rows = [
            ["Numero", "Objeto", "Data Inicio", "Data Fim"],
            ["1", "Obra", "01/03/2024", "12h"],
            ["2", "Obra", "5 jan", "01/06/2024"],
        ]
        diagnostics = ExtractionDiagnostics()
        contratos = extract_contracts(rows, "Plan1", diagnostics=diagnostics)

        assert contratos[0].data_termino == ""
        assert contratos[1].data_inicio == ""
        assert diagnostics.dates_failed == 2
        assert "datas_invertidas" not in diagnostics.codes()

    def test_serial_dates_1904(self):
        rows = [
            ["Numero", "Objeto", "Inicio", "Termino"],
            ["1", "Obra", 43000, 43100],
        ]
        contrato = extract_contracts(rows, "Plan1", date1904=True)[0]
        assert contrato.data_inicio == to_ymd(excel_serial_to_date(43000, date1904=True))
        assert contrato.data_inicio == to_ymd(excel_serial_to_date(43000 + 1462))
        assert contrato.data_inicio == "2021-09-23"
        assert contrato.data_termino == "2022-01-01"
        assert contrato.prazo_execucao == 3
        assert contrato.prazo_unidade == PrazoUnidade.MESES

    def test_month_first_preference(self):
        rows = [
            ["Numero", "Objeto", "Data Inicio", "Data Fim"],
            ["1", "Obra", "01/02/2024", "03/04/2024"],
        ]
        contrato = extract_contracts(rows, "Plan1", day_first=False)[0]
        assert contrato.data_inicio == "2024-01-02"
        assert contrato.data_termino == "2024-03-04"

    def test_flexible_fallback(self):
        """Sem cabeçalho reconhecido, lê as células por posição."""
        rows = [
            ["A", "B", "C", "D"],
            ["C-01", "Reforma", "Construtora X", "R$ 5.000,00"],
            ["", None, "", ""],
            ["C-02", "Pintura"],
        ]
        diagnostics = ExtractionDiagnostics()
        contratos = extract_contracts(rows, "Plan1", diagnostics=diagnostics)

        assert len(contratos) == 2
        assert contratos[0].numero == "C-01"
        assert contratos[0].contratada == "Construtora X"
        assert contratos[0].valor == 5000.0
        assert contratos[1].contratada == "Empresa não especificada"
        assert contratos[1].valor == 0.0
        assert "mapeamento_flexivel" in diagnostics.codes()
        assert diagnostics.skipped_rows == 1

    def test_fewer_than_two_rows(self):
        diagnostics = ExtractionDiagnostics()
        assert extract_contracts([["Numero", "Objeto"]], "Plan1", diagnostics=diagnostics) == []
        assert extract_contracts([], "Plan1") == []
        assert "poucas_linhas" in diagnostics.codes()

    def test_blank_header_row(self):
        diagnostics = ExtractionDiagnostics()
        assert extract_contracts([[None, ""], ["x", "y"]], "Plan1", diagnostics=diagnostics) == []
        assert "sem_cabecalho" in diagnostics.codes()

    def test_tuples_accepted(self, sample_sheet):
        rows = [tuple(row) for row in sample_sheet]
        assert len(extract_contracts(rows, "Plan1")) == 1

    @pytest.mark.parametrize("rows", ["texto", None, 42, [["ok"], "linha"]])
    def test_invalid_sheet(self, rows):
        with pytest.raises(InvalidSheetError):
            extract_contracts(rows, "Plan1")

    def test_invalid_sheet_name(self, sample_sheet):
        with pytest.raises(InvalidSheetError):
            extract_contracts(sample_sheet, 123)


class TestProcessSheet:
    """Testes para process_sheet."""

    def test_full_sheet(self, full_sheet):
        result = process_sheet(full_sheet, "2023", file_name="contratos.xlsx")

        assert result.validation.is_valid is True
        assert result.validation.missing_fields == []
        assert len(result.contratos) == 2

        first, second = result.contratos
        assert first.numero == "010/2023"
        assert first.contratante == "Prefeitura Municipal"
        assert first.valor == 250000.0
        assert first.prazo_execucao == 11
        assert first.prazo_unidade == PrazoUnidade.MESES

        assert second.valor == 1200.5
        assert second.status == StatusContrato.ENCERRADO
        assert second.prazo_execucao == 59
        assert second.prazo_unidade == PrazoUnidade.DIAS

    def test_columns_summary(self, full_sheet):
        result = process_sheet(full_sheet, "2023")
        fields = {c.header: c.field for c in result.columns}
        assert fields["Número do Contrato"] == "numero"
        assert fields["Data de Início"] == "dataInicio"
        assert fields["Situação"] == "status"

    def test_missing_required_field(self, sample_sheet):
        result = process_sheet(sample_sheet, "Plan1")

        assert result.validation.is_valid is False
        assert result.validation.missing_fields == ["contratante"]
        # Contratos são extraídos mesmo com mapeamento incompleto
        assert len(result.contratos) == 1
        codes = [e["code"] for e in result.diagnostics["events"]]
        assert "validacao" in codes

    def test_serializes_camel_case(self, sample_sheet):
        data = process_sheet(sample_sheet, "Plan1").model_dump(by_alias=True)
        contrato = data["contratos"][0]
        assert contrato["dataInicio"] == "2024-01-01"
        assert contrato["prazoExecucao"] == 6
        assert data["validation"]["missingFields"] == ["contratante"]
        assert data["sheetName"] == "Plan1"
