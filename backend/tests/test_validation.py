"""
Testes para a validação do mapeamento de colunas.
"""

from services.spreadsheet_extraction import analyze_columns, validate_column_mapping


def _report(headers, rows):
    return validate_column_mapping(analyze_columns(headers, rows))


class TestValidateColumnMapping:
    """Testes para validate_column_mapping."""

    def test_missing_required_field_invalidates(self):
        report = _report(
            ["Numero", "Objeto", "Contratada", "Valor"],
            [["1", "Obra", "ACME", "100"]],
        )
        assert report.is_valid is False
        assert report.missing_fields == ["contratante"]
        assert any("contratante" in w for w in report.warnings)

    def test_missing_recommended_field_only_suggests(self):
        report = _report(
            ["Numero", "Objeto", "Contratante", "Contratada", "Data Inicio", "Data Fim"],
            [["1", "Obra", "Prefeitura", "ACME", "15/01/2024", "20/12/2024"]],
        )
        assert report.is_valid is True
        assert report.missing_fields == []
        assert report.suggestions == ["Campo recomendado não encontrado: valor"]

    def test_empty_column_warning(self):
        rows = [["1", "Obra", "Pref", "ACME", None] for _ in range(9)]
        rows.append(["2", "Obra", "Pref", "ACME", "100"])
        report = _report(["Numero", "Objeto", "Contratante", "Contratada", "Valor"], rows)
        assert report.is_valid is True
        assert any('Coluna "Valor" tem muitos dados vazios (9/10)' == w for w in report.warnings)

    def test_uncertain_date_format(self):
        report = _report(
            ["Numero", "Objeto", "Contratante", "Contratada", "Data Inicio"],
            [["1", "Obra", "Pref", "ACME", "a definir"]],
        )
        assert any("Formato de data incerto" in w and "(0%)" in w for w in report.warnings)

    def test_guessed_day_month(self):
        report = _report(
            ["Numero", "Objeto", "Contratante", "Contratada", "Data Inicio"],
            [["1", "Obra", "Pref", "ACME", "01/02/2024"], ["2", "Obra", "Pref", "ACME", "03/04/2024"]],
        )
        assert any("Datas ambíguas" in w for w in report.warnings)

    def test_no_columns(self):
        report = validate_column_mapping([])
        assert report.is_valid is False
        assert len(report.missing_fields) == 4
        assert len(report.suggestions) == 3
