"""
Testes para o modulo de configuracao.
"""
import os
from unittest.mock import patch


class TestEnvHelpers:
    """Testes para os helpers de variaveis de ambiente."""

    def test_env_bool_true_values(self):
        """Verifica valores aceitos como verdadeiro."""
        from config import env_bool
        for value in ("1", "true", "YES", "on"):
            with patch.dict(os.environ, {"TESTE_BOOL": value}):
                assert env_bool("TESTE_BOOL") is True

    def test_env_bool_false_and_default(self):
        """Verifica falso explicito e valor padrao."""
        from config import env_bool
        with patch.dict(os.environ, {"TESTE_BOOL": "off"}):
            assert env_bool("TESTE_BOOL", True) is False
        with patch.dict(os.environ, {"TESTE_BOOL": "talvez"}):
            assert env_bool("TESTE_BOOL", True) is True

    def test_env_int_invalid_uses_default(self):
        """Verifica que inteiro invalido usa o padrao."""
        from config import env_int
        with patch.dict(os.environ, {"TESTE_INT": "abc"}):
            assert env_int("TESTE_INT", 7) == 7
        with patch.dict(os.environ, {"TESTE_INT": "42"}):
            assert env_int("TESTE_INT", 7) == 42

    def test_env_float(self):
        """Verifica leitura de float."""
        from config import env_float
        with patch.dict(os.environ, {"TESTE_FLOAT": "0.55"}):
            assert env_float("TESTE_FLOAT") == 0.55


class TestSpreadsheetExtensions:
    """Testes para validacao de extensoes de planilha."""

    def test_allowed_extensions(self):
        """Verifica que extensoes permitidas estao definidas."""
        from config import ALLOWED_SPREADSHEET_EXTENSIONS
        assert ".xlsx" in ALLOWED_SPREADSHEET_EXTENSIONS
        assert ".xlsm" in ALLOWED_SPREADSHEET_EXTENSIONS

    def test_is_allowed_spreadsheet(self):
        """Verifica validacao de extensao."""
        from config import is_allowed_spreadsheet
        assert is_allowed_spreadsheet("contratos.xlsx") is True
        assert is_allowed_spreadsheet("CONTRATOS.XLSM") is True
        assert is_allowed_spreadsheet("contratos.csv") is False
        assert is_allowed_spreadsheet("contratos.pdf") is False

    def test_get_file_extension(self):
        """Verifica extracao de extensao."""
        from config import get_file_extension
        assert get_file_extension("planilha.xlsx") == ".xlsx"
        assert get_file_extension("PLANILHA.XLSX") == ".xlsx"
        assert get_file_extension("arquivo.tar.gz") == ".gz"
        assert get_file_extension("sem_extensao") == ""


class TestImportacaoConfig:
    """Testes para os limiares da importacao."""

    def test_date_detection_defaults(self):
        """Verifica valores padrao da deteccao de datas."""
        from config import ImportacaoConfig
        assert ImportacaoConfig.DATE_SAMPLE_SIZE == 10
        assert ImportacaoConfig.CONF_ISO == 0.95
        assert ImportacaoConfig.CONF_SERIAL == 0.9
        assert ImportacaoConfig.YEAR_MIN == 1900
        assert ImportacaoConfig.YEAR_MAX == 2100

    def test_period_cutoffs(self):
        """Verifica limites de prazo em dias/meses."""
        from config import ImportacaoConfig
        assert ImportacaoConfig.PERIOD_MAX_DAYS == 90
        assert ImportacaoConfig.PERIOD_MAX_MONTHS_DAYS == 730

    def test_grouped_access(self):
        """Verifica que sub-classes e acesso direto apontam para o mesmo valor."""
        from config import ImportacaoConfig
        assert ImportacaoConfig.date_detection.SAMPLE_SIZE == ImportacaoConfig.DATE_SAMPLE_SIZE
        assert ImportacaoConfig.date_column.HEADER_WEIGHT == ImportacaoConfig.DATE_HEADER_WEIGHT
        assert ImportacaoConfig.period.MAX_MONTHS_DAYS == ImportacaoConfig.PERIOD_MAX_MONTHS_DAYS
        assert ImportacaoConfig.period.FLEXIBLE_MIN_CELLS == 2

    def test_day_first_env_override(self):
        """Verifica que IMPORT_DAY_FIRST e lido do ambiente."""
        with patch.dict(os.environ, {"IMPORT_DAY_FIRST": "false"}):
            import importlib

            import config.importacao
            importlib.reload(config.importacao)
            assert config.importacao.ImportacaoConfig.DAY_FIRST is False

        import importlib

        import config.importacao
        importlib.reload(config.importacao)
        assert config.importacao.ImportacaoConfig.DAY_FIRST is True


class TestMessages:
    """Testes para mensagens padronizadas."""

    def test_messages_exist(self):
        """Verifica que mensagens padronizadas existem."""
        from config import Messages
        assert hasattr(Messages, 'OBJETO_NAO_ESPECIFICADO')
        assert hasattr(Messages, 'CAMPO_OBRIGATORIO_AUSENTE')
        assert hasattr(Messages, 'FORMATO_DATA_INCERTO')
        assert hasattr(Messages, 'OBS_ORIGEM')

    def test_messages_format(self):
        """Verifica que mensagens com placeholders formatam corretamente."""
        from config import Messages
        assert Messages.CAMPO_OBRIGATORIO_AUSENTE.format(field="numero").endswith("numero")
        assert "65%" in Messages.FORMATO_DATA_INCERTO.format(header="Inicio", confidence=65.0)


class TestImportacaoValidators:
    """Testes para a validacao dos limiares da importacao."""

    def test_defaults_are_valid(self):
        """Verifica que a configuracao padrao e valida."""
        from config import validate_importacao_config
        result = validate_importacao_config()
        assert result.is_valid is True
        assert result.errors == []

    def test_ratio_out_of_range(self):
        """Verifica erro para proporcao fora de 0..1."""
        import config.importacao
        from config import validate_importacao_config
        with patch.object(config.importacao.ImportacaoConfig, "ISO_RATIO", 1.5):
            result = validate_importacao_config()
        assert result.is_valid is False
        assert result.errors[0].config_name == "IMPORT_ISO_RATIO"

    def test_inverted_bounds(self):
        """Verifica erro para limites invertidos."""
        import config.importacao
        from config import validate_importacao_config
        with patch.object(config.importacao.ImportacaoConfig, "YEAR_MIN", 2200):
            result = validate_importacao_config()
        assert any(e.config_name == "IMPORT_YEAR_MIN" for e in result.errors)

    def test_weight_sum_warning(self):
        """Verifica warning quando os pesos nao somam 1."""
        import config.importacao
        from config import validate_importacao_config
        with patch.object(config.importacao.ImportacaoConfig, "DATE_CONTENT_WEIGHT", 0.6):
            result = validate_importacao_config()
        assert result.is_valid is True
        assert len(result.warnings) == 1

    def test_ensure_raises_configuration_error(self):
        """Verifica que configuracao invalida interrompe a importacao."""
        import pytest

        import config.importacao
        from config import ensure_valid_importacao_config
        from exceptions import ConfigurationError
        with patch.object(config.importacao.ImportacaoConfig, "DATE_SAMPLE_SIZE", 0):
            with pytest.raises(ConfigurationError) as exc_info:
                ensure_valid_importacao_config()
        assert "IMPORT_DATE_SAMPLE_SIZE" in exc_info.value.details
