"""
Validadores de configuração do ContrataFácil.

Fornece funções para validar os limiares da importação (que podem vir
de variáveis de ambiente) e garantir que estão dentro de limites
aceitáveis.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional

from exceptions import ConfigurationError
from logging_config import get_logger

logger = get_logger('config.validators')


@dataclass
class ConfigValidationError:
    """Erro de validação de configuração."""
    config_name: str
    value: Any
    message: str
    severity: str = "error"  # "error" ou "warning"


@dataclass
class ValidationResult:
    """Resultado da validação de configurações."""
    is_valid: bool
    errors: List[ConfigValidationError] = field(default_factory=list)
    warnings: List[ConfigValidationError] = field(default_factory=list)

    def add_error(self, config_name: str, value: Any, message: str):
        self.errors.append(ConfigValidationError(config_name, value, message, "error"))
        self.is_valid = False

    def add_warning(self, config_name: str, value: Any, message: str):
        self.warnings.append(ConfigValidationError(config_name, value, message, "warning"))


def validate_range(
    value: float,
    name: str,
    min_val: Optional[float] = None,
    max_val: Optional[float] = None,
    result: Optional[ValidationResult] = None
) -> bool:
    """
    Valida se um valor está dentro de um intervalo (limites inclusivos).

    Returns:
        True se válido, False caso contrário
    """
    if min_val is not None and value < min_val:
        if result:
            result.add_error(name, value, f"Deve ser >= {min_val}")
        return False

    if max_val is not None and value > max_val:
        if result:
            result.add_error(name, value, f"Deve ser <= {max_val}")
        return False

    return True


def validate_positive(
    value: float,
    name: str,
    result: Optional[ValidationResult] = None
) -> bool:
    """Valida se um valor é estritamente positivo."""
    if value <= 0:
        if result:
            result.add_error(name, value, "Deve ser > 0")
        return False
    return True


def validate_percentage(
    value: float,
    name: str,
    result: Optional[ValidationResult] = None
) -> bool:
    """Valida se um valor é uma proporção válida (0 a 1)."""
    return validate_range(value, name, 0.0, 1.0, result)


def validate_importacao_config() -> ValidationResult:
    """
    Valida os limiares da importação de planilhas.

    Returns:
        ValidationResult com erros e warnings encontrados
    """
    from .importacao import ImportacaoConfig as IC

    result = ValidationResult(is_valid=True)

    validate_positive(IC.DATE_SAMPLE_SIZE, "IMPORT_DATE_SAMPLE_SIZE", result)
    validate_percentage(IC.SERIAL_RATIO, "IMPORT_SERIAL_RATIO", result)
    validate_percentage(IC.ISO_RATIO, "IMPORT_ISO_RATIO", result)
    validate_percentage(IC.MONTH_YEAR_RATIO, "IMPORT_MONTH_YEAR_RATIO", result)
    validate_percentage(IC.TWO_DIGIT_YEAR_RATIO, "IMPORT_TWO_DIGIT_YEAR_RATIO", result)
    validate_percentage(IC.DATE_TYPE_RATIO, "IMPORT_DATE_TYPE_RATIO", result)
    validate_percentage(IC.NUMBER_TYPE_RATIO, "IMPORT_NUMBER_TYPE_RATIO", result)
    validate_percentage(IC.TEXT_TYPE_RATIO, "IMPORT_TEXT_TYPE_RATIO", result)
    validate_percentage(IC.STRATEGY_TRUST_THRESHOLD, "IMPORT_STRATEGY_TRUST", result)
    validate_percentage(IC.TIER2_WEIGHT, "IMPORT_TIER2_WEIGHT", result)

    # Validação do mapeamento
    validate_percentage(IC.REQUIRED_MIN_CONFIDENCE, "IMPORT_REQUIRED_MIN_CONFIDENCE", result)
    validate_percentage(IC.EMPTY_RATIO_WARNING, "IMPORT_EMPTY_RATIO_WARNING", result)
    validate_percentage(IC.DATE_CONFIDENCE_WARNING, "IMPORT_DATE_CONFIDENCE_WARNING", result)

    # Peso do voto abaixo de 0.5 inverteria a preferência regional
    validate_range(IC.DAY_FIRST_WEIGHT, "IMPORT_DAY_FIRST_WEIGHT", 0.5, 1.0, result)

    if IC.SERIAL_MIN >= IC.SERIAL_MAX:
        result.add_error(
            "IMPORT_SERIAL_MIN", IC.SERIAL_MIN,
            f"Deve ser menor que IMPORT_SERIAL_MAX ({IC.SERIAL_MAX})"
        )
    if IC.YEAR_MIN >= IC.YEAR_MAX:
        result.add_error(
            "IMPORT_YEAR_MIN", IC.YEAR_MIN,
            f"Deve ser menor que IMPORT_YEAR_MAX ({IC.YEAR_MAX})"
        )
    if IC.PERIOD_MAX_DAYS >= IC.PERIOD_MAX_MONTHS_DAYS:
        result.add_error(
            "IMPORT_PERIOD_MAX_DAYS", IC.PERIOD_MAX_DAYS,
            f"Deve ser menor que IMPORT_PERIOD_MAX_MONTHS_DAYS ({IC.PERIOD_MAX_MONTHS_DAYS})"
        )

    weight_sum = IC.DATE_HEADER_WEIGHT + IC.DATE_CONTENT_WEIGHT
    if abs(weight_sum - 1.0) > 1e-6:
        result.add_warning(
            "IMPORT_DATE_HEADER_WEIGHT", weight_sum,
            "Pesos de cabeçalho e conteúdo das colunas de data deveriam somar 1"
        )

    for error in result.errors:
        logger.error(f"[CONFIG] {error.config_name}={error.value}: {error.message}")
    for warning in result.warnings:
        logger.warning(f"[CONFIG] {warning.config_name}={warning.value}: {warning.message}")

    return result


def ensure_valid_importacao_config() -> None:
    """
    Interrompe a importação quando algum limiar é inválido.

    Raises:
        ConfigurationError: com os erros encontrados em details
    """
    result = validate_importacao_config()
    if not result.is_valid:
        details = "; ".join(f"{e.config_name}={e.value}: {e.message}" for e in result.errors)
        raise ConfigurationError("Configuração da importação inválida", details)
