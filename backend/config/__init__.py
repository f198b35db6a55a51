"""
Configuracoes do ContrataFacil.

Este modulo re-exporta as configuracoes usadas pela importacao.

Exemplo:
    from config import ImportacaoConfig, Messages
"""

from .base import (
    ALLOWED_SPREADSHEET_EXTENSIONS,
    env_bool,
    env_float,
    env_int,
    get_file_extension,
    is_allowed_spreadsheet,
)

# Importacao de planilhas
from .importacao import ImportacaoConfig

# Mensagens
from .messages import Messages

# Validadores
from .validators import (
    ValidationResult,
    ensure_valid_importacao_config,
    validate_importacao_config,
)

__all__ = [
    # Base
    "env_bool",
    "env_int",
    "env_float",
    "ALLOWED_SPREADSHEET_EXTENSIONS",
    "get_file_extension",
    "is_allowed_spreadsheet",
    # Importacao
    "ImportacaoConfig",
    # Mensagens
    "Messages",
    # Validadores
    "ValidationResult",
    "ensure_valid_importacao_config",
    "validate_importacao_config",
]
