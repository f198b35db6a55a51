"""
Exceções específicas do ContrataFácil.

Dados malformados em uma planilha nunca geram exceção: viram valores
padrão e avisos. As exceções abaixo ficam reservadas para erros de uso
da API (entrada com formato estrutural errado) e falhas de leitura de
arquivo.
"""

from typing import List, Optional


class ContrataFacilError(Exception):
    """Exceção base para todas as exceções do ContrataFácil."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


# === Exceções de Configuração ===

class ConfigurationError(ContrataFacilError):
    """Erro de configuração do sistema."""
    pass


# === Exceções de Processamento ===

class ProcessingError(ContrataFacilError):
    """Erro durante o processamento de planilhas."""
    pass


class WorkbookReadError(ProcessingError):
    """Não foi possível ler a pasta de trabalho."""

    def __init__(self, file_name: str, details: Optional[str] = None):
        super().__init__(f"Erro ao ler a planilha '{file_name}'", details)


# === Exceções de Validação ===

class ValidationError(ContrataFacilError):
    """Erro de validação de dados ou arquivos."""
    pass


class InvalidSheetError(ValidationError):
    """A matriz de células recebida não tem o formato esperado."""

    def __init__(self, message: str = "Planilha inválida: esperada uma lista de linhas"):
        super().__init__(message)


class UnsupportedFileError(ValidationError):
    """Formato de arquivo não suportado."""

    def __init__(self, extension: str, supported: Optional[List[str]] = None):
        supported_str = ", ".join(supported) if supported else ".xlsx, .xlsm"
        super().__init__(
            f"Formato de arquivo '{extension}' não suportado. "
            f"Formatos aceitos: {supported_str}"
        )
