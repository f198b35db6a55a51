"""
Configuracoes base do ContrataFacil.
Helpers de ambiente e constantes fundamentais.
"""
import os
from dotenv import load_dotenv

load_dotenv()


# === Helpers para leitura de variaveis de ambiente ===
def env_bool(key: str, default: bool = False) -> bool:
    """Le variavel de ambiente como booleano."""
    val = os.getenv(key, "").lower()
    if val in ("1", "true", "yes", "on"):
        return True
    if val in ("0", "false", "no", "off"):
        return False
    return default


def env_int(key: str, default: int = 0) -> int:
    """Le variavel de ambiente como inteiro."""
    val = os.getenv(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


def env_float(key: str, default: float = 0.0) -> float:
    """Le variavel de ambiente como float."""
    val = os.getenv(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default


# === Planilhas aceitas ===
ALLOWED_SPREADSHEET_EXTENSIONS = [".xlsx", ".xlsm"]


def get_file_extension(filename: str) -> str:
    """Retorna a extensao do arquivo em minusculas."""
    return os.path.splitext(filename)[1].lower()


def is_allowed_spreadsheet(filename: str) -> bool:
    """Verifica se a extensao do arquivo e de uma planilha suportada."""
    return get_file_extension(filename) in ALLOWED_SPREADSHEET_EXTENSIONS
