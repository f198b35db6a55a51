"""
Configuração de logging para o ContrataFácil.

Uso:
    from logging_config import get_logger
    logger = get_logger(__name__)
    logger.info("Mensagem de info")
    logger.debug("Decisão por célula")

Para logging estruturado (JSON):
    export LOG_FORMAT=json

Para logging com contexto de planilha:
    from logging_config import get_context_logger
    logger = get_context_logger(__name__, sheet="Contratos", file="2024.xlsx")
    logger.info("Processando")  # Inclui sheet e file automaticamente

Para medir tempo de operações:
    from logging_config import log_timing
    with log_timing(logger, "extracao_planilha"):
        # código lento
"""
import json
import logging
import os
import sys
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TextIO, TypeVar

T = TypeVar('T')

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Atributos padrão de LogRecord que não devem ir como campos extras no JSON
_RESERVED_ATTRS = frozenset((
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
    'levelno', 'lineno', 'module', 'msecs', 'pathname', 'process',
    'processName', 'relativeCreated', 'stack_info', 'exc_info', 'exc_text',
    'message', 'context', 'thread', 'threadName', 'taskName',
))


class StructuredFormatter(logging.Formatter):
    """
    Formatter que produz logs em formato JSON estruturado.

    Útil para auditar importações em lote com ferramentas de análise de logs.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Formata o registro de log como JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, 'context'):
            log_data['context'] = record.context

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Campos passados via extra= (ex: sheet, file, row)
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith('_'):
                log_data[key] = value

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter que adiciona contexto a todas as mensagens.

    Uso:
        logger = get_context_logger(__name__, sheet="Plan1", file="contratos.xlsx")
        logger.info("Processando...")  # Inclui sheet e file automaticamente
    """

    def process(self, msg, kwargs):
        """Adiciona contexto extra ao log."""
        extra = kwargs.get('extra', {})
        extra.update(self.extra)
        kwargs['extra'] = extra
        return msg, kwargs


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    use_json: Optional[bool] = None,
    stream: Optional[TextIO] = None
) -> None:
    """
    Configura o logging para toda a aplicação.

    Args:
        level: Nível de logging (DEBUG, INFO, WARNING, ERROR)
        log_file: Caminho para arquivo de log (opcional)
        format_string: Formato das mensagens de log
        use_json: Se True, usa formato JSON estruturado
        stream: Destino do console (padrão: stdout)

    Environment Variables:
        LOG_LEVEL: Nível de logging (default: INFO)
        LOG_FILE: Caminho para arquivo de log
        LOG_FORMAT: "json" para formato JSON
    """
    effective_level: str = level or os.getenv("LOG_LEVEL", "INFO") or "INFO"
    log_level = getattr(logging, effective_level.upper(), logging.INFO)

    if use_json is None:
        use_json = os.getenv("LOG_FORMAT", "").lower() == "json"

    effective_format: str = format_string or DEFAULT_FORMAT

    formatter: logging.Formatter
    if use_json:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(effective_format)

    handlers: List[Any] = []

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    log_file_path = log_file or os.getenv("LOG_FILE")
    if log_file_path:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        format=effective_format,
        handlers=handlers,
        force=True
    )

    # openpyxl emite avisos de estilos/validações irrelevantes para a importação
    logging.getLogger("openpyxl").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Obtém um logger configurado para um módulo.

    Args:
        name: Nome do módulo (geralmente __name__)

    Returns:
        Logger configurado
    """
    return logging.getLogger(name)


def get_context_logger(name: str, **context) -> ContextLogger:
    """
    Obtém um logger com contexto adicional.

    O contexto é incluído automaticamente em todas as mensagens.
    Útil para rastrear a planilha e o arquivo em processamento.

    Args:
        name: Nome do módulo (geralmente __name__)
        **context: Contexto a incluir em todas as mensagens

    Returns:
        ContextLogger configurado
    """
    base_logger = logging.getLogger(name)
    return ContextLogger(base_logger, context)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context
) -> None:
    """
    Loga uma mensagem com contexto adicional.

    Example:
        log_with_context(logger, logging.INFO, "Aba processada",
                         sheet="Plan1", contratos=12)
    """
    logger.log(level, message, extra={'context': context})


# === Timing Utilities ===

@contextmanager
def log_timing(
    logger: Any,
    operation: str,
    level: int = logging.DEBUG,
    threshold_ms: Optional[float] = None
):
    """
    Context manager para medir e logar tempo de operações.

    Args:
        logger: Logger (ou adapter) a usar
        operation: Nome da operação
        level: Nível de log (default: DEBUG)
        threshold_ms: Se definido, só loga se tempo > threshold

    Example:
        with log_timing(logger, "extracao_planilha"):
            extract_contracts(rows, "Plan1")
        # Output: [timing] extracao_planilha completed in 123.45ms
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        if threshold_ms is None or elapsed_ms > threshold_ms:
            logger.log(
                level,
                f"[timing] {operation} completed in {elapsed_ms:.2f}ms"
            )


def timed(
    logger: Optional[logging.Logger] = None,
    operation: Optional[str] = None,
    level: int = logging.DEBUG,
    threshold_ms: Optional[float] = None
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator para medir tempo de execução de funções.

    Example:
        @timed(threshold_ms=100)
        def import_workbook(path):
            ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        func_logger = logger or logging.getLogger(func.__module__)
        op_name = operation or func.__name__

        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            with log_timing(func_logger, op_name, level, threshold_ms):
                return func(*args, **kwargs)
        return wrapper
    return decorator


# Configurar logging na importação
setup_logging()
