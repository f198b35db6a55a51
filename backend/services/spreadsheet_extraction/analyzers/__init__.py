"""
Analisadores de planilhas.

Detecção de formato de datas, análise de colunas e localização das
colunas de início/término.
"""

from .column_analyzer import (
    analyze_column,
    analyze_columns,
    best_column_per_field,
    classify_data_type,
    score_header,
)
from .date_columns import find_date_columns, is_prazo_header
from .date_format import detect_date_format

__all__ = [
    'analyze_column',
    'analyze_columns',
    'best_column_per_field',
    'classify_data_type',
    'score_header',
    'find_date_columns',
    'is_prazo_header',
    'detect_date_format',
]
