"""
Utilitários de texto compartilhados pela extração de dados.

Contém a normalização usada em toda comparação aproximada de
cabeçalhos e valores de planilhas.
"""

from .text_normalizer import (
    contains_phrase,
    normalize_accents,
    normalize_search_text,
)

__all__ = [
    'contains_phrase',
    'normalize_accents',
    'normalize_search_text',
]
