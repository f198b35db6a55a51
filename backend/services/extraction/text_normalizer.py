"""
Utilitários de normalização de texto para a importação de planilhas.

Toda comparação aproximada de cabeçalhos, sinônimos e valores
enumerados passa por normalize_search_text, de modo que "Número",
"numero" e "NÚMERO " produzam a mesma chave.

Usa lru_cache para melhorar performance em chamadas repetidas.
"""

import re
import unicodedata
from functools import lru_cache
from typing import Any

# Marcas diacríticas combinantes (faixa U+0300 a U+036F)
_COMBINING_MARKS = re.compile(r'[\u0300-\u036f]')
_NON_WORD = re.compile(r'[^\w\s]')
_WHITESPACE = re.compile(r'\s+')


@lru_cache(maxsize=4096)
def normalize_accents(text: str) -> str:
    """
    Remove acentos mantendo a caixa original.

    Args:
        text: Texto a normalizar

    Returns:
        Texto sem diacríticos
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize('NFD', text)
    return _COMBINING_MARKS.sub('', decomposed)


@lru_cache(maxsize=4096)
def _normalize_str(text: str) -> str:
    lowered = normalize_accents(text.lower())
    spaced = _NON_WORD.sub(' ', lowered)
    return _WHITESPACE.sub(' ', spaced).strip()


def normalize_search_text(text: Any) -> str:
    """
    Normaliza texto para comparação aproximada.

    Converte para minúsculas, remove acentos, troca pontuação por
    espaço e colapsa espaços repetidos. Nunca lança exceção.

    Args:
        text: Valor a normalizar (None e não-strings são aceitos)

    Returns:
        Texto normalizado ("" para entrada vazia)
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    if not text:
        return ""
    return _normalize_str(text)


def contains_phrase(haystack: str, needle: str) -> bool:
    """
    Verifica se a frase normalizada aparece em haystack.

    Frases curtas (até 3 caracteres, como "id", "dt" ou "num") só casam
    como palavra inteira, para que "id" não case com "unidade".

    Args:
        haystack: Texto já normalizado
        needle: Frase já normalizada

    Returns:
        True se needle aparece em haystack
    """
    if not haystack or not needle:
        return False
    if len(needle) <= 3:
        return f" {needle} " in f" {haystack} "
    return needle in haystack
