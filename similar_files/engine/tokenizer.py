"""
Text tokenizer: turns raw file content into normalized terms.
"""

from __future__ import annotations

import re
from typing import List

DEFAULT_EXCERPT_LENGTH = 1000

# Letters and digits only; "_" is a word character for \w, so exclude it explicitly.
TOKEN_PATTERN = re.compile(r"[^\W_]+", flags=re.UNICODE)


def excerpt(text: str, excerpt_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    if excerpt_length <= 0:
        return text
    return text[:excerpt_length]


def tokenize(text: str, excerpt_length: int = DEFAULT_EXCERPT_LENGTH) -> List[str]:
    """
    Lowercase the leading excerpt of ``text`` and split it into terms.

    Punctuation, markup and underscores act as separators, so ``snake_case``
    and ``kebab-case`` identifiers contribute their individual words.
    """
    if not text:
        return []
    return TOKEN_PATTERN.findall(excerpt(text, excerpt_length).lower())


__all__ = ["tokenize", "excerpt", "DEFAULT_EXCERPT_LENGTH", "TOKEN_PATTERN"]
