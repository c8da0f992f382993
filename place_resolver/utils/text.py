# place_resolver/utils/text.py
"""
Tokenization helpers shared by the similarity scorer, blocking detector and
generic-name classifier.
"""

import re
from typing import Iterable, List, Optional

_PUNCTUATION_PATTERN = re.compile(r'[^\w\s]')


def tokenize(text: Optional[str]) -> List[str]:
    """
    Splits a name into lowercase word tokens.

    Punctuation becomes whitespace, so "St. Mary's" yields ['st', 'mary'].
    One-character tokens are dropped unless they are a digit, which keeps
    'Level 2' meaningful while discarding stray initials like the 'A' in
    'Building A'.

    Args:
        text: The raw text. None is treated as empty.

    Returns:
        Tokens in their original order, duplicates included.
    """
    if not text:
        return []
    cleaned = _PUNCTUATION_PATTERN.sub(' ', text.lower())
    return [token for token in cleaned.split() if len(token) > 1 or token.isdigit()]


def sorted_token_string(tokens: Iterable[str]) -> str:
    """Joins tokens with single spaces in alphabetical order."""
    return ' '.join(sorted(tokens))


def unique_in_order(items: Iterable[str]) -> List[str]:
    """Drops repeated items while preserving first-appearance order."""
    return list(dict.fromkeys(items))


def split_words(text: Optional[str], min_length: int = 1) -> List[str]:
    """Splits on whitespace and keeps words of at least `min_length` characters."""
    if not text:
        return []
    return [word for word in text.split() if len(word) >= min_length]
