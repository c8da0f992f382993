# place_resolver/normalizer.py
"""
NameNormalizer module for canonicalizing place names before comparison.

Historic and informal place names are full of abbreviations ('PRR Sta.',
'Chevy Plt', 'St. Mary's Hosp'). Normalization expands them through a
static alias dictionary so that the similarity scorer compares like with
like. The pipeline runs in a fixed order, each step operating on the
output of the previous one:

1. Lowercase and trim.
2. Strip one leading article ('the', 'a', 'an').
3. Expand period-terminated abbreviations ('st.' -> 'saint').
4. Expand multi-word phrases, longest pattern first.
5. Expand single-word aliases token by token, keeping trailing punctuation.
6. Collapse whitespace.
"""

import logging
import re
from functools import lru_cache
from typing import Dict, List, Optional, Pattern, Tuple

import pandas as pd

from .dictionaries import (
    LEADING_ARTICLES,
    MULTI_WORD_ALIASES,
    PERIOD_ABBREVIATIONS,
    SINGLE_WORD_ALIASES,
)

# Set up module-level logger
logger = logging.getLogger(__name__)

_TRAILING_PUNCTUATION = re.compile(r'[.,;:!?]$')
_WHITESPACE = re.compile(r'\s+')


class NameNormalizer:
    """
    Expands abbreviations and aliases in place names.

    Instances are immutable once built: all regular expressions are compiled
    in `__init__` from the read-only tables in `dictionaries`, and
    `normalize` has no side effects.

    Attributes:
        single_word_aliases: Token-level alias lookup.
    """

    def __init__(self):
        self.single_word_aliases = SINGLE_WORD_ALIASES

        articles = '|'.join(LEADING_ARTICLES)
        self._article_pattern = re.compile(rf'^(?:{articles})\s+')

        self._period_patterns: List[Tuple[Pattern, str]] = [
            (re.compile(rf'\b{re.escape(abbr)}\.\s*', re.IGNORECASE), f'{expansion} ')
            for abbr, expansion in PERIOD_ABBREVIATIONS
        ]

        # Longest phrase first so 'general motors truck' wins over
        # 'general motors'. sorted() is stable for equal lengths.
        ordered_phrases = sorted(MULTI_WORD_ALIASES, key=lambda pair: len(pair[0]), reverse=True)
        self._phrase_patterns: List[Tuple[Pattern, str]] = [
            (re.compile(rf'\b{re.escape(phrase)}\b', re.IGNORECASE), replacement)
            for phrase, replacement in ordered_phrases
        ]

        logger.debug(
            f"Compiled {len(self._period_patterns)} period abbreviations and "
            f"{len(self._phrase_patterns)} phrase aliases"
        )

    def normalize(self, name: Optional[str]) -> str:
        """
        Normalizes a single place name.

        Args:
            name: The raw name. None or empty yields an empty string.

        Returns:
            The canonical, lowercase form of the name.
        """
        if not name:
            return ''

        normalized = name.lower().strip()
        normalized = self._article_pattern.sub('', normalized, count=1)

        for pattern, expansion in self._period_patterns:
            normalized = pattern.sub(expansion, normalized)

        for pattern, replacement in self._phrase_patterns:
            normalized = pattern.sub(replacement, normalized)

        normalized = ' '.join(self._expand_word(word) for word in normalized.split())

        return _WHITESPACE.sub(' ', normalized).strip()

    def _expand_word(self, word: str) -> str:
        """Looks up a single token, preserving one trailing punctuation mark."""
        clean_word = _TRAILING_PUNCTUATION.sub('', word)
        suffix = word[len(clean_word):]
        expansion = self.single_word_aliases.get(clean_word)
        return expansion + suffix if expansion else word

    def normalize_series(self, names: pd.Series) -> pd.Series:
        """
        Normalizes a pandas Series of names, mapping missing values to ''.

        Args:
            names: A Series of raw names (object dtype, may contain NaN/None).

        Returns:
            A Series of normalized strings with the same index.
        """
        return names.map(lambda value: self.normalize(value) if isinstance(value, str) else '')

    def stats(self) -> Dict[str, int]:
        """Returns the number of entries in each alias table."""
        multi_word = len(MULTI_WORD_ALIASES)
        single_word = len(self.single_word_aliases)
        period = len(PERIOD_ABBREVIATIONS)
        return {
            'multi_word': multi_word,
            'single_word': single_word,
            'period_abbreviations': period,
            'total': multi_word + single_word + period,
        }


_DEFAULT_NORMALIZER = NameNormalizer()


@lru_cache(maxsize=65536)
def normalize_name(name: Optional[str]) -> str:
    """
    Normalizes a place name with the shared default normalizer.

    Pure and deterministic, so results are memoized; the pairwise matcher
    normalizes every name once per partner.

    Examples:
        >>> normalize_name('PRR Station')
        'pennsylvania railroad station'
        >>> normalize_name('The St. Marys Hosp.')
        'saint marys hospital'
    """
    return _DEFAULT_NORMALIZER.normalize(name)


def alias_dictionary_stats() -> Dict[str, int]:
    """Returns the sizes of the alias tables used by `normalize_name`."""
    return _DEFAULT_NORMALIZER.stats()
