# place_resolver/blocking.py
"""
Blocking detector: vetoes pairs whose names are semantically opposite.

'North Factory' and 'South Factory' score very high on every string metric
but are, by construction, different places. Before any similarity score is
considered, both names are scanned for four categories of distinguishing
markers. If both names carry a marker from the same category and the
markers differ, the pair is blocked outright.

Categories are checked in a fixed order (direction, temporal, numbered,
identifier) and the first conflict found is reported.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .dictionaries import DIRECTION_WORDS, IDENTIFIER_KEYWORDS, NUMBERED_WORDS, TEMPORAL_WORDS
from .models import BlockingConflict
from .utils.text import tokenize, unique_in_order

# Set up a logger for this module.
logger = logging.getLogger(__name__)

_IDENTIFIER_PATTERNS = tuple(
    re.compile(rf'\b{keyword}\s*[a-z0-9]+\b', re.IGNORECASE) for keyword in IDENTIFIER_KEYWORDS
)


@dataclass(frozen=True, slots=True)
class BlockingWords:
    """Blocking markers found in one name, each in first-appearance order."""

    directions: Tuple[str, ...] = ()
    temporal: Tuple[str, ...] = ()
    numbered: Tuple[str, ...] = ()
    identifiers: Tuple[str, ...] = ()

    def categories(self) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
        """Returns (category, values) pairs in precedence order."""
        return (
            ('direction', self.directions),
            ('temporal', self.temporal),
            ('numbered', self.numbered),
            ('identifier', self.identifiers),
        )


def extract_blocking_words(name: Optional[str]) -> BlockingWords:
    """
    Collects the blocking markers of a single name.

    Directional, temporal and numbered words come from the name's tokens.
    Identifier phrases ('building a', 'unit 12', 'lot 7') are matched on the
    lowercased raw name, one match per keyword.

    Args:
        name: The raw place name.

    Returns:
        A BlockingWords instance; empty for a missing name.
    """
    if not name:
        return BlockingWords()

    tokens = unique_in_order(tokenize(name))
    lowered = name.lower()

    identifiers = []
    for pattern in _IDENTIFIER_PATTERNS:
        match = pattern.search(lowered)
        if match:
            identifiers.append(match.group(0))

    return BlockingWords(
        directions=tuple(token for token in tokens if token in DIRECTION_WORDS),
        temporal=tuple(token for token in tokens if token in TEMPORAL_WORDS),
        numbered=tuple(token for token in tokens if token in NUMBERED_WORDS),
        identifiers=tuple(identifiers),
    )


def _first_difference(
    values1: Sequence[str], values2: Sequence[str]
) -> Optional[Tuple[str, str]]:
    for value1 in values1:
        for value2 in values2:
            if value1 != value2:
                return value1, value2
    return None


def find_conflict(
    blocking1: BlockingWords, blocking2: BlockingWords
) -> Optional[BlockingConflict]:
    """
    Compares the markers of two names that were already extracted.

    Returns:
        The first BlockingConflict in category precedence order, or None.
    """
    for (category, values1), (_, values2) in zip(blocking1.categories(), blocking2.categories()):
        difference = _first_difference(values1, values2)
        if difference is not None:
            first, second = difference
            return BlockingConflict(category=category, first=first, second=second)

    return None


def check_blocking_conflict(
    name1: Optional[str], name2: Optional[str]
) -> Optional[BlockingConflict]:
    """
    Checks whether two names carry conflicting blocking markers.

    Sharing a marker ('Upper Mill' vs 'Upper Factory') is not a conflict, and
    neither is a marker present on one side only.

    Args:
        name1: First raw name.
        name2: Second raw name.

    Returns:
        The first BlockingConflict found, or None if the pair may be compared.
    """
    return find_conflict(extract_blocking_words(name1), extract_blocking_words(name2))
