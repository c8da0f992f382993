# place_resolver/generic.py
"""
Generic-name classification.

A name like 'House' or 'Factory Buffalo' says what kind of place something
is but not which one. The matcher only trusts such names when the records
are very close together. A separate, stricter policy decides which names
are too vague to offer as suggestions; the two are intentionally distinct.
"""

from typing import Optional

from .dictionaries import GENERIC_NAMES, REGION_WORDS, SUGGESTION_GENERIC_WORDS
from .utils.text import tokenize


def is_generic_name(name: Optional[str]) -> bool:
    """
    Checks whether a name is too generic to match on without GPS support.

    A name is generic when it is empty, when it is a single generic word
    ('Church'), or when it is exactly a generic word plus a region or city
    token ('House - CNY', 'Factory Buffalo').
    """
    if not name:
        return True

    tokens = tokenize(name)

    if len(tokens) == 1 and tokens[0] in GENERIC_NAMES:
        return True

    if len(tokens) == 2:
        has_generic = any(token in SUGGESTION_GENERIC_WORDS for token in tokens)
        has_region = any(token in REGION_WORDS for token in tokens)
        if has_generic and has_region:
            return True

    return False


def is_suggestion_filtered(name: Optional[str]) -> bool:
    """
    Checks whether a name is too vague to be offered as a suggestion.

    Filters empty names, single generic words (plurals included) and short
    names of up to three tokens made only of generic and region words, such
    as 'Industrial Syracuse' or 'Trails CNY'.
    """
    if not name:
        return True

    tokens = tokenize(name)
    if not tokens:
        return True

    if len(tokens) == 1 and tokens[0] in SUGGESTION_GENERIC_WORDS:
        return True

    if len(tokens) <= 3:
        generic_count = sum(1 for token in tokens if token in SUGGESTION_GENERIC_WORDS)
        region_count = sum(1 for token in tokens if token in REGION_WORDS)
        if generic_count + region_count >= len(tokens):
            return True

    return False
