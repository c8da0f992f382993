# place_resolver/utils/similarity.py
"""
String similarity primitives for place names.

Two families are provided:

- Character alignment (Jaro and Jaro-Winkler), which rewards shared
  characters in roughly the same positions and a shared prefix.
- Token based (token-sort, token-set and partial-token ratios), which are
  insensitive to word order and reward names that share whole words,
  e.g. 'Union Station - Lockport' vs 'Lockport Union Train Station'.

All functions case-fold and trim their inputs and return a score in [0, 1].
"""

from typing import Optional, Sequence

from .text import sorted_token_string, tokenize

DEFAULT_PREFIX_SCALE = 0.1
MAX_PREFIX_SCALE = 0.25
MAX_PREFIX_LENGTH = 4


def _fold(text: Optional[str]) -> str:
    return (text or '').lower().strip()


def _jaro(s1: str, s2: str) -> float:
    """Jaro similarity of two already folded, non-empty strings."""
    len1, len2 = len(s1), len(s2)
    match_window = max(len1, len2) // 2 - 1
    if match_window < 0:
        return 0.0

    s1_matched = [False] * len1
    s2_matched = [False] * len2
    matches = 0

    for i, char in enumerate(s1):
        start = max(0, i - match_window)
        end = min(i + match_window + 1, len2)
        for j in range(start, end):
            if s2_matched[j] or s2[j] != char:
                continue
            s1_matched[i] = True
            s2_matched[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    # Count matched characters that appear in a different order.
    transpositions = 0
    k = 0
    for i in range(len1):
        if not s1_matched[i]:
            continue
        while not s2_matched[k]:
            k += 1
        if s1[i] != s2[k]:
            transpositions += 1
        k += 1

    return (
        matches / len1
        + matches / len2
        + (matches - transpositions / 2) / matches
    ) / 3


def _common_prefix_length(s1: str, s2: str) -> int:
    prefix = 0
    for a, b in zip(s1[:MAX_PREFIX_LENGTH], s2[:MAX_PREFIX_LENGTH]):
        if a != b:
            break
        prefix += 1
    return prefix


def jaro_similarity(s1: Optional[str], s2: Optional[str]) -> float:
    """
    Computes the Jaro similarity of two strings.

    Identical strings (including two empty ones) score 1.0; a single empty
    string scores 0.0.
    """
    str1, str2 = _fold(s1), _fold(s2)
    if str1 == str2:
        return 1.0
    if not str1 or not str2:
        return 0.0
    return _jaro(str1, str2)


def jaro_winkler(
    s1: Optional[str],
    s2: Optional[str],
    scaling_factor: float = DEFAULT_PREFIX_SCALE,
) -> float:
    """
    Computes the Jaro-Winkler similarity of two strings.

    The Jaro score is boosted for a common prefix of up to four characters:
    `jaro + prefix * p * (1 - jaro)`.

    Args:
        s1: First string. None is treated as empty.
        s2: Second string. None is treated as empty.
        scaling_factor: The prefix weight `p`, clamped to [0, 0.25] so the
            result can never exceed 1.0.

    Returns:
        A similarity score between 0.0 and 1.0.
    """
    str1, str2 = _fold(s1), _fold(s2)
    if str1 == str2:
        return 1.0
    if not str1 or not str2:
        return 0.0

    p = min(max(scaling_factor, 0.0), MAX_PREFIX_SCALE)
    jaro = _jaro(str1, str2)
    prefix = _common_prefix_length(str1, str2)
    return jaro + prefix * p * (1 - jaro)


def _token_sort_score(
    tokens1: Sequence[str], tokens2: Sequence[str], scaling_factor: float
) -> float:
    if not tokens1 and not tokens2:
        return 1.0
    if not tokens1 or not tokens2:
        return 0.0

    return jaro_winkler(
        sorted_token_string(tokens1), sorted_token_string(tokens2), scaling_factor
    )


def token_sort_ratio(
    s1: Optional[str],
    s2: Optional[str],
    scaling_factor: float = DEFAULT_PREFIX_SCALE,
) -> float:
    """
    Compares two strings after sorting their tokens alphabetically.

    Handles pure word-order differences: 'Station Union' vs 'Union Station'.
    """
    return _token_sort_score(tokenize(s1), tokenize(s2), scaling_factor)


def token_set_similarity(
    tokens1: Sequence[str],
    tokens2: Sequence[str],
    scaling_factor: float = DEFAULT_PREFIX_SCALE,
) -> float:
    """
    `token_set_ratio` for names that were already tokenized with `tokenize`.

    The pairwise matcher tokenizes each record once and reuses the tokens
    for every pair the record takes part in.
    """
    set1 = set(tokens1)
    set2 = set(tokens2)

    if not set1 and not set2:
        return 1.0
    if not set1 or not set2:
        return 0.0
    if set1 == set2:
        return 1.0

    intersection = set1 & set2
    if not intersection:
        return _token_sort_score(tokens1, tokens2, scaling_factor)

    sorted_intersection = sorted_token_string(intersection)
    combined1 = sorted_token_string(set1)
    combined2 = sorted_token_string(set2)

    return max(
        jaro_winkler(sorted_intersection, combined1, scaling_factor),
        jaro_winkler(sorted_intersection, combined2, scaling_factor),
        jaro_winkler(combined1, combined2, scaling_factor),
    )


def token_set_ratio(
    s1: Optional[str],
    s2: Optional[str],
    scaling_factor: float = DEFAULT_PREFIX_SCALE,
) -> float:
    """
    Order-independent similarity based on shared and unique word sets.

    The tokens of each name are split into the intersection and the
    remainders unique to each side. Three sorted strings are compared:
    the intersection alone, intersection + remainder1 and intersection +
    remainder2. The best pairwise Jaro-Winkler score among them is returned,
    so a name whose words are a subset of the other's scores 1.0.

    When the names share no token at all this falls back to
    `token_sort_ratio`.

    Args:
        s1: First string.
        s2: Second string.
        scaling_factor: Jaro-Winkler prefix weight.

    Returns:
        A similarity score between 0.0 and 1.0.
    """
    return token_set_similarity(tokenize(s1), tokenize(s2), scaling_factor)


def partial_token_ratio(
    s1: Optional[str],
    s2: Optional[str],
    scaling_factor: float = DEFAULT_PREFIX_SCALE,
) -> float:
    """
    Averages, over the shorter token list, each token's best match in the longer.

    Useful when one name is essentially contained in the other. Returns 0.0
    if either side has no tokens.
    """
    tokens1 = tokenize(s1)
    tokens2 = tokenize(s2)
    if not tokens1 or not tokens2:
        return 0.0

    shorter, longer = (tokens1, tokens2) if len(tokens1) <= len(tokens2) else (tokens2, tokens1)

    total = 0.0
    for short_token in shorter:
        total += max(
            jaro_winkler(short_token, long_token, scaling_factor) for long_token in longer
        )
    return total / len(shorter)
