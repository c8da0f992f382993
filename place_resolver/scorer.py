# place_resolver/scorer.py
"""
Name similarity scoring for place records.

This module combines the raw string primitives in `utils.similarity` with
the alias normalizer into the scores the match evaluator consumes:

- `score_names`: character similarity, token-set similarity and their max.
- `word_overlap` / `adjusted_threshold`: the word-overlap boost, which
  lowers the name threshold for pairs sharing at least one exact word.
- Helpers for ad-hoc lookups and diagnostics (`find_best_matches`,
  `match_details`, `multi_signal_match`).
"""

import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence

from .models import NameScores, WordOverlap
from .normalizer import normalize_name
from .utils.similarity import DEFAULT_PREFIX_SCALE, jaro_winkler, token_set_ratio
from .utils.text import split_words, unique_in_order

# Set up a logger for this module.
logger = logging.getLogger(__name__)

DEFAULT_NAME_THRESHOLD = 0.85
WORD_OVERLAP_BOOST = 0.10
MIN_BOOSTED_THRESHOLD = 0.70
MIN_OVERLAP_RATIO = 0.25
MIN_OVERLAP_WORD_LENGTH = 2

# Multi-signal weights (points out of 100).
GPS_WEIGHT = 40.0
NAME_WEIGHT = 35.0
REGION_WEIGHT = 25.0


class BestMatch(NamedTuple):
    candidate: str
    score: float
    index: int


@dataclass(frozen=True, slots=True)
class MatchDetails:
    """Everything that goes into a smart-match decision, for debugging and review."""

    first_original: str
    second_original: str
    first_normalized: str
    second_normalized: str
    raw_similarity: float
    normalized_similarity: float
    word_overlap: WordOverlap
    base_threshold: float
    adjusted_threshold: float
    is_match: bool


@dataclass(frozen=True, slots=True)
class MultiSignalScore:
    score: float
    gps: float
    name: float
    region: float
    confidence: str


# ======================================================================================
# Core Scores
# ======================================================================================


def normalized_similarity(
    name1: Optional[str],
    name2: Optional[str],
    scaling_factor: float = DEFAULT_PREFIX_SCALE,
) -> float:
    """Jaro-Winkler similarity of the alias-normalized forms of two names."""
    return jaro_winkler(normalize_name(name1), normalize_name(name2), scaling_factor)


def score_names(
    name1: Optional[str],
    name2: Optional[str],
    normalize: bool = False,
    scaling_factor: float = DEFAULT_PREFIX_SCALE,
) -> NameScores:
    """
    Scores two names with both the character and the token-set algorithm.

    The character similarity is Jaro-Winkler on the raw names, or on their
    normalized forms when `normalize` is True. The token-set similarity is
    always computed on the raw names. The arguments are put into a canonical
    order first, so `score_names(a, b) == score_names(b, a)` holds exactly.

    Args:
        name1: First name.
        name2: Second name.
        normalize: Expand aliases before the character comparison.
        scaling_factor: Jaro-Winkler prefix weight.

    Returns:
        NameScores with the character, token-set and combined (max) score.
    """
    first, second = sorted((name1 or '', name2 or ''))

    if normalize:
        character = normalized_similarity(first, second, scaling_factor)
    else:
        character = jaro_winkler(first, second, scaling_factor)
    token_set = token_set_ratio(first, second, scaling_factor)

    return NameScores(
        character_similarity=character,
        token_set_similarity=token_set,
        combined=max(character, token_set),
    )


# ======================================================================================
# Word-Overlap Boost
# ======================================================================================


def word_overlap(normalized1: Optional[str], normalized2: Optional[str]) -> WordOverlap:
    """
    Measures exact-word overlap between two already normalized names.

    Words shorter than two characters are ignored. The boost applies when at
    least one word is shared and the shared words make up at least a quarter
    of all distinct words.

    Args:
        normalized1: First normalized name.
        normalized2: Second normalized name.

    Returns:
        A WordOverlap; empty with `should_boost=False` if either name is empty.
    """
    if not normalized1 or not normalized2:
        return WordOverlap(shared_words=(), overlap_ratio=0.0, total_unique_words=0, should_boost=False)

    words1 = unique_in_order(split_words(normalized1, MIN_OVERLAP_WORD_LENGTH))
    words2 = set(split_words(normalized2, MIN_OVERLAP_WORD_LENGTH))

    shared = tuple(word for word in words1 if word in words2)
    total_unique = len(words2.union(words1))
    ratio = len(shared) / total_unique if total_unique else 0.0

    return WordOverlap(
        shared_words=shared,
        overlap_ratio=ratio,
        total_unique_words=total_unique,
        should_boost=len(shared) >= 1 and ratio >= MIN_OVERLAP_RATIO,
    )


def boosted_threshold(
    overlap: WordOverlap,
    base_threshold: float,
    boost: float = WORD_OVERLAP_BOOST,
    floor: float = MIN_BOOSTED_THRESHOLD,
) -> float:
    """
    Applies the word-overlap boost to a threshold.

    The threshold drops by `boost` but not below `floor`. A base threshold
    already under the floor is left as it is.
    """
    if not overlap.should_boost:
        return base_threshold
    return min(base_threshold, max(base_threshold - boost, floor))


def adjusted_threshold(
    name1: Optional[str],
    name2: Optional[str],
    base_threshold: float = DEFAULT_NAME_THRESHOLD,
    boost: float = WORD_OVERLAP_BOOST,
    floor: float = MIN_BOOSTED_THRESHOLD,
) -> float:
    """Returns the name threshold for a raw name pair after the word-overlap boost."""
    overlap = word_overlap(normalize_name(name1), normalize_name(name2))
    return boosted_threshold(overlap, base_threshold, boost, floor)


def is_smart_match(
    name1: Optional[str],
    name2: Optional[str],
    base_threshold: float = DEFAULT_NAME_THRESHOLD,
) -> bool:
    """Normalized similarity compared against the boosted threshold."""
    similarity = normalized_similarity(name1, name2)
    return similarity >= adjusted_threshold(name1, name2, base_threshold)


# ======================================================================================
# Lookup & Diagnostics
# ======================================================================================


def combined_fuzzy_match(name1: Optional[str], name2: Optional[str]) -> NameScores:
    """Raw Jaro-Winkler and token-set scores of two names, and the higher of the two."""
    character = jaro_winkler(name1, name2)
    token_set = token_set_ratio(name1, name2)
    return NameScores(
        character_similarity=character,
        token_set_similarity=token_set,
        combined=max(character, token_set),
    )


def is_match(
    name1: Optional[str],
    name2: Optional[str],
    threshold: float = DEFAULT_NAME_THRESHOLD,
) -> bool:
    """Plain Jaro-Winkler comparison of two raw names."""
    return jaro_winkler(name1, name2) >= threshold


def find_best_matches(
    query: Optional[str],
    candidates: Sequence[Optional[str]],
    threshold: float = DEFAULT_NAME_THRESHOLD,
    limit: int = 3,
) -> List[BestMatch]:
    """
    Finds the candidates most similar to a query name.

    Empty candidates are skipped. Ties keep their original order.

    Args:
        query: The name to look up.
        candidates: Names to search.
        threshold: Minimum Jaro-Winkler score to keep a candidate.
        limit: Maximum number of results.

    Returns:
        Up to `limit` BestMatch tuples, best score first.
    """
    if not query or not candidates:
        return []

    matches = []
    for index, candidate in enumerate(candidates):
        if not candidate:
            continue
        score = jaro_winkler(query, candidate)
        if score >= threshold:
            matches.append(BestMatch(candidate=candidate, score=score, index=index))

    matches.sort(key=lambda match: match.score, reverse=True)
    return matches[:limit]


def match_details(
    name1: str,
    name2: str,
    base_threshold: float = DEFAULT_NAME_THRESHOLD,
) -> MatchDetails:
    """Explains a smart-match decision step by step."""
    normalized1 = normalize_name(name1)
    normalized2 = normalize_name(name2)
    normalized_score = jaro_winkler(normalized1, normalized2)
    overlap = word_overlap(normalized1, normalized2)
    threshold = boosted_threshold(overlap, base_threshold)

    return MatchDetails(
        first_original=name1,
        second_original=name2,
        first_normalized=normalized1,
        second_normalized=normalized2,
        raw_similarity=jaro_winkler(name1, name2),
        normalized_similarity=normalized_score,
        word_overlap=overlap,
        base_threshold=base_threshold,
        adjusted_threshold=threshold,
        is_match=normalized_score >= threshold,
    )


def multi_signal_match(
    distance_m: Optional[float],
    name_similarity: float,
    region_match: bool,
    gps_threshold: float = 50.0,
) -> MultiSignalScore:
    """
    Scores a candidate pair out of 100 from three independent signals.

    GPS proximity contributes up to 40 points, falling linearly to zero at
    `gps_threshold`; name similarity up to 35; a matching region 25. Totals
    of 80 and above are 'high' confidence, 60 and above 'medium'.

    Args:
        distance_m: Distance between the records, or None if unknown.
        name_similarity: Name similarity in [0, 1].
        region_match: Whether both records are in the same region.
        gps_threshold: Distance in meters at which the GPS score reaches zero.

    Returns:
        A MultiSignalScore with components rounded to two decimals.
    """
    gps_score = 0.0
    if distance_m is not None and gps_threshold > 0 and distance_m <= gps_threshold:
        gps_score = GPS_WEIGHT * (1 - distance_m / gps_threshold)

    name_score = name_similarity * NAME_WEIGHT
    region_score = REGION_WEIGHT if region_match else 0.0
    total = gps_score + name_score + region_score

    if total >= 80:
        confidence = 'high'
    elif total >= 60:
        confidence = 'medium'
    else:
        confidence = 'low'

    return MultiSignalScore(
        score=round(total, 2),
        gps=round(gps_score, 2),
        name=round(name_score, 2),
        region=region_score,
        confidence=confidence,
    )
