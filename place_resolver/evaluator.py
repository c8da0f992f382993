# place_resolver/evaluator.py
"""
Pairwise match evaluation.

`evaluate_pair` combines the four independent signals (distance, name
similarity, blocking conflicts and generic-name flags) into a single verdict
for one record pair. The rules are evaluated in a fixed order and the first
one that applies wins; the verdict is not simply the highest-confidence rule.

    1. Blocking conflict                               -> none, 0
    2. Within GPS threshold and names match            -> both, 95
    3. Within GPS threshold, a generic name, and
       within the stricter generic GPS threshold       -> gps,  70
    4. Within GPS threshold and both names empty       -> gps,  60
    5. Names match and GPS not required                -> name, 80 / 65 / none
    6. Within GPS threshold and name score >= 0.70     -> both, 75
    7. Otherwise                                       -> none, 0
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .blocking import BlockingWords, extract_blocking_words, find_conflict
from .config import DEFAULT_DEDUP_CONFIG, DedupConfig
from .generic import is_generic_name
from .models import MatchResult, MatchType, PointRecord
from .normalizer import normalize_name
from .scorer import boosted_threshold, word_overlap
from .utils.geo import haversine_distance
from .utils.similarity import jaro_winkler, token_set_similarity
from .utils.text import tokenize

# Set up a logger for this module.
logger = logging.getLogger(__name__)

STRONG_NAME_SCORE = 0.95
GOOD_NAME_SCORE = 0.90
SUPPORTING_NAME_SCORE = 0.70

CONFIDENCE_GPS_AND_NAME = 95.0
CONFIDENCE_STRONG_NAME = 80.0
CONFIDENCE_GPS_WITH_SUPPORTING_NAME = 75.0
CONFIDENCE_GENERIC_GPS = 70.0
CONFIDENCE_GOOD_NAME = 65.0
CONFIDENCE_UNNAMED_GPS = 60.0


@dataclass(frozen=True, slots=True)
class NameProfile:
    """
    Everything the matcher needs from one record's name.

    Attributes:
        name: The trimmed name, or None if the record is unnamed.
        normalized: Alias-normalized form; empty for an unnamed record.
        tokens: `tokenize` output of the trimmed name.
        blocking: Blocking markers of the trimmed name.
        is_generic: Whether the name is too generic to match on alone.
    """

    name: Optional[str]
    normalized: str
    tokens: Tuple[str, ...]
    blocking: BlockingWords
    is_generic: bool


def _clean_name(name: Optional[str]) -> Optional[str]:
    if name is None:
        return None
    return name.strip() or None


def profile_name(name: Optional[str]) -> NameProfile:
    """Computes the name features of one record."""
    cleaned = _clean_name(name)
    return NameProfile(
        name=cleaned,
        normalized=normalize_name(cleaned) if cleaned else '',
        tokens=tuple(tokenize(cleaned)),
        blocking=extract_blocking_words(cleaned),
        is_generic=is_generic_name(cleaned),
    )


def _name_threshold(profile1: NameProfile, profile2: NameProfile, config: DedupConfig) -> float:
    """Returns the name threshold for this pair, boosted when enabled and warranted."""
    if not config.use_smart_match:
        return config.name_threshold
    overlap = word_overlap(profile1.normalized, profile2.normalized)
    return boosted_threshold(
        overlap, config.name_threshold, config.word_overlap_boost, config.min_boosted_threshold
    )


def evaluate_profiles(
    first: PointRecord,
    second: PointRecord,
    profile1: NameProfile,
    profile2: NameProfile,
    config: DedupConfig = DEFAULT_DEDUP_CONFIG,
    *,
    first_index: int = 0,
    second_index: int = 1,
) -> MatchResult:
    """
    `evaluate_pair` for records whose name profiles were computed up front.

    Args:
        first: The first record.
        second: The second record.
        profile1: `profile_name(first.name)`.
        profile2: `profile_name(second.name)`.
        config: Matching thresholds.
        first_index: Position of `first` in its batch, copied into the result.
        second_index: Position of `second` in its batch, copied into the result.

    Returns:
        A MatchResult with the match type and a confidence in [0, 100].
    """
    distance = haversine_distance(first.latitude, first.longitude, second.latitude, second.longitude)
    name1 = profile1.name
    name2 = profile2.name

    if name1 and name2:
        # Same canonical order as `score_names`, so the scores are symmetric.
        low, high = (profile1, profile2) if name1 <= name2 else (profile2, profile1)
        if config.use_smart_match:
            name_similarity = jaro_winkler(low.normalized, high.normalized, config.prefix_scale)
        else:
            name_similarity = jaro_winkler(low.name, high.name, config.prefix_scale)
        token_set_score = token_set_similarity(low.tokens, high.tokens, config.prefix_scale)
        combined = max(name_similarity, token_set_score)
        name_match = combined >= _name_threshold(profile1, profile2, config)
    else:
        name_similarity = token_set_score = combined = 0.0
        name_match = False

    blocking = find_conflict(profile1.blocking, profile2.blocking)
    is_generic = profile1.is_generic or profile2.is_generic
    gps_match = distance <= config.gps_threshold

    # --- Decision rules, first applicable wins ---
    match_type = MatchType.NONE
    confidence = 0.0

    if blocking is not None:
        pass
    elif gps_match and name_match:
        match_type, confidence = MatchType.BOTH, CONFIDENCE_GPS_AND_NAME
    elif gps_match and is_generic and distance <= config.generic_gps_threshold:
        match_type, confidence = MatchType.GPS, CONFIDENCE_GENERIC_GPS
    elif gps_match and not name1 and not name2:
        match_type, confidence = MatchType.GPS, CONFIDENCE_UNNAMED_GPS
    elif name_match and not config.require_gps:
        if combined >= STRONG_NAME_SCORE:
            match_type, confidence = MatchType.NAME, CONFIDENCE_STRONG_NAME
        elif combined >= GOOD_NAME_SCORE:
            match_type, confidence = MatchType.NAME, CONFIDENCE_GOOD_NAME
    elif gps_match and combined >= SUPPORTING_NAME_SCORE:
        match_type, confidence = MatchType.BOTH, CONFIDENCE_GPS_WITH_SUPPORTING_NAME

    return MatchResult(
        first_index=first_index,
        second_index=second_index,
        distance_m=distance,
        name_similarity=name_similarity,
        token_set_similarity=token_set_score,
        blocking=blocking,
        is_generic=is_generic,
        match_type=match_type,
        confidence=confidence,
    )


def evaluate_pair(
    first: PointRecord,
    second: PointRecord,
    config: DedupConfig = DEFAULT_DEDUP_CONFIG,
    *,
    first_index: int = 0,
    second_index: int = 1,
) -> MatchResult:
    """
    Decides whether two records describe the same place.

    Name scores are only computed when both records are named; otherwise
    they are 0.0 and the decision rests on distance and the unnamed-pair rule.

    Args:
        first: The first record.
        second: The second record.
        config: Matching thresholds.
        first_index: Position of `first` in its batch, copied into the result.
        second_index: Position of `second` in its batch, copied into the result.

    Returns:
        A MatchResult with the match type and a confidence in [0, 100].
    """
    return evaluate_profiles(
        first,
        second,
        profile_name(first.name),
        profile_name(second.name),
        config,
        first_index=first_index,
        second_index=second_index,
    )


class MatchEvaluator:
    """
    Applies `evaluate_pair` with a fixed configuration.

    Attributes:
        config (DedupConfig): The matching thresholds used for every pair.
    """

    def __init__(self, config: DedupConfig = DEFAULT_DEDUP_CONFIG):
        self.config = config

    def evaluate(
        self,
        first: PointRecord,
        second: PointRecord,
        first_index: int = 0,
        second_index: int = 1,
    ) -> MatchResult:
        """Evaluates one pair and logs the verdict at DEBUG level."""
        result = evaluate_pair(
            first, second, self.config, first_index=first_index, second_index=second_index
        )
        if result.is_blocked:
            logger.debug(
                f"Pair ({first_index}, {second_index}) blocked by {result.blocking.category} "
                f"conflict: {result.blocking.details}"
            )
        else:
            logger.debug(
                f"Pair ({first_index}, {second_index}): {result.match_type.value} "
                f"confidence={result.confidence:.0f} distance={result.distance_m:.1f}m "
                f"name={result.combined_score:.3f}"
            )
        return result
