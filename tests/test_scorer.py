import pytest

from place_resolver.normalizer import normalize_name
from place_resolver.scorer import (
    adjusted_threshold,
    boosted_threshold,
    combined_fuzzy_match,
    find_best_matches,
    is_match,
    is_smart_match,
    match_details,
    multi_signal_match,
    score_names,
    word_overlap,
)


def test_score_names_combined_is_the_max_of_both_algorithms() -> None:
    scores = score_names('Union Station - Lockport', 'Lockport Union Train Station')

    assert scores.token_set_similarity == 1.0
    assert scores.character_similarity < 1.0
    assert scores.combined == 1.0


def test_score_names_is_exactly_symmetric() -> None:
    forward = score_names('Union Station', 'Union Depot', normalize=True)
    backward = score_names('Union Depot', 'Union Station', normalize=True)

    assert forward == backward


def test_score_names_of_two_empty_names_is_one() -> None:
    assert score_names('', '').combined == 1.0
    assert score_names(None, None).combined == 1.0


def test_normalized_scoring_sees_through_aliases() -> None:
    raw = score_names('PRR Station', 'Pennsylvania Railroad Depot')
    normalized = score_names('PRR Station', 'Pennsylvania Railroad Depot', normalize=True)

    assert normalize_name('PRR Station') == 'pennsylvania railroad station'
    assert raw.combined < 0.85
    assert normalized.character_similarity > 0.85
    assert normalized.character_similarity == pytest.approx(0.935, abs=1e-3)


def test_word_overlap_with_one_shared_word() -> None:
    overlap = word_overlap(normalize_name('Union Station'), normalize_name('Union Depot'))

    assert overlap.shared_words == ('union',)
    assert overlap.total_unique_words == 3
    assert overlap.overlap_ratio == pytest.approx(1 / 3)
    assert overlap.should_boost


def test_word_overlap_below_minimum_ratio_does_not_boost() -> None:
    overlap = word_overlap('alpha beta gamma', 'alpha delta epsilon')

    assert overlap.shared_words == ('alpha',)
    assert overlap.overlap_ratio == pytest.approx(0.2)
    assert not overlap.should_boost


def test_word_overlap_ignores_single_character_words() -> None:
    overlap = word_overlap('a mill', 'a factory')

    assert overlap.shared_words == ()
    assert not overlap.should_boost


def test_word_overlap_of_empty_name_is_empty() -> None:
    overlap = word_overlap('', 'union station')

    assert overlap.total_unique_words == 0
    assert not overlap.should_boost


def test_boosted_threshold_respects_the_floor_and_never_raises() -> None:
    boost = word_overlap('union station', 'union depot')
    no_boost = word_overlap('erie canal', 'union depot')

    assert boosted_threshold(boost, 0.85) == pytest.approx(0.75)
    assert boosted_threshold(boost, 0.75) == pytest.approx(0.70)
    assert boosted_threshold(boost, 0.60) == pytest.approx(0.60)
    assert boosted_threshold(no_boost, 0.85) == 0.85


def test_adjusted_threshold_normalizes_first() -> None:
    assert adjusted_threshold('PRR Sta', 'Pennsylvania Railroad Depot') == pytest.approx(0.75)
    assert adjusted_threshold('Erie Canal', 'Union Depot') == 0.85


def test_smart_match_accepts_alias_variants() -> None:
    assert is_smart_match('PRR Station', 'Pennsylvania Railroad Depot')
    assert not is_smart_match('Unrelated', 'Union Station')


def test_match_details_explains_the_decision() -> None:
    details = match_details('PRR Station', 'Pennsylvania Railroad Depot')

    assert details.first_normalized == 'pennsylvania railroad station'
    assert details.second_normalized == 'pennsylvania railroad depot'
    assert details.word_overlap.shared_words == ('pennsylvania', 'railroad')
    assert details.base_threshold == 0.85
    assert details.adjusted_threshold == pytest.approx(0.75)
    assert details.is_match
    assert details.raw_similarity < details.normalized_similarity


def test_is_match_compares_raw_jaro_winkler_to_the_threshold() -> None:
    assert is_match('Union Station', 'union station')
    assert is_match('Union Station', 'Union Statoin')
    assert not is_match('Union Station', 'Union Depot')
    assert is_match('Union Station', 'Union Depot', threshold=0.80)
    # Aliases are not expanded.
    assert not is_match('PRR Station', 'Pennsylvania Railroad Station')


def test_find_best_matches_orders_by_score_and_skips_empty_candidates() -> None:
    candidates = ['Union Statoin', 'Unrelated', None, 'Union Station']

    matches = find_best_matches('Union Station', candidates)

    assert [match.index for match in matches] == [3, 0]
    assert matches[0].score == 1.0


def test_find_best_matches_respects_limit() -> None:
    candidates = ['Union Station'] * 5

    assert len(find_best_matches('Union Station', candidates, limit=2)) == 2
    assert find_best_matches('', candidates) == []


def test_multi_signal_match_bands() -> None:
    perfect = multi_signal_match(0.0, 1.0, True)
    gps_only_half = multi_signal_match(25.0, 1.0, False, gps_threshold=50.0)
    no_gps = multi_signal_match(None, 0.5, False)

    assert perfect.score == 100.0
    assert perfect.confidence == 'high'
    assert gps_only_half.gps == 20.0
    assert gps_only_half.score == 55.0
    assert gps_only_half.confidence == 'low'
    assert no_gps.score == 17.5
    assert no_gps.gps == 0.0


def test_combined_fuzzy_match_handles_reordered_words() -> None:
    scores = combined_fuzzy_match('Union Station', 'Station Union')

    assert scores.token_set_similarity == 1.0
    assert scores.combined == 1.0
    assert scores.character_similarity < 1.0
