import pytest

from place_resolver.config import DEFAULT_DEDUP_CONFIG
from place_resolver.evaluator import MatchEvaluator, evaluate_pair, evaluate_profiles, profile_name
from place_resolver.models import MatchType
from place_resolver.scorer import score_names

# Latitude offsets from the base point, in degrees.
ONE_METER = 0.000009
TEN_METERS = 0.00009
THIRTY_METERS = 0.00027
FORTY_METERS = 0.00036
ONE_DEGREE = 1.0


def test_identical_records_match_on_both_signals(make_record) -> None:
    result = evaluate_pair(make_record('Union Station'), make_record('Union Station'))

    assert result.match_type is MatchType.BOTH
    assert result.confidence == 95
    assert result.distance_m == 0.0
    assert result.is_match


def test_blocking_conflict_vetoes_an_otherwise_perfect_pair(make_record) -> None:
    result = evaluate_pair(make_record('North Factory'), make_record('South Factory'))

    assert result.match_type is MatchType.NONE
    assert result.confidence == 0
    assert result.is_blocked
    assert result.blocking.category == 'direction'
    assert result.blocking.details == 'north vs south'


def test_word_overlap_boost_lets_shared_word_names_match(make_record) -> None:
    first = make_record('Union Station')
    second = make_record('Union Depot', lat=43.0 + TEN_METERS)

    boosted = evaluate_pair(first, second)
    plain = evaluate_pair(
        first, second, DEFAULT_DEDUP_CONFIG.model_copy(update={'use_smart_match': False})
    )

    assert boosted.match_type is MatchType.BOTH
    assert boosted.confidence == 95
    # Without the boost the name score only supports the GPS match.
    assert plain.match_type is MatchType.BOTH
    assert plain.confidence == 75


def test_generic_names_merge_only_when_very_close(make_record) -> None:
    close = evaluate_pair(make_record('House'), make_record('Building', lat=43.0 + ONE_METER))
    farther = evaluate_pair(make_record('House'), make_record('Building', lat=43.0 + FORTY_METERS))

    assert close.is_generic
    assert close.match_type is MatchType.GPS
    assert close.confidence == 70
    assert farther.match_type is MatchType.NONE


def test_unnamed_records(make_record) -> None:
    close = evaluate_pair(make_record(None), make_record(None, lat=43.0 + ONE_METER))
    within_gps = evaluate_pair(make_record(''), make_record('  ', lat=43.0 + THIRTY_METERS))
    far = evaluate_pair(make_record(None), make_record(None, lat=43.0 + ONE_DEGREE))

    # Empty names are generic, so very close unnamed records use the generic rule.
    assert (close.match_type, close.confidence) == (MatchType.GPS, 70)
    assert (within_gps.match_type, within_gps.confidence) == (MatchType.GPS, 60)
    assert within_gps.name_similarity == 0.0
    assert far.match_type is MatchType.NONE


def test_name_only_matches_depend_on_score_band(make_record) -> None:
    strong = evaluate_pair(
        make_record('Bethlehem Steel Works'),
        make_record('Bethlehem Steel Works', lat=43.0 + ONE_DEGREE),
    )
    good = evaluate_pair(make_record('Point 0'), make_record('Point 1', lat=43.0 + ONE_DEGREE))

    assert (strong.match_type, strong.confidence) == (MatchType.NAME, 80)
    assert (good.match_type, good.confidence) == (MatchType.NAME, 65)


def test_require_gps_disables_name_only_matches(make_record) -> None:
    config = DEFAULT_DEDUP_CONFIG.model_copy(update={'require_gps': True})

    result = evaluate_pair(
        make_record('Bethlehem Steel Works'),
        make_record('Bethlehem Steel Works', lat=43.0 + ONE_DEGREE),
        config,
    )

    assert result.match_type is MatchType.NONE


def test_supporting_name_score_with_gps_match(make_record) -> None:
    config = DEFAULT_DEDUP_CONFIG.model_copy(
        update={'use_smart_match': False, 'name_threshold': 0.99}
    )

    result = evaluate_pair(
        make_record('Point 0'), make_record('Point 1', lat=43.0 + TEN_METERS), config
    )

    assert result.match_type is MatchType.BOTH
    assert result.confidence == 75


def test_unrelated_names_far_apart_do_not_match(make_record) -> None:
    result = evaluate_pair(make_record('Unrelated'), make_record('Union Station', lat=44.0))

    assert result.match_type is MatchType.NONE
    assert result.confidence == 0


def test_evaluate_pair_is_symmetric(make_record) -> None:
    first = make_record('Union Station')
    second = make_record('Union Depot', lat=43.0 + TEN_METERS)

    forward = evaluate_pair(first, second)
    backward = evaluate_pair(second, first)

    assert forward.match_type is backward.match_type
    assert forward.confidence == backward.confidence
    assert forward.distance_m == pytest.approx(backward.distance_m)


def test_match_evaluator_copies_indices(make_record) -> None:
    evaluator = MatchEvaluator(DEFAULT_DEDUP_CONFIG)

    result = evaluator.evaluate(make_record('Mill'), make_record('Mill'), 4, 9)

    assert (result.first_index, result.second_index) == (4, 9)
    assert 0 <= result.confidence <= 100


def test_profile_name_trims_and_precomputes_features() -> None:
    profile = profile_name('  North PRR Station ')
    unnamed = profile_name('   ')

    assert profile.name == 'North PRR Station'
    assert profile.normalized == 'north pennsylvania railroad station'
    assert profile.tokens == ('north', 'prr', 'station')
    assert profile.blocking.directions == ('north',)
    assert not profile.is_generic
    assert unnamed.name is None
    assert unnamed.normalized == ''
    assert unnamed.is_generic


@pytest.mark.parametrize(
    'name1, name2',
    [
        ('Union Station', 'Union Depot'),
        ('PRR Station', 'Pennsylvania Railroad Depot'),
        ('Union Station - Lockport', 'Lockport Union Train Station'),
        ('Erie Canal', 'Union Depot'),
    ],
)
def test_profiled_scores_agree_with_score_names(make_record, name1, name2) -> None:
    first, second = make_record(name1), make_record(name2, lat=43.0 + TEN_METERS)
    expected = score_names(name1, name2, normalize=True)

    result = evaluate_profiles(first, second, profile_name(name1), profile_name(name2))

    assert result == evaluate_pair(first, second)
    assert result.name_similarity == expected.character_similarity
    assert result.token_set_similarity == expected.token_set_similarity
