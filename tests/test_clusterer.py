import random

import pytest

from place_resolver import evaluator
from place_resolver.clusterer import PlaceClusterer, UnionFind, cluster_records
from place_resolver.config import DEFAULT_DEDUP_CONFIG
from place_resolver.models import MatchType
from place_resolver.utils.geo import max_pairwise_distance

THIRTY_THREE_METERS = 0.0003


def _partition(groups):
    return [group.members for group in groups]


def test_union_find_tracks_roots_and_sizes() -> None:
    union_find = UnionFind(5)

    assert union_find.union(0, 1) == 0
    assert union_find.union(2, 3) == 2
    assert union_find.union(3, 1) == 2

    assert union_find.connected(0, 3)
    assert not union_find.connected(0, 4)
    assert union_find.cluster_size(1) == 4
    assert union_find.cluster_size(4) == 1


def test_union_find_handles_long_chains() -> None:
    union_find = UnionFind(5000)
    for index in range(1, 5000):
        union_find.parent[index] = index - 1

    assert union_find.find(4999) == 0
    assert union_find.parent[4999] == 0


def test_empty_batch_yields_no_groups() -> None:
    assert cluster_records([]) == []


def test_non_record_input_is_rejected(make_record) -> None:
    with pytest.raises(TypeError):
        cluster_records([make_record('Union Station'), {'name': 'Union Depot'}])


def test_invalid_worker_count_is_rejected() -> None:
    with pytest.raises(ValueError):
        PlaceClusterer(DEFAULT_DEDUP_CONFIG, n_jobs=0)


def test_single_record_is_a_singleton(make_record) -> None:
    groups = cluster_records([make_record('Union Station')])

    assert len(groups) == 1
    assert groups[0].members == (0,)
    assert groups[0].confidence == 100


def test_nearby_alias_variants_are_grouped(make_record) -> None:
    records = [
        make_record('Union Station'),
        make_record('Erie Canal Lock', lat=44.0),
        make_record('Union Depot', lat=43.0001),
    ]

    groups = cluster_records(records)

    assert _partition(groups) == [(0, 2), (1,)]
    assert groups[0].representative == 0
    assert groups[0].primary_name == 'Union Station'
    assert groups[0].alternate_names == ('Union Depot',)
    assert groups[0].confidence == 95
    assert [match.match_type for match in groups[0].matches] == [MatchType.BOTH]


def test_groups_partition_every_index(make_record) -> None:
    records = [
        make_record('Union Station'),
        make_record('House', lat=43.00001),
        make_record('Bethlehem Steel Works', lat=40.6),
        make_record('Bethlehem Steel Plant', lat=40.6001),
        make_record(None, lat=41.0),
        make_record('North Factory', lat=42.0),
        make_record('South Factory', lat=42.0),
    ]

    groups = cluster_records(records)
    indices = sorted(index for group in groups for index in group.members)

    assert indices == list(range(len(records)))
    assert all(list(group.members) == sorted(group.members) for group in groups)
    assert [group.members[0] for group in groups] == sorted(group.members[0] for group in groups)
    # Opposite directions never merge.
    assert not any({5, 6} <= set(group.members) for group in groups)


def test_max_cluster_size_caps_groups(make_record) -> None:
    config = DEFAULT_DEDUP_CONFIG.model_copy(update={'max_cluster_size': 2})
    records = [make_record('Union Station') for _ in range(3)]

    groups = cluster_records(records, config)

    assert _partition(groups) == [(0, 1), (2,)]


def test_max_cluster_diameter_stops_chaining(make_record) -> None:
    config = DEFAULT_DEDUP_CONFIG.model_copy(update={'max_cluster_diameter': 50.0})
    records = [
        make_record('Erie Canal Lock'),
        make_record('Erie Canal Lock', lat=43.0 + THIRTY_THREE_METERS),
        make_record('Erie Canal Lock', lat=43.0 + 2 * THIRTY_THREE_METERS),
    ]

    capped = cluster_records(records, config)
    uncapped = cluster_records(records)

    assert _partition(capped) == [(0, 1), (2,)]
    assert _partition(uncapped) == [(0, 1, 2)]


def test_stronger_matches_are_merged_first(make_record) -> None:
    # Record 0 is 400 m away and matches the others on name alone (80); (1, 2) score 95.
    # With room for only two members, the stronger pair wins.
    config = DEFAULT_DEDUP_CONFIG.model_copy(update={'max_cluster_size': 2})
    records = [
        make_record('Erie Canal Lock', lat=43.0036),
        make_record('Erie Canal Lock'),
        make_record('Erie Canal Lock', lat=43.0001),
    ]

    groups = cluster_records(records, config)

    assert _partition(groups) == [(0,), (1, 2)]


def test_min_confidence_filters_weak_matches(make_record) -> None:
    records = [make_record('House'), make_record('Building', lat=43.00001)]
    strict = DEFAULT_DEDUP_CONFIG.model_copy(update={'min_confidence': 80.0})

    assert _partition(cluster_records(records)) == [(0, 1)]
    assert _partition(cluster_records(records, strict)) == [(0,), (1,)]


def test_clustering_is_deterministic(make_record) -> None:
    records = [
        make_record(f'Point {index}', lat=43.0 + index * 0.00002) for index in range(8)
    ]

    first = cluster_records(records)
    second = cluster_records(records)

    assert first == second


def test_parallel_evaluation_matches_sequential(make_record) -> None:
    records = [
        make_record('Union Station'),
        make_record('Union Depot', lat=43.0001),
        make_record('Erie Canal Lock', lat=44.0),
        make_record('Erie Canal Lock', lat=44.0001),
        make_record('House', lat=42.0),
        make_record('Building', lat=42.00001),
        make_record('Unrelated', lat=41.0),
    ]

    sequential = PlaceClusterer(DEFAULT_DEDUP_CONFIG, n_jobs=1)
    parallel = PlaceClusterer(DEFAULT_DEDUP_CONFIG, n_jobs=2)

    assert parallel.find_candidates(records) == sequential.find_candidates(records)
    assert parallel.cluster(records) == sequential.cluster(records)


def test_zero_max_cluster_size_leaves_every_record_alone(make_record) -> None:
    config = DEFAULT_DEDUP_CONFIG.model_copy(update={'max_cluster_size': 0})
    records = [make_record('Union Station') for _ in range(3)]

    assert _partition(cluster_records(records, config)) == [(0,), (1,), (2,)]


def test_name_features_are_computed_once_per_record(make_record, monkeypatch) -> None:
    calls = []
    original = evaluator.extract_blocking_words

    def counting(name):
        calls.append(name)
        return original(name)

    monkeypatch.setattr(evaluator, 'extract_blocking_words', counting)
    records = [
        make_record(f'Erie Canal Lock {index}', lat=43.0 + index * 0.0001) for index in range(12)
    ]

    PlaceClusterer(DEFAULT_DEDUP_CONFIG).find_candidates(records)

    assert len(calls) == len(records)


def _random_batch(make_record, seed: int, count: int):
    rng = random.Random(seed)
    names = [
        'Union Station', 'Union Depot', 'Erie Canal Lock', 'Erie Canal Lock 3',
        'North Mill', 'South Mill', 'House', 'Factory', 'Bethlehem Steel Works',
        'Bethlehem Steel Plant', 'St. Marys Hospital', 'Saint Marys Hosp.', None, '',
    ]
    centers = [(43.0, -77.0), (43.002, -77.001), (42.9, -78.8), (40.6, -75.4)]
    records = []
    for _ in range(count):
        lat, lon = rng.choice(centers)
        records.append(
            make_record(
                rng.choice(names),
                lat=lat + rng.uniform(-0.001, 0.001),
                lon=lon + rng.uniform(-0.001, 0.001),
            )
        )
    return records


@pytest.mark.parametrize('seed', [7, 2024])
def test_random_batches_keep_partition_and_caps(make_record, seed) -> None:
    config = DEFAULT_DEDUP_CONFIG.model_copy(
        update={'max_cluster_size': 5, 'max_cluster_diameter': 150.0}
    )
    records = _random_batch(make_record, seed, 100)

    groups = cluster_records(records, config)

    indices = sorted(index for group in groups for index in group.members)
    assert indices == list(range(len(records)))
    assert any(group.size > 1 for group in groups)
    for group in groups:
        assert group.size <= config.max_cluster_size
        diameter = max_pairwise_distance(
            [records[index].latitude for index in group.members],
            [records[index].longitude for index in group.members],
        )
        assert diameter <= config.max_cluster_diameter + 1e-6

    assert cluster_records(records, config) == groups
