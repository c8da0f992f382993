import pandas as pd
import pytest

from place_resolver import DEFAULT_DEDUP_CONFIG, MatchType, PlaceResolver, ResolverConfig
from place_resolver.config import ColumnConfig, save_config


@pytest.fixture
def resolver() -> PlaceResolver:
    return PlaceResolver(config=ResolverConfig(output={'log_level': 'WARNING'}))


def test_config_path_and_object_are_mutually_exclusive(tmp_path) -> None:
    path = tmp_path / 'config.yaml'
    save_config(ResolverConfig(), path)

    with pytest.raises(ValueError):
        PlaceResolver(str(path), config=ResolverConfig())


def test_resolver_loads_config_from_yaml(tmp_path) -> None:
    path = tmp_path / 'config.yaml'
    save_config(ResolverConfig(dedup={'gps_threshold': 75}, n_jobs=1), path)

    resolver = PlaceResolver(str(path))

    assert resolver.config.dedup.gps_threshold == 75
    assert resolver.clusterer.config.gps_threshold == 75


def test_default_scenario(resolver, make_record) -> None:
    records = [
        make_record('Union Station', lat=43.0, lon=-77.0),
        make_record('Union Depot', lat=43.0001, lon=-77.0001),
        make_record('Unrelated', lat=44.0, lon=-78.0),
    ]

    result = resolver.deduplicate(records)

    assert result.original_count == 3
    assert result.deduped_count == 2
    assert result.reduction_percent == 33
    assert result.singletons == (2,)
    assert result.groups[0].members == (0, 1)
    assert result.groups[0].confidence == 95
    assert result.groups[0].matches[0].match_type is MatchType.BOTH


def test_name_variants_at_the_same_site(resolver, make_record) -> None:
    records = [
        make_record('Bethlehem Steel Works', lat=40.6),
        make_record('Bethlehem Steel Plant', lat=40.6001),
    ]

    result = resolver.deduplicate(records)
    merged = resolver.merge(records, result)

    assert result.deduped_count == 1
    assert result.groups[0].matches[0].match_type is MatchType.BOTH
    assert merged[0].name == 'Bethlehem Steel Works'
    assert merged[0].alternate_names == ('Bethlehem Steel Plant',)


def test_evaluate_uses_configured_thresholds(make_record) -> None:
    config = ResolverConfig(
        dedup=DEFAULT_DEDUP_CONFIG.model_copy(update={'require_gps': True}),
        output={'log_level': 'WARNING'},
    )
    resolver = PlaceResolver(config=config)

    result = resolver.evaluate(
        make_record('Bethlehem Steel Works'), make_record('Bethlehem Steel Works', lat=44.0)
    )

    assert result.match_type is MatchType.NONE


def test_merge_without_result_runs_deduplication(resolver, make_record) -> None:
    records = [make_record('Union Station'), make_record('Union Station', lat=43.00001)]

    merged = resolver.merge(records)

    assert len(merged) == 1
    assert merged[0].duplicate_count == 1
    assert resolver.result_.deduped_count == 1


def test_reports_require_a_run(resolver) -> None:
    with pytest.raises(RuntimeError):
        resolver.get_review_dataframe()
    with pytest.raises(RuntimeError):
        resolver.generate_report()


def test_reports_after_a_run(resolver, make_record) -> None:
    records = [make_record('Union Station'), make_record('Union Depot', lat=43.0001)]
    resolver.deduplicate(records)

    review_df = resolver.get_review_dataframe()
    report = resolver.generate_report()

    assert review_df['group_id'].tolist() == [0, 0]
    assert report['summary']['duplicates_removed'] == 1


def test_resolve_frame_merges_rows() -> None:
    config = ResolverConfig(
        columns=ColumnConfig(name_col='title'),
        output={'log_level': 'WARNING'},
    )
    resolver = PlaceResolver(config=config)
    df = pd.DataFrame(
        {
            'title': ['Union Station', 'Union Station', 'Erie Canal Lock'],
            'description': ['Built 1890', 'Demolished 1960', None],
            'latitude': [43.0, 43.0001, 44.0],
            'longitude': [-77.0, -77.0, -76.0],
            'region': ['NY', None, None],
            'source': ['kml', 'gpx', 'kml'],
        }
    )

    output = resolver.resolve_frame(df)

    assert len(output) == 2
    first = output.iloc[0]
    assert first['title'] == 'Union Station'
    assert first['description'] == 'Built 1890 | Demolished 1960'
    assert first['latitude'] == pytest.approx(43.00005)
    assert first['region'] == 'NY'
    assert first['source'] == 'gpx'
    assert first['member_indices'] == [0, 1]
    assert first['duplicate_count'] == 1
    assert output.iloc[1]['title'] == 'Erie Canal Lock'
    assert list(output.columns[-4:]) == [
        'member_indices', 'alternate_names', 'confidence', 'duplicate_count'
    ]


def test_resolve_frame_requires_coordinates(resolver) -> None:
    df = pd.DataFrame({'name': ['Union Station'], 'latitude': [43.0]})

    with pytest.raises(ValueError):
        resolver.resolve_frame(df)
