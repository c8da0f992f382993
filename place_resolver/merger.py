# place_resolver/merger.py
"""
Group materialization: turns final clusters into duplicate groups and merged
output records.

A cluster is just a set of record indices. This module resolves its display
name (longest distinct spelling wins, the others become alternates), its
centroid and its confidence, and can fold the member records into one
`MergedPlace` ready to be handed to an output adapter.
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .models import DedupResult, DuplicateGroup, MatchResult, MergedPlace, PointRecord
from .utils.geo import centroid, us_state_from_coords
from .utils.text import unique_in_order

# Set up a logger for this module.
logger = logging.getLogger(__name__)

SINGLETON_CONFIDENCE = 100.0


def resolve_names(names: Iterable[Optional[str]]) -> Tuple[Optional[str], Tuple[str, ...]]:
    """
    Picks a primary name and alternates from the names of a group.

    Names are deduplicated case-insensitively, keeping the longest original
    spelling per key, then ordered by length (longest first, ties in member
    order).

    Args:
        names: Member names in member order; empty values are ignored.

    Returns:
        (primary_name, alternate_names). The primary is None if no member
        has a name.
    """
    by_key: Dict[str, str] = {}
    for name in names:
        if not name:
            continue
        key = name.lower().strip()
        if not key:
            continue
        current = by_key.get(key)
        if current is None or len(name) > len(current):
            by_key[key] = name

    ordered = sorted(by_key.values(), key=len, reverse=True)
    if not ordered:
        return None, ()
    return ordered[0], tuple(ordered[1:])


def group_confidence(matches: Sequence[MatchResult]) -> float:
    """Mean confidence of the matches that formed a group, 100 for none."""
    if not matches:
        return SINGLETON_CONFIDENCE
    return sum(match.confidence for match in matches) / len(matches)


def reduction_percent(original_count: int, deduped_count: int) -> int:
    """Percentage of records removed, rounded half up; 0 for an empty batch."""
    if original_count == 0:
        return 0
    return int(math.floor((1 - deduped_count / original_count) * 100 + 0.5))


class GroupMaterializer:
    """
    Builds duplicate groups from clusters and folds them into merged places.

    Attributes:
        separator (str): Joins the distinct descriptions of a group.
        infer_region (bool): Fill a missing region from the group centroid.
    """

    def __init__(self, separator: str = ' | ', infer_region: bool = False):
        self.separator = separator
        self.infer_region = infer_region

    def build_group(
        self,
        records: Sequence[PointRecord],
        representative: int,
        members: Sequence[int],
        matches: Sequence[MatchResult] = (),
    ) -> DuplicateGroup:
        """
        Materializes one cluster.

        Args:
            records: The full batch of records.
            representative: Union-find root of the cluster.
            members: Member indices in ascending order.
            matches: The pairwise matches that formed the cluster.

        Returns:
            The DuplicateGroup for the cluster.
        """
        member_records = [records[index] for index in members]
        primary_name, alternate_names = resolve_names(record.name for record in member_records)
        center = centroid([(record.latitude, record.longitude) for record in member_records])

        return DuplicateGroup(
            representative=representative,
            members=tuple(members),
            primary_name=primary_name,
            alternate_names=alternate_names,
            centroid=center,
            confidence=group_confidence(matches),
            matches=tuple(matches),
        )

    def build_groups(
        self,
        records: Sequence[PointRecord],
        clusters: Iterable[Tuple[int, Sequence[int], Sequence[MatchResult]]],
    ) -> List[DuplicateGroup]:
        """
        Materializes every cluster, ordered by each cluster's lowest member index.

        Args:
            records: The full batch of records.
            clusters: (representative, sorted members, matches) triples.

        Returns:
            One DuplicateGroup per cluster.
        """
        ordered = sorted(clusters, key=lambda cluster: cluster[1][0])
        return [
            self.build_group(records, representative, members, matches)
            for representative, members, matches in ordered
        ]

    def merge_group(self, group: DuplicateGroup, records: Sequence[PointRecord]) -> MergedPlace:
        """
        Folds the members of a group into one output record.

        Descriptions are deduplicated exactly and joined in member order.
        Metadata maps are merged with later members overwriting earlier keys.
        Region and category come from the first member that has one.
        """
        member_records = [records[index] for index in group.members]

        descriptions = unique_in_order(
            record.description for record in member_records if record.description
        )
        extra: Dict[str, Any] = {}
        for record in member_records:
            extra.update(record.extra)

        region = next((record.region for record in member_records if record.region), None)
        category = next((record.category for record in member_records if record.category), None)

        latitude, longitude = group.centroid
        if region is None and self.infer_region:
            region = us_state_from_coords(latitude, longitude)

        return MergedPlace(
            name=group.primary_name,
            description=self.separator.join(descriptions) if descriptions else None,
            latitude=latitude,
            longitude=longitude,
            region=region,
            category=category,
            extra=extra,
            member_indices=group.members,
            alternate_names=group.alternate_names,
            confidence=group.confidence,
            duplicate_count=group.size - 1,
        )

    def merge_all(
        self, records: Sequence[PointRecord], groups: Sequence[DuplicateGroup]
    ) -> List[MergedPlace]:
        """Folds every group, preserving group order."""
        merged = [self.merge_group(group, records) for group in groups]
        logger.info(f"Generated {len(merged):,} merged places from {len(records):,} records")
        return merged


def generate_merged_places(
    records: Sequence[PointRecord],
    groups: Sequence[DuplicateGroup],
    separator: str = ' | ',
    infer_region: bool = False,
) -> List[MergedPlace]:
    """Folds every group into a merged place with a one-off materializer."""
    return GroupMaterializer(separator, infer_region).merge_all(records, groups)


def build_result(original_count: int, groups: Sequence[DuplicateGroup]) -> DedupResult:
    """Summarizes a clustering run."""
    return DedupResult(
        original_count=original_count,
        deduped_count=len(groups),
        groups=tuple(groups),
        singletons=tuple(group.representative for group in groups if group.is_singleton),
        reduction_percent=reduction_percent(original_count, len(groups)),
    )
