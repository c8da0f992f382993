# place_resolver/clusterer.py
"""
PlaceClusterer module: turns pairwise match verdicts into duplicate groups.

The algorithm is a greedy, safeguarded union-find:

1. Evaluate every unordered record pair and keep the matches that meet the
   minimum confidence.
2. Sort them by confidence, highest first. Ties keep enumeration order.
3. Walk the sorted list. Each match joins its two clusters unless they are
   already joined, or the joined cluster would exceed the maximum size or
   the maximum diameter.

Strong evidence therefore shapes clusters before weak evidence gets a say,
and the caps stop a chain of marginal matches from growing one sprawling
cluster. Only step 1 may run in parallel; the merge walk is sequential.
"""

import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Dict, List, Sequence

from .config import DEFAULT_DEDUP_CONFIG, DedupConfig
from .evaluator import NameProfile, evaluate_profiles, profile_name
from .merger import GroupMaterializer
from .models import DuplicateGroup, MatchResult, PointRecord
from .utils.geo import max_pairwise_distance

# Set up a logger for this module.
logger = logging.getLogger(__name__)


class UnionFind:
    """
    Array-backed disjoint-set forest with union by rank.

    `find` walks to the root iteratively and then points every node on the
    path directly at it, so deep trees never hit the recursion limit.
    """

    def __init__(self, size: int):
        self.parent = list(range(size))
        self.rank = [0] * size
        self.size = [1] * size

    def find(self, node: int) -> int:
        root = node
        while self.parent[root] != root:
            root = self.parent[root]

        # Path compression.
        while self.parent[node] != root:
            next_node = self.parent[node]
            self.parent[node] = root
            node = next_node

        return root

    def union(self, a: int, b: int) -> int:
        """Joins the sets of `a` and `b` and returns the surviving root."""
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return root_a

        if self.rank[root_a] < self.rank[root_b]:
            root_a, root_b = root_b, root_a
        elif self.rank[root_a] == self.rank[root_b]:
            self.rank[root_a] += 1

        self.parent[root_b] = root_a
        self.size[root_a] += self.size[root_b]
        return root_a

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def cluster_size(self, node: int) -> int:
        return self.size[self.find(node)]


def _evaluate_rows(
    records: Sequence[PointRecord],
    profiles: Sequence[NameProfile],
    config: DedupConfig,
    rows: Sequence[int],
) -> List[MatchResult]:
    """Evaluates pairs (i, j > i) for each row i and keeps qualifying matches."""
    candidates = []
    count = len(records)
    for i in rows:
        for j in range(i + 1, count):
            result = evaluate_profiles(
                records[i], records[j], profiles[i], profiles[j], config,
                first_index=i, second_index=j,
            )
            if result.is_match and result.confidence >= config.min_confidence:
                candidates.append(result)
    return candidates


def _validate_records(records: Sequence[PointRecord]) -> None:
    for index, record in enumerate(records):
        if not isinstance(record, PointRecord):
            raise TypeError(
                f'Record at index {index} must be a PointRecord, not {type(record).__name__}'
            )


class PlaceClusterer:
    """
    Groups duplicate place records with a safeguarded union-find.

    Attributes:
        config (DedupConfig): Matching thresholds and cluster caps.
        n_jobs (int): Worker processes for pairwise evaluation; 1 runs inline.
        materializer (GroupMaterializer): Builds groups from final clusters.
    """

    def __init__(
        self,
        config: DedupConfig = DEFAULT_DEDUP_CONFIG,
        n_jobs: int = 1,
        materializer: GroupMaterializer | None = None,
    ):
        if n_jobs < 1:
            raise ValueError(f'n_jobs must be at least 1, got {n_jobs}')
        self.config = config
        self.n_jobs = n_jobs
        self.materializer = materializer or GroupMaterializer()

    def find_candidates(self, records: Sequence[PointRecord]) -> List[MatchResult]:
        """
        Evaluates every record pair and returns the qualifying matches.

        Returns:
            Matches of type other than 'none' with confidence at or above
            `min_confidence`, in pair enumeration order (i, then j).
        """
        count = len(records)
        pair_count = count * (count - 1) // 2
        logger.info(f"Evaluating {pair_count:,} pairs across {count:,} records...")
        profiles = [profile_name(record.name) for record in records]

        if self.n_jobs == 1 or count < 2:
            candidates = _evaluate_rows(records, profiles, self.config, range(count))
        else:
            # Interleave rows so the long early rows are spread across workers.
            chunks = [list(range(start, count, self.n_jobs)) for start in range(self.n_jobs)]
            chunks = [chunk for chunk in chunks if chunk]
            candidates = []
            with ProcessPoolExecutor(max_workers=len(chunks)) as executor:
                futures = [
                    executor.submit(_evaluate_rows, records, profiles, self.config, chunk)
                    for chunk in chunks
                ]
                for future in futures:
                    candidates.extend(future.result())
            candidates.sort(key=lambda match: (match.first_index, match.second_index))

        logger.info(f"Found {len(candidates):,} candidate matches")
        return candidates

    def _merge_candidates(
        self, records: Sequence[PointRecord], candidates: Sequence[MatchResult]
    ) -> List[tuple]:
        """Runs the greedy merge walk and returns (root, members, matches) triples."""
        count = len(records)
        union_find = UnionFind(count)
        members: Dict[int, List[int]] = {index: [index] for index in range(count)}
        contributing: Dict[int, List[MatchResult]] = {index: [] for index in range(count)}

        ordered = sorted(candidates, key=lambda match: match.confidence, reverse=True)

        merged = already_joined = rejected_size = rejected_diameter = 0
        for match in ordered:
            root1 = union_find.find(match.first_index)
            root2 = union_find.find(match.second_index)
            if root1 == root2:
                already_joined += 1
                continue

            prospective = members[root1] + members[root2]
            if len(prospective) > self.config.max_cluster_size:
                rejected_size += 1
                logger.debug(
                    f"Rejected merge ({match.first_index}, {match.second_index}): "
                    f"size {len(prospective)} > {self.config.max_cluster_size}"
                )
                continue

            diameter = max_pairwise_distance(
                [records[index].latitude for index in prospective],
                [records[index].longitude for index in prospective],
            )
            if diameter > self.config.max_cluster_diameter:
                rejected_diameter += 1
                logger.debug(
                    f"Rejected merge ({match.first_index}, {match.second_index}): "
                    f"diameter {diameter:.1f}m > {self.config.max_cluster_diameter}m"
                )
                continue

            root = union_find.union(root1, root2)
            absorbed = root2 if root == root1 else root1
            members[root] = sorted(prospective)
            contributing[root] = contributing[root] + contributing.pop(absorbed) + [match]
            del members[absorbed]
            merged += 1

        logger.info(
            f"Merge walk complete: {merged:,} merges, {already_joined:,} already joined, "
            f"{rejected_size:,} rejected by size, {rejected_diameter:,} rejected by diameter"
        )
        return [(root, member_list, contributing[root]) for root, member_list in members.items()]

    def cluster(self, records: Sequence[PointRecord]) -> List[DuplicateGroup]:
        """
        Partitions a batch of records into duplicate groups.

        Every input index appears in exactly one group. Groups are ordered by
        their lowest member index and members are in ascending order.

        Args:
            records: The batch. Every element must be a PointRecord.

        Returns:
            The list of DuplicateGroups; empty for an empty batch.

        Raises:
            TypeError: If any element is not a PointRecord.
        """
        records = list(records)
        _validate_records(records)
        if not records:
            logger.info("No records to cluster.")
            return []

        candidates = self.find_candidates(records)
        clusters = self._merge_candidates(records, candidates)
        groups = self.materializer.build_groups(records, clusters)

        multi_member = sum(1 for group in groups if not group.is_singleton)
        logger.info(
            f"Formed {len(groups):,} groups from {len(records):,} records "
            f"({multi_member:,} with duplicates)"
        )
        return groups


def cluster_records(
    records: Sequence[PointRecord],
    config: DedupConfig = DEFAULT_DEDUP_CONFIG,
    *,
    n_jobs: int = 1,
) -> List[DuplicateGroup]:
    """
    Clusters a batch of point records into duplicate groups.

    Convenience wrapper around `PlaceClusterer`. See `PlaceClusterer.cluster`.
    """
    return PlaceClusterer(config, n_jobs=n_jobs).cluster(records)
