# place_resolver/utils/validation.py
"""
Post-hoc consistency checks for clustering output.

These checks are independent of the clusterer's own bookkeeping: they look
only at the final groups and the original records, and log a PASSED/FAILED
verdict. They never raise, so callers decide how to react to a failure.
"""

import logging
from collections import Counter
from typing import Optional, Sequence

from ..config import DedupConfig
from ..models import DuplicateGroup, PointRecord
from .geo import max_pairwise_distance

# Set up a logger for this module.
logger = logging.getLogger(__name__)

# Allowance for floating-point differences when re-measuring diameters.
DIAMETER_TOLERANCE_M = 1e-6


def validate_partition(
    groups: Sequence[DuplicateGroup],
    record_count: int,
    context: Optional[str] = None,
) -> bool:
    """
    Validates that the groups partition the indices 0..record_count-1.

    Args:
        groups: The duplicate groups to check.
        record_count: Number of records in the batch.
        context: Optional label used only for clearer log messages.

    Returns:
        True if every index appears in exactly one group, False otherwise.
    """
    phase = f' during {context}' if context else ''
    logger.info(f"Validating that {len(groups):,} groups partition {record_count:,} records{phase}...")

    counts = Counter(index for group in groups for index in group.members)
    duplicated = sorted(index for index, count in counts.items() if count > 1)
    missing = sorted(set(range(record_count)) - set(counts))
    unknown = sorted(index for index in counts if not 0 <= index < record_count)

    if duplicated or missing or unknown:
        logger.error(
            f"Validation FAILED{phase}: {len(duplicated)} duplicated, {len(missing)} missing, "
            f"{len(unknown)} out-of-range indices"
        )
        if duplicated:
            logger.error(f"  Duplicated indices (first 10): {duplicated[:10]}")
        if missing:
            logger.error(f"  Missing indices (first 10): {missing[:10]}")
        return False

    logger.info(f"Validation PASSED{phase}: every record belongs to exactly one group.")
    return True


def validate_cluster_safeguards(
    groups: Sequence[DuplicateGroup],
    records: Sequence[PointRecord],
    config: DedupConfig,
    context: Optional[str] = None,
) -> bool:
    """
    Validates that every group respects the size and diameter caps.

    Args:
        groups: The duplicate groups to check.
        records: The records the groups index into.
        config: The configuration whose caps apply.
        context: Optional label used only for clearer log messages.

    Returns:
        True if all groups are within both caps, False otherwise.
    """
    phase = f' during {context}' if context else ''
    violations = 0
    # A singleton is always allowed, even under a cap of 0.
    size_limit = max(config.max_cluster_size, 1)

    for group in groups:
        if group.size > size_limit:
            violations += 1
            logger.error(
                f"Group {group.representative} has {group.size} members "
                f"(max {config.max_cluster_size}){phase}"
            )
        diameter = max_pairwise_distance(
            [records[index].latitude for index in group.members],
            [records[index].longitude for index in group.members],
        )
        if diameter > config.max_cluster_diameter + DIAMETER_TOLERANCE_M:
            violations += 1
            logger.error(
                f"Group {group.representative} spans {diameter:.1f}m "
                f"(max {config.max_cluster_diameter}m){phase}"
            )

    if violations:
        logger.error(f"Validation FAILED{phase}: {violations} safeguard violations.")
        return False

    logger.info(f"Validation PASSED{phase}: all groups within size and diameter limits.")
    return True
