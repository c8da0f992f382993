# place_resolver/reporter.py
"""
This module defines the ResolutionReporter class, which is responsible for
generating human-readable reports and summary DataFrames from the results
of a place deduplication run.
"""

import logging
from collections import Counter
from typing import Any, Dict, Sequence

import pandas as pd

# --- Local Package Imports ---
from .config import ResolverConfig
from .generic import is_generic_name, is_suggestion_filtered
from .models import DedupResult, PointRecord
from .normalizer import NameNormalizer

# Set up a logger for this module
logger = logging.getLogger(__name__)

REVIEW_COLUMNS = [
    'group_id',
    'record_index',
    'original_name',
    'normalized_name',
    'primary_name',
    'group_size',
    'group_confidence',
]


def describe_records(records: Sequence[PointRecord]) -> Dict[str, int]:
    """
    Counts basic properties of an input batch.

    Returns:
        Totals for records with a name, description, region and category,
        plus how many names are generic or too vague to suggest.
    """
    return {
        'total_records': len(records),
        'with_name': sum(1 for record in records if record.name),
        'with_description': sum(1 for record in records if record.description),
        'with_region': sum(1 for record in records if record.region),
        'with_category': sum(1 for record in records if record.category),
        'generic_names': sum(1 for record in records if record.name and is_generic_name(record.name)),
        'suggestion_filtered_names': sum(
            1 for record in records if record.name and is_suggestion_filtered(record.name)
        ),
    }


class ResolutionReporter:
    """
    Generates reports and summary DataFrames from deduplication results.

    This class is stateless; it takes the records and the DedupResult and
    transforms them into formats suitable for analysis and review.
    """

    def __init__(self, config: ResolverConfig):
        """
        Initializes the ResolutionReporter.

        Args:
            config: The main ResolverConfig object.
        """
        self.config = config
        self.normalizer = NameNormalizer()

    def get_review_dataframe(
        self, records: Sequence[PointRecord], result: DedupResult
    ) -> pd.DataFrame:
        """
        Generates a sorted DataFrame mapping every record to its group's primary name.

        Multi-member groups come first (largest first) so reviewers see the
        merges that matter before the singletons.

        Args:
            records: The records that were deduplicated.
            result: The DedupResult for those records.

        Returns:
            A pandas DataFrame with one row per input record.
        """
        if not result.groups:
            logger.warning("Cannot generate review frame from an empty result.")
            return pd.DataFrame(columns=REVIEW_COLUMNS)

        logger.info("Generating review DataFrame...")

        rows = []
        for group_id, group in enumerate(result.groups):
            for index in group.members:
                rows.append({
                    'group_id': group_id,
                    'record_index': index,
                    'original_name': records[index].name,
                    'primary_name': group.primary_name,
                    'group_size': group.size,
                    'group_confidence': group.confidence,
                })

        review_df = pd.DataFrame(rows)
        review_df['normalized_name'] = self.normalizer.normalize_series(review_df['original_name'])
        review_df = review_df[REVIEW_COLUMNS].sort_values(
            by=['group_size', 'group_id', 'record_index'],
            ascending=[False, True, True],
            kind='stable',
        ).reset_index(drop=True)

        logger.info(f"Built {len(review_df):,} review rows across {len(result.groups):,} groups.")
        return review_df

    def generate_report(
        self, records: Sequence[PointRecord], result: DedupResult
    ) -> Dict[str, Any]:
        """
        Generates a dictionary of detailed statistics about the run.

        Args:
            records: The records that were deduplicated.
            result: The DedupResult for those records.

        Returns:
            A dictionary with 'summary', 'input', 'match_types',
            'group_size_distribution' and 'confidence_distribution' sections.
        """
        logger.info("Generating final report...")

        sizes = pd.Series([group.size for group in result.groups], dtype='float64')
        multi = [group for group in result.groups if not group.is_singleton]
        confidences = pd.Series([group.confidence for group in multi], dtype='float64')
        match_types = Counter(
            match.match_type.value for group in result.groups for match in group.matches
        )

        report_dict = {
            'summary': {
                'total_records_processed': result.original_count,
                'places_after_dedup': result.deduped_count,
                'duplicates_removed': result.original_count - result.deduped_count,
                'groups_with_duplicates': len(multi),
                'singletons': len(result.singletons),
                'reduction_rate': result.reduction_percent / 100,
            },
            'input': describe_records(records),
            'match_types': dict(sorted(match_types.items())),
            'group_size_distribution': sizes.describe().to_dict() if not sizes.empty else {},
            'confidence_distribution': confidences.describe().to_dict() if not confidences.empty else {},
        }

        # Convert NumPy scalars to standard Python numbers for clean output.
        for section, content in report_dict.items():
            for key, val in content.items():
                if hasattr(val, 'item'):
                    content[key] = val.item()

        self._log_report(report_dict)
        return report_dict

    def _log_report(self, report_dict: Dict[str, Any]) -> None:
        """Formats and logs the generated report dictionary."""
        logger.info("--- Deduplication Report ---")
        for key, val in report_dict['summary'].items():
            val_str = f"{val:.2%}" if 'rate' in key else str(val)
            logger.info(f"{key.replace('_', ' ').title():<28}: {val_str}")

        logger.info("--- Input Records ---")
        for key, val in report_dict['input'].items():
            logger.info(f"{key.replace('_', ' ').title():<28}: {val}")

        if report_dict['match_types']:
            logger.info("--- Contributing Matches ---")
            for key, val in report_dict['match_types'].items():
                logger.info(f"{key.upper():<28}: {val}")

        if report_dict['group_size_distribution']:
            dist = report_dict['group_size_distribution']
            logger.info("--- Group Size Distribution ---")
            logger.info(f"{'Mean Size':<28}: {dist.get('mean', 0):.2f}")
            logger.info(f"{'Min / Max Size':<28}: {int(dist.get('min', 0))} / {int(dist.get('max', 0))}")

        if report_dict['confidence_distribution']:
            dist = report_dict['confidence_distribution']
            logger.info("--- Merged Group Confidence ---")
            logger.info(f"{'Mean Confidence':<28}: {dist.get('mean', 0):.1f}")
            logger.info(f"{'Min / Max Confidence':<28}: {dist.get('min', 0):.1f} / {dist.get('max', 0):.1f}")
