# place_resolver/resolver.py
"""
Main PlaceResolver class that orchestrates the place deduplication pipeline.

This module provides the primary interface for deduplicating geo-located
place records, coordinating configuration, logging, pairwise matching,
clustering, group materialization, validation and reporting.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import pandas as pd

from .clusterer import PlaceClusterer
from .config import ResolverConfig, load_config
from .evaluator import MatchEvaluator
from .merger import GroupMaterializer, build_result
from .models import DedupResult, DuplicateGroup, MatchResult, MergedPlace, PointRecord
from .reporter import ResolutionReporter
from .utils import (
    merged_to_frame,
    records_from_frame,
    validate_cluster_safeguards,
    validate_partition,
)


class PlaceResolver:
    """
    Orchestrator for the place deduplication pipeline.

    Attributes:
        config (ResolverConfig): Configuration object containing all settings
        logger (logging.Logger): Logger instance for this resolver
        records_ (list[PointRecord] | None): Records of the last run
        result_ (DedupResult | None): Result of the last run
    """

    # Package version for tracking
    __version__ = '0.1.0'

    def __init__(self, config_path: str | None = None, *, config: ResolverConfig | None = None):
        """
        Initialize the PlaceResolver and all sub-components.

        This constructor supports three initialization modes:
        1. Load configuration from YAML file (provide config_path)
        2. Use a pre-built configuration object (provide config)
        3. Use default configuration (provide neither)

        Args:
            config_path: Optional path to YAML configuration file
            config: Pre-built ResolverConfig object

        Raises:
            ValueError: If both config_path and config are provided
        """
        if config_path and config:
            raise ValueError("Provide either 'config_path' or 'config', not both.")

        self.config = config if config else load_config(config_path)

        self.logger = self._setup_logger()
        self.logger.info(f'Initializing PlaceResolver v{self.__version__}')

        self._initialize_components()

        self.records_: list[PointRecord] | None = None
        self.result_: DedupResult | None = None

        self.logger.debug('PlaceResolver initialization complete')

    def _initialize_components(self) -> None:
        """Instantiate all pipeline component classes with their configurations."""
        self.logger.debug('Initializing pipeline components...')

        self.evaluator = MatchEvaluator(self.config.dedup)
        self.materializer = GroupMaterializer(
            separator=self.config.output.description_separator,
            infer_region=self.config.output.infer_missing_region,
        )
        self.clusterer = PlaceClusterer(
            self.config.dedup, n_jobs=self.config.n_jobs, materializer=self.materializer
        )
        self.reporter = ResolutionReporter(self.config)

        self.logger.debug(
            f'Components ready (gps_threshold={self.config.dedup.gps_threshold}m, '
            f'name_threshold={self.config.dedup.name_threshold}, n_jobs={self.config.n_jobs})'
        )

    # ========================================================================
    # Pipeline
    # ========================================================================

    def evaluate(self, first: PointRecord, second: PointRecord) -> MatchResult:
        """Evaluate a single record pair with the configured thresholds."""
        return self.evaluator.evaluate(first, second)

    def cluster(self, records: Sequence[PointRecord]) -> list[DuplicateGroup]:
        """Cluster records into duplicate groups without storing run state."""
        return self.clusterer.cluster(records)

    def deduplicate(self, records: Sequence[PointRecord]) -> DedupResult:
        """
        Run the full deduplication pipeline on a batch of records.

        The groups are validated after clustering; a failed validation is
        logged as an error but does not discard the result.

        Args:
            records: The batch of point records.

        Returns:
            The DedupResult for the batch.

        Raises:
            TypeError: If any element is not a PointRecord.
        """
        records = list(records)
        self.logger.info(f'{"=" * 60}')
        self.logger.info(f'Starting deduplication of {len(records):,} records')
        self.logger.info(f'{"=" * 60}')

        groups = self.clusterer.cluster(records)

        validate_partition(groups, len(records), context='clustering')
        validate_cluster_safeguards(groups, records, self.config.dedup, context='clustering')

        result = build_result(len(records), groups)
        self.records_ = records
        self.result_ = result

        self.logger.info(f'{"=" * 60}')
        self.logger.info(
            f'Deduplication complete: {result.original_count:,} -> {result.deduped_count:,} '
            f'places ({result.reduction_percent}% reduction)'
        )
        self.logger.info(f'{"=" * 60}')
        return result

    def merge(
        self, records: Sequence[PointRecord], result: DedupResult | None = None
    ) -> list[MergedPlace]:
        """
        Fold each duplicate group into one merged place.

        Args:
            records: The batch of point records.
            result: A DedupResult for `records`; computed if omitted.

        Returns:
            One MergedPlace per group, in group order.
        """
        records = list(records)
        if result is None:
            result = self.deduplicate(records)
        return self.materializer.merge_all(records, result.groups)

    def resolve_frame(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Deduplicate a DataFrame of places and return the merged places as a DataFrame.

        Args:
            df: Input pandas DataFrame laid out per `config.columns`

        Returns:
            A DataFrame with one row per merged place.

        Raises:
            ValueError: If the coordinate columns are missing
            pydantic.ValidationError: If a row has invalid coordinates
        """
        records = records_from_frame(df, self.config.columns)
        result = self.deduplicate(records)
        merged = self.materializer.merge_all(records, result.groups)
        return merged_to_frame(merged, self.config.columns)

    # ========================================================================
    # Reporting
    # ========================================================================

    def get_review_dataframe(self) -> pd.DataFrame:
        """
        Get a review DataFrame mapping each record of the last run to its group.

        Raises:
            RuntimeError: If no deduplication has been run yet
        """
        self._check_has_run()
        return self.reporter.get_review_dataframe(self.records_, self.result_)

    def generate_report(self) -> dict[str, Any]:
        """
        Generate and log a statistics report for the last run.

        Raises:
            RuntimeError: If no deduplication has been run yet
        """
        self._check_has_run()
        return self.reporter.generate_report(self.records_, self.result_)

    def _check_has_run(self) -> None:
        if self.result_ is None or self.records_ is None:
            raise RuntimeError('No deduplication has been run yet. Call deduplicate() first.')

    # ========================================================================
    # Logging
    # ========================================================================

    def _setup_logger(self) -> logging.Logger:
        """
        Set up logging for the entire place_resolver package.

        This method configures the package-level logger so that all modules
        inherit the same log level and handler configuration.

        Returns:
            Logger instance for this specific module
        """
        package_logger = logging.getLogger('place_resolver')
        package_logger.setLevel(self.config.output.log_level)

        # Stop messages from propagating to the root logger to avoid duplicates.
        package_logger.propagate = False

        # Only add a handler if one doesn't already exist
        if not package_logger.handlers:
            console_handler = logging.StreamHandler()
            log_format = logging.Formatter(
                fmt='%(asctime)s - %(levelname)-8s - [%(name)s] - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S',
            )
            console_handler.setFormatter(log_format)
            console_handler.setLevel(self.config.output.log_level)
            package_logger.addHandler(console_handler)

        # If log level changed, update existing handler
        elif package_logger.handlers:
            package_logger.handlers[0].setLevel(self.config.output.log_level)

        return logging.getLogger(__name__)
