# place_resolver/config/schema.py
"""
Pydantic Schema for the Place Resolution Pipeline Configuration.

This module is the single source of truth for every parameter that governs
matching, clustering and output of geo-located place records. Pydantic gives
us type coercion, range validation and readable error messages, so an
out-of-range threshold fails at construction time instead of silently
producing bad clusters.

The matching engine itself consumes only `DedupConfig`. Its fields are all
mandatory; `DEFAULT_DEDUP_CONFIG` is the named default instance. The master
`ResolverConfig` composes it with the DataFrame column map, output options and
execution settings used by the `PlaceResolver` orchestrator.
"""

# ======================================================================================
# Core Library Imports
# ======================================================================================

import logging
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

LOG_LEVEL_NAMES = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


# ======================================================================================
# Matching & Clustering Configuration
# ======================================================================================


class DedupConfig(BaseModel):
    """
    Thresholds and safeguards for the pairwise matcher and the cluster builder.

    Every field is required. Use `DEFAULT_DEDUP_CONFIG` (or
    `DEFAULT_DEDUP_CONFIG.model_copy(update={...})`) to start from the defaults.
    The model is frozen so a single instance can be shared across worker
    processes and between runs.
    """

    model_config = ConfigDict(extra='forbid', frozen=True)

    gps_threshold: float = Field(
        ...,
        ge=0.0,
        description=(
            'Maximum great-circle distance in meters for two records to count as a GPS match.'
        ),
    )

    name_threshold: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description='Minimum combined name similarity (0-1) for two names to count as a match.',
    )

    generic_gps_threshold: float = Field(
        ...,
        ge=0.0,
        description=(
            'Stricter distance in meters under which a pair involving a generic name '
            "(e.g. 'House', 'Factory Buffalo') may merge on position alone."
        ),
    )

    require_gps: bool = Field(
        ...,
        description=(
            'If True, a name match alone is never sufficient; records must also be within '
            '`gps_threshold` of each other.'
        ),
    )

    use_smart_match: bool = Field(
        ...,
        description=(
            'Compare alias-normalized names and lower the name threshold for pairs that share '
            'at least one exact word (word-overlap boost).'
        ),
    )

    max_cluster_size: int = Field(
        ...,
        ge=0,
        description=(
            'Maximum number of records a single cluster may hold. 0 and 1 both disable '
            'merging; every record stays a singleton.'
        ),
    )

    max_cluster_diameter: float = Field(
        ...,
        ge=0.0,
        description='Maximum distance in meters between any two members of a cluster.',
    )

    min_confidence: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description='Minimum pairwise confidence (0-100) for a match to be considered for merging.',
    )

    word_overlap_boost: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description='Amount subtracted from `name_threshold` when the word-overlap boost applies.',
    )

    min_boosted_threshold: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description='Floor below which the word-overlap boost may not push the name threshold.',
    )

    prefix_scale: float = Field(
        ...,
        ge=0.0,
        le=0.25,
        description='Jaro-Winkler prefix scaling factor. Values above 0.25 can exceed 1.0.',
    )

    @model_validator(mode='after')
    def check_generic_threshold(self) -> 'DedupConfig':
        """
        Ensures the generic-name distance is no looser than the general GPS distance.

        Rule 3 of the evaluator only fires inside `gps_threshold`, so a larger
        `generic_gps_threshold` would be silently ineffective.
        """
        if self.generic_gps_threshold > self.gps_threshold:
            raise ValueError(
                f'generic_gps_threshold ({self.generic_gps_threshold}) cannot exceed '
                f'gps_threshold ({self.gps_threshold}).'
            )
        return self


DEFAULT_DEDUP_CONFIG = DedupConfig(
    gps_threshold=50.0,
    name_threshold=0.85,
    generic_gps_threshold=25.0,
    require_gps=False,
    use_smart_match=True,
    max_cluster_size=20,
    max_cluster_diameter=500.0,
    min_confidence=60.0,
    word_overlap_boost=0.10,
    min_boosted_threshold=0.70,
    prefix_scale=0.1,
)


# ======================================================================================
# Input / Output Configuration
# ======================================================================================


class ColumnConfig(BaseModel):
    """
    Maps DataFrame columns onto the fields of a point record.

    Only the latitude and longitude columns are mandatory in the input frame.
    Optional columns that are missing are treated as empty; any column not
    listed here is carried through as record metadata.
    """

    model_config = ConfigDict(extra='forbid')

    name_col: str = Field(default='name', min_length=1)
    description_col: str = Field(default='description', min_length=1)
    latitude_col: str = Field(default='latitude', min_length=1)
    longitude_col: str = Field(default='longitude', min_length=1)
    region_col: str = Field(default='region', min_length=1)
    category_col: str = Field(default='category', min_length=1)

    @model_validator(mode='after')
    def check_unique_columns(self) -> 'ColumnConfig':
        """Rejects configurations that map two record fields onto the same column."""
        columns = [
            self.name_col,
            self.description_col,
            self.latitude_col,
            self.longitude_col,
            self.region_col,
            self.category_col,
        ]
        duplicates = sorted({col for col in columns if columns.count(col) > 1})
        if duplicates:
            raise ValueError(f'Column names must be unique, found duplicates: {duplicates}')
        return self


class OutputConfig(BaseModel):
    """
    Configuration for merged-record formatting and logging verbosity.
    """

    model_config = ConfigDict(extra='forbid')

    log_level: int = Field(
        default=logging.INFO,
        description=(
            'Verbosity of the package logger. Accepts a level name in any case '
            "('debug', 'INFO') or its number, and is stored as the number. DEBUG adds "
            'per-pair verdicts and rejected merges; INFO logs pipeline progress and the report.'
        ),
    )

    description_separator: str = Field(
        default=' | ',
        description='Separator used when joining the distinct descriptions of a merged group.',
    )

    infer_missing_region: bool = Field(
        default=False,
        description=(
            'If True, a merged place whose members carry no region gets the US state whose '
            'bounding box contains the group centroid.'
        ),
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def coerce_log_level(cls, value: Any) -> int:
        """Maps a level name to its number and rejects anything but the five standard levels."""
        levels = {name: logging.getLevelName(name) for name in LOG_LEVEL_NAMES}

        if isinstance(value, str) and value.strip().upper() in levels:
            return levels[value.strip().upper()]
        if isinstance(value, int) and not isinstance(value, bool) and value in levels.values():
            return value

        raise ValueError(
            f'log_level must be one of {", ".join(LOG_LEVEL_NAMES)} '
            f'or {sorted(levels.values())}, got {value!r}'
        )


# ======================================================================================
# Master Configuration
# ======================================================================================


class ResolverConfig(BaseModel):
    """
    Master configuration for the place resolution pipeline.

    Usage:
        # Load from YAML file
        config = load_config('config.yaml')

        # Or create with custom parameters
        config = ResolverConfig(
            dedup={'gps_threshold': 100, 'require_gps': True},
            columns=ColumnConfig(name_col='title'),
        )

        resolver = PlaceResolver(config=config)

    The configuration follows a hierarchical structure:
    - dedup: Matching thresholds and cluster safeguards
    - columns: Input DataFrame column mapping
    - output: Merged-record formatting and logging
    - n_jobs: Worker processes for the pairwise evaluation phase

    A partial `dedup` mapping is completed from `DEFAULT_DEDUP_CONFIG`.
    """

    model_config = ConfigDict(extra='forbid')

    dedup: DedupConfig = Field(
        default=DEFAULT_DEDUP_CONFIG,
        description='Matching thresholds and cluster safeguards.',
    )

    columns: ColumnConfig = Field(
        default_factory=ColumnConfig, description='Configuration for input DataFrame columns.'
    )

    output: OutputConfig = Field(
        default_factory=OutputConfig,
        description='Configuration for merged-record formatting and logging.',
    )

    n_jobs: int = Field(
        default=1,
        ge=1,
        description=(
            'Number of worker processes for the O(n^2) pairwise evaluation. The merge phase '
            'always runs sequentially, so results do not depend on this value.'
        ),
    )

    @model_validator(mode='before')
    @classmethod
    def fill_dedup_defaults(cls, data: Any) -> Any:
        """Completes a partial `dedup` mapping with the default matcher settings."""
        if isinstance(data, dict) and isinstance(data.get('dedup'), dict):
            merged = DEFAULT_DEDUP_CONFIG.model_dump()
            merged.update(data['dedup'])
            data = {**data, 'dedup': merged}
        return data


# === Public API ===
__all__ = [
    'ResolverConfig',
    'DedupConfig',
    'DEFAULT_DEDUP_CONFIG',
    'ColumnConfig',
    'OutputConfig',
]
