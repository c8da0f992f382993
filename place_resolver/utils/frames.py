# place_resolver/utils/frames.py
"""
Adapters between pandas DataFrames and the engine's record types.

Input adapters (KML, GPX, CSV readers and the like) usually hand over a
DataFrame. `records_from_frame` maps its columns onto `PointRecord`s using
the `ColumnConfig`; every unmapped column becomes record metadata. The
`*_to_frame` helpers turn results back into DataFrames for review or
re-serialization.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from ..config import ColumnConfig
from ..models import DuplicateGroup, MergedPlace, PointRecord

# Set up a logger for this module.
logger = logging.getLogger(__name__)


def _clean_value(value: Any) -> Any:
    """Maps pandas/NumPy missing markers to None and NumPy scalars to Python ones."""
    if value is None:
        return None
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    if hasattr(value, 'item'):
        return value.item()
    return value


def _optional_text(value: Any) -> Optional[str]:
    value = _clean_value(value)
    if value is None:
        return None
    return str(value)


def records_from_frame(df: pd.DataFrame, columns: ColumnConfig) -> List[PointRecord]:
    """
    Builds point records from the rows of a DataFrame.

    Args:
        df: The input frame. Must contain the latitude and longitude columns.
        columns: Column mapping. Optional columns may be absent.

    Returns:
        One PointRecord per row, in row order.

    Raises:
        ValueError: If a coordinate column is missing.
        pydantic.ValidationError: If a row has invalid coordinates.
    """
    missing = [col for col in (columns.latitude_col, columns.longitude_col) if col not in df.columns]
    if missing:
        raise ValueError(f"Input DataFrame is missing required coordinate columns: {missing}")

    mapped = {
        columns.name_col,
        columns.description_col,
        columns.latitude_col,
        columns.longitude_col,
        columns.region_col,
        columns.category_col,
    }
    extra_cols = [col for col in df.columns if col not in mapped]

    records = []
    for row in df.to_dict(orient='records'):
        extra: Dict[str, Any] = {}
        for col in extra_cols:
            value = _clean_value(row[col])
            if value is not None:
                extra[str(col)] = value

        records.append(
            PointRecord(
                name=_optional_text(row.get(columns.name_col)),
                description=_optional_text(row.get(columns.description_col)),
                latitude=_clean_value(row[columns.latitude_col]),
                longitude=_clean_value(row[columns.longitude_col]),
                region=_optional_text(row.get(columns.region_col)),
                category=_optional_text(row.get(columns.category_col)),
                extra=extra,
            )
        )

    logger.debug(f"Built {len(records):,} records ({len(extra_cols)} metadata columns)")
    return records


def merged_to_frame(merged: Sequence[MergedPlace], columns: ColumnConfig) -> pd.DataFrame:
    """
    Converts merged places into a DataFrame using the configured column names.

    Metadata keys become columns after the mapped ones; bookkeeping columns
    (`member_indices`, `alternate_names`, `confidence`, `duplicate_count`)
    come last.
    """
    rows = []
    for place in merged:
        row = {
            columns.name_col: place.name,
            columns.description_col: place.description,
            columns.latitude_col: place.latitude,
            columns.longitude_col: place.longitude,
            columns.region_col: place.region,
            columns.category_col: place.category,
        }
        for key, value in place.extra.items():
            row.setdefault(key, value)
        row['member_indices'] = list(place.member_indices)
        row['alternate_names'] = list(place.alternate_names)
        row['confidence'] = place.confidence
        row['duplicate_count'] = place.duplicate_count
        rows.append(row)

    if not rows:
        return pd.DataFrame(columns=[
            columns.name_col, columns.description_col, columns.latitude_col,
            columns.longitude_col, columns.region_col, columns.category_col,
            'member_indices', 'alternate_names', 'confidence', 'duplicate_count',
        ])

    frame = pd.DataFrame(rows)
    tail = ['member_indices', 'alternate_names', 'confidence', 'duplicate_count']
    return frame[[col for col in frame.columns if col not in tail] + tail]


def groups_to_frame(groups: Sequence[DuplicateGroup]) -> pd.DataFrame:
    """Flattens groups into one row per group for inspection."""
    return pd.DataFrame(
        [
            {
                'representative': group.representative,
                'size': group.size,
                'primary_name': group.primary_name,
                'alternate_names': list(group.alternate_names),
                'centroid_lat': group.centroid[0],
                'centroid_lon': group.centroid[1],
                'confidence': group.confidence,
                'members': list(group.members),
            }
            for group in groups
        ],
        columns=[
            'representative', 'size', 'primary_name', 'alternate_names',
            'centroid_lat', 'centroid_lon', 'confidence', 'members',
        ],
    )
