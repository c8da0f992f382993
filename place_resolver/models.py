# place_resolver/models.py
"""
Record and result types shared across the matching pipeline.

`PointRecord` is the only input shape the engine accepts. It is a frozen
Pydantic model so that invalid coordinates are rejected when a record is
built, long before clustering starts. Everything the engine produces
(pairwise results, groups, merged places) is a plain frozen dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class PointRecord(BaseModel):
    """A named, geo-located place as delivered by an input adapter."""

    model_config = ConfigDict(extra='forbid', frozen=True)

    name: Optional[str] = None
    description: Optional[str] = None
    latitude: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)
    region: Optional[str] = Field(
        default=None, description='Administrative region code, e.g. a US state.'
    )
    category: Optional[str] = None
    extra: dict[str, Any] = Field(
        default_factory=dict, description='Source-specific metadata, in source order.'
    )


class MatchType(str, Enum):
    """Which signals justified a pairwise match."""

    GPS = 'gps'
    NAME = 'name'
    BOTH = 'both'
    NONE = 'none'


@dataclass(frozen=True, slots=True)
class BlockingConflict:
    """Two names carry different values of the same blocking category."""

    category: str
    first: str
    second: str

    @property
    def details(self) -> str:
        return f'{self.first} vs {self.second}'


@dataclass(frozen=True, slots=True)
class NameScores:
    character_similarity: float
    token_set_similarity: float
    combined: float


@dataclass(frozen=True, slots=True)
class WordOverlap:
    """Exact-word overlap between two normalized names."""

    shared_words: tuple[str, ...]
    overlap_ratio: float
    total_unique_words: int
    should_boost: bool


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Verdict of the match evaluator for one record pair."""

    first_index: int
    second_index: int
    distance_m: float
    name_similarity: float
    token_set_similarity: float
    blocking: Optional[BlockingConflict]
    is_generic: bool
    match_type: MatchType
    confidence: float

    @property
    def is_blocked(self) -> bool:
        return self.blocking is not None

    @property
    def combined_score(self) -> float:
        return max(self.name_similarity, self.token_set_similarity)

    @property
    def is_match(self) -> bool:
        return self.match_type is not MatchType.NONE


@dataclass(frozen=True, slots=True)
class DuplicateGroup:
    """A final cluster of records judged to describe the same place."""

    representative: int
    members: tuple[int, ...]
    primary_name: Optional[str]
    alternate_names: tuple[str, ...]
    centroid: tuple[float, float]
    confidence: float
    matches: tuple[MatchResult, ...] = ()

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def is_singleton(self) -> bool:
        return len(self.members) == 1


@dataclass(frozen=True, slots=True)
class MergedPlace:
    """One output record folded from every member of a duplicate group."""

    name: Optional[str]
    description: Optional[str]
    latitude: float
    longitude: float
    region: Optional[str]
    category: Optional[str]
    extra: dict[str, Any]
    member_indices: tuple[int, ...]
    alternate_names: tuple[str, ...]
    confidence: float
    duplicate_count: int


@dataclass(frozen=True, slots=True)
class DedupResult:
    """Summary of one deduplication run."""

    original_count: int
    deduped_count: int
    groups: tuple[DuplicateGroup, ...]
    singletons: tuple[int, ...] = field(default=())
    reduction_percent: int = 0
