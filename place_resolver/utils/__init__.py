# place_resolver/utils/__init__.py
"""
Utility Package for the Place Resolution Pipeline.

This package consolidates the low-level, reusable helpers of the pipeline,
organized into domain-specific modules. The `__all__` variable defines the
public API exposed by `from place_resolver.utils import *`.

Modules:
- geo: Great-circle distance, diameters, bounding boxes and region lookup.
- text: Tokenization helpers.
- similarity: Jaro-Winkler and token-based string similarity.
- frames: pandas DataFrame adapters.
- validation: Post-hoc partition and safeguard checks.
"""

# Geographic operations
from .geo import (
    bounding_box,
    centroid,
    haversine_distance,
    is_valid_coordinate,
    is_within_radius,
    max_pairwise_distance,
    pairwise_distances,
    us_state_from_coords,
)

# Text processing
from .text import (
    sorted_token_string,
    split_words,
    tokenize,
    unique_in_order,
)

# Similarity calculations
from .similarity import (
    jaro_similarity,
    jaro_winkler,
    partial_token_ratio,
    token_set_ratio,
    token_sort_ratio,
)

# DataFrame adapters
from .frames import (
    groups_to_frame,
    merged_to_frame,
    records_from_frame,
)

# Validation
from .validation import (
    validate_cluster_safeguards,
    validate_partition,
)

__all__ = [
    # geo
    'haversine_distance',
    'pairwise_distances',
    'max_pairwise_distance',
    'is_within_radius',
    'bounding_box',
    'centroid',
    'is_valid_coordinate',
    'us_state_from_coords',
    # text
    'tokenize',
    'sorted_token_string',
    'split_words',
    'unique_in_order',
    # similarity
    'jaro_similarity',
    'jaro_winkler',
    'token_sort_ratio',
    'token_set_ratio',
    'partial_token_ratio',
    # frames
    'records_from_frame',
    'merged_to_frame',
    'groups_to_frame',
    # validation
    'validate_partition',
    'validate_cluster_safeguards',
]
