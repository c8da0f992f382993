# Expose the main classes and entry points to the top level of the package
from .clusterer import cluster_records
from .config import DEFAULT_DEDUP_CONFIG, DedupConfig, ResolverConfig
from .evaluator import evaluate_pair
from .models import DedupResult, DuplicateGroup, MatchResult, MatchType, MergedPlace, PointRecord
from .normalizer import normalize_name
from .resolver import PlaceResolver
from .scorer import score_names

# Define the package version
__version__ = '0.1.0'

__all__ = [
    'ResolverConfig',
    'DedupConfig',
    'DEFAULT_DEDUP_CONFIG',
    'PlaceResolver',
    'PointRecord',
    'MatchType',
    'MatchResult',
    'DuplicateGroup',
    'MergedPlace',
    'DedupResult',
    'evaluate_pair',
    'cluster_records',
    'score_names',
    'normalize_name',
]
