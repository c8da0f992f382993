# place_resolver/config/__init__.py
"""
Initializes the config sub-package.

This file makes the most important components of the configuration system
directly available when importing from `place_resolver.config`.
"""

from .loader import ConfigFileError, build_config, load_config, load_raw_config, save_config
from .schema import (
    DEFAULT_DEDUP_CONFIG,
    ColumnConfig,
    DedupConfig,
    OutputConfig,
    ResolverConfig,
)

# Defines the public API of this sub-package.
__all__ = [
    'ResolverConfig',
    'DedupConfig',
    'DEFAULT_DEDUP_CONFIG',
    'ColumnConfig',
    'OutputConfig',
    'ConfigFileError',
    'build_config',
    'load_config',
    'load_raw_config',
    'save_config',
]
