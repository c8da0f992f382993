# place_resolver/config/loader.py
"""
YAML persistence for `ResolverConfig`.

A configuration file has up to four top-level keys: the `dedup`, `columns`
and `output` sections plus the scalar `n_jobs`. Each section is validated on
its own so an error message names the section it came from, and a stray
top-level key is rejected with a hint pointing at the field it most likely
meant. A top-level `gps_treshold`, for example, is reported as a probable
`dedup.gps_threshold`.
"""
import difflib
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type

import yaml
from pydantic import BaseModel, ValidationError

from .schema import DEFAULT_DEDUP_CONFIG, ColumnConfig, DedupConfig, OutputConfig, ResolverConfig

# Set up a dedicated logger for this module.
logger = logging.getLogger(__name__)

SECTION_MODELS: Dict[str, Type[BaseModel]] = {
    'dedup': DedupConfig,
    'columns': ColumnConfig,
    'output': OutputConfig,
}
SCALAR_KEYS = ('n_jobs',)


class ConfigFileError(ValueError):
    """Raised for unknown top-level keys or a section that is not a mapping."""


def _reject(message: str) -> None:
    logger.critical(message)
    raise ConfigFileError(message)


def _known_field_paths() -> Dict[str, str]:
    """Maps every field name and top-level key to its dotted location."""
    paths = {key: key for key in (*SECTION_MODELS, *SCALAR_KEYS)}
    for section, model in SECTION_MODELS.items():
        for field_name in model.model_fields:
            paths.setdefault(field_name, f'{section}.{field_name}')
    return paths


def _suggest(key: Any) -> str:
    paths = _known_field_paths()
    close = difflib.get_close_matches(str(key), list(paths), n=1, cutoff=0.75)
    return f" (did you mean '{paths[close[0]]}'?)" if close else ''


def _validate_section(name: str, values: Any) -> BaseModel:
    """Validates one section, completing `dedup` from the default matcher settings."""
    if values is None:
        values = {}
    if not isinstance(values, Mapping):
        _reject(f"Config section '{name}' must be a mapping, got {type(values).__name__}")

    if name == 'dedup':
        values = {**DEFAULT_DEDUP_CONFIG.model_dump(), **values}

    try:
        return SECTION_MODELS[name].model_validate(dict(values))
    except ValidationError as e:
        logger.critical(f"Config section '{name}' is invalid:\n{e}")
        raise


def build_config(data: Mapping[str, Any]) -> ResolverConfig:
    """
    Validates raw configuration data section by section.

    Args:
        data: Parsed YAML, typically from `load_raw_config`. Missing sections
            and fields keep their defaults.

    Returns:
        A validated ResolverConfig instance.

    Raises:
        ConfigFileError: If the data is not a mapping, has unknown top-level
            keys, or a section is not a mapping.
        ValidationError: If a field value is invalid. The CRITICAL log line
            names the failing section.
    """
    if not isinstance(data, Mapping):
        _reject(f'Configuration must be a mapping of sections, got {type(data).__name__}')

    unknown = [key for key in data if key not in SECTION_MODELS and key not in SCALAR_KEYS]
    if unknown:
        described = ', '.join(f"'{key}'{_suggest(key)}" for key in unknown)
        _reject(f'Unknown top-level configuration keys: {described}')

    sections = {name: _validate_section(name, data.get(name)) for name in SECTION_MODELS}
    scalars = {key: data[key] for key in SCALAR_KEYS if key in data}

    try:
        return ResolverConfig.model_validate({**sections, **scalars})
    except ValidationError as e:
        logger.critical(f"Top-level configuration settings are invalid:\n{e}")
        raise


def load_raw_config(config_path: Path | str) -> Dict[str, Any]:
    """
    Reads a YAML configuration file without validating it.

    An empty file yields an empty mapping.

    Raises:
        FileNotFoundError: If `config_path` does not exist.
        yaml.YAMLError: If the file is not valid YAML.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        logger.error(f"Configuration file not found at: {config_path}")
        raise FileNotFoundError(f"Configuration file not found at: {config_path}")

    logger.info(f"Reading configuration from: {config_path}")
    try:
        return yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as e:
        logger.critical(f"Configuration file {config_path} is not valid YAML:\n{e}")
        raise


def load_config(config_path: Optional[Path | str] = None) -> ResolverConfig:
    """
    Loads and validates a configuration file.

    Without a path the defaults are returned.

    Raises:
        FileNotFoundError: If `config_path` does not exist.
        ConfigFileError: If the file has unknown keys or malformed sections.
        ValidationError: If a setting is out of range.
    """
    if not config_path:
        logger.info("No configuration path provided. Using default settings.")
        return ResolverConfig()

    return build_config(load_raw_config(config_path))


def save_config(config: ResolverConfig, path: Path | str) -> None:
    """
    Writes a configuration as YAML, one section per top-level key.

    Log levels are written as their numbers, which `load_config` accepts.

    Raises:
        TypeError: If `config` is not a ResolverConfig.
    """
    if not isinstance(config, ResolverConfig):
        raise TypeError(f'Expected a ResolverConfig, got {type(config).__name__}')

    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Saving configuration to: {output_path}")
    output_path.write_text(
        yaml.safe_dump(config.model_dump(mode='json'), sort_keys=False, indent=2)
    )
