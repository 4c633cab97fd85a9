"""
Configuration Loader

Loads YAML configuration files for commit defaults, facet keyword
vocabularies and address regions.
"""

import os
from pathlib import Path
from typing import Any, Dict, List

import yaml

CONFIG_DIR_ENV = "VENDOR_ONBOARDING_CONFIG_DIR"


def _get_config_dir() -> Path:
    """
    Get the config directory path.

    Order: $VENDOR_ONBOARDING_CONFIG_DIR, the repository config/ next to
    the package, then ./config.
    """
    override = os.getenv(CONFIG_DIR_ENV)
    if override:
        override_dir = Path(override)
        if not override_dir.is_dir():
            raise FileNotFoundError(f"{CONFIG_DIR_ENV} is not a directory: {override_dir}")
        return override_dir

    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'commit_defaults.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_commit_defaults() -> Dict[str, Any]:
    """
    Load defaults applied to the vendor payload at commit time.

    Returns:
        Dictionary with 'store' (per-field default strings), 'vendor'
        (fixed payload constants) and 'endpoints' (Ribbon paths)

    Example:
        {
            'store': {'paymentTerms': 'Net 30', ...},
            'vendor': {'roleType': 1, 'contractType': 'Online Only', ...},
            'endpoints': {'vendor_create': '/vendor-create', ...},
        }
    """
    return load_config('commit_defaults.yaml')


def load_facet_keywords() -> Dict[str, Dict[str, Any]]:
    """
    Load the closed color and material vocabularies.

    Returns:
        Dictionary keyed by facet name with 'keywords' and 'fallback'

    Example:
        {
            'color': {'keywords': ['red', 'blue', ...], 'fallback': 'black'},
            'material': {'keywords': ['cotton', ...], 'fallback': 'Cotton'},
        }
    """
    config = load_config('facet_keywords.yaml')
    return config.get('facets', {})


def load_address_regions() -> Dict[str, Dict[str, Any]]:
    """
    Load state/province tables used for address inference.

    Returns:
        Dictionary keyed by country name with a 'regions' code → name map
    """
    config = load_config('address_regions.yaml')
    return config.get('countries', {})


def get_region_lookup(countries: Dict[str, Dict[str, Any]]) -> Dict[str, tuple]:
    """
    Build a lowercase lookup from region code or name to (country, region name).

    Args:
        countries: Output of load_address_regions()

    Returns:
        Dictionary mapping lowercase code/name to (country, canonical region name)

    Example:
        {
            'ca': ('United States', 'California'),
            'california': ('United States', 'California'),
            'on': ('Canada', 'Ontario'),
            ...
        }
    """
    lookup: Dict[str, tuple] = {}
    for country, data in countries.items():
        for code, name in (data.get('regions') or {}).items():
            lookup.setdefault(str(code).lower(), (country, name))
            lookup.setdefault(str(name).lower(), (country, name))
    return lookup


def get_keyword_list(facets: Dict[str, Dict[str, Any]], facet: str) -> List[str]:
    """Return the lowercase keyword list for one facet (empty if unknown)."""
    return [str(k).lower() for k in (facets.get(facet) or {}).get('keywords', [])]
