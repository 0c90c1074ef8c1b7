"""Configuration loading - YAML file merged over built-in defaults."""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/config.yaml"

DEFAULTS: Dict[str, Any] = {
    'pricing': {'provider': 'estimate', 'seed': None},
    'cache': {'file': 'data/results/pricing_cache.json', 'ttl_hours': 24},
    'store': {'db_file': 'data/results/analyses.db'},
    'accounts': {
        'db_file': 'data/results/users.db',
        'trial_days': 14,
        'free_daily_limit': 5,
        'free_compare_limit': 2,
        'max_compare': 5,
    },
    'llm': {'api_key': None, 'model': 'gemini-pro', 'timeout': 30.0},
    'dns': {'timeout': 3.0},
    'whois': {'rate_limit_delay': 1.5},
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML; a missing file yields the defaults."""
    config_file = Path(config_path or DEFAULT_CONFIG_PATH)
    if not config_file.exists():
        if config_path:
            logger.warning("Config file %s not found, using defaults", config_file)
        return copy.deepcopy(DEFAULTS)

    with open(config_file) as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {config_file} must contain a mapping")
    return _merge(DEFAULTS, loaded)
