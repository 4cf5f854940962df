# weedtrack/utils/config.py

import logging
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

# Flat keys of the detector node settings file
LEGACY_TRACKER_KEYS = {
    'filter_distance_tolerance_cm': 'distance_tolerance',
}
LEGACY_DETECTOR_KEYS = {
    'min_weed_size_cm': 'min_size',
    'max_weed_size_cm': 'max_size',
}


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Configuration in {config_path} must be a mapping")

    logger.debug(f"Loaded configuration from {config_path}")
    return config


def _section(config: Dict[str, Any], name: str, legacy_keys: Dict[str, str]) -> Dict[str, Any]:
    section = {key: config[legacy] for legacy, key in legacy_keys.items() if legacy in config}
    section.update(config.get(name) or {})
    section.pop('enabled', None)
    return section


def tracker_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract the tracker settings from a full configuration.

    Keys in the ``tracking`` section win over legacy flat keys.

    Args:
        config: Full configuration dictionary

    Returns:
        Configuration dictionary for ObjectTracker
    """
    return _section(config, 'tracking', LEGACY_TRACKER_KEYS)


def detector_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Extract the detector settings from a full configuration."""
    return _section(config, 'detection', LEGACY_DETECTOR_KEYS)
