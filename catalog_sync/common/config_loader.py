"""
Configuration Loader

Loads YAML configuration files for product synchronization
and store connection settings.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..models import SyncConfig
from .exceptions import ConfigError

SYNC_CONFIG_FILE = 'sync.yaml'


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
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


def load_config(filename: str, config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'sync.yaml'), or a path
            to a file when it contains a directory component
        config_dir: Directory to read from (default: project config dir)

    Returns:
        Parsed YAML content as dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    path = Path(filename)
    if config_dir is not None:
        config_path = Path(config_dir) / filename
    elif path.parent != Path('.'):
        config_path = path
    else:
        config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_sync_config(filename: str = SYNC_CONFIG_FILE, config_dir: Optional[Path] = None) -> SyncConfig:
    """
    Load product synchronization settings.

    Returns:
        SyncConfig built from the 'product_synchronization' section

    Raises:
        ConfigError: If the section is missing or holds invalid values

    Example:
        product_synchronization:
          saleable_only: true
          visibility: both
          additional_fields: "weight,color"
          page_size: 100
    """
    config = load_config(filename, config_dir)
    section = config.get('product_synchronization')
    if not isinstance(section, dict):
        raise ConfigError(f"Missing 'product_synchronization' section in {filename}")
    return SyncConfig.from_settings(section)


def load_store_settings(filename: str = SYNC_CONFIG_FILE, config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load store connection settings.

    Returns:
        Dictionary with media_base_url, url_suffix and request timeout.
        Credentials are not stored here; they come from the environment.
    """
    config = load_config(filename, config_dir)
    return config.get('store', {}) or {}
