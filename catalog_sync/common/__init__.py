"""
Shared utilities.

The config loader is imported from catalog_sync.common.config_loader.
"""
from .exceptions import (
    CatalogSyncError,
    ConfigError,
    ItemExportError,
    StoreUnavailable,
    UnknownField,
)
from .log_config import setup_logging
