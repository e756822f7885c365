"""
Data models for catalog synchronization.

This module contains data classes with no pipeline logic.
"""

from .filters import CollectionFilter, FieldCondition
from .product import CatalogProduct, ProductAttribute
from .sync_config import (
    ItemErrorPolicy,
    SortDirection,
    SyncConfig,
    Visibility,
    VisibilityMode,
    parse_additional_fields,
)

__all__ = [
    'CatalogProduct',
    'ProductAttribute',
    'CollectionFilter',
    'FieldCondition',
    'SyncConfig',
    'Visibility',
    'VisibilityMode',
    'SortDirection',
    'ItemErrorPolicy',
    'parse_additional_fields',
]
