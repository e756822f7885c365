"""
Catalog store adapters.

Modules:
    base         - CatalogStore interface and QueryResult
    memory_store - In-memory store (fixtures, JSON exports)
    magento_store - Magento 2 REST API store
"""

from .base import CatalogStore, QueryResult
from .magento_store import MagentoRESTStore, build_search_criteria
from .memory_store import InMemoryCatalogStore, product_from_dict

__all__ = [
    'CatalogStore',
    'QueryResult',
    'InMemoryCatalogStore',
    'MagentoRESTStore',
    'build_search_criteria',
    'product_from_dict',
]
