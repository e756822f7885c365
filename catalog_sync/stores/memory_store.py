"""
In-Memory Catalog Store

Holds products in a list and answers paged queries locally.
Used for fixtures, offline runs from JSON exports, and tests.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from ..common.exceptions import StoreUnavailable
from ..models import CatalogProduct, CollectionFilter, ProductAttribute, SortDirection
from .base import CatalogStore, QueryResult

logger = logging.getLogger(__name__)


def product_from_dict(data: Dict[str, Any]) -> CatalogProduct:
    """
    Build a product from a plain dict (JSON export format).

    Attribute values are either plain values or
    {"value": ..., "options": {code: label}} for option-source attributes.
    """
    attributes = {}
    for code, raw in (data.get('attributes') or {}).items():
        if isinstance(raw, dict) and 'value' in raw:
            attributes[code] = ProductAttribute(code=code, value=raw['value'], options=raw.get('options'))
        else:
            attributes[code] = ProductAttribute(code=code, value=raw)

    return CatalogProduct(
        entity_id=data['entity_id'],
        sku=data.get('sku', ''),
        type_id=data.get('type_id', 'simple'),
        price=data.get('price'),
        final_price=data.get('final_price'),
        price_info=dict(data.get('price_info') or {}),
        image=data.get('image'),
        small_image=data.get('small_image'),
        thumbnail=data.get('thumbnail'),
        url=data.get('url', ''),
        category_ids=list(data.get('category_ids') or []),
        created_at=data.get('created_at', ''),
        is_saleable=data.get('is_saleable', True),
        visibility=data.get('visibility', 4),
        attributes=attributes,
    )


def _sort_key(sort_field: str):
    def key(product: CatalogProduct):
        value = product.get_data(sort_field)
        # None sorts first; entity_id breaks ties
        return (value is not None, value if value is not None else 0, product.entity_id)
    return key


class InMemoryCatalogStore(CatalogStore):
    """
    Catalog store backed by a list of products.

    Usage:
        store = InMemoryCatalogStore(products)
        store = InMemoryCatalogStore.from_json("data/catalog.json")
    """

    def __init__(self, products: Iterable[CatalogProduct] = (), available: bool = True):
        """
        Initialize the store.

        Args:
            products: Products in the catalog
            available: If False, every query raises StoreUnavailable
        """
        self.products: List[CatalogProduct] = list(products)
        self.available = available
        self.queries_made = 0

    @classmethod
    def from_json(cls, path) -> 'InMemoryCatalogStore':
        """Load products from a JSON file holding a list (or {"items": [...]})."""
        with open(Path(path), 'r', encoding='utf-8') as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get('items', [])
        products = [product_from_dict(item) for item in data]
        logger.info("Loaded %d products from %s", len(products), path)
        return cls(products)

    def query(
        self,
        collection_filter: CollectionFilter,
        page: int,
        page_size: int,
        sort_field: str,
        sort_direction: SortDirection,
    ) -> QueryResult:
        self.queries_made += 1
        if not self.available:
            raise StoreUnavailable("In-memory store is marked unavailable")
        if page < 1:
            raise ValueError(f"Pages are 1-indexed, got {page}")

        matching = [p for p in self.products if collection_filter.matches(p)]
        matching.sort(key=_sort_key(sort_field), reverse=sort_direction is SortDirection.DESC)

        start = (page - 1) * page_size
        return QueryResult(items=matching[start:start + page_size], total_count=len(matching))
