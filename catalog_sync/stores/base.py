"""Catalog store interface.

Stores are the paged data source behind the sync pipeline. They are
read-only from the pipeline's point of view.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from ..models import CatalogProduct, CollectionFilter, SortDirection


@dataclass
class QueryResult:
    """One page of products plus the total size of the filtered collection."""
    items: List[CatalogProduct] = field(default_factory=list)
    total_count: int = 0


class CatalogStore(ABC):
    """Abstract base class for catalog stores."""

    @abstractmethod
    def query(
        self,
        collection_filter: CollectionFilter,
        page: int,
        page_size: int,
        sort_field: str,
        sort_direction: SortDirection,
    ) -> QueryResult:
        """Return one sorted, filtered page (1-indexed).

        Raises:
            StoreUnavailable: If the store cannot be reached
        """
        pass

    def close(self):
        """Release connections held by the store."""

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
