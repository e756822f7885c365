"""
Collection Pager

Fetches one page of catalog products at a time from a catalog store.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..common.constants import COLLECTION_AFTER_EVENT
from ..models import CatalogProduct, CollectionFilter, SortDirection
from .events import EventManager

logger = logging.getLogger(__name__)


@dataclass
class PageCursor:
    """Paging state for one sync run. Pages are 1-indexed."""
    collection_filter: CollectionFilter
    page_size: int
    sort_field: str
    sort_direction: SortDirection
    page: int = 1
    exhausted: bool = False
    total_count: Optional[int] = None


class CollectionPager:
    """
    Pages through a store's product collection.

    Sorting is applied by the store before slicing so page boundaries are
    stable while the store is not modified. Store errors (StoreUnavailable)
    propagate; retries are the caller's concern.
    """

    def __init__(self, store, events: Optional[EventManager] = None):
        """
        Initialize the pager.

        Args:
            store: CatalogStore to query
            events: EventManager for the after-page hook (default: no observers)
        """
        self.store = store
        self.events = events or EventManager()

    def open(
        self,
        collection_filter: CollectionFilter,
        page_size: int,
        sort_field: str,
        sort_direction: SortDirection,
    ) -> PageCursor:
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        return PageCursor(
            collection_filter=collection_filter,
            page_size=page_size,
            sort_field=sort_field,
            sort_direction=sort_direction,
        )

    def next(self, cursor: PageCursor) -> Tuple[List[CatalogProduct], bool]:
        """
        Fetch the cursor's current page and advance it.

        Returns:
            (products on the page, whether more pages follow)
        """
        if cursor.exhausted:
            return [], False

        result = self.store.query(
            cursor.collection_filter,
            page=cursor.page,
            page_size=cursor.page_size,
            sort_field=cursor.sort_field,
            sort_direction=cursor.sort_direction,
        )
        page = list(result.items)
        cursor.total_count = result.total_count
        has_more = bool(page) and cursor.page * cursor.page_size < result.total_count

        logger.debug("Fetched page %d (%d items, %d total)",
                     cursor.page, len(page), result.total_count)

        self.events.dispatch(COLLECTION_AFTER_EVENT, pager=self, page=page)

        if has_more:
            cursor.page += 1
        else:
            cursor.exhausted = True

        return page, has_more
