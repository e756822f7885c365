"""
Batch Exporter

Drives the collection pager across all pages and turns each page of
products into a batch of flat feed records.

Features:
- Lazy, page-at-a-time export (one batch per store page)
- Unknown fields omitted from records, logged once per run
- Item error policy (skip the product or abort the run)
- Page retry policy for an unreachable store
- Duplicate guard on entity_id within a run
"""

import logging
import time
from typing import Any, Callable, Dict, Iterator, List, Optional, Set

from ..common.constants import FIELD_MAP
from ..common.exceptions import ItemExportError, StoreUnavailable, UnknownField
from ..models import ItemErrorPolicy, SyncConfig
from .computed_fields import FieldContext
from .field_resolver import FieldResolver
from .filter_builder import FilterBuilder
from .pager import CollectionPager, PageCursor

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Batch = List[Record]


class BatchExporter:
    """
    Exports the product catalog as batches of records.

    Usage:
        exporter = BatchExporter(CollectionPager(store), media_base_url=media_url)
        for batch in exporter.run(config):
            transport.post_batch(batch)
    """

    def __init__(
        self,
        pager: CollectionPager,
        resolver: Optional[FieldResolver] = None,
        filter_builder: Optional[FilterBuilder] = None,
        media_base_url: str = '',
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the exporter.

        Args:
            pager: Pager over the catalog store
            resolver: Field resolver (default: built-in computed fields)
            filter_builder: Filter builder (default: FilterBuilder())
            media_base_url: Store media base URL for image fields
            clock: Wall-clock source, read once per page
            sleep: Sleep function used between page retries
        """
        self.pager = pager
        self.resolver = resolver or FieldResolver()
        self.filter_builder = filter_builder or FilterBuilder()
        self.media_base_url = media_base_url
        self.clock = clock
        self.sleep = sleep
        self._reset_stats()

    def _reset_stats(self) -> None:
        self.total_batches = 0
        self.total_records = 0
        self.skipped_items = 0
        self.duplicate_items = 0
        self.omitted_fields: Set[str] = set()

    def run(self, config: SyncConfig) -> Iterator[Batch]:
        """
        Export all matching products.

        Each call starts a fresh cursor. The next page is only fetched once
        the caller asks for the next batch.

        Args:
            config: Sync settings for this run

        Yields:
            One batch (list of records) per non-empty store page

        Raises:
            StoreUnavailable: If the store stays unreachable after retries
            ItemExportError: If a product fails and the policy is ABORT
        """
        self._reset_stats()
        fields = config.fields
        cursor = self.pager.open(
            self.filter_builder.build(config),
            config.page_size,
            config.sort_field,
            config.sort_direction,
        )
        seen_ids: Set[Any] = set()

        logger.info("Starting product sync: page_size=%d, fields=%s",
                    config.page_size, ','.join(fields))

        has_more = True
        while has_more:
            page_number = cursor.page
            page, has_more = self._fetch_page(cursor, config)
            if not page and not has_more:
                break

            context = FieldContext(media_base_url=self.media_base_url, now=self.clock())
            batch = []

            for item in page:
                item_id = item.entity_id
                if item_id in seen_ids:
                    logger.warning("Duplicate product %s on page %d, skipped",
                                   item_id, page_number)
                    self.duplicate_items += 1
                    continue
                seen_ids.add(item_id)

                record = self.build_record(item, fields, context, config.item_error_policy)
                if record is None:
                    self.skipped_items += 1
                    continue
                batch.append(record)

            self.total_batches += 1
            self.total_records += len(batch)
            logger.info("Batch %d: %d records", self.total_batches, len(batch))

            yield batch

        logger.info("Product sync finished: %d batches, %d records, %d skipped",
                    self.total_batches, self.total_records, self.skipped_items)

    def _fetch_page(self, cursor: PageCursor, config: SyncConfig):
        """Fetch the next page, retrying StoreUnavailable per config."""
        attempt = 0
        while True:
            try:
                return self.pager.next(cursor)
            except StoreUnavailable as e:
                if attempt >= config.page_retries:
                    logger.error("Store unavailable on page %d: %s", cursor.page, e)
                    raise
                delay = config.retry_delay * 2 ** attempt
                attempt += 1
                logger.warning("Store unavailable on page %d, retry %d/%d in %.1fs...",
                               cursor.page, attempt, config.page_retries, delay)
                self.sleep(delay)

    def build_record(
        self,
        item,
        fields,
        context: FieldContext,
        policy: ItemErrorPolicy = ItemErrorPolicy.SKIP,
    ) -> Optional[Record]:
        """
        Resolve every configured field for one product.

        Args:
            item: Product to export
            fields: Field names in record order (keys renamed per FIELD_MAP)
            context: Store context for computed fields
            policy: Item error policy

        Returns:
            Record, or None if the product was skipped

        Raises:
            ItemExportError: If a field fails and policy is ABORT
        """
        record: Record = {}

        for field_name in fields:
            try:
                record[FIELD_MAP.get(field_name, field_name)] = self.resolver.resolve(
                    item, field_name, context
                )
            except UnknownField:
                if field_name not in self.omitted_fields:
                    logger.warning("Field '%s' has no handler or attribute, omitted", field_name)
                    self.omitted_fields.add(field_name)
            except Exception as e:
                if policy is ItemErrorPolicy.ABORT:
                    raise ItemExportError(item.entity_id, field_name, e) from e
                logger.warning("Skipped product %s: field '%s' failed: %s: %s",
                               item.entity_id, field_name, type(e).__name__, e)
                return None

        return record

    def get_stats(self) -> dict:
        """Return statistics for the last run."""
        return {
            'total_batches': self.total_batches,
            'total_records': self.total_records,
            'skipped_items': self.skipped_items,
            'duplicate_items': self.duplicate_items,
            'omitted_fields': sorted(self.omitted_fields),
        }
