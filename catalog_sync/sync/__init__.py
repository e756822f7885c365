"""
Catalog synchronization pipeline.

Modules:
    filter_builder  - SyncConfig -> CollectionFilter
    pager           - Page-at-a-time collection fetching
    events          - After-page hook dispatch
    computed_fields - Built-in derived feed fields
    field_resolver  - Handler-first field lookup
    batch_exporter  - Page -> batch of records driver
"""

from .batch_exporter import Batch, BatchExporter, Record
from .computed_fields import DEFAULT_FIELD_HANDLERS, FieldContext
from .events import EventManager
from .field_resolver import FieldResolver, coerce_value
from .filter_builder import VISIBILITY_FILTERS, FilterBuilder
from .pager import CollectionPager, PageCursor

__all__ = [
    'BatchExporter',
    'Batch',
    'Record',
    'CollectionPager',
    'PageCursor',
    'EventManager',
    'FieldContext',
    'FieldResolver',
    'FilterBuilder',
    'DEFAULT_FIELD_HANDLERS',
    'VISIBILITY_FILTERS',
    'coerce_value',
]
