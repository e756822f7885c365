"""
Shared constants for the project.

This module contains application-wide constants that should have a single source of truth.
"""

# Fields exported for every product, in feed order
DEFAULT_FIELDS = (
    'name',
    'description',
    'price',
    'list_price',
    'image',
    'url',
    'categories',
    'brand',
    'sku',
    'age',
    'on_sale',
)

SECONDS_PER_DAY = 60 * 60 * 24

# Path segment between the media base URL and a product image path
PRODUCT_MEDIA_PATH = 'catalog/product'

# Product type code for parent products built from variant children
CONFIGURABLE_TYPE_CODE = 'configurable'

# Event dispatched after each collection page is fetched
EVENT_PREFIX = 'product'
COLLECTION_AFTER_EVENT = f'catalog_sync_{EVENT_PREFIX}_get_collection_after'

# Store columns renamed in feed records
FIELD_MAP = {
    'entity_id': 'id',
}
