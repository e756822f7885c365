"""
Computed Fields

Built-in field handlers for feed fields that are derived rather than
stored: prices, media URL, product URL, categories, age and sale flag.

Every handler takes (product, context) and returns a feed value.
Price handlers fall back to 0 / False on any error; the others let
errors propagate so the exporter can apply its item error policy.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from ..common.constants import CONFIGURABLE_TYPE_CODE, PRODUCT_MEDIA_PATH, SECONDS_PER_DAY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldContext:
    """Store context passed to every handler call."""
    media_base_url: str = ''
    now: float = field(default_factory=time.time)   # epoch seconds


def price(item, context: FieldContext) -> float:
    """Final (discounted) price."""
    try:
        return float(item.get_final_price())
    except Exception as e:
        logger.debug("price failed for %s: %s", getattr(item, 'entity_id', '?'), e)
        return 0


def list_price(item, context: FieldContext) -> float:
    """Regular price; configurable products use their regular price breakdown."""
    try:
        value = item.get_price()

        if item.type_id == CONFIGURABLE_TYPE_CODE:
            value = item.get_regular_price()

        return float(value)
    except Exception as e:
        logger.debug("list_price failed for %s: %s", getattr(item, 'entity_id', '?'), e)
        return 0


def image(item, context: FieldContext) -> str:
    path = item.get_image() or item.get_small_image() or item.get_thumbnail() or ''
    return f"{context.media_base_url}{PRODUCT_MEDIA_PATH}{path}"


def url(item, context: FieldContext) -> str:
    return item.get_url()


def categories(item, context: FieldContext) -> List[int]:
    return list(item.get_category_ids())


def parse_timestamp(value) -> float:
    """
    Convert a stored timestamp to epoch seconds.

    Accepts datetimes and ISO-8601 strings ("2024-01-31 12:00:00",
    "2024-01-31T12:00:00+02:00"). Naive values are taken as UTC.

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).strip())

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def age(item, context: FieldContext) -> int:
    """Whole days since the product was created."""
    created_at = parse_timestamp(item.created_at)
    return math.floor((context.now - created_at) / SECONDS_PER_DAY)


def on_sale(item, context: FieldContext) -> bool:
    try:
        return item.get_final_price() < item.get_price()
    except Exception as e:
        logger.debug("on_sale failed for %s: %s", getattr(item, 'entity_id', '?'), e)
        return False


DEFAULT_FIELD_HANDLERS = {
    'price': price,
    'list_price': list_price,
    'image': image,
    'url': url,
    'categories': categories,
    'age': age,
    'on_sale': on_sale,
}
