"""Tests for catalog_sync/sync/computed_fields.py"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from catalog_sync.sync import computed_fields
from catalog_sync.sync.computed_fields import FieldContext, parse_timestamp

# 2024-01-31 00:00:00 UTC
NOW = 1706659200.0
CREATED = 1704067200.0   # 2024-01-01 00:00:00 UTC
MEDIA_URL = "https://shop.example.com/media/"


@pytest.fixture
def context():
    return FieldContext(media_base_url=MEDIA_URL, now=NOW)


@pytest.fixture
def failing_item():
    """Item whose price accessors raise."""
    item = MagicMock()
    item.get_final_price.side_effect = RuntimeError("price index missing")
    item.get_price.side_effect = RuntimeError("price index missing")
    item.type_id = "simple"
    return item


class TestPrice:
    def test_final_price_as_float(self, product, context):
        assert computed_fields.price(product, context) == 15.0
        assert isinstance(computed_fields.price(product, context), float)

    def test_exception_gives_zero(self, failing_item, context):
        assert computed_fields.price(failing_item, context) == 0

    def test_missing_price_gives_zero(self, product_factory, context):
        item = product_factory(1, price=None, final_price=None)
        assert computed_fields.price(item, context) == 0

    def test_string_price_converted(self, product_factory, context):
        item = product_factory(1, final_price="12.30")
        assert computed_fields.price(item, context) == 12.3


class TestListPrice:
    def test_regular_price(self, product, context):
        assert computed_fields.list_price(product, context) == 20.0

    def test_configurable_uses_price_breakdown(self, configurable_product, context):
        assert computed_fields.list_price(configurable_product, context) == 40.0

    def test_configurable_without_breakdown_gives_zero(self, product_factory, context):
        item = product_factory(1, type_id="configurable", price_info={})
        assert computed_fields.list_price(item, context) == 0

    def test_exception_gives_zero(self, failing_item, context):
        assert computed_fields.list_price(failing_item, context) == 0


class TestImage:
    def test_uses_main_image(self, product, context):
        assert computed_fields.image(product, context) == (
            "https://shop.example.com/media/catalog/product/p/1.jpg"
        )

    def test_falls_back_to_small_image(self, product_factory, context):
        item = product_factory(1, image=None, small_image="/s/small.jpg", thumbnail="/t/thumb.jpg")
        assert computed_fields.image(item, context).endswith("catalog/product/s/small.jpg")

    def test_falls_back_to_thumbnail(self, product_factory, context):
        item = product_factory(1, image="", small_image=None, thumbnail="/t/thumb.jpg")
        assert computed_fields.image(item, context).endswith("catalog/product/t/thumb.jpg")

    def test_no_image_keeps_base_path(self, product_factory, context):
        item = product_factory(1, image=None)
        assert computed_fields.image(item, context) == "https://shop.example.com/media/catalog/product"

    def test_error_propagates(self, context):
        item = MagicMock()
        item.get_image.side_effect = RuntimeError("media gallery unavailable")
        with pytest.raises(RuntimeError):
            computed_fields.image(item, context)


class TestUrlAndCategories:
    def test_url(self, product, context):
        assert computed_fields.url(product, context) == "https://shop.example.com/product-1.html"

    def test_categories(self, product, context):
        assert computed_fields.categories(product, context) == [3, 5]

    def test_categories_empty(self, product_factory, context):
        assert computed_fields.categories(product_factory(1, category_ids=[]), context) == []


class TestAge:
    def test_whole_days(self, product, context):
        assert computed_fields.age(product, context) == 30

    @pytest.mark.parametrize("elapsed,expected", [
        (0, 0),
        (86399, 0),
        (86400, 1),
        (2 * 86400 - 1, 1),
    ])
    def test_floor_boundaries(self, product, elapsed, expected):
        context = FieldContext(now=CREATED + elapsed)
        assert computed_fields.age(product, context) == expected

    def test_returns_int(self, product, context):
        assert isinstance(computed_fields.age(product, context), int)

    def test_future_creation_date_is_negative(self, product_factory, context):
        item = product_factory(1, created_at="2024-01-31 12:00:00")
        assert computed_fields.age(item, context) == -1

    def test_unparseable_date_raises(self, product_factory, context):
        item = product_factory(1, created_at="not a date")
        with pytest.raises(ValueError):
            computed_fields.age(item, context)

    def test_empty_date_raises(self, product_factory, context):
        with pytest.raises(ValueError):
            computed_fields.age(product_factory(1, created_at=""), context)


class TestParseTimestamp:
    def test_naive_is_utc(self):
        assert parse_timestamp("2024-01-01 00:00:00") == CREATED

    def test_iso_with_offset(self):
        assert parse_timestamp("2024-01-01T02:00:00+02:00") == CREATED

    def test_datetime(self):
        assert parse_timestamp(datetime(2024, 1, 1, tzinfo=timezone.utc)) == CREATED


class TestOnSale:
    def test_discounted(self, product, context):
        assert computed_fields.on_sale(product, context) is True

    def test_equal_prices(self, product_factory, context):
        item = product_factory(1, price=20.0, final_price=20.0)
        assert computed_fields.on_sale(item, context) is False

    def test_exception_gives_false(self, failing_item, context):
        assert computed_fields.on_sale(failing_item, context) is False

    def test_missing_price_gives_false(self, product_factory, context):
        item = product_factory(1, price=None, final_price=10.0)
        assert computed_fields.on_sale(item, context) is False


class TestDefaultHandlers:
    def test_registered_names(self):
        assert set(computed_fields.DEFAULT_FIELD_HANDLERS) == {
            "price", "list_price", "image", "url", "categories", "age", "on_sale",
        }
