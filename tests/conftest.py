"""Shared test fixtures."""

from pathlib import Path

import pytest

from catalog_sync.models import CatalogProduct, ProductAttribute, SyncConfig, Visibility
from catalog_sync.stores import InMemoryCatalogStore

FIXTURES_DIR = Path(__file__).parent / "fixtures"



@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


def make_product(entity_id: int, **overrides) -> CatalogProduct:
    """Build a product with sensible defaults; keyword arguments override fields."""
    attributes = {
        "name": ProductAttribute(code="name", value=f"Product {entity_id}"),
        "description": ProductAttribute(code="description", value=f"Description {entity_id}"),
        "brand": ProductAttribute(code="brand", value="7", options={"7": "Acme", "8": "Globex"}),
    }
    attributes.update(overrides.pop("attributes", {}))

    fields = dict(
        entity_id=entity_id,
        sku=f"SKU-{entity_id:03d}",
        price=20.0,
        final_price=15.0,
        image=f"/p/{entity_id}.jpg",
        url=f"https://shop.example.com/product-{entity_id}.html",
        category_ids=[3, 5],
        created_at="2024-01-01 00:00:00",
        is_saleable=True,
        visibility=Visibility.BOTH,
        attributes=attributes,
    )
    fields.update(overrides)
    return CatalogProduct(**fields)


@pytest.fixture
def product():
    """A single simple product."""
    return make_product(1)


@pytest.fixture
def configurable_product():
    return make_product(
        2,
        type_id="configurable",
        price=0.0,
        final_price=35.0,
        price_info={"regular_price": 40.0},
    )


@pytest.fixture
def catalog_products():
    """25 products with mixed saleability and visibility."""
    visibilities = [Visibility.BOTH, Visibility.IN_CATALOG, Visibility.IN_SEARCH, Visibility.NOT_VISIBLE]
    return [
        make_product(
            i,
            is_saleable=(i % 3 != 0),
            visibility=visibilities[i % 4],
        )
        for i in range(1, 26)
    ]


@pytest.fixture
def memory_store(catalog_products):
    return InMemoryCatalogStore(catalog_products)


@pytest.fixture
def default_config():
    """Config with no filtering and page size 10."""
    return SyncConfig(page_size=10)


@pytest.fixture
def product_factory():
    """Return the make_product factory."""
    return make_product
