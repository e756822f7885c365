"""End-to-end export of the JSON catalog fixture to a JSON lines file."""

import json

import pytest

from catalog_sync.delivery import BatchFileWriter
from catalog_sync.models import SyncConfig, VisibilityMode
from catalog_sync.stores import InMemoryCatalogStore
from catalog_sync.sync import BatchExporter, CollectionPager

# 2024-01-31 00:00:00 UTC
NOW = 1706659200.0


@pytest.fixture
def exporter(fixtures_dir):
    store = InMemoryCatalogStore.from_json(fixtures_dir / "catalog.json")
    return BatchExporter(
        CollectionPager(store),
        media_base_url="https://shop.example.com/media/",
        clock=lambda: NOW,
    )


def export(exporter, config, path):
    with BatchFileWriter(str(path)) as writer:
        for batch in exporter.run(config):
            writer.write_batch(batch)
    with open(path, "r", encoding="utf-8") as f:
        return [json.loads(line) for line in f]


class TestCatalogExport:
    def test_saleable_and_visible_only(self, exporter, tmp_path):
        config = SyncConfig(saleable_only=True, visibility_mode=VisibilityMode.BOTH)
        records = export(exporter, config, tmp_path / "feed.jsonl")

        assert records == [{
            "name": "Blue Mug",
            "description": "Stoneware mug, 350 ml",
            "price": 9.99,
            "list_price": 12.5,
            "image": "https://shop.example.com/media/catalog/product/m/u/mug-blue.jpg",
            "url": "https://shop.example.com/mug-blue.html",
            "categories": [3, 12],
            "brand": "Acme",
            "sku": "MUG-BLUE",
            "age": 20,
            "on_sale": True,
        }]

    def test_all_products_with_additional_fields(self, exporter, tmp_path):
        config = SyncConfig(page_size=2, additional_fields=("weight", "color"))
        records = export(exporter, config, tmp_path / "feed.jsonl")

        assert [r["sku"] for r in records] == ["MUG-BLUE", "TEE", "POSTER"]
        mug, tee, poster = records

        assert mug["weight"] == 0.4
        assert mug["color"] == "Blue"
        assert "weight" not in tee and "color" not in tee

        assert tee["list_price"] == 24.0
        assert tee["price"] == 18.0
        assert tee["on_sale"] is False
        assert tee["image"].endswith("catalog/product/t/e/tee.jpg")
        assert tee["brand"] == "Globex"

        assert poster["price"] == 5.0
        assert poster["image"] == "https://shop.example.com/media/catalog/product"
        assert poster["brand"] is None
        assert poster["categories"] == []
        assert poster["age"] == 1
