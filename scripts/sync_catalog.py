#!/usr/bin/env python3
"""
Catalog Sync Script

Runs one product synchronization: reads the catalog page by page,
builds feed records and ships each batch to the recommendation
service (or to a JSON lines file).

Usage:
    # Magento store -> feed API (credentials from .env / environment)
    python3 scripts/sync_catalog.py

    # Offline: JSON export -> JSON lines file
    python3 scripts/sync_catalog.py --store-json data/catalog.json --output output/products.jsonl

    # Extra attributes and a different config file
    python3 scripts/sync_catalog.py --config config/sync.yaml --additional-fields "weight,color"

Environment:
    MAGENTO_BASE_URL, MAGENTO_ACCESS_TOKEN - store REST API
    FEED_API_URL, FEED_API_KEY             - recommendation service feed endpoint

Exit codes:
    0 = run completed and every batch was delivered
    1 = configuration error, store failure or undelivered batches
"""

import argparse
import dataclasses
import logging
import os
import sys
from pathlib import Path

import requests
from dotenv import load_dotenv

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from catalog_sync.common.config_loader import load_store_settings, load_sync_config
from catalog_sync.common.exceptions import CatalogSyncError
from catalog_sync.common.log_config import setup_logging
from catalog_sync.delivery import BatchFileWriter, FeedAPIClient
from catalog_sync.models import parse_additional_fields
from catalog_sync.stores import InMemoryCatalogStore, MagentoRESTStore
from catalog_sync.sync import BatchExporter, CollectionPager

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)


def build_store(args, store_settings: dict):
    """Create the catalog store and its media base URL."""
    if args.store_json:
        store = InMemoryCatalogStore.from_json(args.store_json)
        return store, store_settings.get("media_base_url", "")

    base_url = os.environ.get("MAGENTO_BASE_URL")
    token = os.environ.get("MAGENTO_ACCESS_TOKEN")
    if not base_url or not token:
        raise CatalogSyncError("Set MAGENTO_BASE_URL and MAGENTO_ACCESS_TOKEN, or use --store-json")

    store = MagentoRESTStore(
        base_url,
        access_token=token,
        url_suffix=store_settings.get("url_suffix", ".html"),
        timeout=int(store_settings.get("timeout", 30)),
    )
    return store, store_settings.get("media_base_url") or store.media_base_url


def build_sink(args):
    """Create the batch sink: a file writer or the feed API client."""
    if args.output:
        return BatchFileWriter(args.output)

    endpoint = os.environ.get("FEED_API_URL")
    api_key = os.environ.get("FEED_API_KEY")
    if not endpoint or not api_key:
        raise CatalogSyncError("Set FEED_API_URL and FEED_API_KEY, or use --output")
    return FeedAPIClient(endpoint, api_key=api_key)


def run_sync(args) -> int:
    config_path = Path(args.config)
    config = load_sync_config(config_path.name, config_path.parent)
    store_settings = load_store_settings(config_path.name, config_path.parent)

    if args.additional_fields is not None:
        config = dataclasses.replace(
            config, additional_fields=parse_additional_fields(args.additional_fields)
        )

    store, media_base_url = build_store(args, store_settings)
    exporter = BatchExporter(CollectionPager(store), media_base_url=media_base_url)

    failed_batches = 0
    with store, build_sink(args) as sink:
        for page_number, batch in enumerate(exporter.run(config), 1):
            if isinstance(sink, BatchFileWriter):
                sink.write_batch(batch)
            elif not sink.post_batch(batch):
                failed_batches += 1
                logger.error("Batch %d was not delivered", page_number)

            if args.limit_pages and page_number >= args.limit_pages:
                logger.info("Stopping after %d pages (--limit-pages)", page_number)
                break

    stats = exporter.get_stats()
    print("\n" + "=" * 60)
    print("Catalog Sync Summary")
    print("=" * 60)
    print(f"  Batches:          {stats['total_batches']}")
    print(f"  Records:          {stats['total_records']}")
    print(f"  Skipped items:    {stats['skipped_items']}")
    print(f"  Duplicate items:  {stats['duplicate_items']}")
    if stats['omitted_fields']:
        print(f"  Omitted fields:   {', '.join(stats['omitted_fields'])}")
    if failed_batches:
        print(f"  Failed batches:   {failed_batches}")
    print("=" * 60)

    return 1 if failed_batches else 0


def main():
    parser = argparse.ArgumentParser(
        description="Sync the product catalog to the recommendation feed"
    )
    parser.add_argument(
        "--config",
        default=os.path.join(os.path.dirname(__file__), "..", "config", "sync.yaml"),
        help="Sync settings YAML file (default: config/sync.yaml)",
    )
    parser.add_argument(
        "--store-json",
        metavar="PATH",
        help="Read products from a JSON export instead of the Magento API",
    )
    parser.add_argument(
        "--output",
        metavar="PATH",
        help="Write batches to a JSON lines file instead of the feed API",
    )
    parser.add_argument(
        "--additional-fields",
        metavar="FIELDS",
        help="Comma-separated fields to append (overrides the config file)",
    )
    parser.add_argument(
        "--limit-pages",
        type=int,
        default=0,
        metavar="N",
        help="Stop after N pages (default: 0 = all)",
    )
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        sys.exit(run_sync(args))
    except (CatalogSyncError, FileNotFoundError, requests.HTTPError) as e:
        logger.error("Sync failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
