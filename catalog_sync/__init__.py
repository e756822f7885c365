"""
Catalog Synchronization Tool

Exports a store's product catalog as a normalized feed for a
product-recommendation service.

Modules:
    models    - Data models (SyncConfig, CatalogProduct, CollectionFilter)
    common    - Shared utilities (config loader, logging, exceptions)
    sync      - Filter building, paging, field resolution and batch export
    stores    - Catalog store adapters (in-memory, Magento REST)
    delivery  - Batch transports (feed API client, JSON lines writer)
"""
