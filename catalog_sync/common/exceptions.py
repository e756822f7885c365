"""Catalog sync exceptions.

All pipeline exceptions inherit from CatalogSyncError.
"""


class CatalogSyncError(Exception):
    """Base exception for catalog synchronization."""

    pass


class ConfigError(CatalogSyncError):
    """Raised when sync configuration is missing or invalid."""

    pass


class StoreUnavailable(CatalogSyncError):
    """Raised when the catalog store cannot be reached."""

    pass


class UnknownField(CatalogSyncError):
    """Raised when a field name matches no handler and no product attribute."""

    def __init__(self, field_name: str, item_id=None):
        self.field_name = field_name
        self.item_id = item_id
        super().__init__(f"Unknown field '{field_name}' for item {item_id}")


class ItemExportError(CatalogSyncError):
    """Raised when a product cannot be exported and the run is set to abort."""

    def __init__(self, item_id, field_name: str, cause: Exception):
        self.item_id = item_id
        self.field_name = field_name
        self.cause = cause
        super().__init__(
            f"Item {item_id} failed on field '{field_name}': "
            f"{type(cause).__name__}: {cause}"
        )
