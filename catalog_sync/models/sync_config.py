"""
Sync configuration model.

Immutable settings for one catalog synchronization run.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Mapping, Optional, Tuple

from ..common.constants import DEFAULT_FIELDS
from ..common.exceptions import ConfigError


class Visibility(IntEnum):
    """Platform visibility codes stored on each product."""
    NOT_VISIBLE = 1
    IN_CATALOG = 2
    IN_SEARCH = 3
    BOTH = 4


class VisibilityMode(Enum):
    """Which visibility classes a sync run exports."""
    IN_CATALOG = 'in_catalog'
    IN_SEARCH = 'in_search'
    BOTH = 'both'
    UNSET = 'unset'


class SortDirection(Enum):
    ASC = 'ASC'
    DESC = 'DESC'


class ItemErrorPolicy(Enum):
    """What to do when a computed field without fallback fails for an item."""
    SKIP = 'skip'
    ABORT = 'abort'


# Visibility codes accepted in place of mode names (platform config stores codes)
_VISIBILITY_CODES = {
    Visibility.IN_CATALOG: VisibilityMode.IN_CATALOG,
    Visibility.IN_SEARCH: VisibilityMode.IN_SEARCH,
    Visibility.BOTH: VisibilityMode.BOTH,
}


def parse_additional_fields(value: Optional[Any]) -> Tuple[str, ...]:
    """
    Split a comma-separated field list.

    Entries are trimmed and empty entries dropped. Duplicates are kept.

    Args:
        value: Comma-separated string, a sequence of names, or None

    Returns:
        Tuple of field names in configured order
    """
    if not value:
        return ()

    if isinstance(value, str):
        parts = value.split(',')
    else:
        parts = [str(part) for part in value]

    return tuple(part.strip() for part in parts if part.strip())


def parse_visibility_mode(value: Optional[Any]) -> VisibilityMode:
    """
    Parse a visibility mode from a name, platform code or empty value.

    Raises:
        ConfigError: If the value is not a known mode
    """
    if value is None or value == '':
        return VisibilityMode.UNSET
    if isinstance(value, VisibilityMode):
        return value

    if isinstance(value, int) or str(value).isdigit():
        try:
            return _VISIBILITY_CODES[Visibility(int(value))]
        except (ValueError, KeyError):
            raise ConfigError(f"Unsupported visibility code: {value}")

    try:
        return VisibilityMode(str(value).strip().lower())
    except ValueError:
        raise ConfigError(f"Unknown visibility mode: {value}")


def _parse_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


def _parse_enum(enum_cls, value, normalize):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(normalize(str(value).strip()))
    except ValueError:
        raise ConfigError(f"Invalid {enum_cls.__name__}: {value}")


@dataclass(frozen=True)
class SyncConfig:
    """
    Settings for one product synchronization run.

    Field Groups:
    - Filtering: saleable_only, visibility_mode
    - Fields: additional_fields (appended after DEFAULT_FIELDS)
    - Paging: page_size, sort_field, sort_direction
    - Failure handling: item_error_policy, page_retries, retry_delay
    """

    saleable_only: bool = False
    visibility_mode: VisibilityMode = VisibilityMode.UNSET
    additional_fields: Tuple[str, ...] = ()
    page_size: int = 100
    sort_field: str = 'entity_id'
    sort_direction: SortDirection = SortDirection.ASC
    item_error_policy: ItemErrorPolicy = ItemErrorPolicy.SKIP
    page_retries: int = 0
    retry_delay: float = 1.0

    def __post_init__(self):
        """Validate settings after initialization."""
        if not isinstance(self.page_size, int) or self.page_size <= 0:
            raise ConfigError(f"page_size must be a positive integer, got {self.page_size!r}")
        if not self.sort_field:
            raise ConfigError("sort_field is required")
        if self.page_retries < 0:
            raise ConfigError("page_retries must not be negative")
        if self.retry_delay < 0:
            raise ConfigError("retry_delay must not be negative")

    @property
    def fields(self) -> Tuple[str, ...]:
        """Default fields followed by additional fields, not deduplicated."""
        return DEFAULT_FIELDS + tuple(self.additional_fields)

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> 'SyncConfig':
        """
        Build a config from a settings mapping (e.g. a YAML section).

        Args:
            settings: Mapping with optional keys saleable_only, visibility,
                additional_fields, page_size, sort_field, sort_direction,
                item_error_policy, page_retries, retry_delay

        Returns:
            SyncConfig instance

        Raises:
            ConfigError: If any value is invalid
        """
        defaults = cls()

        try:
            page_size = int(settings.get('page_size', defaults.page_size))
            page_retries = int(settings.get('page_retries', defaults.page_retries))
            retry_delay = float(settings.get('retry_delay', defaults.retry_delay))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid numeric setting: {e}")

        return cls(
            saleable_only=_parse_bool(settings.get('saleable_only', False)),
            visibility_mode=parse_visibility_mode(settings.get('visibility')),
            additional_fields=parse_additional_fields(settings.get('additional_fields')),
            page_size=page_size,
            sort_field=str(settings.get('sort_field') or defaults.sort_field),
            sort_direction=_parse_enum(
                SortDirection, settings.get('sort_direction', 'ASC'), str.upper
            ),
            item_error_policy=_parse_enum(
                ItemErrorPolicy, settings.get('item_error_policy', 'skip'), str.lower
            ),
            page_retries=page_retries,
            retry_delay=retry_delay,
        )

