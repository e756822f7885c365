"""
Field Resolver

Resolves a feed field for one product: a registered handler wins,
otherwise the product attribute of the same name is used.
"""

from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from ..common.exceptions import UnknownField
from .computed_fields import DEFAULT_FIELD_HANDLERS, FieldContext

FieldHandler = Callable[[Any, FieldContext], Any]


def coerce_value(value: Any) -> Any:
    """Convert a stored attribute value into a feed value."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (tuple, set, frozenset)):
        return list(value)
    return value


class FieldResolver:
    """
    Two-tier field lookup.

    Usage:
        resolver = FieldResolver()                       # built-in handlers
        resolver = FieldResolver({'brand': brand_fn})    # built-ins + override
        value = resolver.resolve(product, 'price', context)
    """

    def __init__(
        self,
        handlers: Optional[Mapping[str, FieldHandler]] = None,
        include_defaults: bool = True,
    ):
        """
        Initialize the resolver.

        Args:
            handlers: Extra or overriding handlers by field name
            include_defaults: Whether to register the built-in computed fields
        """
        registry = dict(DEFAULT_FIELD_HANDLERS) if include_defaults else {}
        registry.update(handlers or {})
        self.handlers = MappingProxyType(registry)

    def has_handler(self, field_name: str) -> bool:
        return field_name in self.handlers

    def resolve(self, item, field_name: str, context: FieldContext) -> Any:
        """
        Resolve one field for one product.

        Raises:
            UnknownField: If no handler and no attribute exists for the name
        """
        handler = self.handlers.get(field_name)
        if handler is not None:
            return handler(item, context)

        attribute = item.get_attribute(field_name)
        if attribute is None:
            raise UnknownField(field_name, getattr(item, 'entity_id', None))

        if attribute.uses_source:
            return attribute.option_text(attribute.value)

        return coerce_value(attribute.value)
