"""
Catalog product models.

Read-side representation of a store product as seen by the sync pipeline.
Store adapters build these; the pipeline only reads them (page hooks may
mutate attributes before field resolution).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .sync_config import Visibility

# Product columns that are also reachable through generic attribute lookup
STATIC_ATTRIBUTES = (
    'entity_id',
    'sku',
    'type_id',
    'price',
    'created_at',
    'is_saleable',
    'visibility',
)


@dataclass
class ProductAttribute:
    """A stored attribute value, optionally backed by an option source."""
    code: str
    value: Any = None
    options: Optional[Dict[str, str]] = None   # stored code -> label

    @property
    def uses_source(self) -> bool:
        return self.options is not None

    def option_text(self, value: Any = None):
        """
        Translate a stored option code into its label.

        Multi-select values ("12,14" or a list) give a list of labels.

        Args:
            value: Stored value (defaults to this attribute's value)

        Returns:
            Label string, list of labels, or None if no option matches
        """
        if value is None:
            value = self.value
        if value is None or not self.options:
            return None

        if isinstance(value, (list, tuple)):
            codes = [str(v).strip() for v in value]
        elif isinstance(value, str) and ',' in value:
            codes = [v.strip() for v in value.split(',')]
        else:
            return self.options.get(str(value))

        labels = [self.options[code] for code in codes if code in self.options]
        return labels or None


@dataclass
class CatalogProduct:
    """
    One product in the store catalog.

    Generic EAV-style attributes (name, description, brand, ...) live in
    ``attributes``. Price, media, URL and category data have dedicated
    accessors because computed feed fields depend on them.
    """

    entity_id: int
    sku: str
    type_id: str = 'simple'
    price: Optional[float] = None
    final_price: Optional[float] = None         # price after catalog rules / specials
    price_info: Dict[str, float] = field(default_factory=dict)  # e.g. regular_price for configurables
    image: Optional[str] = None
    small_image: Optional[str] = None
    thumbnail: Optional[str] = None
    url: str = ''
    category_ids: List[int] = field(default_factory=list)
    created_at: str = ''                        # "YYYY-MM-DD HH:MM:SS", UTC
    is_saleable: bool = True
    visibility: int = Visibility.BOTH
    attributes: Dict[str, ProductAttribute] = field(default_factory=dict)

    def get_attribute(self, code: str) -> Optional[ProductAttribute]:
        """Return the named attribute, or None if the product has no such attribute."""
        attribute = self.attributes.get(code)
        if attribute is not None:
            return attribute
        if code in STATIC_ATTRIBUTES:
            return ProductAttribute(code=code, value=getattr(self, code))
        return None

    def set_attribute(self, code: str, value: Any, options: Optional[Dict[str, str]] = None) -> None:
        self.attributes[code] = ProductAttribute(code=code, value=value, options=options)

    def get_data(self, code: str) -> Any:
        """Raw stored value used for filtering and sorting (None if missing)."""
        attribute = self.get_attribute(code)
        return attribute.value if attribute is not None else None

    def get_final_price(self) -> float:
        if self.final_price is not None:
            return self.final_price
        if self.price is not None:
            return self.price
        raise ValueError(f"Product {self.entity_id} has no price")

    def get_price(self) -> float:
        if self.price is None:
            raise ValueError(f"Product {self.entity_id} has no price")
        return self.price

    def get_regular_price(self) -> float:
        """Regular price component of the computed price breakdown."""
        return self.price_info['regular_price']

    def get_image(self) -> Optional[str]:
        return self.image

    def get_small_image(self) -> Optional[str]:
        return self.small_image

    def get_thumbnail(self) -> Optional[str]:
        return self.thumbnail

    def get_url(self) -> str:
        return self.url

    def get_category_ids(self) -> List[int]:
        return list(self.category_ids)
