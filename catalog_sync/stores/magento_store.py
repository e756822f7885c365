"""
Magento REST Catalog Store

Reads the product catalog through the Magento 2 REST API.

Endpoint reference:
- GET /rest/V1/products?searchCriteria[...]
- GET /rest/V1/products/attributes/{attributeCode}
- GET /rest/V1/configurable-products/{sku}/children
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

import requests

from ..common.constants import CONFIGURABLE_TYPE_CODE
from ..common.exceptions import StoreUnavailable
from ..models import CatalogProduct, CollectionFilter, ProductAttribute, SortDirection
from .base import CatalogStore, QueryResult

logger = logging.getLogger(__name__)

# Filter fields that are stored under another name in the REST API
FIELD_ALIASES = {
    'is_saleable': 'status',
}

# Custom attributes consumed by CatalogProduct fields, never option-backed
RESERVED_ATTRIBUTES = {
    'image', 'small_image', 'thumbnail', 'url_key', 'category_ids',
    'special_price', 'special_from_date', 'special_to_date',
}

OPTION_INPUT_TYPES = {'select', 'multiselect'}

STATUS_ENABLED = 1

# Placeholder Magento stores for an unset image role
NO_SELECTION = 'no_selection'


def build_search_criteria(
    collection_filter: CollectionFilter,
    page: int,
    page_size: int,
    sort_field: str,
    sort_direction: SortDirection,
) -> Dict[str, str]:
    """
    Translate a collection filter into searchCriteria query parameters.

    Each condition gets its own filter group, so conditions are ANDed.
    """
    params = {}

    for i, condition in enumerate(collection_filter.conditions):
        field = FIELD_ALIASES.get(condition.field, condition.field)
        value = condition.value

        if condition.field == 'is_saleable':
            value = STATUS_ENABLED if value else 2

        if condition.operator == 'in':
            value = ','.join(str(int(v)) if isinstance(v, int) else str(v) for v in value)
        elif isinstance(value, bool):
            value = int(value)

        prefix = f"searchCriteria[filter_groups][{i}][filters][0]"
        params[f"{prefix}[field]"] = field
        params[f"{prefix}[value]"] = str(value)
        params[f"{prefix}[condition_type]"] = condition.operator

    params["searchCriteria[sortOrders][0][field]"] = sort_field
    params["searchCriteria[sortOrders][0][direction]"] = sort_direction.value
    params["searchCriteria[pageSize]"] = str(page_size)
    params["searchCriteria[currentPage]"] = str(page)
    return params


def _to_float(value) -> Optional[float]:
    if value is None or value == '':
        return None
    return float(value)


def _media_path(value) -> Optional[str]:
    if not value or value == NO_SELECTION:
        return None
    return value


def _special_price_active(custom: Dict[str, Any], today: date) -> bool:
    start = custom.get('special_from_date')
    end = custom.get('special_to_date')
    if start and date.fromisoformat(str(start)[:10]) > today:
        return False
    if end and date.fromisoformat(str(end)[:10]) < today:
        return False
    return True


class MagentoRESTStore(CatalogStore):
    """
    Catalog store backed by the Magento 2 REST API.

    Usage:
        store = MagentoRESTStore("https://shop.example.com", access_token="...")
        result = store.query(collection_filter, page=1, page_size=100,
                             sort_field="entity_id", sort_direction=SortDirection.ASC)
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        url_suffix: str = '.html',
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the store.

        Args:
            base_url: Store base URL (e.g. https://shop.example.com)
            access_token: Integration access token (Bearer)
            url_suffix: Product URL suffix appended to url_key
            timeout: Request timeout in seconds
            session: Pre-configured session (default: new session)
        """
        self.base_url = base_url.rstrip('/')
        self.url_suffix = url_suffix
        self.timeout = timeout

        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        })

        self._attribute_options: Dict[str, Optional[Dict[str, str]]] = {}

    def close(self):
        self.session.close()

    @property
    def media_base_url(self) -> str:
        return f"{self.base_url}/media/"

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """
        GET a REST endpoint.

        Raises:
            StoreUnavailable: On connection errors, timeouts and 5xx responses
            requests.HTTPError: On other error responses (auth, bad request)
        """
        url = f"{self.base_url}/rest/V1/{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise StoreUnavailable(f"Request timeout: {path}")
        except requests.exceptions.RequestException as e:
            raise StoreUnavailable(f"Request failed: {e}")

        if response.status_code >= 500:
            raise StoreUnavailable(f"HTTP {response.status_code} on {path}: {response.text[:200]}")

        response.raise_for_status()
        return response.json()

    def query(
        self,
        collection_filter: CollectionFilter,
        page: int,
        page_size: int,
        sort_field: str,
        sort_direction: SortDirection,
    ) -> QueryResult:
        params = build_search_criteria(collection_filter, page, page_size, sort_field, sort_direction)
        logger.debug("Querying products page %d (size %d, sort %s %s)",
                     page, page_size, sort_field, sort_direction.value)
        result = self._get("products", params)

        # Magento clamps currentPage to the last page; don't repeat it
        total_count = int(result.get("total_count", 0))
        if (page - 1) * page_size >= total_count:
            return QueryResult(items=[], total_count=total_count)

        # status=1 does not cover stock; drop converted products the filter rejects
        items = [self.to_product(item) for item in result.get("items", [])]
        items = [product for product in items if collection_filter.matches(product)]
        return QueryResult(items=items, total_count=total_count)

    def get_attribute_options(self, code: str) -> Optional[Dict[str, str]]:
        """Option code -> label map for select attributes (None for others). Cached."""
        if code not in self._attribute_options:
            metadata = self._get(f"products/attributes/{code}")
            options = None
            if metadata.get("frontend_input") in OPTION_INPUT_TYPES:
                options = {
                    str(option["value"]): option["label"]
                    for option in metadata.get("options", [])
                    if str(option.get("value", "")).strip()
                }
            self._attribute_options[code] = options
        return self._attribute_options[code]

    def get_children_prices(self, sku: str) -> List[Dict[str, float]]:
        """Price and final price of each child of a configurable product."""
        prices = []
        for child in self._get(f"configurable-products/{sku}/children"):
            custom = {c["attribute_code"]: c.get("value") for c in child.get("custom_attributes", [])}
            price = _to_float(child.get("price"))
            if price is None:
                continue
            special = _to_float(custom.get("special_price"))
            final = special if special is not None and special < price else price
            prices.append({"price": price, "final_price": final})
        return prices

    def to_product(self, data: Dict[str, Any]) -> CatalogProduct:
        """Convert a REST product payload into a CatalogProduct."""
        custom = {c["attribute_code"]: c.get("value") for c in data.get("custom_attributes", [])}
        extension = data.get("extension_attributes") or {}

        price = _to_float(data.get("price"))
        final_price = price
        special = _to_float(custom.get("special_price"))
        if (special is not None and price is not None and special < price
                and _special_price_active(custom, date.today())):
            final_price = special

        price_info = {}
        if data.get("type_id") == CONFIGURABLE_TYPE_CODE:
            children = self.get_children_prices(data["sku"])
            if children:
                price_info["regular_price"] = min(c["price"] for c in children)
                final_price = min(c["final_price"] for c in children)

        category_ids = custom.get("category_ids")
        if category_ids is None:
            category_ids = [link["category_id"] for link in extension.get("category_links", [])]

        stock_item = extension.get("stock_item") or {}
        is_saleable = (data.get("status") == STATUS_ENABLED
                       and stock_item.get("is_in_stock", True))

        url_key = custom.get("url_key")
        url = f"{self.base_url}/{url_key}{self.url_suffix}" if url_key else ''

        attributes = {"name": ProductAttribute(code="name", value=data.get("name"))}
        for code, value in custom.items():
            if code in RESERVED_ATTRIBUTES:
                continue
            attributes[code] = ProductAttribute(
                code=code, value=value, options=self.get_attribute_options(code)
            )

        return CatalogProduct(
            entity_id=data["id"],
            sku=data.get("sku", ''),
            type_id=data.get("type_id", 'simple'),
            price=price,
            final_price=final_price,
            price_info=price_info,
            image=_media_path(custom.get("image")),
            small_image=_media_path(custom.get("small_image")),
            thumbnail=_media_path(custom.get("thumbnail")),
            url=url,
            category_ids=[int(c) for c in category_ids],
            created_at=data.get("created_at", ''),
            is_saleable=bool(is_saleable),
            visibility=data.get("visibility", 4),
            attributes=attributes,
        )
