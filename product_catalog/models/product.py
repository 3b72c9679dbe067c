"""Product — the aggregate managed by ProductService.

Invariants:
    - name is trimmed and unique (case-insensitive) among products
    - price > 0 (enforced by request validation, not by the model, so files
      written by older versions still load)
    - category/manufacturer are embedded copies; renaming a Category elsewhere
      does not touch products that already reference it

Design Decisions:
    - price serialized as a JSON number when a float carries it exactly, otherwise
      as its decimal string: the value read back always equals the value written
    - numeric strings are accepted on read
"""

from decimal import Decimal

from pydantic import field_serializer

from product_catalog.models.base import CatalogEntityModel, new_entity_id
from product_catalog.models.category import Category
from product_catalog.models.manufacturer import Manufacturer

# largest integer range a JSON number keeps exact in double-based readers
MAX_EXACT_INT = 2 ** 53


class Product(CatalogEntityModel):
    """Catalog product with optional embedded category and manufacturer."""

    price: Decimal
    category: Category | None = None
    manufacturer: Manufacturer | None = None

    @field_serializer("price", when_used="json")
    def serialize_price(self, price: Decimal) -> int | float | str:
        if not price.is_finite():
            return str(price)
        if price == price.to_integral_value() and abs(price) <= MAX_EXACT_INT:
            return int(price)
        as_float = float(price)
        if Decimal(repr(as_float)) == price:
            return as_float
        return str(price)

    @classmethod
    def from_create_request(cls, request) -> "Product":
        """New product with a fresh id, trimmed name and no dependents."""
        return cls(
            id=new_entity_id(),
            name=request.name.strip(),
            price=request.price,
            category=None,
            manufacturer=None,
        )
