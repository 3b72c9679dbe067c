"""Entity Models — pydantic models for every persisted entity type.

Invariants:
    - Field names match the persisted JSON layout (id, name, price, category, manufacturer)
    - Every entity satisfies the CatalogEntity protocol (has id, has name)

Design Decisions:
    - One file per entity for locality
    - Product embeds full Category/Manufacturer copies, not foreign keys
"""

from product_catalog.models.category import Category  # noqa: F401
from product_catalog.models.manufacturer import Manufacturer  # noqa: F401
from product_catalog.models.product import Product  # noqa: F401
