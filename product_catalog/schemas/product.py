"""Product Request Schemas — pydantic DTOs for create and update.

Invariants:
    - Fields are optional at the type level: missing name/price must reach
      validate_product_request so every reason is reported together
    - price is parsed as Decimal (no float rounding)
    - Blank category_name/manufacturer_name mean "clear the reference"

Design Decisions:
    - No Field constraints here: pydantic would stop at the first construction
      error, while the service contract reports all reasons in one message
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from product_catalog.core.domain_types import EntityId


class ProductCreateRequest(BaseModel):
    """Create a product — category/manufacturer are attached later via update."""
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    price: Decimal | None = None


class ProductUpdateRequest(BaseModel):
    """Update a product by id, resolving category/manufacturer by name."""
    model_config = ConfigDict(extra="forbid")

    id: EntityId | None = None
    name: str | None = None
    price: Decimal | None = None
    category_name: str | None = None
    manufacturer_name: str | None = None
