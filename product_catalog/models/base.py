"""Entity Base — shared identity/name fields for every persisted entity.

Invariants:
    - id is an opaque string, generated as a UUID4 at construction when not given
    - Unknown JSON fields are ignored on read (forward-compatible files)
"""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from product_catalog.core.domain_types import EntityId


def new_entity_id() -> EntityId:
    return EntityId(str(uuid4()))


class CatalogEntityModel(BaseModel):
    """Base for Product, Category and Manufacturer."""

    model_config = ConfigDict(extra="ignore")

    id: EntityId = Field(default_factory=new_entity_id)
    name: str
