"""Category — product grouping, created on demand by name and never edited."""

from product_catalog.models.base import CatalogEntityModel


class Category(CatalogEntityModel):
    """Persisted in categories.json; referenced by copy from Product.category."""
