"""Manufacturer — product maker, created on demand by name and never edited."""

from product_catalog.models.base import CatalogEntityModel


class Manufacturer(CatalogEntityModel):
    """Persisted in manufacturers.json; referenced by copy from Product.manufacturer."""
