"""Bootstrap — builds the stores and the product service from settings.

Invariants:
    - One JsonEntityStore per entity type, all inside settings.data_dir
    - Each call returns a fresh service with its own cache (no module-level singleton)
"""

import logging

from product_catalog.config import Settings, get_settings
from product_catalog.infrastructure.json_store import JsonEntityStore
from product_catalog.models import Category, Manufacturer, Product
from product_catalog.services.product_service import ProductService

logger = logging.getLogger(__name__)


def build_product_service(settings: Settings | None = None) -> ProductService:
    """Wire the three JSON stores into a ProductService."""
    settings = settings or get_settings()
    indent = settings.json_indent or None
    service = ProductService(
        product_store=JsonEntityStore(
            Product, settings.data_dir, settings.products_file, indent,
        ),
        category_store=JsonEntityStore(
            Category, settings.data_dir, settings.categories_file, indent,
        ),
        manufacturer_store=JsonEntityStore(
            Manufacturer, settings.data_dir, settings.manufacturers_file, indent,
        ),
    )
    logger.debug(f"Product service ready (data_dir={settings.data_dir})")
    return service
