"""Product Service — validated, cached, de-duplicating façade over product persistence.

Invariants:
    - Every public method returns a ServiceResult; none raises (except task cancellation)
    - The cache is loaded lazily, once, from the product store
    - Product names are unique case-insensitively; ids never change
    - Every successful mutation persists the whole cache through the product store
    - Mutations are serialized through the cache lock (one writer per service instance)
    - A mutation followed by a failed persist is NOT rolled back: the cache leads
      the file until the next successful write or a restart

Design Decisions:
    - Stores and cache injected: the service owns no filesystem knowledge
    - Category/Manufacturer resolved before the product is touched, so a failed
      resolution leaves the cached product unchanged
    - Cancellation is checked right before each cache mutation: a signal raised
      earlier never leaves a half-applied change behind
"""

import asyncio
import logging

from product_catalog.core.cancellation import raise_if_cancelled
from product_catalog.core.domain_types import EntityId
from product_catalog.core.errors import (
    DuplicateNameError, OperationCancelledError, RequestValidationError,
    ResourceNotFoundError,
)
from product_catalog.core.repository_protocols import EntityStore
from product_catalog.core.results import ServiceResult, map_to_service_result
from product_catalog.core.validation import validate_product_request
from product_catalog.models import Category, Manufacturer, Product
from product_catalog.schemas.product import (
    ProductCreateRequest, ProductUpdateRequest,
)
from product_catalog.services.product_cache import ProductCache
from product_catalog.services.product_service_helpers import (
    resolve_reference, service_operation,
)

logger = logging.getLogger(__name__)

LOAD_FAILED = "An unknown error occurred while fetching products"
LOAD_CANCELLED = "Fetching was cancelled"
SAVE_FAILED = "Could not save products"
CATEGORY_FAILED = "Could not fetch or create category"
MANUFACTURER_FAILED = "Could not fetch or create manufacturer"


class ProductService:
    """Product CRUD with lazy cache, uniqueness checks and dependent resolution."""

    def __init__(
        self,
        product_store: EntityStore[Product],
        category_store: EntityStore[Category],
        manufacturer_store: EntityStore[Manufacturer],
        cache: ProductCache | None = None,
    ):
        self._products = product_store
        self._categories = category_store
        self._manufacturers = manufacturer_store
        self._cache = cache if cache is not None else ProductCache()

    @property
    def cache(self) -> ProductCache:
        return self._cache

    # ─── Loading ────────────────────────────────────────────────

    async def ensure_loaded(self, cancel: asyncio.Event | None = None) -> ServiceResult:
        """Load the product cache from disk unless already loaded."""
        async with self._cache.lock:
            return await self._ensure_loaded(cancel)

    async def _ensure_loaded(self, cancel: asyncio.Event | None) -> ServiceResult:
        if self._cache.loaded:
            return ServiceResult.ok()
        try:
            read_result = await self._products.read(cancel)
        except OperationCancelledError:
            logger.info("Product load cancelled", extra={"operation": "load"})
            return ServiceResult.cancelled(LOAD_CANCELLED)
        except Exception as e:
            logger.error(f"Product load failed: {e}", exc_info=True)
            return ServiceResult.internal_error(f"Error while fetching products: {e}")

        if not read_result.succeeded:
            return map_to_service_result(read_result, LOAD_FAILED)

        self._cache.replace_all(read_result.data or [])
        logger.info(
            f"Loaded {len(self._cache)} products",
            extra={"operation": "load", "entity_type": "product"},
        )
        return ServiceResult.ok()

    # ─── Queries ────────────────────────────────────────────────

    async def list_products(
        self, cancel: asyncio.Event | None = None,
    ) -> ServiceResult[list[Product]]:
        """Snapshot of all products in insertion order. data is [] on failure."""
        loaded = await self.ensure_loaded(cancel)
        if not loaded.succeeded:
            return ServiceResult(
                succeeded=False,
                status_code=loaded.status_code,
                error_message=loaded.error_message,
                data=[],
            )
        return ServiceResult.ok(self._cache.snapshot())

    # ─── Commands ───────────────────────────────────────────────

    @service_operation(
        "create_product", "Saving was cancelled", "Could not save the product",
    )
    async def create_product(
        self, request: ProductCreateRequest | None,
        cancel: asyncio.Event | None = None,
    ) -> ServiceResult[Product]:
        """Create a product from a validated request. 201 with the new entity."""
        reasons = validate_product_request(request)
        if reasons:
            raise RequestValidationError(reasons)

        async with self._cache.lock:
            loaded = await self._ensure_loaded(cancel)
            if not loaded.succeeded:
                return loaded

            name = request.name.strip()
            if self._cache.has_name(name):
                raise DuplicateNameError("Product", name)

            raise_if_cancelled(cancel, "create_product")
            product = Product.from_create_request(request)
            self._cache.add(product)

            saved = await self._products.write(self._cache.items(), cancel)
            if not saved.succeeded:
                return map_to_service_result(saved, SAVE_FAILED, keep_data=False)

        logger.info(
            f"Created product '{product.name}'",
            extra={"operation": "create_product", "entity_id": product.id},
        )
        return ServiceResult.created(product)

    @service_operation(
        "update_product", "Update was cancelled", "Could not update the product",
    )
    async def update_product(
        self, request: ProductUpdateRequest | None,
        cancel: asyncio.Event | None = None,
    ) -> ServiceResult:
        """Rename/reprice a product and re-resolve its category and manufacturer. 204."""
        reasons = validate_product_request(request)
        if reasons:
            raise RequestValidationError(reasons)

        async with self._cache.lock:
            loaded = await self._ensure_loaded(cancel)
            if not loaded.succeeded:
                return loaded

            product = self._cache.find(request.id)
            if product is None:
                raise ResourceNotFoundError("Product", request.id)

            name = request.name.strip()
            if self._cache.has_name(name, exclude_id=product.id):
                raise DuplicateNameError("Product", name)

            category = await resolve_reference(
                self._categories, Category, request.category_name,
                CATEGORY_FAILED, cancel,
            )
            if not category.succeeded:
                return category

            manufacturer = await resolve_reference(
                self._manufacturers, Manufacturer, request.manufacturer_name,
                MANUFACTURER_FAILED, cancel,
            )
            if not manufacturer.succeeded:
                return manufacturer

            raise_if_cancelled(cancel, "update_product")
            product.name = name
            product.price = request.price
            product.category = category.data
            product.manufacturer = manufacturer.data

            saved = await self._products.write(self._cache.items(), cancel)
            if not saved.succeeded:
                return map_to_service_result(saved, SAVE_FAILED)

        logger.info(
            f"Updated product '{product.name}'",
            extra={"operation": "update_product", "entity_id": product.id},
        )
        return ServiceResult.no_content()

    @service_operation(
        "delete_product", "Deletion was cancelled", "Could not delete the product",
    )
    async def delete_product(
        self, product_id: EntityId | None, cancel: asyncio.Event | None = None,
    ) -> ServiceResult:
        """Remove a product by id. 204. Its category/manufacturer are kept."""
        async with self._cache.lock:
            loaded = await self._ensure_loaded(cancel)
            if not loaded.succeeded:
                return loaded

            product = self._cache.find(product_id)
            if product is None:
                raise ResourceNotFoundError("Product", product_id)

            raise_if_cancelled(cancel, "delete_product")
            self._cache.remove(product)

            saved = await self._products.write(self._cache.items(), cancel)
            if not saved.succeeded:
                return map_to_service_result(saved, SAVE_FAILED)

        logger.info(
            f"Deleted product '{product.name}'",
            extra={"operation": "delete_product", "entity_id": product_id},
        )
        return ServiceResult.no_content()
