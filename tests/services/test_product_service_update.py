"""Product Service Update — renaming, repricing and dependent resolution.

Tests:
    - Name/price updated in place and persisted (204)
    - Own name (any case) allowed; another product's name is a 409
    - Unknown id is a 404 naming the id
    - Rejections are logged at their severity with the entity context
    - Category/manufacturer get-or-created by trimmed, case-insensitive name
    - Blank dependent names clear the reference
    - Resolver failures carry a dependent-specific message and leave the product unchanged
"""

import asyncio
import logging
from decimal import Decimal

from product_catalog.core.results import RepositoryResult
from product_catalog.models import Category, Manufacturer
from product_catalog.schemas.product import ProductUpdateRequest


def _update(product_id, name, price="6", category=None, manufacturer=None):
    return ProductUpdateRequest(
        id=product_id, name=name,
        price=None if price is None else Decimal(price),
        category_name=category, manufacturer_name=manufacturer,
    )


async def test_update_name_and_price(service, seeded_store):
    result = await service.update_product(_update("b-1", "  Ripe Banana ", "7.25"))

    assert result.succeeded
    assert result.status_code == 204
    stored = seeded_store.items[0]
    assert stored.id == "b-1"
    assert stored.name == "Ripe Banana"
    assert stored.price == Decimal("7.25")


async def test_update_to_own_name_succeeds(service, seeded_store):
    result = await service.update_product(_update("b-1", "BANANA", "9"))

    assert result.status_code == 204
    assert seeded_store.items[0].name == "BANANA"


async def test_update_to_other_products_name_conflicts(service, seeded_store):
    result = await service.update_product(_update("b-1", " apple ", "8"))

    assert result.status_code == 409
    assert seeded_store.writes == []


async def test_update_unknown_id_is_not_found(service, seeded_store):
    result = await service.update_product(_update("missing-id", "Kiwi"))

    assert result.status_code == 404
    assert "missing-id" in result.error_message


async def test_rejection_is_logged_with_entity_context(service, seeded_store, caplog):
    caplog.set_level(logging.INFO, logger="product_catalog")

    await service.update_product(_update("missing-id", "Kiwi"))

    record = next(r for r in caplog.records if "rejected" in r.getMessage())
    assert record.levelno == logging.WARNING
    assert record.operation == "update_product"
    assert record.error_code == "RESOURCE_NOT_FOUND"
    assert record.entity_type == "product"
    assert record.entity_id == "missing-id"


async def test_update_validates_before_loading(service, seeded_store):
    result = await service.update_product(_update("b-1", "", None))

    assert result.status_code == 400
    assert seeded_store.read_calls == 0


async def test_update_creates_category_and_manufacturer(
    service, seeded_store, category_store, manufacturer_store,
):
    result = await service.update_product(
        _update("b-1", "Banana", category=" Fruit ", manufacturer="Chiquita"),
    )

    assert result.status_code == 204
    assert [c.name for c in category_store.items] == ["Fruit"]
    assert [m.name for m in manufacturer_store.items] == ["Chiquita"]
    stored = seeded_store.items[0]
    assert stored.category == category_store.items[0]
    assert stored.manufacturer == manufacturer_store.items[0]


async def test_update_reuses_existing_category_case_insensitively(
    service, seeded_store, category_store,
):
    category_store.items = [Category(id="c-1", name="Fruit")]

    await service.update_product(_update("b-1", "Banana", category="FRUIT"))
    await service.update_product(_update("a-1", "Apple", "8", category="fruit "))

    assert len(category_store.items) == 1
    assert category_store.writes == []
    assert seeded_store.items[0].category.id == "c-1"
    assert seeded_store.items[1].category.id == "c-1"
    assert seeded_store.items[1].category.name == "Fruit"


async def test_blank_names_clear_references(service, seeded_store):
    seeded_store.items[0].category = Category(id="c-1", name="Fruit")
    seeded_store.items[0].manufacturer = Manufacturer(id="m-1", name="Chiquita")

    result = await service.update_product(
        _update("b-1", "Banana", category="   ", manufacturer=None),
    )

    assert result.status_code == 204
    assert seeded_store.items[0].category is None
    assert seeded_store.items[0].manufacturer is None


async def test_category_failure_leaves_product_unchanged(
    service, seeded_store, category_store,
):
    category_store.read_failure = RepositoryResult.internal_error("read error")

    result = await service.update_product(
        _update("b-1", "Renamed", "99", category="Fruit"),
    )

    assert not result.succeeded
    assert result.status_code == 500
    assert result.error_message == "Could not fetch or create category: read error"
    cached = (await service.list_products()).data[0]
    assert cached.name == "Banana"
    assert cached.price == Decimal("6")
    assert seeded_store.writes == []


async def test_manufacturer_write_failure_reported(
    service, seeded_store, manufacturer_store,
):
    manufacturer_store.write_failure = RepositoryResult.internal_error(
        "Could not save to file: locked",
    )

    result = await service.update_product(
        _update("b-1", "Banana", manufacturer="Chiquita"),
    )

    assert result.status_code == 500
    assert result.error_message.startswith("Could not fetch or create manufacturer")
    assert "locked" in result.error_message
    assert manufacturer_store.items == []


async def test_update_write_failure_returns_store_detail(service, seeded_store):
    seeded_store.write_failure = RepositoryResult.internal_error(
        "Could not save to file: locked",
    )

    result = await service.update_product(_update("b-1", "Plantain", "5"))

    assert result.status_code == 500
    assert "locked" in result.error_message


async def test_update_cancelled_returns_408(service, seeded_store, category_store):
    await service.ensure_loaded()
    cancel = asyncio.Event()
    cancel.set()

    result = await service.update_product(
        _update("b-1", "Banana", category="Fruit"), cancel,
    )

    assert result.status_code == 408
    assert result.error_message == "Update was cancelled"
    assert category_store.items == []
    assert seeded_store.writes == []


async def test_renamed_category_does_not_touch_existing_products(
    service, seeded_store, category_store,
):
    await service.update_product(_update("b-1", "Banana", category="Fruit"))
    category_store.items[0].name = "Fresh Fruit"

    listed = await service.list_products()
    assert listed.data[0].category.name == "Fruit"
