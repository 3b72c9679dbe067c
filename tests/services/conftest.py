"""Service test fixtures — in-memory stores standing in for JSON files.

Invariants:
    - FakeStore honours the EntityStore protocol (lock, read, write, cancellation)
    - read() hands out deep copies, like re-parsing a file would
    - Failures are injected by setting read_failure / write_failure / write_error

Design Decisions:
    - Fake over mocks: assertions read naturally (store.items, store.writes)
"""

import asyncio
from decimal import Decimal

import pytest

from product_catalog.core.cancellation import raise_if_cancelled
from product_catalog.core.results import RepositoryResult
from product_catalog.models import Product
from product_catalog.services.product_service import ProductService


class FakeStore:
    """In-memory EntityStore with call recording and failure injection."""

    def __init__(self, items=None):
        self.lock = asyncio.Lock()
        self.items = list(items or [])
        self.read_calls = 0
        self.writes: list[list] = []
        self.read_failure: RepositoryResult | None = None
        self.write_failure: RepositoryResult | None = None
        self.write_error: Exception | None = None
        self.read_delay = 0.0

    async def read(self, cancel=None):
        raise_if_cancelled(cancel, "read")
        self.read_calls += 1
        await asyncio.sleep(self.read_delay)
        if self.read_failure is not None:
            return self.read_failure
        return RepositoryResult.ok([e.model_copy(deep=True) for e in self.items])

    async def write(self, entities, cancel=None):
        raise_if_cancelled(cancel, "write")
        await asyncio.sleep(0)
        if self.write_error is not None:
            raise self.write_error
        if self.write_failure is not None:
            return self.write_failure
        self.items = [e.model_copy(deep=True) for e in entities]
        self.writes.append(list(self.items))
        return RepositoryResult.no_content()


@pytest.fixture
def make_store():
    return FakeStore


@pytest.fixture
def product_store():
    return FakeStore()


@pytest.fixture
def category_store():
    return FakeStore()


@pytest.fixture
def manufacturer_store():
    return FakeStore()


@pytest.fixture
def service(product_store, category_store, manufacturer_store):
    return ProductService(product_store, category_store, manufacturer_store)


@pytest.fixture
def seeded_store(product_store):
    """Product store holding Banana (id b-1) and Apple (id a-1)."""
    product_store.items = [
        Product(id="b-1", name="Banana", price=Decimal("6")),
        Product(id="a-1", name="Apple", price=Decimal("8")),
    ]
    return product_store
