"""Product Cache — the service's in-memory working copy of the product collection.

Invariants:
    - Empty and unloaded until replace_all() succeeds; loaded stays True afterwards
    - Insertion order is preserved (matches file order)
    - snapshot() returns a new list: callers cannot mutate the cache through it
    - Every mutation path runs while the caller holds `lock`

Design Decisions:
    - Explicit owned container injected into ProductService (testable, swappable)
    - One asyncio.Lock per cache: create/update/delete serialize per service instance
    - Mutations before a failed persist are kept; the cache may lead the file
      until the next successful write or a restart
"""

import asyncio
from collections.abc import Iterable

from product_catalog.core.domain_types import EntityId
from product_catalog.core.validation import names_match
from product_catalog.models.product import Product


class ProductCache:
    """Lazily loaded, lock-guarded list of products."""

    def __init__(self):
        self.lock = asyncio.Lock()
        self._items: list[Product] = []
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def __len__(self) -> int:
        return len(self._items)

    def replace_all(self, products: Iterable[Product]) -> None:
        self._items = list(products)
        self._loaded = True

    def snapshot(self) -> list[Product]:
        return list(self._items)

    def items(self) -> list[Product]:
        """The live list, for persisting the whole collection."""
        return self._items

    def find(self, product_id: EntityId | None) -> Product | None:
        if not product_id or not product_id.strip():
            return None
        return next((p for p in self._items if p.id == product_id), None)

    def has_name(self, name: str, exclude_id: EntityId | None = None) -> bool:
        """True if a product other than `exclude_id` already uses `name` (case-insensitive)."""
        return any(
            names_match(p.name, name)
            and (exclude_id is None or p.id != exclude_id)
            for p in self._items
        )

    def add(self, product: Product) -> None:
        self._items.append(product)

    def remove(self, product: Product) -> None:
        # identity, not ==: pydantic equality compares field values
        index = next(i for i, p in enumerate(self._items) if p is product)
        del self._items[index]
