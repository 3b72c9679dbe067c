"""Boundary Protocols — contracts between core/services and the storage shell.

Invariants:
    - Services never import a concrete store; they depend on EntityStore only
    - Every storable entity has an id and a name (CatalogEntity)
    - Store methods return RepositoryResult for expected failures and raise only
      OperationCancelledError

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO, callers orchestrate the awaits
    - lock is part of the contract: read-check-write sequences on one collection
      serialize on the store's own lock
"""

import asyncio
from collections.abc import Sequence
from typing import Protocol, TypeVar

from product_catalog.core.domain_types import EntityId
from product_catalog.core.results import RepositoryResult


class CatalogEntity(Protocol):
    """Capability set required by stores and the get-or-create resolver."""
    id: EntityId
    name: str


E = TypeVar("E", bound=CatalogEntity)


class EntityStore(Protocol[E]):
    """Whole-collection persistence for one entity type."""
    lock: asyncio.Lock

    async def read(
        self, cancel: asyncio.Event | None = None,
    ) -> RepositoryResult[list[E]]: ...

    async def write(
        self, entities: Sequence[E], cancel: asyncio.Event | None = None,
    ) -> RepositoryResult[None]: ...
