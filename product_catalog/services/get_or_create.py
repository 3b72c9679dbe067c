"""Get-or-Create Resolver — idempotent lookup-or-insert over an EntityStore.

Invariants:
    - A match returns the stored entity with 200 and performs no write
    - No match builds exactly one entity, writes the full collection once, returns 201
    - Read failure is returned unchanged and nothing is written
    - Write failure returns the write's status/message with no data: the new
      entity must not be treated as persisted
    - The read-check-write sequence holds store.lock, so concurrent calls on
      one store instance never create duplicates

Design Decisions:
    - Free function over store method: works with any EntityStore, including test fakes
    - Cross-process writers are not coordinated (no file locking)
"""

import asyncio
import logging
from collections.abc import Callable

from product_catalog.core.repository_protocols import E, EntityStore
from product_catalog.core.results import RepositoryResult

logger = logging.getLogger(__name__)


async def get_or_create(
    store: EntityStore[E],
    is_match: Callable[[E], bool],
    create_entity: Callable[[], E],
    cancel: asyncio.Event | None = None,
) -> RepositoryResult[E]:
    """Return the first entity matching `is_match`, creating and persisting one if none does."""
    async with store.lock:
        read_result = await store.read(cancel)
        if not read_result.succeeded:
            return RepositoryResult(
                succeeded=False,
                status_code=read_result.status_code,
                error_message=read_result.error_message,
            )

        entities = list(read_result.data or [])
        existing = next((e for e in entities if is_match(e)), None)
        if existing is not None:
            return RepositoryResult.ok(existing)

        entity = create_entity()
        entities.append(entity)

        write_result = await store.write(entities, cancel)
        if not write_result.succeeded:
            return RepositoryResult(
                succeeded=False,
                status_code=write_result.status_code,
                error_message=write_result.error_message,
            )

        logger.info(
            f"Created {type(entity).__name__} '{entity.name}'",
            extra={"entity_type": type(entity).__name__.lower(), "entity_id": entity.id},
        )
        return RepositoryResult.created(entity)
