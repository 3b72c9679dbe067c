"""Product Service Helpers — operation boundary and dependent-entity resolution.

Invariants:
    - service_operation never lets an exception escape except asyncio.CancelledError
    - OperationCancelledError → 408, CatalogError → its own status, anything else → 500
    - resolve_reference: blank name → success with no entity (clears the reference);
      otherwise a case-insensitive, trimmed get-or-create on the given store

Design Decisions:
    - Decorator instead of a try/except block per method: one normalization policy
      for every public operation
    - Task cancellation (asyncio.CancelledError) is logged and re-raised; only the
      explicit cancel event becomes a 408 envelope
"""

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable

from product_catalog.core.errors import CatalogError, OperationCancelledError
from product_catalog.core.repository_protocols import EntityStore
from product_catalog.core.results import ServiceResult, map_to_service_result
from product_catalog.core.validation import is_blank, names_match
from product_catalog.models.base import CatalogEntityModel, new_entity_id
from product_catalog.services.get_or_create import get_or_create

logger = logging.getLogger(__name__)


def service_operation(
    operation: str, cancelled_message: str, failure_message: str,
) -> Callable:
    """Normalize every outcome of an async service method into a ServiceResult."""

    def decorator(
        fn: Callable[..., Awaitable[ServiceResult]],
    ) -> Callable[..., Awaitable[ServiceResult]]:
        @functools.wraps(fn)
        async def wrapper(*args, **kwargs) -> ServiceResult:
            try:
                return await fn(*args, **kwargs)
            except OperationCancelledError:
                logger.info(
                    f"{operation} cancelled by caller",
                    extra={"operation": operation, "status_code": 408},
                )
                return ServiceResult.cancelled(cancelled_message)
            except CatalogError as e:
                logger.log(
                    e.severity.log_level, f"{operation} rejected: {e.message}",
                    extra={"operation": operation, **e.log_fields()},
                )
                return e.to_result()
            except asyncio.CancelledError:
                logger.info(f"{operation} task cancelled", extra={"operation": operation})
                raise
            except Exception as e:
                logger.error(
                    f"Unexpected error in {operation}: {e}",
                    extra={"operation": operation, "status_code": 500},
                    exc_info=True,
                )
                return ServiceResult.internal_error(f"{failure_message}: {e}")

        return wrapper

    return decorator


async def resolve_reference(
    store: EntityStore,
    model: type[CatalogEntityModel],
    requested_name: str | None,
    failure_message: str,
    cancel: asyncio.Event | None = None,
) -> ServiceResult:
    """Find-or-create the dependent entity named `requested_name`.

    data is the resolved entity, or None when the name is blank (reference cleared).
    """
    if is_blank(requested_name):
        return ServiceResult.ok(None)

    name = requested_name.strip()
    result = await get_or_create(
        store,
        lambda entity: names_match(entity.name, name),
        lambda: model(id=new_entity_id(), name=name),
        cancel,
    )
    if not result.succeeded:
        return map_to_service_result(result, failure_message)
    return ServiceResult.ok(result.data)
