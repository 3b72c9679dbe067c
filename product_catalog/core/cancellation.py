"""Cancellation — caller-driven abort signal checked at IO boundaries.

Invariants:
    - A signal is an asyncio.Event; set() means "stop before the next IO step"
    - None means "not cancellable" and never raises
    - Checks happen before reads/writes and after reads; a write already handed
      to the filesystem is not interrupted

Design Decisions:
    - Explicit event over task.cancel(): callers get a 408 envelope instead of a
      CancelledError unwinding their own task (same idea as ForgeState.cancelled)
"""

import asyncio

from product_catalog.core.errors import OperationCancelledError


def is_cancelled(cancel: asyncio.Event | None) -> bool:
    return cancel is not None and cancel.is_set()


def raise_if_cancelled(cancel: asyncio.Event | None, operation: str) -> None:
    """Raise OperationCancelledError when the caller has signalled cancellation."""
    if is_cancelled(cancel):
        raise OperationCancelledError(operation)
