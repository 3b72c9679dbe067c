"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EntityId wraps the opaque string identifier of every entity
    - StatusCode values are the only status codes a result envelope may carry

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - IntEnum for status codes: compares equal to plain ints in callers and tests
"""

from enum import IntEnum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EntityId = NewType("EntityId", str)


# ─── Enums ───────────────────────────────────────────────────────

class StatusCode(IntEnum):
    """HTTP-style status codes carried by result envelopes."""
    OK = 200
    CREATED = 201
    NO_CONTENT = 204
    BAD_REQUEST = 400
    NOT_FOUND = 404
    REQUEST_TIMEOUT = 408  # caller cancelled
    CONFLICT = 409
    INTERNAL_ERROR = 500
