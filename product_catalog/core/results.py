"""Result Envelopes — uniform success/failure wrappers returned instead of raising.

Invariants:
    - succeeded is True iff status_code is 2xx
    - A failed envelope always carries a non-empty error_message
    - RepositoryResult is produced by stores and the resolver; ServiceResult by the service
    - map_to_service_result keeps the lower layer's status code unless overridden

Design Decisions:
    - Two envelope types with the same shape: the service layer never hands a
      store envelope to its caller, so the boundary stays explicit
    - Generic dataclasses over pydantic: envelopes are never parsed from input
    - to_dict() renders the camelCase API contract consumed by UIs and the CLI
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from product_catalog.core.domain_types import StatusCode
from product_catalog.core.errors import CatalogError

T = TypeVar("T")

UNKNOWN_STORAGE_ERROR = "An unknown error occurred while accessing storage."


@dataclass
class _Envelope(Generic[T]):
    succeeded: bool
    status_code: int
    error_message: str | None = None
    data: T | None = field(default=None)

    @classmethod
    def ok(cls, data: T | None = None):
        return cls(True, StatusCode.OK, data=data)

    @classmethod
    def created(cls, data: T | None = None):
        return cls(True, StatusCode.CREATED, data=data)

    @classmethod
    def no_content(cls):
        return cls(True, StatusCode.NO_CONTENT)

    @classmethod
    def bad_request(cls, message: str):
        return cls(False, StatusCode.BAD_REQUEST, message)

    @classmethod
    def not_found(cls, message: str):
        return cls(False, StatusCode.NOT_FOUND, message)

    @classmethod
    def conflict(cls, message: str):
        return cls(False, StatusCode.CONFLICT, message)

    @classmethod
    def cancelled(cls, message: str, data: T | None = None):
        return cls(False, StatusCode.REQUEST_TIMEOUT, message, data)

    @classmethod
    def internal_error(cls, message: str, data: T | None = None):
        return cls(False, StatusCode.INTERNAL_ERROR, message, data)

    @classmethod
    def from_error(cls, exc: CatalogError, data: T | None = None):
        return cls(False, exc.status_code, exc.message, data)

    def to_dict(self) -> dict[str, Any]:
        """Render as {succeeded, statusCode, errorMessage?, data}."""
        body: dict[str, Any] = {
            "succeeded": self.succeeded,
            "statusCode": int(self.status_code),
        }
        if self.error_message is not None:
            body["errorMessage"] = self.error_message
        body["data"] = _dump(self.data)
        return body


class RepositoryResult(_Envelope[T]):
    """Outcome of a store or resolver operation."""


class ServiceResult(_Envelope[T]):
    """Outcome of a product service operation."""


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, (list, tuple)):
        return [_dump(item) for item in data]
    return data


def _failure_message(detail: str | None, custom: str | None) -> str:
    if custom and detail:
        return f"{custom}: {detail}"
    return custom or detail or UNKNOWN_STORAGE_ERROR


def map_to_service_result(
    repo_result: RepositoryResult,
    custom_error_message: str | None = None,
    override_status_code: int | None = None,
    keep_data: bool = True,
) -> ServiceResult:
    """Translate a store/resolver envelope into a service envelope.

    On failure the custom message prefixes the store detail so the caller
    sees both the operation that failed and why. A missing status (0/None)
    becomes 500 on failure and 200 on success.
    """
    if not repo_result.succeeded:
        return ServiceResult(
            succeeded=False,
            status_code=override_status_code
            or repo_result.status_code
            or StatusCode.INTERNAL_ERROR,
            error_message=_failure_message(
                repo_result.error_message, custom_error_message,
            ),
        )
    return ServiceResult(
        succeeded=True,
        status_code=override_status_code or repo_result.status_code or StatusCode.OK,
        data=repo_result.data if keep_data else None,
    )
