"""Request Validation — pure checks for product create/update requests.

Invariants:
    - Never touches storage
    - All applicable reasons are collected, in field order (name, then price)
    - An absent request yields a single reason and nothing else is checked
    - Name comparisons trim surrounding whitespace and ignore case

Design Decisions:
    - Returns reasons instead of raising: the service decides how to surface them
    - casefold() over lower(): correct for non-ASCII names (e.g. "Äpple", "STRASSE"/"straße")
"""

from decimal import Decimal
from typing import Protocol

NO_DATA = "No data was submitted."
NAME_REQUIRED = "Name is required."
PRICE_REQUIRED = "Price is required."
PRICE_NOT_POSITIVE = "Price must be greater than 0."
PRICE_NOT_FINITE = "Price must be a finite number."


class ProductRequestLike(Protocol):
    """Structural contract shared by create and update requests."""
    name: str | None
    price: Decimal | None


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def normalize_name(name: str) -> str:
    """Key used for case-insensitive uniqueness checks."""
    return name.strip().casefold()


def names_match(left: str | None, right: str | None) -> bool:
    if left is None or right is None:
        return False
    return normalize_name(left) == normalize_name(right)


def validate_product_request(request: ProductRequestLike | None) -> list[str]:
    """Collect every validation failure for a product request. Empty list = valid."""
    if request is None:
        return [NO_DATA]

    reasons: list[str] = []
    if is_blank(request.name):
        reasons.append(NAME_REQUIRED)
    if request.price is None:
        reasons.append(PRICE_REQUIRED)
    elif not request.price.is_finite():
        reasons.append(PRICE_NOT_FINITE)
    elif request.price <= 0:
        reasons.append(PRICE_NOT_POSITIVE)
    return reasons
