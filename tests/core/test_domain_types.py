"""Domain Types — identifiers and status codes.

Tests:
    - EntityId is a plain str at runtime and is what new entities carry
    - StatusCode covers exactly the envelope codes and compares to ints
"""

from product_catalog.core.domain_types import EntityId, StatusCode
from product_catalog.models import Category


def test_entity_id_wraps_str():
    assert EntityId("abc") == "abc"


def test_new_entities_get_string_ids():
    category = Category(name="Fruit")
    assert isinstance(category.id, str)
    assert category.id != Category(name="Fruit").id


def test_status_codes_compare_to_ints():
    assert StatusCode.CREATED == 201
    assert {int(s) for s in StatusCode} == {200, 201, 204, 400, 404, 408, 409, 500}
