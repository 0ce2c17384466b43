"""Tests for recipe field validation and paging helpers."""

import pytest

from recipe_share.domain.errors import ValidationFailedError
from recipe_share.domain.pagination import Page, build_page_request
from recipe_share.domain.recipes import (
    RecipeSort,
    parse_sort,
    validate_category,
    validate_recipe_payload,
)
from tests.conftest import recipe_payload


def test_create_payload_gets_defaults() -> None:
    cleaned = validate_recipe_payload(recipe_payload(name="  Nihari  "))

    assert cleaned["name"] == "Nihari"
    assert cleaned["difficulty"] == "medium"
    assert cleaned["servings"] == 4
    assert cleaned["rating"] == "0.0"
    assert cleaned["tags"] == []
    assert cleaned["nutrition_info"] is None
    assert cleaned["is_public"] is True


def test_create_payload_requires_fields() -> None:
    payload = recipe_payload()
    del payload["steps"]

    with pytest.raises(ValidationFailedError) as excinfo:
        validate_recipe_payload(payload)

    assert excinfo.value.field == "steps"


def test_partial_payload_checks_only_supplied_fields() -> None:
    assert validate_recipe_payload({"servings": 2}, partial=True) == {"servings": 2}


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("time", "soon"),
        ("servings", 0),
        ("servings", 21),
        ("servings", True),
        ("rating", "5.5"),
        ("rating", "4.25"),
        ("difficulty", "extreme"),
        ("name", "x" * 101),
        ("nutrition_info", {"calories": -1}),
        ("nutrition_info", {"sugar": 3}),
        ("is_public", "yes"),
        ("tags", "spicy"),
    ],
)
def test_invalid_values_are_rejected(field: str, value: object) -> None:
    with pytest.raises(ValidationFailedError) as excinfo:
        validate_recipe_payload({field: value}, partial=True)

    assert excinfo.value.field == field


def test_unknown_fields_are_rejected() -> None:
    with pytest.raises(ValidationFailedError) as excinfo:
        validate_recipe_payload({"likes": []}, partial=True)

    assert excinfo.value.field == "likes"


def test_accepted_value_forms() -> None:
    cleaned = validate_recipe_payload(
        {
            "time": "1 hour",
            "rating": "4.5",
            "difficulty": " Hard ",
            "tags": ["Spicy", "spicy ", ""],
            "nutrition_info": {"calories": 450, "protein": None},
        },
        partial=True,
    )

    assert cleaned == {
        "time": "1 hour",
        "rating": "4.5",
        "difficulty": "hard",
        "tags": ["spicy"],
        "nutrition_info": {"calories": 450.0},
    }


def test_validate_category_is_case_insensitive() -> None:
    assert validate_category(" FastFood ") == "fastfood"
    with pytest.raises(ValidationFailedError):
        validate_category("brunch")


def test_parse_sort() -> None:
    assert parse_sort(None) == RecipeSort()
    assert parse_sort("-likesCount") == RecipeSort(field="likes_count", descending=True)
    assert parse_sort("name") == RecipeSort(field="name", descending=False)
    with pytest.raises(ValidationFailedError):
        parse_sort("author")


def test_page_request_offset_and_cap() -> None:
    request = build_page_request(3, 100, default_size=10, max_size=50)

    assert request.page_size == 50
    assert request.offset == 100
    assert build_page_request(None, None, default_size=10, max_size=50).offset == 0


def test_page_count_rounds_up() -> None:
    assert Page(items=[], total=25, page=1, page_size=10).pages == 3
    assert Page(items=[], total=0, page=1, page_size=10).pages == 0
