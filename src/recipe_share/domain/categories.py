"""Domain models and value checks for recipe categories."""

import re
from dataclasses import dataclass

from recipe_share.domain.errors import ValidationFailedError

RECIPE_CATEGORIES = ("breakfast", "lunch", "dinner", "fastfood")
DESCRIPTION_MAX_LENGTH = 200

CATEGORY_FIELDS = ("name", "display_name", "emoji", "color", "description", "is_active")
REQUIRED_CATEGORY_FIELDS = ("name", "display_name", "emoji", "color")

_COLOR_PATTERN = re.compile(r"^#[0-9A-F]{6}$", re.IGNORECASE)


@dataclass(frozen=True)
class Category:
    """Represents a browsable recipe category."""

    name: str
    display_name: str
    emoji: str
    color: str
    description: str | None
    is_active: bool
    recipe_count: int


def normalize_category(value: str) -> str:
    """Return the canonical lowercase category name."""
    return value.strip().lower()


def validate_category_payload(
    payload: dict[str, object], *, partial: bool = False
) -> dict[str, object]:
    """Validate and normalize category fields.

    Names are limited to the fixed category set, so recipes can always be
    filed under an existing category. A partial payload may not rename.
    """
    allowed = CATEGORY_FIELDS[1:] if partial else CATEGORY_FIELDS
    unknown = set(payload) - set(allowed)
    if unknown:
        name = sorted(unknown)[0]
        raise ValidationFailedError(f"Field cannot be set: {name}", field=name)
    if not partial:
        for name in REQUIRED_CATEGORY_FIELDS:
            if payload.get(name) in (None, ""):
                raise ValidationFailedError(f"{name} is required", field=name)

    cleaned: dict[str, object] = {}
    for name, value in payload.items():
        cleaned[name] = _CHECKS[name](value)
    if not partial:
        cleaned.setdefault("is_active", True)
    return cleaned


def _check_name(value: object) -> str:
    if not isinstance(value, str) or normalize_category(value) not in RECIPE_CATEGORIES:
        raise ValidationFailedError(
            f"Category must be one of: {', '.join(RECIPE_CATEGORIES)}", field="name"
        )
    return normalize_category(value)


def _required_text(field: str):
    def check(value: object) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValidationFailedError(f"{field} is required", field=field)
        return value.strip()

    return check


def _check_color(value: object) -> str:
    if not isinstance(value, str) or not _COLOR_PATTERN.match(value.strip()):
        raise ValidationFailedError("Please enter a valid hex color", field="color")
    return value.strip().upper()


def _check_description(value: object) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationFailedError(
            "Description must be a string", field="description"
        )
    if len(value.strip()) > DESCRIPTION_MAX_LENGTH:
        raise ValidationFailedError(
            f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters",
            field="description",
        )
    return value.strip()


def _check_is_active(value: object) -> bool:
    if not isinstance(value, bool):
        raise ValidationFailedError("isActive must be a boolean", field="is_active")
    return value


_CHECKS = {
    "name": _check_name,
    "display_name": _required_text("display_name"),
    "emoji": _required_text("emoji"),
    "color": _check_color,
    "description": _check_description,
    "is_active": _check_is_active,
}
