"""Domain models and value checks for recipes."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from recipe_share.domain.categories import RECIPE_CATEGORIES, normalize_category
from recipe_share.domain.errors import ValidationFailedError

DIFFICULTIES = ("easy", "medium", "hard")
MIN_SERVINGS = 1
MAX_SERVINGS = 20
MAX_RATING = 5.0
NAME_MAX_LENGTH = 100
INGREDIENTS_MAX_LENGTH = 1000
STEPS_MAX_LENGTH = 2000
NUTRITION_KEYS = ("calories", "protein", "carbs", "fat")

REQUIRED_FIELDS = ("name", "image", "ingredients", "steps", "category", "time")
OPTIONAL_FIELDS = (
    "difficulty",
    "servings",
    "rating",
    "tags",
    "nutrition_info",
    "is_public",
)
CREATE_DEFAULTS: dict[str, object] = {
    "difficulty": "medium",
    "servings": 4,
    "rating": "0.0",
    "tags": [],
    "nutrition_info": None,
    "is_public": True,
}

_TIME_PATTERN = re.compile(r"^\d+\s*(mins?|minutes?|hrs?|hours?)$", re.IGNORECASE)
_RATING_PATTERN = re.compile(r"^[0-5](\.\d)?$")

SORT_FIELDS = {
    "createdAt": "created_at",
    "created_at": "created_at",
    "likesCount": "likes_count",
    "likes_count": "likes_count",
    "name": "name",
    "rating": "rating",
}


@dataclass(frozen=True)
class NutritionInfo:
    """Optional per-serving nutrition breakdown."""

    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None


@dataclass(frozen=True)
class Recipe:
    """Represents a stored recipe.

    ``likes`` holds each liking user once; ``likes_count`` is derived from it
    and has no independent storage in the domain.
    """

    id: UUID
    author_id: UUID
    name: str
    image: str
    ingredients: str
    steps: str
    category: str
    time: str
    difficulty: str
    servings: int
    rating: str
    tags: tuple[str, ...]
    nutrition: NutritionInfo | None
    likes: tuple[UUID, ...]
    is_public: bool
    created_at: datetime
    updated_at: datetime | None = None

    @property
    def likes_count(self) -> int:
        """Number of users who like this recipe."""
        return len(self.likes)

    def is_visible_to(self, requester_id: UUID | None) -> bool:
        """Return True when the requester may read this recipe."""
        return self.is_public or requester_id == self.author_id

    def is_liked_by(self, user_id: UUID) -> bool:
        """Return True when the user already likes this recipe."""
        return user_id in self.likes


@dataclass(frozen=True)
class RecipeSort:
    """Ordering applied to recipe listings."""

    field: str = "created_at"
    descending: bool = True


@dataclass(frozen=True)
class RecipeQuery:
    """Filters for recipe listings.

    When ``text`` is set, results are ranked by text relevance and ``sort``
    is ignored.
    """

    category: str | None = None
    difficulty: str | None = None
    author_id: UUID | None = None
    public_only: bool = True
    text: str | None = None
    sort: RecipeSort = field(default_factory=RecipeSort)


def parse_sort(raw: str | None) -> RecipeSort:
    """Parse a sort key such as ``-createdAt`` or ``likesCount``."""
    if not raw:
        return RecipeSort()
    descending = raw.startswith("-")
    key = raw.lstrip("-")
    column = SORT_FIELDS.get(key)
    if column is None:
        raise ValidationFailedError(f"Unsupported sort key: {raw}", field="sort")
    return RecipeSort(field=column, descending=descending)


def validate_category(value: object) -> str:
    """Return the canonical category or raise when it is not in the enum."""
    if not isinstance(value, str) or normalize_category(value) not in RECIPE_CATEGORIES:
        raise ValidationFailedError(
            f"Category must be one of: {', '.join(RECIPE_CATEGORIES)}",
            field="category",
        )
    return normalize_category(value)


def validate_difficulty(value: object) -> str:
    """Return the canonical difficulty or raise when it is not in the enum."""
    if not isinstance(value, str) or value.strip().lower() not in DIFFICULTIES:
        raise ValidationFailedError(
            f"Difficulty must be one of: {', '.join(DIFFICULTIES)}",
            field="difficulty",
        )
    return value.strip().lower()


def validate_recipe_payload(
    payload: dict[str, object], *, partial: bool = False
) -> dict[str, object]:
    """Validate and normalize recipe fields.

    With ``partial`` set only the supplied fields are checked; otherwise all
    required fields must be present and defaults are filled in.
    """
    unknown = set(payload) - set(REQUIRED_FIELDS) - set(OPTIONAL_FIELDS)
    if unknown:
        name = sorted(unknown)[0]
        raise ValidationFailedError(f"Field cannot be set: {name}", field=name)

    if not partial:
        for name in REQUIRED_FIELDS:
            if payload.get(name) in (None, ""):
                raise ValidationFailedError(f"{name} is required", field=name)

    cleaned: dict[str, object] = {}
    for name, value in payload.items():
        cleaned[name] = _FIELD_CHECKS[name](value)

    if not partial:
        for name, default in CREATE_DEFAULTS.items():
            if cleaned.get(name) is None:
                cleaned[name] = list(default) if isinstance(default, list) else default
    return cleaned


def _text(name: str, max_length: int | None = None):
    def check(value: object) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValidationFailedError(f"{name} is required", field=name)
        cleaned = value.strip()
        if max_length is not None and len(cleaned) > max_length:
            raise ValidationFailedError(
                f"{name} cannot exceed {max_length} characters", field=name
            )
        return cleaned

    return check


def _check_time(value: object) -> str:
    if not isinstance(value, str) or not _TIME_PATTERN.match(value.strip()):
        raise ValidationFailedError(
            'Please enter valid time format (e.g., "30 mins", "1 hour")',
            field="time",
        )
    return value.strip()


def _check_servings(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationFailedError("Servings must be an integer", field="servings")
    if not MIN_SERVINGS <= value <= MAX_SERVINGS:
        raise ValidationFailedError(
            f"Servings must be between {MIN_SERVINGS} and {MAX_SERVINGS}",
            field="servings",
        )
    return value


def _check_rating(value: object) -> str:
    raw = value if isinstance(value, str) else None
    if raw is None or not _RATING_PATTERN.match(raw) or float(raw) > MAX_RATING:
        raise ValidationFailedError(
            "Rating must be between 0.0 and 5.0", field="rating"
        )
    return raw


def _check_tags(value: object) -> list[str]:
    if not isinstance(value, list | tuple):
        raise ValidationFailedError("Tags must be a list of strings", field="tags")
    tags: list[str] = []
    for tag in value:
        if not isinstance(tag, str):
            raise ValidationFailedError("Tags must be a list of strings", field="tags")
        cleaned = tag.strip().lower()
        if cleaned and cleaned not in tags:
            tags.append(cleaned)
    return tags


def _check_nutrition(value: object) -> dict[str, float] | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValidationFailedError(
            "Nutrition info must be an object", field="nutrition_info"
        )
    cleaned: dict[str, float] = {}
    for key, amount in value.items():
        if key not in NUTRITION_KEYS:
            raise ValidationFailedError(
                f"Unknown nutrition field: {key}", field="nutrition_info"
            )
        if amount is None:
            continue
        if isinstance(amount, bool) or not isinstance(amount, int | float):
            raise ValidationFailedError(
                f"{key} must be a number", field="nutrition_info"
            )
        if amount < 0:
            raise ValidationFailedError(
                f"{key} cannot be negative", field="nutrition_info"
            )
        cleaned[key] = float(amount)
    return cleaned


def _check_is_public(value: object) -> bool:
    if not isinstance(value, bool):
        raise ValidationFailedError("isPublic must be a boolean", field="is_public")
    return value


_FIELD_CHECKS = {
    "name": _text("name", NAME_MAX_LENGTH),
    "image": _text("image"),
    "ingredients": _text("ingredients", INGREDIENTS_MAX_LENGTH),
    "steps": _text("steps", STEPS_MAX_LENGTH),
    "category": validate_category,
    "time": _check_time,
    "difficulty": validate_difficulty,
    "servings": _check_servings,
    "rating": _check_rating,
    "tags": _check_tags,
    "nutrition_info": _check_nutrition,
    "is_public": _check_is_public,
}
