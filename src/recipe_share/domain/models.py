"""Domain models for users and the summaries shown alongside them."""

import re
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from recipe_share.domain.errors import ValidationFailedError

NAME_MAX_LENGTH = 50
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    email: str
    name: str
    avatar: str | None
    created_recipes: tuple[UUID, ...]
    favorite_recipes: tuple[UUID, ...]
    is_active: bool
    created_at: datetime | None = None

    def has_favorite(self, recipe_id: UUID) -> bool:
        """Return True when the recipe is in the user's favorites."""
        return recipe_id in self.favorite_recipes


@dataclass(frozen=True)
class AuthorSummary:
    """Public name and avatar of a recipe author."""

    id: UUID
    name: str
    avatar: str | None


@dataclass(frozen=True)
class RecipeSummary:
    """Compact recipe view used in profiles."""

    id: UUID
    name: str
    image: str
    category: str
    rating: str
    likes_count: int


@dataclass(frozen=True)
class UserProfile:
    """A user with authored and favorited recipes resolved."""

    user: UserRecord
    created_recipes: list[RecipeSummary]
    favorite_recipes: list[RecipeSummary]


def normalize_email(value: str) -> str:
    """Trim, lowercase and sanity-check an email address."""
    cleaned = value.strip().lower()
    if not _EMAIL_PATTERN.match(cleaned):
        raise ValidationFailedError("Please enter a valid email", field="email")
    return cleaned


def validate_display_name(value: object) -> str:
    """Return a trimmed display name within the length limit."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailedError("Name is required", field="name")
    cleaned = value.strip()
    if len(cleaned) > NAME_MAX_LENGTH:
        raise ValidationFailedError(
            f"Name cannot exceed {NAME_MAX_LENGTH} characters", field="name"
        )
    return cleaned
