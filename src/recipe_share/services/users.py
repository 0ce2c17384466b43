"""User directory: profiles, deactivation and favorites."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from recipe_share.domain.errors import (
    AccessDeniedError,
    AlreadyFavoritedError,
    NotFavoritedError,
    NotFoundError,
    ValidationFailedError,
)
from recipe_share.domain.models import (
    RecipeSummary,
    UserProfile,
    UserRecord,
    normalize_email,
    validate_display_name,
)
from recipe_share.domain.pagination import Page, build_page_request

if TYPE_CHECKING:
    from recipe_share.domain.recipes import Recipe
    from recipe_share.services.recipes import RecipeRepository

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "avatar")


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def create_user(self, email: str, name: str, avatar: str | None) -> UserRecord:
        """Create and return a new user record."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user by id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an email, if present."""

    def get_users(self, user_ids: list[UUID]) -> list[UserRecord]:
        """Return the users for the given ids that exist."""

    def list_active_users(
        self, offset: int, limit: int
    ) -> tuple[list[UserRecord], int]:
        """Return a page of active users, newest first, and the total count."""

    def update_user(self, user_id: UUID, payload: dict[str, object]) -> UserRecord:
        """Update profile fields and return the user."""

    def add_favorite(self, user_id: UUID, recipe_id: UUID) -> UserRecord | None:
        """Atomically append a favorite; None if it is already present."""

    def remove_favorite(self, user_id: UUID, recipe_id: UUID) -> UserRecord | None:
        """Atomically remove a favorite; None if it was not present."""

    def add_created_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        """Atomically append a recipe id to the user's authored recipes."""

    def remove_recipe_references(self, recipe_id: UUID) -> int:
        """Drop a recipe from every user's lists; return users changed."""


@dataclass
class UserService:
    """Application service for user profiles and favorites."""

    repository: UserRepository
    recipes: RecipeRepository
    default_page_size: int = 10
    max_page_size: int = 50

    def register(self, email: str, name: str, avatar: str | None = None) -> UserRecord:
        """Create a user profile for a newly registered account."""
        normalized = normalize_email(email)
        if self.repository.get_by_email(normalized):
            raise ValidationFailedError("User already exists", field="email")
        user = self.repository.create_user(
            normalized, validate_display_name(name), avatar
        )
        logger.info("Registered user %s", user.id)
        return user

    def get_user(self, user_id: UUID) -> UserRecord:
        """Return a user, active or deactivated."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def require_active(self, user_id: UUID) -> UserRecord:
        """Return the user when it exists and has not been deactivated."""
        user = self.get_user(user_id)
        if not user.is_active:
            raise AccessDeniedError("Account is deactivated")
        return user

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return a user with authored and favorite recipes resolved."""
        user = self.get_user(user_id)
        return UserProfile(
            user=user,
            created_recipes=self._summaries(list(user.created_recipes)),
            favorite_recipes=self._summaries(list(user.favorite_recipes)),
        )

    def list_users(
        self, page: int | None = None, page_size: int | None = None
    ) -> Page[UserRecord]:
        """Return a page of active users."""
        request = build_page_request(
            page,
            page_size,
            default_size=self.default_page_size,
            max_size=self.max_page_size,
        )
        users, total = self.repository.list_active_users(
            request.offset, request.page_size
        )
        return Page(
            items=users, total=total, page=request.page, page_size=request.page_size
        )

    def update_profile(
        self, user_id: UUID, requester_id: UUID, payload: dict[str, object]
    ) -> UserRecord:
        """Update display name and avatar of the requester's own profile."""
        if user_id != requester_id:
            raise AccessDeniedError(
                "Access denied. You can only update your own profile."
            )
        self.require_active(user_id)
        unknown = set(payload) - set(PROFILE_FIELDS)
        if unknown:
            field = sorted(unknown)[0]
            raise ValidationFailedError(f"Field cannot be updated: {field}", field)
        cleaned: dict[str, object] = {}
        if "name" in payload:
            cleaned["name"] = validate_display_name(payload["name"])
        if "avatar" in payload:
            avatar = payload["avatar"]
            if avatar is not None and not isinstance(avatar, str):
                raise ValidationFailedError("Avatar must be a string", field="avatar")
            cleaned["avatar"] = avatar
        if not cleaned:
            return self.get_user(user_id)
        return self.repository.update_user(user_id, cleaned)

    def deactivate(self, user_id: UUID, requester_id: UUID) -> None:
        """Soft-delete the requester's own account."""
        if user_id != requester_id:
            raise AccessDeniedError(
                "Access denied. You can only delete your own account."
            )
        self.require_active(user_id)
        self.repository.update_user(user_id, {"is_active": False})
        logger.info("Deactivated user %s", user_id)

    def add_favorite(self, user_id: UUID, recipe_id: UUID) -> UserRecord:
        """Add a recipe to the user's favorites."""
        if self.recipes.get_recipe(recipe_id) is None:
            raise NotFoundError("Recipe", recipe_id)
        user = self.require_active(user_id)
        if user.has_favorite(recipe_id):
            raise AlreadyFavoritedError()
        updated = self.repository.add_favorite(user_id, recipe_id)
        if updated is None:
            raise AlreadyFavoritedError()
        return updated

    def remove_favorite(self, user_id: UUID, recipe_id: UUID) -> UserRecord:
        """Remove a recipe from the user's favorites."""
        user = self.require_active(user_id)
        if not user.has_favorite(recipe_id):
            raise NotFavoritedError()
        updated = self.repository.remove_favorite(user_id, recipe_id)
        if updated is None:
            raise NotFavoritedError()
        return updated

    def _summaries(self, recipe_ids: list[UUID]) -> list[RecipeSummary]:
        if not recipe_ids:
            return []
        found = {recipe.id: recipe for recipe in self.recipes.get_recipes(recipe_ids)}
        return [_summarize(found[rid]) for rid in recipe_ids if rid in found]


def _summarize(recipe: Recipe) -> RecipeSummary:
    return RecipeSummary(
        id=recipe.id,
        name=recipe.name,
        image=recipe.image,
        category=recipe.category,
        rating=recipe.rating,
        likes_count=recipe.likes_count,
    )
