"""Recipe directory: lifecycle, visibility, likes and listings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from recipe_share.domain.errors import AccessDeniedError, NotFoundError
from recipe_share.domain.models import AuthorSummary
from recipe_share.domain.pagination import Page, build_page_request
from recipe_share.domain.recipes import (
    Recipe,
    RecipeQuery,
    parse_sort,
    validate_category,
    validate_difficulty,
    validate_recipe_payload,
)
from recipe_share.services.users import UserRepository

if TYPE_CHECKING:
    from recipe_share.services.favorites import FavoritesCoordinator

logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for recipes."""

    def create_recipe(self, author_id: UUID, payload: dict[str, object]) -> Recipe:
        """Create a recipe owned by the author and return it."""

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe by id, if present."""

    def get_recipes(self, recipe_ids: list[UUID]) -> list[Recipe]:
        """Return the recipes for the given ids that exist."""

    def update_recipe(self, recipe_id: UUID, payload: dict[str, object]) -> Recipe:
        """Apply a partial update and return the recipe."""

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Remove a recipe."""

    def add_like(self, recipe_id: UUID, user_id: UUID) -> Recipe | None:
        """Atomically add a like and recount; None if the user already likes it."""

    def remove_like(self, recipe_id: UUID, user_id: UUID) -> Recipe | None:
        """Atomically remove a like and recount; None if there was no like."""

    def find_recipes(
        self, query: RecipeQuery, offset: int, limit: int
    ) -> tuple[list[Recipe], int]:
        """Return a page of matching recipes and the total match count."""

    def count_by_category(self, category: str) -> int:
        """Return how many recipes belong to a category."""


@dataclass
class RecipeService:
    """Application service for recipe operations."""

    repository: RecipeRepository
    users: UserRepository
    favorites: FavoritesCoordinator
    default_page_size: int = 10
    max_page_size: int = 50

    def list_recipes(
        self,
        query: RecipeQuery,
        page: int | None = None,
        page_size: int | None = None,
    ) -> Page[Recipe]:
        """Return one page of recipes matching the query."""
        request = build_page_request(
            page,
            page_size,
            default_size=self.default_page_size,
            max_size=self.max_page_size,
        )
        items, total = self.repository.find_recipes(
            query, request.offset, request.page_size
        )
        return Page(
            items=items, total=total, page=request.page, page_size=request.page_size
        )

    def browse(  # noqa: PLR0913
        self,
        *,
        text: str | None = None,
        category: str | None = None,
        difficulty: str | None = None,
        sort: str | None = None,
        page: int | None = None,
        page_size: int | None = None,
    ) -> Page[Recipe]:
        """List public recipes, ranked by relevance when text is given."""
        query = RecipeQuery(
            category=validate_category(category) if category else None,
            difficulty=validate_difficulty(difficulty) if difficulty else None,
            text=text.strip() if text and text.strip() else None,
            sort=parse_sort(sort),
        )
        return self.list_recipes(query, page, page_size)

    def list_my_recipes(
        self,
        requester_id: UUID,
        page: int | None = None,
        page_size: int | None = None,
    ) -> Page[Recipe]:
        """List the requester's own recipes, public and private."""
        query = RecipeQuery(author_id=requester_id, public_only=False)
        return self.list_recipes(query, page, page_size)

    def list_favorites(self, requester_id: UUID) -> list[Recipe]:
        """Return the requester's favorite recipes in favorites order."""
        user = self.users.get_user(requester_id)
        if user is None:
            raise NotFoundError("User", requester_id)
        if not user.favorite_recipes:
            return []
        found = {
            recipe.id: recipe
            for recipe in self.repository.get_recipes(list(user.favorite_recipes))
        }
        return [
            found[rid]
            for rid in user.favorite_recipes
            if rid in found and found[rid].is_visible_to(requester_id)
        ]

    def get_recipe(self, recipe_id: UUID, requester_id: UUID | None = None) -> Recipe:
        """Return a recipe the requester is allowed to see."""
        recipe = self.repository.get_recipe(recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id)
        if not recipe.is_visible_to(requester_id):
            raise AccessDeniedError("Access denied")
        return recipe

    def create_recipe(self, author_id: UUID, payload: dict[str, object]) -> Recipe:
        """Validate and persist a recipe owned by the author."""
        self._require_active(author_id)
        cleaned = validate_recipe_payload(payload)
        recipe = self.repository.create_recipe(author_id, cleaned)
        self.favorites.record_created(author_id, recipe.id)
        logger.info("Recipe %s created by %s", recipe.id, author_id)
        return recipe

    def update_recipe(
        self, recipe_id: UUID, requester_id: UUID, payload: dict[str, object]
    ) -> Recipe:
        """Apply a partial update on behalf of the recipe's author."""
        recipe = self._owned(recipe_id, requester_id, "update")
        self._require_active(requester_id)
        cleaned = validate_recipe_payload(payload, partial=True)
        if not cleaned:
            return recipe
        return self.repository.update_recipe(recipe_id, cleaned)

    def delete_recipe(self, recipe_id: UUID, requester_id: UUID) -> None:
        """Delete a recipe and remove every reference to it."""
        recipe = self._owned(recipe_id, requester_id, "delete")
        self._require_active(requester_id)
        self.repository.delete_recipe(recipe_id)
        self.favorites.purge_recipe(recipe)
        logger.info("Recipe %s deleted by %s", recipe_id, requester_id)

    def like_recipe(self, recipe_id: UUID, user_id: UUID) -> Recipe:
        """Record that the user likes the recipe."""
        recipe = self.get_recipe(recipe_id, user_id)
        self._require_active(user_id)
        return self.favorites.like(recipe, user_id)

    def unlike_recipe(self, recipe_id: UUID, user_id: UUID) -> Recipe:
        """Withdraw the user's like from the recipe."""
        recipe = self.get_recipe(recipe_id, user_id)
        self._require_active(user_id)
        return self.favorites.unlike(recipe, user_id)

    def author_summaries(self, recipes: list[Recipe]) -> dict[UUID, AuthorSummary]:
        """Resolve the authors of the given recipes in one lookup."""
        author_ids = list(dict.fromkeys(recipe.author_id for recipe in recipes))
        if not author_ids:
            return {}
        return {
            user.id: AuthorSummary(id=user.id, name=user.name, avatar=user.avatar)
            for user in self.users.get_users(author_ids)
        }

    def _require_active(self, user_id: UUID) -> None:
        user = self.users.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        if not user.is_active:
            raise AccessDeniedError("Account is deactivated")

    def _owned(self, recipe_id: UUID, requester_id: UUID, action: str) -> Recipe:
        recipe = self.repository.get_recipe(recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id)
        if recipe.author_id != requester_id:
            raise AccessDeniedError(
                f"Access denied. You can only {action} your own recipes."
            )
        return recipe
