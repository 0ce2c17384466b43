"""Cross-entity bookkeeping for likes, favorites and authored recipes."""

import logging
from dataclasses import dataclass
from uuid import UUID

from recipe_share.domain.errors import AlreadyLikedError, NotLikedError
from recipe_share.domain.recipes import Recipe
from recipe_share.services.recipes import RecipeRepository
from recipe_share.services.users import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class FavoritesCoordinator:
    """Keeps recipe likes and user recipe lists consistent with each other.

    Every list change is a single guarded write in the store, so two writers
    never overwrite each other's likes or favorites.
    """

    recipes: RecipeRepository
    users: UserRepository

    def record_created(self, author_id: UUID, recipe_id: UUID) -> None:
        """Register a new recipe in its author's authored list."""
        self.users.add_created_recipe(author_id, recipe_id)

    def like(self, recipe: Recipe, user_id: UUID) -> Recipe:
        """Add the user to the recipe's likes."""
        if recipe.is_liked_by(user_id):
            raise AlreadyLikedError()
        updated = self.recipes.add_like(recipe.id, user_id)
        if updated is None:
            raise AlreadyLikedError()
        return updated

    def unlike(self, recipe: Recipe, user_id: UUID) -> Recipe:
        """Remove the user from the recipe's likes."""
        if not recipe.is_liked_by(user_id):
            raise NotLikedError()
        updated = self.recipes.remove_like(recipe.id, user_id)
        if updated is None:
            raise NotLikedError()
        return updated

    def purge_recipe(self, recipe: Recipe) -> int:
        """Remove every user reference to a deleted recipe.

        Safe to re-run: users that no longer reference the recipe are left
        untouched. Returns the number of users rewritten.
        """
        changed = self.users.remove_recipe_references(recipe.id)
        logger.info("Removed recipe %s from %d user record(s)", recipe.id, changed)
        return changed
