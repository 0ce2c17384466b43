"""Category browsing, administration and recipe count maintenance."""

import logging
from dataclasses import dataclass
from typing import Protocol

from recipe_share.domain.categories import (
    Category,
    normalize_category,
    validate_category_payload,
)
from recipe_share.domain.errors import NotFoundError, ValidationFailedError
from recipe_share.services.recipes import RecipeRepository

logger = logging.getLogger(__name__)


class CategoryRepository(Protocol):
    """Persistence interface for categories."""

    def list_categories(self, active_only: bool) -> list[Category]:
        """Return categories ordered by name."""

    def get_category(self, name: str) -> Category | None:
        """Return a category by name, if present."""

    def create_category(self, payload: dict[str, object]) -> Category:
        """Store a new category and return it."""

    def update_category(self, name: str, payload: dict[str, object]) -> Category:
        """Apply a partial update and return the category."""

    def set_recipe_count(self, name: str, count: int) -> None:
        """Store the recomputed recipe count for a category."""


@dataclass
class CategoryService:
    """Service for categories and their derived recipe counts."""

    repository: CategoryRepository
    recipes: RecipeRepository

    def list_categories(self) -> list[Category]:
        """Return active categories."""
        return self.repository.list_categories(active_only=True)

    def get_category(self, name: str) -> Category:
        """Return a category by name, case-insensitively."""
        category = self.repository.get_category(normalize_category(name))
        if category is None:
            raise NotFoundError("Category", name)
        return category

    def create_category(self, payload: dict[str, object]) -> Category:
        """Create one of the fixed categories if it is not stored yet."""
        cleaned = validate_category_payload(payload)
        name = str(cleaned["name"])
        if self.repository.get_category(name) is not None:
            raise ValidationFailedError("Category already exists", field="name")
        cleaned["recipe_count"] = self.recipes.count_by_category(name)
        category = self.repository.create_category(cleaned)
        logger.info("Created category %s", category.name)
        return category

    def update_category(self, name: str, payload: dict[str, object]) -> Category:
        """Update display fields or the active flag of a category."""
        category = self.get_category(name)
        cleaned = validate_category_payload(payload, partial=True)
        if not cleaned:
            return category
        return self.repository.update_category(category.name, cleaned)

    def deactivate_category(self, name: str) -> Category:
        """Hide a category from browsing.

        Categories are never removed; recipes keep referring to them.
        """
        category = self.get_category(name)
        updated = self.repository.update_category(category.name, {"is_active": False})
        logger.info("Deactivated category %s", category.name)
        return updated

    def recount(self, name: str) -> int:
        """Recompute and store the number of recipes in a category."""
        category = self.get_category(name)
        count = self.recipes.count_by_category(category.name)
        self.repository.set_recipe_count(category.name, count)
        return count

    def recount_all(self) -> dict[str, int]:
        """Recompute recipe counts for every category."""
        counts = {}
        for category in self.repository.list_categories(active_only=False):
            count = self.recipes.count_by_category(category.name)
            self.repository.set_recipe_count(category.name, count)
            counts[category.name] = count
        logger.info("Recounted %d categories", len(counts))
        return counts
