"""Supabase category data access."""

from dataclasses import dataclass

from supabase import Client

from recipe_share.domain.categories import Category
from recipe_share.domain.errors import StorageError
from recipe_share.services.categories import CategoryRepository


@dataclass
class SupabaseCategoryRepository(CategoryRepository):
    """Supabase implementation for categories."""

    client: Client

    def list_categories(self, active_only: bool) -> list[Category]:
        """Return categories ordered by name."""
        builder = self.client.table("categories").select("*")
        if active_only:
            builder = builder.eq("is_active", True)
        response = builder.order("name").execute()
        return [_parse_category(row) for row in response.data or []]

    def get_category(self, name: str) -> Category | None:
        """Return a category by name, if present."""
        response = (
            self.client.table("categories")
            .select("*")
            .eq("name", name)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_category(response.data[0])

    def create_category(self, payload: dict[str, object]) -> Category:
        """Insert a category row and return it."""
        response = self.client.table("categories").insert(payload).execute()
        if not response.data:
            raise StorageError("Failed to create category")
        return _parse_category(response.data[0])

    def update_category(self, name: str, payload: dict[str, object]) -> Category:
        """Apply a partial update and return the category."""
        response = (
            self.client.table("categories")
            .update(payload)
            .eq("name", name)
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to update category")
        return _parse_category(response.data[0])

    def set_recipe_count(self, name: str, count: int) -> None:
        """Store the recomputed recipe count for a category."""
        self.client.table("categories").update({"recipe_count": count}).eq(
            "name", name
        ).execute()


def _parse_category(row: dict[str, object]) -> Category:
    return Category(
        name=str(row["name"]),
        display_name=str(row.get("display_name", row["name"])),
        emoji=str(row.get("emoji", "")),
        color=str(row.get("color", "")),
        description=row.get("description"),
        is_active=bool(row.get("is_active", True)),
        recipe_count=int(row.get("recipe_count", 0)),
    )
