"""Supabase implementation for recipes."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from recipe_share.domain.errors import StorageError
from recipe_share.domain.recipes import NutritionInfo, Recipe, RecipeQuery
from recipe_share.services.recipes import RecipeRepository

SEARCH_FUNCTION = "search_recipes"
SEARCH_OPTIONS = {"type": "web_search", "config": "english"}
LIKE_FUNCTION = "like_recipe"
UNLIKE_FUNCTION = "unlike_recipe"


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed repository for recipes."""

    client: Client

    def create_recipe(self, author_id: UUID, payload: dict[str, object]) -> Recipe:
        """Create a recipe owned by the author and return it."""
        response = (
            self.client.table("recipes")
            .insert(
                {
                    **payload,
                    "author_id": str(author_id),
                    "likes": [],
                    "likes_count": 0,
                }
            )
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to create recipe")
        return _parse_recipe(response.data[0])

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe by id, if present."""
        response = (
            self.client.table("recipes")
            .select("*")
            .eq("id", str(recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def get_recipes(self, recipe_ids: list[UUID]) -> list[Recipe]:
        """Return the recipes for the given ids that exist."""
        response = (
            self.client.table("recipes")
            .select("*")
            .in_("id", [str(recipe_id) for recipe_id in recipe_ids])
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def update_recipe(self, recipe_id: UUID, payload: dict[str, object]) -> Recipe:
        """Apply a partial update and return the recipe."""
        return self._update(recipe_id, dict(payload))

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Remove a recipe."""
        self.client.table("recipes").delete().eq("id", str(recipe_id)).execute()

    def add_like(self, recipe_id: UUID, user_id: UUID) -> Recipe | None:
        """Append a like and recount in one statement."""
        return self._change_likes(LIKE_FUNCTION, recipe_id, user_id)

    def remove_like(self, recipe_id: UUID, user_id: UUID) -> Recipe | None:
        """Remove a like and recount in one statement."""
        return self._change_likes(UNLIKE_FUNCTION, recipe_id, user_id)

    def find_recipes(
        self, query: RecipeQuery, offset: int, limit: int
    ) -> tuple[list[Recipe], int]:
        """Return a page of matching recipes and the total match count."""
        if query.text:
            return self._search(query, offset, limit)
        builder = self._filtered(
            self.client.table("recipes").select("*", count="exact"), query
        )
        builder = builder.order(query.sort.field, desc=query.sort.descending)
        if query.sort.field != "created_at":
            builder = builder.order("created_at", desc=True)
        response = builder.range(offset, offset + limit - 1).execute()
        recipes = [_parse_recipe(row) for row in response.data or []]
        return recipes, int(response.count or 0)

    def count_by_category(self, category: str) -> int:
        """Return how many recipes belong to a category."""
        response = (
            self.client.table("recipes")
            .select("id", count="exact")
            .eq("category", category)
            .limit(1)
            .execute()
        )
        return int(response.count or 0)

    def _search(
        self, query: RecipeQuery, offset: int, limit: int
    ) -> tuple[list[Recipe], int]:
        # PostgREST cannot order by ts_rank, so ranking happens in SQL.
        response = self.client.rpc(
            SEARCH_FUNCTION,
            {
                "search_query": query.text,
                "category_filter": query.category,
                "difficulty_filter": query.difficulty,
                "author_filter": str(query.author_id) if query.author_id else None,
                "public_only": query.public_only,
                "row_offset": offset,
                "row_limit": limit,
            },
        ).execute()
        recipes = [_parse_recipe(row) for row in response.data or []]
        count_response = (
            self._filtered(
                self.client.table("recipes").select("id", count="exact"), query
            )
            .limit(1)
            .execute()
        )
        return recipes, int(count_response.count or 0)

    def _change_likes(
        self, function: str, recipe_id: UUID, user_id: UUID
    ) -> Recipe | None:
        # The function's guard returns no row when the like state already matches.
        response = self.client.rpc(
            function, {"target_recipe": str(recipe_id), "liker": str(user_id)}
        ).execute()
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    @staticmethod
    def _filtered(builder, query: RecipeQuery):  # type: ignore[no-untyped-def]
        if query.public_only:
            builder = builder.eq("is_public", True)
        if query.category:
            builder = builder.eq("category", query.category)
        if query.difficulty:
            builder = builder.eq("difficulty", query.difficulty)
        if query.author_id:
            builder = builder.eq("author_id", str(query.author_id))
        if query.text:
            builder = builder.text_search(
                "search_vector", query.text, options=SEARCH_OPTIONS
            )
        return builder

    def _update(self, recipe_id: UUID, payload: dict[str, object]) -> Recipe:
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("recipes")
            .update(payload)
            .eq("id", str(recipe_id))
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to update recipe")
        return _parse_recipe(response.data[0])


def _parse_datetime(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_nutrition(raw: object) -> NutritionInfo | None:
    if not isinstance(raw, dict) or not raw:
        return None
    return NutritionInfo(
        calories=raw.get("calories"),
        protein=raw.get("protein"),
        carbs=raw.get("carbs"),
        fat=raw.get("fat"),
    )


def _parse_recipe(row: dict[str, object]) -> Recipe:
    """Parse a recipes row into a domain model."""
    likes: list[UUID] = []
    for raw_id in row.get("likes") or []:
        user_id = UUID(str(raw_id))
        if user_id not in likes:
            likes.append(user_id)
    return Recipe(
        id=UUID(str(row["id"])),
        author_id=UUID(str(row["author_id"])),
        name=str(row.get("name", "")),
        image=str(row.get("image", "")),
        ingredients=str(row.get("ingredients", "")),
        steps=str(row.get("steps", "")),
        category=str(row.get("category", "")),
        time=str(row.get("time", "")),
        difficulty=str(row.get("difficulty", "medium")),
        servings=int(row.get("servings", 4)),
        rating=str(row.get("rating", "0.0")),
        tags=tuple(row.get("tags") or []),
        nutrition=_parse_nutrition(row.get("nutrition_info")),
        likes=tuple(likes),
        is_public=bool(row.get("is_public", True)),
        created_at=_parse_datetime(row.get("created_at")) or datetime.now(tz=UTC),
        updated_at=_parse_datetime(row.get("updated_at")),
    )
