"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from recipe_share.config import Settings
from recipe_share.containers import AppContainer, wire_services
from recipe_share.domain.categories import RECIPE_CATEGORIES, Category
from recipe_share.domain.models import UserRecord
from recipe_share.domain.recipes import NutritionInfo, Recipe, RecipeQuery
from recipe_share.services.categories import CategoryRepository
from recipe_share.services.recipes import RecipeRepository
from recipe_share.services.users import UserRepository

_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)

    def create_user(self, email: str, name: str, avatar: str | None) -> UserRecord:
        user = UserRecord(
            id=uuid4(),
            email=email,
            name=name,
            avatar=avatar,
            created_recipes=(),
            favorite_recipes=(),
            is_active=True,
            created_at=_EPOCH + timedelta(minutes=len(self.users)),
        )
        self.users[user.id] = user
        return user

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> UserRecord | None:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def get_users(self, user_ids: list[UUID]) -> list[UserRecord]:
        return [self.users[uid] for uid in user_ids if uid in self.users]

    def list_active_users(
        self, offset: int, limit: int
    ) -> tuple[list[UserRecord], int]:
        active = sorted(
            (user for user in self.users.values() if user.is_active),
            key=lambda user: user.created_at,
            reverse=True,
        )
        return active[offset : offset + limit], len(active)

    def update_user(self, user_id: UUID, payload: dict[str, object]) -> UserRecord:
        updated = replace(self.users[user_id], **payload)
        self.users[user_id] = updated
        return updated

    def add_favorite(self, user_id: UUID, recipe_id: UUID) -> UserRecord | None:
        user = self.users[user_id]
        if recipe_id in user.favorite_recipes:
            return None
        return self.update_user(
            user_id, {"favorite_recipes": (*user.favorite_recipes, recipe_id)}
        )

    def remove_favorite(self, user_id: UUID, recipe_id: UUID) -> UserRecord | None:
        user = self.users[user_id]
        if recipe_id not in user.favorite_recipes:
            return None
        return self.update_user(
            user_id,
            {"favorite_recipes": _without(user.favorite_recipes, recipe_id)},
        )

    def add_created_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        user = self.users[user_id]
        if recipe_id not in user.created_recipes:
            self.update_user(
                user_id, {"created_recipes": (*user.created_recipes, recipe_id)}
            )

    def remove_recipe_references(self, recipe_id: UUID) -> int:
        changed = 0
        for user in list(self.users.values()):
            if recipe_id in user.created_recipes or recipe_id in user.favorite_recipes:
                self.update_user(
                    user.id,
                    {
                        "created_recipes": _without(user.created_recipes, recipe_id),
                        "favorite_recipes": _without(user.favorite_recipes, recipe_id),
                    },
                )
                changed += 1
        return changed


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository for tests.

    ``stored_likes_count`` mirrors the persisted count column so tests can
    check it against the likes list.
    """

    recipes: dict[UUID, Recipe] = field(default_factory=dict)
    stored_likes_count: dict[UUID, int] = field(default_factory=dict)

    def create_recipe(self, author_id: UUID, payload: dict[str, object]) -> Recipe:
        nutrition = payload.get("nutrition_info")
        recipe = Recipe(
            id=uuid4(),
            author_id=author_id,
            name=str(payload["name"]),
            image=str(payload["image"]),
            ingredients=str(payload["ingredients"]),
            steps=str(payload["steps"]),
            category=str(payload["category"]),
            time=str(payload["time"]),
            difficulty=str(payload["difficulty"]),
            servings=int(payload["servings"]),
            rating=str(payload["rating"]),
            tags=tuple(payload["tags"]),
            nutrition=NutritionInfo(**nutrition) if nutrition else None,
            likes=(),
            is_public=bool(payload["is_public"]),
            created_at=_EPOCH + timedelta(minutes=len(self.recipes)),
        )
        self.recipes[recipe.id] = recipe
        self.stored_likes_count[recipe.id] = 0
        return recipe

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        return self.recipes.get(recipe_id)

    def get_recipes(self, recipe_ids: list[UUID]) -> list[Recipe]:
        return [self.recipes[rid] for rid in recipe_ids if rid in self.recipes]

    def update_recipe(self, recipe_id: UUID, payload: dict[str, object]) -> Recipe:
        changes = dict(payload)
        if "nutrition_info" in changes:
            nutrition = changes.pop("nutrition_info")
            changes["nutrition"] = NutritionInfo(**nutrition) if nutrition else None
        if "tags" in changes:
            changes["tags"] = tuple(changes["tags"])
        updated = replace(
            self.recipes[recipe_id], **changes, updated_at=datetime.now(tz=UTC)
        )
        self.recipes[recipe_id] = updated
        return updated

    def delete_recipe(self, recipe_id: UUID) -> None:
        self.recipes.pop(recipe_id, None)
        self.stored_likes_count.pop(recipe_id, None)

    def add_like(self, recipe_id: UUID, user_id: UUID) -> Recipe | None:
        recipe = self.recipes.get(recipe_id)
        if recipe is None or user_id in recipe.likes:
            return None
        return self._store_likes(recipe, (*recipe.likes, user_id))

    def remove_like(self, recipe_id: UUID, user_id: UUID) -> Recipe | None:
        recipe = self.recipes.get(recipe_id)
        if recipe is None or user_id not in recipe.likes:
            return None
        return self._store_likes(recipe, _without(recipe.likes, user_id))

    def _store_likes(self, recipe: Recipe, likes: tuple[UUID, ...]) -> Recipe:
        updated = replace(recipe, likes=likes)
        self.recipes[recipe.id] = updated
        self.stored_likes_count[recipe.id] = len(likes)
        return updated

    def find_recipes(
        self, query: RecipeQuery, offset: int, limit: int
    ) -> tuple[list[Recipe], int]:
        matches = [
            recipe for recipe in self.recipes.values() if _matches(recipe, query)
        ]
        if query.text:
            scored = [(_text_score(recipe, query.text), recipe) for recipe in matches]
            ranked = sorted(
                (item for item in scored if item[0] > 0),
                key=lambda item: (item[0], item[1].created_at),
                reverse=True,
            )
            matches = [recipe for _, recipe in ranked]
        else:
            matches.sort(key=lambda recipe: recipe.created_at, reverse=True)
            matches.sort(
                key=lambda recipe: _sort_value(recipe, query.sort.field),
                reverse=query.sort.descending,
            )
        return matches[offset : offset + limit], len(matches)

    def count_by_category(self, category: str) -> int:
        return sum(1 for recipe in self.recipes.values() if recipe.category == category)


def _without(ids: tuple[UUID, ...], target: UUID) -> tuple[UUID, ...]:
    return tuple(item for item in ids if item != target)


def _matches(recipe: Recipe, query: RecipeQuery) -> bool:
    if query.public_only and not recipe.is_public:
        return False
    if query.category and recipe.category != query.category:
        return False
    if query.difficulty and recipe.difficulty != query.difficulty:
        return False
    return not (query.author_id and recipe.author_id != query.author_id)


def _text_score(recipe: Recipe, text: str) -> int:
    name = recipe.name.lower()
    ingredients = recipe.ingredients.lower()
    return sum(
        2 * name.count(term) + ingredients.count(term) for term in text.lower().split()
    )


def _sort_value(recipe: Recipe, column: str) -> object:
    if column == "likes_count":
        return recipe.likes_count
    return getattr(recipe, column)


@dataclass
class InMemoryCategoryRepository(CategoryRepository):
    """In-memory category repository for tests."""

    categories: dict[str, Category] = field(default_factory=dict)

    def list_categories(self, active_only: bool) -> list[Category]:
        return sorted(
            (c for c in self.categories.values() if c.is_active or not active_only),
            key=lambda c: c.name,
        )

    def get_category(self, name: str) -> Category | None:
        return self.categories.get(name)

    def create_category(self, payload: dict[str, object]) -> Category:
        category = Category(
            name=str(payload["name"]),
            display_name=str(payload["display_name"]),
            emoji=str(payload["emoji"]),
            color=str(payload["color"]),
            description=payload.get("description"),
            is_active=bool(payload.get("is_active", True)),
            recipe_count=int(payload.get("recipe_count", 0)),
        )
        self.categories[category.name] = category
        return category

    def update_category(self, name: str, payload: dict[str, object]) -> Category:
        self.categories[name] = replace(self.categories[name], **payload)
        return self.categories[name]

    def set_recipe_count(self, name: str, count: int) -> None:
        self.categories[name] = replace(self.categories[name], recipe_count=count)


def default_categories() -> dict[str, Category]:
    return {
        name: Category(
            name=name,
            display_name=name.title(),
            emoji="🍽️",
            color="#FFE4B5",
            description=None,
            is_active=True,
            recipe_count=0,
        )
        for name in RECIPE_CATEGORIES
    }


def recipe_payload(**overrides: object) -> dict[str, object]:
    """Return a valid recipe creation payload."""
    payload: dict[str, object] = {
        "name": "Beef Biryani",
        "image": "https://example.com/biryani.jpg",
        "ingredients": "Rice, beef, yogurt, spices",
        "steps": "Marinate, layer, steam.",
        "category": "dinner",
        "time": "90 mins",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def category_repository() -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository(categories=default_categories())


@pytest.fixture
def container(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    recipe_repository: InMemoryRecipeRepository,
    category_repository: InMemoryCategoryRepository,
) -> AppContainer:
    return wire_services(
        settings,
        user_repository=user_repository,
        recipe_repository=recipe_repository,
        category_repository=category_repository,
    )
