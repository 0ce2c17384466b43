"""Conversion of domain objects into camelCase JSON bodies."""

from collections.abc import Callable
from dataclasses import asdict
from uuid import UUID

from recipe_share.domain.categories import Category
from recipe_share.domain.models import (
    AuthorSummary,
    RecipeSummary,
    UserProfile,
    UserRecord,
)
from recipe_share.domain.pagination import Page
from recipe_share.domain.recipes import Recipe


def ok(data: dict[str, object] | None = None, message: str | None = None) -> dict:
    """Wrap a response body in the success envelope."""
    body: dict[str, object] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


def serialize_recipe(
    recipe: Recipe, authors: dict[UUID, AuthorSummary] | None = None
) -> dict[str, object]:
    """Serialize a recipe with its author summary when available."""
    author = (authors or {}).get(recipe.author_id)
    return {
        "id": str(recipe.id),
        "name": recipe.name,
        "image": recipe.image,
        "ingredients": recipe.ingredients,
        "steps": recipe.steps,
        "category": recipe.category,
        "time": recipe.time,
        "difficulty": recipe.difficulty,
        "servings": recipe.servings,
        "rating": recipe.rating,
        "tags": list(recipe.tags),
        "nutritionInfo": asdict(recipe.nutrition) if recipe.nutrition else None,
        "author": _serialize_author(author) if author else {"id": str(recipe.author_id)},
        "likes": [str(user_id) for user_id in recipe.likes],
        "likesCount": recipe.likes_count,
        "isPublic": recipe.is_public,
        "createdAt": recipe.created_at.isoformat(),
        "updatedAt": recipe.updated_at.isoformat() if recipe.updated_at else None,
    }


def serialize_pagination(page: Page) -> dict[str, int]:
    """Serialize the paging block of a listing."""
    return {
        "page": page.page,
        "limit": page.page_size,
        "total": page.total,
        "pages": page.pages,
    }


def serialize_page(
    page: Page, key: str, serializer: Callable[[object], dict[str, object]]
) -> dict[str, object]:
    """Serialize a page of items under the given key."""
    return {
        key: [serializer(item) for item in page.items],
        "pagination": serialize_pagination(page),
    }


def serialize_user(user: UserRecord) -> dict[str, object]:
    """Serialize public user fields; credentials are never included."""
    return {
        "id": str(user.id),
        "email": user.email,
        "name": user.name,
        "avatar": user.avatar,
        "createdRecipes": [str(rid) for rid in user.created_recipes],
        "favoriteRecipes": [str(rid) for rid in user.favorite_recipes],
        "isActive": user.is_active,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }


def serialize_profile(profile: UserProfile) -> dict[str, object]:
    """Serialize a user with resolved recipe summaries."""
    return {
        **serialize_user(profile.user),
        "createdRecipes": [_serialize_summary(s) for s in profile.created_recipes],
        "favoriteRecipes": [_serialize_summary(s) for s in profile.favorite_recipes],
    }


def serialize_category(category: Category) -> dict[str, object]:
    """Serialize a category."""
    return {
        "name": category.name,
        "displayName": category.display_name,
        "emoji": category.emoji,
        "color": category.color,
        "description": category.description,
        "isActive": category.is_active,
        "recipeCount": category.recipe_count,
    }


def _serialize_author(author: AuthorSummary) -> dict[str, object]:
    return {"id": str(author.id), "name": author.name, "avatar": author.avatar}


def _serialize_summary(summary: RecipeSummary) -> dict[str, object]:
    return {
        "id": str(summary.id),
        "name": summary.name,
        "image": summary.image,
        "category": summary.category,
        "rating": summary.rating,
        "likesCount": summary.likes_count,
    }
