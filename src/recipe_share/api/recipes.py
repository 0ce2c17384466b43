"""Recipe endpoints."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from recipe_share.api.auth import get_container, optional_requester, require_requester
from recipe_share.api.schemas import RecipeCreateRequest, RecipeUpdateRequest
from recipe_share.api.serializers import (
    ok,
    serialize_page,
    serialize_recipe,
)
from recipe_share.domain.pagination import Page
from recipe_share.domain.recipes import Recipe

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


def _listing(request: Request, page: Page[Recipe]) -> dict[str, object]:
    service = get_container(request).recipe_service
    authors = service.author_summaries(page.items)
    return serialize_page(
        page, "recipes", lambda recipe: serialize_recipe(recipe, authors)
    )


def _single(request: Request, recipe: Recipe) -> dict[str, object]:
    service = get_container(request).recipe_service
    return serialize_recipe(recipe, service.author_summaries([recipe]))


@router.get("")
async def list_recipes(
    request: Request,
    page: int | None = None,
    limit: int | None = None,
    sort: str | None = None,
    category: str | None = None,
    difficulty: str | None = None,
) -> dict[str, object]:
    """Return the public recipe feed."""
    result = get_container(request).recipe_service.browse(
        category=category,
        difficulty=difficulty,
        sort=sort,
        page=page,
        page_size=limit,
    )
    return ok(_listing(request, result))


@router.get("/search")
async def search_recipes(  # noqa: PLR0913
    request: Request,
    q: str | None = None,
    category: str | None = None,
    difficulty: str | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> dict[str, object]:
    """Search public recipes by text, category and difficulty."""
    result = get_container(request).recipe_service.browse(
        text=q,
        category=category,
        difficulty=difficulty,
        page=page,
        page_size=limit,
    )
    data = _listing(request, result)
    data["searchQuery"] = q
    data["filters"] = {"category": category, "difficulty": difficulty}
    return ok(data)


@router.get("/category/{category}")
async def recipes_by_category(
    category: str,
    request: Request,
    page: int | None = None,
    limit: int | None = None,
) -> dict[str, object]:
    """Return public recipes in a category."""
    result = get_container(request).recipe_service.browse(
        category=category, page=page, page_size=limit
    )
    data = _listing(request, result)
    data["category"] = category.lower()
    return ok(data)


@router.get("/favorites")
async def favorite_recipes(
    request: Request, requester: UUID = Depends(require_requester)
) -> dict[str, object]:
    """Return the requester's favorite recipes."""
    service = get_container(request).recipe_service
    recipes = service.list_favorites(requester)
    authors = service.author_summaries(recipes)
    return ok({"recipes": [serialize_recipe(recipe, authors) for recipe in recipes]})


@router.get("/my-recipes")
async def my_recipes(
    request: Request,
    page: int | None = None,
    limit: int | None = None,
    requester: UUID = Depends(require_requester),
) -> dict[str, object]:
    """Return the requester's own recipes, public and private."""
    result = get_container(request).recipe_service.list_my_recipes(
        requester, page=page, page_size=limit
    )
    return ok(_listing(request, result))


@router.get("/{recipe_id}")
async def get_recipe(
    recipe_id: UUID,
    request: Request,
    requester: UUID | None = Depends(optional_requester),
) -> dict[str, object]:
    """Return one recipe when it is public or owned by the requester."""
    recipe = get_container(request).recipe_service.get_recipe(recipe_id, requester)
    return ok({"recipe": _single(request, recipe)})


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_recipe(
    body: RecipeCreateRequest,
    request: Request,
    requester: UUID = Depends(require_requester),
) -> dict[str, object]:
    """Create a recipe authored by the requester."""
    recipe = get_container(request).recipe_service.create_recipe(
        requester, body.to_payload()
    )
    return ok({"recipe": _single(request, recipe)}, "Recipe created successfully")


@router.put("/{recipe_id}")
async def update_recipe(
    recipe_id: UUID,
    body: RecipeUpdateRequest,
    request: Request,
    requester: UUID = Depends(require_requester),
) -> dict[str, object]:
    """Update a recipe owned by the requester."""
    recipe = get_container(request).recipe_service.update_recipe(
        recipe_id, requester, body.to_payload()
    )
    return ok({"recipe": _single(request, recipe)}, "Recipe updated successfully")


@router.delete("/{recipe_id}")
async def delete_recipe(
    recipe_id: UUID,
    request: Request,
    requester: UUID = Depends(require_requester),
) -> dict[str, object]:
    """Delete a recipe owned by the requester."""
    get_container(request).recipe_service.delete_recipe(recipe_id, requester)
    return ok(message="Recipe deleted successfully")


@router.post("/{recipe_id}/like")
async def like_recipe(
    recipe_id: UUID,
    request: Request,
    requester: UUID = Depends(require_requester),
) -> dict[str, object]:
    """Like a recipe."""
    recipe = get_container(request).recipe_service.like_recipe(recipe_id, requester)
    return ok({"likesCount": recipe.likes_count}, "Recipe liked successfully")


@router.delete("/{recipe_id}/like")
async def unlike_recipe(
    recipe_id: UUID,
    request: Request,
    requester: UUID = Depends(require_requester),
) -> dict[str, object]:
    """Withdraw a like from a recipe."""
    recipe = get_container(request).recipe_service.unlike_recipe(recipe_id, requester)
    return ok({"likesCount": recipe.likes_count}, "Recipe unliked successfully")
