"""User profile and favorites endpoints."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from recipe_share.api.auth import get_container, require_requester
from recipe_share.api.schemas import UserRegisterRequest, UserUpdateRequest
from recipe_share.api.serializers import (
    ok,
    serialize_page,
    serialize_profile,
    serialize_user,
)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_user(
    body: UserRegisterRequest, request: Request
) -> dict[str, object]:
    """Create the profile for a newly registered account."""
    user = get_container(request).user_service.register(
        email=body.email, name=body.name, avatar=body.avatar
    )
    return ok({"user": serialize_user(user)}, "User registered successfully")


@router.get("", dependencies=[Depends(require_requester)])
async def list_users(
    request: Request, page: int | None = None, limit: int | None = None
) -> dict[str, object]:
    """Return active users, newest first."""
    result = get_container(request).user_service.list_users(page, limit)
    return ok(serialize_page(result, "users", serialize_user))


@router.post("/favorites/{recipe_id}")
async def add_favorite(
    recipe_id: UUID,
    request: Request,
    requester: UUID = Depends(require_requester),
) -> dict[str, object]:
    """Add a recipe to the requester's favorites."""
    user = get_container(request).user_service.add_favorite(requester, recipe_id)
    return ok(
        {"favoriteRecipes": [str(rid) for rid in user.favorite_recipes]},
        "Recipe added to favorites",
    )


@router.delete("/favorites/{recipe_id}")
async def remove_favorite(
    recipe_id: UUID,
    request: Request,
    requester: UUID = Depends(require_requester),
) -> dict[str, object]:
    """Remove a recipe from the requester's favorites."""
    user = get_container(request).user_service.remove_favorite(requester, recipe_id)
    return ok(
        {"favoriteRecipes": [str(rid) for rid in user.favorite_recipes]},
        "Recipe removed from favorites",
    )


@router.get("/{user_id}", dependencies=[Depends(require_requester)])
async def get_user(user_id: UUID, request: Request) -> dict[str, object]:
    """Return a user profile with recipe summaries."""
    profile = get_container(request).user_service.get_profile(user_id)
    return ok({"user": serialize_profile(profile)})


@router.put("/{user_id}")
async def update_user(
    user_id: UUID,
    body: UserUpdateRequest,
    request: Request,
    requester: UUID = Depends(require_requester),
) -> dict[str, object]:
    """Update the requester's display name and avatar."""
    user = get_container(request).user_service.update_profile(
        user_id, requester, body.model_dump(exclude_unset=True)
    )
    return ok({"user": serialize_user(user)}, "User updated successfully")


@router.delete("/{user_id}")
async def deactivate_user(
    user_id: UUID,
    request: Request,
    requester: UUID = Depends(require_requester),
) -> dict[str, object]:
    """Deactivate the requester's own account."""
    get_container(request).user_service.deactivate(user_id, requester)
    return ok(message="Account deactivated successfully")
