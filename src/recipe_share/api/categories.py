"""Category endpoints."""

from fastapi import APIRouter, Request

from recipe_share.api.auth import get_container
from recipe_share.api.serializers import ok, serialize_category

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("")
async def list_categories(request: Request) -> dict[str, object]:
    """Return active categories."""
    categories = get_container(request).category_service.list_categories()
    return ok({"categories": [serialize_category(c) for c in categories]})


@router.get("/{name}")
async def get_category(name: str, request: Request) -> dict[str, object]:
    """Return a single category."""
    category = get_container(request).category_service.get_category(name)
    return ok({"category": serialize_category(category)})
