"""Admin API endpoints with simple token auth."""

from fastapi import APIRouter, Depends, Request, status

from recipe_share.api.auth import get_container, require_admin
from recipe_share.api.schemas import CategoryCreateRequest, CategoryUpdateRequest
from recipe_share.api.serializers import ok, serialize_category

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/health")
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.post("/categories", status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryCreateRequest, request: Request
) -> dict[str, object]:
    """Create a category."""
    category = get_container(request).category_service.create_category(
        body.to_payload()
    )
    return ok({"category": serialize_category(category)}, "Category created")


@router.post("/categories/recount")
async def recount_categories(
    request: Request, category: str | None = None
) -> dict[str, object]:
    """Recompute recipe counts for one category or all of them."""
    service = get_container(request).category_service
    if category:
        counts = {category.lower(): service.recount(category)}
    else:
        counts = service.recount_all()
    return ok({"counts": counts}, "Category counts updated")


@router.put("/categories/{name}")
async def update_category(
    name: str, body: CategoryUpdateRequest, request: Request
) -> dict[str, object]:
    """Update a category's display fields or active flag."""
    category = get_container(request).category_service.update_category(
        name, body.to_payload()
    )
    return ok({"category": serialize_category(category)}, "Category updated")


@router.delete("/categories/{name}")
async def deactivate_category(name: str, request: Request) -> dict[str, object]:
    """Deactivate a category; categories are never removed."""
    category = get_container(request).category_service.deactivate_category(name)
    return ok({"category": serialize_category(category)}, "Category deactivated")
