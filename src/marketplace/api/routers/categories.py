"""Category API routes."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status

from ...application.access.policy import AccessPolicy, Actor
from ...application.catalog.dtos import CategoryResponseDTO, CreateCategoryDTO
from ...application.catalog.use_cases.category import CategoryService
from ..dependencies import get_access_policy, get_category_service, get_current_actor

router = APIRouter(prefix="/vendor/categories", tags=["categories"])


@router.get("", response_model=List[CategoryResponseDTO])
async def list_categories(
    limit: int = Query(100, ge=1, le=500),
    category_service: CategoryService = Depends(get_category_service),
) -> List[CategoryResponseDTO]:
    """Get categories sorted by name."""
    return await category_service.list_categories(limit=limit)


@router.post(
    "", response_model=CategoryResponseDTO, status_code=status.HTTP_201_CREATED
)
async def create_category(
    category_data: CreateCategoryDTO,
    actor: Actor = Depends(get_current_actor),
    policy: AccessPolicy = Depends(get_access_policy),
    category_service: CategoryService = Depends(get_category_service),
) -> CategoryResponseDTO:
    """Create a category. Admin only."""
    policy.authorize(actor, "category.create")
    return await category_service.create_category(category_data)
