"""Use cases for product categories."""

from __future__ import annotations

import logging
from typing import List, Optional

from ....domain.catalog.category_repository import CategoryRepository
from ....domain.catalog.entities import Category
from ....domain.errors import ConflictError, ValidationError
from ..dtos import CategoryResponseDTO, CreateCategoryDTO

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for category-related operations."""

    def __init__(self, category_repository: CategoryRepository):
        self.category_repository = category_repository

    async def list_categories(self, limit: int = 100) -> List[CategoryResponseDTO]:
        """Get categories sorted alphabetically."""
        categories = await self.category_repository.get_all(limit=limit)
        return [CategoryResponseDTO.from_entity(c) for c in categories]

    async def create_category(self, dto: CreateCategoryDTO) -> CategoryResponseDTO:
        name = (dto.name or "").strip()
        if not name:
            raise ValidationError("Category name is required")
        if await self.category_repository.get_by_name(name):
            raise ConflictError("Category with this name already exists")

        category = Category.from_name(
            name, is_active=dto.is_active, sort_order=dto.sort_order
        )
        created = await self.category_repository.create(category)
        logger.info("Created category %s (%s)", created.name, created.slug)
        return CategoryResponseDTO.from_entity(created)

    async def find_or_create(self, name: Optional[str]) -> Optional[CategoryResponseDTO]:
        """Resolve a free-text category name, creating it on first use.

        Returns None for a blank name.
        """
        name = (name or "").strip()
        if not name:
            return None

        existing = await self.category_repository.get_by_name(name)
        if existing:
            return CategoryResponseDTO.from_entity(existing)

        try:
            created = await self.category_repository.create(Category.from_name(name))
        except ConflictError:
            # Created concurrently under the same name or slug.
            existing = await self.category_repository.get_by_name(name)
            if existing is None:
                raise
            return CategoryResponseDTO.from_entity(existing)
        return CategoryResponseDTO.from_entity(created)
