"""Category domain repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from .entities import Category


class CategoryRepository(ABC):
    """Abstract repository interface for Category entities."""

    @abstractmethod
    async def create(self, category: Category) -> Category:
        """Create a new category. Raises ConflictError on a duplicate name or slug."""
        pass

    @abstractmethod
    async def get_by_id(self, category_id: UUID) -> Optional[Category]:
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Category]:
        """Get category by name (case-insensitive)."""
        pass

    @abstractmethod
    async def get_all(self, limit: int = 100) -> List[Category]:
        """Get categories sorted by name."""
        pass
