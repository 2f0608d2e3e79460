"""Product domain repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from .entities import Product, ProductStatus


class ProductRepository(ABC):
    """Abstract repository interface for Product entities."""

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """Create a new product. Raises ConflictError when the slug is taken."""
        pass

    @abstractmethod
    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        pass

    @abstractmethod
    async def find(
        self,
        vendor_id: Optional[UUID] = None,
        status: Optional[ProductStatus] = None,
    ) -> List[Product]:
        """Get products newest first, optionally narrowed to one vendor and status."""
        pass

    @abstractmethod
    async def update(self, product: Product) -> Product:
        """Persist an edited product. Raises NotFoundError if it was deleted."""
        pass

    @abstractmethod
    async def delete(self, product_id: UUID) -> bool:
        pass
