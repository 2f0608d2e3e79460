"""Category repository implementation over a storage abstraction."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from ...domain.catalog.category_repository import CategoryRepository
from ...domain.catalog.entities import Category
from ...domain.errors import ConflictError
from ..scripts import CATALOG_SCRIPTS
from ..storage import KeyValueStore


class CategoryRepositoryImpl(CategoryRepository):
    """Category repository using a KeyValueStore."""

    ALL_KEY = "categories:all"

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def initialize(self) -> None:
        for name, script in CATALOG_SCRIPTS.items():
            await self.store.register_script(name, script)

    async def create(self, category: Category) -> Category:
        result = await self.store.run_script(
            "create_category",
            keys=[
                f"category:{category.id}",
                f"category:name:{category.name.lower()}",
                f"category:slug:{category.slug}",
                self.ALL_KEY,
            ],
            args=[
                category.model_dump_json(),
                str(category.id),
                str(category.created_at.timestamp()),
            ],
        )
        if int(result[0]) != 1:
            raise ConflictError("Category with this name already exists")
        return category

    async def get_by_id(self, category_id: UUID) -> Optional[Category]:
        data = await self.store.get(f"category:{category_id}")
        if not data:
            return None
        return Category.model_validate_json(data)

    async def get_by_name(self, name: str) -> Optional[Category]:
        category_id = await self.store.get(f"category:name:{name.strip().lower()}")
        if not category_id:
            return None
        return await self.get_by_id(UUID(category_id))

    async def get_all(self, limit: int = 100) -> List[Category]:
        ids: list[str] = await self.store.zrevrange(self.ALL_KEY, 0, -1)
        raw = await self.store.mget([f"category:{category_id}" for category_id in ids])
        categories = [Category.model_validate_json(data) for data in raw if data]
        categories.sort(key=lambda c: (c.name.lower(), c.sort_order))
        return categories[:limit]
