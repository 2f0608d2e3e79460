"""Product repository implementation over a storage abstraction."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from ...domain.catalog.entities import Product, ProductStatus
from ...domain.catalog.product_repository import ProductRepository
from ...domain.errors import ConflictError, NotFoundError
from ..scripts import PRODUCT_SCRIPTS
from ..storage import KeyValueStore


class ProductRepositoryImpl(ProductRepository):
    """Product repository using a KeyValueStore.

    Products are indexed newest first globally and per vendor; status
    filtering happens on the loaded records.
    """

    ALL_KEY = "products:all"

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def initialize(self) -> None:
        for name, script in PRODUCT_SCRIPTS.items():
            await self.store.register_script(name, script)

    @staticmethod
    def _product_key(product_id: UUID | str) -> str:
        return f"product:{product_id}"

    @staticmethod
    def _vendor_index_key(vendor_id: UUID | str) -> str:
        return f"products:vendor:{vendor_id}"

    async def create(self, product: Product) -> Product:
        result = await self.store.run_script(
            "create_product",
            keys=[
                self._product_key(product.id),
                f"product:slug:{product.slug}",
                self.ALL_KEY,
                self._vendor_index_key(product.vendor_id),
            ],
            args=[
                product.model_dump_json(),
                str(product.id),
                str(product.created_at.timestamp()),
            ],
        )
        if int(result[0]) != 1:
            raise ConflictError("Product with this title or slug already exists")
        return product

    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        data = await self.store.get(self._product_key(product_id))
        if not data:
            return None
        return Product.model_validate_json(data)

    async def find(
        self,
        vendor_id: Optional[UUID] = None,
        status: Optional[ProductStatus] = None,
    ) -> List[Product]:
        index_key = self._vendor_index_key(vendor_id) if vendor_id else self.ALL_KEY
        ids: list[str] = await self.store.zrevrange(index_key, 0, -1)
        raw = await self.store.mget([self._product_key(product_id) for product_id in ids])
        products = [Product.model_validate_json(data) for data in raw if data]
        if status:
            products = [p for p in products if p.status == status]
        return products

    async def update(self, product: Product) -> Product:
        result = await self.store.run_script(
            "update_product",
            keys=[self._product_key(product.id)],
            args=[product.model_dump_json()],
        )
        if int(result[0]) == 2:
            raise NotFoundError("Product not found")
        return product

    async def delete(self, product_id: UUID) -> bool:
        existing_raw = await self.store.get(self._product_key(product_id))
        if not existing_raw:
            return False
        product = Product.model_validate_json(existing_raw)

        await self.store.delete(self._product_key(product_id))
        await self.store.delete(f"product:slug:{product.slug}")
        await self.store.zrem(self.ALL_KEY, str(product_id))
        await self.store.zrem(self._vendor_index_key(product.vendor_id), str(product_id))
        return True
