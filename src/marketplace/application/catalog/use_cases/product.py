"""Use cases for vendor-managed products."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from ....domain.catalog.entities import PRODUCT_STATUSES, Product
from ....domain.catalog.product_repository import ProductRepository
from ....domain.errors import NotFoundError, ValidationError
from ...access.policy import AccessPolicy, Actor, Decision
from ..dtos import (
    CreateProductDTO,
    PaginatedProductsDTO,
    ProductResponseDTO,
    UpdateProductDTO,
)
from .category import CategoryService

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
ALL_STATUSES = "all"


class ProductService:
    """Lists, creates, edits and deletes products on behalf of an actor.

    Vendors only ever see and touch their own products; admins act on any.
    """

    def __init__(
        self,
        product_repository: ProductRepository,
        category_service: CategoryService,
        policy: AccessPolicy,
    ):
        self.product_repository = product_repository
        self.category_service = category_service
        self.policy = policy

    async def _category_id(self, name: Optional[str]) -> Optional[UUID]:
        category = await self.category_service.find_or_create(name)
        return category.id if category else None

    async def _get_or_raise(self, product_id: UUID) -> Product:
        product = await self.product_repository.get_by_id(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    async def list_products(
        self,
        actor: Actor,
        status: str = ALL_STATUSES,
        page: int = 1,
        limit: int = 10,
    ) -> PaginatedProductsDTO:
        decision = self.policy.authorize(actor, "product.list")
        if page < 1:
            raise ValidationError("Page must be at least 1")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
        if status != ALL_STATUSES and status not in PRODUCT_STATUSES:
            raise ValidationError(
                f"Status must be '{ALL_STATUSES}' or one of: "
                + ", ".join(PRODUCT_STATUSES)
            )

        vendor_id = UUID(actor.id) if decision is Decision.FILTER else None
        products = await self.product_repository.find(
            vendor_id=vendor_id,
            status=None if status == ALL_STATUSES else status,  # type: ignore[arg-type]
        )
        total = len(products)
        total_pages = math.ceil(total / limit)
        start = (page - 1) * limit
        page_items = products[start : start + limit]
        return PaginatedProductsDTO(
            products=[ProductResponseDTO.from_entity(p) for p in page_items],
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )

    async def create_product(
        self, actor: Actor, dto: CreateProductDTO
    ) -> ProductResponseDTO:
        """Create a product owned by the calling vendor, as a draft by default."""
        self.policy.authorize(actor, "product.create")

        title = (dto.title or "").strip()
        short_description = (dto.short_description or "").strip()
        if not title or not short_description or dto.price is None:
            raise ValidationError(
                "Missing required fields: title, short_description, price"
            )
        if dto.price <= 0:
            raise ValidationError("Price must be a positive number")

        category_id = await self._category_id(dto.category)
        try:
            product = Product.create(
                vendor_id=UUID(actor.id),
                title=title,
                short_description=short_description,
                description=dto.description,
                price=dto.price,
                compare_price=dto.compare_price,
                inventory=dto.inventory or {},
                category_id=category_id,
                status=dto.status or "draft",
                tags=dto.tags,
                featured=dto.featured,
                sku=dto.sku,
            )
        except PydanticValidationError as e:
            raise ValidationError("Invalid product data", details=str(e)) from e

        created = await self.product_repository.create(product)
        logger.info(
            "Vendor %s created product %s (%s)", actor.id, created.id, created.slug
        )
        return ProductResponseDTO.from_entity(created)

    async def update_product(
        self, actor: Actor, product_id: UUID, dto: UpdateProductDTO
    ) -> ProductResponseDTO:
        """Apply the fields present in ``dto``; owner and slug never change."""
        product = await self._get_or_raise(product_id)
        self.policy.authorize(actor, "product.update", str(product.vendor_id))

        changes = dto.model_dump(exclude_unset=True, exclude={"category"})
        if "title" in changes and not (changes["title"] or "").strip():
            raise ValidationError("Title cannot be empty")
        if "short_description" in changes and not (
            changes["short_description"] or ""
        ).strip():
            raise ValidationError("Short description cannot be empty")
        if "price" in changes and (changes["price"] is None or changes["price"] <= 0):
            raise ValidationError("Price must be a positive number")
        for field in ("title", "short_description"):
            if field in changes:
                changes[field] = changes[field].strip()
        if "category" in dto.model_fields_set:
            changes["category_id"] = await self._category_id(dto.category)

        data = product.model_dump()
        data.update(changes)
        data["updated_at"] = datetime.now(timezone.utc)
        try:
            updated = Product.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError("Invalid product data", details=str(e)) from e

        await self.product_repository.update(updated)
        logger.info("Product %s updated by %s", updated.id, actor.id)
        return ProductResponseDTO.from_entity(updated)

    async def delete_product(self, actor: Actor, product_id: UUID) -> None:
        product = await self._get_or_raise(product_id)
        self.policy.authorize(actor, "product.delete", str(product.vendor_id))
        if not await self.product_repository.delete(product_id):
            raise NotFoundError("Product not found")
        logger.info("Product %s deleted by %s", product_id, actor.id)
