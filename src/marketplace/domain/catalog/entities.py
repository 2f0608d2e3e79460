"""Catalog domain entities."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from ..errors import ValidationError
from ..shared.serializers import CommonSerializersMixin
from ..shared.slug import slugify


class Category(CommonSerializersMixin, BaseModel):
    """Product category referenced by vendor listings."""

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1)
    description: Optional[str] = Field(None, max_length=1000)
    is_active: bool = True
    sort_order: int = 0
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_name(
        cls, name: str, *, is_active: bool = True, sort_order: int = 0
    ) -> "Category":
        name = name.strip()
        slug = slugify(name)
        if not slug:
            raise ValidationError(
                "Category name must contain at least one letter or digit"
            )
        return cls(name=name, slug=slug, is_active=is_active, sort_order=sort_order)


ProductStatus = Literal["draft", "published", "pending", "rejected", "out-of-stock"]
PRODUCT_STATUSES = ("draft", "published", "pending", "rejected", "out-of-stock")


class Inventory(BaseModel):
    track_quantity: bool = True
    quantity: int = Field(0, ge=0)
    low_stock_threshold: int = Field(5, ge=0)


class Product(CommonSerializersMixin, BaseModel):
    """A listing owned by exactly one vendor.

    ``vendor_id`` and ``slug`` are fixed at creation; a title change keeps the
    original slug so existing product URLs stay valid.
    """

    id: UUID = Field(default_factory=uuid4)
    vendor_id: UUID
    title: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1)
    short_description: str = Field(..., min_length=1, max_length=1000)
    description: Optional[str] = None
    price: float = Field(..., gt=0)
    compare_price: Optional[float] = Field(None, ge=0)
    inventory: Inventory = Field(default_factory=Inventory)
    category_id: Optional[UUID] = None
    status: ProductStatus = "draft"
    tags: List[str] = Field(default_factory=list)
    featured: bool = False
    sku: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: Optional[datetime] = None

    @classmethod
    def create(cls, *, vendor_id: UUID, title: str, **fields) -> "Product":
        title = title.strip()
        slug = slugify(title)
        if not slug:
            raise ValidationError(
                "Product title must contain at least one letter or digit"
            )
        return cls(vendor_id=vendor_id, title=title, slug=slug, **fields)
