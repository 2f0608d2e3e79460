"""Data Transfer Objects for the catalog application layer."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from marketplace.domain.catalog.entities import (
    Category,
    Inventory,
    Product,
    ProductStatus,
)
from marketplace.domain.shared.serializers import CommonSerializersMixin


class CreateCategoryDTO(BaseModel):
    name: str = Field(..., max_length=100)
    is_active: bool = True
    sort_order: int = 0


class CategoryResponseDTO(CommonSerializersMixin, BaseModel):
    """DTO for returning category data."""

    id: UUID
    name: str
    slug: str
    description: Optional[str] = None
    is_active: bool
    sort_order: int

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryResponseDTO":
        return cls(**category.model_dump(exclude={"created_at"}))


class CreateProductDTO(BaseModel):
    """DTO for a vendor listing a new product.

    ``title``, ``short_description`` and ``price`` are required; they are
    optional here so the use case can report all missing ones at once.
    ``category`` is a free-text name resolved to an existing category or
    created on first use.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "title": "Hand-thrown Mug",
                "short_description": "Stoneware, 350ml",
                "price": 24.5,
                "category": "Home & Garden",
            }
        },
    )

    title: Optional[str] = Field(None, max_length=200)
    short_description: Optional[str] = Field(None, max_length=1000)
    description: Optional[str] = None
    price: Optional[float] = None
    compare_price: Optional[float] = Field(None, ge=0)
    inventory: Optional[Inventory] = None
    category: Optional[str] = Field(None, max_length=100)
    status: Optional[ProductStatus] = None
    tags: List[str] = Field(default_factory=list)
    featured: bool = False
    sku: Optional[str] = Field(None, max_length=100)


class UpdateProductDTO(BaseModel):
    """Partial product edit; only fields present in the request are applied."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, max_length=200)
    short_description: Optional[str] = Field(None, max_length=1000)
    description: Optional[str] = None
    price: Optional[float] = None
    compare_price: Optional[float] = Field(None, ge=0)
    inventory: Optional[Inventory] = None
    category: Optional[str] = Field(None, max_length=100)
    status: Optional[ProductStatus] = None
    tags: Optional[List[str]] = None
    featured: Optional[bool] = None
    sku: Optional[str] = Field(None, max_length=100)


class ProductResponseDTO(CommonSerializersMixin, BaseModel):
    id: UUID
    vendor_id: UUID
    title: str
    slug: str
    short_description: str
    description: Optional[str] = None
    price: float
    compare_price: Optional[float] = None
    inventory: Inventory
    category_id: Optional[UUID] = None
    status: ProductStatus
    tags: List[str]
    featured: bool
    sku: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, product: Product) -> "ProductResponseDTO":
        return cls(**product.model_dump())


class PaginatedProductsDTO(BaseModel):
    """One page of products, newest first."""

    products: List[ProductResponseDTO]
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool
