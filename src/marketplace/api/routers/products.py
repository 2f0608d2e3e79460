"""Vendor product management API routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from ...application.access.policy import Actor
from ...application.catalog.dtos import (
    CreateProductDTO,
    PaginatedProductsDTO,
    ProductResponseDTO,
    UpdateProductDTO,
)
from ...application.catalog.use_cases.product import ProductService
from ..dependencies import get_authenticated_actor, get_product_service

router = APIRouter(prefix="/vendor/products", tags=["products"])


@router.get("", response_model=PaginatedProductsDTO)
async def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    product_status: str = Query("all", alias="status"),
    actor: Actor = Depends(get_authenticated_actor),
    product_service: ProductService = Depends(get_product_service),
) -> PaginatedProductsDTO:
    """List the caller's products, newest first. Admins see every product."""
    return await product_service.list_products(
        actor, status=product_status, page=page, limit=limit
    )


@router.post(
    "", response_model=ProductResponseDTO, status_code=status.HTTP_201_CREATED
)
async def create_product(
    product_data: CreateProductDTO,
    actor: Actor = Depends(get_authenticated_actor),
    product_service: ProductService = Depends(get_product_service),
) -> ProductResponseDTO:
    return await product_service.create_product(actor, product_data)


@router.put("/{product_id}", response_model=ProductResponseDTO)
async def update_product(
    product_id: UUID,
    product_data: UpdateProductDTO,
    actor: Actor = Depends(get_authenticated_actor),
    product_service: ProductService = Depends(get_product_service),
) -> ProductResponseDTO:
    return await product_service.update_product(actor, product_id, product_data)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: UUID,
    actor: Actor = Depends(get_authenticated_actor),
    product_service: ProductService = Depends(get_product_service),
) -> Response:
    await product_service.delete_product(actor, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
