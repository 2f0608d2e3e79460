"""Vendor self-service profile API routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from ...application.vendor.dtos import UpdateVendorProfileDTO, VendorProfileDTO
from ...application.vendor.use_cases.profile import VendorProfileService
from ..dependencies import get_current_vendor_id, get_vendor_profile_service

router = APIRouter(prefix="/vendor", tags=["vendor"])


@router.get("/profile", response_model=VendorProfileDTO)
async def get_profile(
    vendor_id: UUID = Depends(get_current_vendor_id),
    profile_service: VendorProfileService = Depends(get_vendor_profile_service),
) -> VendorProfileDTO:
    """Get the calling vendor's profile."""
    return await profile_service.get_profile(vendor_id)


@router.put("/profile", response_model=VendorProfileDTO)
async def update_profile(
    profile_data: UpdateVendorProfileDTO,
    vendor_id: UUID = Depends(get_current_vendor_id),
    profile_service: VendorProfileService = Depends(get_vendor_profile_service),
) -> VendorProfileDTO:
    """Update the calling vendor's profile.

    The vendor id comes from the verified token, so a vendor can only ever
    address its own record here.
    """
    return await profile_service.update_profile(vendor_id, profile_data)
