"""Vendor registration, login and status API routes."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, Query, status
from prometheus_client import Counter, Histogram

from ...application.vendor.dtos import (
    LoginDTO,
    LoginResponseDTO,
    RegisterVendorDTO,
    VendorResponseDTO,
    VendorStatusDTO,
)
from ...application.vendor.use_cases.authentication import CredentialGate
from ...application.vendor.use_cases.lifecycle import VendorLifecycleService
from ...domain.errors import DependencyError, MarketplaceError
from ..dependencies import get_credential_gate, get_vendor_lifecycle_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vendor", tags=["vendor"])

vendor_login_requests_total = Counter(
    "vendor_login_requests_total",
    "Total vendor login attempts processed",
    ["status"],
)
vendor_login_request_duration_milliseconds = Histogram(
    "vendor_login_request_duration_milliseconds",
    "Wall time to process a vendor login request (ms)",
    ["status"],
)
vendor_registrations_total = Counter(
    "vendor_registrations_total",
    "Total vendor registration attempts processed",
    ["status"],
)


def _outcome(e: MarketplaceError) -> str:
    return "server_error" if e.http_status >= 500 else e.kind


@router.post(
    "/register",
    response_model=VendorResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def register_vendor(
    vendor_data: RegisterVendorDTO,
    lifecycle: VendorLifecycleService = Depends(get_vendor_lifecycle_service),
) -> VendorResponseDTO:
    """Register a new vendor; the account starts as pending."""
    try:
        vendor = await lifecycle.register(vendor_data)
    except MarketplaceError as e:
        vendor_registrations_total.labels(status=_outcome(e)).inc()
        raise
    except Exception as e:
        logger.exception("Internal server error while registering vendor: %s", e)
        vendor_registrations_total.labels(status="server_error").inc()
        raise DependencyError("Registration failed", details=str(e)) from e
    vendor_registrations_total.labels(status="success").inc()
    return vendor


@router.post("/login", response_model=LoginResponseDTO)
async def login_vendor(
    credentials: LoginDTO,
    gate: CredentialGate = Depends(get_credential_gate),
) -> LoginResponseDTO:
    """Exchange vendor credentials for a session token."""
    start_time = time.perf_counter()
    outcome = "success"
    try:
        return await gate.authenticate(credentials.email, credentials.password)
    except MarketplaceError as e:
        outcome = _outcome(e)
        raise
    except Exception as e:
        logger.exception("Internal server error during vendor login: %s", e)
        outcome = "server_error"
        raise DependencyError("Login failed", details=str(e)) from e
    finally:
        vendor_login_requests_total.labels(status=outcome).inc()
        elapsed = (time.perf_counter() - start_time) * 1000
        vendor_login_request_duration_milliseconds.labels(status=outcome).observe(
            elapsed
        )


@router.get("/status", response_model=VendorStatusDTO)
async def get_vendor_status(
    email: str = Query(..., description="Email used at registration"),
    lifecycle: VendorLifecycleService = Depends(get_vendor_lifecycle_service),
) -> VendorStatusDTO:
    """Look up the review status of a vendor application."""
    return await lifecycle.get_status(email)
