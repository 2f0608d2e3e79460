"""Admin login and vendor review API routes."""

from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, Query
from prometheus_client import Counter, Histogram

from ...application.access.policy import AccessPolicy, Actor
from ...application.admin.dtos import AdminLoginDTO, AdminLoginResponseDTO
from ...application.admin.use_cases.admin_auth import AdminAuthService
from ...application.vendor.dtos import (
    ApproveVendorDTO,
    PaginatedVendorsDTO,
    RejectVendorDTO,
    TransitionResultDTO,
)
from ...application.vendor.use_cases.lifecycle import VendorLifecycleService
from ...domain.errors import DependencyError, MarketplaceError
from ...domain.vendor.entities import VendorStatus
from ..dependencies import (
    get_access_policy,
    get_admin_auth_service,
    get_current_actor,
    get_vendor_lifecycle_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

vendor_transitions_total = Counter(
    "vendor_transitions_total",
    "Total vendor approve/reject requests processed",
    ["action", "status"],
)
vendor_transition_duration_milliseconds = Histogram(
    "vendor_transition_duration_milliseconds",
    "Wall time to process a vendor approve/reject request (ms)",
    ["action", "status"],
)
admin_login_requests_total = Counter(
    "admin_login_requests_total",
    "Total admin login attempts processed",
    ["status"],
)


@router.post("/login", response_model=AdminLoginResponseDTO)
async def login_admin(
    credentials: AdminLoginDTO,
    auth_service: AdminAuthService = Depends(get_admin_auth_service),
) -> AdminLoginResponseDTO:
    """Exchange admin credentials for a session token."""
    try:
        result = await auth_service.authenticate(
            credentials.email, credentials.password
        )
    except MarketplaceError as e:
        admin_login_requests_total.labels(status=e.kind).inc()
        raise
    admin_login_requests_total.labels(status="success").inc()
    return result


@router.get("/vendors", response_model=PaginatedVendorsDTO)
async def list_vendors(
    status: Optional[VendorStatus] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    actor: Actor = Depends(get_current_actor),
    policy: AccessPolicy = Depends(get_access_policy),
    lifecycle: VendorLifecycleService = Depends(get_vendor_lifecycle_service),
) -> PaginatedVendorsDTO:
    """List vendors newest first, optionally filtered by status."""
    policy.authorize(actor, "vendor.list")
    return await lifecycle.list_vendors(status=status, page=page, limit=limit)


async def _timed_transition(action: str, call) -> TransitionResultDTO:
    start_time = time.perf_counter()
    outcome = "success"
    try:
        result = await call()
        if not result.changed:
            outcome = "unchanged"
        return result
    except MarketplaceError as e:
        outcome = "server_error" if e.http_status >= 500 else e.kind
        raise
    except Exception as e:
        logger.exception("Internal server error during vendor %s: %s", action, e)
        outcome = "server_error"
        raise DependencyError(f"Failed to {action} vendor", details=str(e)) from e
    finally:
        vendor_transitions_total.labels(action=action, status=outcome).inc()
        elapsed = (time.perf_counter() - start_time) * 1000
        vendor_transition_duration_milliseconds.labels(
            action=action, status=outcome
        ).observe(elapsed)


@router.post("/vendors/approve", response_model=TransitionResultDTO)
async def approve_vendor(
    body: ApproveVendorDTO,
    actor: Actor = Depends(get_current_actor),
    policy: AccessPolicy = Depends(get_access_policy),
    lifecycle: VendorLifecycleService = Depends(get_vendor_lifecycle_service),
) -> TransitionResultDTO:
    """Approve a vendor application and notify the vendor."""
    policy.authorize(actor, "vendor.approve")
    return await _timed_transition(
        "approve", lambda: lifecycle.approve(body.vendor_id, actor.id, body.note)
    )


@router.post("/vendors/reject", response_model=TransitionResultDTO)
async def reject_vendor(
    body: RejectVendorDTO,
    actor: Actor = Depends(get_current_actor),
    policy: AccessPolicy = Depends(get_access_policy),
    lifecycle: VendorLifecycleService = Depends(get_vendor_lifecycle_service),
) -> TransitionResultDTO:
    """Reject a vendor application with a reason and notify the vendor."""
    policy.authorize(actor, "vendor.reject")
    return await _timed_transition(
        "reject", lambda: lifecycle.reject(body.vendor_id, actor.id, body.reason)
    )
