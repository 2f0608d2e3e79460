"""Story: Approval goes through while the mail service is down (use case-based test)."""

from __future__ import annotations

import httpx
import pytest

from marketplace.application.notifications.dispatcher import NotificationDispatcher
from marketplace.application.vendor.dtos import RegisterVendorDTO
from marketplace.application.vendor.use_cases.authentication import CredentialGate
from marketplace.application.vendor.use_cases.lifecycle import VendorLifecycleService
from tests.fixtures import InMemoryVendorRepository, RecordingEmailSender


@pytest.mark.asyncio
async def test_approval_survives_mail_outage(
    vendor_repository: InMemoryVendorRepository,
    credential_gate: CredentialGate,
) -> None:
    """
    Story: A failed notification never rolls back the approval.
    """
    # Given: A mail service that refuses every message
    sender = RecordingEmailSender(fail_with=httpx.ConnectError("connection refused"))
    lifecycle = VendorLifecycleService(
        vendor_repository, NotificationDispatcher(sender, "http://shop.test")
    )
    registered = await lifecycle.register(
        RegisterVendorDTO(email="a@b.com", password="x", store_name="Acme Goods")
    )

    # When: The admin approves
    result = await lifecycle.approve(registered.id, "admin-1")

    # Then: The approval stands and the failed delivery is reported
    assert result.changed
    assert result.notified is False
    assert sender.attempts == 1
    login = await credential_gate.authenticate("a@b.com", "x")
    assert login.vendor.status == "approved"
