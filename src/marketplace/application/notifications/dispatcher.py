"""Best-effort delivery of vendor decision emails."""

from __future__ import annotations

import logging
from typing import Optional

from ...domain.shared import EmailMessage, EmailSenderProtocol
from ...domain.vendor.entities import Vendor
from .templates import render_approval, render_rejection

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Renders and submits decision emails.

    Delivery failures and sends the provider did not accept are logged and
    reported as ``False``. Neither reaches the caller, so a status change is
    not undone by a mail outage.
    """

    def __init__(self, email_sender: EmailSenderProtocol, frontend_base_url: str):
        self.email_sender = email_sender
        self.frontend_base_url = frontend_base_url.rstrip("/")

    async def notify_approved(self, vendor: Vendor, note: Optional[str] = None) -> bool:
        return await self._deliver(
            vendor, "approval", lambda: render_approval(vendor, self.frontend_base_url, note)
        )

    async def notify_rejected(self, vendor: Vendor, reason: str) -> bool:
        return await self._deliver(
            vendor,
            "rejection",
            lambda: render_rejection(vendor, self.frontend_base_url, reason),
        )

    async def _deliver(self, vendor: Vendor, kind: str, render) -> bool:
        try:
            message: EmailMessage = render()
            receipt = await self.email_sender.send(message)
        except Exception as e:
            logger.error(
                "Failed to send %s email to %s: %s", kind, vendor.email, e
            )
            return False
        if not receipt.accepted:
            logger.warning(
                "%s email to %s was not accepted for delivery", kind, vendor.email
            )
            return False
        logger.info(
            "Sent %s email to %s (message id %s)", kind, vendor.email, receipt.message_id
        )
        return True
