"""Email delivery clients implementing EmailSenderProtocol."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ...domain.shared import EmailMessage, EmailReceipt
from ..http.http_client import AsyncHttpClient

logger = logging.getLogger(__name__)


class HttpEmailSender:
    """Sends mail through a Resend-compatible HTTP API.

    Posts ``{from, to, subject, html, text}`` to ``/emails`` with a bearer
    API key. Transport and non-2xx failures propagate as httpx exceptions.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        from_address: str,
        from_name: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._http = AsyncHttpClient(
            api_url,
            timeout=timeout,
            headers={"Authorization": f"Bearer {api_key}"},
            transport=transport,
        )
        self._sender = f"{from_name} <{from_address}>" if from_name else from_address

    async def send(self, message: EmailMessage) -> EmailReceipt:
        payload: Dict[str, Any] = {
            "from": self._sender,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
        }
        resp = await self._http.post("/emails", json=payload)
        body = resp.json() if resp.content else {}
        return EmailReceipt(message_id=body.get("id"), accepted=True)

    async def aclose(self) -> None:
        await self._http.aclose()


class LoggingEmailSender:
    """Development sender that logs messages instead of delivering them."""

    async def send(self, message: EmailMessage) -> EmailReceipt:
        logger.info("Email to %s not sent (no API key): %s", message.to, message.subject)
        return EmailReceipt(message_id=None, accepted=False)

    async def aclose(self) -> None:
        return None
