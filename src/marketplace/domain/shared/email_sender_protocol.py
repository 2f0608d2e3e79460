"""Protocol interface for email delivery implementations.

This protocol defines the contract that all email senders must satisfy. It
enables dependency injection and makes the notification dispatcher testable by
allowing recording/failing implementations.
"""

from __future__ import annotations

from typing import Optional, Protocol

from pydantic import BaseModel, EmailStr


class EmailMessage(BaseModel):
    """A rendered message ready for delivery."""

    to: EmailStr
    subject: str
    html: str
    text: str


class EmailReceipt(BaseModel):
    """Acknowledgement returned by the delivery service."""

    message_id: Optional[str] = None
    accepted: bool = True


class EmailSenderProtocol(Protocol):
    """Protocol defining the interface for email delivery.

    Implementations raise on delivery failure; callers decide whether the
    failure is fatal.
    """

    async def send(self, message: EmailMessage) -> EmailReceipt:
        """Submit ``message`` for delivery exactly once.

        Args:
            message: Fully rendered message

        Returns:
            Receipt from the delivery service
        """
        ...
