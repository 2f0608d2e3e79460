"""Shared domain utilities.

This package is domain-accessible and should not depend on application code.
"""

from .email_sender_protocol import EmailMessage, EmailReceipt, EmailSenderProtocol
from .slug import slugify

__all__ = ["EmailMessage", "EmailReceipt", "EmailSenderProtocol", "slugify"]
