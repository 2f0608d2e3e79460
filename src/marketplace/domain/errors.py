"""Domain-specific exceptions.

Every failure a use case can report carries a stable machine-readable ``kind``
and the HTTP status the API layer maps it to.
"""

from __future__ import annotations

from typing import Any, Optional


class MarketplaceError(Exception):
    """Base class for all expected marketplace failures."""

    kind = "error"
    http_status = 500

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(MarketplaceError):
    """Raised when input is missing or malformed."""

    kind = "validation_error"
    http_status = 400


class ConflictError(MarketplaceError):
    """Raised on a uniqueness violation or a lost status race."""

    kind = "conflict"
    http_status = 409


class NotFoundError(MarketplaceError):
    """Raised when an id does not resolve."""

    kind = "not_found"
    http_status = 404


class AccountNotFoundError(NotFoundError):
    """Raised when an account lookup by email fails."""

    kind = "account_not_found"
    http_status = 404


class AccountStateError(MarketplaceError):
    """Raised when an account exists but its status forbids the action."""

    http_status = 403
    account_status = ""


class AccountPendingError(AccountStateError):
    kind = "account_pending"
    account_status = "pending"


class AccountRejectedError(AccountStateError):
    kind = "account_rejected"
    account_status = "rejected"


class InvalidCredentialsError(MarketplaceError):
    """Raised when the password does not match."""

    kind = "invalid_credentials"
    http_status = 401


class PermissionDeniedError(MarketplaceError):
    """Raised when the caller may not perform an action."""

    kind = "permission_denied"
    http_status = 403


class DependencyError(MarketplaceError):
    """Raised when the store or another collaborator fails."""

    kind = "dependency_error"
    http_status = 500
