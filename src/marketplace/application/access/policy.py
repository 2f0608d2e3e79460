"""Central authorization rules for marketplace actions."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Optional

from pydantic import BaseModel

from ...domain.errors import PermissionDeniedError
from ...security.tokens import ADMIN_COLLECTION, VENDOR_COLLECTION


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    # Allowed only on records owned by the actor.
    FILTER = "filter"


class Actor(BaseModel):
    """The authenticated caller, or an anonymous one when ``id`` is None."""

    id: Optional[str] = None
    collection: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.id is not None and self.collection == ADMIN_COLLECTION

    @property
    def is_vendor(self) -> bool:
        return self.id is not None and self.collection == VENDOR_COLLECTION


ANONYMOUS = Actor()


def _admins(actor: Actor) -> Decision:
    return Decision.ALLOW if actor.is_admin else Decision.DENY


def _vendors(actor: Actor) -> Decision:
    return Decision.ALLOW if actor.is_vendor else Decision.DENY


def _admins_or_owner(actor: Actor) -> Decision:
    if actor.is_admin:
        return Decision.ALLOW
    if actor.is_vendor:
        return Decision.FILTER
    return Decision.DENY


class AccessPolicy:
    """Maps (actor, action, resource) to allow, deny or owner-filter."""

    RULES: Dict[str, Callable[[Actor], Decision]] = {
        "vendor.list": _admins,
        "vendor.approve": _admins,
        "vendor.reject": _admins,
        "category.create": _admins,
        # Products are always created under the calling vendor.
        "product.create": _vendors,
        "product.list": _admins_or_owner,
        "product.update": _admins_or_owner,
        "product.delete": _admins_or_owner,
    }

    def evaluate(
        self, actor: Actor, action: str, resource_id: Optional[str] = None
    ) -> Decision:
        """Return the decision for ``action``; unknown actions are denied.

        A FILTER decision is narrowed to ALLOW or DENY when ``resource_id``,
        the id of the vendor owning the record, is given.
        """
        rule = self.RULES.get(action)
        if rule is None:
            return Decision.DENY
        decision = rule(actor)
        if decision is Decision.FILTER and resource_id is not None:
            return Decision.ALLOW if resource_id == actor.id else Decision.DENY
        return decision

    def authorize(
        self, actor: Actor, action: str, resource_id: Optional[str] = None
    ) -> Decision:
        """Like ``evaluate`` but raises PermissionDeniedError on deny."""
        decision = self.evaluate(actor, action, resource_id)
        if decision is Decision.DENY:
            raise PermissionDeniedError(f"Not allowed to perform {action}")
        return decision
