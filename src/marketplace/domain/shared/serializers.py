"""Shared Pydantic serializers used across DTOs/entities."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import field_serializer


class DatetimeSerializerMixin:
    """Serialize common datetime fields consistently."""

    @field_serializer("created_at", check_fields=False)
    def serialize_created_at(self, value: datetime) -> str:
        return value.isoformat()

    @field_serializer("updated_at", check_fields=False)
    def serialize_updated_at(self, value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value else None


class CommonSerializersMixin(DatetimeSerializerMixin):
    """Common field serializers shared across multiple models.

    Uses `check_fields=False` so the mixin can be used by models that don't
    declare all fields (e.g., categories have `created_at` but no decision
    timestamps).
    """

    @field_serializer("id", check_fields=False)
    def serialize_id(self, value: UUID) -> str:
        return str(value)

    @field_serializer("approved_at", "rejected_at", check_fields=False)
    def serialize_decision_at(self, value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value else None
