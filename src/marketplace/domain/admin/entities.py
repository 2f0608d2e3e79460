"""Admin domain entities."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, EmailStr, Field

from ..shared.serializers import CommonSerializersMixin


class AdminUser(CommonSerializersMixin, BaseModel):
    """Back-office user allowed to review vendor applications."""

    id: UUID = Field(default_factory=uuid4)
    email: EmailStr = Field(..., max_length=254)
    password_hash: str = Field(..., min_length=1)
    role: Literal["admin", "super-admin"] = "admin"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
