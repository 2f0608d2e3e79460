"""Admin domain repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from .entities import AdminUser


class AdminRepository(ABC):
    """Abstract repository interface for AdminUser entities."""

    @abstractmethod
    async def create(self, admin: AdminUser) -> AdminUser:
        pass

    @abstractmethod
    async def get_by_id(self, admin_id: UUID) -> Optional[AdminUser]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[AdminUser]:
        pass
