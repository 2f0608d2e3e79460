"""Admin repository implementation over a storage abstraction."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from ...domain.admin.admin_repository import AdminRepository
from ...domain.admin.entities import AdminUser
from ...domain.errors import ConflictError
from ..storage import KeyValueStore


class AdminRepositoryImpl(AdminRepository):
    """Admin repository using a KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def create(self, admin: AdminUser) -> AdminUser:
        email_key = f"admin:email:{admin.email}"
        if await self.store.get(email_key) is not None:
            raise ConflictError("An admin with this email already exists")

        await self.store.set(f"admin:{admin.id}", admin.model_dump_json())
        await self.store.set(email_key, str(admin.id))
        return admin

    async def get_by_id(self, admin_id: UUID) -> Optional[AdminUser]:
        data = await self.store.get(f"admin:{admin_id}")
        if not data:
            return None
        return AdminUser.model_validate_json(data)

    async def get_by_email(self, email: str) -> Optional[AdminUser]:
        admin_id = await self.store.get(f"admin:email:{email.lower()}")
        if not admin_id:
            return None
        return await self.get_by_id(UUID(admin_id))
