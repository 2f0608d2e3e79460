"""Shared pytest fixtures for marketplace tests."""

from __future__ import annotations

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from marketplace.application.access.policy import AccessPolicy
from marketplace.application.admin.use_cases.admin_auth import AdminAuthService
from marketplace.application.catalog.use_cases.category import CategoryService
from marketplace.application.catalog.use_cases.product import ProductService
from marketplace.application.notifications.dispatcher import NotificationDispatcher
from marketplace.application.vendor.use_cases.authentication import CredentialGate
from marketplace.application.vendor.use_cases.lifecycle import VendorLifecycleService
from marketplace.application.vendor.use_cases.profile import VendorProfileService
from marketplace.infrastructure.database import DatabaseClient
from marketplace.infrastructure.storage import RedisKeyValueStore
from marketplace.security.tokens import SessionTokenDecoder, TokenService
from tests.fixtures import (
    InMemoryAdminRepository,
    InMemoryCategoryRepository,
    InMemoryKeyValueStore,
    InMemoryProductRepository,
    InMemoryVendorRepository,
    RecordingEmailSender,
)

TEST_SECRET_KEY = "test-secret-key-with-enough-entropy-0123456789"
FRONTEND_BASE_URL = "http://shop.test"


# ============================================================================
# Storage and Repository Fixtures
# ============================================================================


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
async def vendor_repository(
    kv_store: InMemoryKeyValueStore,
) -> AsyncGenerator[InMemoryVendorRepository, None]:
    """Create an in-memory vendor repository with its scripts registered."""
    repo = InMemoryVendorRepository(kv_store)
    await repo.initialize()
    yield repo
    repo.clear()


@pytest.fixture
async def category_repository(
    kv_store: InMemoryKeyValueStore,
) -> AsyncGenerator[InMemoryCategoryRepository, None]:
    repo = InMemoryCategoryRepository(kv_store)
    await repo.initialize()
    yield repo
    repo.clear()


@pytest.fixture
async def product_repository(
    kv_store: InMemoryKeyValueStore,
) -> AsyncGenerator[InMemoryProductRepository, None]:
    repo = InMemoryProductRepository(kv_store)
    await repo.initialize()
    yield repo
    repo.clear()


@pytest.fixture
def admin_repository(kv_store: InMemoryKeyValueStore) -> InMemoryAdminRepository:
    return InMemoryAdminRepository(kv_store)


# ============================================================================
# Collaborator Fixtures
# ============================================================================


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret_key=TEST_SECRET_KEY, expire_minutes=30)


@pytest.fixture
def token_decoder(token_service: TokenService) -> SessionTokenDecoder:
    return SessionTokenDecoder(token_service)


@pytest.fixture
def dispatcher(email_sender: RecordingEmailSender) -> NotificationDispatcher:
    return NotificationDispatcher(email_sender, FRONTEND_BASE_URL)


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def lifecycle_service(
    vendor_repository: InMemoryVendorRepository,
    dispatcher: NotificationDispatcher,
) -> VendorLifecycleService:
    return VendorLifecycleService(vendor_repository, dispatcher)


@pytest.fixture
def credential_gate(
    vendor_repository: InMemoryVendorRepository, token_service: TokenService
) -> CredentialGate:
    return CredentialGate(vendor_repository, token_service)


@pytest.fixture
def profile_service(
    vendor_repository: InMemoryVendorRepository,
) -> VendorProfileService:
    return VendorProfileService(vendor_repository)


@pytest.fixture
def category_service(
    category_repository: InMemoryCategoryRepository,
) -> CategoryService:
    return CategoryService(category_repository)


@pytest.fixture
def product_service(
    product_repository: InMemoryProductRepository,
    category_service: CategoryService,
) -> ProductService:
    return ProductService(product_repository, category_service, AccessPolicy())


@pytest.fixture
def admin_auth_service(
    admin_repository: InMemoryAdminRepository, token_service: TokenService
) -> AdminAuthService:
    return AdminAuthService(admin_repository, token_service)


# ============================================================================
# Redis Fixtures
# ============================================================================


class TestDatabaseSettings:
    """Test settings for Redis connection."""

    __test__ = False

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url


@pytest_asyncio.fixture
async def redis_db_client() -> AsyncGenerator[DatabaseClient, None]:
    """Create a Redis database client for testing.

    Uses database 15 by default, or TEST_REDIS_URL if set. Tests that need it
    are skipped when Redis is not reachable.
    """
    test_redis_url = os.getenv("TEST_REDIS_URL", "redis://localhost:6379/15")
    client = DatabaseClient(TestDatabaseSettings(database_url=test_redis_url))
    client.initialize_database()

    try:
        async with client.get_connection() as conn:
            await conn.ping()
    except Exception as e:
        await client.close()
        pytest.skip(f"Redis not available at {test_redis_url}: {e}")

    yield client

    async with client.get_connection() as conn:
        await conn.flushdb()
    await client.close()


@pytest_asyncio.fixture
async def redis_store(redis_db_client: DatabaseClient) -> RedisKeyValueStore:
    """Create a Redis-backed key-value store for testing."""
    return RedisKeyValueStore(redis_db_client)
