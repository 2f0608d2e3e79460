"""HTTP tests for admin login and vendor review routes over in-memory storage."""

from __future__ import annotations

from typing import AsyncGenerator

import httpx
import pytest
from fastapi import FastAPI

from marketplace.api.app import create_app
from marketplace.api.dependencies import (
    get_admin_repository,
    get_category_repository,
    get_email_sender,
    get_vendor_repository,
)
from marketplace.application.admin.use_cases.admin_auth import AdminAuthService
from marketplace.env import Settings, get_settings

from tests.fixtures import (
    InMemoryAdminRepository,
    InMemoryCategoryRepository,
    InMemoryVendorRepository,
    RecordingEmailSender,
)

SECRET = "admin-router-secret-key-0123456789abcdef"
ADMIN_EMAIL = "root@example.com"
ADMIN_PASSWORD = "admin-pass"


@pytest.fixture
def settings() -> Settings:
    return Settings(secret_key=SECRET, frontend_base_url="http://shop.test")


@pytest.fixture
async def app(
    settings: Settings,
    vendor_repository: InMemoryVendorRepository,
    category_repository: InMemoryCategoryRepository,
    admin_repository: InMemoryAdminRepository,
    email_sender: RecordingEmailSender,
    admin_auth_service: AdminAuthService,
) -> FastAPI:
    await admin_auth_service.ensure_bootstrap_admin(ADMIN_EMAIL, ADMIN_PASSWORD)
    app = create_app(settings)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_vendor_repository] = lambda: vendor_repository
    app.dependency_overrides[get_category_repository] = lambda: category_repository
    app.dependency_overrides[get_admin_repository] = lambda: admin_repository
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://testserver/api/v1"
    ) as http:
        yield http


async def _admin_headers(client: httpx.AsyncClient) -> dict:
    response = await client.post(
        "/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    return {"Authorization": f"JWT {response.json()['token']}"}


async def _register(client: httpx.AsyncClient, email: str, store_name: str) -> dict:
    response = await client.post(
        "/vendor/register",
        json={"email": email, "password": "x", "store_name": store_name},
    )
    assert response.status_code == 201
    return response.json()


async def test_admin_login_rejects_bad_password(client: httpx.AsyncClient):
    response = await client.post(
        "/admin/login", json={"email": ADMIN_EMAIL, "password": "nope"}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "invalid_credentials"


async def test_admin_login_returns_admin_token(client: httpx.AsyncClient):
    response = await client.post(
        "/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )

    body = response.json()
    assert response.status_code == 200
    assert body["user"]["email"] == ADMIN_EMAIL
    assert body["user"]["role"] == "super-admin"


async def test_review_routes_require_admin(client: httpx.AsyncClient):
    vendor = await _register(client, "shop@example.com", "Acme Goods")

    anonymous = await client.post(
        "/admin/vendors/approve", json={"vendor_id": vendor["id"]}
    )
    listing = await client.get("/admin/vendors")

    assert anonymous.status_code == 403
    assert anonymous.json()["error"] == "permission_denied"
    assert listing.status_code == 403


async def test_approve_then_login(
    client: httpx.AsyncClient, email_sender: RecordingEmailSender
):
    vendor = await _register(client, "shop@example.com", "Acme Goods")
    headers = await _admin_headers(client)

    pending_login = await client.post(
        "/vendor/login", json={"email": "shop@example.com", "password": "x"}
    )
    assert pending_login.status_code == 403
    assert pending_login.json()["status"] == "pending"

    approved = await client.post(
        "/admin/vendors/approve",
        json={"vendor_id": vendor["id"], "note": "Welcome"},
        headers=headers,
    )
    body = approved.json()
    assert approved.status_code == 200
    assert body["changed"] is True
    assert body["notified"] is True
    assert body["vendor"]["status"] == "approved"
    assert body["vendor"]["approval_note"] == "Welcome"
    assert len(email_sender.sent) == 1

    again = await client.post(
        "/admin/vendors/approve", json={"vendor_id": vendor["id"]}, headers=headers
    )
    assert again.json()["changed"] is False
    assert len(email_sender.sent) == 1

    login = await client.post(
        "/vendor/login", json={"email": "shop@example.com", "password": "x"}
    )
    assert login.status_code == 200
    token = login.json()["token"]

    profile = await client.get(
        "/vendor/profile", headers={"Authorization": f"JWT {token}"}
    )
    assert profile.status_code == 200
    assert profile.json()["slug"] == "acme-goods"


async def test_reject_requires_reason(
    client: httpx.AsyncClient, email_sender: RecordingEmailSender
):
    vendor = await _register(client, "shop@example.com", "Acme Goods")
    headers = await _admin_headers(client)

    blank = await client.post(
        "/admin/vendors/reject",
        json={"vendor_id": vendor["id"], "reason": "  "},
        headers=headers,
    )
    assert blank.status_code == 400
    assert email_sender.sent == []

    rejected = await client.post(
        "/admin/vendors/reject",
        json={"vendor_id": vendor["id"], "reason": "Missing tax id"},
        headers=headers,
    )
    assert rejected.status_code == 200
    assert rejected.json()["vendor"]["rejection_reason"] == "Missing tax id"
    assert "Reason: Missing tax id" in email_sender.sent[0].text

    status = await client.get("/vendor/status", params={"email": "shop@example.com"})
    assert status.json()["status"] == "rejected"


async def test_reject_without_reason_field(
    client: httpx.AsyncClient, email_sender: RecordingEmailSender
):
    vendor = await _register(client, "shop@example.com", "Acme Goods")
    headers = await _admin_headers(client)

    response = await client.post(
        "/admin/vendors/reject", json={"vendor_id": vendor["id"]}, headers=headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"
    assert "reason" in response.json()["message"]
    assert email_sender.sent == []
    status = await client.get("/vendor/status", params={"email": "shop@example.com"})
    assert status.json()["status"] == "pending"


async def test_register_with_over_long_password(client: httpx.AsyncClient):
    for password in ("p" * 100, "\u00e9" * 40):
        response = await client.post(
            "/vendor/register",
            json={
                "email": "shop@example.com",
                "password": password,
                "store_name": "Acme Goods",
            },
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    status = await client.get("/vendor/status", params={"email": "shop@example.com"})
    assert status.status_code == 404


async def test_approve_unknown_vendor(client: httpx.AsyncClient):
    headers = await _admin_headers(client)

    response = await client.post(
        "/admin/vendors/approve",
        json={"vendor_id": "00000000-0000-0000-0000-000000000000"},
        headers=headers,
    )

    assert response.status_code == 404


async def test_list_vendors_filters_by_status(client: httpx.AsyncClient):
    first = await _register(client, "one@example.com", "Store One")
    await _register(client, "two@example.com", "Store Two")
    headers = await _admin_headers(client)
    await client.post(
        "/admin/vendors/approve", json={"vendor_id": first["id"]}, headers=headers
    )

    everyone = await client.get("/admin/vendors", headers=headers)
    pending = await client.get(
        "/admin/vendors", params={"status": "pending"}, headers=headers
    )

    assert everyone.json()["total"] == 2
    assert [v["email"] for v in pending.json()["vendors"]] == ["two@example.com"]


async def test_admin_creates_category(client: httpx.AsyncClient):
    headers = await _admin_headers(client)

    created = await client.post(
        "/vendor/categories", json={"name": "Home & Garden"}, headers=headers
    )
    duplicate = await client.post(
        "/vendor/categories", json={"name": "home & garden"}, headers=headers
    )
    listed = await client.get("/vendor/categories")

    assert created.status_code == 201
    assert created.json()["slug"] == "home-garden"
    assert duplicate.status_code == 409
    assert [c["name"] for c in listed.json()] == ["Home & Garden"]
