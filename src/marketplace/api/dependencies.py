"""FastAPI dependencies for the marketplace API."""

from __future__ import annotations

from typing import Optional, Union
from uuid import UUID

from fastapi import Depends, Header

from ..application.access.policy import ANONYMOUS, AccessPolicy, Actor
from ..application.admin.use_cases.admin_auth import AdminAuthService
from ..application.catalog.use_cases.category import CategoryService
from ..application.catalog.use_cases.product import ProductService
from ..application.notifications.dispatcher import NotificationDispatcher
from ..application.vendor.use_cases.authentication import CredentialGate
from ..application.vendor.use_cases.lifecycle import VendorLifecycleService
from ..application.vendor.use_cases.profile import VendorProfileService
from ..domain.admin.admin_repository import AdminRepository
from ..domain.catalog.category_repository import CategoryRepository
from ..domain.catalog.product_repository import ProductRepository
from ..domain.errors import InvalidCredentialsError
from ..domain.shared import EmailSenderProtocol
from ..domain.vendor.vendor_repository import VendorRepository
from ..env import Settings, get_settings
from ..infrastructure.admin.admin_repository_impl import AdminRepositoryImpl
from ..infrastructure.catalog.category_repository_impl import CategoryRepositoryImpl
from ..infrastructure.catalog.product_repository_impl import ProductRepositoryImpl
from ..infrastructure.database import DatabaseClient, get_database_client
from ..infrastructure.email.email_client import HttpEmailSender, LoggingEmailSender
from ..infrastructure.storage import KeyValueStore, RedisKeyValueStore
from ..infrastructure.vendor.vendor_repository_impl import VendorRepositoryImpl
from ..security.tokens import VENDOR_COLLECTION, SessionTokenDecoder, TokenService


def get_database_client_with_settings(
    settings: Settings = Depends(get_settings),
) -> DatabaseClient:
    """Get database client with settings."""
    return get_database_client(settings)


_store: Optional[RedisKeyValueStore] = None


def get_key_value_store(
    db_client: DatabaseClient = Depends(get_database_client_with_settings),
) -> KeyValueStore:
    """Get the shared key-value store.

    Shared so script SHAs registered at startup stay known to every request.
    """
    global _store
    if _store is None:
        _store = RedisKeyValueStore(db_client)
    return _store


def get_vendor_repository(
    store: KeyValueStore = Depends(get_key_value_store),
) -> VendorRepository:
    return VendorRepositoryImpl(store)


def get_category_repository(
    store: KeyValueStore = Depends(get_key_value_store),
) -> CategoryRepository:
    return CategoryRepositoryImpl(store)


def get_product_repository(
    store: KeyValueStore = Depends(get_key_value_store),
) -> ProductRepository:
    return ProductRepositoryImpl(store)


def get_admin_repository(
    store: KeyValueStore = Depends(get_key_value_store),
) -> AdminRepository:
    return AdminRepositoryImpl(store)


_email_sender: Union[HttpEmailSender, LoggingEmailSender, None] = None


def get_email_sender(settings: Settings = Depends(get_settings)) -> EmailSenderProtocol:
    """Get or create the email sender singleton."""
    global _email_sender
    if _email_sender is None:
        if settings.email_api_key:
            _email_sender = HttpEmailSender(
                settings.email_api_url,
                settings.email_api_key,
                settings.email_from_address,
                settings.email_from_name,
            )
        else:
            _email_sender = LoggingEmailSender()
    return _email_sender


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(
        secret_key=settings.secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )


def get_session_token_decoder(
    tokens: TokenService = Depends(get_token_service),
) -> SessionTokenDecoder:
    return SessionTokenDecoder(tokens)


def get_notification_dispatcher(
    email_sender: EmailSenderProtocol = Depends(get_email_sender),
    settings: Settings = Depends(get_settings),
) -> NotificationDispatcher:
    return NotificationDispatcher(email_sender, settings.frontend_base_url)


def get_vendor_lifecycle_service(
    vendor_repository: VendorRepository = Depends(get_vendor_repository),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> VendorLifecycleService:
    """Get vendor lifecycle service."""
    return VendorLifecycleService(vendor_repository, dispatcher)


def get_credential_gate(
    vendor_repository: VendorRepository = Depends(get_vendor_repository),
    tokens: TokenService = Depends(get_token_service),
) -> CredentialGate:
    return CredentialGate(vendor_repository, tokens)


def get_vendor_profile_service(
    vendor_repository: VendorRepository = Depends(get_vendor_repository),
) -> VendorProfileService:
    return VendorProfileService(vendor_repository)


def get_category_service(
    category_repository: CategoryRepository = Depends(get_category_repository),
) -> CategoryService:
    return CategoryService(category_repository)


def get_access_policy() -> AccessPolicy:
    return AccessPolicy()


def get_product_service(
    product_repository: ProductRepository = Depends(get_product_repository),
    category_service: CategoryService = Depends(get_category_service),
    policy: AccessPolicy = Depends(get_access_policy),
) -> ProductService:
    return ProductService(product_repository, category_service, policy)


def get_admin_auth_service(
    admin_repository: AdminRepository = Depends(get_admin_repository),
    tokens: TokenService = Depends(get_token_service),
) -> AdminAuthService:
    return AdminAuthService(admin_repository, tokens)


def get_current_actor(
    authorization: Optional[str] = Header(None),
    decoder: SessionTokenDecoder = Depends(get_session_token_decoder),
) -> Actor:
    """Resolve the caller from the Authorization header; anonymous if absent
    or invalid."""
    claims = decoder.claims(authorization)
    if not claims or not claims.get("sub"):
        return ANONYMOUS
    return Actor(
        id=str(claims["sub"]),
        collection=claims.get("collection"),
        role=claims.get("role"),
    )


def get_authenticated_actor(actor: Actor = Depends(get_current_actor)) -> Actor:
    """Like ``get_current_actor`` but rejects anonymous callers with 401."""
    if actor.id is None:
        raise InvalidCredentialsError("Unauthorized - Invalid or missing token")
    return actor


def get_current_vendor_id(
    authorization: Optional[str] = Header(None),
    decoder: SessionTokenDecoder = Depends(get_session_token_decoder),
) -> UUID:
    """Require a valid vendor token and return the vendor id."""
    subject = decoder.extract_subject(authorization, VENDOR_COLLECTION)
    if subject is None:
        raise InvalidCredentialsError("Unauthorized - Invalid or missing token")
    try:
        return UUID(subject)
    except ValueError as e:
        raise InvalidCredentialsError("Unauthorized - Invalid or missing token") from e
