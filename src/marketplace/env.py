from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

DEFAULT_SECRET_KEY = "change-me-in-production"


class Settings(BaseModel):
    """Typed application settings built from environment variables."""

    # Database settings
    database_url: str = "redis://localhost:6379/0"

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_workers: int = 1
    api_cors_origins: list[str] = ["*"]

    # Application settings
    app_name: str = "Marketplace Vendors"
    app_version: str = "1.0.0"
    environment: str = "development"
    log_level: str = "INFO"

    # Auth settings
    secret_key: str = DEFAULT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7
    jwt_issuer: Optional[str] = None
    jwt_audience: Optional[str] = None

    # Email settings
    email_api_url: str = "https://api.resend.com"
    email_api_key: Optional[str] = None
    email_from_address: str = "noreply@marketplace.local"
    email_from_name: str = "Marketplace"
    frontend_base_url: str = "http://localhost:3000"

    # Bootstrap admin
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        v = v.lower()
        if v not in ("development", "production", "test"):
            raise ValueError(f"Unknown environment: {v}")
        return v

    @field_validator("api_workers", "access_token_expire_minutes")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Value must be at least 1")
        return v

    @model_validator(mode="after")
    def validate_secret_key(self) -> "Settings":
        if self.environment == "production" and (
            self.secret_key == DEFAULT_SECRET_KEY or len(self.secret_key) < 32
        ):
            raise ValueError(
                "SECRET_KEY must be set to a random value of at least 32 "
                "characters in production"
            )
        return self

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


def _optional(name: str) -> Optional[str]:
    value = os.environ.get(name, "").strip()
    return value or None


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    return Settings(
        database_url=os.environ.get("DATABASE_URL", "redis://localhost:6379/0"),
        api_host=os.environ.get("API_HOST", "0.0.0.0"),
        api_port=int(os.environ.get("API_PORT", "8000")),
        api_debug=os.environ.get("API_DEBUG", "false").lower() == "true",
        api_workers=int(os.environ.get("API_WORKERS", "1")),
        api_cors_origins=os.environ.get("API_CORS_ORIGINS", "*").split(","),
        app_name=os.environ.get("APP_NAME", "Marketplace Vendors"),
        app_version=os.environ.get("APP_VERSION", "1.0.0"),
        environment=os.environ.get("ENVIRONMENT", "development"),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        secret_key=os.environ.get("SECRET_KEY", DEFAULT_SECRET_KEY),
        jwt_algorithm=os.environ.get("JWT_ALGORITHM", "HS256"),
        access_token_expire_minutes=int(
            os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7))
        ),
        jwt_issuer=_optional("JWT_ISSUER"),
        jwt_audience=_optional("JWT_AUDIENCE"),
        email_api_url=os.environ.get("EMAIL_API_URL", "https://api.resend.com"),
        email_api_key=_optional("EMAIL_API_KEY"),
        email_from_address=os.environ.get(
            "EMAIL_FROM_ADDRESS", "noreply@marketplace.local"
        ),
        email_from_name=os.environ.get("EMAIL_FROM_NAME", "Marketplace"),
        frontend_base_url=os.environ.get(
            "FRONTEND_BASE_URL", "http://localhost:3000"
        ).rstrip("/"),
        admin_email=_optional("ADMIN_EMAIL"),
        admin_password=_optional("ADMIN_PASSWORD"),
    )
