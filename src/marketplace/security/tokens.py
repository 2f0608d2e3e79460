"""JWT issuing and verification."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

VENDOR_COLLECTION = "vendors"
ADMIN_COLLECTION = "users"

# Authorization: JWT <token>
AUTH_SCHEME = "JWT"


class TokenService:
    """Creates and verifies signed access tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60 * 24 * 7,
        issuer: Optional[str] = None,
        audience: Optional[str] = None,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.issuer = issuer
        self.audience = audience

    def create_access_token(
        self, subject: str, collection: str, **claims: Any
    ) -> str:
        to_encode: Dict[str, Any] = {
            **claims,
            "sub": subject,
            "collection": collection,
            "exp": datetime.now(timezone.utc)
            + timedelta(minutes=self.expire_minutes),
        }
        if self.issuer:
            to_encode["iss"] = self.issuer
        if self.audience:
            to_encode["aud"] = self.audience
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Verify signature, expiry and optional issuer/audience.

        Returns the claims, or None when the token is not acceptable.
        """
        options = {
            "verify_aud": bool(self.audience),
            "verify_iss": bool(self.issuer),
        }
        decode_kwargs: Dict[str, Any] = {
            "token": token,
            "key": self.secret_key,
            "algorithms": [self.algorithm],
            "options": options,
        }
        if self.audience:
            decode_kwargs["audience"] = self.audience
        if self.issuer:
            decode_kwargs["issuer"] = self.issuer
        try:
            return jwt.decode(**decode_kwargs)
        except JWTError as e:
            logger.debug("Rejected token: %s", e)
            return None


class SessionTokenDecoder:
    """Recovers the acting principal id from an Authorization header."""

    def __init__(self, tokens: TokenService) -> None:
        self.tokens = tokens

    @staticmethod
    def _token_from_header(header: Optional[str]) -> Optional[str]:
        if not header:
            return None
        parts = header.split()
        if len(parts) != 2 or parts[0] != AUTH_SCHEME:
            return None
        return parts[1]

    def claims(self, header: Optional[str]) -> Optional[Dict[str, Any]]:
        token = self._token_from_header(header)
        if token is None:
            return None
        return self.tokens.decode_token(token)

    def extract_subject(
        self, header: Optional[str], collection: str = VENDOR_COLLECTION
    ) -> Optional[str]:
        """Return the ``sub`` claim when the header carries a valid token
        issued for ``collection``; otherwise None. Never raises."""
        payload = self.claims(header)
        if not payload or payload.get("collection") != collection:
            return None
        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            return None
        return subject
