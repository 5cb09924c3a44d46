"""
Bearer token issuance and verification.

Tokens are HS256-signed JWTs carrying the user id under the ``userId`` claim
and a fixed expiry. Verification never raises: anything that is not a valid,
unexpired token signed with our key yields no identity.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(days=1)


class Identity(BaseModel):
    """The authenticated user behind a verified token."""

    model_config = ConfigDict(frozen=True)

    user_id: int


class TokenClaims(BaseModel):
    """Claims we expect inside a decoded token."""

    user_id: int = Field(..., alias="userId", strict=True, gt=0)
    exp: int


def extract_bearer(header_value: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an Authorization header value.

    Accepts ``Bearer <token>`` (scheme is case-insensitive) or a bare token.
    Returns None for a missing or blank header.
    """
    if not header_value or not header_value.strip():
        return None
    parts = header_value.strip().split(None, 1)
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1].strip() or None
    if len(parts) == 1 and parts[0].lower() != "bearer":
        return parts[0]
    return None


class TokenService:
    """
    Issues and verifies signed bearer tokens.

    The secret key is process-wide configuration; build one instance at
    startup and pass it to whoever needs it.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TOKEN_TTL
    ):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: int, now: Optional[datetime] = None) -> str:
        """
        Create a token for a user.

        Args:
            user_id: ID encoded into the token
            now: Issue time (defaults to the current UTC time)

        Returns:
            Encoded JWT string
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> Optional[Identity]:
        """
        Verify a token.

        Returns:
            Identity for a valid token, None for a missing, malformed,
            tampered or expired one
        """
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
            claims = TokenClaims.model_validate(payload)
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except (jwt.InvalidTokenError, ValidationError) as e:
            logger.debug("Rejected invalid token: %s", e)
            return None
        return Identity(user_id=claims.user_id)
