"""Verification of tokens issued by the external identity service.

Tokens carry the standard ``sub`` (user id), ``exp`` and ``iat`` claims plus
``name`` (display name). ``create_token`` mints the same shape for the
identity service's shared-secret setup and for tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel, ConfigDict, Field

from inkwell.config import AuthSettings

REQUIRED_CLAIMS = ["sub", "exp"]


class TokenPayload(BaseModel):
    """Claims of a verified token."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: str = Field(validation_alias="sub")
    display_name: str = Field(validation_alias="name")
    exp: datetime


class JWTError(Exception):
    """The token is missing a claim, expired or not signed with our secret."""

    pass


def create_token(
    user_id: str,
    display_name: str,
    settings: AuthSettings,
    expires_in: Optional[timedelta] = None,
) -> str:
    """Sign a token for ``user_id``.

    Args:
        user_id: User ID (``sub``)
        display_name: Display name (``name``)
        settings: Authentication settings
        expires_in: Lifetime, ``settings.jwt_expiry_days`` by default
    """
    now = datetime.now(timezone.utc)
    lifetime = expires_in or timedelta(days=settings.jwt_expiry_days)
    claims = {"sub": user_id, "name": display_name, "iat": now, "exp": now + lifetime}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check the signature and expiry of a token and return its claims.

    Raises:
        JWTError: If the token is invalid or expired
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            leeway=settings.jwt_leeway_seconds,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}") from e

    # Tokens from older identity service releases have no display name
    claims.setdefault("name", "anonymous")
    return TokenPayload.model_validate(claims)
