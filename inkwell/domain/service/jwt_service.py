"""Authentication of viewers from identity service tokens."""

import logfire

from inkwell.config import AuthSettings
from inkwell.util.jwt import JWTError, TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Verifies the ``auth_token`` cookie of HTTP requests and live sockets."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Claims of a valid token.

        Raises:
            JWTError: If token is invalid or expired
        """
        try:
            payload = verify_token(token, self.auth_settings)
        except JWTError as e:
            logfire.warn("Token rejected", reason=str(e))
            raise
        logfire.debug("Token verified", user_id=payload.user_id)
        return payload

    def authenticate(self, token: str | None) -> TokenPayload | None:
        """Claims of the viewer, or None for an anonymous viewer.

        Reading posts and threads needs no account, so a missing or bad
        token downgrades the viewer instead of failing the request.
        """
        if not token:
            return None
        try:
            return self.verify_token(token)
        except JWTError:
            return None
