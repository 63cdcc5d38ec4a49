"""Authentication helpers for routes.

Identity is external: a request is authenticated when it carries a valid
``auth_token`` cookie signed with the shared secret.
"""

from fastapi import HTTPException, status

from inkwell.domain.service import JWTService
from inkwell.util.jwt import TokenPayload


def require_user(
    jwt_service: JWTService, auth_token: str | None, action: str
) -> TokenPayload:
    """Verified token payload, or 401.

    Args:
        jwt_service: JWT service
        auth_token: Token from the ``auth_token`` cookie
        action: What needs authentication, for the error detail

    Returns:
        Payload of the valid token

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    payload = jwt_service.authenticate(auth_token)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return payload
