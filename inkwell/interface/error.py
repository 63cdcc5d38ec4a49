"""Translation of application errors into HTTP errors."""

import logfire
from fastapi import HTTPException, status

from inkwell.adapter.error import ProviderError
from inkwell.domain.error import (
    NotAuthorizedError,
    NotFoundError,
    StoreError,
    SubmissionInProgressError,
    ValidationError,
)
from inkwell.util.jwt import JWTError


def to_http_exception(error: Exception, action: str) -> HTTPException:
    """Map an error raised while handling a request to an HTTPException.

    Args:
        error: The error raised by a use case
        action: What the request was doing, for logs and 500 details

    Returns:
        HTTPException to raise from the route
    """
    if isinstance(error, NotFoundError):
        logfire.warn(f"Failed to {action} - not found", error=str(error))
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, NotAuthorizedError):
        logfire.warn(f"Unauthorized attempt to {action}", error=str(error))
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {action}",
        )
    if isinstance(error, SubmissionInProgressError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, (StoreError, ProviderError)):
        logfire.error(f"Failed to {action} - backend unavailable", error=str(error))
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service temporarily unavailable, please retry",
        )
    if isinstance(error, JWTError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(error)
        )
    if isinstance(error, (ValidationError, ValueError)):
        # ValueError covers pydantic errors and malformed UUIDs
        logfire.warn(f"Failed to {action} - invalid input", error=str(error))
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))

    logfire.error(f"Unexpected error trying to {action}", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )
