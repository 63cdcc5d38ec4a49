"""Errors raised by clients of external services."""

from typing import Optional


class ProviderError(Exception):
    """An external service rejected a request or could not be reached."""

    pass


class ImageUploadError(ProviderError):
    """The object store did not accept an image.

    ``status_code`` is None when the store could not be reached at all.
    """

    def __init__(self, path: str, status_code: Optional[int] = None, reason: str = ""):
        self.path = path
        self.status_code = status_code
        if status_code is None:
            message = f"Image upload to {path} failed: {reason or 'store unreachable'}"
        else:
            message = f"Image upload to {path} failed: {status_code}"
        super().__init__(message)
