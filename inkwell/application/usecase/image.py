"""Image uploads shared by post and profile use cases.

Clients send images inline as ``data:image/...;base64,...`` URLs.
"""

import base64
import binascii
import re

from inkwell.adapter.storage import ImageStore
from inkwell.domain.error import ValidationError

_DATA_URL_RE = re.compile(r"^data:(?P<type>image/[a-z0-9.+-]+);base64,(?P<data>.*)$", re.S)


def decode_image_data_url(data_url: str, max_bytes: int) -> tuple[bytes, str]:
    """Decode an inline image.

    Args:
        data_url: ``data:`` URL with base64 payload
        max_bytes: Largest accepted decoded size

    Returns:
        Raw bytes and content type

    Raises:
        ValidationError: If the URL is malformed, not an image, or too large
    """
    match = _DATA_URL_RE.match(data_url.strip())
    if not match:
        raise ValidationError("Image must be a base64 data URL")

    # Reject before decoding; base64 grows data by a third
    if len(match.group("data")) > (max_bytes * 4) // 3 + 4:
        raise ValidationError(f"Image must be at most {max_bytes} bytes")

    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Image data is not valid base64") from None

    if not data:
        raise ValidationError("Image is empty")
    if len(data) > max_bytes:
        raise ValidationError(f"Image must be at most {max_bytes} bytes")

    return data, match.group("type")


async def store_image(
    image_store: ImageStore, data_url: str, folder: str, max_bytes: int
) -> str:
    """Validate and upload an inline image, returning its public URL.

    Raises:
        ValidationError: If the image is rejected before upload
        ProviderError: If the store rejects the upload
    """
    data, content_type = decode_image_data_url(data_url, max_bytes)
    try:
        return await image_store.upload(data, content_type, folder)
    except ValueError as e:
        # Unsupported content type
        raise ValidationError(str(e)) from e
