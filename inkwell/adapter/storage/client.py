"""Image storage clients.

Post cover images and avatars are uploaded to an object store bucket; the
blog only keeps the public URL that comes back.
"""

from abc import ABC, abstractmethod
from uuid import uuid4

import httpx
import logfire

from inkwell.adapter.error import ImageUploadError

_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
}


def extension_for(content_type: str) -> str:
    """File extension for an image content type.

    Raises:
        ValueError: If the content type is not a supported image type
    """
    try:
        return _EXTENSIONS[content_type]
    except KeyError:
        raise ValueError(f"Unsupported image type: {content_type}") from None


class ImageStore(ABC):
    """Accepts an image blob and returns a public URL for it."""

    @abstractmethod
    async def upload(self, data: bytes, content_type: str, folder: str) -> str:
        """Upload an image.

        Args:
            data: Raw image bytes
            content_type: MIME type, one of the supported image types
            folder: Prefix inside the bucket (e.g. ``posts`` or ``avatars``)

        Returns:
            Public URL of the stored image

        Raises:
            ValueError: If the content type is not supported
            ImageUploadError: If the store rejects the upload
        """
        pass


class HttpImageStore(ImageStore):
    """Object storage over its REST API (Supabase storage compatible)."""

    def __init__(self, base_url: str, bucket: str, api_key: str) -> None:
        """Initialize storage client.

        Args:
            base_url: Storage REST endpoint
            bucket: Public bucket images are written to
            api_key: Service key sent as bearer token
        """
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket
        self.api_key = api_key

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/object/public/{self.bucket}/{path}"

    async def upload(self, data: bytes, content_type: str, folder: str) -> str:
        path = f"{folder}/{uuid4()}.{extension_for(content_type)}"
        with logfire.span(
            "image_store.upload", path=path, content_type=content_type, size=len(data)
        ):
            try:
                async with httpx.AsyncClient() as client:
                    response = await client.post(
                        f"{self.base_url}/object/{self.bucket}/{path}",
                        content=data,
                        headers={
                            "Authorization": f"Bearer {self.api_key}",
                            "Content-Type": content_type,
                            "x-upsert": "false",
                        },
                        timeout=30.0,
                    )
            except httpx.HTTPError as e:
                logfire.error("Image upload HTTP error", path=path, error=str(e))
                raise ImageUploadError(path, reason=str(e)) from e

            if response.status_code not in (200, 201):
                logfire.error(
                    "Image upload rejected",
                    path=path,
                    status_code=response.status_code,
                    error=response.text,
                )
                raise ImageUploadError(path, response.status_code)

            url = self.public_url(path)
            logfire.info("Image uploaded", url=url)
            return url


class InMemoryImageStore(ImageStore):
    """Image store for testing; keeps blobs in a dict keyed by URL."""

    def __init__(self, base_url: str = "https://images.test") -> None:
        self.base_url = base_url
        self.images: dict[str, tuple[bytes, str]] = {}

    async def upload(self, data: bytes, content_type: str, folder: str) -> str:
        url = f"{self.base_url}/{folder}/{uuid4()}.{extension_for(content_type)}"
        self.images[url] = (data, content_type)
        return url
