"""Image storage adapter."""

from inkwell.adapter.storage.client import (
    HttpImageStore,
    ImageStore,
    InMemoryImageStore,
)

__all__ = [
    "HttpImageStore",
    "ImageStore",
    "InMemoryImageStore",
]
