"""Mock image storage providers for testing."""

from dishka import Scope, provide

from inkwell.adapter.storage import ImageStore, InMemoryImageStore
from inkwell.util.di.infrastructure.storage import StorageProvider


class MockStorageProvider(StorageProvider):
    """Mock storage provider keeping uploads in memory."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_image_store(self) -> ImageStore:
        """Provide in-memory image store."""
        return InMemoryImageStore()
