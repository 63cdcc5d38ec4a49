"""Image storage infrastructure providers."""

from dishka import Scope, provide

from inkwell.adapter.storage import HttpImageStore, ImageStore
from inkwell.config import Settings
from inkwell.util.di.base import ProviderBase
from inkwell.util.error import ConfigurationError


class StorageProvider(ProviderBase):
    """Image storage component base."""

    __mock_component__ = "storage"


class ProdStorageProvider(StorageProvider):
    """Production storage provider using the object store REST API."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_image_store(self, settings: Settings) -> ImageStore:
        """Provide image store.

        Raises:
            ConfigurationError: If the storage key is left at its placeholder
                outside development
        """
        storage = settings.storage
        if (
            settings.environment in ("staging", "production")
            and storage.api_key == "CHANGE_ME_IN_PRODUCTION"
        ):
            raise ConfigurationError("STORAGE__API_KEY", "must be configured")

        return HttpImageStore(
            base_url=storage.base_url,
            bucket=storage.bucket,
            api_key=storage.api_key,
        )
