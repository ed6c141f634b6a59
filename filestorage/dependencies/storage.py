"""
Storage construction from application settings.

Components needing a storage receive the instance built here instead of
looking one up in global state.
"""
from filestorage.config import Settings, settings
from filestorage.storage.base import StorageInterface
from filestorage.storage.exceptions import InvalidArgumentError
from filestorage.storage.hub import HubStorage
from filestorage.storage.local import FileSystemStorage


def get_storage(config: Settings | None = None) -> StorageInterface:
    """
    Return storage based on configuration.

    This allows switching between a single local storage and a hub of
    several storages by changing the STORAGE_BACKEND environment variable.

    Args:
        config: Settings to use, defaults to the module level settings

    Returns:
        StorageInterface instance (FileSystemStorage or HubStorage)

    Raises:
        InvalidArgumentError: If STORAGE_BACKEND is not supported
    """
    config = config or settings

    if config.STORAGE_BACKEND == "local":
        return FileSystemStorage(
            base_path=config.STORAGE_BASE_PATH,
            base_url=config.STORAGE_BASE_URL,
            file_permission=config.STORAGE_FILE_PERMISSION,
            buckets=config.STORAGE_BUCKETS,
        )

    if config.STORAGE_BACKEND == "hub":
        return HubStorage(storages=config.STORAGE_HUB_STORAGES)

    raise InvalidArgumentError(f"Unknown storage backend: {config.STORAGE_BACKEND}")
