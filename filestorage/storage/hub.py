"""
Storage hub combining several file storages behind a single facade.

While getting a bucket from the hub, callers never know it is made of
several storages. Bucket names should be unique across all storages of the
hub: on a clash get_bucket() returns the bucket of the first storage, while
get_buckets() keeps the bucket of the last one.

Configuration example:
    hub = HubStorage(storages={
        "local": {
            "class": "filestorage.storage.local.FileSystemStorage",
            "base_path": "/home/www/files",
            "buckets": {"fileSystemBucket": {}},
        },
        "archive": archive_storage,
    })
    hub.get_bucket("fileSystemBucket")
"""
import logging
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from filestorage.logging_config import setup_logging
from filestorage.storage.base import BucketData, StorageInterface
from filestorage.storage.bucket import BucketInterface
from filestorage.storage.exceptions import (
    BucketNotFoundError,
    InvalidArgumentError,
    NoDefaultStorageError,
    StorageNotFoundError,
)
from filestorage.storage.registry import Resolved, Slot, SlotRegistry, Unresolved
from filestorage.storage.schemas import StorageConfig
from filestorage.storage.utils import import_class, validate_name

logger = setup_logging()

StorageData = StorageInterface | StorageConfig | Mapping[str, Any]


class HubStorage(StorageInterface):
    """
    Composite file storage routing bucket lookups to its member storages.

    The first configured storage is the default one: buckets added through
    the hub always go there.

    Args:
        storages: Mapping of storage names to storage instances or
            configurations; configurations must name the storage "class"
    """

    def __init__(self, storages: Mapping[str, StorageData] | None = None):
        self._storages: SlotRegistry[StorageInterface] = SlotRegistry(
            self._create_storage_instance,
            lambda storage_name: StorageNotFoundError(storage_name, type(self).__name__),
        )
        if storages:
            self.set_storages(storages)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} storages={self._storages.names()!r}>"

    def _create_storage_instance(self, storage_name: str, config: StorageConfig) -> StorageInterface:
        storage_class = import_class(config.class_)
        if not issubclass(storage_class, StorageInterface):
            raise InvalidArgumentError(
                f"Class '{storage_class.__name__}' of the storage '{storage_name}' is not a file storage"
            )

        try:
            storage = storage_class(**config.get_options())
        except TypeError as e:
            raise InvalidArgumentError(
                f"Unable to create storage '{storage_name}': {e}"
            ) from e

        logger.debug(f"Storage '{storage_name}' created as {storage_class.__name__}")
        return storage

    # Storages

    def set_storages(self, storages: Mapping[str, StorageData] | Iterable[str]) -> None:
        """
        Replace the list of storages.

        Every entry is validated before the current storages are dropped, so
        a malformed entry leaves the hub unchanged.
        """
        if isinstance(storages, Mapping):
            entries = storages.items()
        elif isinstance(storages, (str, bytes)):
            raise InvalidArgumentError("Storages should be a mapping or a list of names")
        else:
            # Bare names carry no configuration and are rejected by _make_storage_slot()
            entries = ((storage_name, None) for storage_name in storages)

        slots = [
            (storage_name, self._make_storage_slot(storage_name, storage_data))
            for storage_name, storage_data in entries
        ]
        self._storages.clear()
        for storage_name, slot in slots:
            self._storages.set_slot(storage_name, slot)

    def get_storages(self) -> dict[str, StorageInterface]:
        return self._storages.resolve_all()

    def get_storage(self, storage_name: str) -> StorageInterface:
        """
        Return the storage instance by name.

        Raises:
            StorageNotFoundError: If the storage is not registered
        """
        return self._storages.resolve(storage_name)

    def _make_storage_slot(self, storage_name: str, storage_data: StorageData | None) -> Slot:
        validate_name(storage_name, "storage")

        if isinstance(storage_data, StorageInterface):
            return Resolved(storage_data)
        if isinstance(storage_data, StorageConfig):
            return Unresolved(storage_data)
        if not isinstance(storage_data, Mapping) or not storage_data:
            raise InvalidArgumentError(
                "Data of the storage should be a file storage object or configuration mapping!"
            )

        try:
            config = StorageConfig.model_validate(storage_data)
        except ValidationError as e:
            raise InvalidArgumentError(
                f"Invalid configuration of the storage '{storage_name}': {e}"
            ) from e
        return Unresolved(config)

    def add_storage(self, storage_name: str, storage_data: StorageData | None) -> None:
        """
        Register a storage.

        Raises:
            InvalidArgumentError: If the name is not a string or the data is
                neither a storage nor a non-empty configuration
        """
        self._storages.set_slot(storage_name, self._make_storage_slot(storage_name, storage_data))

    def has_storage(self, storage_name: str) -> bool:
        return self._storages.has(storage_name)

    def get_default_storage(self) -> StorageInterface:
        """
        Return the default storage, meaning the first one in the storages list.

        Raises:
            NoDefaultStorageError: If the hub has no storages
        """
        storage_names = self._storages.names()
        if not storage_names:
            raise NoDefaultStorageError(type(self).__name__)
        return self.get_storage(storage_names[0])

    # Buckets

    def set_buckets(self, buckets: Mapping[str, BucketData] | Iterable[str]) -> None:
        self.get_default_storage().set_buckets(buckets)

    def get_buckets(self) -> dict[str, BucketInterface]:
        buckets: dict[str, BucketInterface] = {}
        for storage in self.get_storages().values():
            buckets.update(storage.get_buckets())
        return buckets

    def get_bucket(self, bucket_name: str) -> BucketInterface:
        for storage_name in self._storages.names():
            storage = self.get_storage(storage_name)
            if storage.has_bucket(bucket_name):
                return storage.get_bucket(bucket_name)
        raise BucketNotFoundError(bucket_name, type(self).__name__)

    def add_bucket(self, bucket_name: str, bucket_data: BucketData = None) -> None:
        self.get_default_storage().add_bucket(bucket_name, bucket_data)

    def has_bucket(self, bucket_name: str) -> bool:
        for storage_name in self._storages.names():
            if self.get_storage(storage_name).has_bucket(bucket_name):
                return True
        return False
