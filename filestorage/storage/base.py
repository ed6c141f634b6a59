"""
Abstract base classes for file storages.

A storage is a registry of buckets sharing one backend and its settings.
Buckets may be registered as live instances or as configuration, in which
case they are instantiated on first access and reused afterwards.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from filestorage.logging_config import setup_logging
from filestorage.storage.bucket import BucketInterface
from filestorage.storage.exceptions import BucketNotFoundError, InvalidArgumentError
from filestorage.storage.registry import Resolved, SlotRegistry, Unresolved
from filestorage.storage.schemas import BucketConfig
from filestorage.storage.utils import import_class, validate_name

logger = setup_logging()

# Bucket instance, configuration mapping or None for an empty configuration
BucketData = BucketInterface | BucketConfig | Mapping[str, Any] | None


class StorageInterface(ABC):
    """
    Interface for all file storages.

    A file storage is a hub for BucketInterface instances.
    """

    @abstractmethod
    def set_buckets(self, buckets: Mapping[str, BucketData] | Iterable[str]) -> None:
        """
        Register a set of buckets.

        Args:
            buckets: Mapping of bucket names to bucket instances or
                configurations, or a list of bare bucket names
        """
        pass

    @abstractmethod
    def get_buckets(self) -> dict[str, BucketInterface]:
        """Return all bucket instances keyed by name."""
        pass

    @abstractmethod
    def get_bucket(self, bucket_name: str) -> BucketInterface:
        """
        Return the bucket instance by name.

        Raises:
            BucketNotFoundError: If the bucket is not registered
        """
        pass

    @abstractmethod
    def add_bucket(self, bucket_name: str, bucket_data: BucketData = None) -> None:
        """
        Register a bucket.

        Args:
            bucket_name: Name of the bucket
            bucket_data: Bucket instance or configuration

        Raises:
            InvalidArgumentError: If the name or the data is malformed
        """
        pass

    @abstractmethod
    def has_bucket(self, bucket_name: str) -> bool:
        """Check if the bucket has been registered in the storage."""
        pass


class BaseStorage(StorageInterface):
    """
    Base class for file storages.

    Each particular storage uses its own bucket class, set through
    bucket_class_name; a bucket configuration may override it with "class".

    Args:
        buckets: Initial buckets, see set_buckets()
        bucket_class_name: Default bucket class (dotted path or class)
    """

    bucket_class_name: str | type | None = None

    def __init__(
        self,
        buckets: Mapping[str, BucketData] | Iterable[str] | None = None,
        bucket_class_name: str | type | None = None,
    ):
        self._buckets: SlotRegistry[BucketInterface] = SlotRegistry(
            self._create_bucket_instance,
            lambda bucket_name: BucketNotFoundError(bucket_name, type(self).__name__),
        )
        if bucket_class_name is not None:
            if not isinstance(bucket_class_name, (str, type)):
                raise InvalidArgumentError(
                    f'"{type(self).__name__}.bucket_class_name" should be a string or a class!'
                )
            self.bucket_class_name = bucket_class_name
        if buckets:
            self.set_buckets(buckets)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} buckets={self._buckets.names()!r}>"

    def _log(self, message: str, level: int = logging.INFO, **kwargs: Any) -> None:
        logger.getChild(type(self).__name__).log(level, message, **kwargs)

    def _parse_bucket_config(self, bucket_name: str, bucket_data: Any) -> BucketConfig:
        if isinstance(bucket_data, BucketConfig):
            return bucket_data
        try:
            return BucketConfig.model_validate(bucket_data or {})
        except ValidationError as e:
            raise InvalidArgumentError(
                f"Invalid configuration of the bucket '{bucket_name}': {e}"
            ) from e

    def _create_bucket_instance(self, bucket_name: str, config: BucketConfig) -> BucketInterface:
        """
        Create a bucket instance from its configuration.

        Raises:
            InvalidArgumentError: If the bucket class is missing, is not a
                bucket or rejects the configuration
        """
        class_name = config.class_ or self.bucket_class_name
        if class_name is None:
            raise InvalidArgumentError(
                f"Unable to determine class of the bucket '{bucket_name}'"
            )
        bucket_class = import_class(class_name)
        if not issubclass(bucket_class, BucketInterface):
            raise InvalidArgumentError(
                f"Class '{bucket_class.__name__}' of the bucket '{bucket_name}' is not a bucket"
            )

        try:
            bucket = bucket_class(name=bucket_name, storage=self, **config.get_options())
        except TypeError as e:
            raise InvalidArgumentError(
                f"Unable to create bucket '{bucket_name}': {e}"
            ) from e

        self._log(f"bucket '{bucket_name}' created as {bucket_class.__name__}", logging.DEBUG)
        return bucket

    def set_buckets(self, buckets: Mapping[str, BucketData] | Iterable[str]) -> None:
        if isinstance(buckets, Mapping):
            for bucket_name, bucket_data in buckets.items():
                self.add_bucket(bucket_name, bucket_data)
            return

        if isinstance(buckets, (str, bytes)):
            raise InvalidArgumentError("Buckets should be a mapping or a list of names")
        for bucket_name in buckets:
            self.add_bucket(bucket_name)

    def get_buckets(self) -> dict[str, BucketInterface]:
        return self._buckets.resolve_all()

    def get_bucket(self, bucket_name: str) -> BucketInterface:
        return self._buckets.resolve(bucket_name)

    def add_bucket(self, bucket_name: str, bucket_data: BucketData = None) -> None:
        validate_name(bucket_name, "bucket")

        if isinstance(bucket_data, BucketInterface):
            bucket_data.name = bucket_name
            bucket_data.storage = self
            self._buckets.set_slot(bucket_name, Resolved(bucket_data))
        elif bucket_data is None or isinstance(bucket_data, (Mapping, BucketConfig)):
            config = self._parse_bucket_config(bucket_name, bucket_data)
            self._buckets.set_slot(bucket_name, Unresolved(config))
        else:
            raise InvalidArgumentError(
                "Data of the bucket should be a bucket object or configuration mapping!"
            )

    def has_bucket(self, bucket_name: str) -> bool:
        return self._buckets.has(bucket_name)
