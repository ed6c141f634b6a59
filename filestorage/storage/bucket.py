"""
Bucket interface and base classes.

A bucket is a named container of files owned by a storage. Callers address
files by name only; where and how the bytes are kept is up to the concrete
bucket implementation.
"""
import logging
import weakref
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from filestorage.logging_config import setup_logging
from filestorage.storage import templates
from filestorage.storage.exceptions import StorageError
from filestorage.storage.utils import validate_string

if TYPE_CHECKING:
    from filestorage.storage.base import StorageInterface

# A file in this bucket ("name") or in another bucket of the same storage
# (("bucket", "name")).
FileReference = str | tuple[str, str] | list[str]

logger = setup_logging()


class BucketInterface(ABC):
    """
    Interface for all file storage buckets.

    All buckets should be controlled by an instance of StorageInterface.
    File operations report physical failures through their boolean result.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Bucket name, unique within the owning storage."""
        pass

    @property
    @abstractmethod
    def storage(self) -> "StorageInterface":
        """File storage which owns the bucket."""
        pass

    @abstractmethod
    def create(self) -> bool:
        """Create this bucket."""
        pass

    @abstractmethod
    def destroy(self) -> bool:
        """Destroy this bucket together with all its files."""
        pass

    @abstractmethod
    def exists(self) -> bool:
        """Check if this bucket exists."""
        pass

    @abstractmethod
    def save_file_content(self, file_name: str, content: bytes | str) -> bool:
        """
        Save content as a file, overwriting any existing one.

        Args:
            file_name: Bucket file name
            content: New file content

        Returns:
            True if the whole content has been written
        """
        pass

    @abstractmethod
    def get_file_content(self, file_name: str) -> bytes:
        """
        Return content of an existing file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        pass

    @abstractmethod
    def delete_file(self, file_name: str) -> bool:
        """
        Delete a file.

        Deleting a file which does not exist is reported as a success.
        """
        pass

    @abstractmethod
    def file_exists(self, file_name: str) -> bool:
        """Check if the file exists in the bucket."""
        pass

    @abstractmethod
    def copy_file_in(self, src_file_name: str, file_name: str) -> bool:
        """
        Copy a file from the OS file system into the bucket.

        Args:
            src_file_name: OS full file name
            file_name: New bucket file name
        """
        pass

    @abstractmethod
    def copy_file_out(self, file_name: str, dest_file_name: str) -> bool:
        """
        Copy a file from the bucket into the OS file system.

        Args:
            file_name: Existing bucket file name
            dest_file_name: New OS full file name
        """
        pass

    @abstractmethod
    def copy_file_internal(self, src_file: FileReference, dest_file: FileReference) -> bool:
        """
        Copy a file inside this bucket or between buckets of the same storage.

        A file can be passed as a string, meaning a file of this bucket, or
        as a pair (bucket name, file name) referencing another bucket.
        """
        pass

    @abstractmethod
    def move_file_in(self, src_file_name: str, file_name: str) -> bool:
        """Copy a file from the OS file system into the bucket and delete the source."""
        pass

    @abstractmethod
    def move_file_out(self, file_name: str, dest_file_name: str) -> bool:
        """Copy a file from the bucket into the OS file system and delete the bucket file."""
        pass

    @abstractmethod
    def move_file_internal(self, src_file: FileReference, dest_file: FileReference) -> bool:
        """
        Move a file inside this bucket or between buckets of the same storage.

        The source is deleted only if the copy succeeded.
        """
        pass

    @abstractmethod
    def get_file_url(self, file_name: str) -> str:
        """Return the web URL of the file."""
        pass


class BaseBucket(BucketInterface):
    """
    Base class for file storage buckets.

    Keeps the bucket name and a weak reference to the owning storage, so a
    storage and its buckets do not keep each other alive.
    """

    def __init__(self, name: str = "", storage: "StorageInterface | None" = None):
        self._name = ""
        self._storage_ref: weakref.ReferenceType | None = None
        self.name = name
        if storage is not None:
            self.storage = storage

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self._name!r}>"

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = validate_string(name, f"{type(self).__name__}.name")

    @property
    def storage(self) -> "StorageInterface":
        """
        Return the owning storage.

        Raises:
            StorageError: If the bucket is detached or the storage is gone
        """
        storage = self._storage_ref() if self._storage_ref is not None else None
        if storage is None:
            raise StorageError(f'Bucket "{self._name}" is not attached to a file storage')
        return storage

    @storage.setter
    def storage(self, storage: "StorageInterface") -> None:
        self._storage_ref = weakref.ref(storage)

    def _log(self, message: str, level: int = logging.INFO, **kwargs: Any) -> None:
        """Log a message on the logger named after the bucket class."""
        logger.getChild(type(self).__name__).log(
            level, f'Bucket "{self._name}": {message}', **kwargs
        )


class SubDirTemplateBucket(BaseBucket):
    """
    Bucket base class that places files into templated sub directories.

    Args:
        file_sub_dir_template: Template of the sub directories storing a
            particular file, e.g. "{^name}/{^^name}" (see
            templates.resolve_sub_dir for the allowed placeholders)
    """

    def __init__(self, file_sub_dir_template: str = "", **kwargs: Any):
        self._file_sub_dir_template = ""
        self._internal_cache: dict[str, Any] = {}
        super().__init__(**kwargs)
        self.file_sub_dir_template = file_sub_dir_template

    @property
    def file_sub_dir_template(self) -> str:
        return self._file_sub_dir_template

    @file_sub_dir_template.setter
    def file_sub_dir_template(self, template: str) -> None:
        self._file_sub_dir_template = validate_string(
            template, f"{type(self).__name__}.file_sub_dir_template"
        )

    def clear_internal_cache(self) -> bool:
        self._internal_cache = {}
        return True

    def get_file_sub_dir(self, file_name: str) -> str:
        """Return the sub directory of the file resolved from the template."""
        return templates.resolve_sub_dir(self._file_sub_dir_template, file_name)

    def get_file_name_with_sub_dir(self, file_name: str) -> str:
        """Return the file name including its sub directory path."""
        return templates.get_file_name_with_sub_dir(self._file_sub_dir_template, file_name)
