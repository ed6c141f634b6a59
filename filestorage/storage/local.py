"""
Local filesystem storage implementation.

Files of a bucket are kept under:
<base_path>/<base_sub_path>/<templated sub dir>/<file name>

Configuration example:
    storage = FileSystemStorage(
        base_path="/home/www/files",
        base_url="http://www.mydomain.com/files",
        file_permission=0o755,
        buckets={
            "tempFiles": {
                "base_sub_path": "temp",
                "file_sub_dir_template": "{^name}/{^^name}",
            },
            "imageFiles": {
                "base_sub_path": "image",
                "file_sub_dir_template": "{ext}/{^name}/{^^name}",
            },
        },
    )
"""
import builtins
import logging
import os
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Any

from filestorage.storage.base import BaseStorage
from filestorage.storage.bucket import FileReference, SubDirTemplateBucket
from filestorage.storage.exceptions import (
    FileNotFoundError,
    InvalidArgumentError,
    PathUnwritableError,
)
from filestorage.storage.utils import validate_string

# os.umask() is process wide, files must not be created while it is relaxed
_umask_lock = threading.Lock()

_RESOLVED_BASE_PATH_KEY = "resolved_full_base_path"


class FileSystemBucket(SubDirTemplateBucket):
    """
    Bucket based simply on the OS file system.

    Every created directory and file gets the file_permission of the owning
    FileSystemStorage.

    Args:
        base_sub_path: Sub path inside the storage base path, defaults to
            the bucket name
    """

    def __init__(self, base_sub_path: str = "", **kwargs: Any):
        self._base_sub_path = ""
        super().__init__(**kwargs)
        self.base_sub_path = base_sub_path

    @property
    def base_sub_path(self) -> str:
        return self._base_sub_path or self.name

    @base_sub_path.setter
    def base_sub_path(self, base_sub_path: str) -> None:
        self._base_sub_path = validate_string(
            base_sub_path, f"{type(self).__name__}.base_sub_path"
        )

    def get_full_base_path(self) -> str:
        """Return the bucket directory, based on the storage base path and base_sub_path."""
        base_path = self.storage.base_path
        full_base_path = f"{base_path}/{self.base_sub_path}" if base_path else self.base_sub_path
        return full_base_path.rstrip("/")

    def get_full_file_name(self, file_name: str) -> str:
        """
        Return the full file system name of the file.

        Nothing is created on disk.
        """
        return f"{self.get_full_base_path()}/{self.get_file_name_with_sub_dir(file_name)}"

    def _resolve_full_base_path(self) -> str:
        """Make sure the bucket directory exists and is writable."""
        cached = self._internal_cache.get(_RESOLVED_BASE_PATH_KEY)
        if cached:
            return cached
        full_base_path = self.get_full_base_path()
        self._resolve_path(full_base_path)
        self._internal_cache[_RESOLVED_BASE_PATH_KEY] = full_base_path
        return full_base_path

    def _resolve_full_file_name(self, file_name: str) -> str:
        """Return the full file name, making sure its directory exists."""
        self._resolve_full_base_path()
        full_file_name = self.get_full_file_name(file_name)
        self._resolve_path(os.path.dirname(full_file_name))
        return full_file_name

    def _resolve_path(self, path: str) -> None:
        """
        Make sure the path exists, is a directory and is writable.

        Missing directories are created one level at a time with the storage
        file permission, while the umask is cleared so the mode applies as is.

        Raises:
            PathUnwritableError: If the path cannot be used
        """
        directory = Path(path)
        if not directory.exists():
            permission = self.storage.file_permission
            self._log(f"creating file path '{path}'")
            with _umask_lock:
                old_umask = os.umask(0)
                try:
                    self._make_dirs(directory, permission)
                except OSError as e:
                    raise PathUnwritableError(path, f"could not be created: {e}") from e
                finally:
                    os.umask(old_umask)

        if not directory.is_dir():
            raise PathUnwritableError(path, "is not a directory")
        if not os.access(directory, os.W_OK):
            raise PathUnwritableError(path, "should be writable")

    @staticmethod
    def _make_dirs(directory: Path, permission: int) -> None:
        missing = []
        while not directory.exists():
            missing.append(directory)
            directory = directory.parent

        for missing_directory in reversed(missing):
            try:
                missing_directory.mkdir(mode=permission)
            except FileExistsError:
                # Created concurrently
                pass

    def _get_full_file_name_by_reference(self, file_reference: FileReference) -> str:
        """
        Return the full file name of a file of this bucket or of another
        bucket of the same storage.

        Raises:
            InvalidArgumentError: If the reference is malformed
            BucketNotFoundError: If the referenced bucket does not exist
        """
        if isinstance(file_reference, str):
            return self.get_full_file_name(file_reference)

        if not isinstance(file_reference, (tuple, list)) or len(file_reference) != 2:
            raise InvalidArgumentError(
                f"File reference should be a file name or a (bucket name, file name) pair, "
                f"got {file_reference!r}"
            )
        bucket_name, file_name = file_reference
        bucket = self.storage.get_bucket(bucket_name)
        if not isinstance(bucket, FileSystemBucket):
            raise InvalidArgumentError(
                f"Bucket '{bucket_name}' is not a file system bucket"
            )
        return bucket.get_full_file_name(file_name)

    def _apply_permission(self, full_file_name: str) -> None:
        os.chmod(full_file_name, self.storage.file_permission)

    def _copy(self, src_file_name: str, dest_file_name: str, apply_permission: bool = True) -> bool:
        try:
            with _umask_lock:
                shutil.copyfile(src_file_name, dest_file_name)
            if apply_permission:
                self._apply_permission(dest_file_name)
        except OSError as e:
            self._log(
                f"unable to copy file from '{src_file_name}' to '{dest_file_name}': {e}",
                logging.ERROR,
                exc_info=True,
            )
            return False

        self._log(f"file '{src_file_name}' has been copied to '{dest_file_name}'")
        return True

    def _remove(self, full_file_name: str) -> bool:
        """Remove a file, treating an already missing file as removed."""
        try:
            Path(full_file_name).unlink(missing_ok=True)
        except OSError as e:
            self._log(f"unable to delete file '{full_file_name}': {e}", logging.ERROR, exc_info=True)
            return False

        self._log(f"file '{full_file_name}' has been deleted")
        return True

    def create(self) -> bool:
        self._resolve_full_base_path()
        return True

    def destroy(self) -> bool:
        full_base_path = self.get_full_base_path()
        self.clear_internal_cache()

        if not os.path.lexists(full_base_path):
            self._log(f"nothing to destroy at base path '{full_base_path}'")
            return True

        try:
            shutil.rmtree(full_base_path)
        except OSError as e:
            self._log(
                f"unable to destroy bucket at base path '{full_base_path}': {e}",
                logging.ERROR,
                exc_info=True,
            )
            return False

        self._log(f"bucket has been destroyed at base path '{full_base_path}'")
        return True

    def exists(self) -> bool:
        return os.path.exists(self.get_full_base_path())

    def save_file_content(self, file_name: str, content: bytes | str) -> bool:
        """
        Save content as a file.

        Content is written to a temporary file next to the target and renamed
        into place, so readers never see a partially written file.
        """
        if isinstance(content, str):
            content = content.encode("utf-8")

        full_file_name = self._resolve_full_file_name(file_name)
        try:
            fd, temp_file_name = tempfile.mkstemp(
                dir=os.path.dirname(full_file_name), prefix=".", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    written_bytes_count = f.write(content)
                if written_bytes_count != len(content):
                    raise OSError(
                        f"only {written_bytes_count} of {len(content)} bytes written"
                    )
                self._apply_permission(temp_file_name)
                os.replace(temp_file_name, full_file_name)
            except Exception:
                # Clean up partial file
                Path(temp_file_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            self._log(f"unable to save file '{full_file_name}': {e}", logging.ERROR, exc_info=True)
            return False

        self._log(f"file '{full_file_name}' has been saved")
        return True

    def get_file_content(self, file_name: str) -> bytes:
        full_file_name = self.get_full_file_name(file_name)
        try:
            with open(full_file_name, "rb") as f:
                content = f.read()
        except (builtins.FileNotFoundError, IsADirectoryError) as e:
            raise FileNotFoundError(file_name, self.name) from e
        self._log(f"content of file '{full_file_name}' has been returned")
        return content

    def delete_file(self, file_name: str) -> bool:
        full_file_name = self.get_full_file_name(file_name)
        if not os.path.lexists(full_file_name):
            self._log(f"unable to delete file '{full_file_name}': file does not exist")
            return True
        return self._remove(full_file_name)

    def file_exists(self, file_name: str) -> bool:
        return os.path.isfile(self.get_full_file_name(file_name))

    def copy_file_in(self, src_file_name: str, file_name: str) -> bool:
        full_file_name = self._resolve_full_file_name(file_name)
        return self._copy(os.fspath(src_file_name), full_file_name)

    def copy_file_out(self, file_name: str, dest_file_name: str) -> bool:
        full_file_name = self.get_full_file_name(file_name)
        return self._copy(full_file_name, os.fspath(dest_file_name), apply_permission=False)

    def copy_file_internal(self, src_file: FileReference, dest_file: FileReference) -> bool:
        src_full_file_name = self._get_full_file_name_by_reference(src_file)
        dest_full_file_name = self._get_full_file_name_by_reference(dest_file)
        self._resolve_path(os.path.dirname(dest_full_file_name))
        return self._copy(src_full_file_name, dest_full_file_name)

    def move_file_in(self, src_file_name: str, file_name: str) -> bool:
        return self.copy_file_in(src_file_name, file_name) and self._remove(os.fspath(src_file_name))

    def move_file_out(self, file_name: str, dest_file_name: str) -> bool:
        return (
            self.copy_file_out(file_name, dest_file_name)
            and self._remove(self.get_full_file_name(file_name))
        )

    def move_file_internal(self, src_file: FileReference, dest_file: FileReference) -> bool:
        if not self.copy_file_internal(src_file, dest_file):
            return False
        return self._remove(self._get_full_file_name_by_reference(src_file))

    def get_file_url(self, file_name: str) -> str:
        base_url = f"{self.storage.base_url.rstrip('/')}/{self.base_sub_path}"
        return f"{base_url}/{self.get_file_name_with_sub_dir(file_name)}"


class FileSystemStorage(BaseStorage):
    """
    File storage based simply on the OS file system.

    Provides the base path, base URL and permission used by its buckets; it
    performs no file operations itself.

    Args:
        base_path: File system path which is basic for all buckets
        base_url: Web URL which is basic for all buckets
        file_permission: Permission of the directories and files created by
            the buckets, defaults to 0o755
    """

    bucket_class_name = FileSystemBucket

    def __init__(
        self,
        base_path: str | os.PathLike = "",
        base_url: str = "",
        file_permission: int = 0o755,
        **kwargs: Any,
    ):
        self.base_path = base_path
        self.base_url = base_url
        self.file_permission = file_permission
        super().__init__(**kwargs)

    @property
    def base_path(self) -> str:
        return self._base_path

    @base_path.setter
    def base_path(self, base_path: str | os.PathLike) -> None:
        if not isinstance(base_path, (str, os.PathLike)):
            raise InvalidArgumentError(f'"{type(self).__name__}.base_path" should be a string!')
        self._base_path = os.fspath(base_path)

    @property
    def base_url(self) -> str:
        return self._base_url

    @base_url.setter
    def base_url(self, base_url: str) -> None:
        self._base_url = validate_string(base_url, f"{type(self).__name__}.base_url")

    @property
    def file_permission(self) -> int:
        return self._file_permission

    @file_permission.setter
    def file_permission(self, file_permission: int) -> None:
        if not isinstance(file_permission, int) or isinstance(file_permission, bool):
            raise InvalidArgumentError(
                f'"{type(self).__name__}.file_permission" should be an integer!'
            )
        self._file_permission = file_permission
