"""
Storage-specific exceptions.

Configuration and lookup errors are raised as these exceptions and propagate
to the caller. Physical I/O failures are not raised: bucket operations report
them as a ``False`` result and log the cause.
"""


class StorageError(Exception):
    """Base exception for storage operations."""

    pass


class InvalidArgumentError(StorageError, ValueError):
    """Raised when a storage, bucket or configuration value is malformed."""

    pass


class NotFoundError(StorageError, LookupError):
    """Base exception for lookups of things that are not registered or stored."""

    pass


class BucketNotFoundError(NotFoundError):
    """Raised when a bucket name is unknown to a storage or hub."""

    def __init__(self, bucket_name: str, owner: str = ""):
        self.bucket_name = bucket_name
        self.owner = owner
        message = f"Bucket named '{bucket_name}' does not exist"
        if owner:
            message += f" in the file storage '{owner}'"
        super().__init__(message)


class StorageNotFoundError(NotFoundError):
    """Raised when a storage name is unknown to a hub."""

    def __init__(self, storage_name: str, owner: str = ""):
        self.storage_name = storage_name
        self.owner = owner
        message = f"Storage named '{storage_name}' does not exist"
        if owner:
            message += f" in the file storage hub '{owner}'"
        super().__init__(message)


class FileNotFoundError(NotFoundError):
    """Raised when requested file is not found in a bucket."""

    def __init__(self, file_name: str, bucket_name: str = ""):
        self.file_name = file_name
        self.bucket_name = bucket_name
        message = f"File not found: {file_name}"
        if bucket_name:
            message += f" (bucket '{bucket_name}')"
        super().__init__(message)


class PathUnwritableError(StorageError):
    """Raised when a bucket path cannot be created, is not a directory or is read-only."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Path '{path}' {reason}")


class UnknownPlaceholderError(StorageError, ValueError):
    """Raised when a sub directory template references an unsupported placeholder."""

    def __init__(self, placeholder: str):
        self.placeholder = placeholder
        super().__init__(
            f"Unable to resolve file sub dir: unknown placeholder '{placeholder}'"
        )


class NoDefaultStorageError(StorageError):
    """Raised when a hub has no storages to act as the default one."""

    def __init__(self, owner: str = ""):
        self.owner = owner
        super().__init__(f"Unable to determine default storage in the hub '{owner}'")
