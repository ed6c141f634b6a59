"""
Storage abstraction layer for file operations.

This package stores named files inside named buckets, groups buckets under
storages and lets several storages be combined behind one hub. Callers
address files by bucket name and file name only; the backing medium and the
directory layout stay hidden behind the bucket.
"""

from filestorage.storage.base import BaseStorage, StorageInterface
from filestorage.storage.bucket import BaseBucket, BucketInterface, SubDirTemplateBucket
from filestorage.storage.exceptions import (
    BucketNotFoundError,
    FileNotFoundError,
    InvalidArgumentError,
    NoDefaultStorageError,
    NotFoundError,
    PathUnwritableError,
    StorageError,
    StorageNotFoundError,
    UnknownPlaceholderError,
)
from filestorage.storage.hub import HubStorage
from filestorage.storage.local import FileSystemBucket, FileSystemStorage
from filestorage.storage.templates import render_template, resolve_sub_dir

__all__ = [
    "StorageInterface",
    "BaseStorage",
    "BucketInterface",
    "BaseBucket",
    "SubDirTemplateBucket",
    "FileSystemBucket",
    "FileSystemStorage",
    "HubStorage",
    "resolve_sub_dir",
    "render_template",
    "StorageError",
    "InvalidArgumentError",
    "NotFoundError",
    "BucketNotFoundError",
    "StorageNotFoundError",
    "FileNotFoundError",
    "PathUnwritableError",
    "UnknownPlaceholderError",
    "NoDefaultStorageError",
]
