"""
Conftest for storage tests - file system storages rooted in a temporary directory.
"""
import pytest

from filestorage.storage.local import FileSystemStorage

BASE_URL = "http://files.example.com"


@pytest.fixture
def storage(tmp_path):
    """Create a file system storage with a few configured buckets."""
    return FileSystemStorage(
        base_path=str(tmp_path),
        base_url=BASE_URL,
        file_permission=0o750,
        buckets={
            "temp": {
                "base_sub_path": "temp",
                "file_sub_dir_template": "{^name}/{^^name}",
            },
            "images": {
                "baseSubPath": "image",
                "fileSubDirTemplate": "{ext}/{^name}",
            },
            "plain": {},
        },
    )


@pytest.fixture
def bucket(storage):
    """Return the templated "temp" bucket."""
    return storage.get_bucket("temp")


@pytest.fixture
def source_file(tmp_path):
    """Create a file outside of the storage."""
    path = tmp_path / "outside" / "source.txt"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"source data")
    return path
