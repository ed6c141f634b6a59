import pytest

STORAGE_ENV_VARS = (
    "STORAGE_BACKEND",
    "STORAGE_BASE_PATH",
    "STORAGE_BASE_URL",
    "STORAGE_FILE_PERMISSION",
    "STORAGE_BUCKETS",
    "STORAGE_HUB_STORAGES",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_storage_env(monkeypatch):
    """Keep storage settings from the developer environment out of the tests."""
    for name in STORAGE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
