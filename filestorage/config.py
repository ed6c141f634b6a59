from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Storage settings
    STORAGE_BACKEND: str = "local"  # local | hub
    STORAGE_BASE_PATH: str = "storage/data"
    STORAGE_BASE_URL: str = "/files"
    STORAGE_FILE_PERMISSION: int = 0o755

    # Bucket configurations of the local storage, JSON in the environment:
    # STORAGE_BUCKETS='{"images": {"baseSubPath": "image", "fileSubDirTemplate": "{ext}/{^name}"}}'
    STORAGE_BUCKETS: dict[str, dict[str, Any]] = {}

    # Storage configurations of the hub, each one must name its "class"
    STORAGE_HUB_STORAGES: dict[str, dict[str, Any]] = {}

    # Logging settings
    LOG_LEVEL: str = "INFO"

    # "env_file": ".env" - read variables from the .env file as well
    # "extra": "ignore" - variables without a matching field are skipped
    model_config = {"env_file": ".env", "extra": "ignore"}

    @field_validator("STORAGE_FILE_PERMISSION", mode="before")
    @classmethod
    def parse_octal_permission(cls, value: Any) -> Any:
        """Read permissions such as "0755" or "0o755" as octal numbers."""
        if isinstance(value, str):
            text = value.strip().lower()
            if text.startswith("0o"):
                text = text[2:]
            try:
                return int(text, 8)
            except ValueError:
                return value
        return value


settings = Settings()
