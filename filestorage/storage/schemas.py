"""
Configuration records for buckets and storages.

Keys may be given in snake_case or camelCase ("baseSubPath"); backend specific
keys are kept as extra fields and handed to the constructor in snake_case.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel, to_snake


class _ComponentConfig(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def get_options(self) -> dict[str, Any]:
        """Return constructor keyword arguments, without the class."""
        options = self.model_dump(exclude={"class_"}, exclude_none=True)
        return {to_snake(key): value for key, value in options.items()}


class BucketConfig(_ComponentConfig):
    class_: str | type | None = Field(default=None, alias="class")
    base_sub_path: str | None = None
    file_sub_dir_template: str | None = None

    def get_options(self) -> dict[str, Any]:
        """Return constructor keyword arguments, without the injected name and storage."""
        options = super().get_options()
        options.pop("name", None)
        options.pop("storage", None)
        return options


class StorageConfig(_ComponentConfig):
    class_: str | type = Field(alias="class")
    buckets: dict[str, Any] | list[str] | None = None
