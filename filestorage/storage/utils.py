"""Validation and class lookup helpers for storage and bucket configuration."""
import importlib
from typing import Any

from filestorage.storage.exceptions import InvalidArgumentError


def validate_name(name: Any, kind: str) -> str:
    """
    Validate a bucket or storage name.

    Rules:
    - Must be a string
    - Must not be empty

    Raises:
        InvalidArgumentError: When the name does not meet requirements
    """
    if not isinstance(name, str):
        raise InvalidArgumentError(
            f"Name of the {kind} should be a string, got {type(name).__name__}"
        )
    if not name:
        raise InvalidArgumentError(f"Name of the {kind} should not be empty")
    return name


def validate_string(value: Any, attribute: str) -> str:
    """Ensure a configuration attribute is a string."""
    if not isinstance(value, str):
        raise InvalidArgumentError(f'"{attribute}" should be a string!')
    return value


def import_class(class_name: str | type) -> type:
    """
    Return the class referenced by a dotted path.

    Classes are returned unchanged, so configuration may hold either.

    Args:
        class_name: "package.module.ClassName" or a class object

    Returns:
        The class object

    Raises:
        InvalidArgumentError: If the path is malformed or cannot be imported

    Examples:
        >>> import_class("filestorage.storage.local.FileSystemBucket")
        <class 'filestorage.storage.local.FileSystemBucket'>
    """
    if isinstance(class_name, type):
        return class_name
    if not isinstance(class_name, str) or "." not in class_name.strip("."):
        raise InvalidArgumentError(f"Invalid class name: {class_name!r}")

    module_name, _, attr_name = class_name.strip(".").rpartition(".")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise InvalidArgumentError(f"Unable to import '{class_name}': {e}") from e

    cls = getattr(module, attr_name, None)
    if not isinstance(cls, type):
        raise InvalidArgumentError(f"'{class_name}' does not name a class")
    return cls
