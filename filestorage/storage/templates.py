"""
Sub directory templates for bucket files.

A template such as ``"{^name}/{^^name}"`` maps every file name to a short
sub directory path, spreading large numbers of files over many small
directories. Resolution depends on the file name only, so the same name
always lands in the same place.
"""
import os
import re
from typing import Any, Callable, Mapping

from filestorage.storage.exceptions import UnknownPlaceholderError

# "{name}", "{^name}", "{^^ext}", ...
PLACEHOLDER_PATTERN = re.compile(r"{(\^*)(\w+)}")

DEFAULT_PLACEHOLDER_VALUE = "0"


def get_file_extension(file_name: str) -> str:
    """
    Return the extension of a file name without the leading dot.

    A name made of a leading dot only (".gitignore") has no extension.

    Examples:
        >>> get_file_extension("photo.JPG")
        'JPG'
        >>> get_file_extension(".gitignore")
        ''
    """
    return os.path.splitext(file_name)[1][1:]


def _apply_symbol_position(value: str, carets: str) -> str:
    """Pick the single character requested by the carets and apply the default."""
    if carets:
        position = len(carets) - 1
        if position < len(value):
            value = value[position]
        else:
            value = DEFAULT_PLACEHOLDER_VALUE

    if not value or value == ".":
        value = DEFAULT_PLACEHOLDER_VALUE
    return value


def _substitute(template: str, lookup: Callable[[str], str]) -> str:
    def replace(match: re.Match) -> str:
        carets, placeholder = match.groups()
        return _apply_symbol_position(lookup(placeholder), carets)

    return PLACEHOLDER_PATTERN.sub(replace, template)


def resolve_sub_dir(template: str, file_name: str) -> str:
    """
    Resolve a sub directory template against a file name.

    Allowed placeholders:
    - {name} - name of the file
    - {ext} or {extension} - extension of the file

    Each "^" placed before a placeholder name selects a single symbol of the
    value: {^name} is its first symbol, {^^name} the second and so on. A
    missing symbol, an empty value and "." resolve to "0".

    Args:
        template: Template string, may be empty
        file_name: Name of the file inside the bucket

    Returns:
        Resolved sub directory path (empty for an empty template)

    Raises:
        UnknownPlaceholderError: If the template uses any other placeholder

    Examples:
        >>> resolve_sub_dir("{^name}/{^^name}", "54321.tmp")
        '5/4'
        >>> resolve_sub_dir("{ext}/{^name}", "photo.JPG")
        'JPG/p'
    """
    if not template:
        return ""

    def lookup(placeholder: str) -> str:
        if placeholder == "name":
            return file_name
        if placeholder in ("ext", "extension"):
            return get_file_extension(file_name)
        raise UnknownPlaceholderError(placeholder)

    return _substitute(template, lookup)


def render_template(template: str, context: Mapping[str, Any]) -> str:
    """
    Resolve a template against arbitrary attribute values.

    Used by callers that compute per-record sub paths, e.g. "{^pk}/{pk}".
    Placeholders missing from the context are left as their bare name.
    """
    if not template:
        return ""

    def lookup(placeholder: str) -> str:
        if placeholder not in context:
            return placeholder
        value = context[placeholder]
        return "" if value is None else str(value)

    return _substitute(template, lookup)


def get_file_name_with_sub_dir(template: str, file_name: str) -> str:
    """Return the file name prefixed with its resolved sub directory, if any."""
    sub_dir = resolve_sub_dir(template, file_name)
    if sub_dir:
        return f"{sub_dir}/{file_name}"
    return file_name
