"""
Synchronize local documentation files with a ReadMe category.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import re
from pathlib import Path

from .environment import ContentError, TitleNotFoundError
from .serializer import JsonObject, JsonType


def compile_title_regex(pattern: str) -> re.Pattern[str]:
    """
    Compiles the regular expression used to extract document titles.

    :param pattern: Regular expression whose first capture group holds the title, e.g. `#\\s*(.+)`.
    """

    try:
        return re.compile(pattern)
    except re.error as e:
        raise ContentError(f"invalid title regex '{pattern}': {e}") from e


def extract_title(content: str, regex: re.Pattern[str], path: Path, prefix: str | None = None) -> str:
    """
    Extracts a document title from file content.

    The first capture group of the first match is used, with leading and trailing whitespace removed.

    :param content: Text content of the documentation file.
    :param regex: Compiled title expression.
    :param path: Path of the documentation file, used in error messages.
    :param prefix: Text to prepend to the title, separated with a space.
    :raises TitleNotFoundError: The expression has no match, or its first capture group is empty.
    """

    match = regex.search(content)
    if match is None or regex.groups < 1:
        raise TitleNotFoundError(path, regex.pattern)

    group = match.group(1)
    title = group.strip() if group is not None else ""
    if not title:
        raise TitleNotFoundError(path, regex.pattern)

    if prefix:
        return f"{prefix} {title}"
    else:
        return title


def slug_from_path(path: Path) -> str:
    """
    Derives a document slug from a file name.

    The extension is dropped, the rest trimmed and lowercased, and double hyphens collapsed, e.g. `My--File.md`
    becomes `my-file`.
    """

    return path.stem.strip().lower().replace("--", "-")


def merged(target: JsonObject, source: JsonObject) -> JsonObject:
    """
    Merges two JSON objects recursively.

    Values in `source` take precedence, except where both sides hold an object, in which case the objects are
    merged. Neither argument is modified.
    """

    result: dict[str, JsonType] = dict(target)
    for key, value in source.items():
        existing = result.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            result[key] = merged(existing, value)
        else:
            result[key] = value
    return result


def build_payload(
    additional: JsonObject,
    *,
    title: str,
    slug: str,
    category_id: str,
    body: str,
    parent_id: str | None = None,
) -> JsonObject:
    """
    Builds the request body to create or update a document.

    :param additional: Extra fields to send with each document (e.g. `{"hidden": false}`).
    :param title: Document title.
    :param slug: Document slug.
    :param category_id: ID of the category the document is filed under.
    :param body: Document content.
    :param parent_id: ID of the parent document, if any.
    :returns: Merged payload in which the derived fields override `additional`.
    """

    fields: JsonObject = {
        "title": title,
        "slug": slug,
        "category": category_id,
        "body": body,
    }
    if parent_id is not None:
        fields["parentDoc"] = parent_id

    return merged(additional, fields)
