"""
Synchronize local documentation files with a ReadMe category.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import re
from dataclasses import dataclass, field
from typing import Mapping

from .document import compile_title_regex
from .environment import ArgumentError, InputMissingError
from .serializer import JsonObject, parse_json_object

# input names as they appear in action metadata and JSON input files, mapped to field names
INPUT_NAMES: dict[str, str] = {
    "apiKey": "api_key",
    "version": "version",
    "categorySlug": "category_slug",
    "parentSlug": "parent_slug",
    "titleRegex": "title_regex",
    "titlePrefix": "title_prefix",
    "path": "path",
    "additionalJson": "additional_json",
    "create": "create",
    "overwrite": "overwrite",
    "clear": "clear",
}

# inputs that are allowed to be empty
OPTIONAL_INPUTS: frozenset[str] = frozenset(["parentSlug", "titlePrefix"])

BOOLEAN_INPUTS: frozenset[str] = frozenset(["create", "overwrite", "clear"])


def parse_boolean(name: str, value: str) -> bool:
    """
    Parses a boolean input passed as a string.

    Only the literals `true` and `false` are accepted (ignoring case and surrounding whitespace) such that a typo is
    reported instead of silently read as false.
    """

    match value.strip().lower():
        case "true":
            return True
        case "false":
            return False
        case _:
            raise ArgumentError(f"expected: 'true' or 'false' for input {name}; got: '{value}'")


@dataclass(frozen=True)
class SyncRequest:
    """
    Configuration of a single synchronization run.

    :param api_key: ReadMe API key.
    :param version: Documentation version to operate on.
    :param category_slug: Category to clear and to file documents under.
    :param parent_slug: Document in the category whose children are cleared, and under which documents are filed.
    :param title_regex: Regular expression whose first capture group is the document title.
    :param title_prefix: Text prepended to each document title.
    :param path: Glob patterns selecting documentation files, one per line; `!` excludes.
    :param additional_json: JSON object literal merged into each create and update request.
    :param create: Whether to create documents that don't exist.
    :param overwrite: Whether to update documents that exist.
    :param clear: Whether to delete existing documents before uploading.
    """

    api_key: str
    version: str
    category_slug: str
    title_regex: str
    path: str
    parent_slug: str | None = None
    title_prefix: str | None = None
    additional_json: str = "{}"
    create: bool = True
    overwrite: bool = False
    clear: bool = False

    title_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)
    additional_fields: JsonObject = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name, attr in INPUT_NAMES.items():
            if name in OPTIONAL_INPUTS or name in BOOLEAN_INPUTS:
                continue
            if not getattr(self, attr):
                raise InputMissingError(name)

        # frozen data-class; derived fields are assigned once
        object.__setattr__(self, "parent_slug", self.parent_slug or None)
        object.__setattr__(self, "title_prefix", self.title_prefix or None)
        object.__setattr__(self, "title_pattern", compile_title_regex(self.title_regex))
        object.__setattr__(self, "additional_fields", parse_json_object(self.additional_json))

    @classmethod
    def from_inputs(cls, inputs: Mapping[str, str | None]) -> "SyncRequest":
        """
        Creates a request from a flat record of string values keyed by input name (e.g. `categorySlug`).

        Booleans are passed as the strings `true` or `false`. All inputs are required except `parentSlug` and
        `titlePrefix`.
        """

        kwargs: dict[str, str | bool | None] = {}
        for name, attr in INPUT_NAMES.items():
            value = inputs.get(name)
            if value is None or not value.strip():
                if name in OPTIONAL_INPUTS:
                    kwargs[attr] = None
                    continue
                raise InputMissingError(name)

            if name in BOOLEAN_INPUTS:
                kwargs[attr] = parse_boolean(name, value)
            elif name in ("titleRegex", "titlePrefix", "additionalJson"):
                kwargs[attr] = value
            else:
                kwargs[attr] = value.strip()

        return cls(**kwargs)  # type: ignore[arg-type]
