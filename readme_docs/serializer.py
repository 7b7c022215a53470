"""
Synchronize local documentation files with a ReadMe category.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

from typing import TypeVar

import orjson
from cattrs.preconf.orjson import make_converter  # spellchecker:disable-line

from .environment import ContentError

JsonType = None | bool | int | float | str | dict[str, "JsonType"] | list["JsonType"]
JsonComposite = dict[str, "JsonType"] | list["JsonType"]
JsonObject = dict[str, "JsonType"]

T = TypeVar("T")


_converter = make_converter(forbid_extra_keys=False)


@_converter.register_structure_hook
def json_type_structure_hook(value: JsonType, cls: type[JsonType]) -> JsonType:
    return value


@_converter.register_structure_hook
def json_composite_structure_hook(value: JsonComposite, cls: type[JsonComposite]) -> JsonComposite:
    return value


def json_to_object(typ: type[T], data: JsonType) -> T:
    """
    Converts a raw JSON object to a structured object, validating input data.

    :param typ: Target structured type.
    :param data: Source data as a JSON object.
    :returns: A valid object instance of the expected type.
    """

    return _converter.structure(data, typ)


def object_to_json_payload(data: object) -> bytes:
    """
    Converts a structured object to a JSON string encoded in UTF-8.

    :param data: Object to convert to a JSON string.
    :returns: JSON string encoded in UTF-8.
    """

    return _converter.dumps(data)


def parse_json_object(text: str) -> JsonObject:
    """
    Parses a JSON object literal.

    :param text: JSON text, expected to hold an object (e.g. `{"hidden": false}`).
    :returns: The parsed object.
    """

    try:
        data = orjson.loads(text)
    except orjson.JSONDecodeError as e:
        raise ContentError(f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ContentError(f"expected: JSON object; got: {type(data).__name__}")

    return data
