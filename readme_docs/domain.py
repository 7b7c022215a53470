"""
Synchronize local documentation files with a ReadMe category.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

from dataclasses import dataclass, field

from .serializer import JsonType


@dataclass(frozen=True)
class SlimDoc:
    """
    Lightweight descriptor of a document in a category tree.

    :param _id: Unique ID for the document.
    :param title: Document title.
    :param slug: URL-safe identifier of the document, unique in a version.
    :param order: Position of the document among its siblings.
    :param hidden: True if the document is not shown in navigation.
    :param children: Documents nested under this document.
    """

    _id: str
    title: str
    slug: str
    order: int = 0
    hidden: bool = False
    children: "list[SlimDoc]" = field(default_factory=list)

    @property
    def id(self) -> str:
        return self._id


def nested_levels(docs: list[SlimDoc]) -> list[list[SlimDoc]]:
    """
    Groups the documents nested under the given documents by depth.

    Documents nest one level deep on ReadMe. Deeper levels, if returned, each form a group of their own.

    :param docs: Documents whose descendants to collect.
    :returns: Direct children first, then grandchildren, and so on.
    """

    levels: list[list[SlimDoc]] = []
    level = [child for doc in docs for child in doc.children]
    while level:
        levels.append(level)
        level = [child for doc in level for child in doc.children]
    return levels


@dataclass(frozen=True)
class Category:
    """
    Holds data about a ReadMe category.

    :param _id: Unique ID for the category, assigned to new documents filed under the category.
    :param slug: URL-safe identifier of the category.
    :param title: Category title.
    :param order: Position of the category.
    :param reference: True if the category belongs to the API reference section.
    :param isAPI: True if the category has been generated from an API definition.
    :param project: ID of the project the category belongs to.
    :param version: ID of the version the category belongs to.
    """

    _id: str
    slug: str
    title: str
    order: int = 0
    reference: bool = False
    isAPI: bool = False
    project: str | None = None
    version: str | None = None

    @property
    def id(self) -> str:
        return self._id


@dataclass(frozen=True)
class Doc:
    """
    Holds the full representation of a ReadMe document.

    Fields other than those listed are owned by the platform and ignored.
    """

    _id: str
    title: str
    slug: str
    body: str | None = None
    category: str | None = None
    parentDoc: str | None = None
    type: str | None = None
    excerpt: str | None = None
    hidden: bool = False
    order: int = 0
    metadata: JsonType = None

    @property
    def id(self) -> str:
        return self._id
