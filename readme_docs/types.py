"""
Common type definitions and protocols.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

from typing import Protocol, runtime_checkable

from .domain import Category, Doc, SlimDoc
from .serializer import JsonObject


@runtime_checkable
class DocumentStore(Protocol):
    """
    Remote operations the synchronizer invokes, bound to a single documentation version.

    Implemented by `ReadmeSession`. Methods are blocking; failures raise `ReadmeError`.
    """

    def get_category(self, slug: str) -> Category: ...

    def get_category_docs(self, slug: str) -> list[SlimDoc]: ...

    def get_doc(self, slug: str) -> Doc: ...

    def doc_exists(self, slug: str) -> bool:
        """
        True if a document exists with the slug, false if not found. Other lookup failures raise.
        """
        ...

    def create_doc(self, payload: JsonObject) -> Doc: ...

    def update_doc(self, slug: str, payload: JsonObject) -> Doc: ...

    def delete_doc(self, slug: str) -> None: ...
