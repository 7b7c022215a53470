"""
Synchronize local documentation files with a ReadMe category.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import logging
from types import TracebackType
from typing import Any, TypeVar, overload
from urllib.parse import quote, urlparse, urlunparse

import requests

from .domain import Category, Doc, SlimDoc
from .environment import ConnectionProperties, ReadmeError
from .serializer import JsonObject, json_to_object, object_to_json_payload

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def build_url(base_url: str) -> str:
    "Builds a URL with scheme, host, port and path."

    scheme, netloc, path, params, query, fragment = urlparse(base_url)

    if params:
        raise ValueError("expected: url with no parameters")
    if query:
        raise ValueError("expected: url with no query string")
    if fragment:
        raise ValueError("expected: url with no fragment")

    url_parts = (scheme, netloc, path, None, None, None)
    return urlunparse(url_parts)


def raise_for_status(response: requests.Response) -> None:
    "Raises an error carrying the status code and response text if the response signals failure."

    if not response.ok:
        raise ReadmeError(
            f"{response.status_code}: {response.text}",
            status_code=response.status_code,
            text=response.text,
        )


@overload
def response_cast(response_type: None, response: requests.Response) -> None: ...


@overload
def response_cast(response_type: type[T], response: requests.Response) -> T: ...


def response_cast(response_type: type[T] | None, response: requests.Response) -> T | None:
    "Converts a response body into the expected type."

    if response.text:
        LOGGER.debug("Received HTTP payload:\n%s", response.text)
    raise_for_status(response)
    if response_type is None:
        return None
    else:
        return json_to_object(response_type, response.json())


class ReadmeAPI:
    """
    Represents an active connection to the ReadMe API.
    """

    properties: ConnectionProperties
    session: "ReadmeSession | None" = None

    def __init__(self, properties: ConnectionProperties | None = None) -> None:
        self.properties = properties or ConnectionProperties()

    def __enter__(self) -> "ReadmeSession":
        session = requests.Session()

        # API key is sent as given, without further encoding
        session.headers["Authorization"] = f"Basic {self.properties.api_key}"

        if self.properties.headers:
            session.headers.update(self.properties.headers)

        self.session = ReadmeSession(
            session,
            api_url=self.properties.api_url,
            version=self.properties.version,
        )
        return self.session

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None


class ReadmeSession:
    """
    Information about an open session to the ReadMe API.

    A session is bound to a single documentation version, which is sent with each request in the header
    `x-readme-version`. The underlying HTTP session is shared read-only across concurrent calls.
    """

    _session: requests.Session
    _api_url: str

    version: str | None

    def __init__(self, session: requests.Session, *, api_url: str, version: str | None = None) -> None:
        self._session = session
        self._api_url = api_url.rstrip("/")
        self.version = version

    def close(self) -> None:
        self._session.close()
        self._session = requests.Session()

    def _build_url(self, path: str) -> str:
        """
        Builds a full URL for invoking the ReadMe API.

        :param path: Path of API endpoint to invoke.
        :returns: A full URL.
        """

        base_url = f"{self._api_url}{path}"
        return build_url(base_url)

    def _headers(self, headers: dict[str, str] | None = None) -> dict[str, str]:
        result = {"Accept": "application/json"}
        if self.version:
            result["x-readme-version"] = self.version
        if headers:
            result.update(headers)
        return result

    def _get(self, path: str, response_type: type[T]) -> T:
        "Executes an HTTP request via ReadMe API."

        url = self._build_url(path)
        response = self._session.get(url, headers=self._headers(), verify=True)
        return response_cast(response_type, response)

    def _build_request(self, path: str, body: Any) -> tuple[str, dict[str, str], bytes]:
        "Generates URL, headers and raw payload for a typed request/response."

        url = self._build_url(path)
        headers = self._headers({"Content-Type": "application/json"})
        data = object_to_json_payload(body)
        return url, headers, data

    def _post(self, path: str, body: Any, response_type: type[T]) -> T:
        "Creates a new object via ReadMe REST API."

        url, headers, data = self._build_request(path, body)
        response = self._session.post(url, data=data, headers=headers, verify=True)
        return response_cast(response_type, response)

    def _put(self, path: str, body: Any, response_type: type[T]) -> T:
        "Updates an existing object via ReadMe REST API."

        url, headers, data = self._build_request(path, body)
        response = self._session.put(url, data=data, headers=headers, verify=True)
        return response_cast(response_type, response)

    def _delete(self, path: str) -> None:
        "Deletes an existing object via ReadMe REST API."

        url = self._build_url(path)
        response = self._session.delete(url, headers=self._headers(), verify=True)
        response_cast(None, response)

    def get_category(self, slug: str) -> Category:
        """
        Retrieves a category.

        :param slug: Category slug.
        """

        LOGGER.info("Fetching category: %s", slug)
        return self._get(f"/categories/{quote(slug)}", Category)

    def get_category_docs(self, slug: str) -> list[SlimDoc]:
        """
        Retrieves the documents filed under a category.

        :param slug: Category slug.
        :returns: Top-level documents, each holding its nested documents.
        """

        LOGGER.info("Fetching documents in category: %s", slug)
        return self._get(f"/categories/{quote(slug)}/docs", list[SlimDoc])

    def get_doc(self, slug: str) -> Doc:
        """
        Retrieves a document.

        :param slug: Document slug.
        """

        LOGGER.debug("Fetching document: %s", slug)
        return self._get(f"/docs/{quote(slug)}", Doc)

    def create_doc(self, payload: JsonObject) -> Doc:
        """
        Creates a new document.

        :param payload: Document fields; `title` and `category` are required by ReadMe.
        """

        LOGGER.info("Creating document: %s", payload.get("slug") or payload.get("title"))
        return self._post("/docs", payload, Doc)

    def update_doc(self, slug: str, payload: JsonObject) -> Doc:
        """
        Updates an existing document.

        :param slug: Slug of the document to update.
        :param payload: Document fields to overwrite.
        """

        LOGGER.info("Updating document: %s", slug)
        return self._put(f"/docs/{quote(slug)}", payload, Doc)

    def delete_doc(self, slug: str) -> None:
        """
        Deletes a document.

        :param slug: Slug of the document to delete.
        """

        LOGGER.info("Deleting document: %s", slug)
        self._delete(f"/docs/{quote(slug)}")

    def doc_exists(self, slug: str) -> bool:
        """
        Checks if a document exists with the given slug.

        ReadMe does not reject creating a document with a slug that is already taken; it assigns a new slug
        instead. Probing beforehand lets callers update the existing document.

        :returns: True if a document is found; False if ReadMe responds with HTTP status 404.
        """

        try:
            self.get_doc(slug)
        except ReadmeError as e:
            if e.status_code != 404:
                raise
            LOGGER.debug("Document not found: %s", slug)
            return False
        else:
            return True
