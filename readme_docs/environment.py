"""
Synchronize local documentation files with a ReadMe category.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import os
from pathlib import Path

DEFAULT_API_URL = "https://dash.readme.com/api/v1"


class ArgumentError(ValueError):
    "Raised when wrong arguments are passed to a function call."


class InputMissingError(ArgumentError):
    "Raised when a required input is missing or empty."

    input_name: str

    def __init__(self, input_name: str) -> None:
        super().__init__(f"missing required input: {input_name}")
        self.input_name = input_name


class ContentError(ValueError):
    "Raised in case there is an issue with the content of a documentation file."


class TitleNotFoundError(ContentError):
    "Raised when the title expression does not match the content of a documentation file."

    path: Path
    pattern: str

    def __init__(self, path: Path, pattern: str) -> None:
        super().__init__(f"unable to find title for file '{path}' using regex '{pattern}'")
        self.path = path
        self.pattern = pattern


class ReadmeError(RuntimeError):
    """
    Raised when a ReadMe API call fails.

    :param status_code: HTTP status code of the failed response (if any).
    :param text: Body of the failed response.
    """

    status_code: int | None
    text: str

    def __init__(self, message: str, *, status_code: int | None = None, text: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.text = text


class ParentNotFoundError(ReadmeError):
    "Raised when a parent document cannot be found in a category."

    def __init__(self, parent_slug: str, category_slug: str) -> None:
        super().__init__(f"unable to find parent doc {parent_slug} under category {category_slug}")


def _validate_api_url(api_url: str) -> str:
    if not api_url.startswith(("http://", "https://")):
        raise ArgumentError("ReadMe API URL must start with 'http://' or 'https://'")

    return api_url.rstrip("/")


class ConnectionProperties:
    """
    Properties related to connecting to ReadMe.

    :param api_url: ReadMe API URL, e.g. `https://dash.readme.com/api/v1`.
    :param api_key: ReadMe API key.
    :param version: Documentation version to operate on, sent with each request.
    :param headers: Additional HTTP headers to pass to ReadMe REST API calls.
    """

    api_url: str
    api_key: str
    version: str | None
    headers: dict[str, str] | None

    def __init__(
        self,
        *,
        api_url: str | None = None,
        api_key: str | None = None,
        version: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        opt_api_url = api_url or os.getenv("README_API_URL")
        opt_api_key = api_key or os.getenv("README_API_KEY")
        opt_version = version or os.getenv("README_VERSION")

        if not opt_api_key:
            raise ArgumentError("ReadMe API key not specified")
        if not opt_api_url:
            opt_api_url = DEFAULT_API_URL

        self.api_url = _validate_api_url(opt_api_url)
        self.api_key = opt_api_key
        self.version = opt_version or None
        self.headers = headers
