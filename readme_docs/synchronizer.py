"""
Synchronize local documentation files with a ReadMe category.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import glob
import logging
import os.path
from dataclasses import dataclass, field
from pathlib import Path

import requests

from .concurrency import DEFAULT_MAX_PARALLEL, Limiter, gather_all
from .document import build_payload, extract_title, slug_from_path
from .domain import SlimDoc, nested_levels
from .environment import ParentNotFoundError, ReadmeError
from .options import SyncRequest
from .serializer import JsonObject
from .types import DocumentStore

LOGGER = logging.getLogger(__name__)


@dataclass
class SyncOutcome:
    """
    Summary of a synchronization run.

    :param deleted: Number of documents removed when clearing.
    :param created: Number of documents created.
    :param updated: Number of documents updated.
    :param skipped: Number of files neither created nor updated.
    :param files: Documentation files found, in lexical order.
    """

    deleted: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0
    files: list[Path] = field(default_factory=list)


class Synchronizer:
    """
    Synchronizes documentation files matching a glob pattern with documents in a ReadMe category.

    A run clears the category (if requested), finds files, resolves the category, and creates or updates a
    document for each file. Each step completes before the next one begins. Remote calls within a step run
    concurrently, and the first failure aborts the run once all calls in the step have finished.
    """

    api: DocumentStore
    request: SyncRequest
    logger: logging.Logger | logging.LoggerAdapter
    root_dir: Path | None

    _limiter: Limiter

    def __init__(
        self,
        api: DocumentStore,
        request: SyncRequest,
        *,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        max_parallel: int = DEFAULT_MAX_PARALLEL,
        root_dir: Path | None = None,
    ) -> None:
        """
        Initializes a new synchronizer.

        :param api: Remote document store bound to the request version.
        :param request: Configuration of the run.
        :param logger: Receives progress and diagnostic messages.
        :param max_parallel: Maximum number of remote calls and file reads in flight.
        :param root_dir: Directory the glob pattern is relative to (default: current working directory).
        """

        self.api = api
        self.request = request
        self.logger = logger or LOGGER
        self.root_dir = root_dir
        self._limiter = Limiter(max_parallel)

    async def synchronize(self) -> SyncOutcome:
        "Executes a synchronization run."

        request = self.request
        outcome = SyncOutcome()

        parent_id: str | None = None
        if request.clear:
            parent_id = await self._clear(outcome)
        else:
            self.logger.info(
                "Skipping clear (clear input was '%s' categorySlug was '%s' parentSlug was '%s')",
                request.clear,
                request.category_slug,
                request.parent_slug,
            )

        files = await self._limiter.run(self.discover)
        outcome.files = files
        if not files:
            self.logger.warning("No files found to upload. Searched with glob '%s'.", request.path)
            return outcome

        self.logger.info("Attempting to get info for category '%s'...", request.category_slug)
        category = await self._limiter.run(self.api.get_category, request.category_slug)

        self.logger.info("Attempting to upload %d docs...", len(files))
        await gather_all(self._synchronize_file(path, category.id, parent_id, outcome) for path in files)

        self.logger.info("Upload complete")
        return outcome

    async def _clear(self, outcome: SyncOutcome) -> str | None:
        """
        Deletes existing documents in the category, or the children of the parent document.

        :returns: ID of the parent document (if any).
        """

        request = self.request
        self.logger.info("Attempting category '%s' enumeration...", request.category_slug)

        docs = await self._limiter.run(self.api.get_category_docs, request.category_slug)
        levels = nested_levels(docs)
        self.logger.info("Found %d category docs with %d children.", len(docs), sum(len(level) for level in levels))

        if request.parent_slug is not None:
            parent_doc = next((doc for doc in docs if doc.slug == request.parent_slug), None)
            if parent_doc is None:
                raise ParentNotFoundError(request.parent_slug, request.category_slug)

            levels = nested_levels([parent_doc])
            self.logger.info(
                "Limiting to %s with %d children. Attempting to remove children...",
                request.parent_slug,
                sum(len(level) for level in levels),
            )

            await self._delete_levels(levels, outcome)
            self.logger.info("Parent doc '%s' cleared", request.parent_slug)
            return parent_doc.id

        self.logger.info("Attempting '%s' clear...", request.category_slug)

        await self._delete_levels(levels, outcome)
        self.logger.info("Children destroyed")
        await self._delete_all(docs, outcome)
        self.logger.info("Parents destroyed")

        self.logger.info("Category '%s' cleared", request.category_slug)
        return None

    async def _delete_levels(self, levels: list[list[SlimDoc]], outcome: SyncOutcome) -> None:
        # a document goes only after every document nested under it is gone
        for level in reversed(levels):
            await self._delete_all(level, outcome)

    async def _delete_all(self, docs: list[SlimDoc], outcome: SyncOutcome) -> None:
        await gather_all(self._limiter.run(self.api.delete_doc, doc.slug) for doc in docs)
        outcome.deleted += len(docs)

    def discover(self) -> list[Path]:
        """
        Finds documentation files that match the glob pattern of the request.

        The path may hold several patterns, one per line. A pattern that starts with `!` removes files matched by
        earlier patterns, and lines that start with `#` are ignored. Patterns may use `**` to match any number of
        nested directories. Directories are excluded.

        :returns: File paths in lexical order.
        """

        paths: set[Path] = set()
        for line in self.request.path.splitlines():
            pattern = line.strip()
            if not pattern or pattern.startswith("#"):
                continue

            if pattern.startswith("!"):
                paths.difference_update(self._expand(pattern[1:].lstrip()))
            else:
                paths.update(self._expand(pattern))

        return sorted(path for path in paths if os.path.isfile(path))

    def _expand(self, pattern: str) -> list[Path]:
        root_dir = str(self.root_dir) if self.root_dir is not None else None
        matches = glob.glob(pattern, root_dir=root_dir, recursive=True)

        if self.root_dir is not None:
            return [self.root_dir / match for match in matches]
        else:
            return [Path(match) for match in matches]

    async def _synchronize_file(self, path: Path, category_id: str, parent_id: str | None, outcome: SyncOutcome) -> None:
        "Creates or updates the document that corresponds to a documentation file."

        request = self.request

        content = await self._limiter.run(path.read_text, encoding="utf-8")
        title = extract_title(content, request.title_pattern, path, request.title_prefix)
        slug = slug_from_path(path)
        payload = build_payload(
            request.additional_fields,
            title=title,
            slug=slug,
            category_id=category_id,
            body=content,
            parent_id=parent_id,
        )

        if not request.create and not request.overwrite:
            self.logger.warning(
                "No documentation creation occurring for '%s' - neither create '%s' nor overwrite '%s' are true",
                path,
                request.create,
                request.overwrite,
            )
            outcome.skipped += 1
            return

        if request.create and request.overwrite:
            # creating a document with a taken slug does not fail on ReadMe
            if await self._limiter.run(self.api.doc_exists, slug):
                self.logger.info("Found slug '%s', skipping creation...", slug)
                await self._update(path, slug, payload, outcome)
                return

            self.logger.info("Did not find '%s', proceeding with creation...", slug)

        if not request.create:
            await self._update(path, slug, payload, outcome)
            return

        try:
            self.logger.info("Attempting to create '%s' as a document...", path)
            await self._limiter.run(self.api.create_doc, payload)
        except (ReadmeError, requests.RequestException) as e:
            if not request.overwrite:
                raise

            self.logger.warning("Creating doc failed: %s", e)
            await self._update(path, slug, payload, outcome)
        else:
            outcome.created += 1

    async def _update(self, path: Path, slug: str, payload: JsonObject, outcome: SyncOutcome) -> None:
        self.logger.info("Attempting to update '%s' document...", path)
        await self._limiter.run(self.api.update_doc, slug, payload)
        outcome.updated += 1
