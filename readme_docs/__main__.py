"""
Synchronize local documentation files with a ReadMe category.

Optionally clears the documents of a category (or of a parent document), then creates or updates a document for
each file that matches a glob pattern, deriving titles with a regular expression and slugs from file names.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import argparse
import asyncio
import json
import logging
import os
import os.path
import sys
import typing
from io import StringIO
from pathlib import Path
from typing import Any, Mapping, Sequence

from . import __version__
from .environment import ArgumentError, ConnectionProperties, ContentError
from .options import INPUT_NAMES, SyncRequest

LOGGER = logging.getLogger(__name__)

# values assumed for inputs that are not supplied from any source
DEFAULT_INPUTS: dict[str, str] = {
    "additionalJson": "{}",
    "create": "true",
    "overwrite": "false",
    "clear": "false",
}


class Arguments(argparse.Namespace):
    input_file: Path | None
    api_key: str | None
    version: str | None
    category_slug: str | None
    parent_slug: str | None
    title_regex: str | None
    title_prefix: str | None
    path: str | None
    additional_json: str | None
    create: str | None
    overwrite: str | None
    clear: str | None
    api_url: str | None
    headers: dict[str, str] | None
    max_parallel: int
    loglevel: str


class KwargsAppendAction(argparse.Action):
    """Append key-value pairs to a dictionary."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: None | str | Sequence[Any],
        option_string: str | None = None,
    ) -> None:
        try:
            d = dict(map(lambda x: x.split("=", 1), typing.cast(Sequence[str], values)))
        except ValueError:
            raise argparse.ArgumentError(
                self,
                f'Could not parse argument "{values}". It should follow the format: k1=v1 k2=v2 ...',
            ) from None
        setattr(namespace, self.dest, d)


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser()
    parser.prog = os.path.basename(os.path.dirname(__file__)).replace("_", "-")
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "-i",
        "--input-file",
        dest="input_file",
        type=Path,
        help="JSON file with an object of inputs keyed by input name (e.g. `categorySlug`). Command-line options take precedence.",
    )
    parser.add_argument("-a", "--api-key", dest="api_key", help="ReadMe API key.")
    parser.add_argument("-v", "--doc-version", dest="version", help="Documentation version to operate on, e.g. `1.0`.")
    parser.add_argument("-c", "--category", dest="category_slug", help="Slug of the category to clear and to file documents under.")
    parser.add_argument(
        "--parent",
        dest="parent_slug",
        help="Slug of a document in the category. When clearing, only the children of this document are removed.",
    )
    parser.add_argument(
        "-t",
        "--title-regex",
        dest="title_regex",
        help="Regular expression applied to file content; the first capture group is the document title.",
    )
    parser.add_argument("--title-prefix", dest="title_prefix", help="Text to prepend to each document title.")
    parser.add_argument(
        "-p",
        "--path",
        help="Glob pattern selecting documentation files, e.g. `docs/**/*.md`. Separate multiple patterns with newlines; a pattern starting with `!` excludes files.",
    )
    parser.add_argument(
        "--additional-json",
        dest="additional_json",
        help="JSON object merged into each create and update request (default: '{}').",
    )
    for name, description, default in (
        ("create", "Create documents that don't exist.", "true"),
        ("overwrite", "Update documents that exist.", "false"),
        ("clear", "Delete existing documents before uploading.", "false"),
    ):
        parser.add_argument(
            f"--{name}",
            dest=name,
            metavar="{true,false}",
            help=f"{description} (default: '{default}').",
        )
    parser.add_argument(
        "--api-url",
        dest="api_url",
        help="ReadMe API URL (default: 'https://dash.readme.com/api/v1').",
    )
    parser.add_argument(
        "--headers",
        nargs="+",
        required=False,
        action=KwargsAppendAction,
        metavar="KEY=VALUE",
        help="Apply custom headers to all ReadMe API requests.",
    )
    parser.add_argument(
        "--max-parallel",
        dest="max_parallel",
        type=int,
        default=8,
        help="Maximum number of concurrent ReadMe API requests (default: 8).",
    )
    parser.add_argument(
        "-l",
        "--loglevel",
        choices=[
            logging.getLevelName(level).lower()
            for level in (
                logging.DEBUG,
                logging.INFO,
                logging.WARN,
                logging.ERROR,
                logging.CRITICAL,
            )
        ],
        default=logging.getLevelName(logging.INFO),
        help="Use this option to set the log verbosity.",
    )
    return parser


def get_help() -> str:
    parser = get_parser()
    with StringIO() as buf:
        parser.print_help(file=buf)
        return buf.getvalue()


def action_inputs(environ: Mapping[str, str]) -> dict[str, str]:
    """
    Reads GitHub Action inputs, passed in environment variables such as `INPUT_CATEGORYSLUG`.
    """

    inputs: dict[str, str] = {}
    for name in INPUT_NAMES:
        value = environ.get(f"INPUT_{name.upper()}")
        if value:
            inputs[name] = value
    return inputs


def file_inputs(path: Path) -> dict[str, str]:
    """
    Reads inputs from a JSON file holding an object keyed by input name.

    Booleans may be given as JSON `true`/`false` or as strings.
    """

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ArgumentError(f"invalid JSON in input file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ArgumentError(f"expected: JSON object in input file {path}")

    inputs: dict[str, str] = {}
    for name, value in data.items():
        if name not in INPUT_NAMES:
            LOGGER.warning("Ignoring unrecognized input in %s: %s", path, name)
            continue
        if value is None:
            continue
        if isinstance(value, bool):
            inputs[name] = "true" if value else "false"
        elif isinstance(value, str):
            inputs[name] = value
        elif name == "additionalJson":
            inputs[name] = json.dumps(value)
        else:
            raise ArgumentError(f"expected: string value for input {name} in input file {path}")
    return inputs


def collect_inputs(args: Arguments, environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """
    Merges inputs from all sources.

    Command-line options take precedence over the input file, which takes precedence over GitHub Action inputs.
    """

    inputs = dict(DEFAULT_INPUTS)
    inputs.update(action_inputs(environ if environ is not None else os.environ))
    if args.input_file is not None:
        inputs.update(file_inputs(args.input_file))
    for name, attr in INPUT_NAMES.items():
        value = getattr(args, attr, None)
        if value is not None:
            inputs[name] = value
    return inputs


def report_failure(message: str) -> None:
    "Logs an error, and emits a workflow command when running as a GitHub Action."

    LOGGER.error(message)
    if os.getenv("GITHUB_ACTIONS") == "true":
        # newlines would terminate the workflow command
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        print(f"::error::{escaped}", flush=True)


def main() -> None:
    parser = get_parser()
    args = Arguments()
    parser.parse_args(namespace=args)

    logging.basicConfig(
        level=getattr(logging, args.loglevel.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
    )

    try:
        request = SyncRequest.from_inputs(collect_inputs(args))
        properties = ConnectionProperties(
            api_url=args.api_url,
            api_key=request.api_key,
            version=request.version,
            headers=args.headers,
        )
    except (ArgumentError, ContentError, OSError) as e:
        report_failure(str(e))
        parser.error(str(e))

    if args.max_parallel < 1:
        parser.error("--max-parallel must be a positive integer")

    from requests import RequestException

    from .api import ReadmeAPI
    from .environment import ReadmeError
    from .synchronizer import Synchronizer

    try:
        with ReadmeAPI(properties) as api:
            outcome = asyncio.run(Synchronizer(api, request, max_parallel=args.max_parallel).synchronize())
    except ReadmeError as err:
        report_failure(str(err))
        sys.exit(1)
    except (ContentError, RequestException, OSError) as err:
        report_failure(f"Failed with error: {err}")
        sys.exit(1)

    LOGGER.info(
        "Complete. Deleted: %d, created: %d, updated: %d, skipped: %d",
        outcome.deleted,
        outcome.created,
        outcome.updated,
        outcome.skipped,
    )


if __name__ == "__main__":
    main()
