"""
Synchronize local documentation files with a ReadMe category.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

from itertools import pairwise
from typing import Iterable

from semver import Version


def as_version(version: Version | str) -> Version:
    "Parses a semantic version string; a leading `v` is permitted (e.g. `v1.2.0`)."

    if isinstance(version, Version):
        return version
    return Version.parse(version.strip().removeprefix("v"))


def resolve_base(target: Version | str, existing: Iterable[Version | str]) -> Version:
    """
    Determines the version a new documentation version should be forked from.

    Returns the greatest existing version that does not exceed the target. If every existing version exceeds the
    target, the greatest existing version is returned. If there are no existing versions, the target is its own
    base.

    :param target: Version to be created.
    :param existing: Versions that already exist, in any order.
    :returns: The base version.
    """

    target_version = as_version(target)

    ordered = sorted(as_version(v) for v in existing)
    if not ordered:
        return target_version

    for current, following in pairwise(ordered):
        if current <= target_version < following:
            return current

    # the target is at least the greatest version, or below every version
    return ordered[-1]
