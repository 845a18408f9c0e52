# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Ready-made checkers and error filters.

A checker returns to let an entry through, raises `CheckFailed` to skip the
entry, or raises `SkipSubtree` to skip the entry and everything below it.
An error filter returns None to suppress an error or an exception to let it
propagate.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..domain.errors import CheckFailed, SkipSubtree
from ..ports.file import File

Checker = Callable[[File], None]
Visitor = Callable[[File], None]
ErrorFilter = Callable[[str, BaseException], Optional[BaseException]]


def _has_any(has: Callable[[str, str], bool], *subs: str) -> Checker:
    def check(f: File) -> None:
        if not subs:
            return
        for sub in subs:
            if has(f.path, sub):
                return
        raise CheckFailed(f.path)

    return check


def _has_all(has: Callable[[str, str], bool], *subs: str) -> Checker:
    def check(f: File) -> None:
        for sub in subs:
            if not has(f.path, sub):
                raise CheckFailed(f.path)

    return check


def has_prefix(prefix: str) -> Checker:
    return has_any_prefix(prefix)


def has_any_prefix(*prefixes: str) -> Checker:
    return _has_any(str.startswith, *prefixes)


def has_all_prefix(*prefixes: str) -> Checker:
    return _has_all(str.startswith, *prefixes)


def has_suffix(suffix: str) -> Checker:
    return has_any_suffix(suffix)


def has_any_suffix(*suffixes: str) -> Checker:
    return _has_any(str.endswith, *suffixes)


def has_all_suffix(*suffixes: str) -> Checker:
    return _has_all(str.endswith, *suffixes)


def is_regular() -> Checker:
    """Let only regular files through (no directories, symlinks or devices)."""

    def check(f: File) -> None:
        if not f.info().is_regular():
            raise CheckFailed(f.path)

    return check


def skip_named_subtree(name: str) -> Checker:
    """
    Prune every directory whose base name is `name`.

    Non-directories with that name are left alone.
    """

    def check(f: File) -> None:
        info = f.info()
        if info.is_dir() and info.name == name:
            raise SkipSubtree(f.path)

    return check


def skip_permission_error(pathname: str, err: BaseException) -> Optional[BaseException]:
    """
    Suppress permission-denied failures, including ones wrapped by a content
    read (`ContentReadError` chained from a `PermissionError`).
    """
    cause: Optional[BaseException] = err
    while cause is not None:
        if isinstance(cause, PermissionError):
            return None
        cause = cause.__cause__
    return err
