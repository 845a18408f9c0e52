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

from __future__ import annotations

import logging
import os
import tarfile
import threading
from typing import BinaryIO, List, Optional, Union

from ..adapters.files.disk_file import DiskFile
from ..adapters.files.tar_file import TarEntryFile
from ..adapters.walker.concurrent_walker import ConcurrentWalker
from ..cancel import CancelScope
from ..domain.errors import ArchiveError, CheckFailed, SkipSubtree
from ..ports.file import File
from ..ports.walker import DirectoryWalkerPort
from .checkers import Checker, ErrorFilter, Visitor
from .pruning import NativePruner, PrefixPruner, Pruner

logger = logging.getLogger(__name__)


class WalkService:
    """
    Runs one checker / visitor / error-filter policy over directory trees and
    tar archives alike.

    Lifecycle:
      * build: register checkers, visitors and error filters (chainable).
      * execute: call `walk_dir`, `walk_tar_file` or `walk_tar_reader`.

    Registering while a walk is running blocks until that walk returns.

    Per entry:
      * checkers run in registration order until one raises `CheckFailed`
        (skip the entry) or `SkipSubtree` (skip it and its descendants);
        any other checker exception also just skips the entry.
      * visitors run in registration order until one raises; that error goes
        through the error filters, and unless one of them returns None the
        walk stops and the error is raised to the caller.

    Directory walks stat entries on a worker pool but run checkers and
    visitors under one lock, so callbacks need not be thread-safe; the visit
    order is not deterministic. Archive walks visit members in stream order.
    """

    def __init__(
        self,
        cancel_scope: Optional[CancelScope] = None,
        *,
        dir_walker: Optional[DirectoryWalkerPort] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self._scope = (cancel_scope or CancelScope()).child()
        self._dir_walker = dir_walker or ConcurrentWalker(max_workers=max_workers)
        self._lock = threading.Lock()

        self._checkers: List[Checker] = []
        self._visitors: List[Visitor] = []
        self._error_filters: List[ErrorFilter] = []

    # ------------------------------
    # Registration
    # ------------------------------

    def on_visit(self, fn: Optional[Visitor]) -> "WalkService":
        with self._lock:
            if fn is not None:
                self._visitors.append(fn)
        return self

    def check(self, fn: Optional[Checker]) -> "WalkService":
        with self._lock:
            if fn is not None:
                self._checkers.append(fn)
        return self

    def filter_error(self, fn: Optional[ErrorFilter]) -> "WalkService":
        with self._lock:
            if fn is not None:
                self._error_filters.append(fn)
        return self

    def cancel(self) -> None:
        self._scope.cancel()

    @property
    def cancelled(self) -> bool:
        return self._scope.cancelled

    # ------------------------------
    # Walks
    # ------------------------------

    def walk_dir(self, root: Union[str, os.PathLike]) -> int:
        """
        Walk the directory tree under `root` (root included).

        Returns:
            Number of entries that cleared every checker and visitor.
        """
        root = os.fspath(root)
        with self._lock:
            serial = threading.Lock()
            pruner = NativePruner()
            visited = 0

            def visit(pathname: str, st: os.stat_result) -> None:
                nonlocal visited
                f = DiskFile(pathname, st)
                with serial:
                    if self._process(f, pruner):
                        visited += 1

            logger.debug("walking directory %s", root)
            self._dir_walker.walk(
                root, visit, on_error=self._filter_error, cancel=self._scope
            )
            logger.debug("walked directory %s; visited %d entries", root, visited)
            return visited

    def walk_tar_file(self, path: Union[str, os.PathLike]) -> int:
        with open(path, "rb") as fd:
            return self.walk_tar_reader(fd)

    def walk_tar_reader(self, stream: BinaryIO) -> int:
        """
        Walk a tar stream member by member.

        The stream is read strictly forward and is not closed here.

        Returns:
            Number of entries that cleared every checker and visitor.
        """
        name = str(getattr(stream, "name", "<stream>"))
        with self._lock:
            pruner = PrefixPruner()
            visited = 0

            if self._scope.cancelled:
                logger.debug("walk of %s cancelled before start", name)
                return visited

            try:
                archive = tarfile.open(fileobj=stream, mode="r|*")
            except (tarfile.TarError, OSError) as e:
                self._archive_failure(name, e)
                return visited

            with archive:
                while True:
                    if self._scope.cancelled:
                        logger.debug("walk of %s cancelled", name)
                        return visited
                    try:
                        member = archive.next()
                    except (tarfile.TarError, OSError) as e:
                        self._archive_failure(name, e)
                        return visited
                    if member is None:
                        break

                    f = TarEntryFile(archive, member)
                    if self._process(f, pruner):
                        visited += 1

            logger.debug("walked archive %s; visited %d entries", name, visited)
            return visited

    # ------------------------------
    # Pipelines
    # ------------------------------

    def _process(self, f: File, pruner: Pruner) -> bool:
        if pruner.excludes(f.path):
            return False

        try:
            self._run_checkers(f)
        except SkipSubtree:
            pruner.prune(f.path)
            return False
        except CheckFailed:
            return False
        except Exception as e:
            logger.warning("checker failed for %s: %s", f.path, e)
            return False

        try:
            self._run_visitors(f)
        except Exception as e:
            if self._filter_error(f.path, e) is not None:
                raise
            logger.debug("suppressed error for %s: %s", f.path, e)
            return False
        return True

    def _run_checkers(self, f: File) -> None:
        for checker in self._checkers:
            checker(f)

    def _run_visitors(self, f: File) -> None:
        for visitor in self._visitors:
            visitor(f)

    def _filter_error(self, pathname: str, err: BaseException) -> Optional[BaseException]:
        for error_filter in self._error_filters:
            if error_filter(pathname, err) is None:
                return None
        return err

    def _archive_failure(self, name: str, cause: BaseException) -> None:
        err = ArchiveError(f"fail to read the tarball: {cause}")
        err.__cause__ = cause
        if self._filter_error(name, err) is not None:
            raise err
        logger.debug("suppressed archive error for %s: %s", name, cause)
