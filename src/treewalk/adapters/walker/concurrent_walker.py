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

import concurrent.futures
import logging
import os
import stat
import threading
from typing import Callable, List, Optional, Union

from ...cancel import CancelScope
from ...ports.walker import DirectoryWalkerPort, ErrorFn, SkipDir, WalkFn

logger = logging.getLogger(__name__)


class ConcurrentWalker(DirectoryWalkerPort):
    """
    Directory walker that reads and stats directories on a thread pool.

    Each worker lists one directory, lstat's its entries and hands every
    (path, stat) pair to the callback from the worker thread; the callback
    must therefore be safe for concurrent use. The coordinating thread only
    schedules the subdirectories the workers report back. Symlinks are never
    followed.
    """

    def __init__(self, max_workers: Optional[int] = None) -> None:
        self._max_workers = max_workers

    def walk(
        self,
        root: Union[str, os.PathLike],
        fn: WalkFn,
        *,
        on_error: Optional[ErrorFn] = None,
        cancel: Optional[CancelScope] = None,
    ) -> None:
        root = os.fspath(root)
        cancel = cancel or CancelScope()
        aborted = threading.Event()

        def stopped() -> bool:
            return aborted.is_set() or cancel.cancelled

        if stopped():
            logger.debug("walk of %s cancelled before start", root)
            return

        try:
            st = os.lstat(root)
        except OSError as e:
            _fail(root, e, on_error)
            return

        try:
            fn(root, st)
        except SkipDir:
            return
        if not stat.S_ISDIR(st.st_mode):
            return

        with concurrent.futures.ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="treewalk"
        ) as pool:
            pending = {pool.submit(_read_dir, root, fn, on_error, stopped)}
            try:
                while pending:
                    done, pending = concurrent.futures.wait(
                        pending, return_when=concurrent.futures.FIRST_COMPLETED
                    )
                    for future in done:
                        subdirs = future.result()
                        if stopped():
                            continue
                        for d in subdirs:
                            pending.add(
                                pool.submit(_read_dir, d, fn, on_error, stopped)
                            )
            except BaseException:
                aborted.set()
                for future in pending:
                    future.cancel()
                raise

        if cancel.cancelled:
            logger.debug("walk of %s cancelled", root)


def _fail(path: str, err: OSError, on_error: Optional[ErrorFn]) -> None:
    if on_error is None:
        raise err
    result = on_error(path, err)
    if result is not None:
        raise result


def _read_dir(
    dirpath: str,
    fn: WalkFn,
    on_error: Optional[ErrorFn],
    stopped: Callable[[], bool],
) -> List[str]:
    subdirs: List[str] = []
    if stopped():
        return subdirs

    try:
        with os.scandir(dirpath) as it:
            entries = list(it)
    except OSError as e:
        _fail(dirpath, e, on_error)
        return subdirs

    for entry in entries:
        if stopped():
            break
        try:
            st = entry.stat(follow_symlinks=False)
        except OSError as e:
            _fail(entry.path, e, on_error)
            continue

        try:
            fn(entry.path, st)
        except SkipDir:
            continue

        if stat.S_ISDIR(st.st_mode):
            subdirs.append(entry.path)

    return subdirs
