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

import os
from abc import ABC, abstractmethod
from typing import Callable, Optional, Union

from ..cancel import CancelScope

WalkFn = Callable[[str, os.stat_result], None]
ErrorFn = Callable[[str, OSError], Optional[BaseException]]


class SkipDir(Exception):
    """Raised by a walk callback to stop the walker descending into a directory."""


class DirectoryWalkerPort(ABC):
    """Abstract interface for a concurrent, stat-capable directory walk."""

    @abstractmethod
    def walk(
        self,
        root: Union[str, os.PathLike],
        fn: WalkFn,
        *,
        on_error: Optional[ErrorFn] = None,
        cancel: Optional[CancelScope] = None,
    ) -> None:
        """
        Call `fn(path, lstat_result)` once for `root` and every entry below it.

        `fn` may be called from several threads at once. Raising `SkipDir`
        from `fn` prunes that directory; any other exception aborts the walk
        and is re-raised here. Stat/readdir failures go to `on_error`, which
        returns None to carry on or an exception to abort with.
        """
        raise NotImplementedError
