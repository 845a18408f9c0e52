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
Subtree pruning strategies, one per traversal backend.

A live directory walk can simply be told not to descend. A tar stream has
already been flattened, so its strategy remembers the pruned directories and
drops every later member that lives below one of them.
"""

from __future__ import annotations

import logging
from typing import List

from ..ports.walker import SkipDir

logger = logging.getLogger(__name__)


class Pruner:
    def excludes(self, path: str) -> bool:
        """True if `path` sits below a subtree pruned earlier in this walk."""
        return False

    def prune(self, path: str) -> None:
        raise NotImplementedError


class NativePruner(Pruner):
    """Hands pruning to the directory walker through its `SkipDir` signal."""

    def prune(self, path: str) -> None:
        logger.debug("pruning subtree %s", path)
        raise SkipDir(path)


class PrefixPruner(Pruner):
    """Remembers pruned archive directories as path prefixes."""

    def __init__(self) -> None:
        self._prefixes: List[str] = []

    @property
    def prefixes(self) -> List[str]:
        return list(self._prefixes)

    def excludes(self, path: str) -> bool:
        # A repeated member for the pruned directory itself is dropped too.
        candidate = path.rstrip("/") + "/"
        return any(candidate.startswith(prefix) for prefix in self._prefixes)

    def prune(self, path: str) -> None:
        # Member names of directories may or may not end with "/"; match on a
        # whole path component so "a/skip" never prunes "a/skipped".
        prefix = path.rstrip("/") + "/"
        logger.debug("pruning archive prefix %s", prefix)
        self._prefixes.append(prefix)
