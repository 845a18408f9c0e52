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

import enum
import stat
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


class FileKind(enum.Enum):
    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"

    @classmethod
    def from_mode(cls, mode: int) -> "FileKind":
        if stat.S_ISREG(mode):
            return cls.REGULAR
        if stat.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat.S_ISLNK(mode):
            return cls.SYMLINK
        return cls.OTHER


@dataclass(frozen=True)
class FileInfo:
    """
    Metadata every entry carries, whatever its origin.

    `mode` holds the permission bits only; the entry type lives in `kind`.
    """

    name: str
    kind: FileKind
    size: int
    mode: int
    mtime_ns: int

    def is_regular(self) -> bool:
        return self.kind is FileKind.REGULAR

    def is_dir(self) -> bool:
        return self.kind is FileKind.DIRECTORY


@dataclass(frozen=True)
class Timestat:
    """Modification, change and access instants in nanoseconds since the epoch."""

    mtime_ns: int
    ctime_ns: int
    atime_ns: int


def ns_to_datetime(ns: Optional[int]) -> Optional[datetime]:
    if ns is None:
        return None
    seconds, rest = divmod(int(ns), 1_000_000_000)
    return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(
        microsecond=rest // 1000
    )
