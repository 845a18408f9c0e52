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
import stat
from datetime import datetime
from pathlib import Path
from typing import Optional

from ...domain.errors import ContentReadError
from ...domain.models import FileInfo, FileKind, Timestat, ns_to_datetime
from ...ports.file import File
from ..platform.timestat import extract_timestat


class DiskFile(File):
    """
    An entry on a live filesystem.

    Metadata comes from the lstat result captured at discovery; it is never
    refreshed. When no stat result is given, the path is lstat'ed once here
    and any OSError propagates to the caller.
    """

    def __init__(self, path: str, stat_result: Optional[os.stat_result] = None) -> None:
        super().__init__(os.fspath(path))
        if stat_result is None:
            stat_result = os.lstat(self.path)
        self._stat = stat_result
        self._info: Optional[FileInfo] = None
        self._timestat: Optional[Timestat] = None

    @property
    def stat_result(self) -> os.stat_result:
        return self._stat

    def info(self) -> FileInfo:
        if self._info is None:
            st = self._stat
            self._info = FileInfo(
                name=os.path.basename(self.path.rstrip(os.sep)) or self.path,
                kind=FileKind.from_mode(st.st_mode),
                size=st.st_size,
                mode=stat.S_IMODE(st.st_mode),
                mtime_ns=self._times().mtime_ns,
            )
        return self._info

    def _times(self) -> Timestat:
        if self._timestat is None:
            self._timestat = extract_timestat(self._stat)
        return self._timestat

    def _read_content(self) -> bytes:
        try:
            return Path(self.path).read_bytes()
        except OSError as e:
            raise ContentReadError(f"unable to read file {self.path}: {e}") from e

    def mod_time(self) -> datetime:
        return ns_to_datetime(self._times().mtime_ns)

    def change_time(self) -> datetime:
        return ns_to_datetime(self._times().ctime_ns)

    def access_time(self) -> datetime:
        return ns_to_datetime(self._times().atime_ns)
