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
Platform-specific timestamp extraction.

`extract_timestat` is the only place that knows which `os.stat_result`
fields carry which instant on the running platform.
"""

import os
import sys
from typing import Callable

from ...domain.models import Timestat


def _ns(st: os.stat_result, field: str) -> int:
    value = getattr(st, f"{field}_ns", None)
    if value is None:
        value = int(getattr(st, field) * 1e9)
    return int(value)


def _extract_posix(st: os.stat_result) -> Timestat:
    # Linux (st_mtim/st_ctim/st_atim) and Darwin (st_*timespec) both surface
    # through the same *_ns fields; ctime is the inode change time.
    return Timestat(
        mtime_ns=_ns(st, "st_mtime"),
        ctime_ns=_ns(st, "st_ctime"),
        atime_ns=_ns(st, "st_atime"),
    )


def _extract_windows(st: os.stat_result) -> Timestat:
    # NTFS has no inode change time; report the creation time instead.
    # Python 3.12 moved it to st_birthtime and deprecated st_ctime for it.
    if getattr(st, "st_birthtime_ns", None) is not None:
        ctime_ns = int(st.st_birthtime_ns)
    else:
        ctime_ns = _ns(st, "st_ctime")
    return Timestat(
        mtime_ns=_ns(st, "st_mtime"),
        ctime_ns=ctime_ns,
        atime_ns=_ns(st, "st_atime"),
    )


def _select() -> Callable[[os.stat_result], Timestat]:
    if sys.platform == "win32":
        return _extract_windows
    return _extract_posix


extract_timestat: Callable[[os.stat_result], Timestat] = _select()
