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

import posixpath
import tarfile
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from ...domain.errors import ConstructionError, ContentReadError
from ...domain.models import FileInfo, FileKind, ns_to_datetime
from ...ports.file import File


def _seconds_to_ns(value) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(Decimal(str(value)) * 1_000_000_000)
    except (InvalidOperation, ValueError):
        return None


def _kind(member: tarfile.TarInfo) -> FileKind:
    if member.isreg():
        return FileKind.REGULAR
    if member.isdir():
        return FileKind.DIRECTORY
    if member.issym():
        return FileKind.SYMLINK
    return FileKind.OTHER


class TarEntryFile(File):
    """
    An entry read from a tar stream.

    The archive is opened in streaming mode, so content can only be drained
    while the stream still sits on this member: call `content()` before the
    walk moves on. Only regular members have content; every other kind reads
    as empty.
    """

    def __init__(self, archive: tarfile.TarFile, member: tarfile.TarInfo) -> None:
        if archive is None or member is None:
            raise ConstructionError("tar reader or header is nil")
        super().__init__(member.name)
        self._archive = archive
        self._member = member
        self._info: Optional[FileInfo] = None

    @property
    def member(self) -> tarfile.TarInfo:
        return self._member

    def info(self) -> FileInfo:
        if self._info is None:
            m = self._member
            self._info = FileInfo(
                name=posixpath.basename(m.name.rstrip("/")),
                kind=_kind(m),
                size=m.size,
                mode=m.mode & 0o7777,
                mtime_ns=_seconds_to_ns(m.mtime) or 0,
            )
        return self._info

    def _read_content(self) -> bytes:
        if not self._member.isreg():
            return b""
        try:
            fobj = self._archive.extractfile(self._member)
            if fobj is None:
                return b""
            return fobj.read()
        except (tarfile.TarError, OSError) as e:
            raise ContentReadError(
                f"unable to read tar member {self.path}: {e}"
            ) from e

    def mod_time(self) -> datetime:
        return ns_to_datetime(self.info().mtime_ns)

    def change_time(self) -> Optional[datetime]:
        return ns_to_datetime(_seconds_to_ns(self._member.pax_headers.get("ctime")))

    def access_time(self) -> Optional[datetime]:
        return ns_to_datetime(_seconds_to_ns(self._member.pax_headers.get("atime")))
