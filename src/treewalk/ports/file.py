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

import threading
from abc import ABC, abstractmethod
from datetime import datetime
from io import BytesIO
from typing import Optional, Union

from ..domain.errors import ContentReadError
from ..domain.models import FileInfo
from .hasher import HasherPort


class File(ABC):
    """
    Uniform view of one traversed entry, on disk or inside an archive.

    Content is fetched lazily and at most once: the first `content()` call
    performs the read, every later call (from any thread) gets the same bytes
    or the same `ContentReadError`. `hash()` goes through `content()` too, so
    several visitors can inspect one entry without reading it twice.
    """

    def __init__(self, path: str) -> None:
        self._path = path
        self._content_lock = threading.Lock()
        self._content_done = False
        self._content: Optional[bytes] = None
        self._content_error: Optional[ContentReadError] = None

    @property
    def path(self) -> str:
        return self._path

    @abstractmethod
    def info(self) -> FileInfo:
        """Return the metadata captured when the entry was discovered."""
        raise NotImplementedError

    @abstractmethod
    def _read_content(self) -> bytes:
        """Read the full content from the underlying source."""
        raise NotImplementedError

    @abstractmethod
    def mod_time(self) -> datetime:
        raise NotImplementedError

    @abstractmethod
    def change_time(self) -> Optional[datetime]:
        raise NotImplementedError

    @abstractmethod
    def access_time(self) -> Optional[datetime]:
        raise NotImplementedError

    def content(self) -> bytes:
        with self._content_lock:
            if not self._content_done:
                try:
                    self._content = self._read_content()
                except ContentReadError as e:
                    self._content_error = e
                except Exception as e:
                    self._content_error = ContentReadError(
                        f"unable to read {self._path}: {e}"
                    )
                    self._content_error.__cause__ = e
                self._content_done = True
        if self._content_error is not None:
            raise self._content_error
        return self._content

    def hash(self, algorithm: Union[str, HasherPort]) -> str:
        """
        Hash the entry content and return a lowercase hex digest.

        `algorithm` is either a hashlib algorithm name ("sha256", "md5", ...)
        or any `HasherPort`.
        """
        # adapters.hashing imports this package
        from ..adapters.hashing import HashlibHasher

        hasher = HashlibHasher(algorithm) if isinstance(algorithm, str) else algorithm
        return hasher.hash_stream(BytesIO(self.content()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path!r})"
