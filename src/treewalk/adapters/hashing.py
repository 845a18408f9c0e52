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

import hashlib
from typing import BinaryIO

from ..ports.hasher import HasherPort


class HashlibHasher(HasherPort):
    """Full-content hash backed by any fixed-size hashlib algorithm."""

    def __init__(self, algorithm: str = "sha256") -> None:
        algorithm = algorithm.lower()
        # hashlib.new raises ValueError for unknown names
        if hashlib.new(algorithm).digest_size == 0:
            raise ValueError(f"variable-length digest not supported: {algorithm}")
        self._algorithm = algorithm

    @property
    def name(self) -> str:
        return self._algorithm

    def hash_stream(self, stream: BinaryIO) -> str:
        h = hashlib.new(self._algorithm)
        while True:
            chunk = stream.read(65536)
            if not chunk:
                break
            h.update(chunk)
        return h.hexdigest()
