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
from typing import Optional


class CancelScope:
    """
    Cooperative cancellation signal.

    A scope is cancelled when its own event is set or when any ancestor is
    cancelled. Cancelling a child never affects its parent.
    """

    def __init__(self, parent: Optional["CancelScope"] = None) -> None:
        self._parent = parent
        self._event = threading.Event()

    def child(self) -> "CancelScope":
        return CancelScope(self)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._parent is not None and self._parent.cancelled
