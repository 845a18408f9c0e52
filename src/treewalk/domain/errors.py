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


class TreewalkError(Exception):
    """Base exception for domain-specific errors."""


class WalkSignal(TreewalkError):
    """
    Raised by checkers to steer a walk. Signals are resolved by the
    orchestrator and never reach the caller of a walk.
    """


class CheckFailed(WalkSignal):
    """Skip this entry; siblings and descendants are unaffected."""


class SkipSubtree(WalkSignal):
    """Skip this entry and everything below it."""


class ConstructionError(TreewalkError, ValueError):
    """Malformed input (e.g. a missing tar reader or header)."""


class ContentReadError(TreewalkError):
    """Reading the content of an entry failed."""


class ArchiveError(TreewalkError):
    """The tar stream could not be read."""
