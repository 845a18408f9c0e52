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

from pathlib import Path
from typing import List, Optional, Tuple
import logging

import typer

from ..adapters.hashing import HashlibHasher
from ..domain.errors import TreewalkError
from ..ports.file import File
from ..ports.hasher import HasherPort
from ..services import (
    WalkService,
    has_any_prefix,
    has_any_suffix,
    is_regular,
    skip_named_subtree,
    skip_permission_error,
)

from ..logging_config import setup_logging

setup_logging()

app = typer.Typer(help="treewalk CLI - list and hash entries of directory trees and tar archives")

logger = logging.getLogger(__name__)


def _parse_hasher(algorithm: Optional[str]) -> Optional[HasherPort]:
    """
    Validate --hash into a hasher.
    Raises Typer BadParameter for unknown or variable-length algorithms.
    """
    if not algorithm:
        return None
    try:
        return HashlibHasher(algorithm)
    except ValueError as e:
        raise typer.BadParameter(f"Unknown hash algorithm: {algorithm} ({e})")


def _wire(
    prefix: List[str],
    suffix: List[str],
    skip_dir: List[str],
    all_kinds: bool,
    strict: bool,
    hasher: Optional[HasherPort],
    workers: Optional[int] = None,
) -> Tuple[WalkService, List[Tuple[str, str]]]:
    """
    Minimal composition root: one WalkService plus a visitor collecting
    (path, output line) pairs.
    """
    lines: List[Tuple[str, str]] = []

    def collect(f: File) -> None:
        if hasher is None:
            lines.append((f.path, f.path))
        else:
            lines.append((f.path, f"{f.hash(hasher)}  {f.path}"))

    walker = WalkService(max_workers=workers)
    # skip_named_subtree must run before is_regular, which fails every directory.
    for name in skip_dir:
        walker.check(skip_named_subtree(name))
    if not all_kinds:
        walker.check(is_regular())
    if prefix:
        walker.check(has_any_prefix(*prefix))
    if suffix:
        walker.check(has_any_suffix(*suffix))
    if not strict:
        walker.filter_error(skip_permission_error)
    walker.on_visit(collect)
    return walker, lines


def _set_verbose(verbose: bool) -> None:
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")


PREFIX_OPT = typer.Option([], "--prefix", help="Keep paths starting with any of these (repeatable).")
SUFFIX_OPT = typer.Option([], "--suffix", help="Keep paths ending with any of these (repeatable).")
SKIP_DIR_OPT = typer.Option([], "--skip-dir", help="Do not descend into directories with this name (repeatable).")
ALL_KINDS_OPT = typer.Option(False, "--all-kinds", help="List directories and symlinks too, not only regular files.")
HASH_OPT = typer.Option(None, "--hash", help="Print a content digest with each path (e.g. sha256, md5).")
STRICT_OPT = typer.Option(False, "--strict", help="Fail on permission errors instead of skipping them.")
VERBOSE_OPT = typer.Option(False, "--verbose", help="Enable verbose logging")


@app.command("dir")
def walk_dir(
    path: Path = typer.Option(
        ...,
        "--path",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Directory to walk",
    ),
    prefix: List[str] = PREFIX_OPT,
    suffix: List[str] = SUFFIX_OPT,
    skip_dir: List[str] = SKIP_DIR_OPT,
    all_kinds: bool = ALL_KINDS_OPT,
    hash_name: Optional[str] = HASH_OPT,
    strict: bool = STRICT_OPT,
    workers: Optional[int] = typer.Option(
        None, "--workers", min=1, help="Number of stat worker threads."
    ),
    verbose: bool = VERBOSE_OPT,
):
    """
    Walk a directory tree and print the matching entries, sorted by path.
    """
    _set_verbose(verbose)
    hasher = _parse_hasher(hash_name)
    walker, lines = _wire(prefix, suffix, skip_dir, all_kinds, strict, hasher, workers)
    try:
        walker.walk_dir(path)
    except (OSError, TreewalkError) as e:
        typer.echo(f"Walk of {path} failed: {e}", err=True)
        raise typer.Exit(code=1)

    # Directory walks visit in no particular order.
    for _, line in sorted(lines):
        typer.echo(line)


@app.command("tar")
def walk_tar(
    path: Path = typer.Option(
        ...,
        "--path",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Tar archive to walk (optionally gzip/bz2/xz compressed)",
    ),
    prefix: List[str] = PREFIX_OPT,
    suffix: List[str] = SUFFIX_OPT,
    skip_dir: List[str] = SKIP_DIR_OPT,
    all_kinds: bool = ALL_KINDS_OPT,
    hash_name: Optional[str] = HASH_OPT,
    strict: bool = STRICT_OPT,
    verbose: bool = VERBOSE_OPT,
):
    """
    Walk a tar archive and print the matching members in archive order.
    """
    _set_verbose(verbose)
    hasher = _parse_hasher(hash_name)
    walker, lines = _wire(prefix, suffix, skip_dir, all_kinds, strict, hasher)
    try:
        walker.walk_tar_file(path)
    except (OSError, TreewalkError) as e:
        typer.echo(f"Walk of {path} failed: {e}", err=True)
        raise typer.Exit(code=1)

    for _, line in lines:
        typer.echo(line)
