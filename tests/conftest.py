# tests/conftest.py
"""
Shared scaffolding: a small tree on disk and the same tree as a tar archive.

    /d0/f1
    /d0/d1/f2
    /d0/skips/d2/f3
    /d0/skips/d2/skip          skip is a regular file here
    /d0/skips/d2/z1
    /d0/skips/d3/f4
    /d0/skips/d3/skip/f5       skip is a directory: f5 must never be visited
    /d0/skips/d3/z2            follows the pruned directory: must be visited
    /d0/symlinks/nothing -> ../f0       dangling
    /d0/symlinks/toF1 -> ../f1
    /d0/symlinks/toD1 -> ../d1
    /d0/symlinks/d4/toSD1 -> ../toD1    chained
    /d0/symlinks/d4/toSF1 -> ../toF1    chained
"""

import os
import tarfile
from pathlib import Path
from typing import Callable

import pytest

FILE_ENTRIES = [
    "/d0/f1",
    "/d0/d1/f2",
    "/d0/skips/d2/f3",
    "/d0/skips/d2/skip",
    "/d0/skips/d2/z1",
    "/d0/skips/d3/f4",
    "/d0/skips/d3/skip/f5",
    "/d0/skips/d3/z2",
]

LINK_ENTRIES = [
    ("/d0/symlinks/nothing", "../f0"),
    ("/d0/symlinks/toF1", "../f1"),
    ("/d0/symlinks/toD1", "../d1"),
    ("/d0/symlinks/d4/toSD1", "../toD1"),
    ("/d0/symlinks/d4/toSF1", "../toF1"),
]

DIR_ENTRIES = [
    "/d0",
    "/d0/d1",
    "/d0/skips",
    "/d0/skips/d2",
    "/d0/skips/d3",
    "/d0/skips/d3/skip",
    "/d0/symlinks",
    "/d0/symlinks/d4",
]


def _abs(root: Path, name: str) -> Path:
    return root / name.lstrip("/")


@pytest.fixture(scope="session")
def scaffold_root(tmp_path_factory) -> Path:
    root = tmp_path_factory.mktemp("walker-")

    # referent of the dangling link, removed once the link exists
    f0 = _abs(root, "/d0/f0")
    f0.parent.mkdir(parents=True, exist_ok=True)
    f0.write_text("/d0/f0\n")

    for name in FILE_ENTRIES:
        p = _abs(root, name)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(name + "\n")

    for name, referent in LINK_ENTRIES:
        p = _abs(root, name)
        p.parent.mkdir(parents=True, exist_ok=True)
        os.symlink(referent, p)

    f0.unlink()
    return root


@pytest.fixture(scope="session")
def scaffold_tar(scaffold_root: Path, tmp_path_factory) -> Path:
    """The scaffold packed as a tar; members are named d0, d0/d1, d0/d1/f2, ..."""
    out = tmp_path_factory.mktemp("archives") / "scaffold.tar"
    # TarFile.add recurses in sorted order, so d3/skip/f5 precedes d3/z2.
    with tarfile.open(out, "w") as tar:
        tar.add(scaffold_root / "d0", arcname="d0")
    return out


@pytest.fixture
def trim(scaffold_root: Path) -> Callable[[str], str]:
    """Map a walked path (disk or archive) onto the '/d0/...' names above."""
    prefix = str(scaffold_root)

    def _trim(path: str) -> str:
        if path.startswith(prefix):
            path = path[len(prefix):]
            return path.replace(os.sep, "/") or "/"
        return "/" + path

    return _trim


@pytest.fixture(scope="session")
def scaffold_names() -> dict:
    return {
        "files": list(FILE_ENTRIES),
        "dirs": list(DIR_ENTRIES),
        "links": [name for name, _ in LINK_ENTRIES],
    }
