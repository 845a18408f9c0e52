# tests/unit/test_concurrent_walker.py
import os
import threading
from pathlib import Path

import pytest

import treewalk.adapters.walker.concurrent_walker as mod
from treewalk.adapters.walker.concurrent_walker import ConcurrentWalker
from treewalk.cancel import CancelScope
from treewalk.ports.walker import SkipDir


def collect(walker: ConcurrentWalker, root: Path, **kwargs):
    seen = []
    lock = threading.Lock()

    def fn(pathname, st):
        with lock:
            seen.append(pathname)

    walker.walk(root, fn, **kwargs)
    return seen


def test_walk_reports_root_and_every_entry_once(scaffold_root: Path, trim):
    seen = [trim(p) for p in collect(ConcurrentWalker(max_workers=4), scaffold_root)]
    assert len(seen) == len(set(seen))
    assert "/" in seen
    assert "/d0/skips/d3/skip/f5" in seen
    assert "/d0/symlinks/d4/toSD1" in seen


def test_walk_does_not_follow_symlinks(scaffold_root: Path, trim):
    seen = {trim(p) for p in collect(ConcurrentWalker(), scaffold_root)}
    # toD1 points at d1; following it would report d1/f2 a second time
    assert not any(p.startswith("/d0/symlinks/toD1/") for p in seen)


def test_skipdir_prunes_descent(scaffold_root: Path, trim):
    seen = []
    lock = threading.Lock()

    def fn(pathname, st):
        with lock:
            seen.append(trim(pathname))
        if os.path.basename(pathname) == "skips":
            raise SkipDir()

    ConcurrentWalker().walk(scaffold_root, fn)
    assert "/d0/skips" in seen
    assert not any(p.startswith("/d0/skips/") for p in seen)
    assert "/d0/f1" in seen


def test_callback_error_aborts_walk(scaffold_root: Path):
    def fn(pathname, st):
        if pathname.endswith("f2"):
            raise RuntimeError("visitor broke")

    with pytest.raises(RuntimeError, match="visitor broke"):
        ConcurrentWalker().walk(scaffold_root, fn)


def test_root_file_is_reported_alone(scaffold_root: Path):
    target = scaffold_root / "d0" / "f1"
    assert collect(ConcurrentWalker(), target) == [str(target)]


def test_missing_root_goes_to_error_callback(tmp_path: Path):
    errors = []

    def on_error(pathname, err):
        errors.append((pathname, type(err)))
        return None

    missing = tmp_path / "missing"
    assert collect(ConcurrentWalker(), missing, on_error=on_error) == []
    assert errors == [(str(missing), FileNotFoundError)]


def test_unsuppressed_error_is_raised(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        collect(ConcurrentWalker(), tmp_path / "missing", on_error=lambda p, e: e)


def test_scandir_failure_routed_through_error_callback(tmp_path: Path, monkeypatch):
    (tmp_path / "open").mkdir()
    (tmp_path / "open" / "a").write_text("a")
    (tmp_path / "locked").mkdir()
    (tmp_path / "locked" / "b").write_text("b")

    real_scandir = os.scandir

    def scandir(path):
        if os.path.basename(path) == "locked":
            raise PermissionError(13, "Permission denied", path)
        return real_scandir(path)

    monkeypatch.setattr(mod.os, "scandir", scandir)

    errors = []

    def on_error(pathname, err):
        errors.append(pathname)
        return None

    seen = collect(ConcurrentWalker(), tmp_path, on_error=on_error)
    assert str(tmp_path / "open" / "a") in seen
    assert str(tmp_path / "locked" / "b") not in seen
    assert errors == [str(tmp_path / "locked")]


def test_cancelled_scope_walks_nothing(scaffold_root: Path):
    scope = CancelScope()
    scope.cancel()
    assert collect(ConcurrentWalker(), scaffold_root, cancel=scope) == []


def test_cancel_from_callback_stops_further_work(scaffold_root: Path):
    scope = CancelScope()
    seen = []

    def fn(pathname, st):
        seen.append(pathname)
        scope.cancel()

    ConcurrentWalker().walk(scaffold_root, fn, cancel=scope)
    assert seen == [str(scaffold_root)]
