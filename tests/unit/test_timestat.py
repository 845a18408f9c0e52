# tests/unit/test_timestat.py
import os
from datetime import datetime, timezone
from pathlib import Path

import treewalk.adapters.platform.timestat as mod
from treewalk.domain import Timestat, ns_to_datetime


def test_extract_matches_stat_fields(tmp_path: Path):
    p = tmp_path / "t.txt"
    p.write_text("x")
    os.utime(p, ns=(1_500_000_000_123_456_789, 1_600_000_000_987_654_321))
    st = os.lstat(p)

    ts = mod.extract_timestat(st)
    assert isinstance(ts, Timestat)
    assert ts.atime_ns == st.st_atime_ns
    assert ts.mtime_ns == st.st_mtime_ns
    assert ts.mtime_ns == 1_600_000_000_987_654_321


def test_posix_change_time_is_st_ctime(tmp_path: Path):
    p = tmp_path / "c.txt"
    p.write_text("x")
    st = os.lstat(p)
    assert mod._extract_posix(st).ctime_ns == st.st_ctime_ns


def test_ns_to_datetime_truncates_to_microseconds():
    dt = ns_to_datetime(1_600_000_000_987_654_321)
    assert dt == datetime(2020, 9, 13, 12, 26, 40, 987654, tzinfo=timezone.utc)
    assert ns_to_datetime(None) is None
