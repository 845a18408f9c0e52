from .errors import (
    ArchiveError,
    CheckFailed,
    ConstructionError,
    ContentReadError,
    SkipSubtree,
    TreewalkError,
    WalkSignal,
)
from .models import FileInfo, FileKind, Timestat, ns_to_datetime

__all__ = [
    "ArchiveError",
    "CheckFailed",
    "ConstructionError",
    "ContentReadError",
    "FileInfo",
    "FileKind",
    "SkipSubtree",
    "Timestat",
    "TreewalkError",
    "WalkSignal",
    "ns_to_datetime",
]
