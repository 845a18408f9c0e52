# Licensed under the Apache License, Version 2.0
"""Backend-agnostic file-tree traversal: one policy for directories and tar archives."""

from .cancel import CancelScope
from .services import WalkService

__version__ = "0.1.0"

__all__ = ["CancelScope", "WalkService", "__version__"]
