from .file import File
from .hasher import HasherPort
from .walker import DirectoryWalkerPort, SkipDir

__all__ = ["DirectoryWalkerPort", "File", "HasherPort", "SkipDir"]
