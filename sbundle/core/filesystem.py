"""
Filesystem capability used by the allocator.

Keeping directory creation behind this interface lets the allocator run
against a fake filesystem in tests.
"""

import os
import tempfile
from typing import Optional, Protocol

from sbundle.constants import DEFAULT_DIR_MODE


class FileSystem(Protocol):
    """Directory operations the bundle needs."""

    def make_unique_dir(self, prefix: str, root: Optional[str] = None) -> str:
        """Create a new uniquely named directory and return its absolute path."""
        ...

    def make_dirs(self, path: str, mode: int = DEFAULT_DIR_MODE) -> None:
        """Create ``path`` and any missing parents. Existing directories are fine."""
        ...


class LocalFileSystem:
    """FileSystem backed by the host OS."""

    def make_unique_dir(self, prefix: str, root: Optional[str] = None) -> str:
        return os.path.abspath(tempfile.mkdtemp(prefix=prefix, dir=root))

    def make_dirs(self, path: str, mode: int = DEFAULT_DIR_MODE) -> None:
        os.makedirs(path, mode=mode, exist_ok=True)
