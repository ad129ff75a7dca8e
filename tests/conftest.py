import errno
import io
import os
from typing import Optional

import pytest
from rich.console import Console

from sbundle.logger import BundleLogger


class FakeFileSystem:
    """In-memory FileSystem that records every directory it creates."""

    def __init__(self, fail_unique: bool = False, fail_paths: Optional[set] = None):
        self.fail_unique = fail_unique
        self.fail_paths = fail_paths or set()
        self.directories: set[str] = set()
        self._counter = 0

    def make_unique_dir(self, prefix: str, root: Optional[str] = None) -> str:
        if self.fail_unique:
            raise PermissionError(errno.EACCES, "Permission denied", root or "/fake")
        self._counter += 1
        path = os.path.join(root or "/fake", f"{prefix}{self._counter:06d}")
        self.directories.add(path)
        return path

    def make_dirs(self, path: str, mode: int = 0o755) -> None:
        if path in self.fail_paths:
            raise OSError(errno.ENOSPC, "No space left on device", path)
        self.directories.add(path)


@pytest.fixture
def fake_fs():
    return FakeFileSystem()


@pytest.fixture
def console_output():
    return io.StringIO()


@pytest.fixture
def console(console_output):
    return Console(file=console_output, width=200, color_system=None)


@pytest.fixture
def logger(console):
    return BundleLogger(console=console, verbose=True)
