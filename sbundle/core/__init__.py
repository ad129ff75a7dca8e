"""
sbundle Core - Bundle descriptor, allocation and section gating
"""

from sbundle.core.allocator import new_bundle
from sbundle.core.bundle import Bundle
from sbundle.core.errors import (
    AllocationError,
    BundleError,
    BundleFormatError,
    DirectoryCreationError,
    LabelNotFoundError,
)
from sbundle.core.filesystem import FileSystem, LocalFileSystem
from sbundle.core.labels import FSLabel
from sbundle.core.sections import should_run

__all__ = [
    "Bundle",
    "new_bundle",
    "should_run",
    "FSLabel",
    "FileSystem",
    "LocalFileSystem",
    "BundleError",
    "AllocationError",
    "DirectoryCreationError",
    "LabelNotFoundError",
    "BundleFormatError",
]
