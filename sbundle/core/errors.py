"""
Bundle errors

Construction failures abort bundle creation outright; no partially built
Bundle is ever handed back to the caller.
"""

from typing import Optional


class BundleError(Exception):
    """Base class for all bundle errors."""


class AllocationError(BundleError):
    """The unique staging directory could not be created."""

    def __init__(self, message: str, temp_root: Optional[str] = None):
        super().__init__(message)
        self.temp_root = temp_root


class DirectoryCreationError(BundleError):
    """A filesystem object directory could not be created under the staging root."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class LabelNotFoundError(BundleError, KeyError):
    """A filesystem object label is not registered in the bundle."""

    def __init__(self, label: str):
        super().__init__(label)
        self.label = label

    def __str__(self) -> str:
        return f"Filesystem object label not registered: {self.label!r}"


class BundleFormatError(BundleError, ValueError):
    """A serialized descriptor could not be decoded."""
