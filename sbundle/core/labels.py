"""
Well-known filesystem object labels.

Labels are plain strings on the wire. The enum covers the labels the build
pipeline relies on; collaborators may register any other string.
"""

from enum import Enum
from typing import Union


class FSLabel(str, Enum):
    """Filesystem objects every build knows about."""
    ROOTFS = "rootfs"            # chroot filesystem
    METADATA = ".singularity.d"  # container metadata and exec scripts
    DATA = "data"                # data files

    def __str__(self) -> str:
        return self.value


Label = Union[FSLabel, str]

DEFAULT_RELPATHS = {
    FSLabel.ROOTFS: "fs",
    FSLabel.METADATA: ".singularity.d",
    FSLabel.DATA: "data",
}


def label_key(label: Label) -> str:
    """Return the string key a label is stored under."""
    if isinstance(label, FSLabel):
        return label.value
    return str(label)


def default_relpath(label: Label) -> str:
    """Default relative path for a label; unknown labels use their own text."""
    key = label_key(label)
    try:
        return DEFAULT_RELPATHS[FSLabel(key)]
    except ValueError:
        return key
