"""
Bundle allocator

Creates the uniquely named staging directory for a build and lays out the
default filesystem objects inside it.
"""

import os
from typing import Optional

from sbundle.constants import DEFAULT_PREFIX, DEFAULT_TEMP_ROOT
from sbundle.core.bundle import Bundle
from sbundle.core.errors import AllocationError, DirectoryCreationError
from sbundle.core.filesystem import FileSystem, LocalFileSystem
from sbundle.core.labels import DEFAULT_RELPATHS, FSLabel
from sbundle.logger import BundleLogger

# Filesystem objects present in every freshly allocated bundle
DEFAULT_FS_OBJECTS = {
    FSLabel.ROOTFS.value: DEFAULT_RELPATHS[FSLabel.ROOTFS],
}


def new_bundle(
    prefix: str = "",
    logger: Optional[BundleLogger] = None,
    filesystem: Optional[FileSystem] = None,
    temp_root: Optional[str] = DEFAULT_TEMP_ROOT,
) -> Bundle:
    """Allocate a staging directory and return its Bundle.

    Args:
        prefix: Makes the directory name recognizable; empty uses DEFAULT_PREFIX
        logger: Receives creation messages
        filesystem: Directory operations, LocalFileSystem by default
        temp_root: Parent of the staging directory, system temp dir if None

    Raises:
        AllocationError: the staging directory could not be created
        DirectoryCreationError: a default filesystem object could not be created

    Directories created before a failure are left in place.
    """
    logger = logger or BundleLogger()
    filesystem = filesystem or LocalFileSystem()

    if not prefix:
        prefix = DEFAULT_PREFIX

    try:
        path = filesystem.make_unique_dir(prefix + "-", temp_root)
    except OSError as e:
        logger.error(f"Could not create bundle directory: {e}")
        raise AllocationError(
            f"Failed to create temporary bundle directory: {e}", temp_root
        ) from e
    logger.log_directory_created(path)

    bundle = Bundle(path=path, fs_objects=dict(DEFAULT_FS_OBJECTS))

    for label, relpath in bundle.fs_objects.items():
        target = os.path.join(path, relpath)
        try:
            filesystem.make_dirs(target)
        except OSError as e:
            logger.error(f"Could not create {label} directory: {e}")
            raise DirectoryCreationError(
                f"Failed to create {label} directory {target}: {e}", target
            ) from e
        logger.log_directory_created(target, label)

    return bundle
