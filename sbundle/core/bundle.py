"""
Bundle - the staging environment record for one image build

A Bundle is the programmatic representation of the temporary directory an
image is built in::

    /tmp/sbuild--XXXXXX/
        fs/               chroot filesystem (label "rootfs")
        .singularity.d/   container metadata, created on demand
        ...               anything else a build phase registers

The descriptor is passed through every build phase and can be persisted
between phases that run as separate processes.
"""

from __future__ import annotations

import base64
import binascii
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from sbundle.core.errors import BundleFormatError, DirectoryCreationError, LabelNotFoundError
from sbundle.core.filesystem import FileSystem, LocalFileSystem
from sbundle.core.labels import FSLabel, Label, default_relpath, label_key
from sbundle.core.sections import should_run


@dataclass
class Bundle:
    """Descriptor for a build bundle.

    ``fs_objects`` maps a label to a path relative to ``path``. Each
    registered object becomes one section of the final image. The
    descriptor does no locking; one build owns one Bundle.
    """
    path: str
    fs_objects: Dict[str, str] = field(default_factory=dict)
    metadata: Dict[str, bytes] = field(default_factory=dict)
    recipe: Any = None
    bind_paths: List[str] = field(default_factory=list)
    force: bool = False
    update: bool = False
    no_test: bool = False
    sections: List[str] = field(default_factory=list)

    # -------------------------------------------------------------------------
    # Filesystem object registry
    # -------------------------------------------------------------------------

    @property
    def rootfs(self) -> str:
        """Absolute path of the root filesystem tree."""
        return self.resolve(FSLabel.ROOTFS)

    def has(self, label: Label) -> bool:
        return label_key(label) in self.fs_objects

    def resolve(self, label: Label) -> str:
        """Return the absolute path for a registered label.

        Raises LabelNotFoundError for labels that were never registered
        instead of falling back to the staging root.
        """
        key = label_key(label)
        try:
            relpath = self.fs_objects[key]
        except KeyError:
            raise LabelNotFoundError(key) from None
        return _join(self.path, relpath)

    def register(
        self,
        label: Label,
        relpath: Optional[str] = None,
        create: bool = True,
        filesystem: Optional[FileSystem] = None,
    ) -> str:
        """Register a filesystem object and optionally create its directory.

        Returns the absolute path of the object.
        """
        key = label_key(label)
        if relpath is None:
            relpath = default_relpath(key)
        _check_relpath(relpath)

        self.fs_objects[key] = relpath
        target = self.resolve(key)

        if create:
            filesystem = filesystem or LocalFileSystem()
            try:
                filesystem.make_dirs(target)
            except OSError as e:
                raise DirectoryCreationError(
                    f"Failed to create {key} directory {target}: {e}", target
                ) from e
        return target

    # -------------------------------------------------------------------------
    # Mutators used by build phases
    # -------------------------------------------------------------------------

    def add_metadata(self, key: str, blob: Union[bytes, str]) -> None:
        if isinstance(blob, str):
            blob = blob.encode("utf-8")
        self.metadata[key] = bytes(blob)

    def add_bind_path(self, path: str) -> None:
        # Mount order follows insertion order; duplicates are the caller's concern.
        self.bind_paths.append(path)

    def run_section(self, name: str) -> bool:
        """Return True if the named build phase should execute."""
        return should_run(name, self.sections)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire representation shared with other build phases."""
        recipe = self.recipe
        if hasattr(recipe, "to_dict"):
            recipe = recipe.to_dict()
        return {
            "fsObjects": dict(sorted(self.fs_objects.items())),
            "jsonObjects": {
                key: base64.b64encode(blob).decode("ascii")
                for key, blob in sorted(self.metadata.items())
            },
            "rawDeffile": recipe,
            "bindPath": list(self.bind_paths),
            "bundlePath": self.path,
            "force": self.force,
            "update": self.update,
            "noTest": self.no_test,
            "sections": list(self.sections),
        }

    def to_json(self) -> bytes:
        """Encode as compact UTF-8 JSON. Equal bundles encode to equal bytes.

        Top-level fields keep their wire order; every nested mapping,
        the recipe included, is written with sorted keys.
        """
        try:
            data = {name: _sort_keys(value) for name, value in self.to_dict().items()}
            encoded = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise BundleFormatError(f"Bundle is not JSON serializable: {e}") from e
        return encoded.encode("utf-8")

    @classmethod
    def from_dict(cls, data: Any) -> Bundle:
        """Build a Bundle from its wire representation."""
        if not isinstance(data, dict):
            raise BundleFormatError("Bundle descriptor must be a JSON object")

        path = data.get("bundlePath")
        if not isinstance(path, str):
            raise BundleFormatError("bundlePath must be a string")

        fs_objects = _string_map(data.get("fsObjects"), "fsObjects")
        for label, relpath in fs_objects.items():
            try:
                _check_relpath(relpath)
            except ValueError as e:
                raise BundleFormatError(f"fsObjects[{label!r}]: {e}") from e

        metadata: Dict[str, bytes] = {}
        for key, encoded in _blob_map(data.get("jsonObjects")).items():
            if encoded is None:
                # Go writes a nil []byte as null
                metadata[key] = b""
                continue
            try:
                metadata[key] = base64.b64decode(encoded, validate=True)
            except (binascii.Error, ValueError) as e:
                raise BundleFormatError(f"jsonObjects[{key!r}] is not valid base64: {e}") from e

        flags = {}
        for name in ("force", "update", "noTest"):
            value = data.get(name, False)
            if not isinstance(value, bool):
                raise BundleFormatError(f"{name} must be a boolean")
            flags[name] = value

        return cls(
            path=path,
            fs_objects=fs_objects,
            metadata=metadata,
            recipe=data.get("rawDeffile"),
            bind_paths=_string_list(data.get("bindPath"), "bindPath"),
            force=flags["force"],
            update=flags["update"],
            no_test=flags["noTest"],
            sections=_string_list(data.get("sections"), "sections"),
        )

    @classmethod
    def from_json(cls, raw: Union[bytes, str]) -> Bundle:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise BundleFormatError(f"Invalid bundle JSON: {e}") from e
        return cls.from_dict(data)

    def save(self, descriptor_path: Path) -> Path:
        """Write the descriptor to disk so a later phase can load it."""
        descriptor_path = Path(descriptor_path)
        descriptor_path.parent.mkdir(parents=True, exist_ok=True)
        descriptor_path.write_bytes(self.to_json())
        return descriptor_path

    @classmethod
    def load(cls, descriptor_path: Path) -> Bundle:
        """Load a descriptor written by save()."""
        descriptor_path = Path(descriptor_path)
        if not descriptor_path.exists():
            raise FileNotFoundError(f"Bundle descriptor does not exist: {descriptor_path}")
        return cls.from_json(descriptor_path.read_bytes())


def _check_relpath(relpath: str) -> None:
    if os.path.isabs(relpath):
        raise ValueError(f"Filesystem object path must be relative: {relpath}")
    normalized = os.path.normpath(relpath)
    if normalized == os.pardir or normalized.startswith(os.pardir + os.sep):
        raise ValueError(f"Filesystem object path escapes the bundle: {relpath}")


def _string_map(value: Any, name: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        raise BundleFormatError(f"{name} must map strings to strings")
    return dict(value)


def _string_list(value: Any, name: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise BundleFormatError(f"{name} must be a list of strings")
    return list(value)


def _blob_map(value: Any) -> Dict[str, Optional[str]]:
    if value is None:
        return {}
    if not isinstance(value, dict) or not all(
        isinstance(k, str) and (v is None or isinstance(v, str)) for k, v in value.items()
    ):
        raise BundleFormatError("jsonObjects must map strings to base64 strings")
    return dict(value)


def _join(root: str, relpath: str) -> str:
    # Like Go's filepath.Join: a leading separator never replaces the root.
    return os.path.normpath(os.path.join(root, relpath.lstrip(os.sep)))


def _sort_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _sort_keys(value[key]) for key in sorted(value)}
    if isinstance(value, (list, tuple)):
        return [_sort_keys(item) for item in value]
    return value
