"""
Bundle Validator - Schema validation for serialized bundle descriptors

Checks a descriptor against the bundle JSON schema, then looks for
problems the schema cannot express (missing rootfs, unknown sections,
staging directory gone from disk).
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft7Validator, ValidationError

from sbundle.constants import is_known_section
from sbundle.core.labels import FSLabel

SCHEMA_DIR = Path(__file__).parent.parent / "schemas"


class Severity(Enum):
    """Severity levels for validation issues."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """Represents a single validation issue."""
    severity: Severity
    file_path: str
    message: str
    json_path: str = ""
    suggestion: str = ""

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "file_path": self.file_path,
            "message": self.message,
            "json_path": self.json_path,
            "suggestion": self.suggestion,
        }


@dataclass
class ValidationResult:
    """Result of validating a bundle descriptor."""
    descriptor_path: str
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(i.severity == Severity.ERROR for i in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(i.severity == Severity.WARNING for i in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.WARNING)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    def add_error(self, message: str, **kwargs):
        self.issues.append(ValidationIssue(
            severity=Severity.ERROR,
            file_path=self.descriptor_path,
            message=message,
            **kwargs
        ))

    def add_warning(self, message: str, **kwargs):
        self.issues.append(ValidationIssue(
            severity=Severity.WARNING,
            file_path=self.descriptor_path,
            message=message,
            **kwargs
        ))

    def add_info(self, message: str, **kwargs):
        self.issues.append(ValidationIssue(
            severity=Severity.INFO,
            file_path=self.descriptor_path,
            message=message,
            **kwargs
        ))

    def to_dict(self) -> dict:
        return {
            "descriptor_path": self.descriptor_path,
            "is_valid": self.is_valid,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "issues": [i.to_dict() for i in self.issues],
        }


def load_schema(schema_name: str = "bundle", schema_dir: Path = SCHEMA_DIR) -> dict:
    """Load a schema by name (without extension)."""
    schema_path = schema_dir / f"{schema_name}.schema.json"
    with open(schema_path, encoding="utf-8") as f:
        return json.load(f)


def format_json_path(path: list) -> str:
    """Format a JSON path from a list of path elements."""
    if not path:
        return "$"

    parts = ["$"]
    for element in path:
        if isinstance(element, int):
            parts.append(f"[{element}]")
        else:
            parts.append(f".{element}")

    return "".join(parts)


def get_suggestion_for_error(error: ValidationError) -> str:
    """Generate a helpful suggestion based on the error type."""
    suggestions = {
        "required": f"Add the missing required field: {error.message}",
        "type": "Change the value to the correct type",
        "pattern": "Metadata blobs must be standard base64 strings",
        "minLength": "Value must not be empty",
        "additionalProperties": "Remove the unexpected field; field names are fixed",
    }
    return suggestions.get(error.validator, "")


class BundleValidator:
    """Validator for serialized bundle descriptors."""

    def __init__(self, schema: Optional[dict] = None):
        schema = schema if schema is not None else load_schema()
        Draft7Validator.check_schema(schema)
        self._validator = Draft7Validator(schema)

    def validate_file(self, descriptor_path: Path) -> ValidationResult:
        """Validate a descriptor file written by Bundle.save()."""
        result = ValidationResult(descriptor_path=str(descriptor_path))

        if not descriptor_path.exists():
            result.add_error(f"Descriptor does not exist: {descriptor_path}")
            return result

        try:
            with open(descriptor_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            result.add_error(
                f"Invalid JSON syntax: {e}",
                suggestion="Descriptors are written by 'sbundle create'; do not edit by hand"
            )
            return result
        except (IOError, OSError) as e:
            result.add_error(f"Could not read file: {e}")
            return result

        return self.validate_data(data, result)

    def validate_data(self, data: Any, result: Optional[ValidationResult] = None) -> ValidationResult:
        """Validate an already decoded descriptor."""
        result = result or ValidationResult(descriptor_path="<memory>")

        errors = sorted(
            self._validator.iter_errors(data),
            key=lambda e: format_json_path(list(e.absolute_path))
        )
        for error in errors:
            result.add_error(
                error.message,
                json_path=format_json_path(list(error.absolute_path)),
                suggestion=get_suggestion_for_error(error),
            )
        if errors:
            return result

        fs_objects = data.get("fsObjects") or {}
        if FSLabel.ROOTFS.value not in fs_objects:
            result.add_warning(
                "No rootfs filesystem object registered",
                json_path="$.fsObjects",
                suggestion="Allocate bundles with 'sbundle create'"
            )

        for index, name in enumerate(data.get("sections") or []):
            if not is_known_section(name):
                result.add_warning(
                    f"Unknown section '{name}' will never run",
                    json_path=f"$.sections[{index}]",
                )

        bundle_path = Path(data["bundlePath"])
        if not bundle_path.is_dir():
            result.add_warning(
                f"Staging directory does not exist: {bundle_path}",
                json_path="$.bundlePath",
                suggestion="The bundle may already have been cleaned up"
            )

        return result
