"""
Default constants for sbundle.

These can be overridden via:
1. Environment variables (SBUNDLE_PREFIX, SBUNDLE_TMPDIR)
2. A YAML build config passed with --config
3. CLI arguments

Priority: CLI > build config > environment > defaults
"""

import os
import warnings
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

# =============================================================================
# STAGING DIRECTORY
# =============================================================================
DEFAULT_PREFIX = os.environ.get("SBUNDLE_PREFIX", "sbuild-")
DEFAULT_TEMP_ROOT = os.environ.get("SBUNDLE_TMPDIR") or None  # None -> system temp dir
DEFAULT_DIR_MODE = 0o755
DESCRIPTOR_FILENAME = "bundle.json"

# =============================================================================
# SECTIONS
# =============================================================================
SECTION_NONE = "none"
SECTION_ALL = "all"

KNOWN_SECTIONS = frozenset({
    "setup",
    "post",
    "files",
    "environment",
    "test",
    "labels",
    "runscript",
    "startscript",
    "help",
})

APP_SECTION_PREFIX = "app"

# Keys accepted in a build config file
BUILD_CONFIG_KEYS = frozenset({
    "prefix",
    "sections",
    "bind_paths",
    "force",
    "update",
    "notest",
    "recipe",
})


def is_known_section(name: str) -> bool:
    """Return True for well-known section names, sentinels and app sections."""
    return (
        name in KNOWN_SECTIONS
        or name in (SECTION_NONE, SECTION_ALL)
        or name.startswith(APP_SECTION_PREFIX)
    )


def warn_unknown_sections(sections: Iterable[str], verbose: bool = False) -> None:
    """Emit warnings for section names no build phase will ever match."""
    for name in sections:
        if not is_known_section(name) and verbose:
            warnings.warn(
                f"Section '{name}' is not a known build section and will never run",
                UserWarning,
                stacklevel=2
            )


def load_build_config(config_path: Optional[Path]) -> dict[str, Any]:
    """Load a YAML build config file. Unknown keys are reported and dropped."""
    if config_path is None:
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Build config must be a mapping: {config_path}")

    for key in list(config):
        if key not in BUILD_CONFIG_KEYS:
            warnings.warn(
                f"Build config key '{key}' is not recognized and will be ignored",
                UserWarning,
                stacklevel=2
            )
            del config[key]

    for key in ("sections", "bind_paths"):
        value = config.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            # "sections: post" is a one-entry list
            config[key] = [value]
        elif isinstance(value, list) and all(isinstance(v, str) for v in value):
            config[key] = list(value)
        else:
            raise ValueError(f"Build config '{key}' must be a string or a list of strings")

    for key in ("force", "update", "notest"):
        if key in config and not isinstance(config[key], bool):
            raise ValueError(f"Build config '{key}' must be true or false, got {config[key]!r}")

    if "prefix" in config and not isinstance(config["prefix"], str):
        raise ValueError("Build config 'prefix' must be a string")

    return config
