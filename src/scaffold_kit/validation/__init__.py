from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

from ..loaders.manifest import read_json
from ._lint import lint_plugin
from ._manifest import validate_manifest as _validate_manifest
from ._result import ValidationIssue, ValidationResult


def validate_manifest(data: dict[str, Any]) -> ValidationResult:
    """Validate a plugin manifest dict (e.g. from manifest.json).

    Checks the name, status, dependency lists, scripts and config file paths.
    """
    return _validate_manifest(data)


def validate_manifest_file(path: Path) -> ValidationResult:
    """Load and validate a manifest.json file from disk."""
    return _validate_manifest(read_json(path, role="manifest"))


__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "lint_plugin",
    "validate_manifest",
    "validate_manifest_file",
]
