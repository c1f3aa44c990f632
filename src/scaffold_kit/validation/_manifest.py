from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any

from ._result import ValidationResult

STATUSES = ("available", "planned", "unknown")


def validate_manifest(data: Any) -> ValidationResult:
    result = ValidationResult()
    if not isinstance(data, dict):
        result.error("", "Manifest must be a JSON object")
        return result

    name = data.get("name")
    if name is None or (isinstance(name, str) and not name.strip()):
        result.error("name", "name: Required")
    elif not isinstance(name, str):
        result.error("name", "name: Must be a string")

    status = data.get("status", "available")
    if status not in STATUSES:
        result.error("status", f'status: Must be one of {", ".join(STATUSES)}, got "{status}"')
    elif status == "planned" and not data.get("notes"):
        result.warning("notes", "Planned plugin has no notes to show users")

    _check_dependencies(data.get("dependencies"), result)
    _check_string_map(data.get("scripts"), "scripts", result)
    _check_string_map(data.get("peerDependencies"), "peerDependencies", result)
    _check_config_files(data.get("configFiles"), result)
    return result


def _check_dependencies(deps: Any, result: ValidationResult) -> None:
    if deps is None:
        return
    if not isinstance(deps, dict):
        result.error("dependencies", "dependencies: Must be an object with dev and prod lists")
        return
    for kind in ("dev", "prod"):
        names = deps.get(kind)
        if names is None:
            continue
        path = f"dependencies.{kind}"
        if not isinstance(names, list):
            result.error(path, f"{path}: Must be a list of package names")
            continue
        seen: set[str] = set()
        for i, dep in enumerate(names):
            if not isinstance(dep, str) or not dep.strip():
                result.error(f"{path}[{i}]", f"{path}[{i}]: Must be a package name")
            elif dep in seen:
                result.error(f"{path}[{i}]", f'Duplicate dependency "{dep}" in {path}')
            else:
                seen.add(dep)


def _check_string_map(value: Any, path: str, result: ValidationResult) -> None:
    if value is None:
        return
    if not isinstance(value, dict):
        result.error(path, f"{path}: Must be an object")
        return
    for key, item in value.items():
        if not isinstance(item, str):
            result.error(f"{path}.{key}", f"{path}.{key}: Must be a string")


def _check_config_files(files: Any, result: ValidationResult) -> None:
    if files is None:
        return
    if not isinstance(files, list):
        result.error("configFiles", "configFiles: Must be a list of relative paths")
        return
    for i, entry in enumerate(files):
        path = f"configFiles[{i}]"
        if not isinstance(entry, str) or not entry.strip():
            result.error(path, f"{path}: Must be a relative path")
            continue
        pure = PurePosixPath(entry.replace("\\", "/"))
        if pure.is_absolute() or (len(entry) > 1 and entry[1] == ":"):
            result.error(path, f"{path}: Absolute paths not allowed")
        elif ".." in pure.parts:
            result.error(path, f"{path}: Path traversal not allowed")
