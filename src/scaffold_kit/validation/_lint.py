"""Plugin directory lint, including a dry run of the plugin's install routine.

Every dependency, script and file an install routine writes has to be
declared in the manifest, because removal only reverses what is declared.
The dry run reports drift; it never repairs it.
"""

from __future__ import annotations

import asyncio
import inspect
import json
import tempfile
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any

from ..errors import MalformedError
from ..loaders.manifest import MANIFEST_FILENAME, read_json, validate_model
from ..models.manifest import PluginManifest
from ._manifest import validate_manifest
from ._result import ValidationResult

if TYPE_CHECKING:
    from ..manager._protocols import InstallRoutine

_SCRATCH_DESCRIPTOR = "package.json"


def lint_plugin(plugin_dir: Path, routine: InstallRoutine | None = None) -> ValidationResult:
    """Lint a plugin directory; dry-run its install routine when one is given."""
    manifest_path = plugin_dir / MANIFEST_FILENAME
    data = read_json(manifest_path, role="manifest")
    result = validate_manifest(data)
    if not result.valid:
        return result

    manifest = validate_model(PluginManifest, data, manifest_path)
    if manifest.name and manifest.name != plugin_dir.name:
        result.warning(
            "name", f'Manifest name "{manifest.name}" does not match directory "{plugin_dir.name}"'
        )
    for i, relative in enumerate(manifest.config_files):
        if not (plugin_dir / "config" / relative).exists():
            result.warning(
                f"configFiles[{i}]", f"Declared config file {relative} is missing from config/"
            )

    if routine is not None:
        _check_routine_declarations(manifest, routine, result)
    return result


def _check_routine_declarations(
    manifest: PluginManifest, routine: InstallRoutine, result: ValidationResult
) -> None:
    apply = getattr(routine, "apply", None)
    if not callable(apply):
        result.error("install", "Install routine does not expose a callable apply()")
        return

    with tempfile.TemporaryDirectory() as tmp:
        scratch = Path(tmp)
        (scratch / _SCRATCH_DESCRIPTOR).write_text("{}\n", encoding="utf-8")
        try:
            outcome = apply(scratch)
            if inspect.isawaitable(outcome):
                asyncio.run(_drive(outcome))
        except Exception as e:
            result.error("install", f"Install routine failed during dry run: {e}")
            return

        try:
            written = json.loads((scratch / _SCRATCH_DESCRIPTOR).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise MalformedError(f"Install routine left an unreadable package.json: {e}") from e

        _report_undeclared(
            written, "devDependencies", set(manifest.dev_dependencies), "dev dependency", result
        )
        _report_undeclared(
            written, "dependencies", set(manifest.prod_dependencies), "dependency", result
        )
        _report_undeclared(written, "scripts", set(manifest.scripts), "script", result)

        declared_roots = {_top_level(p) for p in manifest.config_files}
        for entry in sorted(scratch.iterdir()):
            if entry.name == _SCRATCH_DESCRIPTOR or entry.name in declared_roots:
                continue
            result.error(
                f"files.{entry.name}",
                f'Undeclared file "{entry.name}" written by install routine',
            )


def _report_undeclared(
    written: dict[str, Any], section: str, declared: set[str], label: str, result: ValidationResult
) -> None:
    keys = written.get(section)
    if not isinstance(keys, dict):
        return
    for key in keys:
        if key not in declared:
            result.error(
                f"{section}.{key}", f'Undeclared {label} "{key}" written by install routine'
            )


def _top_level(relative: str) -> str:
    return PurePosixPath(relative.replace("\\", "/")).parts[0]


async def _drive(awaitable: Any) -> Any:
    return await awaitable
