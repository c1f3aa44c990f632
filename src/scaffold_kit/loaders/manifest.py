from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from .._plugin import Plugin
from ..errors import MalformedError, NotFoundError
from ..models.manifest import PluginManifest

if TYPE_CHECKING:
    from pathlib import Path

MANIFEST_FILENAME = "manifest.json"


def load_manifest(plugin_dir: Path) -> PluginManifest:
    """Load and validate a plugin's manifest.json.

    Raises:
        NotFoundError: The plugin directory or its manifest.json does not exist.
        MalformedError: manifest.json is not valid JSON or does not fit the schema.
    """
    if not plugin_dir.is_dir():
        raise NotFoundError(f"Plugin '{plugin_dir.name}' not found", path=plugin_dir, role="plugin")
    manifest_path = plugin_dir / MANIFEST_FILENAME
    data = read_json(manifest_path, role="manifest")
    return validate_model(PluginManifest, data, manifest_path)


def load_plugin(plugins_root: Path, name: str) -> Plugin:
    """Resolve a plugin by name under the plugins root and load its manifest."""
    plugin_dir = plugins_root / name
    return Plugin(name=name, root=plugin_dir, manifest=load_manifest(plugin_dir))


def discover_plugin_dirs(plugins_root: Path) -> list[Path]:
    """Every directory directly under the plugins root, sorted by name."""
    if not plugins_root.is_dir():
        return []
    return sorted(p for p in plugins_root.iterdir() if p.is_dir())


# --- internal helpers ---


def read_json(path: Path, role: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise NotFoundError(f"No {path.name} found at {path}", path=path, role=role) from e
    except json.JSONDecodeError as e:
        raise MalformedError(f"Failed to parse {path}: {e}", path=path) from e


def validate_model(model_class: type[Any], data: Any, path: Path) -> Any:
    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        raise MalformedError(f"Invalid {path.name} at {path}: {e}", path=path) from e
