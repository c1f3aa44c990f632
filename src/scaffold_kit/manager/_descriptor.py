"""The target project's package.json, read once and written back at most once."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..errors import MalformedError, PackageDescriptorMissingError

DESCRIPTOR_FILENAME = "package.json"

# Sections a plugin may add keys to; each may be absent until first written.
SECTIONS = ("dependencies", "devDependencies", "scripts")


def _atomic_write(path: Path, data: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(data, encoding="utf-8")
    tmp.replace(path)


class PackageDescriptor:
    """Raw package.json mapping. Unrelated keys and key order are preserved."""

    def __init__(self, path: Path, data: dict[str, Any]) -> None:
        self.path = Path(path)
        self.data = data

    @classmethod
    def load(cls, project_dir: Path) -> PackageDescriptor:
        path = Path(project_dir) / DESCRIPTOR_FILENAME
        if not path.is_file():
            raise PackageDescriptorMissingError(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise MalformedError(f"Failed to parse {path}: {e}", path=path) from e
        if not isinstance(data, dict):
            raise MalformedError(f"{path} must contain a JSON object", path=path)
        return cls(path, data)

    def section(self, name: str) -> dict[str, Any]:
        """Return a mutable section, creating it if absent."""
        value = self.data.get(name)
        if not isinstance(value, dict):
            value = {}
            self.data[name] = value
        return value

    def has(self, name: str, key: str) -> bool:
        value = self.data.get(name)
        return isinstance(value, dict) and key in value

    def discard(self, name: str, key: str) -> bool:
        """Delete key from a section. Returns True if it was present."""
        if not self.has(name, key):
            return False
        del self.data[name][key]
        return True

    def dumps(self) -> str:
        return json.dumps(self.data, indent=2, ensure_ascii=False) + "\n"

    def save(self) -> None:
        _atomic_write(self.path, self.dumps())
