import json
from pathlib import Path

import pytest

BASE_PACKAGE = {
    "name": "demo-app",
    "version": "0.1.0",
    "private": True,
    "scripts": {"dev": "vite dev", "build": "vite build"},
    "dependencies": {"left-pad": "^1.3.0"},
    "devDependencies": {"vite": "^6.0.0"},
}


def write_plugin(root: Path, name: str, manifest, config=None) -> Path:
    """Create plugins/<name>/ with a manifest (dict or raw text) and config/ files."""
    plugin_dir = root / name
    plugin_dir.mkdir(parents=True)
    if manifest is not None:
        text = manifest if isinstance(manifest, str) else json.dumps(manifest, indent=2)
        (plugin_dir / "manifest.json").write_text(text)
    for relative, content in (config or {}).items():
        path = plugin_dir / "config" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return plugin_dir


def write_project(root: Path, package=None) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    data = BASE_PACKAGE if package is None else package
    (root / "package.json").write_text(json.dumps(data, indent=2) + "\n")
    return root


def read_package(project: Path) -> dict:
    return json.loads((project / "package.json").read_text())


@pytest.fixture
def plugins_root(tmp_path):
    root = tmp_path / "plugins"
    root.mkdir()
    return root


@pytest.fixture
def project(tmp_path):
    return write_project(tmp_path / "project")
