from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from .models.manifest import PluginManifest


@dataclass
class Plugin:
    """A plugin directory under the plugins root.

    Attributes:
        name: Logical plugin name (identical to the directory name).
        root: Path to the plugin directory.
        manifest: Parsed manifest.json.
    """

    name: str
    root: Path
    manifest: PluginManifest

    @property
    def config_dir(self) -> Path:
        return self.root / "config"

    def config_source(self, relative: str) -> Path:
        """Where a declared config file's literal contents live inside the plugin."""
        return self.config_dir / relative
