"""Filesystem locations the tool works from."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DATA_DIR = Path(__file__).resolve().parent / "data"

PLUGINS_DIR_ENV = "SCAFFOLD_KIT_PLUGINS_DIR"
TEMPLATE_DIR_ENV = "SCAFFOLD_KIT_TEMPLATE_DIR"


@dataclass(frozen=True)
class ToolConfig:
    """Where plugins and the project template live.

    Core components receive these paths at construction and never look them
    up on their own, so tests can point them at temporary directories.
    """

    plugins_root: Path
    template_root: Path

    @classmethod
    def default(cls) -> ToolConfig:
        """Bundled data directories, overridable through the environment."""
        plugins = os.environ.get(PLUGINS_DIR_ENV)
        template = os.environ.get(TEMPLATE_DIR_ENV)
        return cls(
            plugins_root=Path(plugins) if plugins else DATA_DIR / "plugins",
            template_root=Path(template) if template else DATA_DIR / "template",
        )

    def with_overrides(
        self, plugins_root: Path | None = None, template_root: Path | None = None
    ) -> ToolConfig:
        return ToolConfig(
            plugins_root=plugins_root or self.plugins_root,
            template_root=template_root or self.template_root,
        )
