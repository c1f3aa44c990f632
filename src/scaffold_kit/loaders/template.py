from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..models.template import PlaceholdersFile, TemplateManifest
from .manifest import read_json, validate_model

if TYPE_CHECKING:
    from pathlib import Path


@dataclass
class TemplateConfig:
    """Bootstrap configuration shipped inside a project template."""

    manifest: TemplateManifest
    placeholders: PlaceholdersFile


def load_template_config(template_root: Path) -> TemplateConfig:
    """Load config/manifest.json and config/placeholders.json from a template."""
    config_dir = template_root / "config"
    manifest_path = config_dir / "manifest.json"
    placeholders_path = config_dir / "placeholders.json"
    manifest = validate_model(
        TemplateManifest, read_json(manifest_path, role="template manifest"), manifest_path
    )
    placeholders = validate_model(
        PlaceholdersFile,
        read_json(placeholders_path, role="template placeholders"),
        placeholders_path,
    )
    return TemplateConfig(manifest=manifest, placeholders=placeholders)
