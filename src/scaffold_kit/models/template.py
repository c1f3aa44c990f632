from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TemplatePlugins(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    required: list[str] = []
    optional: list[str] = []


class TemplateManifest(BaseModel):
    """Contents of <template>/config/manifest.json."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    name: str | None = None
    version: str | None = None
    plugins: TemplatePlugins = TemplatePlugins()


class PlaceholderSpec(BaseModel):
    """How to ask for one placeholder value during bootstrap."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    description: str
    default: str | None = None
    required: bool = False
    validation: str | None = None  # regex the answer must match


class PlaceholdersFile(BaseModel):
    """Contents of <template>/config/placeholders.json."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    placeholders: dict[str, PlaceholderSpec] = {}
