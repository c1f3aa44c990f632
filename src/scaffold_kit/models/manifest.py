from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PluginStatus = Literal["available", "planned", "unknown"]


class PluginDependencies(BaseModel):
    """Package names a plugin contributes, split by dependency kind."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    dev: list[str] = []
    prod: list[str] = []


class PluginManifest(BaseModel):
    """Contents of plugins/<name>/manifest.json."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    name: str | None = None
    version: str | None = None
    author: str | None = None
    description: str | None = None
    status: PluginStatus = "available"
    dependencies: PluginDependencies | None = None
    peer_dependencies: dict[str, str] = Field({}, alias="peerDependencies")
    scripts: dict[str, str] = {}
    config_files: list[str] = Field([], alias="configFiles")
    features: dict[str, bool] = {}
    notes: str | None = None

    @property
    def dev_dependencies(self) -> list[str]:
        return self.dependencies.dev if self.dependencies else []

    @property
    def prod_dependencies(self) -> list[str]:
        return self.dependencies.prod if self.dependencies else []
