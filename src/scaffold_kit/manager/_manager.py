"""PluginManager: install, remove, describe and list plugins for a project."""

from __future__ import annotations

import asyncio
import inspect
import logging
import os
import shutil
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from .._plugin import Plugin
from ..errors import (
    InstallRoutineFailedError,
    MalformedError,
    NoInstallRoutineError,
    PackageDescriptorMissingError,
)
from ..loaders.manifest import MANIFEST_FILENAME, discover_plugin_dirs, load_plugin
from ..models.manifest import PluginStatus
from ..templating import materialize
from ._descriptor import DESCRIPTOR_FILENAME, PackageDescriptor
from ._protocols import InstallRoutine

logger = logging.getLogger(__name__)

Readiness = Literal["ready", "planned", "manual"]


@dataclass
class InstallResult:
    plugin: str
    outcome: Literal["installed", "skipped"]
    method: Literal["routine", "copy"] | None = None
    reason: Literal["planned"] | None = None
    notes: str | None = None

    @property
    def installed(self) -> bool:
        return self.outcome == "installed"


@dataclass
class RemoveResult:
    plugin: str
    removed_dependencies: list[str] = field(default_factory=list)
    removed_scripts: list[str] = field(default_factory=list)
    removed_files: list[str] = field(default_factory=list)
    failed_files: dict[str, str] = field(default_factory=dict)  # path -> error text

    @property
    def descriptor_changed(self) -> bool:
        return bool(self.removed_dependencies or self.removed_scripts)


@dataclass
class PluginSummary:
    name: str
    status: PluginStatus
    version: str | None = None
    description: str | None = None
    notes: str | None = None


@dataclass
class PluginInfo:
    plugin: Plugin
    config_files: dict[str, bool]  # declared path -> source present in config/
    has_install_routine: bool

    @property
    def readiness(self) -> Readiness:
        if self.plugin.manifest.status == "planned":
            return "planned"
        if not self.has_install_routine:
            return "manual"
        return "ready"


async def _drive(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


class PluginManager:
    def __init__(
        self,
        plugins_root: Path,
        routines: Mapping[str, InstallRoutine] | None = None,
    ) -> None:
        self._plugins_root = Path(plugins_root)
        self._routines = dict(routines or {})

    @property
    def plugins_root(self) -> Path:
        return self._plugins_root

    def has_plugin(self, name: str) -> bool:
        return (self._plugins_root / name).is_dir()

    def get_plugin(self, name: str) -> Plugin:
        return load_plugin(self._plugins_root, name)

    def routine_for(self, name: str) -> InstallRoutine | None:
        return self._routines.get(name)

    def install(self, plugin_name: str, project_dir: Path) -> InstallResult:
        """Merge a plugin into the project at project_dir.

        Planned plugins are skipped without touching the project. When a routine
        is registered for the plugin it does the merge; otherwise the plugin
        directory is copied into the project as-is.
        """
        plugin = self.get_plugin(plugin_name)
        manifest = plugin.manifest
        if manifest.status == "planned":
            logger.warning("Plugin '%s' is planned but not yet available", plugin_name)
            return InstallResult(
                plugin=plugin_name, outcome="skipped", reason="planned", notes=manifest.notes
            )

        project_dir = Path(project_dir).resolve()
        descriptor_path = project_dir / DESCRIPTOR_FILENAME
        if not descriptor_path.is_file():
            raise PackageDescriptorMissingError(descriptor_path)

        routine = self._routines.get(plugin_name)
        if routine is None:
            logger.info("Plugin %s has no install routine, copying files...", plugin_name)
            materialize(plugin.root, project_dir, {})
            return InstallResult(plugin=plugin_name, outcome="installed", method="copy")

        apply = getattr(routine, "apply", None)
        if not callable(apply):
            raise NoInstallRoutineError(plugin_name)

        logger.info("Installing plugin: %s...", plugin_name)
        try:
            outcome = apply(project_dir)
            if inspect.isawaitable(outcome):
                asyncio.run(_drive(outcome))
        except Exception as e:
            raise InstallRoutineFailedError(plugin_name, e) from e
        return InstallResult(plugin=plugin_name, outcome="installed", method="routine")

    def remove(self, plugin_name: str, project_dir: Path) -> RemoveResult:
        """Delete the plugin's declared dependencies, scripts and config files.

        Only keys named in the manifest are touched. package.json is rewritten
        only if something was removed. Config file deletions are best-effort:
        a failure is recorded and the remaining files are still processed.
        Sections emptied by the removal stay in package.json as empty mappings,
        so a section that install created is left behind as e.g. "scripts": {}.
        """
        plugin = self.get_plugin(plugin_name)
        manifest = plugin.manifest
        project_dir = Path(project_dir)
        descriptor = PackageDescriptor.load(project_dir)
        result = RemoveResult(plugin=plugin_name)

        logger.info("Removing plugin: %s...", plugin_name)
        for dep in manifest.dev_dependencies:
            if descriptor.discard("devDependencies", dep):
                logger.info("Removed dev dependency: %s", dep)
                result.removed_dependencies.append(dep)
        for dep in manifest.prod_dependencies:
            if descriptor.discard("dependencies", dep):
                logger.info("Removed dependency: %s", dep)
                result.removed_dependencies.append(dep)
        for script in manifest.scripts:
            if descriptor.discard("scripts", script):
                logger.info("Removed script: %s", script)
                result.removed_scripts.append(script)

        if result.descriptor_changed:
            descriptor.save()
        else:
            logger.warning(
                "No changes made to %s (plugin may not have been installed)", DESCRIPTOR_FILENAME
            )

        root = project_dir.resolve()
        for relative in manifest.config_files:
            # normpath, not resolve: a symlink inside the project is removed itself
            path = Path(os.path.normpath(root / relative))
            if path == root or not path.is_relative_to(root):
                logger.warning("Refusing to remove %s: outside the project root", relative)
                result.failed_files[relative] = "outside the project root"
                continue
            if not (path.exists() or path.is_symlink()):
                continue
            try:
                if path.is_dir() and not path.is_symlink():
                    shutil.rmtree(path)
                else:
                    path.unlink()
            except OSError as e:
                logger.warning("Failed to remove %s: %s", relative, e)
                result.failed_files[relative] = str(e)
                continue
            logger.info("Removed config file: %s", relative)
            result.removed_files.append(relative)

        return result

    def info(self, plugin_name: str) -> PluginInfo:
        plugin = self.get_plugin(plugin_name)
        config_files = {
            relative: plugin.config_source(relative).exists()
            for relative in plugin.manifest.config_files
        }
        return PluginInfo(
            plugin=plugin,
            config_files=config_files,
            has_install_routine=plugin_name in self._routines,
        )

    def list_plugins(self) -> list[PluginSummary]:
        summaries: list[PluginSummary] = []
        for plugin_dir in discover_plugin_dirs(self._plugins_root):
            name = plugin_dir.name
            if not (plugin_dir / MANIFEST_FILENAME).is_file():
                summaries.append(PluginSummary(name=name, status="unknown"))
                continue
            try:
                manifest = self.get_plugin(name).manifest
            except MalformedError as e:
                summaries.append(PluginSummary(name=name, status="unknown", notes=str(e)))
                continue
            summaries.append(
                PluginSummary(
                    name=name,
                    status=manifest.status,
                    version=manifest.version,
                    description=manifest.description,
                    notes=manifest.notes,
                )
            )
        return summaries
