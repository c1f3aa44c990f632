"""Plugin management API: install, remove, info and list."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from ..config import ToolConfig
from ._descriptor import PackageDescriptor
from ._manager import (
    InstallResult,
    PluginInfo,
    PluginManager,
    PluginSummary,
    Readiness,
    RemoveResult,
)
from ._protocols import InstallRoutine, RoutineFactory
from ._routines import (
    BUILTIN_ROUTINES,
    ManifestMergeRoutine,
    build_routine_registry,
    caret_version,
    fixed_spec,
)


def make_plugin_manager(
    plugins_root: Path | None = None,
    factories: Mapping[str, RoutineFactory] | None = None,
) -> PluginManager:
    """Build a PluginManager with routines for the plugins under plugins_root.

    plugins_root: defaults to ToolConfig.default().plugins_root
    factories: defaults to the built-in routines
    """
    plugins_root = Path(plugins_root) if plugins_root else ToolConfig.default().plugins_root
    return PluginManager(
        plugins_root=plugins_root,
        routines=build_routine_registry(plugins_root, factories),
    )


__all__ = [
    "BUILTIN_ROUTINES",
    "InstallResult",
    "InstallRoutine",
    "ManifestMergeRoutine",
    "PackageDescriptor",
    "PluginInfo",
    "PluginManager",
    "PluginSummary",
    "Readiness",
    "RemoveResult",
    "RoutineFactory",
    "build_routine_registry",
    "caret_version",
    "fixed_spec",
    "make_plugin_manager",
]
