"""Built-in install routines and the name -> routine lookup table."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

from ..loaders.manifest import discover_plugin_dirs, load_manifest
from ..models.manifest import PluginManifest
from ._descriptor import PackageDescriptor
from ._protocols import InstallRoutine, RoutineFactory

logger = logging.getLogger(__name__)

# (manifest, package name) -> version spec written into package.json
VersionSpec = Callable[[PluginManifest, str], str]


def caret_version(manifest: PluginManifest, package: str) -> str:
    return f"^{manifest.version}"


def fixed_spec(spec: str) -> VersionSpec:
    def _spec(manifest: PluginManifest, package: str) -> str:
        return spec

    return _spec


class ManifestMergeRoutine:
    """Merges a plugin's manifest into the target package.json.

    Dependencies and scripts are written key by key, overwriting existing keys
    of the same name. Declared config files are copied from the plugin's
    config/ directory when the source exists; missing sources are skipped.
    """

    def __init__(
        self,
        plugin_dir: Path,
        prod_spec: VersionSpec = fixed_spec("latest"),
        dev_spec: VersionSpec = fixed_spec("latest"),
        peer_dev_dependencies: Iterable[str] = (),
        copy_config: bool = True,
    ) -> None:
        self.plugin_dir = Path(plugin_dir)
        self.prod_spec = prod_spec
        self.dev_spec = dev_spec
        self.peer_dev_dependencies = tuple(peer_dev_dependencies)
        self.copy_config = copy_config

    def apply(self, target_dir: Path) -> None:
        manifest = load_manifest(self.plugin_dir)
        descriptor = PackageDescriptor.load(target_dir)

        if manifest.prod_dependencies:
            prod = descriptor.section("dependencies")
            for dep in manifest.prod_dependencies:
                prod[dep] = self.prod_spec(manifest, dep)
        if manifest.dev_dependencies:
            dev = descriptor.section("devDependencies")
            for dep in manifest.dev_dependencies:
                dev[dep] = self.dev_spec(manifest, dep)

        for peer in self.peer_dev_dependencies:
            spec = manifest.peer_dependencies.get(peer)
            if spec is None:
                continue
            # only when the project does not already depend on it
            if descriptor.has("dependencies", peer) or descriptor.has("devDependencies", peer):
                continue
            descriptor.section("devDependencies")[peer] = spec

        if manifest.scripts:
            descriptor.section("scripts").update(manifest.scripts)

        descriptor.save()

        if self.copy_config:
            for relative in manifest.config_files:
                self._copy_config_file(relative, Path(target_dir))

    def _copy_config_file(self, relative: str, target_dir: Path) -> None:
        src = self.plugin_dir / "config" / relative
        dest = target_dir / relative
        if src.is_dir():
            shutil.copytree(src, dest, dirs_exist_ok=True)
        elif src.is_file():
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(src, dest)
        else:
            logger.debug("Config source %s missing, skipping", src)
            return
        logger.info("Added config file: %s", relative)


def praxis_routine(plugin_dir: Path) -> InstallRoutine:
    return ManifestMergeRoutine(
        plugin_dir, prod_spec=caret_version, peer_dev_dependencies=("svelte",)
    )


def adp_routine(plugin_dir: Path) -> InstallRoutine:
    source = fixed_spec("github:plures/adp")
    return ManifestMergeRoutine(plugin_dir, prod_spec=source, dev_spec=source)


BUILTIN_ROUTINES: dict[str, RoutineFactory] = {
    "praxis": praxis_routine,
    "adp": adp_routine,
}


def build_routine_registry(
    plugins_root: Path,
    factories: Mapping[str, RoutineFactory] | None = None,
) -> dict[str, InstallRoutine]:
    """Build the name -> routine table for the plugins present under plugins_root."""
    factories = BUILTIN_ROUTINES if factories is None else factories
    registry: dict[str, InstallRoutine] = {}
    for plugin_dir in discover_plugin_dirs(Path(plugins_root)):
        factory = factories.get(plugin_dir.name)
        if factory is not None:
            registry[plugin_dir.name] = factory(plugin_dir)
    return registry
