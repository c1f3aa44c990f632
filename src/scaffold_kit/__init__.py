from ._plugin import Plugin
from .bootstrap import Bootstrapper, BootstrapResult, Prompter, StaticPrompter
from .config import ToolConfig
from .errors import (
    InstallRoutineFailedError,
    MalformedError,
    NoInstallRoutineError,
    NotFoundError,
    PackageDescriptorMissingError,
    ProjectExistsError,
    PromptError,
    ScaffoldError,
)
from .loaders import load_manifest, load_plugin, load_template_config
from .manager import (
    InstallResult,
    InstallRoutine,
    ManifestMergeRoutine,
    PackageDescriptor,
    PluginInfo,
    PluginManager,
    PluginSummary,
    RemoveResult,
    build_routine_registry,
    make_plugin_manager,
)
from .models import PluginDependencies, PluginManifest
from .templating import camelize, derive_bindings, materialize, slugify, substitute
from .validation import (
    ValidationIssue,
    ValidationResult,
    lint_plugin,
    validate_manifest,
    validate_manifest_file,
)

__all__ = [
    "BootstrapResult",
    "Bootstrapper",
    "InstallResult",
    "InstallRoutine",
    "InstallRoutineFailedError",
    "MalformedError",
    "ManifestMergeRoutine",
    "NoInstallRoutineError",
    "NotFoundError",
    "PackageDescriptor",
    "PackageDescriptorMissingError",
    "Plugin",
    "PluginDependencies",
    "PluginInfo",
    "PluginManager",
    "PluginManifest",
    "PluginSummary",
    "ProjectExistsError",
    "PromptError",
    "Prompter",
    "RemoveResult",
    "ScaffoldError",
    "StaticPrompter",
    "ToolConfig",
    "ValidationIssue",
    "ValidationResult",
    "build_routine_registry",
    "camelize",
    "derive_bindings",
    "lint_plugin",
    "load_manifest",
    "load_plugin",
    "load_template_config",
    "make_plugin_manager",
    "materialize",
    "slugify",
    "substitute",
    "validate_manifest",
    "validate_manifest_file",
]
