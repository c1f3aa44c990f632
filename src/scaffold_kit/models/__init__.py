from .manifest import PluginDependencies, PluginManifest, PluginStatus
from .template import PlaceholderSpec, PlaceholdersFile, TemplateManifest, TemplatePlugins

__all__ = [
    "PlaceholderSpec",
    "PlaceholdersFile",
    "PluginDependencies",
    "PluginManifest",
    "PluginStatus",
    "TemplateManifest",
    "TemplatePlugins",
]
