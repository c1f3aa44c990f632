from .manifest import discover_plugin_dirs, load_manifest, load_plugin
from .template import TemplateConfig, load_template_config

__all__ = [
    "TemplateConfig",
    "discover_plugin_dirs",
    "load_manifest",
    "load_plugin",
    "load_template_config",
]
