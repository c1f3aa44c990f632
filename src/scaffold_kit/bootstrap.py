"""Create a new project from the template and install its plugins."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from .config import ToolConfig
from .errors import ProjectExistsError, PromptError
from .loaders.template import load_template_config
from .manager import PluginManager
from .models.template import PlaceholderSpec
from .templating import derive_bindings, materialize

logger = logging.getLogger(__name__)

DEFAULT_GITIGNORE = """node_modules/
.svelte-kit/
build/
dist/
.DS_Store
*.log
.env
.env.local
target/
*.pdb
"""


class Prompter(Protocol):
    """Asks the user for placeholder values and optional plugins."""

    def ask(self, key: str, spec: PlaceholderSpec) -> str: ...
    def choose_plugins(self, optional: list[str]) -> list[str]: ...


class StaticPrompter:
    """Answers prompts from a fixed mapping; unanswered keys get an empty string."""

    def __init__(
        self, answers: Mapping[str, str] | None = None, plugins: list[str] | None = None
    ) -> None:
        self.answers = dict(answers or {})
        self.plugins = list(plugins or [])

    def ask(self, key: str, spec: PlaceholderSpec) -> str:
        return self.answers.get(key, "")

    def choose_plugins(self, optional: list[str]) -> list[str]:
        return [name for name in self.plugins if name in optional]


@dataclass
class BootstrapResult:
    project_dir: Path
    bindings: dict[str, str]
    installed: list[str] = field(default_factory=list)
    skipped: dict[str, str] = field(default_factory=dict)  # name -> reason


def resolve_answer(key: str, spec: PlaceholderSpec, answer: str) -> str:
    """Apply the default, required and validation rules to one raw answer."""
    answer = answer.strip()
    if not answer and spec.default:
        answer = spec.default
    if not answer and spec.required:
        raise PromptError(key, f"{key} is required")
    if spec.validation and answer and not re.search(spec.validation, answer):
        raise PromptError(key, f"Invalid format for {key}")
    return answer


class Bootstrapper:
    def __init__(self, config: ToolConfig, manager: PluginManager, prompter: Prompter) -> None:
        self._config = config
        self._manager = manager
        self._prompter = prompter

    def run(self, project_name: str, parent_dir: Path | None = None) -> BootstrapResult:
        project_dir = Path(parent_dir or Path.cwd()) / project_name
        if project_dir.exists():
            raise ProjectExistsError(project_dir)

        template = load_template_config(self._config.template_root)

        values: dict[str, str] = {}
        for key, spec in template.placeholders.placeholders.items():
            if key == "PROJECT_NAME" and not spec.default:
                spec = spec.model_copy(update={"default": project_name})
            values[key] = resolve_answer(key, spec, self._prompter.ask(key, spec))
        values.setdefault("PROJECT_NAME", project_name)

        selected = list(template.manifest.plugins.required)
        optional = template.manifest.plugins.optional
        if optional:
            for name in self._prompter.choose_plugins(list(optional)):
                if name not in selected:
                    selected.append(name)

        bindings = derive_bindings(values)

        logger.info("Creating project: %s...", project_name)
        project_dir.mkdir(parents=True)
        logger.info("Copying template files...")
        materialize(self._config.template_root, project_dir, bindings)

        result = BootstrapResult(project_dir=project_dir, bindings=bindings)
        if selected:
            logger.info("Installing %d plugin(s)...", len(selected))
        for name in selected:
            if not self._manager.has_plugin(name):
                logger.info("Plugin %s not found, skipping...", name)
                result.skipped[name] = "not found"
                continue
            outcome = self._manager.install(name, project_dir)
            if outcome.installed:
                result.installed.append(name)
            else:
                result.skipped[name] = outcome.notes or "planned"

        gitignore = project_dir / ".gitignore"
        if not gitignore.exists():
            gitignore.write_text(DEFAULT_GITIGNORE, encoding="utf-8")

        return result
