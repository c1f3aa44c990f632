from __future__ import annotations

import traceback
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every fatal scaffold-kit failure."""


class NotFoundError(ScaffoldError):
    """Raised when a plugin directory, manifest, template file or package.json is missing.

    Attributes:
        path: The path that does not exist, if applicable.
        role: What the missing path was supposed to be (e.g. "plugin", "manifest").
    """

    def __init__(self, message: str, path: Path | None = None, role: str | None = None) -> None:
        self.path = path
        self.role = role
        super().__init__(message)


class PackageDescriptorMissingError(NotFoundError):
    """Raised when the target project has no package.json."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"package.json not found in {path.parent}", path=path, role="package descriptor"
        )


class MalformedError(ScaffoldError):
    """Raised when a JSON document exists but cannot be parsed or validated.

    Attributes:
        path: The file that failed to parse, if applicable.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class NoInstallRoutineError(ScaffoldError):
    """Raised when a registered install routine exposes no callable apply()."""

    def __init__(self, plugin_name: str) -> None:
        self.plugin_name = plugin_name
        super().__init__(
            f"Plugin {plugin_name} has a misconfigured install routine; manual installation required"
        )


class InstallRoutineFailedError(ScaffoldError):
    """Raised when a plugin's install routine raises.

    Attributes:
        plugin_name: The plugin being installed.
        detail: The underlying error text.
        trace: Formatted traceback of the underlying error.
    """

    def __init__(self, plugin_name: str, cause: BaseException) -> None:
        self.plugin_name = plugin_name
        self.detail = str(cause) or type(cause).__name__
        self.trace = "".join(traceback.format_exception(type(cause), cause, cause.__traceback__))
        super().__init__(f"Failed to install plugin {plugin_name}: {self.detail}")


class ProjectExistsError(ScaffoldError):
    """Raised when bootstrapping into a directory that already exists."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Directory {path.name} already exists")


class PromptError(ScaffoldError):
    """Raised when an answer to a bootstrap prompt is missing or invalid."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(message)
