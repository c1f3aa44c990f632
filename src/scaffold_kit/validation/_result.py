from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


@dataclass
class ValidationIssue:
    """A single lint finding (error or warning)."""

    level: Literal["error", "warning"]
    path: str  # manifest field the issue was found in, e.g. "dependencies.dev[1]"
    message: str


@dataclass
class ValidationResult:
    """Result of linting a plugin manifest or plugin directory.

    Attributes:
        issues: All errors and warnings. Use .errors and .warnings for filtered views.
        valid: True if there are no errors (warnings are allowed).
    """

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not any(i.level == "error" for i in self.issues)

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == "warning"]

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == "error"]

    def error(self, path: str, message: str) -> None:
        self.issues.append(ValidationIssue("error", path, message))

    def warning(self, path: str, message: str) -> None:
        self.issues.append(ValidationIssue("warning", path, message))
