"""Protocols (ports) for the plugin manager."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Protocol


class InstallRoutine(Protocol):
    """A plugin-specific installation step.

    apply() receives the absolute path of the target project. It may return an
    awaitable, which the installer drives to completion before continuing.
    Raising signals failure.
    """

    def apply(self, target_dir: Path) -> Awaitable[None] | None: ...


# Builds a plugin's routine from its directory under the plugins root.
RoutineFactory = Callable[[Path], InstallRoutine]
