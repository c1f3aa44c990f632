from __future__ import annotations

import logging
import shutil
from collections.abc import Mapping
from pathlib import Path

from ._placeholders import substitute

logger = logging.getLogger(__name__)

EXCLUDED_DIRS = frozenset({".git", "node_modules", "target"})


def materialize(source: Path, dest: Path, bindings: Mapping[str, str]) -> None:
    """Copy a template tree to dest, substituting placeholders in every file.

    Children named .git, node_modules or target are skipped entirely. Files
    that are not valid UTF-8 (icons, fonts) are copied byte-for-byte.
    Existing destination files are overwritten. Any read or write error aborts
    the copy, leaving whatever was already written in place.
    """
    if source.is_dir():
        dest.mkdir(parents=True, exist_ok=True)
        for child in sorted(source.iterdir()):
            if child.name in EXCLUDED_DIRS:
                logger.debug("Skipping excluded path %s", child)
                continue
            materialize(child, dest / child.name, bindings)
        return

    dest.parent.mkdir(parents=True, exist_ok=True)
    try:
        content = source.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        shutil.copyfile(source, dest)
        logger.debug("Copied binary file %s", dest)
        return
    dest.write_text(substitute(content, bindings), encoding="utf-8")
    logger.debug("Wrote %s", dest)
