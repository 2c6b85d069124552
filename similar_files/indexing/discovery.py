"""
Workspace file discovery.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


def iter_workspace_files(
    root: str | Path,
    allowed_extensions: Iterable[str],
    excluded_dirs: Iterable[str],
) -> Iterator[Path]:
    """
    Lazily walk ``root`` and yield files whose extension is allowed.

    Excluded directory names and hidden directories are not descended into.
    Entries are visited in sorted order so repeated builds list files identically.
    """
    allowed = {ext.lower() for ext in allowed_extensions}
    excluded = set(excluded_dirs)

    def _on_error(err: OSError) -> None:
        logger.warning("Skipping unreadable directory", extra={"dir": err.filename, "error": err.strerror})

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames[:] = sorted(d for d in dirnames if d not in excluded and not d.startswith("."))
        for name in sorted(filenames):
            if Path(name).suffix.lower() in allowed:
                yield Path(dirpath) / name


__all__ = ["iter_workspace_files"]
