"""Candidate file discovery for the audit."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


DEFAULT_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")

DEFAULT_IGNORED_NAMES = frozenset({
    "node_modules",
    ".next",
    ".git",
    "dist",
    "build",
})


@dataclass(frozen=True)
class WalkConfig:
    root_dir: Path
    allowed_extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    ignored_names: frozenset[str] = DEFAULT_IGNORED_NAMES


def walk(config: WalkConfig) -> list[Path]:
    """
    List every file under the root that should be scanned.

    Entries whose basename is in ``ignored_names`` are skipped at any depth,
    without descending into them. A missing root yields an empty list.
    Entries are sorted by name at each level.

    Returns:
        Absolute file paths in depth-first order.
    """
    root = config.root_dir.resolve()
    if not root.is_dir():
        logger.debug("Root %s does not exist, nothing to scan", root)
        return []
    return list(_walk(root, tuple(config.allowed_extensions), config.ignored_names))


def _walk(
    current: Path,
    extensions: tuple[str, ...],
    ignored: frozenset[str],
) -> Iterator[Path]:
    try:
        entries = sorted(current.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        logger.warning("Skipping unreadable directory %s: %s", current, exc)
        return

    for entry in entries:
        if entry.name in ignored:
            continue
        try:
            if entry.is_dir():
                # Symlinked directories are not followed.
                if not entry.is_symlink():
                    yield from _walk(entry, extensions, ignored)
            elif entry.is_file() and entry.name.endswith(extensions):
                yield entry
        except OSError as exc:
            logger.warning("Skipping unreadable entry %s: %s", entry, exc)
