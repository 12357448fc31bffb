"""Find the source files a scan should parse."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pathspec

from siteid.config import Settings
from siteid.constants import BINARY_DETECTION_BUFFER

logger = logging.getLogger(__name__)


def discover_sources(
    root: Path,
    settings: Settings | None = None,
) -> list[Path]:
    """Return every source file under ``root``, sorted.

    * Skips hidden directories and those in ``settings.skip_directories``.
    * Skips paths matched by the root ``.gitignore``.
    * Skips symlinks that resolve outside ``root``.
    * Enters each directory once, even when symlinked back into the tree.
    * Keeps files whose suffix is in ``settings.source_extensions``.
    * Skips binary files (null byte in the first 8192 bytes).
    """
    cfg = settings or Settings()
    root = Path(root)
    extensions = frozenset(cfg.source_extensions)
    ignored = _gitignore_spec(root)
    sources = [
        path
        for path in _iter_files(
            root, root, frozenset(cfg.skip_directories), ignored
        )
        if path.suffix.lower() in extensions and not is_binary(path)
    ]
    logger.debug(
        "event=sources_discovered root=%s files=%d", root, len(sources)
    )
    return sources


def is_binary(path: Path) -> bool:
    """True if ``path`` holds a null byte early on, or cannot be read."""
    try:
        with open(path, "rb") as f:
            return b"\x00" in f.read(BINARY_DETECTION_BUFFER)
    except OSError:
        return True


def relative_source_path(path: Path, root: Path) -> str:
    """POSIX path of ``path`` relative to ``root``; fingerprint input."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def _iter_files(
    directory: Path,
    root: Path,
    skip_dirs: frozenset[str],
    ignored: pathspec.PathSpec,
    visited: set[Path] | None = None,
) -> Iterator[Path]:
    """Depth-first, name-ordered walk below ``directory``.

    Gitignore patterns are matched against paths relative to ``root``.
    Each resolved directory is entered once, so symlink cycles end.
    """
    resolved_root = root.resolve()
    if visited is None:
        visited = {directory.resolve()}
    for entry in sorted(directory.iterdir()):
        if entry.is_symlink() and not entry.resolve().is_relative_to(
            resolved_root
        ):
            continue
        rel = relative_source_path(entry, root)
        if entry.is_dir():
            if entry.name.startswith(".") or entry.name in skip_dirs:
                continue
            if ignored.match_file(f"{rel}/"):
                continue
            target = entry.resolve()
            if target in visited:
                logger.debug("event=directory_revisit_skipped path=%s", rel)
                continue
            visited.add(target)
            yield from _iter_files(entry, root, skip_dirs, ignored, visited)
        elif entry.is_file() and not ignored.match_file(rel):
            yield entry


def _gitignore_spec(root: Path) -> pathspec.PathSpec:
    """Patterns from ``root/.gitignore``; empty when absent or unreadable."""
    try:
        lines = (root / ".gitignore").read_text(encoding="utf-8").splitlines()
    except OSError:
        lines = []
    return pathspec.PathSpec.from_lines("gitwildmatch", lines)
