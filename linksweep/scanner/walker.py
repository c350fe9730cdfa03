"""Directory traversal: yields every link location found under a directory.

``get_links_in_directory`` is a generator.  Nothing is read until the caller
starts iterating, files are read one at a time, and the caller may stop at
any point.  The order in which files are visited is not guaranteed.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from linksweep.scanner.extractor import compile_patterns, get_links_in_file
from linksweep.scanner.models import BlacklistedDirectory, LinkLocation

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Filesystem enumeration
# ---------------------------------------------------------------------------

def _is_regular_file(path: str, follow_links: bool) -> bool:
    if not follow_links and os.path.islink(path):
        return False
    return os.path.isfile(path)


def _log_walk_error(exc: OSError) -> None:
    logger.debug("Skipping unreadable entry %s: %s", exc.filename, exc)


def iter_files(root: str | Path, recursive: bool = True, follow_links: bool = True) -> Iterator[str]:
    """Yield the paths of the regular files under *root*.

    Paths are built by joining onto *root* as given, so a relative root yields
    relative paths.  Directories, broken symlinks and other non-regular
    entries are skipped.  A *root* that does not exist yields nothing.
    """
    root = os.fspath(root)
    if not recursive:
        try:
            names = sorted(os.listdir(root))
        except OSError as exc:
            _log_walk_error(exc)
            return
        for name in names:
            path = os.path.join(root, name)
            if _is_regular_file(path, follow_links):
                yield path
        return

    # Real paths of each directory's ancestors, keyed by the path os.walk
    # will yield for it.  A directory that resolves to one of its own
    # ancestors closes a symlink cycle; other repeat visits are kept.
    ancestors: dict[str, frozenset[str]] = {}
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error, followlinks=follow_links):
        if follow_links:
            real = os.path.realpath(dirpath)
            chain = ancestors.pop(dirpath, frozenset())
            if real in chain:
                dirnames[:] = []
                continue
            chain = chain | {real}
            for name in dirnames:
                ancestors[os.path.join(dirpath, name)] = chain
        for name in filenames:
            path = os.path.join(dirpath, name)
            if _is_regular_file(path, follow_links):
                yield path


def get_file_paths_in_blacklisted_directories(
    directories: Iterable[BlacklistedDirectory],
) -> list[str]:
    """Return every file found in *directories*, each walked with its own policy.

    Directories that do not exist contribute nothing.
    """
    paths: list[str] = []
    for directory in directories:
        if not os.path.isdir(directory.path):
            logger.debug("Blacklisted directory %s does not exist", directory.path)
            continue
        paths.extend(
            iter_files(directory.path, recursive=directory.recursive, follow_links=directory.follow_links)
        )
    return paths


def is_blacklisted_path(path: str, blacklisted_paths: Iterable[str]) -> bool:
    """Return whether *path* ends with any of *blacklisted_paths*."""
    return any(path.endswith(blacklisted) for blacklisted in blacklisted_paths)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def get_links_in_directory(
    path: str | Path | None = None,
    *,
    recursive: bool = True,
    follow_links: bool = True,
    blacklisted_directories: Iterable[BlacklistedDirectory] = (),
    blacklisted_file_paths: Iterable[str] = (),
    blacklisted_links: Iterable[str] = (),
    blacklisted_patterns: Iterable[str | re.Pattern[str]] = (),
) -> Iterator[LinkLocation]:
    """Yield the links found in the directory at *path*.

    Args:
        path: Directory to scan.  Defaults to the current working directory.
        recursive: Descend into subdirectories.
        follow_links: Follow symbolic links.
        blacklisted_directories: Directories whose files are never scanned.
        blacklisted_file_paths: Files that are never scanned.  A file is
            skipped when its path *ends with* one of these.
        blacklisted_links: Links that are never yielded.
        blacklisted_patterns: Regexes matching links that are never yielded.

    Yields:
        One :class:`LinkLocation` per link, per file.
    """
    root = os.getcwd() if path is None else os.fspath(path)
    literal = frozenset(blacklisted_links)
    patterns = compile_patterns(blacklisted_patterns)

    excluded = list(blacklisted_file_paths)
    excluded.extend(get_file_paths_in_blacklisted_directories(blacklisted_directories))

    for file_path in iter_files(root, recursive=recursive, follow_links=follow_links):
        if is_blacklisted_path(file_path, excluded):
            logger.debug("Skipping blacklisted file %s", file_path)
            continue
        for link in get_links_in_file(file_path, literal, patterns):
            yield LinkLocation(file_path, link)
