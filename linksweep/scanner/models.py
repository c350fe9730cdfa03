"""Data models for the link scanning pipeline."""

from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class LinkLocation:
    """The path to the file containing the link, and the link."""

    path: str
    link: str

    def __str__(self) -> str:
        return f"{self.path}: {self.link}"


@dataclass(frozen=True)
class BlacklistedDirectory:
    """A directory whose files are never scanned.

    The directory is enumerated with its own traversal policy, independent of
    the policy used for the directory being scanned.
    """

    path: str
    recursive: bool = True
    follow_links: bool = True


@dataclass(frozen=True)
class ScanOptions:
    """Blacklist and traversal configuration shared by the scan operations."""

    recursive: bool = True
    follow_links: bool = True
    blacklisted_directories: tuple[BlacklistedDirectory, ...] = field(default_factory=tuple)
    blacklisted_file_paths: tuple[str, ...] = field(default_factory=tuple)
    blacklisted_links: frozenset[str] = field(default_factory=frozenset)
    blacklisted_patterns: tuple[re.Pattern[str], ...] = field(default_factory=tuple)

    def as_kwargs(self) -> dict[str, object]:
        """Return the options as keyword arguments for the directory scans."""
        return {
            "recursive": self.recursive,
            "follow_links": self.follow_links,
            "blacklisted_directories": self.blacklisted_directories,
            "blacklisted_file_paths": self.blacklisted_file_paths,
            "blacklisted_links": self.blacklisted_links,
            "blacklisted_patterns": self.blacklisted_patterns,
        }
