"""Link extraction: finds every HTTP(S) link in a string or a file."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

import markdown

from linksweep.scanner.normalizer import LINK_PATTERN, parse_url

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = (
    ".markdown",
    ".mdown",
    ".mkdn",
    ".md",
    ".mkd",
    ".mdwn",
    ".mdtxt",
    ".mdtext",
    ".text",
    ".Rmd",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def compile_patterns(patterns: Iterable[str | re.Pattern[str]]) -> tuple[re.Pattern[str], ...]:
    """Compile any plain-string entries of *patterns*; compiled ones pass through."""
    return tuple(p if isinstance(p, re.Pattern) else re.compile(p) for p in patterns)


def _is_blacklisted(
    link: str,
    blacklisted_links: Iterable[str],
    blacklisted_patterns: Iterable[re.Pattern[str]],
) -> bool:
    if link in blacklisted_links:
        return True
    return any(pattern.search(link) for pattern in blacklisted_patterns)


def is_markdown_path(path: str | Path) -> bool:
    """Return ``True`` if *path* ends with a recognised Markdown extension."""
    return str(path).endswith(MARKDOWN_EXTENSIONS)


def render_markdown(text: str) -> str:
    """Render Markdown *text* to HTML so reference-style links are resolved."""
    return markdown.markdown(text)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_links(
    content: str,
    blacklisted_links: Iterable[str] = (),
    blacklisted_patterns: Iterable[str | re.Pattern[str]] = (),
) -> list[str]:
    """Return the links found in *content*, in order of appearance.

    Every pattern match is passed through
    :func:`~linksweep.scanner.normalizer.parse_url`.  A normalised link is
    dropped when it no longer matches the link pattern, when it is one of
    *blacklisted_links*, or when any of *blacklisted_patterns* matches it.
    Duplicates are kept.
    """
    literal = frozenset(blacklisted_links)
    patterns = compile_patterns(blacklisted_patterns)

    links: list[str] = []
    for match in LINK_PATTERN.finditer(content):
        link = parse_url(match.group(0))
        if not LINK_PATTERN.fullmatch(link):
            continue
        if _is_blacklisted(link, literal, patterns):
            continue
        links.append(link)
    return links


def get_links_in_file(
    path: str | Path,
    blacklisted_links: Iterable[str] = (),
    blacklisted_patterns: Iterable[str | re.Pattern[str]] = (),
) -> list[str]:
    """Return the links found in the file at *path*.

    Markdown files are rendered to HTML first.  A file that cannot be read as
    text (a binary, a directory, a permissions problem) has no links.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Skipping unreadable file %s: %s", path, exc)
        return []

    if is_markdown_path(path):
        content = render_markdown(content)

    return extract_links(content, blacklisted_links, blacklisted_patterns)
