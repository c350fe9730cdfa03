"""Plain-text rendering of scan results for the CLI."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from linksweep.checker.status import BadLink, BadLinkStatus, StatusKind
from linksweep.scanner.models import LinkLocation


def render_location(location: LinkLocation) -> str:
    return str(location)


def render_bad_link(bad_link: BadLink) -> str:
    """Render a bad link as the three-line ``Path/Link/Status code`` block."""
    text = str(bad_link)
    if bad_link.outcome is not None and bad_link.outcome.kind is not StatusKind.BAD:
        text += f" ({bad_link.outcome.kind.value})"
    return text


def render_bad_link_status(status: BadLinkStatus) -> str:
    return str(status)


def render_summary(bad_links: Iterable[BadLink]) -> str:
    """Summarise bad links by status code, e.g. ``3 bad link(s): 404 x2, 0 x1``."""
    counts = Counter(b.status_code for b in bad_links)
    total = sum(counts.values())
    if not total:
        return "No bad links found."
    parts = ", ".join(f"{code} x{n}" for code, n in sorted(counts.items()))
    return f"{total} bad link(s): {parts}"
