"""Bad-link scans: run extracted links through the classifier.

Each function is a generator.  Probes run on a thread pool sized by
``settings.max_concurrent_probes``; at most that many are in flight ahead of
the consumer, and results come back in the order the links were found.
Stopping iteration early lets in-flight probes finish but starts no new ones.
"""

from __future__ import annotations

import contextlib
import re
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import TypeVar

import httpx

from linksweep.checker.classifier import can_use_https, classify_link, is_https_link, make_client
from linksweep.checker.status import BadLink, BadLinkStatus, LinkStatus
from linksweep.config import settings
from linksweep.scanner.extractor import extract_links, get_links_in_file
from linksweep.scanner.models import BlacklistedDirectory, LinkLocation
from linksweep.scanner.walker import get_links_in_directory

T = TypeVar("T")
R = TypeVar("R")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def iter_probed(
    items: Iterable[T],
    probe: Callable[[T], R],
    max_workers: int | None = None,
) -> Iterator[tuple[T, R]]:
    """Yield ``(item, probe(item))`` for each of *items*, in input order.

    *items* is consumed lazily: no more than *max_workers* probes are
    submitted ahead of the consumer.
    """
    limit = max_workers or settings.probe_workers
    pool = ThreadPoolExecutor(max_workers=limit, thread_name_prefix="linksweep-probe")
    pending: deque[tuple[T, Future[R]]] = deque()
    try:
        for item in items:
            pending.append((item, pool.submit(probe, item)))
            if len(pending) >= limit:
                done_item, future = pending.popleft()
                yield done_item, future.result()
        while pending:
            done_item, future = pending.popleft()
            yield done_item, future.result()
    finally:
        pool.shutdown(wait=True, cancel_futures=True)


@contextlib.contextmanager
def _client_scope(client: httpx.Client | None) -> Iterator[httpx.Client]:
    if client is not None:
        yield client
        return
    with make_client() as own_client:
        yield own_client


def _bad_link_statuses(links: Iterable[str], client: httpx.Client | None) -> Iterator[BadLinkStatus]:
    with _client_scope(client) as active:
        for link, status in iter_probed(links, lambda lnk: classify_link(lnk, active)):
            if status is not None:
                yield BadLinkStatus(link, status.code, status)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def get_bad_links_in_text(
    content: str,
    blacklisted_links: Iterable[str] = (),
    blacklisted_patterns: Iterable[str | re.Pattern[str]] = (),
    client: httpx.Client | None = None,
) -> Iterator[BadLinkStatus]:
    """Yield the bad links found in the string *content*."""
    links = extract_links(content, blacklisted_links, blacklisted_patterns)
    yield from _bad_link_statuses(links, client)


def get_bad_links_in_file(
    path: str | Path,
    blacklisted_links: Iterable[str] = (),
    blacklisted_patterns: Iterable[str | re.Pattern[str]] = (),
    client: httpx.Client | None = None,
) -> Iterator[BadLinkStatus]:
    """Yield the bad links found in the file at *path*."""
    links = get_links_in_file(path, blacklisted_links, blacklisted_patterns)
    yield from _bad_link_statuses(links, client)


def get_bad_links_in_directory(
    path: str | Path | None = None,
    *,
    recursive: bool = True,
    follow_links: bool = True,
    blacklisted_directories: Iterable[BlacklistedDirectory] = (),
    blacklisted_file_paths: Iterable[str] = (),
    blacklisted_links: Iterable[str] = (),
    blacklisted_patterns: Iterable[str | re.Pattern[str]] = (),
    client: httpx.Client | None = None,
) -> Iterator[BadLink]:
    """Yield the bad links found in the directory at *path*.

    Accepts the same traversal and blacklist arguments as
    :func:`~linksweep.scanner.walker.get_links_in_directory`.
    """
    locations = get_links_in_directory(
        path,
        recursive=recursive,
        follow_links=follow_links,
        blacklisted_directories=blacklisted_directories,
        blacklisted_file_paths=blacklisted_file_paths,
        blacklisted_links=blacklisted_links,
        blacklisted_patterns=blacklisted_patterns,
    )
    with _client_scope(client) as active:
        def probe(location: LinkLocation) -> LinkStatus | None:
            return classify_link(location.link, active)

        for location, status in iter_probed(locations, probe):
            if status is not None:
                yield BadLink.from_link_location(location, status)


def get_upgradable_links(
    locations: Iterable[LinkLocation],
    client: httpx.Client | None = None,
) -> Iterator[LinkLocation]:
    """Yield the HTTP links among *locations* that can be served over HTTPS."""
    http_only = (loc for loc in locations if not is_https_link(loc.link))
    with _client_scope(client) as active:
        for location, upgradable in iter_probed(http_only, lambda loc: can_use_https(loc.link, active)):
            if upgradable:
                yield location
