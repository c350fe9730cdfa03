"""Link classification: probes a link over HTTP and reports why it is bad.

Uses ``httpx`` for requests.  Every network failure is turned into a
:class:`~linksweep.checker.status.LinkStatus`; nothing here raises for an
unreachable or misbehaving server.
"""

from __future__ import annotations

import logging
import ssl

import httpx

from linksweep.checker.status import LinkStatus, is_good_status_code
from linksweep.config import settings

logger = logging.getLogger(__name__)

_HTTP_PREFIX = "http://"
_HTTPS_PREFIX = "https://"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def make_client() -> httpx.Client:
    """Return an ``httpx.Client`` configured from ``settings``."""
    return httpx.Client(
        headers={"User-Agent": settings.user_agent},
        timeout=settings.request_timeout,
        follow_redirects=settings.follow_redirects,
        verify=settings.verify_tls,
    )


def _is_tls_failure(exc: BaseException) -> bool:
    """Return ``True`` if an ``ssl.SSLError`` is anywhere in *exc*'s chain.

    ``httpx`` wraps handshake and certificate errors in ``ConnectError``; the
    original ``ssl`` exception survives as the cause.
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, ssl.SSLError):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def _probe(client: httpx.Client, link: str) -> LinkStatus | None:
    try:
        with client.stream("GET", link) as response:
            status_code = response.status_code
    except (httpx.TransportError, httpx.TooManyRedirects, httpx.InvalidURL, UnicodeError) as exc:
        # UnicodeError: the idna codec rejects empty or over-long host labels.
        if _is_tls_failure(exc):
            logger.debug("TLS failure for %s: %s", link, exc)
            return LinkStatus.tls_failure()
        logger.debug("Unreachable %s: %s", link, exc)
        return LinkStatus.unreachable()

    if is_good_status_code(status_code):
        return None
    logger.debug("Bad status %d for %s", status_code, link)
    return LinkStatus.bad(status_code)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def classify_link(link: str, client: httpx.Client | None = None) -> LinkStatus | None:
    """Make a GET request to *link* and classify the outcome.

    Args:
        link: Absolute HTTP(S) URL.
        client: Optional shared client.  A short-lived one built from
            ``settings`` is used when omitted.

    Returns:
        ``None`` when the response status is 2xx, otherwise the
        :class:`LinkStatus` describing why the link is bad.
    """
    if client is not None:
        return _probe(client, link)
    with make_client() as own_client:
        return _probe(own_client, link)


def get_link_status(link: str, client: httpx.Client | None = None) -> int | None:
    """Return the status code received after making a request to *link*.

    ``0`` is returned if the host could not be contacted, ``-1`` if the TLS
    handshake failed, and ``None`` if *link* isn't bad.
    """
    status = classify_link(link, client)
    return None if status is None else status.code


def is_https_link(link: str) -> bool:
    """Return whether *link* uses HTTPS."""
    return link.startswith(_HTTPS_PREFIX)


def convert_to_https(link: str) -> str:
    """Return *link* as an HTTPS link.

    Raises:
        ValueError: If *link* is neither an HTTP nor an HTTPS link.
    """
    if is_https_link(link):
        return link
    if not link.startswith(_HTTP_PREFIX):
        raise ValueError(f"Not an HTTP link: {link!r}")
    return _HTTPS_PREFIX + link[len(_HTTP_PREFIX):]


def can_use_https(link: str, client: httpx.Client | None = None) -> bool:
    """Return whether *link* can be served over HTTPS."""
    return classify_link(convert_to_https(link), client) is None
