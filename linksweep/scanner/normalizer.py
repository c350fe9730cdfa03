"""URL normalisation: strips delimiters that a regex match picked up by accident.

A match for a URL in prose or markup frequently ends with characters that
belong to the surrounding text rather than the URL itself: the ``)`` closing
a Markdown link, a sentence-ending ``.``, the ``'`` ending a string literal.
All of these are valid URL characters, so the pattern cannot exclude them;
instead :func:`parse_url` trims them off afterwards.
"""

from __future__ import annotations

import re

# Anchored at the scheme; the character class is the RFC 3986 set plus ``%``
# and the backtick.
LINK_PATTERN = re.compile(r"https?://[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=`%]+")

_NON_ENCLOSING_DELIMITERS = frozenset(":/?#@!$&*+,;=")
_ENCLOSING_DELIMITERS = {"(": ")", "[": "]"}


def parse_url(url: str) -> str:
    """Return *url* after stripping unnecessary trailing delimiters.

    Characters are removed from the end one at a time until the last one is
    neither a non-enclosing delimiter, a period, an unmatched bracket nor an
    unmatched single quote.  The result is a fixed point:
    ``parse_url(parse_url(u)) == parse_url(u)``.

    Example::

        >>> parse_url("https://google.com).")
        'https://google.com'
        >>> parse_url("https://google.com?q=hello&name=(neel)")
        'https://google.com?q=hello&name=(neel)'
    """
    while url and _should_strip(url):
        url = url[:-1]
    return url


def _should_strip(url: str) -> bool:
    last = url[-1]
    if last in _NON_ENCLOSING_DELIMITERS or last == ".":
        return True
    return _is_unmatched_enclosing(url, last) or _is_unmatched_quote(url, last)


def _is_unmatched_enclosing(url: str, last: str) -> bool:
    for opening, closing in _ENCLOSING_DELIMITERS.items():
        # A trailing opener is only dropped when closers outnumber openers,
        # the same comparison used for a trailing closer.
        if last in (opening, closing) and url.count(opening) < url.count(closing):
            return True
    return False


def _is_unmatched_quote(url: str, last: str) -> bool:
    return last == "'" and url.count("'") % 2 == 1
