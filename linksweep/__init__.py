"""Finds HTTP(S) links in files and checks whether they are dead.

Links must be written with the ``http://`` or ``https://`` scheme to be
found.  A *bad link* is one whose request did not come back with a 2xx
status.  Two extra codes are used: ``0`` when the host could not be
contacted, and ``-1`` when the TLS handshake failed.

Public re-exports so callers can write::

    from linksweep import get_bad_links_in_directory, BlacklistedDirectory
"""

__version__ = "0.1.0"

from linksweep.checker import (  # noqa: E402
    BadLink,
    BadLinkStatus,
    LinkStatus,
    StatusKind,
    can_use_https,
    classify_link,
    convert_to_https,
    get_bad_links_in_directory,
    get_bad_links_in_file,
    get_bad_links_in_text,
    get_link_status,
    get_upgradable_links,
    is_good_status_code,
    is_https_link,
)
from linksweep.scanner import (  # noqa: E402
    BlacklistedDirectory,
    LinkLocation,
    extract_links,
    get_links_in_directory,
    get_links_in_file,
    parse_url,
)

__all__ = [
    "BadLink",
    "BadLinkStatus",
    "BlacklistedDirectory",
    "LinkLocation",
    "LinkStatus",
    "StatusKind",
    "can_use_https",
    "classify_link",
    "convert_to_https",
    "extract_links",
    "get_bad_links_in_directory",
    "get_bad_links_in_file",
    "get_bad_links_in_text",
    "get_link_status",
    "get_links_in_directory",
    "get_links_in_file",
    "get_upgradable_links",
    "is_good_status_code",
    "is_https_link",
    "parse_url",
]
