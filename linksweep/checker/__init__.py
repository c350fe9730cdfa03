"""Checker package — link status probing and bad-link scans."""

from linksweep.checker.bad_links import (
    get_bad_links_in_directory,
    get_bad_links_in_file,
    get_bad_links_in_text,
    get_upgradable_links,
)
from linksweep.checker.classifier import (
    can_use_https,
    classify_link,
    convert_to_https,
    get_link_status,
    is_https_link,
)
from linksweep.checker.status import BadLink, BadLinkStatus, LinkStatus, StatusKind, is_good_status_code

__all__ = [
    "get_bad_links_in_directory",
    "get_bad_links_in_file",
    "get_bad_links_in_text",
    "get_upgradable_links",
    "can_use_https",
    "classify_link",
    "convert_to_https",
    "get_link_status",
    "is_https_link",
    "is_good_status_code",
    "BadLink",
    "BadLinkStatus",
    "LinkStatus",
    "StatusKind",
]
