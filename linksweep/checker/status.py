"""Link status taxonomy and the bad-link records built from it.

A probe ends in one of four ways: the link is good (a 2xx response), the
server answered with some other status, the host could not be contacted, or
the TLS handshake failed.  Good links have no status object at all; the
other three are :class:`LinkStatus` values.  When flattened to an integer,
unreachable hosts are ``0`` and TLS failures ``-1``.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field

from linksweep.scanner.models import LinkLocation

UNREACHABLE_CODE = 0
TLS_FAILURE_CODE = -1

_GOOD_STATUS = re.compile(r"2\d\d")


def is_good_status_code(status_code: int) -> bool:
    """Return whether *status_code* is in the range 200 to 299."""
    return _GOOD_STATUS.fullmatch(str(status_code)) is not None


class StatusKind(str, enum.Enum):
    BAD = "bad"
    UNREACHABLE = "unreachable"
    TLS_FAILURE = "tls_failure"


@dataclass(frozen=True)
class LinkStatus:
    """The outcome of probing a link that is not good."""

    kind: StatusKind
    code: int

    @classmethod
    def bad(cls, code: int) -> LinkStatus:
        return cls(StatusKind.BAD, code)

    @classmethod
    def unreachable(cls) -> LinkStatus:
        return cls(StatusKind.UNREACHABLE, UNREACHABLE_CODE)

    @classmethod
    def tls_failure(cls) -> LinkStatus:
        return cls(StatusKind.TLS_FAILURE, TLS_FAILURE_CODE)

    def __str__(self) -> str:
        if self.kind is StatusKind.BAD:
            return str(self.code)
        return f"{self.code} ({self.kind.value})"


@dataclass(frozen=True)
class BadLinkStatus:
    """The link a request was made to, and the status code returned."""

    link: str
    status_code: int
    outcome: LinkStatus | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.link}: {self.status_code}"


@dataclass(frozen=True)
class BadLink:
    """The path to the file having the bad link, the bad link, and its status code."""

    path: str
    link: str
    status_code: int
    outcome: LinkStatus | None = field(default=None, compare=False)

    @classmethod
    def from_link_location(cls, location: LinkLocation, status: LinkStatus) -> BadLink:
        return cls(location.path, location.link, status.code, status)

    @classmethod
    def from_bad_link_status(cls, path: str, status: BadLinkStatus) -> BadLink:
        return cls(path, status.link, status.status_code, status.outcome)

    @property
    def location(self) -> LinkLocation:
        return LinkLocation(self.path, self.link)

    def __str__(self) -> str:
        return f"Path: {self.path}\nLink: {self.link}\nStatus code: {self.status_code}"
