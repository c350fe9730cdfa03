"""Tests for the composed bad-link scans and the bounded probe pool."""

from __future__ import annotations

import re
import ssl
from pathlib import Path

import httpx
import pytest
import respx

from linksweep.checker.bad_links import (
    get_bad_links_in_directory,
    get_bad_links_in_file,
    get_bad_links_in_text,
    get_upgradable_links,
    iter_probed,
)
from linksweep.checker.status import BadLink, BadLinkStatus, LinkStatus, StatusKind
from linksweep.scanner.models import LinkLocation


# ---------------------------------------------------------------------------
# iter_probed
# ---------------------------------------------------------------------------

class TestIterProbed:
    def test_preserves_input_order(self) -> None:
        results = list(iter_probed(range(10), lambda n: n * n, max_workers=3))
        assert results == [(n, n * n) for n in range(10)]

    def test_empty_input(self) -> None:
        assert list(iter_probed([], lambda n: n, max_workers=2)) == []

    def test_does_not_run_ahead_of_consumer(self) -> None:
        pulled: list[int] = []

        def source():
            for n in range(100):
                pulled.append(n)
                yield n

        gen = iter_probed(source(), lambda n: n, max_workers=2)
        assert next(gen) == (0, 0)
        gen.close()
        assert pulled == [0, 1]

    def test_probe_errors_propagate(self) -> None:
        def boom(n: int) -> int:
            raise RuntimeError("probe failed")

        with pytest.raises(RuntimeError):
            list(iter_probed([1], boom, max_workers=1))

    def test_uses_configured_pool_size(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("linksweep.config.settings.max_concurrent_probes", 0)
        assert list(iter_probed([1, 2], lambda n: -n)) == [(1, -1), (2, -2)]


# ---------------------------------------------------------------------------
# Single file / string
# ---------------------------------------------------------------------------

class TestGetBadLinksInFile:
    _BAD = "https://thebestestevabusconductor.eu"

    @pytest.fixture
    def python_file(self, tmp_path: Path) -> Path:
        path = tmp_path / "main.py"
        path.write_text(
            f'GOOD = "https://python.org"\nBAD = "{self._BAD}"\n',
            encoding="utf-8",
        )
        return path

    def test_when_there_are_no_bad_links(self, python_file: Path) -> None:
        with respx.mock:
            respx.get("https://python.org").mock(return_value=httpx.Response(200))
            assert list(get_bad_links_in_file(python_file, blacklisted_links=[self._BAD])) == []

    def test_when_there_are_bad_links(self, python_file: Path) -> None:
        with respx.mock:
            respx.get("https://python.org").mock(return_value=httpx.Response(200))
            respx.get(self._BAD).mock(side_effect=httpx.ConnectError)
            found = list(get_bad_links_in_file(python_file))

        assert found == [BadLinkStatus(self._BAD, 0)]
        assert found[0].outcome == LinkStatus.unreachable()
        assert str(found[0]) == f"{self._BAD}: 0"

    def test_unreadable_file_has_no_bad_links(self, binary_file: Path) -> None:
        with respx.mock:
            assert list(get_bad_links_in_file(binary_file)) == []


class TestGetBadLinksInText:
    def test_reports_status_codes(self) -> None:
        text = "ok: https://a.example/ missing: https://a.example/gone, tls: https://b.example"

        def tls(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("handshake", request=request) from ssl.SSLError("bad handshake")

        with respx.mock:
            respx.get("https://a.example/").mock(return_value=httpx.Response(200))
            respx.get("https://a.example/gone").mock(return_value=httpx.Response(410))
            respx.get("https://b.example").mock(side_effect=tls)
            found = list(get_bad_links_in_text(text))

        assert [(b.link, b.status_code) for b in found] == [
            ("https://a.example/gone", 410),
            ("https://b.example", -1),
        ]
        assert found[1].outcome.kind is StatusKind.TLS_FAILURE


# ---------------------------------------------------------------------------
# Directory
# ---------------------------------------------------------------------------

class TestGetBadLinksInDirectory:
    def test_getting_all_bad_links(self, bad_links_tree: Path) -> None:
        with respx.mock:
            respx.get("http://alkdjsflkaj.in").mock(side_effect=httpx.ConnectError)
            found = list(get_bad_links_in_directory(bad_links_tree))

        assert found == [BadLink(str(bad_links_tree / "main.cpp"), "http://alkdjsflkaj.in", 0)]

    def test_malformed_host_does_not_stop_the_scan(self, bad_links_tree: Path) -> None:
        (bad_links_tree / "notes.txt").write_text("typo: http://foo..com here\n", encoding="utf-8")

        def idna_failure(request: httpx.Request) -> httpx.Response:
            raise UnicodeError("label empty or too long")

        with respx.mock(assert_all_called=False):
            respx.get(host="foo..com").mock(side_effect=idna_failure)
            respx.get("http://alkdjsflkaj.in").mock(side_effect=httpx.ConnectError)
            found = list(get_bad_links_in_directory(bad_links_tree))

        assert sorted((b.link, b.status_code) for b in found) == [
            ("http://alkdjsflkaj.in", 0),
            ("http://foo..com", 0),
        ]

    def test_blacklisted_patterns(self, bad_links_tree: Path) -> None:
        with respx.mock:
            found = list(
                get_bad_links_in_directory(bad_links_tree, blacklisted_patterns=[re.compile(r"http://.*\.in")])
            )
        assert found == []

    def test_good_links_are_not_reported(self, links_tree: Path) -> None:
        with respx.mock:
            respx.get("https://google.com").mock(return_value=httpx.Response(200))
            respx.get("http://alskdjflaksdjfalskj.io").mock(return_value=httpx.Response(404))
            found = list(get_bad_links_in_directory(links_tree))

        assert len(found) == 1
        assert found[0].path == str(links_tree / "subdirectory" / "Program.java")
        assert found[0].status_code == 404
        assert found[0].location == LinkLocation(found[0].path, "http://alskdjflaksdjfalskj.io")

    def test_bad_link_string_form(self) -> None:
        bad = BadLink("src/main.cpp", "http://alkdjsflkaj.in", 0)
        assert str(bad) == "Path: src/main.cpp\nLink: http://alkdjsflkaj.in\nStatus code: 0"

    def test_from_bad_link_status(self) -> None:
        status = BadLinkStatus("https://x.example", 404, LinkStatus.bad(404))
        assert BadLink.from_bad_link_status("a.py", status) == BadLink("a.py", "https://x.example", 404)


class TestGetUpgradableLinks:
    def test_only_http_links_that_work_over_https(self) -> None:
        locations = [
            LinkLocation("a.md", "http://upgradable.example"),
            LinkLocation("a.md", "http://plain.example"),
            LinkLocation("b.md", "https://already.example"),
        ]
        with respx.mock:
            respx.get("https://upgradable.example").mock(return_value=httpx.Response(200))
            respx.get("https://plain.example").mock(side_effect=httpx.ConnectError)
            found = list(get_upgradable_links(locations))

        assert found == [LinkLocation("a.md", "http://upgradable.example")]
