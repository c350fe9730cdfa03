"""Shared fixtures: small on-disk trees mirroring real project layouts."""

from __future__ import annotations

from pathlib import Path

import pytest

LINK_1 = "https://google.com?q=king"
LINK_2 = "http://crazzyfolds.io"
LINK_3 = "http://google.com"
LINK_4 = "https://google.com?q=voila/name=nope"

_INDEX_HTML = f"""\
<!DOCTYPE html>
<html>
<body>
  <a href="{LINK_1}">King</a>
  <p>Folding chairs live at {LINK_2}.</p>
  <p>(or just try {LINK_3})</p>
  <script>var u = '{LINK_4}';</script>
</body>
</html>
"""

# A few bytes of a JPEG header; not valid UTF-8.
_JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xdb"


@pytest.fixture
def html_file(tmp_path: Path) -> Path:
    path = tmp_path / "index.html"
    path.write_text(_INDEX_HTML, encoding="utf-8")
    return path


@pytest.fixture
def binary_file(tmp_path: Path) -> Path:
    path = tmp_path / "cat.jpg"
    path.write_bytes(_JPEG_BYTES + b"https://example.com \xff\xfe")
    return path


@pytest.fixture
def links_tree(tmp_path: Path) -> Path:
    """``first_link.py`` at the top, ``subdirectory/Program.java`` below it."""
    root = tmp_path / "getting_links_in_a_directory"
    sub = root / "subdirectory"
    sub.mkdir(parents=True)
    (root / "first_link.py").write_text(
        'import webbrowser\n\nwebbrowser.open("https://google.com")\n', encoding="utf-8"
    )
    (sub / "Program.java").write_text(
        "class Program {\n"
        "    // See http://alskdjflaksdjfalskj.io for details.\n"
        "}\n",
        encoding="utf-8",
    )
    return root


@pytest.fixture
def bad_links_tree(tmp_path: Path) -> Path:
    root = tmp_path / "getting_bad_links_in_a_directory"
    root.mkdir()
    (root / "main.cpp").write_text(
        '#include <iostream>\n\n'
        'int main() {\n'
        '    std::cout << "http://alkdjsflkaj.in" << std::endl;\n'
        '}\n',
        encoding="utf-8",
    )
    return root


@pytest.fixture
def index_links() -> list[str]:
    """The links in ``html_file``, in document order."""
    return [LINK_1, LINK_2, LINK_3, LINK_4]
