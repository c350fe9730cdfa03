"""linksweep CLI — finds dead links in a project.

Usage:
    python cli/main.py --help

Commands:
    links   → list every link found under a directory
    check   → list bad links under a directory (exit 1 if any)
    file    → list the links (or bad links) in a single file
    https   → list HTTP links that can be upgraded to HTTPS
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from linksweep.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
import re
from typing import List, Optional

import typer

from cli.rendering import render_bad_link, render_bad_link_status, render_location, render_summary
from linksweep.checker.bad_links import get_bad_links_in_directory, get_bad_links_in_file, get_upgradable_links
from linksweep.config import settings
from linksweep.scanner.extractor import get_links_in_file
from linksweep.scanner.models import BlacklistedDirectory, ScanOptions
from linksweep.scanner.walker import get_links_in_directory

app = typer.Typer(
    name="linksweep",
    help="Find links in a project and check whether they are dead.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Shared option handling
# ---------------------------------------------------------------------------
def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _require_path(path: Path, tag: str, *, directory: bool) -> None:
    ok = path.is_dir() if directory else path.is_file()
    if not ok:
        kind = "directory" if directory else "file"
        typer.echo(f"[{tag}] No such {kind}: {path}", err=True)
        raise typer.Exit(2)


def _compile(patterns: List[str], tag: str) -> tuple[re.Pattern[str], ...]:
    try:
        return tuple(re.compile(p) for p in patterns)
    except re.error as exc:
        typer.echo(f"[{tag}] Invalid --ignore-pattern: {exc}", err=True)
        raise typer.Exit(2)


def _build_options(
    tag: str,
    path: Path,
    recursive: bool,
    follow_links: bool,
    exclude_dir: Optional[List[str]],
    exclude_file: Optional[List[str]],
    ignore_link: Optional[List[str]],
    ignore_pattern: Optional[List[str]],
) -> ScanOptions:
    # Default exclusions live inside the scanned tree; user ones are taken as given.
    dirs = [str(path / d) for d in settings.default_blacklisted_directories]
    dirs.extend(exclude_dir or [])
    return ScanOptions(
        recursive=recursive,
        follow_links=follow_links,
        blacklisted_directories=tuple(BlacklistedDirectory(d) for d in dirs),
        blacklisted_file_paths=tuple(exclude_file or []),
        blacklisted_links=frozenset(ignore_link or []),
        blacklisted_patterns=_compile(ignore_pattern or [], tag),
    )


_PATH_ARG = typer.Argument(Path("."), help="Directory to scan.")
_RECURSIVE_OPT = typer.Option(True, "--recursive/--no-recursive", help="Scan subdirectories.")
_FOLLOW_OPT = typer.Option(True, "--follow-links/--no-follow-links", help="Follow symbolic links.")
_EXCLUDE_DIR_OPT = typer.Option(None, "--exclude-dir", help="Directory to skip (repeatable).")
_EXCLUDE_FILE_OPT = typer.Option(None, "--exclude-file", help="File path suffix to skip (repeatable).")
_IGNORE_LINK_OPT = typer.Option(None, "--ignore-link", help="Link to ignore (repeatable).")
_IGNORE_PATTERN_OPT = typer.Option(None, "--ignore-pattern", help="Regex of links to ignore (repeatable).")
_VERBOSE_OPT = typer.Option(False, "--verbose", "-v", help="Log skipped files and probe outcomes.")


# ---------------------------------------------------------------------------
# Directory commands
# ---------------------------------------------------------------------------
@app.command("links")
def links_cmd(
    path: Path = _PATH_ARG,
    recursive: bool = _RECURSIVE_OPT,
    follow_links: bool = _FOLLOW_OPT,
    exclude_dir: Optional[List[str]] = _EXCLUDE_DIR_OPT,
    exclude_file: Optional[List[str]] = _EXCLUDE_FILE_OPT,
    ignore_link: Optional[List[str]] = _IGNORE_LINK_OPT,
    ignore_pattern: Optional[List[str]] = _IGNORE_PATTERN_OPT,
    verbose: bool = _VERBOSE_OPT,
) -> None:
    """Print every link found under PATH as ``path: link``."""
    _configure_logging(verbose)
    _require_path(path, "links", directory=True)
    options = _build_options("links", path, recursive, follow_links, exclude_dir, exclude_file, ignore_link, ignore_pattern)

    count = 0
    for location in get_links_in_directory(path, **options.as_kwargs()):
        typer.echo(render_location(location))
        count += 1
    typer.echo(f"[links] {count} link(s) found.")


@app.command("check")
def check_cmd(
    path: Path = _PATH_ARG,
    recursive: bool = _RECURSIVE_OPT,
    follow_links: bool = _FOLLOW_OPT,
    exclude_dir: Optional[List[str]] = _EXCLUDE_DIR_OPT,
    exclude_file: Optional[List[str]] = _EXCLUDE_FILE_OPT,
    ignore_link: Optional[List[str]] = _IGNORE_LINK_OPT,
    ignore_pattern: Optional[List[str]] = _IGNORE_PATTERN_OPT,
    verbose: bool = _VERBOSE_OPT,
) -> None:
    """Check every link under PATH; exit with status 1 if any is bad."""
    _configure_logging(verbose)
    _require_path(path, "check", directory=True)
    options = _build_options("check", path, recursive, follow_links, exclude_dir, exclude_file, ignore_link, ignore_pattern)

    typer.echo(f"[check] Scanning {str(path)!r} …")
    bad_links = []
    for bad_link in get_bad_links_in_directory(path, **options.as_kwargs()):
        typer.echo(render_bad_link(bad_link))
        typer.echo("")
        bad_links.append(bad_link)

    typer.echo(f"[check] {render_summary(bad_links)}")
    if bad_links:
        raise typer.Exit(1)


@app.command("https")
def https_cmd(
    path: Path = _PATH_ARG,
    recursive: bool = _RECURSIVE_OPT,
    follow_links: bool = _FOLLOW_OPT,
    exclude_dir: Optional[List[str]] = _EXCLUDE_DIR_OPT,
    exclude_file: Optional[List[str]] = _EXCLUDE_FILE_OPT,
    ignore_link: Optional[List[str]] = _IGNORE_LINK_OPT,
    ignore_pattern: Optional[List[str]] = _IGNORE_PATTERN_OPT,
    verbose: bool = _VERBOSE_OPT,
) -> None:
    """List HTTP links under PATH that are also served over HTTPS."""
    _configure_logging(verbose)
    _require_path(path, "https", directory=True)
    options = _build_options("https", path, recursive, follow_links, exclude_dir, exclude_file, ignore_link, ignore_pattern)

    count = 0
    for location in get_upgradable_links(get_links_in_directory(path, **options.as_kwargs())):
        typer.echo(render_location(location))
        count += 1
    typer.echo(f"[https] {count} link(s) can use HTTPS.")


# ---------------------------------------------------------------------------
# Single-file command
# ---------------------------------------------------------------------------
@app.command("file")
def file_cmd(
    path: Path = typer.Argument(..., help="File to scan."),
    bad: bool = typer.Option(False, "--bad", help="Only print bad links (exit 1 if any)."),
    ignore_link: Optional[List[str]] = _IGNORE_LINK_OPT,
    ignore_pattern: Optional[List[str]] = _IGNORE_PATTERN_OPT,
    verbose: bool = _VERBOSE_OPT,
) -> None:
    """Print the links (or, with --bad, the bad links) in a single file."""
    _configure_logging(verbose)
    _require_path(path, "file", directory=False)
    patterns = _compile(ignore_pattern or [], "file")
    links = ignore_link or []

    if not bad:
        for link in get_links_in_file(path, links, patterns):
            typer.echo(link)
        return

    found = 0
    for status in get_bad_links_in_file(path, links, patterns):
        typer.echo(render_bad_link_status(status))
        found += 1
    if found:
        typer.echo(f"[file] {found} bad link(s).")
        raise typer.Exit(1)
    typer.echo("[file] No bad links found.")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
