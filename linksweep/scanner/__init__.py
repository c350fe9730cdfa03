"""Scanner package — link extraction, URL normalisation & directory traversal."""

from linksweep.scanner.extractor import extract_links, get_links_in_file
from linksweep.scanner.models import BlacklistedDirectory, LinkLocation, ScanOptions
from linksweep.scanner.normalizer import parse_url
from linksweep.scanner.walker import get_links_in_directory

__all__ = [
    "extract_links",
    "get_links_in_file",
    "get_links_in_directory",
    "parse_url",
    "BlacklistedDirectory",
    "LinkLocation",
    "ScanOptions",
]
