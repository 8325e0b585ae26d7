"""Blogger export adapter.

Blogger backs up a blog as a single Atom 1.0 document holding posts, pages,
comments, settings and the template. Every ``<entry>`` is turned into a
:class:`PostRecord`; :func:`iter_posts` keeps only the real posts.
"""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from types import TracebackType

import httpx
from lxml import etree
from pydantic import ValidationError

from blogport.core.types import Category, Link, PostRecord

logger = logging.getLogger(__name__)

# Atom namespace
ATOM_NS = "http://www.w3.org/2005/Atom"


class BloggerFeedAdapter:
    """Parses a Blogger Atom export into PostRecord objects.

    Usage:
        # Preferred: Use as context manager for deterministic cleanup
        with BloggerFeedAdapter() as adapter:
            records = list(adapter.parse(Path("blog-11-06-2021.xml")))
    """

    def __init__(self, timeout: float = 30.0) -> None:
        """Initialize the adapter.

        Args:
            timeout: HTTP request timeout in seconds (default: 30.0)

        """
        self.timeout = timeout
        self._http_client = httpx.Client(timeout=timeout, follow_redirects=True)

    def __enter__(self) -> "BloggerFeedAdapter":
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager and close HTTP client."""
        self.close()

    def close(self) -> None:
        """Close HTTP client and release resources."""
        if hasattr(self, "_http_client"):
            self._http_client.close()

    def parse(self, source: Path) -> Iterator[PostRecord]:
        """Parse an export from a local file.

        Raises:
            FileNotFoundError: If source file doesn't exist
            etree.XMLSyntaxError: If the export is malformed

        """
        if not source.exists():
            msg = f"Export file not found: {source}"
            raise FileNotFoundError(msg)

        try:
            parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
            root = etree.parse(str(source), parser=parser).getroot()
        except etree.XMLSyntaxError:
            logger.exception("Failed to parse XML from %s", source)
            raise

        yield from self._parse_feed_element(root)

    def parse_url(self, url: str) -> Iterator[PostRecord]:
        """Parse an export served over HTTP(S).

        Raises:
            httpx.HTTPStatusError: If HTTP request fails (4xx, 5xx)
            etree.XMLSyntaxError: If the export is malformed

        """
        response = self._http_client.get(url)
        response.raise_for_status()

        try:
            parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
            root = etree.fromstring(response.content, parser=parser)
        except etree.XMLSyntaxError:
            logger.exception("Failed to parse XML from %s", url)
            raise

        yield from self._parse_feed_element(root)

    def _parse_feed_element(self, root: etree._Element) -> Iterator[PostRecord]:
        if root.tag != f"{{{ATOM_NS}}}feed":
            logger.warning("Not an Atom feed: %s", root.tag)
            return

        for entry_elem in root.findall(f"{{{ATOM_NS}}}entry"):
            try:
                yield self._parse_entry(entry_elem)
            except (ValueError, ValidationError) as e:
                logger.warning("Skipping invalid entry: %s", e)
                continue

    def _parse_entry(self, entry_elem: etree._Element) -> PostRecord:
        """Parse a single Atom entry.

        Raises:
            ValueError: If id or published is missing

        """
        entry_id = self._get_text(entry_elem, "id")
        published = self._get_text(entry_elem, "published")
        if not entry_id or not published:
            msg = "Entry missing required fields (id or published)"
            raise ValueError(msg)

        return PostRecord(
            id=entry_id,
            published=published,
            updated=self._get_text(entry_elem, "updated"),
            title=self._get_text(entry_elem, "title") or "",
            content=self._get_text(entry_elem, "content") or "",
            categories=[
                Category(term=elem.get("term"), scheme=elem.get("scheme"))
                for elem in entry_elem.findall(f"{{{ATOM_NS}}}category")
                if elem.get("term")
            ],
            links=[
                Link(
                    href=elem.get("href"),
                    rel=elem.get("rel", "alternate"),
                    type=elem.get("type"),
                    title=elem.get("title"),
                )
                for elem in entry_elem.findall(f"{{{ATOM_NS}}}link")
                if elem.get("href")
            ],
        )

    def _get_text(self, elem: etree._Element, tag: str) -> str | None:
        child = elem.find(f"{{{ATOM_NS}}}{tag}")
        if child is not None:
            return child.text
        return None


def iter_posts(records: Iterable[PostRecord], kind_suffix: str = "kind#post") -> Iterator[PostRecord]:
    """Keep only entries Blogger classifies as posts."""
    for record in records:
        if record.is_kind(kind_suffix):
            yield record
