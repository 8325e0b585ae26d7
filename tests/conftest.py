"""Shared fixtures for the Blogport test suite."""

import sys
from pathlib import Path

import pytest
from lxml import etree

# Add src to path so the suite runs without an editable install
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from blogport.core.config import BlogportConfig  # noqa: E402
from blogport.core.types import Category, Link, PostRecord  # noqa: E402

ATOM_NS = "http://www.w3.org/2005/Atom"
KIND_SCHEME = "http://schemas.google.com/g/2005#kind"
POST_KIND = "http://schemas.google.com/blogger/2008/kind#post"
COMMENT_KIND = "http://schemas.google.com/blogger/2008/kind#comment"
LABEL_SCHEME = "http://www.blogger.com/atom/ns#"
BLOG = "unomascero.blogspot.com"


def make_record(
    path: str,
    *,
    title: str = "A post",
    content: str = "<p>Hello</p>",
    published: str = "2010-05-03T21:15:00.000+02:00",
    labels: tuple[str, ...] = (),
    kind: str = POST_KIND,
) -> PostRecord:
    """Build a post record whose public URL is ``http://<blog>/<path>``."""
    return PostRecord(
        id=f"tag:blogger.com,1999:blog-1.post-{path}",
        published=published,
        title=title,
        content=content,
        categories=[
            Category(term=kind, scheme=KIND_SCHEME),
            *(Category(term=label, scheme=LABEL_SCHEME) for label in labels),
        ],
        links=[
            Link(rel="replies", href=f"http://{BLOG}/feeds/1/comments/default"),
            Link(rel="alternate", href=f"http://{BLOG}/{path}", type="text/html", title=title),
        ],
    )


def build_export(records: list[PostRecord]) -> bytes:
    """Serialise records as a Blogger Atom export."""
    nsmap = {None: ATOM_NS}
    feed = etree.Element(f"{{{ATOM_NS}}}feed", nsmap=nsmap)
    etree.SubElement(feed, f"{{{ATOM_NS}}}id").text = "tag:blogger.com,1999:blog-1"
    etree.SubElement(feed, f"{{{ATOM_NS}}}updated").text = "2021-06-11T10:30:00.000+02:00"
    etree.SubElement(feed, f"{{{ATOM_NS}}}title", type="text").text = "Píldoras para la egolatría"

    for record in records:
        entry = etree.SubElement(feed, f"{{{ATOM_NS}}}entry")
        etree.SubElement(entry, f"{{{ATOM_NS}}}id").text = record.id
        etree.SubElement(entry, f"{{{ATOM_NS}}}published").text = record.published
        etree.SubElement(entry, f"{{{ATOM_NS}}}updated").text = record.published
        for category in record.categories:
            etree.SubElement(entry, f"{{{ATOM_NS}}}category", scheme=category.scheme, term=category.term)
        etree.SubElement(entry, f"{{{ATOM_NS}}}title", type="text").text = record.title
        etree.SubElement(entry, f"{{{ATOM_NS}}}content", type="html").text = record.content
        for link in record.links:
            attrs = {"rel": link.rel, "href": link.href}
            if link.type:
                attrs["type"] = link.type
            etree.SubElement(entry, f"{{{ATOM_NS}}}link", **attrs)

    return etree.tostring(feed, xml_declaration=True, encoding="UTF-8")


@pytest.fixture
def config(tmp_path: Path) -> BlogportConfig:
    """Default configuration rooted in a temporary site."""
    return BlogportConfig.load(tmp_path)


@pytest.fixture
def export_file(tmp_path: Path) -> Path:
    """A small export: two posts linking to each other plus a comment."""
    older = make_record(
        "2010/05/primera-entrada.html",
        title="Primera entrada",
        content=f'<p>Next: <a href="http://{BLOG}/2010/06/segunda-entrada.html">later</a></p>',
        published="2010-05-03T21:15:00.000+02:00",
        labels=("música",),
    )
    newer = make_record(
        "2010/06/segunda-entrada.html",
        title='Segunda "entrada"',
        content=f'<p>Back to <a href="http://{BLOG}/2010/05/primera-entrada.html">the first</a></p>',
        published="2010-06-01T08:00:00.000+02:00",
    )
    comment = make_record(
        "2010/06/segunda-entrada.html?showComment=1",
        title="",
        content="Nice!",
        published="2010-06-02T08:00:00.000+02:00",
        kind=COMMENT_KIND,
    )
    path = tmp_path / "blog-11-06-2021.xml"
    # Blogger lists entries newest first.
    path.write_bytes(build_export([comment, newer, older]))
    return path
