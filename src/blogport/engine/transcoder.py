"""HTML to Markdown transcoder for Blogger post bodies.

Rendering is a depth-first walk over an lxml tree. Element tags are looked up
in :data:`RULES`; a tag without a rule (or a rule that declines the element)
is kept verbatim inside a raw HTML shortcode so nothing is lost.

Children are rendered with a :class:`Container` derived from their parent
element. It is what lets ``<li>`` pick a bullet or a number and ``<img>`` drop
its trailing blank line when it sits inside a link.
"""

from __future__ import annotations

import html
from collections.abc import Callable, Iterator, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Union

from lxml import etree
from lxml import html as lxml_html

from blogport.core.utils import DEFAULT_DOMAIN_ALIASES, slugging
from blogport.engine.diagnostics import Diagnostics, NoticeKind

if TYPE_CHECKING:
    from blogport.core.config import BlogportConfig
    from blogport.core.ports import LinkResolver

HtmlNode = Union[str, etree._Element, etree._ElementTree]
Rule = Callable[["HtmlTranscoder", etree._Element, "Container"], str]

RAW_HTML_OPEN = "{{< unsafe-raw-html >}}"
RAW_HTML_CLOSE = "{{< / unsafe-raw-html >}}"
MISSING_ALT = "image without alternative text"

VIDEO_MARKERS = ("www.youtube", ".com/embed/")
VIDEO_EMBED_PREFIX = "www.youtube.com/embed/"
VIDEO_QUERY = "?rel="


class Container(Enum):
    """Nearest structurally relevant ancestor of a node."""

    NONE = "none"
    UNORDERED_LIST = "ul"
    ORDERED_LIST = "ol"
    LINK = "a"


_CONTAINERS = {
    "ul": Container.UNORDERED_LIST,
    "ol": Container.ORDERED_LIST,
    "a": Container.LINK,
}

_LIST_MARKERS = {
    Container.UNORDERED_LIST: "*",
    # Hugo renumbers ordered lists, every item is emitted as "1."
    Container.ORDERED_LIST: "1.",
}


# ========== Tree helpers ==========


def parse_html(markup: str) -> etree._ElementTree:
    """Parse a post body into a document tree."""
    root = lxml_html.document_fromstring(f"<html><body>{markup}</body></html>")
    return root.getroottree()


def attribute(element: etree._Element, name: str, default: str = "") -> str:
    """Return an attribute value, or ``default`` when it is absent."""
    value = element.get(name)
    return default if value is None else value


def outer_html(element: etree._Element) -> str:
    return lxml_html.tostring(element, encoding="unicode", with_tail=False)


def child_nodes(element: etree._Element) -> Iterator[HtmlNode]:
    """Yield text and element children in document order."""
    if element.text:
        yield element.text
    for child in element:
        yield child
        if child.tail:
            yield child.tail


# ========== Rules ==========


def _wrap(prefix: str, suffix: str = "") -> Rule:
    def rule(transcoder: HtmlTranscoder, element: etree._Element, context: Container) -> str:
        return f"{prefix}{transcoder.children(element)}{suffix}"

    return rule


_passthrough = _wrap("")


def _blockquote(transcoder: HtmlTranscoder, element: etree._Element, context: Container) -> str:
    quoted = "\n".join(f"> {line}" for line in transcoder.children(element).split("\n"))
    return f"{quoted}\n"


def _list_item(transcoder: HtmlTranscoder, element: etree._Element, context: Container) -> str:
    marker = _LIST_MARKERS.get(context)
    if marker is None:
        return transcoder.fallback(element)
    return f"{marker} {transcoder.children(element)}\n"


def _link(transcoder: HtmlTranscoder, element: etree._Element, context: Container) -> str:
    href = transcoder.resolve_href(attribute(element, "href", "."))
    return f"[{transcoder.children(element)}]({href})"


def _image(transcoder: HtmlTranscoder, element: etree._Element, context: Container) -> str:
    alt = attribute(element, "alt", MISSING_ALT)
    src = attribute(element, "src", ".")
    image = f"![{alt}]({src})"
    if context is Container.LINK:
        return image
    return f"{image}\n\n"


def _span(transcoder: HtmlTranscoder, element: etree._Element, context: Container) -> str:
    style = attribute(element, "style")
    css_class = attribute(element, "class")
    content = transcoder.children(element)

    if style:
        lowered = style.lower()
        if "font-size" in style:
            return content
        if "bold" in style:
            return f"**{content}**"
        if "italic" in style:
            return f"__{content}__"
        if "color:" in style:
            return f"**{content}**"
        if "font-family" in style and ("courier new" in lowered or "console" in lowered):
            return f"`{content}`"
    elif "blsp-spelling-error" in css_class:
        return f"~~`{content}`~~"
    elif "blsp-spelling-corrected" in css_class:
        return f"__{content}__"

    transcoder.diagnostics.notice(NoticeKind.UNHANDLED_STYLE, outer_html(element))
    return content


def _preformatted(transcoder: HtmlTranscoder, element: etree._Element, context: Container) -> str:
    lines = "\n".join(f"  {line}" for line in element.text_content().split("\n"))
    return f"\n```\n{lines}\n```\n\n"


def _iframe(transcoder: HtmlTranscoder, element: etree._Element, context: Container) -> str:
    video_id = video_id_from_iframe(element)
    if video_id is None:
        return transcoder.fallback(element)
    return f"\n{{{{< youtube {video_id} >}}}}\n\n"


def video_id_from_iframe(element: etree._Element) -> str | None:
    """Extract the video id from a YouTube embed iframe.

    Returns None when the iframe does not point at a YouTube embed.
    """
    markup = outer_html(element)
    if not all(marker in markup for marker in VIDEO_MARKERS):
        return None

    src = attribute(element, "src")
    for noise in ("-nocookie", "http:", "https:", "//", VIDEO_EMBED_PREFIX):
        src = src.replace(noise, "")
    query = src.find(VIDEO_QUERY)
    if query != -1:
        src = src[:query]
    return src


RULES: Mapping[str, Rule] = {
    "blockquote": _blockquote,
    **{f"h{level}": _wrap("#" * level + " ", "\n\n") for level in range(1, 7)},
    "small": _passthrough,
    "br": lambda transcoder, element, context: "\n",
    "hr": lambda transcoder, element, context: "\n---\n\n",
    "em": _wrap("_", "_"),
    "i": _wrap("_", "_"),
    "b": _wrap("**", "**"),
    "strong": _wrap("**", "**"),
    "u": _wrap("__", "__"),
    "code": _wrap("`", "`"),
    "ul": _passthrough,
    "ol": _passthrough,
    "li": _list_item,
    "div": _wrap("\n", "\n"),
    "p": _wrap("\n", "\n"),
    "center": _passthrough,
    "strike": _wrap("~~", "~~"),
    "stroke": _wrap("~~", "~~"),
    "a": _link,
    "img": _image,
    "span": _span,
    "font": _passthrough,
    "sub": _wrap("<sub>", "</sub>"),
    "sup": _wrap("<sup>", "</sup>"),
    "pre": _preformatted,
    "table": _passthrough,
    "tbody": _passthrough,
    "tr": _passthrough,
    "td": _passthrough,
    "iframe": _iframe,
}


# ========== Transcoder ==========


class HtmlTranscoder:
    """Turns Blogger HTML into Hugo-flavoured Markdown.

    The transcoder keeps no state between calls besides the diagnostics
    tally; link targets come from the resolver it is given.

    Usage:
        transcoder = HtmlTranscoder(registry, source_domain="example.blogspot.com")
        markdown = transcoder.transcode("<p>Hello <b>world</b></p>")
    """

    def __init__(
        self,
        links: LinkResolver | None = None,
        *,
        source_domain: str = "",
        domain_aliases: Mapping[str, str] = DEFAULT_DOMAIN_ALIASES,
        diagnostics: Diagnostics | None = None,
        rules: Mapping[str, Rule] = RULES,
    ) -> None:
        self.links = links
        self.source_domain = source_domain
        self.domain_aliases = domain_aliases
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.rules = rules

    @classmethod
    def from_config(
        cls,
        config: BlogportConfig,
        links: LinkResolver | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> HtmlTranscoder:
        return cls(
            links,
            source_domain=config.blog.source_domain,
            domain_aliases=config.blog.domain_aliases,
            diagnostics=diagnostics,
        )

    def transcode(self, markup: str) -> str:
        """Parse an HTML fragment and render it as Markdown."""
        return self.render(parse_html(markup))

    def render(self, node: HtmlNode, context: Container = Container.NONE) -> str:
        """Render a node and its subtree."""
        if isinstance(node, str):
            # lxml decodes entities; re-escape so text never turns into markup.
            return html.escape(node, quote=False)
        if isinstance(node, etree._ElementTree):
            root = node.getroot()
            body = root.find("body")
            return self._render_all(child_nodes(body if body is not None else root), context)
        if not isinstance(node.tag, str):
            # Comments, processing instructions and entities carry no content.
            return ""

        rule = self.rules.get(node.tag)
        if rule is None:
            return self.fallback(node)
        return rule(self, node, context)

    def children(self, element: etree._Element) -> str:
        """Render the children of ``element`` in the container it defines."""
        context = _CONTAINERS.get(element.tag, Container.NONE)
        return self._render_all(child_nodes(element), context)

    def fallback(self, element: etree._Element) -> str:
        """Keep markup we cannot convert as a raw HTML block.

        The element is re-serialised by lxml, so quoting and void tags come
        out normalised (``<br/>`` becomes ``<br>``).
        """
        markup = outer_html(element)
        self.diagnostics.notice(NoticeKind.UNHANDLED_MARKUP, markup)
        return f"\n{RAW_HTML_OPEN}\n{markup}\n{RAW_HTML_CLOSE}"

    def resolve_href(self, href: str) -> str:
        """Point links to other posts of the same blog at their new files."""
        if not self.source_domain or self.source_domain not in href:
            return href

        slug = slugging(href, self.domain_aliases)
        entry = self.links.lookup(slug) if self.links is not None else None
        if entry is None:
            self.diagnostics.notice(NoticeKind.UNRESOLVED_LINK, slug)
            return href
        return f'{{{{< relref "{entry.filename}">}}}} "{entry.title}"'

    def _render_all(self, nodes: Iterator[HtmlNode], context: Container) -> str:
        return "".join(self.render(node, context) for node in nodes)
