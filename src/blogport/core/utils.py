"""String helpers for slugs and filenames."""

import re
from collections.abc import Mapping
from unicodedata import normalize

from blogport.core.exceptions import InvalidPostDateError

DEFAULT_DOMAIN_ALIASES: Mapping[str, str] = {".com.es": ".com"}
FILENAME_EXTENSION = ".md"
TIMESTAMP_LENGTH = 12

# Characters whose NFKD form would leak separators into the slug.
_COMPAT_PUNCTUATION = re.compile("[…´]")
_SEPARATOR_RUN = re.compile(r"[-_]*-[-_]*")


def slugging(url: str, aliases: Mapping[str, str] = DEFAULT_DOMAIN_ALIASES) -> str:
    """Normalise a post URL into the key used by the post registry.

    Examples:
        >>> slugging("http://example.blogspot.com/2010/05/my-post.html")
        'example_blogspot_com-2010-05-my-post_html'
        >>> slugging("https://example.blogspot.com.es/p/a%20b.html")
        'example_blogspot_com-p-a-b_html'

    """
    slug = url.lower().replace("http://", "").replace("https://", "")
    for variant, canonical in aliases.items():
        slug = slug.replace(variant, canonical)
    return slug.replace("/", "-").replace(".", "_").replace("%20", "-")


def title_slug(title: str) -> str:
    """Lowercase, diacritic-free, punctuation-free form of a post title.

    Whitespace becomes ``-``, clause punctuation (``, . : ;``) becomes ``_`` and
    every other symbol is dropped.

    Examples:
        >>> title_slug("Café: ¡Hola!")
        'cafe-hola'
        >>> title_slug("Uno, dos y tres")
        'uno-dos-y-tres'

    """
    text = _COMPAT_PUNCTUATION.sub("", title.lower())
    text = normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"[,.:;]", "_", text)
    text = re.sub(r"[^a-z0-9_-]", "", text)
    text = _SEPARATOR_RUN.sub("-", text)
    text = re.sub(r"_+", "_", text).strip("-_")
    return text or "untitled"


def compact_timestamp(date: str) -> str:
    """Return ``YYYYMMDDhhmm`` from an ISO-like date string.

    Raises:
        InvalidPostDateError: If fewer than 12 characters remain after
            stripping the separators.

    """
    digits = date.replace("-", "").replace("T", "").replace(":", "")
    if len(digits) < TIMESTAMP_LENGTH:
        raise InvalidPostDateError(date)
    return digits[:TIMESTAMP_LENGTH]


def propose_filename(title: str, date: str) -> str:
    """Build the output filename for a post.

    Examples:
        >>> propose_filename("Café: ¡Hola!", "2021-06-11T10:30:00")
        '202106111030_cafe-hola.md'

    """
    return f"{compact_timestamp(date)}_{title_slug(title)}{FILENAME_EXTENSION}"
