"""Build Hugo documents out of Blogger post records."""

from collections.abc import Callable, Mapping

from blogport.core.config import BlogportConfig
from blogport.core.types import Document, FrontMatter, PostRecord
from blogport.core.utils import DEFAULT_DOMAIN_ALIASES, slugging


def post_slug(record: PostRecord, aliases: Mapping[str, str] = DEFAULT_DOMAIN_ALIASES) -> str:
    """Registry key of a post: its normalised public URL, or its raw id."""
    alternate = record.first_link("alternate")
    if alternate is None:
        return record.id
    return slugging(alternate.href, aliases)


def post_categories(record: PostRecord, label_scheme: str, base: list[str]) -> list[str]:
    """Constant categories followed by the post's own Blogger labels."""
    return [*base, *(category.term for category in record.categories if category.scheme == label_scheme)]


def build_front_matter(record: PostRecord, config: BlogportConfig, *, draft: bool | None = None) -> FrontMatter:
    settings = config.front_matter
    return FrontMatter(
        id=record.id,
        draft=settings.draft if draft is None else draft,
        date=record.published,
        # Front matter values are double-quoted.
        title=record.title.replace('"', "'"),
        description=settings.description,
        slug=post_slug(record, config.blog.domain_aliases),
        tags=settings.tags,
        categories=post_categories(record, config.blog.label_scheme, settings.base_categories),
        external_link=settings.external_link,
        series=settings.series,
        aliases=(),
    )


def convert_to_post(
    banner: str,
    draft: bool,
    record: PostRecord,
    render: Callable[[str], str],
    config: BlogportConfig,
) -> Document:
    """Assemble the document for one post.

    Args:
        banner: Markdown placed before the converted body
        draft: Whether Hugo should treat the post as a draft
        record: The Blogger entry
        render: HTML to Markdown conversion, usually ``HtmlTranscoder.transcode``
        config: Front matter constants and blog settings

    """
    return Document(
        front_matter=build_front_matter(record, config, draft=draft),
        body=f"{banner}{render(record.content)}",
    )
