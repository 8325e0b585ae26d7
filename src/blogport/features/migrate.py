"""Two-pass conversion of a Blogger export into Hugo posts.

1. Register every post under its slug. Duplicate slugs abort here, before a
   single file is written.
2. Seal the registry, then transcode and write each post. Cross-post links
   are resolved against the complete registry, so forward references work.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from blogport.core.assembly import build_front_matter, convert_to_post
from blogport.core.config import BlogportConfig
from blogport.core.ports import OutputSink
from blogport.core.registry import PostRegistry, SealedRegistry
from blogport.core.types import Document, PostRecord, RegistryEntry
from blogport.engine.diagnostics import Diagnostics, NoticeKind
from blogport.engine.transcoder import HtmlTranscoder
from blogport.infra.adapters.blogger import iter_posts

logger = logging.getLogger(__name__)


@dataclass
class MigrationReport:
    registered: int = 0
    written: list[Path] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def unresolved_links(self) -> int:
        return self.diagnostics.counts[NoticeKind.UNRESOLVED_LINK]

    @property
    def unhandled_styles(self) -> int:
        return self.diagnostics.counts[NoticeKind.UNHANDLED_STYLE]

    @property
    def unhandled_markup(self) -> int:
        return self.diagnostics.counts[NoticeKind.UNHANDLED_MARKUP]


def register_posts(
    records: Iterable[PostRecord],
    config: BlogportConfig,
    *,
    draft: bool | None = None,
) -> SealedRegistry:
    """Registration pass.

    Raises:
        DuplicateSlugError: If two records share a slug.

    """
    registry = PostRegistry()
    for record in records:
        registry.register(build_front_matter(record, config, draft=draft), record)
    logger.info("Registered %d posts", len(registry))
    return registry.seal()


def publish_posts(
    registry: SealedRegistry,
    sink: OutputSink,
    config: BlogportConfig,
    *,
    banner: str = "",
    diagnostics: Diagnostics | None = None,
) -> list[Path]:
    """Render pass: transcode every registered post and write it."""
    transcoder = HtmlTranscoder.from_config(config, registry, diagnostics)

    def render(entry: RegistryEntry) -> Document:
        return convert_to_post(
            banner,
            entry.front_matter.draft,
            entry.record,
            transcoder.transcode,
            config,
        )

    return registry.flush_all(sink, render)


def migrate(
    records: Iterable[PostRecord],
    sink: OutputSink,
    config: BlogportConfig,
    *,
    banner: str = "",
    draft: bool | None = None,
    limit: int | None = None,
) -> MigrationReport:
    """Convert every post of an export and hand the results to ``sink``.

    Blogger lists entries newest first; posts are processed oldest first.
    """
    posts = list(iter_posts(records, config.blog.post_kind_suffix))
    posts.reverse()
    if limit is not None:
        posts = posts[:limit]

    report = MigrationReport()
    registry = register_posts(posts, config, draft=draft)
    report.registered = len(registry)
    report.written = publish_posts(
        registry,
        sink,
        config,
        banner=banner,
        diagnostics=report.diagnostics,
    )
    return report
