"""Slug-keyed registry of converted posts.

Posts are registered in one pass, then the registry is sealed and handed to
the render pass. Only the sealed view is visible while links are resolved, so
a post can link forward to anything registered after it.
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

from blogport.core.exceptions import DuplicateFilenameError, DuplicateSlugError, RegistrySealedError
from blogport.core.ports import OutputSink
from blogport.core.types import Document, FrontMatter, PostRecord, RegistryEntry
from blogport.core.utils import propose_filename

logger = logging.getLogger(__name__)


class SealedRegistry:
    """Lookup-only view over a fully populated registry."""

    def __init__(self, entries: dict[str, RegistryEntry]) -> None:
        self._entries = entries

    def lookup(self, slug: str) -> RegistryEntry | None:
        return self._entries.get(slug)

    def __contains__(self, slug: object) -> bool:
        return slug in self._entries

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def flush_all(
        self,
        sink: OutputSink,
        render: Callable[[RegistryEntry], Document],
    ) -> list[Path]:
        """Render every entry and hand it to the sink.

        Write order is unspecified.

        Returns:
            The paths reported by the sink.

        """
        written: list[Path] = []
        for entry in self._entries.values():
            written.append(sink.write(entry.filename, render(entry)))
        logger.info("Flushed %d posts", len(written))
        return written


class PostRegistry:
    """Append-only registry used during the registration pass."""

    def __init__(self) -> None:
        self._entries: dict[str, RegistryEntry] = {}
        self._slugs_by_filename: dict[str, str] = {}
        self._sealed = False

    def register(self, front_matter: FrontMatter, record: PostRecord) -> RegistryEntry:
        """Register a post under its slug.

        Raises:
            DuplicateSlugError: If the slug is already taken.
            DuplicateFilenameError: If another post already maps to the same file.
            RegistrySealedError: If called after :meth:`seal`.

        """
        slug = front_matter.slug
        if self._sealed:
            raise RegistrySealedError(slug)
        existing = self._entries.get(slug)
        if existing is not None:
            raise DuplicateSlugError(slug, existing.filename)

        filename = propose_filename(front_matter.title, front_matter.date)
        existing_slug = self._slugs_by_filename.get(filename)
        if existing_slug is not None:
            raise DuplicateFilenameError(filename, slug, existing_slug)

        entry = RegistryEntry(filename=filename, front_matter=front_matter, record=record)
        self._entries[slug] = entry
        self._slugs_by_filename[filename] = slug
        logger.debug("Registered %s as %s", slug, entry.filename)
        return entry

    def lookup(self, slug: str) -> RegistryEntry | None:
        return self._entries.get(slug)

    def __len__(self) -> int:
        return len(self._entries)

    def seal(self) -> SealedRegistry:
        """Close the registry for insertion and return its read-only view."""
        self._sealed = True
        return SealedRegistry(self._entries)
