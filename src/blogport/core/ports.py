from collections.abc import Iterator
from pathlib import Path
from typing import Protocol, runtime_checkable

from blogport.core.types import Document, PostRecord, RegistryEntry


@runtime_checkable
class InputAdapter(Protocol):
    """Parses a source export into a stream of PostRecords."""

    def parse(self, source: Path) -> Iterator[PostRecord]: ...


@runtime_checkable
class LinkResolver(Protocol):
    """Read-only slug lookup used while transcoding cross-post links."""

    def lookup(self, slug: str) -> RegistryEntry | None: ...


@runtime_checkable
class OutputSink(Protocol):
    """Stores one rendered document under its computed filename."""

    def write(self, filename: str, document: Document) -> Path: ...
