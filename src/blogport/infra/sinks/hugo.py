"""Hugo Output Sink for writing converted posts as Markdown files."""

import logging
from pathlib import Path

from blogport.core.types import Document, FrontMatter

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"


def quoted(value: str) -> str:
    """Double-quoted YAML scalar with backslashes and quotes escaped."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_front_matter(front_matter: FrontMatter) -> str:
    """Serialise front matter in Hugo's YAML flavour.

    Fields are always written in the same order. Lists are written as quoted
    bullet items; an empty list leaves the bare key.
    """

    def quoted_list(key: str, values: tuple[str, ...]) -> list[str]:
        return [f"{key}:", *(f"  - {quoted(value)}" for value in values)]

    lines = [
        FRONT_MATTER_DELIMITER,
        f"id: {quoted(front_matter.id)}",
        f"draft: {'true' if front_matter.draft else 'false'}",
        f"date: {front_matter.date}",
        f"title: {quoted(front_matter.title)}",
        f"description: {quoted(front_matter.description)}",
        f"slug: {quoted(front_matter.slug)}",
        *quoted_list("tags", front_matter.tags),
        *quoted_list("categories", front_matter.categories),
        f"externalLink: {quoted(front_matter.external_link)}",
        *quoted_list("series", front_matter.series),
        *quoted_list("aliases", front_matter.aliases),
        FRONT_MATTER_DELIMITER,
    ]
    return "\n".join(lines)


def render_document(document: Document) -> str:
    return f"{render_front_matter(document.front_matter)}\n\n{document.body}"


class HugoOutputSink:
    """Writes one UTF-8 Markdown file per document into a content directory."""

    def __init__(self, output_dir: Path) -> None:
        """Initialize the Hugo output sink.

        Args:
            output_dir: Directory where markdown files will be written

        """
        self.output_dir = Path(output_dir)

    def write(self, filename: str, document: Document) -> Path:
        """Write a document, creating the output directory if needed.

        Returns:
            Path of the written file

        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_file = self.output_dir / filename
        output_file.write_text(render_document(document), encoding="utf-8")
        logger.debug("Wrote %s", output_file)
        return output_file


class DryRunSink:
    """Collects documents in memory instead of writing them."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)
        self.documents: dict[str, Document] = {}

    def write(self, filename: str, document: Document) -> Path:
        self.documents[filename] = document
        return self.output_dir / filename
