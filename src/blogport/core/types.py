"""Core data types for Blogport."""

from pydantic import BaseModel, ConfigDict, Field


# --- Feed input ---
class Link(BaseModel):
    href: str
    rel: str | None = None
    type: str | None = None
    title: str | None = None


class Category(BaseModel):
    term: str
    scheme: str | None = None


class PostRecord(BaseModel):
    """A single entry read from a Blogger export.

    Only the fields the converter needs are modelled; unknown fields are ignored.
    """

    id: str
    published: str
    updated: str | None = None
    title: str = ""
    content: str = ""
    categories: list[Category] = Field(default_factory=list)
    links: list[Link] = Field(default_factory=list)

    def first_link(self, rel: str) -> Link | None:
        """Return the first link with the given relation, if any."""
        return next((link for link in self.links if link.rel == rel), None)

    def is_kind(self, suffix: str) -> bool:
        """True when a category term marks the entry as the given Blogger kind."""
        return any(category.term.endswith(suffix) for category in self.categories)


# --- Output domain ---
class FrontMatter(BaseModel):
    """Hugo front matter, serialised in field declaration order."""

    model_config = ConfigDict(frozen=True)

    id: str
    draft: bool = False
    date: str
    title: str
    description: str = ""
    slug: str
    tags: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    external_link: str = ""
    series: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()


class Document(BaseModel):
    """A converted post: front matter plus the rendered Markdown body."""

    model_config = ConfigDict(frozen=True)

    front_matter: FrontMatter
    body: str


class RegistryEntry(BaseModel):
    """A registered post waiting to be rendered.

    The source record travels with the entry so the body can be transcoded
    once every link target is known.
    """

    model_config = ConfigDict(frozen=True)

    filename: str
    front_matter: FrontMatter
    record: PostRecord

    @property
    def slug(self) -> str:
        return self.front_matter.slug

    @property
    def title(self) -> str:
        return self.front_matter.title
