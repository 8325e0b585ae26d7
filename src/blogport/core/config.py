import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(destination.get(key, {}), value)
        else:
            destination[key] = value
    return destination


class BlogSettings(BaseModel):
    """Where the export comes from and how Blogger marks things."""

    source_domain: str = Field(
        default="unomascero.blogspot.com",
        description="Links containing this domain are rewritten to local posts",
    )
    domain_aliases: dict[str, str] = Field(
        default_factory=lambda: {".com.es": ".com"},
        description="Country-specific domain variants folded into the canonical one",
    )
    label_scheme: str = Field(
        default="http://www.blogger.com/atom/ns#",
        description="Category scheme of user-defined labels",
    )
    post_kind_suffix: str = Field(default="kind#post", description="Category term suffix marking real posts")


class FrontMatterSettings(BaseModel):
    """Constant front matter values stamped on every converted post."""

    description: str = Field(default="post importado desde unomascero.blogspot.com")
    tags: list[str] = Field(default_factory=lambda: ["recuerdos", "unomascero"])
    base_categories: list[str] = Field(
        default_factory=lambda: ["personal", "vidas pasadas"],
        description="Categories placed before the post's own labels",
    )
    external_link: str = Field(default="unomascero.blogspot.com")
    series: list[str] = Field(default_factory=lambda: ["vidas pasadas", "píldoras para la egolatría"])
    draft: bool = Field(default=False, description="Mark every converted post as a draft")


class RenderSettings(BaseModel):
    """Body rendering options."""

    banner_file: Path | None = Field(default=None, description="Markdown prepended to every post body")


class PathsSettings(BaseModel):
    """Path configuration.

    All paths are relative to the 'site_root' unless absolute.
    site_root defaults to current working directory.
    """

    site_root: Path = Field(
        default_factory=Path.cwd,
        description="Root directory of the Hugo site (defaults to current working directory)",
    )
    output_dir: Path = Field(default=Path("content/posts"), description="Where posts are written")

    @property
    def abs_output_dir(self) -> Path:
        return self._resolve(self.output_dir)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


class BlogportConfig(BaseSettings):
    """Root configuration for Blogport.

    Supports environment variable overrides with the pattern:
    BLOGPORT_SECTION__KEY (e.g., BLOGPORT_BLOG__SOURCE_DOMAIN)
    """

    blog: BlogSettings = Field(default_factory=BlogSettings)
    front_matter: FrontMatterSettings = Field(default_factory=FrontMatterSettings)
    render: RenderSettings = Field(default_factory=RenderSettings)
    paths: PathsSettings = Field(default_factory=PathsSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="BLOGPORT_",
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, site_root: Path | None = None) -> "BlogportConfig":
        """Loads configuration from .blogport.toml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (BLOGPORT_SECTION__KEY)
        2. Config file (.blogport.toml)
        3. Defaults
        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / ".blogport.toml"

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            with config_file.open("rb") as f:
                file_settings = tomllib.load(f)

        env_config = cls()
        env_settings = env_config.model_dump(exclude_unset=True)

        merged_config = _deep_merge(file_settings, env_settings)
        merged_config.setdefault("paths", {})["site_root"] = root_path

        return cls.model_validate(merged_config)

    def read_banner(self) -> str:
        """Return the banner text, or an empty string when none is configured."""
        banner_file = self.render.banner_file
        if banner_file is None:
            return ""
        if not banner_file.is_absolute():
            banner_file = self.paths.site_root / banner_file
        return banner_file.read_text(encoding="utf-8")
