"""Blogport: convert Blogger exports into Hugo-ready Markdown posts."""

from blogport.features.migrate import migrate

__version__ = "0.1.0"
__all__ = [
    "migrate",
]
