"""Input adapters for blog exports."""

from blogport.infra.adapters.blogger import BloggerFeedAdapter, iter_posts

__all__ = ["BloggerFeedAdapter", "iter_posts"]
