"""External reference search."""

from .reference_search import ReferenceSearch, is_blocked_host, looks_like_article_url

__all__ = ["ReferenceSearch", "is_blocked_host", "looks_like_article_url"]
