"""Page fetching and content extraction."""

from .content_extractor import ContentExtractor, collapse_whitespace
from .readable import looks_like_html, post_process, readable_text

__all__ = [
    "ContentExtractor",
    "collapse_whitespace",
    "looks_like_html",
    "post_process",
    "readable_text",
]
