"""Data models for the blog refresh pipeline."""

from .article import Article, Reference, id_string

__all__ = ["Article", "Reference", "id_string"]
