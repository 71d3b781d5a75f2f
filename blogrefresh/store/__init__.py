"""Client for the article store API."""

from .client import ArticleStoreClient, updated_original_ids
from .models import ExtractionResult

__all__ = ["ArticleStoreClient", "ExtractionResult", "updated_original_ids"]
