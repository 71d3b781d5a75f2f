"""Data models for the article store client."""

from typing import List

from pydantic import BaseModel, Field

from ..models import Article


class ExtractionResult(BaseModel):
    """Outcome of the store's extract-oldest collaborator."""

    originals: List[Article] = Field(default_factory=list, description="Seeded original articles")
    saved: int = Field(0, description="Articles newly saved")
    skipped: int = Field(0, description="Articles skipped (already stored or unusable)")
