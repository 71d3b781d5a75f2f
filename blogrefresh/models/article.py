"""Article and reference records."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field, field_validator

from .base import StoreModel


def id_string(value: Any) -> str:
    """Return an id as a string, unwrapping populated ``{"_id": ...}`` objects."""
    if not value:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return str(value.get("_id") or "")
    return str(value)


class Reference(StoreModel):
    """External page used as a stylistic source for a rewrite."""

    title: str = Field("", description="Reference page title")
    url: str = Field("", description="Reference page URL")


class Article(StoreModel):
    """Article record as served by the article store."""

    id: str = Field(..., alias="_id", description="Store-assigned identifier")
    title: str = Field(..., description="Article title")
    slug: Optional[str] = Field(None, description="URL-safe unique slug")
    content: str = Field("", description="HTML or Markdown body")
    original_url: Optional[str] = Field(None, alias="originalUrl", description="Scraped source URL")
    is_updated_version: bool = Field(
        False, alias="isUpdatedVersion", description="True for LLM-rewritten derivatives"
    )
    original_article_id: Optional[str] = Field(
        None, alias="originalArticleId", description="Source article of a derivative"
    )
    references: List[Reference] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    @field_validator("id", "original_article_id", mode="before")
    @classmethod
    def unwrap_id(cls, v: Any) -> Optional[str]:
        """Accept plain ids and populated documents."""
        return id_string(v) or None

    @field_validator("content", mode="before")
    @classmethod
    def default_content(cls, v: Any) -> str:
        return v or ""

    @property
    def is_original(self) -> bool:
        return not self.is_updated_version
