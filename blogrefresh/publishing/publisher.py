"""Publish rewritten articles to the article store."""

import re
import unicodedata
from typing import Any, List, Optional, Sequence

import httpx
from pydantic import BaseModel, Field

from ..errors import TransportError
from ..models import Reference
from ..store import ArticleStoreClient

COMBINING_MARKS = re.compile("[\u0300-\u036f]")
NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """URL-safe, lowercase, hyphen-separated slug; empty when nothing survives."""
    normalized = unicodedata.normalize("NFKD", str(text or ""))
    normalized = COMBINING_MARKS.sub("", normalized).lower()
    return NON_ALPHANUMERIC.sub("-", normalized).strip("-")


class PublishResult(BaseModel):
    """Outcome of a publish attempt."""

    ok: bool = Field(..., description="Whether the store accepted the article")
    status: int = Field(..., description="HTTP status, 400 for local validation, 0 for transport errors")
    data: Any = Field(None, description="Response body")
    error: Optional[str] = Field(None, description="Error message on failure")

    @classmethod
    def failure(cls, status: int, error: str, data: Any = None) -> "PublishResult":
        return cls(ok=False, status=status, error=error, data=data)


def _response_data(response: httpx.Response) -> Any:
    if "application/json" in response.headers.get("content-type", ""):
        try:
            return response.json()
        except ValueError:
            return None
    return response.text


class Publisher:
    """Validate and create derivative articles."""

    def __init__(self, store: Optional[ArticleStoreClient]) -> None:
        """
        Initialize publisher.

        Args:
            store: Article store client; None when no port is configured
        """
        self.store = store

    def publish(
        self,
        title: str,
        content: str,
        original_article_id: str,
        references: Optional[Sequence[Reference]] = None,
    ) -> PublishResult:
        """
        Create a derivative (``isUpdatedVersion=true``) article.

        Never raises: validation problems and transport errors come back as
        failure results.
        """
        title = str(title or "").strip()
        content = str(content or "").strip()
        original_article_id = str(original_article_id or "").strip()

        if not title:
            return PublishResult.failure(400, "title is required")
        if not content:
            return PublishResult.failure(400, "content is required")
        if not original_article_id:
            return PublishResult.failure(400, "originalArticleId is required")
        if self.store is None:
            return PublishResult.failure(400, "PORT is not set (set PORT or ARTICLE_API_URL)")

        slug = slugify(title)
        if not slug:
            return PublishResult.failure(400, "unable to generate slug from title")

        refs: List[dict] = [
            {"title": r.title, "url": r.url} for r in (references or [])
        ]
        payload = {
            "title": title,
            "slug": slug,
            "content": content,
            "isUpdatedVersion": True,
            "originalArticleId": original_article_id,
            "references": refs,
        }

        url = self.store.articles_url
        try:
            response = self.store.create_article(payload)
        except TransportError as e:
            return PublishResult.failure(0, str(e))

        data = _response_data(response)
        if not response.is_success:
            return PublishResult.failure(
                response.status_code,
                f"POST {url} failed: {response.status_code} {response.reason_phrase}",
                data,
            )
        return PublishResult(ok=True, status=response.status_code, data=data)
