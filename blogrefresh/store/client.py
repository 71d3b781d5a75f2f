"""Article store API client."""

import json
from typing import Any, Dict, Iterable, List, Optional, Set

import httpx

from ..errors import NotFoundError, TransportError, ValidationError
from ..models import Article
from .models import ExtractionResult


def updated_original_ids(articles: Iterable[Article]) -> Set[str]:
    """Ids of originals that already have a derivative."""
    return {
        a.original_article_id
        for a in articles
        if a.is_updated_version and a.original_article_id
    }


def _body_text(response: httpx.Response) -> str:
    try:
        return json.dumps(response.json())
    except ValueError:
        return response.text


class ArticleStoreClient:
    """Talk to the article CRUD API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """
        Initialize the store client.

        Args:
            base_url: API root, e.g. ``http://localhost:5000``
            timeout: Request timeout in seconds
            client: Pre-configured HTTP client (for testing)
        """
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    @property
    def articles_url(self) -> str:
        return f"{self.base_url}/api/articles"

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(
                f"{method} {url} failed ({e}). Is the article API running at {self.base_url}?"
            ) from e

    def _check(self, method: str, url: str, response: httpx.Response) -> None:
        if response.is_success:
            return
        body = _body_text(response)
        message = f"{method} {url} failed: {response.status_code} {response.reason_phrase} - {body}"
        if response.status_code == 404:
            raise NotFoundError(message, response.status_code, body)
        raise TransportError(message, response.status_code, body)

    def list_articles(self) -> List[Article]:
        """Fetch every article, newest first as served by the store."""
        response = self._request("GET", self.articles_url)
        self._check("GET", self.articles_url, response)

        data = response.json()
        if not isinstance(data, list):
            return []
        return [Article.model_validate(item) for item in data if isinstance(item, dict)]

    def get_article(self, article_id: str) -> Article:
        """Fetch one article by id."""
        if not article_id:
            raise ValidationError("Article id is required")

        url = f"{self.articles_url}/{article_id}"
        response = self._request("GET", url)
        self._check("GET", url, response)
        return Article.model_validate(response.json())

    def fetch_original_articles(self, exclude_already_updated: bool = True) -> List[Article]:
        """
        Fetch original articles.

        Args:
            exclude_already_updated: Drop originals that already have a derivative

        Returns:
            Originals in store order
        """
        articles = self.list_articles()
        done = updated_original_ids(articles) if exclude_already_updated else set()
        return [a for a in articles if a.is_original and a.id not in done]

    def find_derivative(self, original_id: str, articles: Optional[List[Article]] = None) -> Optional[Article]:
        """Return the derivative of an original, if one exists."""
        if articles is None:
            articles = self.list_articles()
        for article in articles:
            if article.is_updated_version and article.original_article_id == original_id:
                return article
        return None

    def create_article(self, payload: Dict[str, Any]) -> httpx.Response:
        """POST a new article; the raw response is returned for the caller to interpret."""
        return self._request(
            "POST",
            self.articles_url,
            json=payload,
            headers={"Content-Type": "application/json"},
        )

    def extract_oldest(self, limit: int = 5) -> ExtractionResult:
        """Ask the store to scrape and seed the oldest blog articles."""
        url = f"{self.articles_url}/extract-oldest"
        response = self._request("POST", url, json={"limit": limit})
        self._check("POST", url, response)

        data = response.json() or {}
        meta = data.get("meta") or {}
        return ExtractionResult(
            originals=[Article.model_validate(a) for a in data.get("originals") or []],
            saved=int(meta.get("saved") or 0),
            skipped=int(meta.get("skipped") or 0),
        )

    def close(self) -> None:
        self.client.close()
