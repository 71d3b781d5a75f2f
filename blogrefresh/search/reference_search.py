"""Reference search over the Serper Google search API."""

import re
from typing import Iterable, List, Optional
from urllib.parse import urlparse

import httpx

from ..config import SearchConfig
from ..errors import ConfigurationError, TransportError, ValidationError
from ..models import Reference

BLOG_PATH_PATTERN = re.compile(r"/(blog|blogs|article|articles)\b")


def is_blocked_host(hostname: Optional[str], blocked_domains: Iterable[str]) -> bool:
    """True when the host is a blocked domain or one of its subdomains."""
    host = (hostname or "").lower()
    if not host:
        return True
    for domain in blocked_domains:
        domain = domain.lower()
        if host == domain or host.endswith(f".{domain}"):
            return True
    return False


def looks_like_article_url(url: str) -> bool:
    """True when the URL path looks like a blog post or article."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https"):
        return False
    return bool(BLOG_PATH_PATTERN.search(parsed.path.lower()))


class ReferenceSearch:
    """Find external articles to use as stylistic references."""

    def __init__(self, config: SearchConfig, client: Optional[httpx.Client] = None) -> None:
        """
        Initialize reference search.

        Args:
            config: Search provider configuration
            client: Pre-configured HTTP client (for testing)

        Raises:
            ConfigurationError: No search API key is configured
        """
        if not config.api_key:
            raise ConfigurationError("SERPER_API_KEY is not set")
        self.config = config
        self.client = client or httpx.Client(timeout=config.timeout)

    def _request(self, query: str) -> List[dict]:
        headers = {
            "X-API-KEY": self.config.api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        try:
            response = self.client.post(
                self.config.endpoint,
                json={"q": query, "num": self.config.num_results},
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"Serper request failed: {e}") from e

        if not response.is_success:
            raise TransportError(
                f"Serper request failed: {response.status_code} {response.reason_phrase} - {response.text}",
                response.status_code,
                response.text,
            )

        data = response.json()
        organic = data.get("organic") if isinstance(data, dict) else None
        return organic if isinstance(organic, list) else []

    def filter_results(self, organic: List[dict]) -> List[Reference]:
        """Keep article-like, non-blocked results in ranked order."""
        results: List[Reference] = []
        for item in organic:
            if not isinstance(item, dict):
                continue
            link = str(item.get("link") or "").strip()
            if not link or not looks_like_article_url(link):
                continue
            if is_blocked_host(urlparse(link).hostname, self.config.blocked_domains):
                continue

            results.append(Reference(title=str(item.get("title") or "").strip(), url=link))
            if len(results) >= self.config.max_results:
                break
        return results

    def search(self, query: str) -> List[Reference]:
        """
        Search for reference articles.

        Args:
            query: Search query, usually an article title

        Returns:
            At most ``max_results`` references

        Raises:
            ValidationError: Empty query
            TransportError: Network failure or non-2xx from the provider
        """
        query = (query or "").strip()
        if not query:
            raise ValidationError("Search query is required")
        return self.filter_results(self._request(query))
