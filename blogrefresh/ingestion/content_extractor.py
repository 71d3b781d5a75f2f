"""Page fetcher and main-content extractor."""

import re
from typing import Optional

import httpx
import trafilatura
from bs4 import BeautifulSoup, Tag

from ..config import ExtractorConfig
from ..errors import TransportError, ValidationError

OUTPUT_MODES = ("text", "html")


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return re.sub(r"\s+", " ", text or "").strip()


class ContentExtractor:
    """Fetch HTML and extract the main content region."""

    def __init__(self, config: Optional[ExtractorConfig] = None, client: Optional[httpx.Client] = None) -> None:
        """Initialize content extractor."""
        self.config = config or ExtractorConfig()
        self.client = client or httpx.Client(timeout=self.config.timeout, follow_redirects=True)

    def fetch_html(self, url: str) -> str:
        """Fetch raw HTML with a browser-like user agent."""
        headers = {
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,application/xhtml+xml",
        }
        try:
            response = self.client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            raise TransportError(f"GET {url} timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(f"GET {url} failed: {e}") from e

        if not response.is_success:
            raise TransportError(
                f"GET {url} failed: HTTP {response.status_code}",
                response.status_code,
                response.text,
            )
        return response.text

    def select_main(self, soup: BeautifulSoup) -> Tag:
        """First container matching the selector policy, else the body."""
        for selector in self.config.content_selectors:
            element = soup.select_one(selector)
            if element is not None:
                return element
        return soup.body or soup

    def strip_boilerplate(self, root: Tag) -> None:
        """Remove boilerplate tags from the subtree in place."""
        for tag in root.find_all(self.config.boilerplate_tags):
            if not tag.decomposed:
                tag.decompose()

    def extract(self, html: str, output: str = "text") -> str:
        """
        Extract main content from an HTML document.

        Args:
            html: Raw page HTML
            output: ``text`` for whitespace-collapsed text, ``html`` for inner HTML

        Returns:
            Cleaned main content (may be empty)
        """
        if output not in OUTPUT_MODES:
            raise ValidationError(f"Unsupported output mode: {output}")

        soup = BeautifulSoup(html or "", "html.parser")
        main = self.select_main(soup)
        self.strip_boilerplate(main)

        if output == "html":
            return main.decode_contents().strip()

        text = collapse_whitespace(main.get_text(" "))
        if not text and html:
            # Selector policy found nothing readable; let trafilatura try the whole page
            text = collapse_whitespace(
                trafilatura.extract(html, include_comments=False, include_tables=False) or ""
            )
        return text

    def scrape(self, url: str, output: str = "text") -> str:
        """
        Fetch a page and return its cleaned main content.

        Raises:
            ValidationError: Empty URL or unsupported output mode
            TransportError: Network failure or non-2xx response
        """
        target = (url or "").strip()
        if not target:
            raise ValidationError("url is required")
        if output not in OUTPUT_MODES:
            raise ValidationError(f"Unsupported output mode: {output}")

        html = self.fetch_html(target)
        return self.extract(html, output=output)
