"""Shared fixtures for blogrefresh tests."""

import io
import json
from typing import Dict, List, Optional

import httpx
import pytest
from rich.console import Console

from blogrefresh.config import PipelineConfig
from blogrefresh.generation import LLMProvider, Prompt, RewriteEngine
from blogrefresh.ingestion import ContentExtractor
from blogrefresh.models import Reference
from blogrefresh.pipeline import PipelineOrchestrator
from blogrefresh.publishing import Publisher
from blogrefresh.store import ArticleStoreClient

STORE_URL = "http://store.test"


def mock_client(handler) -> httpx.Client:
    """httpx client that routes every request to ``handler``."""
    return httpx.Client(transport=httpx.MockTransport(handler))


def make_article(
    article_id: str,
    title: str,
    content: str = "<p>Original body text.</p>",
    updated: bool = False,
    original_id: Optional[str] = None,
) -> Dict:
    """Article record shaped like the store's JSON."""
    return {
        "_id": article_id,
        "title": title,
        "slug": title.lower().replace(" ", "-"),
        "content": content,
        "isUpdatedVersion": updated,
        "originalArticleId": original_id,
        "references": [],
        "createdAt": "2024-01-01T00:00:00Z",
    }


class FakeProvider(LLMProvider):
    """Provider returning canned text and recording prompts."""

    name = "fake"

    def __init__(self, text: str = "## Rewritten\n\nBetter body.", error: Optional[Exception] = None):
        super().__init__("fake-model")
        self.text = text
        self.error = error
        self.prompts: List[Prompt] = []

    def generate_text(self, prompt: Prompt) -> str:
        self.api_calls += 1
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


class FakeStore:
    """In-memory article API served through httpx.MockTransport."""

    def __init__(self, articles: Optional[List[Dict]] = None, create_status: int = 201):
        self.articles = list(articles or [])
        self.created: List[Dict] = []
        self.requests: List[httpx.Request] = []
        self.create_status = create_status
        self._next_id = 1000

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path == "/api/articles":
            return httpx.Response(200, json=self.articles)

        if request.method == "POST" and path == "/api/articles/extract-oldest":
            originals = [a for a in self.articles if not a["isUpdatedVersion"]]
            return httpx.Response(
                200,
                json={"originals": originals, "meta": {"saved": len(originals), "skipped": 0}},
            )

        if request.method == "GET" and path.startswith("/api/articles/"):
            article_id = path.rsplit("/", 1)[-1]
            for article in self.articles:
                if article["_id"] == article_id:
                    return httpx.Response(200, json=article)
            return httpx.Response(404, json={"message": "Article not found"})

        if request.method == "POST" and path == "/api/articles":
            payload = json.loads(request.content)
            if self.create_status >= 400:
                return httpx.Response(self.create_status, json={"message": "Rejected"})
            if any(a.get("slug") == payload.get("slug") for a in self.articles):
                return httpx.Response(409, json={"message": "Duplicate slug"})
            self._next_id += 1
            record = dict(payload, _id=f"d{self._next_id}", createdAt="2024-02-01T00:00:00Z")
            self.articles.append(record)
            self.created.append(record)
            return httpx.Response(201, json=record)

        return httpx.Response(404, json={"message": "Not found"})

    def client(self) -> ArticleStoreClient:
        return ArticleStoreClient(STORE_URL, client=mock_client(self.handler))


class FakeSearch:
    """Search returning canned references per query; values may be exceptions."""

    def __init__(self, results: Optional[Dict] = None, default: Optional[List[Reference]] = None):
        self.results = results or {}
        self.default = default or []
        self.queries: List[str] = []

    def search(self, query: str) -> List[Reference]:
        self.queries.append(query)
        value = self.results.get(query, self.default)
        if isinstance(value, Exception):
            raise value
        return list(value)


class FakeExtractor(ContentExtractor):
    """Extractor serving canned text per URL; values may be exceptions."""

    def __init__(self, pages: Optional[Dict] = None):
        super().__init__(client=mock_client(lambda request: httpx.Response(500)))
        self.pages = pages or {}
        self.scraped: List[str] = []

    def scrape(self, url: str, output: str = "text") -> str:
        self.scraped.append(url)
        value = self.pages.get(url, f"Reference text from {url}")
        if isinstance(value, Exception):
            raise value
        return value


def refs(*urls: str) -> List[Reference]:
    return [Reference(title=f"Ref {i}", url=url) for i, url in enumerate(urls, start=1)]


@pytest.fixture
def output():
    """Console writing to an in-memory buffer."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def build_orchestrator(output, sleeps):
    """Factory wiring an orchestrator from fakes and a real publisher."""

    def _build(store: FakeStore, search: FakeSearch, extractor=None, provider=None, **settings):
        store_client = store.client()
        return PipelineOrchestrator(
            store=store_client,
            search=search,
            extractor=extractor or FakeExtractor(),
            rewriter=RewriteEngine(provider or FakeProvider(), "markdown"),
            publisher=Publisher(store_client),
            settings=PipelineConfig(**settings),
            output=output,
            sleep=sleeps.append,
        )

    return _build
