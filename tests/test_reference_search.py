"""Tests for reference search."""

import json

import httpx
import pytest

from blogrefresh.config import SearchConfig
from blogrefresh.errors import ConfigurationError, TransportError, ValidationError
from blogrefresh.search import ReferenceSearch, is_blocked_host, looks_like_article_url

from .conftest import mock_client

ORGANIC = [
    {"title": "Video", "link": "https://www.youtube.com/blog/watch"},
    {"title": "Profile", "link": "https://uk.linkedin.com/blog/post"},
    {"title": "About page", "link": "https://example.com/about"},
    {"title": "Paper", "link": "https://www.nature.com/articles/s41586"},
    {"title": "Good one", "link": "https://example.com/blog/cloud-backup"},
    {"title": "No link"},
    {"title": "Another good one", "link": "https://foo.dev/articles/backups"},
    {"title": "Third good one", "link": "https://third.com/blog/z"},
]


def search_with(handler, **config):
    return ReferenceSearch(SearchConfig(api_key="serper-key", **config), client=mock_client(handler))


class TestUrlFilters:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://example.com/blog/post", True),
            ("https://example.com/blogs", True),
            ("https://example.com/blog-post", True),
            ("https://example.com/articles/123", True),
            ("https://example.com/blogging", False),
            ("https://example.com/about", False),
            ("ftp://example.com/blog/post", False),
        ],
    )
    def test_looks_like_article_url(self, url, expected):
        assert looks_like_article_url(url) is expected

    def test_blocked_host_includes_subdomains(self):
        blocked = ["linkedin.com", "youtu.be"]

        assert is_blocked_host("linkedin.com", blocked)
        assert is_blocked_host("uk.linkedin.com", blocked)
        assert is_blocked_host("YOUTU.BE", blocked)
        assert not is_blocked_host("notlinkedin.com", blocked)
        assert is_blocked_host(None, blocked)


class TestReferenceSearch:
    def test_requires_api_key(self):
        with pytest.raises(ConfigurationError, match="SERPER_API_KEY"):
            ReferenceSearch(SearchConfig())

    def test_sends_query_with_api_key(self):
        captured = []

        def handler(request):
            captured.append(request)
            return httpx.Response(200, json={"organic": []})

        search_with(handler).search("Cloud Backup Guide")

        assert captured[0].headers["X-API-KEY"] == "serper-key"
        assert json.loads(captured[0].content) == {"q": "Cloud Backup Guide", "num": 10}

    def test_filters_and_truncates_results(self):
        results = search_with(lambda r: httpx.Response(200, json={"organic": ORGANIC})).search("backups")

        assert [r.url for r in results] == [
            "https://example.com/blog/cloud-backup",
            "https://foo.dev/articles/backups",
        ]
        assert results[0].title == "Good one"

    def test_max_results_is_configurable(self):
        results = search_with(
            lambda r: httpx.Response(200, json={"organic": ORGANIC}), max_results=3
        ).search("backups")

        assert len(results) == 3

    def test_missing_organic_block(self):
        assert search_with(lambda r: httpx.Response(200, json={"answerBox": {}})).search("q") == []

    def test_non_2xx_raises_transport_error(self):
        search = search_with(lambda r: httpx.Response(403, text="Unauthorized"))

        with pytest.raises(TransportError) as exc_info:
            search.search("q")

        assert exc_info.value.status_code == 403
        assert exc_info.value.body == "Unauthorized"

    def test_network_failure_raises_transport_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(TransportError):
            search_with(handler).search("q")

    def test_empty_query(self):
        with pytest.raises(ValidationError):
            search_with(lambda r: httpx.Response(200, json={})).search("   ")
