"""Tests for the rewrite engine."""

import pytest

from blogrefresh.errors import TransportError, ValidationError
from blogrefresh.generation import RewriteEngine, SourceDocument, build_prompt, build_references_appendix

from .conftest import FakeProvider

ORIGINAL = SourceDocument(title="Cloud Backup Guide", content="Back up your files.")


def make_refs(count):
    return [
        SourceDocument(title=f"Ref {i}", content=f"Body {i}", url=f"https://example.com/blog/{i}")
        for i in range(1, count + 1)
    ]


class TestBuildPrompt:
    def test_contains_original_references_and_format(self):
        prompt = build_prompt(ORIGINAL, make_refs(2), "markdown")

        assert "TITLE: Cloud Backup Guide" in prompt.user
        assert "Back up your files." in prompt.user
        assert "REFERENCE 1\nTITLE: Ref 1" in prompt.user
        assert "REFERENCE 2" in prompt.user
        assert "OUTPUT FORMAT: MARKDOWN" in prompt.user
        assert "plagiarize" in prompt.system
        assert "MARKDOWN" in prompt.system

    def test_html_format_requirements(self):
        prompt = build_prompt(ORIGINAL, [], "html")

        assert "OUTPUT FORMAT: HTML" in prompt.user
        assert "<h2>" in prompt.user
        assert "REFERENCE" not in prompt.user

    def test_empty_reference_fields_get_placeholders(self):
        prompt = build_prompt(ORIGINAL, [SourceDocument(url="https://x.com/blog/a")], "markdown")

        assert "TITLE: (untitled)\nCONTENT:\n(empty)" in prompt.user


class TestReferencesAppendix:
    def test_markdown_links_are_escaped(self):
        refs = [SourceDocument(title="A [b] c", url="https://x.com/a_(b)")]

        appendix = build_references_appendix(refs, "markdown")

        assert appendix == "\n\n## References\n- [A [b\\] c](https://x.com/a_(b%29)"

    def test_html_links_are_escaped(self):
        refs = [SourceDocument(title="<b>&", url='https://x.com/?q="1"')]

        appendix = build_references_appendix(refs, "html")

        assert appendix.startswith("\n\n<h2>References</h2>\n<ul>")
        assert "&lt;b&gt;&amp;" in appendix
        assert 'href="https://x.com/?q=&quot;1&quot;"' in appendix
        assert 'target="_blank" rel="noopener noreferrer"' in appendix

    def test_untitled_reference(self):
        appendix = build_references_appendix([SourceDocument(url="https://x.com/blog/a")], "markdown")

        assert "- [Reference](https://x.com/blog/a)" in appendix

    def test_no_urls_means_no_appendix(self):
        assert build_references_appendix([SourceDocument(title="No link")], "markdown") == ""
        assert build_references_appendix([], "html") == ""


class TestRewriteEngine:
    def test_rewrite_appends_references(self):
        provider = FakeProvider(text="## Better")

        result = RewriteEngine(provider, "markdown").rewrite(ORIGINAL, make_refs(2))

        assert result == (
            "## Better\n\n## References\n"
            "- [Ref 1](https://example.com/blog/1)\n"
            "- [Ref 2](https://example.com/blog/2)"
        )
        assert provider.api_calls == 1

    def test_at_most_five_references(self):
        provider = FakeProvider()

        result = RewriteEngine(provider).rewrite(ORIGINAL, make_refs(6))

        assert "REFERENCE 5" in provider.prompts[0].user
        assert "REFERENCE 6" not in provider.prompts[0].user
        assert "https://example.com/blog/6" not in result

    def test_without_references_output_is_model_text(self):
        provider = FakeProvider(text="<h2>Better</h2>")

        assert RewriteEngine(provider, "html").rewrite(ORIGINAL) == "<h2>Better</h2>"

    @pytest.mark.parametrize(
        "original",
        [
            SourceDocument(title="", content="body"),
            SourceDocument(title="Title", content="   "),
        ],
    )
    def test_missing_original_fields(self, original):
        provider = FakeProvider()

        with pytest.raises(ValidationError):
            RewriteEngine(provider).rewrite(original)

        assert provider.prompts == []

    def test_provider_errors_propagate(self):
        provider = FakeProvider(error=TransportError("LLM down", 503))

        with pytest.raises(TransportError):
            RewriteEngine(provider).rewrite(ORIGINAL)

    def test_unsupported_format(self):
        with pytest.raises(ValidationError):
            RewriteEngine(FakeProvider(), "pdf")
