"""Tests for readable text extraction."""

from blogrefresh.ingestion import looks_like_html, post_process, readable_text


class TestPostProcess:
    def test_cuts_at_marker_and_drops_counter_lines(self):
        text = "Intro\n\n\n\n0\nMore text\nRelated posts\nOther article"

        assert post_process(text) == "Intro\n\nMore text"

    def test_plain_text_passes_through(self):
        assert readable_text("# Heading\n\nSome markdown body.") == "# Heading\n\nSome markdown body."


class TestReadableText:
    def test_detects_html(self):
        assert looks_like_html("<p>Hi</p>")
        assert not looks_like_html("2 < 3 and 4 > 1")

    def test_prefers_cleaned_article_content(self):
        html = (
            "<html><body>"
            "<div class='sidebar'>Sidebar links with plenty of words in them</div>"
            "<article><p>Short</p></article>"
            "<div class='content'>"
            "<p>First paragraph of the article.</p>"
            "<p>Second paragraph.</p>"
            "<div class='comments'>Leave a reply</div>"
            "</div>"
            "</body></html>"
        )

        text = readable_text(html)

        assert "First paragraph of the article." in text
        assert "Second paragraph." in text
        assert "Sidebar" not in text
        assert "Leave a reply" not in text

    def test_paragraphs_become_lines(self):
        text = readable_text("<article><h2>Heading</h2><p>One</p><p>Two</p></article>")

        assert text == "Heading\n\nOne\n\nTwo"

    def test_fragment_without_body(self):
        assert readable_text("<p>Just a fragment</p>") == "Just a fragment"

    def test_empty(self):
        assert readable_text("") == ""
