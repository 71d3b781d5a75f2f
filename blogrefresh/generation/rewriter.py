"""Article rewriting with reference-guided tone."""

import html
from typing import List, Optional, Sequence

from ..errors import ValidationError
from .llm_provider import LLMProvider
from .models import Prompt, SourceDocument

MAX_PROMPT_REFERENCES = 5
REWRITE_FORMATS = ("markdown", "html")

SYSTEM_INSTRUCTIONS = " ".join(
    [
        "You are an expert editor and writer.",
        "Rewrite the provided ORIGINAL article into high-quality {format} with clear headings and improved structure.",
        "Use the REFERENCE articles only to match tone, depth, and stylistic patterns.",
        "DO NOT plagiarize: do not copy sentences or distinctive phrasing from the references.",
        "DO NOT invent citations, quotes, or factual claims not supported by the ORIGINAL content.",
        "Keep the topic the same as the ORIGINAL article, but improve clarity, flow, and usefulness.",
        "Output ONLY the rewritten content (no preface, no explanation).",
    ]
)

FORMAT_REQUIREMENTS = {
    "html": (
        "Return valid HTML. Use semantic headings (<h2>, <h3>), paragraphs, and lists. "
        "Do not include <html>, <head>, or <body> wrappers."
    ),
    "markdown": "Return Markdown. Use headings (##, ###), paragraphs, and bullet lists.",
}


def _require(value: str, name: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{name} is required")
    return text


def _markdown_link_text(title: str) -> str:
    return title.replace("]", "\\]")


def _markdown_link_url(url: str) -> str:
    return url.replace(")", "%29")


def format_document(document: SourceDocument) -> str:
    """Render one document for the prompt."""
    title = document.title.strip() or "(untitled)"
    content = document.content.strip() or "(empty)"
    return f"TITLE: {title}\nCONTENT:\n{content}"


def build_prompt(original: SourceDocument, references: Sequence[SourceDocument], output_format: str) -> Prompt:
    """Build the rewrite prompt from the original and up to five references."""
    title = _require(original.title, "original.title")
    content = _require(original.content, "original.content")
    label = output_format.upper()

    ref_block = "\n\n".join(
        f"REFERENCE {idx}\n{format_document(ref)}"
        for idx, ref in enumerate(references[:MAX_PROMPT_REFERENCES], start=1)
    )

    user = f"ORIGINAL\nTITLE: {title}\nCONTENT:\n{content}\n\n"
    if ref_block:
        user += f"{ref_block}\n\n"
    user += f"OUTPUT FORMAT: {label}\n{FORMAT_REQUIREMENTS[output_format]}"

    return Prompt(system=SYSTEM_INSTRUCTIONS.format(format=label), user=user)


def build_references_appendix(references: Sequence[SourceDocument], output_format: str) -> str:
    """
    Format the References section appended to a rewrite.

    References without a URL are dropped; with none left the appendix is empty.
    """
    links = []
    for ref in references:
        url = ref.url.strip()
        if url:
            links.append((ref.title.strip() or "Reference", url))

    if not links:
        return ""

    if output_format == "html":
        items = "".join(
            f'<li><a href="{html.escape(url)}" target="_blank" rel="noopener noreferrer">'
            f"{html.escape(title)}</a></li>"
            for title, url in links
        )
        return f"\n\n<h2>References</h2>\n<ul>{items}</ul>"

    items = "\n".join(
        f"- [{_markdown_link_text(title)}]({_markdown_link_url(url)})" for title, url in links
    )
    return f"\n\n## References\n{items}"


class RewriteEngine:
    """Rewrite an article with an LLM, using references for tone and depth."""

    def __init__(self, provider: LLMProvider, output_format: str = "markdown") -> None:
        """
        Initialize rewrite engine.

        Args:
            provider: Text generation backend
            output_format: ``markdown`` or ``html``
        """
        if output_format not in REWRITE_FORMATS:
            raise ValidationError(f"Unsupported rewrite format: {output_format}")
        self.provider = provider
        self.output_format = output_format

    def rewrite(
        self,
        original: SourceDocument,
        references: Optional[List[SourceDocument]] = None,
    ) -> str:
        """
        Rewrite an article and append its References section.

        Raises:
            ValidationError: Original title or content is empty
            TransportError: The provider call failed
        """
        refs = list(references or [])[:MAX_PROMPT_REFERENCES]
        prompt = build_prompt(original, refs, self.output_format)
        rewritten = self.provider.generate_text(prompt)
        return rewritten + build_references_appendix(refs, self.output_format)
