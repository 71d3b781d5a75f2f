"""Readable text for displaying stored article bodies."""

import re
from typing import List

from bs4 import BeautifulSoup, Tag

CANDIDATE_SELECTORS = [
    "article",
    "main",
    '[role="main"]',
    '[itemprop="articleBody"]',
    ".entry-content",
    ".post-content",
    ".article-content",
    ".content",
]

NON_CONTENT_TAGS = [
    "script",
    "style",
    "noscript",
    "nav",
    "header",
    "footer",
    "aside",
    "form",
    "button",
    "input",
    "textarea",
    "svg",
]

BOILERPLATE_HINTS = ["comment", "reply", "related", "recommend", "sidebar"]

STOP_MARKERS = [
    "leave a reply",
    "cancel reply",
    "post comment",
    "more from",
    "see more recommendations",
    "related posts",
    "recommended",
]

HTML_TAG_PATTERN = re.compile(r"<\s*/?\s*[a-z][\s\S]*?>", re.IGNORECASE)
BLOCK_TAGS = ["p", "h1", "h2", "h3", "h4", "h5", "h6", "li", "blockquote", "div", "section", "br", "tr"]


def looks_like_html(text: str) -> bool:
    return bool(HTML_TAG_PATTERN.search(text or ""))


def strip_after_markers(text: str) -> str:
    """Cut the text at the first trailing-boilerplate marker."""
    lowered = text.lower()
    cut = len(text)
    for marker in STOP_MARKERS:
        idx = lowered.find(marker)
        if idx != -1:
            cut = min(cut, idx)
    return text[:cut]


def post_process(text: str) -> str:
    """Drop trailing boilerplate, counter-only lines and excess blank lines."""
    out = strip_after_markers(text or "")
    lines = [line.rstrip() for line in out.split("\n")]
    out = "\n".join(line for line in lines if not re.fullmatch(r"\s*\d+\s*", line))
    return re.sub(r"\n{3,}", "\n\n", out).strip()


def _is_boilerplate(tag: Tag) -> bool:
    attrs = " ".join([tag.get("id") or ""] + list(tag.get("class") or [])).lower()
    return any(hint in attrs for hint in BOILERPLATE_HINTS)


def _clean_copy(node: Tag) -> Tag:
    clone = BeautifulSoup(str(node), "html.parser")
    root = clone.body if node.name == "body" else clone.find(node.name)
    if root is None:
        root = clone
    # The root itself is kept even when its own id or class looks like boilerplate
    for tag in root.find_all(NON_CONTENT_TAGS):
        if not tag.decomposed:
            tag.decompose()
    for tag in root.find_all(True):
        if not tag.decomposed and _is_boilerplate(tag):
            tag.decompose()
    return root


def _node_text(node: Tag) -> str:
    for tag in node.find_all(BLOCK_TAGS):
        tag.insert_before("\n")
        tag.insert_after("\n")
    text = node.get_text()
    lines = [re.sub(r"[ \t\r\f\v]+", " ", line).strip() for line in text.split("\n")]
    return "\n".join(lines)


def readable_text(content: str) -> str:
    """
    Best-effort readable text from an HTML or Markdown article body.

    Every candidate container is cleaned and the one yielding the longest
    post-processed text wins.
    """
    raw = content or ""
    if not looks_like_html(raw):
        return post_process(raw)

    soup = BeautifulSoup(raw, "html.parser")
    candidates: List[Tag] = []
    for selector in CANDIDATE_SELECTORS:
        candidates.extend(soup.select(selector))
    candidates.append(soup.body if soup.body is not None else soup)

    best = ""
    for node in candidates:
        text = post_process(_node_text(_clean_copy(node)))
        if len(text) > len(best):
            best = text
    return best
