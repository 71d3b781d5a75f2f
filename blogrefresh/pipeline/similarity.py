"""Title similarity for duplicate-topic detection."""

import re
from typing import Set


def normalize_title(title: str) -> str:
    """Lowercase, replace non-alphanumerics with spaces, collapse whitespace."""
    text = re.sub(r"[^a-z0-9\s]", " ", str(title or "").lower())
    return re.sub(r"\s+", " ", text).strip()


def title_word_set(title: str) -> Set[str]:
    normalized = normalize_title(title)
    return set(normalized.split(" ")) if normalized else set()


def word_overlap_ratio(a: str, b: str) -> float:
    """
    Shared words divided by the size of the smaller word set.

    Returns 0.0 when either title has no words.
    """
    a_words = title_word_set(a)
    b_words = title_word_set(b)
    if not a_words or not b_words:
        return 0.0
    return len(a_words & b_words) / min(len(a_words), len(b_words))
