"""Extraction-to-publication pipeline."""

from .models import ArticleOutcome, RunState, RunSummary
from .orchestrator import PipelineOrchestrator
from .similarity import normalize_title, word_overlap_ratio

__all__ = [
    "PipelineOrchestrator",
    "ArticleOutcome",
    "RunState",
    "RunSummary",
    "normalize_title",
    "word_overlap_ratio",
]
