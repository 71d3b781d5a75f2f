"""Run bookkeeping for the pipeline."""

from enum import Enum
from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field


class ArticleOutcome(str, Enum):
    """Terminal state of one original article within a run."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class RunState:
    """Mutable state owned by a single pipeline invocation."""

    def __init__(self, already_updated: Optional[Set[str]] = None) -> None:
        self.already_updated: Set[str] = set(already_updated or ())
        self.processed_titles: List[str] = []
        self.processed = 0
        self.succeeded = 0
        self.failed = 0
        self.skipped = 0
        self.eligible = 0

    def record(self, outcome: ArticleOutcome) -> None:
        """Count an article's terminal state."""
        if outcome is ArticleOutcome.SUCCEEDED:
            self.succeeded += 1
        elif outcome is ArticleOutcome.FAILED:
            self.failed += 1
        else:
            self.skipped += 1


class RunSummary(BaseModel):
    """Aggregate statistics of a pipeline run."""

    processed: int = Field(0, description="Originals iterated")
    succeeded: int = Field(0, description="Derivatives published")
    failed: int = Field(0, description="Articles that raised or were rejected")
    skipped: int = Field(0, description="Articles skipped by a gate")
    started_at: str = Field(..., description="Run start (ISO 8601)")
    finished_at: str = Field(..., description="Run end (ISO 8601)")
    duration: float = Field(0.0, description="Seconds elapsed")
    llm_usage: Dict = Field(default_factory=dict, description="Provider usage statistics")
