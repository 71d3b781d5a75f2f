"""Data models for generation."""

from typing import Dict, List

from pydantic import BaseModel, Field


class SourceDocument(BaseModel):
    """Article text handed to the rewrite engine."""

    title: str = Field("", description="Document title")
    content: str = Field("", description="Document body")
    url: str = Field("", description="Where the document came from (references only)")


class Prompt(BaseModel):
    """Instruction block plus the user message for one rewrite."""

    system: str = Field(..., description="Editorial instructions")
    user: str = Field(..., description="Original, references and format requirements")

    def as_messages(self) -> List[Dict[str, str]]:
        """Chat-style message list."""
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]

    def as_text(self) -> str:
        """Single text block for providers without a system role."""
        return f"{self.system}\n\n{self.user}"
