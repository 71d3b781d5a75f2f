"""LLM-backed article rewriting."""

from .llm_provider import (
    SUPPORTED_PROVIDERS,
    GeminiProvider,
    LLMProvider,
    OpenAIProvider,
    OpenRouterProvider,
    create_provider,
)
from .models import Prompt, SourceDocument
from .rewriter import RewriteEngine, build_prompt, build_references_appendix

__all__ = [
    "LLMProvider",
    "OpenAIProvider",
    "GeminiProvider",
    "OpenRouterProvider",
    "SUPPORTED_PROVIDERS",
    "create_provider",
    "Prompt",
    "SourceDocument",
    "RewriteEngine",
    "build_prompt",
    "build_references_appendix",
]
