"""Configuration models."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

TRUTHY_VALUES = {"1", "true", "yes", "y", "on"}

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/123 Safari/537.36"
)


def is_truthy(value: object) -> bool:
    """Interpret an environment-style flag."""
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in TRUTHY_VALUES


class StoreConfig(BaseModel):
    """Article store API configuration."""

    port: Optional[int] = Field(None, description="Port of the local article API")
    base_url: Optional[str] = Field(None, description="Full base URL (overrides port)")
    timeout: float = Field(30.0, description="Request timeout in seconds", gt=0)

    @property
    def api_base_url(self) -> Optional[str]:
        """Base URL of the article API, or None when nothing is configured."""
        if self.base_url:
            return self.base_url.rstrip("/")
        if self.port:
            return f"http://localhost:{self.port}"
        return None


class SearchConfig(BaseModel):
    """Reference search provider configuration."""

    api_key: Optional[str] = Field(None, description="Serper API key")
    endpoint: str = Field("https://google.serper.dev/search", description="Search endpoint")
    num_results: int = Field(10, description="Results requested per query", ge=1, le=100)
    max_results: int = Field(2, description="Qualifying results kept per query", ge=1)
    blocked_domains: List[str] = Field(
        default_factory=lambda: [
            "sciencedirect.com",
            "springer.com",
            "ieee.org",
            "nature.com",
            "researchgate.net",
            "beyondchats.com",
            "linkedin.com",
            "youtube.com",
            "youtu.be",
        ],
        description="Hosts (and their subdomains) never used as references",
    )
    timeout: float = Field(30.0, gt=0)


class ExtractorConfig(BaseModel):
    """Main-content extraction policy."""

    content_selectors: List[str] = Field(
        default_factory=lambda: [
            "main",
            "article",
            '[role="main"]',
            "#content",
            ".post-content",
            ".entry-content",
            ".article-content",
            ".content",
        ],
        description="Container selectors tried in priority order",
    )
    boilerplate_tags: List[str] = Field(
        default_factory=lambda: ["header", "footer", "nav", "aside", "script", "style", "noscript"],
        description="Tags removed from the selected container",
    )
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User agent sent when fetching pages")
    timeout: float = Field(30.0, gt=0)


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = Field("openrouter", description="LLM provider (openai, gemini, openrouter)")
    model: Optional[str] = Field(None, description="Model override for the selected provider")
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_base_url: Optional[str] = None
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash"
    openrouter_api_key: Optional[str] = None
    openrouter_model: str = "openai/gpt-4o-mini"
    openrouter_site_url: str = "http://localhost"
    openrouter_app_name: str = "blogrefresh"
    timeout: float = Field(120.0, gt=0)

    @field_validator("provider")
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        """Lowercase the provider name; support is checked when the provider is built."""
        return v.strip().lower()


class PipelineConfig(BaseModel):
    """Orchestrator behaviour."""

    rewrite_format: Literal["markdown", "html"] = Field("markdown", description="Rewrite output format")
    process_only_one: bool = Field(False, description="Stop after the first eligible article")
    similarity_threshold: float = Field(0.8, ge=0.0, le=1.0)
    min_references: int = Field(2, ge=1)
    query_templates: List[str] = Field(
        default_factory=lambda: [
            "{title}",
            '"{title}" blog',
            '"{title}" guide',
            '"{title}" case study',
        ]
    )
    query_pause: float = Field(0.25, description="Seconds slept after each search query", ge=0.0)
    article_pause: float = Field(0.3, description="Seconds slept between articles", ge=0.0)
    updated_title_suffix: str = " (Updated)"

    @field_validator("process_only_one", mode="before")
    @classmethod
    def parse_flag(cls, v: object) -> bool:
        """Accept environment-style truthy strings."""
        return is_truthy(v)

    @field_validator("rewrite_format", mode="before")
    @classmethod
    def normalize_format(cls, v: object) -> object:
        """Lowercase the format name."""
        return v.strip().lower() if isinstance(v, str) else v


class ConfigModel(BaseModel):
    """Main configuration model."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
