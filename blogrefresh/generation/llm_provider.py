"""LLM provider interface and implementations."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
import openai
from openai import OpenAI

from ..config import LLMConfig
from ..errors import ConfigurationError, TransportError
from .models import Prompt

SUPPORTED_PROVIDERS = ("openai", "gemini", "openrouter")

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
OPENROUTER_ENDPOINT = "https://openrouter.ai/api/v1/chat/completions"


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    name = "base"

    def __init__(self, model: str) -> None:
        self.model = model
        self.total_tokens = 0
        self.api_calls = 0

    @abstractmethod
    def generate_text(self, prompt: Prompt) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: System instructions and user message

        Returns:
            Generated text, stripped

        Raises:
            TransportError: Network failure or non-success response
        """

    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        return {
            "provider": self.name,
            "model": self.model,
            "api_calls": self.api_calls,
            "total_tokens": self.total_tokens,
        }


class OpenAIProvider(LLMProvider):
    """OpenAI implementation of LLM provider."""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        timeout: float = 120.0,
    ) -> None:
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Model name to use
            base_url: Custom base URL (for testing)
            timeout: Request timeout in seconds
        """
        super().__init__(model)
        self.client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout)

    def generate_text(self, prompt: Prompt) -> str:
        """Generate text using OpenAI chat completions."""
        self.api_calls += 1
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=prompt.as_messages(),
            )
        except openai.APIStatusError as e:
            body = e.response.text if e.response is not None else None
            if e.status_code == 429 and getattr(e, "code", None) == "insufficient_quota":
                raise TransportError(
                    "OpenAI quota exceeded (insufficient_quota). Add billing/credits in the OpenAI "
                    "dashboard or set LLM_PROVIDER=gemini with GEMINI_API_KEY.",
                    e.status_code,
                    body,
                ) from e
            raise TransportError(f"OpenAI API error: {e.status_code} - {body or e}", e.status_code, body) from e
        except openai.APIError as e:
            raise TransportError(f"OpenAI API error: {e}") from e

        if response.usage:
            self.total_tokens += response.usage.total_tokens

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()


class _HTTPProvider(LLMProvider):
    """Provider reached with a plain JSON POST."""

    label = "LLM"

    def __init__(self, model: str, timeout: float = 120.0, client: Optional[httpx.Client] = None) -> None:
        super().__init__(model)
        self.client = client or httpx.Client(timeout=timeout)

    def _post_json(self, url: str, payload: Dict[str, Any], headers: Dict[str, str]) -> Dict[str, Any]:
        self.api_calls += 1
        headers = {"Content-Type": "application/json", "Accept": "application/json", **headers}
        try:
            response = self.client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise TransportError(f"{self.label} API error: {e}") from e

        if not response.is_success:
            raise TransportError(
                f"{self.label} API error: {response.status_code} {response.reason_phrase}"
                + (f" - {response.text}" if response.text else ""),
                response.status_code,
                response.text,
            )

        data = response.json()
        return data if isinstance(data, dict) else {}


class GeminiProvider(_HTTPProvider):
    """Google Gemini generateContent implementation."""

    name = "gemini"
    label = "Gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash",
        timeout: float = 120.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        super().__init__(model, timeout, client)
        self.api_key = api_key

    def generate_text(self, prompt: Prompt) -> str:
        """Generate text with a single user turn; Gemini gets the instructions inline."""
        url = str(
            httpx.URL(
                GEMINI_ENDPOINT.format(model=quote(self.model, safe="")),
                params={"key": self.api_key},
            )
        )
        data = self._post_json(
            url,
            {"contents": [{"role": "user", "parts": [{"text": prompt.as_text()}]}]},
            {},
        )

        usage = data.get("usageMetadata") or {}
        self.total_tokens += int(usage.get("totalTokenCount") or 0)

        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(str(p.get("text") or "") for p in parts if isinstance(p, dict)).strip()


class OpenRouterProvider(_HTTPProvider):
    """OpenRouter chat completions implementation."""

    name = "openrouter"
    label = "OpenRouter"

    def __init__(
        self,
        api_key: str,
        model: str = "openai/gpt-4o-mini",
        site_url: str = "http://localhost",
        app_name: str = "blogrefresh",
        timeout: float = 120.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        super().__init__(model, timeout, client)
        self.api_key = api_key
        self.site_url = site_url
        self.app_name = app_name

    def generate_text(self, prompt: Prompt) -> str:
        """Generate text using OpenRouter."""
        data = self._post_json(
            OPENROUTER_ENDPOINT,
            {"model": self.model, "messages": prompt.as_messages()},
            {
                "Authorization": f"Bearer {self.api_key}",
                "HTTP-Referer": self.site_url,
                "X-Title": self.app_name,
            },
        )

        usage = data.get("usage") or {}
        self.total_tokens += int(usage.get("total_tokens") or 0)

        choices = data.get("choices") or []
        if not choices:
            return ""
        content = (choices[0].get("message") or {}).get("content")
        return content.strip() if isinstance(content, str) else ""


def create_provider(config: LLMConfig, client: Optional[httpx.Client] = None) -> LLMProvider:
    """
    Build the provider selected by configuration.

    Raises:
        ConfigurationError: Unsupported provider or missing API key
    """
    provider = config.provider
    if provider not in SUPPORTED_PROVIDERS:
        raise ConfigurationError(
            f"Unsupported provider: {provider} (expected one of {', '.join(SUPPORTED_PROVIDERS)})"
        )

    if provider == "openai":
        if not config.openai_api_key:
            raise ConfigurationError(
                "OPENAI_API_KEY is not set (or set LLM_PROVIDER=gemini with GEMINI_API_KEY)"
            )
        return OpenAIProvider(
            api_key=config.openai_api_key,
            model=config.model or config.openai_model,
            base_url=config.openai_base_url,
            timeout=config.timeout,
        )

    if provider == "openrouter":
        if not config.openrouter_api_key:
            raise ConfigurationError(
                "OPENROUTER_API_KEY is not set (get a key at openrouter.ai or choose LLM_PROVIDER=openai|gemini)"
            )
        return OpenRouterProvider(
            api_key=config.openrouter_api_key,
            model=config.model or config.openrouter_model,
            site_url=config.openrouter_site_url,
            app_name=config.openrouter_app_name,
            timeout=config.timeout,
            client=client,
        )

    if not config.gemini_api_key:
        raise ConfigurationError(
            "GEMINI_API_KEY is not set (create one in Google AI Studio or choose LLM_PROVIDER=openai|openrouter)"
        )
    return GeminiProvider(
        api_key=config.gemini_api_key,
        model=config.model or config.gemini_model,
        timeout=config.timeout,
        client=client,
    )
