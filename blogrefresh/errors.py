"""Exception types shared across the pipeline."""

from typing import Any, Optional


class BlogRefreshError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(BlogRefreshError):
    """Missing credential, missing port or unsupported provider."""


class ValidationError(BlogRefreshError):
    """Required input missing or unusable."""


class TransportError(BlogRefreshError):
    """Network failure or non-success response from an external API."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NotFoundError(TransportError):
    """Record missing from the article store."""


class PublishError(BlogRefreshError):
    """The article store rejected a derivative article."""

    def __init__(self, message: str, status_code: int = 0, data: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.data = data
