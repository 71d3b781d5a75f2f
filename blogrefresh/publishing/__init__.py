"""Publishing of rewritten articles."""

from .publisher import PublishResult, Publisher, slugify

__all__ = ["Publisher", "PublishResult", "slugify"]
