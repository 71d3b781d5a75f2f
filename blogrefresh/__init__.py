"""Blog refresh pipeline: rewrite stored articles with LLM help and publish them."""

__version__ = "0.1.0"
