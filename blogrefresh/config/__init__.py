"""Configuration management for the blog refresh pipeline."""

from .loader import DEFAULT_CONFIG_PATH, Config, load_config, save_config
from .models import (
    ConfigModel,
    ExtractorConfig,
    LLMConfig,
    PipelineConfig,
    SearchConfig,
    StoreConfig,
    is_truthy,
)

__all__ = [
    "Config",
    "ConfigModel",
    "StoreConfig",
    "SearchConfig",
    "ExtractorConfig",
    "LLMConfig",
    "PipelineConfig",
    "DEFAULT_CONFIG_PATH",
    "is_truthy",
    "load_config",
    "save_config",
]
