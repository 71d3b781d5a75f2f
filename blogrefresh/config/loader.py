"""Configuration loader."""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..errors import ConfigurationError
from .models import ConfigModel

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "blogrefresh" / "config.yaml"

# Environment variable -> (section, field)
ENV_OVERRIDES: Dict[str, Tuple[str, str]] = {
    "PORT": ("store", "port"),
    "ARTICLE_API_URL": ("store", "base_url"),
    "SERPER_API_KEY": ("search", "api_key"),
    "LLM_PROVIDER": ("llm", "provider"),
    "LLM_MODEL": ("llm", "model"),
    "OPENAI_API_KEY": ("llm", "openai_api_key"),
    "OPENAI_MODEL": ("llm", "openai_model"),
    "OPENAI_BASE_URL": ("llm", "openai_base_url"),
    "GEMINI_API_KEY": ("llm", "gemini_api_key"),
    "GEMINI_MODEL": ("llm", "gemini_model"),
    "OPENROUTER_API_KEY": ("llm", "openrouter_api_key"),
    "OPENROUTER_MODEL": ("llm", "openrouter_model"),
    "OPENROUTER_SITE_URL": ("llm", "openrouter_site_url"),
    "OPENROUTER_APP_NAME": ("llm", "openrouter_app_name"),
    "REWRITE_FORMAT": ("pipeline", "rewrite_format"),
    "PROCESS_ONLY_ONE": ("pipeline", "process_only_one"),
}


class Config:
    """Configuration manager."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Initialize config manager."""
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.environ = os.environ if environ is None else environ
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config."""
        if self._config is None:
            self._config = load_config(self.config_path, self.environ)
        return self._config

    def require_api_base_url(self) -> str:
        """Article API base URL; a missing port is fatal."""
        base_url = self.config.store.api_base_url
        if not base_url:
            raise ConfigurationError("PORT is not set (set PORT or ARTICLE_API_URL)")
        return base_url


def apply_env_overrides(data: Dict[str, Any], environ: Mapping[str, str]) -> Dict[str, Any]:
    """Overlay non-empty environment variables on raw config data."""
    for env_name, (section, field) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None or not str(value).strip():
            continue
        data.setdefault(section, {})
        data[section][field] = str(value).strip()
    return data


def load_config(config_path: Path, environ: Optional[Mapping[str, str]] = None) -> ConfigModel:
    """Load configuration from an optional YAML file plus the environment."""
    config_data: Dict[str, Any] = {}

    if config_path.exists():
        try:
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file: {e}")

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {config_path}")

    apply_env_overrides(config_data, os.environ if environ is None else environ)

    try:
        return ConfigModel(**config_data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
