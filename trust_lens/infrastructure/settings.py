"""Runtime configuration loaded from the environment."""

import logging
import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"⚠️ {name}={value!r} is not a number, using {default}")
        return default


class Settings(BaseModel):
    """Configuration for the TrustLens service."""

    provider: str = Field(default="gemini", description="Classifier backend: gemini or openai")
    model: Optional[str] = Field(default=None, description="Model override for the backend")
    gemini_api_key: str = Field(default="", description="Google Generative Language API key")
    openai_api_key: str = Field(default="", description="OpenAI API key")
    data_dir: str = Field(default="~/.trustlens", description="Directory for history and contacts")
    timeout: float = Field(default=60.0, description="Classifier request timeout in seconds")
    fetch_timeout: float = Field(default=20.0, description="Remote media fetch timeout in seconds")
    log_level: str = Field(default="INFO", description="Root log level")

    @classmethod
    def from_env(cls) -> "Settings":
        """Create configuration from environment variables."""
        settings = cls(
            provider=os.getenv("TRUSTLENS_PROVIDER", "gemini").lower(),
            model=os.getenv("TRUSTLENS_MODEL") or None,
            gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", ""),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            data_dir=os.getenv("TRUSTLENS_DATA_DIR", "~/.trustlens"),
            timeout=_float_env("TRUSTLENS_TIMEOUT", 60.0),
            fetch_timeout=_float_env("TRUSTLENS_FETCH_TIMEOUT", 20.0),
            log_level=os.getenv("TRUSTLENS_LOG_LEVEL", "INFO").upper(),
        )

        if not settings.active_api_key:
            logger.warning(f"⚠️ No API key configured for provider '{settings.provider}' - analyses will fail")
        else:
            logger.info(f"✅ {settings.provider} API key loaded: {len(settings.active_api_key)} chars")
        return settings

    @property
    def active_api_key(self) -> str:
        return self.openai_api_key if self.provider == "openai" else self.gemini_api_key

    @property
    def resolved_data_dir(self) -> str:
        return os.path.expanduser(self.data_dir)


@lru_cache()
def get_settings() -> Settings:
    """Settings read once from the environment."""
    return Settings.from_env()
