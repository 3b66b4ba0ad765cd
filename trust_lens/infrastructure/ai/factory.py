"""Factory for creating and managing classifier providers."""

import logging
from typing import Callable, Dict, Optional

from ...domain.ports.classifier_provider import ClassifierProvider
from ..settings import Settings
from .gemini_adapter import GeminiAdapter, GeminiConfig
from .openai_adapter import OpenAIAdapter, OpenAIConfig

logger = logging.getLogger(__name__)

ProviderBuilder = Callable[[Settings], ClassifierProvider]


def _build_gemini(settings: Settings) -> ClassifierProvider:
    config = GeminiConfig(api_key=settings.gemini_api_key, timeout=settings.timeout)
    if settings.model:
        config = config.model_copy(update={"model": settings.model})
    return GeminiAdapter(config=config)


def _build_openai(settings: Settings) -> ClassifierProvider:
    config = OpenAIConfig(api_key=settings.openai_api_key, timeout=settings.timeout)
    if settings.model:
        config = config.model_copy(update={"model": settings.model})
    return OpenAIAdapter(config=config)


class ClassifierProviderFactory:
    """Factory for creating and managing classifier providers."""

    def __init__(self):
        """Initialize the factory."""
        self._builders: Dict[str, ProviderBuilder] = {}
        self._instances: Dict[str, ClassifierProvider] = {}

        # Register default providers
        self.register_provider("gemini", _build_gemini)
        self.register_provider("openai", _build_openai)

    def register_provider(self, name: str, builder: ProviderBuilder) -> None:
        """Register a new provider.

        Args:
            name: Provider name
            builder: Callable building the provider from settings
        """
        self._builders[name] = builder

    def create_provider(self, name: str, settings: Settings) -> ClassifierProvider:
        """Build a provider instance, reusing an existing one.

        Args:
            name: Provider name
            settings: Runtime configuration

        Returns:
            Provider instance, not yet initialized

        Raises:
            ValueError: If provider not found
        """
        if name not in self._builders:
            raise ValueError(f"Provider '{name}' not found")

        if name not in self._instances:
            logger.info(f"🤖 Creating classifier provider '{name}'")
            self._instances[name] = self._builders[name](settings)
        return self._instances[name]

    def get_provider(self, name: str) -> Optional[ClassifierProvider]:
        return self._instances.get(name)

    @property
    def available_providers(self) -> Dict[str, bool]:
        """Registered providers and whether an instance is ready."""
        return {
            name: name in self._instances and self._instances[name].is_available
            for name in self._builders
        }

    async def shutdown(self) -> None:
        """Shutdown all provider instances."""
        for provider in self._instances.values():
            await provider.shutdown()
        self._instances.clear()
