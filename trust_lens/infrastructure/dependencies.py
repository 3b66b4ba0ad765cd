"""Dependency injection configuration for hexagonal architecture."""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from fastapi import Depends

# Load .env from the current directory or its parents before settings are read
load_dotenv()

from ..domain.ports.classifier_provider import ClassifierProvider
from ..domain.services.classification_client import ClassificationClient
from ..domain.services.contact_book import ContactBook
from ..domain.services.detector_registry import DetectorRegistry, default_registry
from ..domain.services.history_store import HistoryStore
from ..domain.services.session_controller import SessionController
from ..domain.services.sink_outbox import SinkOutbox
from ..domain.services.threat_feed import ThreatFeed
from .ai.factory import ClassifierProviderFactory
from .media.http_media_fetcher import HttpMediaFetcher
from .settings import Settings, get_settings
from .sink.logging_sink import LoggingMetadataSink
from .storage.json_file_store import JsonFileStore

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Service container for dependency injection."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[ClassifierProvider] = None,
    ):
        """Initialize service container.

        Args:
            settings: Runtime configuration, read from the environment if omitted
            provider: Classifier backend to use instead of the configured one
        """
        self._settings = settings or get_settings()
        self._provider_factory = ClassifierProviderFactory()
        self._services: Dict[str, Any] = {}
        self._setup_services(provider)

    def _create_provider(self) -> Optional[ClassifierProvider]:
        try:
            return self._provider_factory.create_provider(self._settings.provider, self._settings)
        except ValueError as e:
            logger.warning(f"⚠️ {e} - analyses will fail until a valid TRUSTLENS_PROVIDER is set")
            return None

    def _setup_services(self, provider: Optional[ClassifierProvider]) -> None:
        """Setup all services and their dependencies."""
        logger.info("🔧 Setting up service container...")
        settings = self._settings

        # Infrastructure adapters
        store = JsonFileStore(settings.resolved_data_dir)
        fetcher = HttpMediaFetcher(timeout=settings.fetch_timeout)
        sink = LoggingMetadataSink()
        if provider is None:
            provider = self._create_provider()

        # Domain services
        registry: DetectorRegistry = default_registry
        history_store = HistoryStore(store)
        contact_book = ContactBook(store)
        outbox = SinkOutbox(sink)
        classifier = ClassificationClient(provider, registry)
        session_controller = SessionController(
            classifier=classifier,
            history=history_store,
            outbox=outbox,
            fetcher=fetcher,
            registry=registry,
        )

        self._services = {
            'settings': settings,
            'store': store,
            'media_fetcher': fetcher,
            'metadata_sink': sink,
            'classifier_provider': provider,
            'detector_registry': registry,
            'history_store': history_store,
            'contact_book': contact_book,
            'sink_outbox': outbox,
            'classification_client': classifier,
            'session_controller': session_controller,
            'threat_feed': ThreatFeed(),
        }

        logger.info(f"✅ Service container setup completed (data dir: {store.directory})")

    def get(self, service_name: str) -> Any:
        """Get a service by name.

        Args:
            service_name: Name of the service

        Returns:
            Service instance

        Raises:
            KeyError: If service not found
        """
        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found")
        return self._services[service_name]

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def provider_factory(self) -> ClassifierProviderFactory:
        return self._provider_factory

    @property
    def provider(self) -> Optional[ClassifierProvider]:
        return self.get('classifier_provider')

    @property
    def outbox(self) -> SinkOutbox:
        return self.get('sink_outbox')

    def get_detector_registry(self) -> DetectorRegistry:
        return self.get('detector_registry')

    def get_session_controller(self) -> SessionController:
        return self.get('session_controller')

    def get_history_store(self) -> HistoryStore:
        return self.get('history_store')

    def get_contact_book(self) -> ContactBook:
        return self.get('contact_book')

    def get_threat_feed(self) -> ThreatFeed:
        return self.get('threat_feed')

    async def startup(self) -> None:
        """Initialize the classifier backend and start sink delivery."""
        provider = self.provider
        if provider is not None:
            try:
                await provider.initialize()
                logger.info(f"✅ Classifier provider ready: {provider.provider_name}")
            except Exception as e:
                logger.warning(f"⚠️ Failed to initialize {provider.provider_name}: {e}")
        self.outbox.start()

    async def shutdown(self) -> None:
        """Stop background work and close clients."""
        await self.get_session_controller().shutdown()
        await self.outbox.stop()
        provider = self.provider
        if provider is not None:
            await provider.shutdown()
        await self.get('media_fetcher').shutdown()
        logger.info("👋 Service container shut down")


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance.

    Returns:
        Service container instance
    """
    return ServiceContainer()


# Convenience functions for FastAPI dependency injection
def get_detector_registry(
    container: ServiceContainer = Depends(get_service_container),
) -> DetectorRegistry:
    """FastAPI dependency for the detector registry."""
    return container.get_detector_registry()


def get_session_controller(
    container: ServiceContainer = Depends(get_service_container),
) -> SessionController:
    """FastAPI dependency for the session controller."""
    return container.get_session_controller()


def get_history_store(
    container: ServiceContainer = Depends(get_service_container),
) -> HistoryStore:
    """FastAPI dependency for the history store."""
    return container.get_history_store()


def get_contact_book(
    container: ServiceContainer = Depends(get_service_container),
) -> ContactBook:
    """FastAPI dependency for the contact book."""
    return container.get_contact_book()


def get_threat_feed(
    container: ServiceContainer = Depends(get_service_container),
) -> ThreatFeed:
    """FastAPI dependency for the live threat feed."""
    return container.get_threat_feed()
